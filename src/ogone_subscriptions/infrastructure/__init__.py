"""
Infrastructure Layer.

Cross-cutting concerns shared by the request builders:
- Structured logging
"""

from ogone_subscriptions.infrastructure.logging import (
    configure_logging,
    get_logger,
    JsonFormatter,
    LIBRARY_LOGGER,
    log_duration,
    StructuredLogger,
)


__all__ = [
    "configure_logging",
    "get_logger",
    "JsonFormatter",
    "LIBRARY_LOGGER",
    "log_duration",
    "StructuredLogger",
]
