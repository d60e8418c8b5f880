"""
Structured JSON Logger.

Provides structured logging for request building:
- JSON output on stdout once configure_logging is called
- Cloud Logging compatible severity levels
- Contextual fields through StructuredLogger.with_fields
- Redaction of sensitive fields (card data, secrets, e-mail)
"""

import json
import logging
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from typing import Any, Callable, Dict, Optional, TextIO, TypeVar

from ogone_subscriptions.config import settings


F = TypeVar("F", bound=Callable[..., Any])

LIBRARY_LOGGER = "ogone_subscriptions"

# Silent unless the host application configures logging
logging.getLogger(LIBRARY_LOGGER).addHandler(logging.NullHandler())


class JsonFormatter(logging.Formatter):
    """JSON formatter with one object per line."""

    SEVERITY_MAP = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARNING",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
    }

    SENSITIVE_PATTERNS = frozenset([
        "password", "secret", "token", "api_key", "apikey",
        "authorization", "credential", "private",
        "shasign", "passphrase", "cardno", "cvc", "email",
    ])

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "severity": self.SEVERITY_MAP.get(record.levelno, "INFO"),
            "message": record.getMessage(),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "logger": record.name,
        }

        self._add_extra_fields(record, log_entry)
        self._add_exception_info(record, log_entry)
        self._add_source_location(record, log_entry)

        return json.dumps(log_entry, ensure_ascii=False, default=str)

    def _add_extra_fields(self, record: logging.LogRecord, log_entry: Dict[str, Any]) -> None:
        """Add extra fields passed to the log."""
        if hasattr(record, "extra_fields") and record.extra_fields:
            for key, value in record.extra_fields.items():
                if not self._is_sensitive(key):
                    log_entry[key] = self._sanitize_value(value)

    def _add_exception_info(self, record: logging.LogRecord, log_entry: Dict[str, Any]) -> None:
        """Add exception info if present."""
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

    def _add_source_location(self, record: logging.LogRecord, log_entry: Dict[str, Any]) -> None:
        """Add source location for warnings and above."""
        if record.levelno >= logging.WARNING:
            log_entry["source"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

    def _is_sensitive(self, key: str) -> bool:
        """Check if a key corresponds to sensitive data."""
        key_lower = key.lower()
        return any(pattern in key_lower for pattern in self.SENSITIVE_PATTERNS)

    def _sanitize_value(self, value: Any) -> Any:
        """Truncate long string values."""
        if isinstance(value, str) and len(value) > 1000:
            return value[:1000] + "... [truncated]"
        return value


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter for adding structured fields to logs."""

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        extra = kwargs.get("extra", {})
        extra_fields = extra.pop("extra_fields", {})

        if self.extra:
            extra_fields = {**self.extra, **extra_fields}

        kwargs["extra"] = {**extra, "extra_fields": extra_fields}
        return msg, kwargs

    def with_fields(self, **fields: Any) -> "StructuredLogger":
        """Create a new logger with additional fields."""
        new_extra = {**self.extra, **fields}
        return StructuredLogger(self.logger, new_extra)


def get_logger(name: str = LIBRARY_LOGGER) -> StructuredLogger:
    """
    Get a structured logger.

    Records propagate to the "ogone_subscriptions" logger; no handler
    is attached here.

    Args:
        name: Logger name, usually the module __name__.

    Returns:
        StructuredLogger instance.
    """
    return StructuredLogger(logging.getLogger(name), {})


def configure_logging(
    level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a JSON handler to the library logger.

    Calling it again replaces the level but adds no second handler.

    Args:
        level: Log level, defaults to the LOG_LEVEL setting.
        stream: Output stream, defaults to stdout.

    Returns:
        The configured library logger.
    """
    base_logger = logging.getLogger(LIBRARY_LOGGER)
    base_logger.setLevel(settings.resolved_log_level if level is None else level)

    if not any(isinstance(h.formatter, JsonFormatter) for h in base_logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(JsonFormatter())
        base_logger.addHandler(handler)

    return base_logger


def log_duration(operation: str) -> Callable[[F], F]:
    """
    Decorator to measure and log operation duration.

    Args:
        operation: Operation name for logging.
    """
    def decorator(func: F) -> F:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            logger = get_logger(func.__module__)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
                duration_ms = int((time.perf_counter() - start) * 1000)
                logger.info(
                    f"{operation} completed",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": duration_ms,
                        "status": "success",
                    }}
                )
                return result
            except Exception as e:
                duration_ms = int((time.perf_counter() - start) * 1000)
                logger.warning(
                    f"{operation} failed: {e}",
                    extra={"extra_fields": {
                        "operation": operation,
                        "duration_ms": duration_ms,
                        "status": "error",
                        "error_type": type(e).__name__,
                    }}
                )
                raise
        return wrapper  # type: ignore
    return decorator
