"""
Custom exceptions for the Ogone request builder.

Provides a hierarchy separating invalid input (rejected by a setter)
from incomplete requests (rejected at validation time).
"""

from typing import Any, Optional


class OgoneError(Exception):
    """Base exception for all Ogone request errors."""
    
    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


# =============================================================================
# Request Errors
# =============================================================================

class RequestError(OgoneError):
    """Base exception for errors in building a payment request."""
    pass


class InvalidArgumentError(RequestError, ValueError):
    """Raised when a setter receives a value that breaks a field rule."""
    
    def __init__(self, field: str, message: str, rule: Optional[str] = None):
        super().__init__(
            message,
            {"field": field, "rule": rule},
        )
        self.field = field
        self.rule = rule


class IncompleteRequestError(RequestError):
    """Raised when a request is validated with a required field missing."""
    
    def __init__(self, field: str, message: Optional[str] = None):
        super().__init__(
            message or f"{field} can not be empty",
            {"field": field},
        )
        self.field = field


class ScheduleError(InvalidArgumentError):
    """Raised when subscription dates do not form a valid schedule."""
    
    def __init__(self, start: Any, end: Any):
        super().__init__(
            "SUB_ENDDATE",
            f"Subscription end date {end} is before start date {start}",
            rule="schedule",
        )
        self.start = start
        self.end = end


# =============================================================================
# Configuration Errors
# =============================================================================

class ConfigurationError(OgoneError):
    """Raised when a configuration value is missing or invalid."""
    
    def __init__(self, config_name: str, message: Optional[str] = None):
        msg = message or f"Configuration missing: {config_name}"
        super().__init__(msg, {"config_name": config_name})
        self.config_name = config_name
