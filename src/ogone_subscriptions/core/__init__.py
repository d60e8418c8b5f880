"""Core package - Pure validation logic with no external dependencies."""

from ogone_subscriptions.core.exceptions import (
    ConfigurationError,
    IncompleteRequestError,
    InvalidArgumentError,
    OgoneError,
    RequestError,
    ScheduleError,
)
from ogone_subscriptions.core.field_rules import (
    ALPHANUMERIC,
    ALPHANUMERIC_WITH_SPACE,
    MAX_AMOUNT,
    check_amount,
    check_charset,
    check_choice,
    check_max_length,
    check_text,
    format_date,
    require_integer,
    require_string,
)

__all__ = [
    # Exceptions
    "ConfigurationError",
    "IncompleteRequestError",
    "InvalidArgumentError",
    "OgoneError",
    "RequestError",
    "ScheduleError",
    # Field rules
    "ALPHANUMERIC",
    "ALPHANUMERIC_WITH_SPACE",
    "MAX_AMOUNT",
    "check_amount",
    "check_charset",
    "check_choice",
    "check_max_length",
    "check_text",
    "format_date",
    "require_integer",
    "require_string",
]
