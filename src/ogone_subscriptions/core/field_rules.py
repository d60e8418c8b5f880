"""
Field validation rules.

Pure checks shared by every request setter. Each rule either returns
the (possibly normalized) value or raises InvalidArgumentError.
No external dependencies.
"""

import re
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Collection, Optional, Pattern, Union

from ogone_subscriptions.core.exceptions import InvalidArgumentError


# Gateway amounts are limited to 15 digits
MAX_AMOUNT = 10 ** 15

ALPHANUMERIC = "a-zA-Z0-9_-"
ALPHANUMERIC_WITH_SPACE = "a-zA-Z0-9_\\- "


@lru_cache(maxsize=16)
def _forbidden_characters(charset: str) -> Pattern[str]:
    """Compile the negated character class for a charset."""
    return re.compile(f"[^{charset}]")


def require_string(field: str, value: Any, label: str) -> str:
    """
    Ensure a value is a string.

    Args:
        field: Gateway parameter name, reported on failure.
        value: Value to check.
        label: Human-readable name used in the error message.

    Returns:
        The value unchanged.
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(
            field, f"{label} must be a string", rule="type"
        )
    return value


def check_max_length(field: str, value: str, max_length: int, label: str) -> str:
    """Reject strings longer than max_length characters."""
    if len(value) > max_length:
        raise InvalidArgumentError(
            field,
            f"{label} cannot be longer than {max_length} characters",
            rule="max_length",
        )
    return value


def check_charset(field: str, value: str, charset: str, label: str) -> str:
    """
    Reject strings containing characters outside a character class.

    Args:
        field: Gateway parameter name.
        value: String to check.
        charset: Body of a regex character class, e.g. "a-zA-Z0-9_-".
        label: Human-readable name used in the error message.

    Returns:
        The value unchanged.
    """
    if _forbidden_characters(charset).search(value):
        raise InvalidArgumentError(
            field,
            f"{label} cannot contain special characters",
            rule="charset",
        )
    return value


def check_text(
    field: str,
    value: Any,
    max_length: int,
    label: str,
    charset: Optional[str] = None,
) -> str:
    """Type, length and optional charset check for a text parameter."""
    value = require_string(field, value, label)
    check_max_length(field, value, max_length, label)
    if charset is not None:
        check_charset(field, value, charset, label)
    return value


def require_integer(field: str, value: Any, message: str) -> int:
    """
    Ensure a value is an integer.

    Booleans are rejected even though bool subclasses int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(field, message, rule="type")
    return value


def check_amount(field: str, value: Any, allow_zero: bool = False) -> int:
    """
    Validate an amount expressed in cents.

    Args:
        field: Gateway parameter name.
        value: Amount in cents, e.g. EUR 12.34 is 1234.
        allow_zero: Accept 0 (subscriptions may be free).

    Returns:
        The amount.
    """
    require_integer(field, value, "Integer expected. Amount is always in cents")

    if allow_zero and value < 0:
        raise InvalidArgumentError(
            field, "Amount must be a positive number or 0", rule="range"
        )
    if not allow_zero and value <= 0:
        raise InvalidArgumentError(
            field, "Amount must be a positive number", rule="range"
        )
    if value >= MAX_AMOUNT:
        raise InvalidArgumentError(field, "Amount is too high", rule="range")

    return value


def check_choice(field: str, value: Any, choices: Collection[Any], message: str) -> Any:
    """Reject values outside an enumerated set."""
    try:
        allowed = not isinstance(value, bool) and value in choices
    except TypeError:
        # Unhashable values cannot be members of a set of choices
        raise InvalidArgumentError(field, message, rule="type") from None
    if not allowed:
        raise InvalidArgumentError(field, message, rule="choice")
    return value


def format_date(field: str, value: Union[date, datetime], label: str) -> str:
    """
    Format a calendar date as YYYY-MM-DD.

    Aware datetimes are formatted in their own timezone, never converted.
    """
    if not isinstance(value, date):
        raise InvalidArgumentError(
            field, f"{label} must be a date", rule="type"
        )
    return date(value.year, value.month, value.day).isoformat()
