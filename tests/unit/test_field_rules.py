"""
Tests for Field Rules.

Tests the pure validation helpers shared by the setters.
"""

from datetime import date, datetime

import pytest

from ogone_subscriptions.core.exceptions import InvalidArgumentError
from ogone_subscriptions.core.field_rules import (
    ALPHANUMERIC,
    ALPHANUMERIC_WITH_SPACE,
    MAX_AMOUNT,
    check_amount,
    check_charset,
    check_choice,
    check_text,
    format_date,
    require_integer,
)


class TestCheckCharset:
    """Tests for check_charset."""

    def test_dash_and_underscore_are_literal(self):
        """The trailing dash is a literal, not a range."""
        assert check_charset("F", "a-b_c", ALPHANUMERIC, "Field") == "a-b_c"

    def test_space_only_in_spaced_charset(self):
        """Spaces are allowed only by the spaced charset."""
        check_charset("F", "a b", ALPHANUMERIC_WITH_SPACE, "Field")

        with pytest.raises(InvalidArgumentError) as exc_info:
            check_charset("F", "a b", ALPHANUMERIC, "Field")

        assert exc_info.value.rule == "charset"
        assert exc_info.value.field == "F"

    @pytest.mark.parametrize("char", [".", ",", "/", "\\", "\t", "ü", "+", "&"])
    def test_rejects_characters_outside_class(self, char):
        """Any character outside the class is rejected."""
        with pytest.raises(InvalidArgumentError):
            check_charset("F", f"abc{char}", ALPHANUMERIC_WITH_SPACE, "Field")


class TestCheckText:
    """Tests for check_text."""

    def test_length_checked_before_charset(self):
        """Too-long values report the length rule."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            check_text("F", "!" * 11, 10, "Field", charset=ALPHANUMERIC)
        assert exc_info.value.rule == "max_length"

    def test_no_charset_accepts_anything(self):
        """Without a charset only type and length are checked."""
        assert check_text("F", "a.b c!", 10, "Field") == "a.b c!"

    def test_rejects_bytes(self):
        """Bytes are not strings."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            check_text("F", b"abc", 10, "Field")
        assert exc_info.value.rule == "type"


class TestNumericRules:
    """Tests for integer and amount rules."""

    def test_bool_is_not_an_integer(self):
        """True and False are rejected although bool subclasses int."""
        with pytest.raises(InvalidArgumentError):
            require_integer("F", True, "Integer expected")

    def test_amount_boundaries(self):
        """Amounts stop just below 1e15."""
        assert check_amount("F", MAX_AMOUNT - 1) == MAX_AMOUNT - 1
        with pytest.raises(InvalidArgumentError, match="too high"):
            check_amount("F", MAX_AMOUNT)

    def test_zero_amount_needs_allow_zero(self):
        """Zero passes only when allowed."""
        assert check_amount("F", 0, allow_zero=True) == 0
        with pytest.raises(InvalidArgumentError, match="positive number"):
            check_amount("F", 0)

    def test_choice(self):
        """Values outside the choices are rejected."""
        assert check_choice("F", "a", {"a", "b"}, "bad") == "a"
        with pytest.raises(InvalidArgumentError, match="bad"):
            check_choice("F", "c", {"a", "b"}, "bad")

    def test_choice_unhashable(self):
        """Unhashable values fail the type rule."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            check_choice("F", ["a"], {"a", "b"}, "bad")
        assert exc_info.value.rule == "type"


class TestFormatDate:
    """Tests for format_date."""

    def test_formats_date_and_datetime(self):
        """Both dates and datetimes give YYYY-MM-DD."""
        assert format_date("F", date(2024, 2, 29), "Date") == "2024-02-29"
        assert format_date("F", datetime(2024, 2, 29, 23, 59), "Date") == "2024-02-29"

    def test_rejects_strings(self):
        """Pre-formatted strings are not accepted."""
        with pytest.raises(InvalidArgumentError, match="must be a date"):
            format_date("F", "2024-02-29", "Date")
