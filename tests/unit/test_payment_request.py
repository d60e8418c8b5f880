"""
Tests for Base Payment Request.

Tests the generic payment parameters and base validation.
"""

from unittest.mock import patch

import pytest

from ogone_subscriptions.config import GatewayEnvironment, OgoneSettings
from ogone_subscriptions.core.exceptions import IncompleteRequestError, InvalidArgumentError
from ogone_subscriptions.payment import PaymentRequest


class TestOgoneUri:
    """Tests for gateway URI selection."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (GatewayEnvironment.TEST, GatewayEnvironment.TEST.uri),
            ("prod", GatewayEnvironment.PRODUCTION.uri),
            (
                "https://secure.ogone.com/ncol/test/orderstandard_utf8.asp",
                "https://secure.ogone.com/ncol/test/orderstandard_utf8.asp",
            ),
        ],
    )
    def test_accepts_known_gateways(self, value, expected):
        """Environments, their names and their URIs are accepted."""
        assert PaymentRequest(ogone_uri=value).ogone_uri == expected

    @pytest.mark.parametrize("value", [["test"], 1, None])
    def test_rejects_non_string_uri(self, value):
        """Non-string gateway values are rejected as invalid arguments."""
        with pytest.raises(InvalidArgumentError) as exc_info:
            PaymentRequest().set_ogone_uri(value)

        assert exc_info.value.rule == "type"

    def test_rejects_unknown_uri(self):
        """Arbitrary URIs are rejected."""
        with pytest.raises(InvalidArgumentError, match="Ogone URI"):
            PaymentRequest().set_ogone_uri("https://example.com/pay")

    def test_uri_is_not_a_parameter(self):
        """The URI is kept out of the parameter map."""
        request = PaymentRequest(ogone_uri="test")
        assert request.to_dict() == {}


class TestBaseSetters:
    """Tests for the base parameter setters."""

    def test_order_id_rules(self):
        """Order ids are limited to 30 characters from [a-zA-Z0-9_-]."""
        request = PaymentRequest()
        request.set_order_id("o" * 30)

        with pytest.raises(InvalidArgumentError, match="longer than 30"):
            request.set_order_id("o" * 31)
        with pytest.raises(InvalidArgumentError, match="special characters"):
            request.set_order_id("order#1")

        assert request.get("ORDERID") == "o" * 30

    @pytest.mark.parametrize("amount", [0, -1, 10 ** 15, "10"])
    def test_amount_rules(self, amount):
        """Base amounts must be positive integers below 1e15."""
        with pytest.raises(InvalidArgumentError):
            PaymentRequest().set_amount(amount)

    def test_currency_must_be_supported(self):
        """Unknown currency codes are rejected."""
        request = PaymentRequest()
        request.set_currency("GBP")

        with pytest.raises(InvalidArgumentError, match="currency"):
            request.set_currency("XYZ")
        with pytest.raises(InvalidArgumentError):
            request.set_currency("eur")

        assert request.get("currency") == "GBP"

    @pytest.mark.parametrize("currency", [["EUR"], {"EUR": 1}, None, True])
    def test_currency_wrong_type(self, currency):
        """Unhashable and non-string currencies are rejected."""
        request = PaymentRequest()

        with pytest.raises(InvalidArgumentError):
            request.set_currency(currency)

        assert "currency" not in request

    @pytest.mark.parametrize("language", ["en", "EN_us", "en-US", "en_US\n"])
    def test_language_format(self, language):
        """Languages are xx_XX locales."""
        with pytest.raises(InvalidArgumentError):
            PaymentRequest().set_language(language)

    def test_email_format(self):
        """E-mail addresses need a local part and a domain."""
        request = PaymentRequest()
        request.set_email("john.doe@example.com")

        with pytest.raises(InvalidArgumentError, match="Email"):
            request.set_email("john.doe")
        with pytest.raises(InvalidArgumentError, match="Email"):
            request.set_email("john@example.com\n")

        assert request.get("EMAIL") == "john.doe@example.com"

    def test_customer_name_length(self):
        """Customer names are limited to 35 characters."""
        request = PaymentRequest()
        request.set_customer_name("Jean-Pierre O'Neil")

        with pytest.raises(InvalidArgumentError):
            request.set_customer_name("x" * 36)

        assert request.get("CN") == "Jean-Pierre O'Neil"

    def test_setting_twice_replaces_value(self):
        """A later valid value replaces the earlier one."""
        request = PaymentRequest()
        request.set_pspid("first")
        request.set_pspid("second")
        assert request.get("PSPID") == "second"

    def test_rejection_is_logged_without_value(self):
        """Rejected values are logged with field and rule only."""
        with patch("ogone_subscriptions.payment.base.logger") as mock_logger:
            with pytest.raises(InvalidArgumentError):
                PaymentRequest().set_order_id("secret order!")

        mock_logger.warning.assert_called_once()
        message = mock_logger.warning.call_args.args[0]
        fields = mock_logger.warning.call_args.kwargs["extra"]["extra_fields"]
        assert "secret order!" not in message
        assert fields == {
            "setter": "set_order_id",
            "parameter": "ORDERID",
            "rule": "charset",
        }


class TestBaseValidate:
    """Tests for PaymentRequest.validate."""

    def test_valid_request(self, payment_request):
        """A request with URI and required fields passes."""
        payment_request.validate()

    def test_missing_uri(self):
        """A request without a gateway URI fails first."""
        with pytest.raises(IncompleteRequestError, match="Ogone URI"):
            PaymentRequest().validate()

    @pytest.mark.parametrize("missing", ["PSPID", "ORDERID", "amount", "currency"])
    def test_missing_required_field(self, payment_request, missing):
        """Each base required field is checked."""
        request = PaymentRequest(ogone_uri="test")
        for key, value in payment_request.to_dict().items():
            if key != missing:
                request.store(key, value)

        with pytest.raises(IncompleteRequestError) as exc_info:
            request.validate()

        assert exc_info.value.field == missing
        assert str(exc_info.value) == f"{missing} can not be empty"


class TestFromSettings:
    """Tests for PaymentRequest.from_settings."""

    def test_populates_defaults(self, ogone_settings):
        """PSPID, currency, language and URI come from settings."""
        request = PaymentRequest.from_settings(ogone_settings)

        assert request.to_dict() == {
            "PSPID": "merchant01",
            "currency": "EUR",
            "language": "nl_BE",
        }
        assert request.ogone_uri == GatewayEnvironment.TEST.uri

    def test_unconfigured_pspid_is_skipped(self):
        """An empty PSPID setting leaves PSPID unset."""
        request = PaymentRequest.from_settings(
            OgoneSettings(pspid="", environment="prod", currency="USD", language="en_US")
        )

        assert "PSPID" not in request
        assert request.ogone_uri == GatewayEnvironment.PRODUCTION.uri
