"""
Base Payment Request.

Accumulates the generic parameters of an Ogone e-Commerce payment
and checks that the mandatory ones are present before submission.
"""

import re
from functools import wraps
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, TypeVar, Union

from ogone_subscriptions.config import GatewayEnvironment, OgoneSettings, settings
from ogone_subscriptions.core.exceptions import IncompleteRequestError, InvalidArgumentError
from ogone_subscriptions.core.field_rules import (
    ALPHANUMERIC,
    check_amount,
    check_choice,
    check_text,
    require_string,
)
from ogone_subscriptions.infrastructure.logging import get_logger
from ogone_subscriptions.payment.models import BASE_REQUIRED_FIELDS, SUPPORTED_CURRENCIES


logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

ParameterValue = Union[str, int]

_LANGUAGE_PATTERN = re.compile(r"[a-z]{2}_[A-Z]{2}")
_EMAIL_PATTERN = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+")


def parameter_setter(func: F) -> F:
    """
    Log rejected values of a setter before propagating the error.

    The rejected value itself is never logged.
    """
    @wraps(func)
    def wrapper(self: "PaymentRequest", *args: Any, **kwargs: Any) -> Any:
        try:
            return func(self, *args, **kwargs)
        except InvalidArgumentError as e:
            logger.warning(
                f"Rejected {e.field}: {e.message}",
                extra={"extra_fields": {
                    "setter": func.__name__,
                    "parameter": e.field,
                    "rule": e.rule,
                }}
            )
            raise
    return wrapper  # type: ignore


def is_present(value: Optional[ParameterValue]) -> bool:
    """A parameter counts as present unless it is None or empty."""
    return value is not None and value != ""


class PaymentRequest:
    """
    Parameter map of a single Ogone payment request.

    Each setter validates its input and stores it under the
    gateway's parameter name. Invalid input raises
    InvalidArgumentError and leaves the map untouched.

    Instances are not thread-safe: build one request per payment.
    """

    required_fields: Iterable[str] = BASE_REQUIRED_FIELDS

    def __init__(self, ogone_uri: Optional[Union[str, GatewayEnvironment]] = None) -> None:
        self._parameters: Dict[str, ParameterValue] = {}
        self._ogone_uri: Optional[str] = None
        if ogone_uri is not None:
            self.set_ogone_uri(ogone_uri)

    @classmethod
    def from_settings(cls, ogone: Optional[OgoneSettings] = None) -> "PaymentRequest":
        """
        Create a request pre-populated from the merchant settings.

        Args:
            ogone: Ogone settings, defaults to the global settings.

        Returns:
            PaymentRequest with PSPID, currency, language and URI set.
        """
        ogone = ogone or settings.ogone
        request = cls(ogone_uri=ogone.ogone_uri)
        if ogone.is_configured:
            request.set_pspid(ogone.pspid)
        request.set_currency(ogone.currency)
        request.set_language(ogone.language)
        return request

    # -------------------------------------------------------------------------
    # Parameter map access
    # -------------------------------------------------------------------------

    @property
    def parameters(self) -> Mapping[str, ParameterValue]:
        """Read-only view of the accumulated parameters."""
        return MappingProxyType(self._parameters)

    def to_dict(self) -> Dict[str, ParameterValue]:
        """Copy of the parameters for the transport layer."""
        return dict(self._parameters)

    def get(self, key: str, default: Optional[ParameterValue] = None) -> Optional[ParameterValue]:
        return self._parameters.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._parameters

    def store(self, key: str, value: ParameterValue) -> None:
        """Store an already validated parameter."""
        self._parameters[key] = value
        logger.debug(
            f"Parameter {key} set",
            extra={"extra_fields": {"parameter": key}}
        )

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    @property
    def ogone_uri(self) -> Optional[str]:
        """Order page URI the request is posted to."""
        return self._ogone_uri

    @parameter_setter
    def set_ogone_uri(self, uri: Union[str, GatewayEnvironment]) -> None:
        """
        Select the gateway the request is posted to.

        Args:
            uri: A GatewayEnvironment, its name ("test"/"prod") or its URI.
        """
        allowed = {env.uri: env for env in GatewayEnvironment}
        if isinstance(uri, GatewayEnvironment):
            self._ogone_uri = uri.uri
            return
        require_string("ogone_uri", uri, "Ogone URI")
        if uri in allowed:
            self._ogone_uri = uri
            return
        try:
            self._ogone_uri = GatewayEnvironment(uri).uri
        except ValueError:
            raise InvalidArgumentError(
                "ogone_uri", "Invalid Ogone URI", rule="choice"
            ) from None

    @parameter_setter
    def set_pspid(self, pspid: str) -> None:
        """Merchant affiliation name in Ogone (maxlength 30)."""
        check_text("PSPID", pspid, 30, "PSPID")
        self.store("PSPID", pspid)

    @parameter_setter
    def set_order_id(self, order_id: str) -> None:
        """Unique order reference of the merchant (maxlength 30)."""
        check_text("ORDERID", order_id, 30, "Order id", charset=ALPHANUMERIC)
        self.store("ORDERID", order_id)

    @parameter_setter
    def set_amount(self, amount: int) -> None:
        """
        Set amount in cents, eg EUR 12.34 is written as 1234.
        """
        check_amount("amount", amount)
        self.store("amount", amount)

    @parameter_setter
    def set_currency(self, currency: str) -> None:
        """ISO 4217 currency code, eg EUR."""
        check_choice(
            "currency",
            currency,
            SUPPORTED_CURRENCIES,
            "Unknown currency. Use an ISO 4217 code supported by Ogone",
        )
        self.store("currency", currency)

    @parameter_setter
    def set_language(self, language: str) -> None:
        """Language of the payment page, eg en_US or nl_BE."""
        check_text("language", language, 5, "Language")
        if not _LANGUAGE_PATTERN.fullmatch(language):
            raise InvalidArgumentError(
                "language",
                "Language must be a locale like en_US",
                rule="format",
            )
        self.store("language", language)

    @parameter_setter
    def set_customer_name(self, name: str) -> None:
        """Customer name (maxlength 35)."""
        check_text("CN", name, 35, "Customer name")
        self.store("CN", name)

    @parameter_setter
    def set_email(self, email: str) -> None:
        """Customer e-mail address (maxlength 50)."""
        check_text("EMAIL", email, 50, "Email")
        if not _EMAIL_PATTERN.fullmatch(email):
            raise InvalidArgumentError("EMAIL", "Email is invalid", rule="format")
        self.store("EMAIL", email)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def check_required(self, fields: Iterable[str]) -> None:
        """Raise IncompleteRequestError for the first missing field."""
        for field in fields:
            if not is_present(self._parameters.get(field)):
                logger.warning(
                    f"Request incomplete: {field} missing",
                    extra={"extra_fields": {"parameter": field}}
                )
                raise IncompleteRequestError(field)

    def validate(self) -> None:
        """
        Check the request can be submitted.

        Raises:
            IncompleteRequestError: If the gateway URI or a required
                parameter is missing.
        """
        if not self._ogone_uri:
            logger.warning("Request incomplete: Ogone URI missing")
            raise IncompleteRequestError("ogone_uri", "Ogone URI cannot be empty")

        self.check_required(self.required_fields)
