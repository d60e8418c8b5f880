"""
Subscription Payment Request.

Validates and records the parameters of an Ogone recurring payment
(subscription) on top of a base payment request.
"""

from datetime import date
from typing import Dict, Mapping, Optional, Union

from ogone_subscriptions.config import GatewayEnvironment, OgoneSettings
from ogone_subscriptions.core.exceptions import InvalidArgumentError, ScheduleError
from ogone_subscriptions.core.field_rules import (
    ALPHANUMERIC,
    ALPHANUMERIC_WITH_SPACE,
    MAX_AMOUNT,
    check_amount,
    check_choice,
    check_text,
    format_date,
    require_integer,
)
from ogone_subscriptions.infrastructure.logging import get_logger
from ogone_subscriptions.payment.base import (
    ParameterValue,
    PaymentRequest,
    parameter_setter,
)
from ogone_subscriptions.payment.models import (
    SUBSCRIPTION_REQUIRED_FIELDS,
    PeriodUnit,
    SubscriptionStatus,
)


logger = get_logger(__name__)


class SubscriptionPaymentRequest:
    """
    Ogone payment request carrying a subscription.

    Wraps a PaymentRequest and writes the subscription parameters
    (SUBSCRIPTION_ID, SUB_*) into its parameter map. Validation first
    runs the base checks, then requires every subscription field.
    """

    required_fields = SUBSCRIPTION_REQUIRED_FIELDS

    def __init__(self, payment: Optional[PaymentRequest] = None) -> None:
        self._payment = payment if payment is not None else PaymentRequest()

    @classmethod
    def from_settings(
        cls,
        ogone: Optional[OgoneSettings] = None,
    ) -> "SubscriptionPaymentRequest":
        """Create a subscription request on a settings-populated payment."""
        return cls(PaymentRequest.from_settings(ogone))

    @property
    def payment(self) -> PaymentRequest:
        """The wrapped base payment request."""
        return self._payment

    @property
    def parameters(self) -> Mapping[str, ParameterValue]:
        return self._payment.parameters

    def to_dict(self) -> Dict[str, ParameterValue]:
        return self._payment.to_dict()

    def get(self, key: str, default: Optional[ParameterValue] = None) -> Optional[ParameterValue]:
        return self._payment.get(key, default)

    def __contains__(self, key: object) -> bool:
        return key in self._payment

    @property
    def ogone_uri(self) -> Optional[str]:
        return self._payment.ogone_uri

    # -------------------------------------------------------------------------
    # Base parameters
    # -------------------------------------------------------------------------

    def set_ogone_uri(self, uri: Union[str, GatewayEnvironment]) -> None:
        self._payment.set_ogone_uri(uri)

    def set_pspid(self, pspid: str) -> None:
        self._payment.set_pspid(pspid)

    def set_order_id(self, order_id: str) -> None:
        self._payment.set_order_id(order_id)

    def set_currency(self, currency: str) -> None:
        self._payment.set_currency(currency)

    def set_language(self, language: str) -> None:
        self._payment.set_language(language)

    def set_customer_name(self, name: str) -> None:
        self._payment.set_customer_name(name)

    def set_email(self, email: str) -> None:
        self._payment.set_email(email)

    @parameter_setter
    def set_amount(self, amount: int) -> None:
        """
        Set amount in cents, eg EUR 12.34 is written as 1234.

        For subscriptions an amount of 0 is accepted; the merchant
        account must have zero-amount subscriptions enabled by Ogone.
        """
        check_amount("amount", amount, allow_zero=True)
        self._payment.store("amount", amount)

    # -------------------------------------------------------------------------
    # Subscription parameters
    # -------------------------------------------------------------------------

    @parameter_setter
    def set_subscription_id(self, subscription_id: str) -> None:
        """
        Unique identifier of the subscription, assigned by the merchant.

        Args:
            subscription_id: At most 50 characters from [a-zA-Z0-9_-].
        """
        check_text(
            "SUBSCRIPTION_ID", subscription_id, 50, "Subscription id",
            charset=ALPHANUMERIC,
        )
        self._payment.store("SUBSCRIPTION_ID", subscription_id)

    @parameter_setter
    def set_subscription_amount(self, amount: int) -> None:
        """
        Amount of each subscription payment in cents.

        Can differ from the amount of the initial transaction.
        """
        check_amount("SUB_AMOUNT", amount)
        self._payment.store("SUB_AMOUNT", amount)

    @parameter_setter
    def set_subscription_description(self, description: str) -> None:
        """Order description (maxlength 100)."""
        check_text(
            "SUB_COM", description, 100, "Subscription description",
            charset=ALPHANUMERIC_WITH_SPACE,
        )
        self._payment.store("SUB_COM", description)

    @parameter_setter
    def set_subscription_order_id(self, order_id: str) -> None:
        """OrderID used for the subscription payments (maxlength 40)."""
        check_text(
            "SUB_ORDERID", order_id, 40, "Subscription order id",
            charset=ALPHANUMERIC,
        )
        self._payment.store("SUB_ORDERID", order_id)

    @parameter_setter
    def set_subscription_period(
        self,
        unit: Union[str, PeriodUnit],
        interval: int,
        moment: int,
    ) -> None:
        """
        Set the subscription payment interval.

        The three values are validated together and stored only when
        all of them are valid.

        Args:
            unit: 'd' (daily), 'ww' (weekly) or 'm' (monthly).
            interval: Number of units between two payments.
            moment: Depends on unit. Daily: any positive number.
                Weekly: day of week, 1=Sunday .. 7=Saturday.
                Monthly: day of month, at most 28.
        """
        period_unit = self._check_period(unit, interval, moment)

        self._payment.store("SUB_PERIOD_UNIT", period_unit.value)
        self._payment.store("SUB_PERIOD_NUMBER", interval)
        self._payment.store("SUB_PERIOD_MOMENT", moment)

    @staticmethod
    def _check_period(
        unit: Union[str, PeriodUnit],
        interval: int,
        moment: int,
    ) -> PeriodUnit:
        # Unit first: the moment bound depends on it
        try:
            period_unit = PeriodUnit(unit)
        except ValueError:
            raise InvalidArgumentError(
                "SUB_PERIOD_UNIT",
                "Subscription period unit should be d (daily), ww (weekly) or m (monthly)",
                rule="choice",
            ) from None

        require_integer("SUB_PERIOD_NUMBER", interval, "Integer expected for interval")
        if interval < 0:
            raise InvalidArgumentError(
                "SUB_PERIOD_NUMBER", "Interval must be a positive number or 0", rule="range"
            )
        if interval >= MAX_AMOUNT:
            raise InvalidArgumentError(
                "SUB_PERIOD_NUMBER", "Interval is too high", rule="range"
            )

        require_integer("SUB_PERIOD_MOMENT", moment, "Integer expected for moment")
        if moment <= 0:
            raise InvalidArgumentError(
                "SUB_PERIOD_MOMENT", "Moment must be a positive number", rule="range"
            )
        if period_unit is PeriodUnit.WEEKLY and moment > period_unit.max_moment:
            raise InvalidArgumentError(
                "SUB_PERIOD_MOMENT",
                "Moment should be 1 (Sunday), 2, 3 .. 7 (Saturday)",
                rule="range",
            )
        if period_unit is PeriodUnit.MONTHLY and moment > period_unit.max_moment:
            raise InvalidArgumentError(
                "SUB_PERIOD_MOMENT",
                "Moment can't be larger than 28. Last day of month allowed is 28.",
                rule="range",
            )

        return period_unit

    @parameter_setter
    def set_subscription_startdate(self, start: date) -> None:
        """Start date of the subscription, sent as YYYY-MM-DD."""
        self._payment.store(
            "SUB_STARTDATE", format_date("SUB_STARTDATE", start, "Subscription start date")
        )

    @parameter_setter
    def set_subscription_enddate(self, end: date) -> None:
        """End date of the subscription, sent as YYYY-MM-DD."""
        self._payment.store(
            "SUB_ENDDATE", format_date("SUB_ENDDATE", end, "Subscription end date")
        )

    @parameter_setter
    def set_subscription_status(self, status: int) -> None:
        """
        Set subscription status.

        Args:
            status: 0 = inactive, 1 = active.
        """
        message = (
            "Invalid status specified for subscription. "
            "Possible values: 0 = inactive, 1 = active"
        )
        require_integer("SUB_STATUS", status, message)
        check_choice("SUB_STATUS", status, set(SubscriptionStatus), message)
        self._payment.store("SUB_STATUS", int(status))

    @parameter_setter
    def set_subscription_comment(self, comment: str) -> None:
        """Comment for the merchant (maxlength 200)."""
        check_text(
            "SUB_COMMENT", comment, 200, "Subscription comment",
            charset=ALPHANUMERIC_WITH_SPACE,
        )
        self._payment.store("SUB_COMMENT", comment)

    @parameter_setter
    def set_subscription_schedule(
        self,
        unit: Union[str, PeriodUnit],
        interval: int,
        moment: int,
        start: date,
        end: date,
    ) -> None:
        """
        Set period, start date and end date in one call.

        Raises:
            ScheduleError: If end is before start. Nothing is stored.
        """
        start_value = format_date("SUB_STARTDATE", start, "Subscription start date")
        end_value = format_date("SUB_ENDDATE", end, "Subscription end date")
        if end_value < start_value:
            raise ScheduleError(start_value, end_value)
        period_unit = self._check_period(unit, interval, moment)

        self._payment.store("SUB_PERIOD_UNIT", period_unit.value)
        self._payment.store("SUB_PERIOD_NUMBER", interval)
        self._payment.store("SUB_PERIOD_MOMENT", moment)
        self._payment.store("SUB_STARTDATE", start_value)
        self._payment.store("SUB_ENDDATE", end_value)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """
        Check the subscription request can be submitted.

        Raises:
            IncompleteRequestError: If base validation fails or a
                subscription field is missing.
        """
        self._payment.validate()
        self._payment.check_required(self.required_fields)

        logger.info(
            "Subscription request validated",
            extra={"extra_fields": {
                "subscription_id": self._payment.get("SUBSCRIPTION_ID"),
                "period_unit": self._payment.get("SUB_PERIOD_UNIT"),
            }}
        )
