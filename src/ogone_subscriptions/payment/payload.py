"""
Subscription Payload Parsing.

Uses Pydantic to type-check a JSON-like mapping before its values
are applied through the SubscriptionPaymentRequest setters.
"""

import re
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
    model_validator,
)
from pydantic import ValidationError as PydanticValidationError

from ogone_subscriptions.core.exceptions import InvalidArgumentError
from ogone_subscriptions.infrastructure.logging import log_duration
from ogone_subscriptions.payment.models import PeriodUnit
from ogone_subscriptions.payment.subscription import SubscriptionPaymentRequest


# Payload field -> gateway parameter, used to report type errors
PAYLOAD_FIELD_KEYS: Dict[str, str] = {
    "pspid": "PSPID",
    "order_id": "ORDERID",
    "amount": "amount",
    "currency": "currency",
    "language": "language",
    "customer_name": "CN",
    "email": "EMAIL",
    "subscription_id": "SUBSCRIPTION_ID",
    "subscription_amount": "SUB_AMOUNT",
    "description": "SUB_COM",
    "subscription_order_id": "SUB_ORDERID",
    "period_unit": "SUB_PERIOD_UNIT",
    "period_number": "SUB_PERIOD_NUMBER",
    "period_moment": "SUB_PERIOD_MOMENT",
    "start_date": "SUB_STARTDATE",
    "end_date": "SUB_ENDDATE",
    "status": "SUB_STATUS",
    "comment": "SUB_COMMENT",
}

_ISO_DATE_PREFIX = re.compile(r"\d{4}-\d{2}-\d{2}")


class SubscriptionPayload(BaseModel):
    """
    Typed subscription request payload.

    Only types are checked here; field rules (length, charset,
    ranges) are enforced by the request setters.
    """

    model_config = ConfigDict(extra="forbid")

    pspid: Optional[StrictStr] = None
    order_id: Optional[StrictStr] = None
    amount: Optional[StrictInt] = Field(
        default=None,
        description="Amount of the initial payment in cents",
    )
    currency: Optional[StrictStr] = None
    language: Optional[StrictStr] = None
    customer_name: Optional[StrictStr] = None
    email: Optional[StrictStr] = None

    subscription_id: Optional[StrictStr] = None
    subscription_amount: Optional[StrictInt] = Field(
        default=None,
        description="Amount of each subscription payment in cents",
    )
    description: Optional[StrictStr] = None
    subscription_order_id: Optional[StrictStr] = None
    period_unit: Optional[PeriodUnit] = None
    period_number: Optional[StrictInt] = None
    period_moment: Optional[StrictInt] = None
    start_date: Optional[Union[datetime, date]] = None
    end_date: Optional[Union[datetime, date]] = None
    status: Optional[StrictInt] = None
    comment: Optional[StrictStr] = None

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def validate_date_input(cls, v: Any) -> Any:
        """Accept dates, datetimes and ISO 8601 strings, never timestamps."""
        if v is None or isinstance(v, date):
            return v
        if isinstance(v, str) and _ISO_DATE_PREFIX.match(v):
            return v
        raise ValueError("expected a date, a datetime or an ISO 8601 date string")

    @model_validator(mode="after")
    def check_period_complete(self) -> "SubscriptionPayload":
        """Period unit, number and moment are given together or not at all."""
        period = (self.period_unit, self.period_number, self.period_moment)
        if any(v is not None for v in period) and any(v is None for v in period):
            raise ValueError(
                "period_unit, period_number and period_moment must be given together"
            )
        return self

    @property
    def has_period(self) -> bool:
        return self.period_unit is not None


def _to_invalid_argument(error: PydanticValidationError) -> InvalidArgumentError:
    """Convert the first Pydantic error into an InvalidArgumentError."""
    first = error.errors()[0]
    loc = first.get("loc") or ()
    name = str(loc[0]) if loc else "payload"
    field = PAYLOAD_FIELD_KEYS.get(name, name)
    return InvalidArgumentError(
        field,
        f"Invalid value for '{name}': {first.get('msg', 'invalid')}",
        rule="type",
    )


@log_duration("build_subscription_request")
def build_subscription_request(
    data: Mapping[str, Any],
    request: Optional[SubscriptionPaymentRequest] = None,
) -> SubscriptionPaymentRequest:
    """
    Build a subscription request from a payload mapping.

    Fields absent from the payload are left untouched. The request
    is not validated; call validate() before submitting it.

    Args:
        data: Payload, e.g. a decoded JSON body.
        request: Request to populate, a new one by default. A setter
            failure leaves the fields applied before it in place.

    Returns:
        The populated request.

    Raises:
        InvalidArgumentError: If a value has the wrong type or breaks
            a field rule.
    """
    try:
        payload = SubscriptionPayload.model_validate(dict(data))
    except PydanticValidationError as e:
        raise _to_invalid_argument(e) from e

    if request is None:
        request = SubscriptionPaymentRequest()

    setters = (
        ("pspid", request.set_pspid),
        ("order_id", request.set_order_id),
        ("amount", request.set_amount),
        ("currency", request.set_currency),
        ("language", request.set_language),
        ("customer_name", request.set_customer_name),
        ("email", request.set_email),
        ("subscription_id", request.set_subscription_id),
        ("subscription_amount", request.set_subscription_amount),
        ("description", request.set_subscription_description),
        ("subscription_order_id", request.set_subscription_order_id),
        ("status", request.set_subscription_status),
        ("comment", request.set_subscription_comment),
    )
    for name, setter in setters:
        value = getattr(payload, name)
        if value is not None:
            setter(value)

    if payload.has_period and payload.start_date and payload.end_date:
        request.set_subscription_schedule(
            payload.period_unit,
            payload.period_number,
            payload.period_moment,
            payload.start_date,
            payload.end_date,
        )
        return request

    if payload.has_period:
        request.set_subscription_period(
            payload.period_unit, payload.period_number, payload.period_moment
        )
    if payload.start_date is not None:
        request.set_subscription_startdate(payload.start_date)
    if payload.end_date is not None:
        request.set_subscription_enddate(payload.end_date)

    return request
