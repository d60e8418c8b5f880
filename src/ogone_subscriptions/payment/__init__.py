"""
Payment Requests.

Parameter accumulators for the Ogone e-Commerce gateway:
- Base payment request
- Subscription (recurring payment) request
- Payload parsing into a subscription request
"""

from ogone_subscriptions.payment.base import PaymentRequest
from ogone_subscriptions.payment.models import (
    BASE_REQUIRED_FIELDS,
    SUBSCRIPTION_REQUIRED_FIELDS,
    SUPPORTED_CURRENCIES,
    PeriodUnit,
    SubscriptionStatus,
)
from ogone_subscriptions.payment.payload import (
    SubscriptionPayload,
    build_subscription_request,
)
from ogone_subscriptions.payment.subscription import SubscriptionPaymentRequest


__all__ = [
    "BASE_REQUIRED_FIELDS",
    "SUBSCRIPTION_REQUIRED_FIELDS",
    "SUPPORTED_CURRENCIES",
    "PaymentRequest",
    "PeriodUnit",
    "SubscriptionPayload",
    "SubscriptionPaymentRequest",
    "SubscriptionStatus",
    "build_subscription_request",
]
