"""
Ogone subscription request builder.

Validates and accumulates the parameters of recurring-payment
requests for the Ogone (Ingenico ePayments) e-Commerce gateway.
"""

from ogone_subscriptions.core.exceptions import (
    ConfigurationError,
    IncompleteRequestError,
    InvalidArgumentError,
    OgoneError,
)
from ogone_subscriptions.payment import (
    PaymentRequest,
    PeriodUnit,
    SubscriptionPaymentRequest,
    SubscriptionStatus,
    build_subscription_request,
)

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "IncompleteRequestError",
    "InvalidArgumentError",
    "OgoneError",
    "PaymentRequest",
    "PeriodUnit",
    "SubscriptionPaymentRequest",
    "SubscriptionStatus",
    "build_subscription_request",
]
