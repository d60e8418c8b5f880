"""
Test Configuration and Fixtures.

Provides shared fixtures for all tests.
"""

from datetime import date

import pytest

from ogone_subscriptions.config import GatewayEnvironment, OgoneSettings
from ogone_subscriptions.payment import PaymentRequest, SubscriptionPaymentRequest


@pytest.fixture
def ogone_settings() -> OgoneSettings:
    """Explicit merchant settings, independent of the environment."""
    return OgoneSettings(
        pspid="merchant01",
        environment="test",
        currency="EUR",
        language="nl_BE",
    )


@pytest.fixture
def payment_request() -> PaymentRequest:
    """Create a base request that passes validation."""
    request = PaymentRequest(ogone_uri=GatewayEnvironment.TEST)
    request.set_pspid("merchant01")
    request.set_order_id("order-123")
    request.set_amount(1500)
    request.set_currency("EUR")
    return request


@pytest.fixture
def subscription_request(payment_request: PaymentRequest) -> SubscriptionPaymentRequest:
    """Create an empty subscription request on a valid base request."""
    return SubscriptionPaymentRequest(payment_request)


@pytest.fixture
def complete_subscription(
    subscription_request: SubscriptionPaymentRequest,
) -> SubscriptionPaymentRequest:
    """Create a subscription request with every required field set."""
    subscription_request.set_subscription_id("sub_2024-001")
    subscription_request.set_subscription_amount(999)
    subscription_request.set_subscription_description("Monthly magazine")
    subscription_request.set_subscription_order_id("order-123-sub")
    subscription_request.set_subscription_period("m", 1, 15)
    subscription_request.set_subscription_startdate(date(2024, 1, 15))
    subscription_request.set_subscription_enddate(date(2025, 1, 15))
    subscription_request.set_subscription_status(1)
    return subscription_request
