"""
Payment Request Models.

Enumerations and fixed field sets of the Ogone request parameters.
"""

from enum import Enum, IntEnum
from typing import Optional, Tuple


class PeriodUnit(str, Enum):
    """Recurrence granularity of a subscription."""
    DAILY = "d"
    WEEKLY = "ww"
    MONTHLY = "m"
    
    @property
    def max_moment(self) -> Optional[int]:
        """Highest allowed moment for the unit, None when unbounded."""
        return _MAX_MOMENT[self]


# Weekly moment is a day of week (1=Sunday .. 7=Saturday), monthly a day
# of month capped at 28 so every month has it.
_MAX_MOMENT = {
    PeriodUnit.DAILY: None,
    PeriodUnit.WEEKLY: 7,
    PeriodUnit.MONTHLY: 28,
}


class SubscriptionStatus(IntEnum):
    """Status of a subscription."""
    INACTIVE = 0
    ACTIVE = 1


BASE_REQUIRED_FIELDS: Tuple[str, ...] = (
    "PSPID",
    "ORDERID",
    "amount",
    "currency",
)

SUBSCRIPTION_REQUIRED_FIELDS: Tuple[str, ...] = (
    "SUBSCRIPTION_ID",
    "SUB_AMOUNT",
    "SUB_COM",
    "SUB_ORDERID",
    "SUB_PERIOD_UNIT",
    "SUB_PERIOD_NUMBER",
    "SUB_PERIOD_MOMENT",
    "SUB_STARTDATE",
    "SUB_ENDDATE",
    "SUB_STATUS",
)

# ISO 4217 codes accepted by the e-Commerce platform
SUPPORTED_CURRENCIES = frozenset([
    "AED", "ANG", "ARS", "AUD", "AWG", "BGN", "BRL", "BYR", "CAD", "CHF",
    "CNY", "CZK", "DKK", "EEK", "EGP", "EUR", "GBP", "GEL", "HKD", "HRK",
    "HUF", "ILS", "ISK", "JPY", "KRW", "LTL", "LVL", "MAD", "MXN", "NOK",
    "NZD", "PLN", "RON", "RUB", "SEK", "SGD", "SKK", "THB", "TRY", "UAH",
    "USD", "XAF", "XOF", "XPF", "ZAR",
])
