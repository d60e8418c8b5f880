"""Configuration package."""

from ogone_subscriptions.config.settings import (
    GatewayEnvironment,
    OgoneSettings,
    Settings,
    settings,
)

__all__ = [
    "GatewayEnvironment",
    "OgoneSettings",
    "Settings",
    "settings",
]
