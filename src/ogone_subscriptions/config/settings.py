"""
Library configuration.

Centralizes environment variables and defaults
using dataclasses for type safety and immutability.
"""

import logging
import os
from dataclasses import dataclass, field
from enum import Enum

from ogone_subscriptions.core.exceptions import ConfigurationError


class GatewayEnvironment(str, Enum):
    """Ogone platform a request is posted to."""
    TEST = "test"
    PRODUCTION = "prod"
    
    @property
    def uri(self) -> str:
        """Order page URI of the environment."""
        return f"https://secure.ogone.com/ncol/{self.value}/orderstandard_utf8.asp"


@dataclass(frozen=True)
class OgoneSettings:
    """Ogone merchant account settings."""
    
    pspid: str = field(
        default_factory=lambda: os.environ.get("OGONE_PSPID", "")
    )
    environment: str = field(
        default_factory=lambda: os.environ.get("OGONE_ENVIRONMENT", "test").lower()
    )
    currency: str = field(
        default_factory=lambda: os.environ.get("OGONE_CURRENCY", "EUR").upper()
    )
    language: str = field(
        default_factory=lambda: os.environ.get("OGONE_LANGUAGE", "en_US")
    )
    
    @property
    def is_configured(self) -> bool:
        """Check if a merchant account is configured."""
        return bool(self.pspid)
    
    @property
    def gateway(self) -> GatewayEnvironment:
        """Resolve the configured gateway environment."""
        try:
            return GatewayEnvironment(self.environment)
        except ValueError as e:
            raise ConfigurationError(
                "OGONE_ENVIRONMENT",
                f"Unknown Ogone environment: {self.environment!r} "
                f"(expected 'test' or 'prod')",
            ) from e
    
    @property
    def ogone_uri(self) -> str:
        """Get the order page URI for the configured environment."""
        return self.gateway.uri


@dataclass(frozen=True)
class Settings:
    """Main library settings."""
    
    ogone: OgoneSettings = field(default_factory=OgoneSettings)
    log_level: str = field(
        default_factory=lambda: os.environ.get("LOG_LEVEL", "INFO").upper()
    )
    
    @property
    def resolved_log_level(self) -> int:
        """Numeric log level, INFO when LOG_LEVEL is not a known level name."""
        level = logging.getLevelName(self.log_level)
        return level if isinstance(level, int) else logging.INFO


# Singleton settings instance
settings = Settings()
