"""
Security configuration for the control panel.

This module handles the shared secret used to:
- Gate the web UI and the protected API
- Key the SHA-512 digest embedded in bearer tokens
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_SECRET = "secret"


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration for the application.

    Attributes:
        secret: Shared secret for token validation. An empty string disables
            the web UI and every protected route.
    """

    secret: str = DEFAULT_SECRET

    @property
    def enabled(self) -> bool:
        """Whether the UI and protected API are reachable."""
        return self.secret != ""

    @classmethod
    def from_env(cls) -> "SecurityConfig":
        """Load security configuration from environment variables.

        An unset ``SECRET`` falls back to the built-in default; an explicitly
        empty one is kept as-is.

        Returns:
            SecurityConfig instance populated from environment
        """
        return cls(secret=os.getenv("SECRET", DEFAULT_SECRET))

    def validate(self) -> None:
        """Warn about configurations that are usable but unsafe."""
        if not self.enabled:
            logger.warning("SECRET is empty - web UI and protected API are disabled")
        elif self.secret == DEFAULT_SECRET:
            logger.warning("SECRET is not set - using the built-in default secret")


def get_config() -> SecurityConfig:
    """Get validated security configuration.

    Returns:
        Validated SecurityConfig instance
    """
    config = SecurityConfig.from_env()
    config.validate()
    return config
