"""
Security module for the GSW control panel.

This module provides:
- Self-certifying bearer tokens (salt + expiry + SHA-512 digest)
- Request gating on the x-btoken header
- Security configuration management

Usage:
    from security.auth import authorize_token, validate_bearer_token, mint_token
    from security.config import SecurityConfig
"""

from security.auth import (
    APIAuthError,
    BearerToken,
    MissingTokenError,
    authorize_token,
    decode_token,
    encode_token,
    mint_token,
    validate_bearer_token,
)
from security.config import SecurityConfig

__version__ = "1.0.0"
__all__ = [
    "APIAuthError",
    "BearerToken",
    "MissingTokenError",
    "SecurityConfig",
    "authorize_token",
    "decode_token",
    "encode_token",
    "mint_token",
    "validate_bearer_token",
]
