"""
Bearer token codec and request gate.

A token is self-certifying: ``salt + expiry + digest`` with no delimiter,
where ``expiry`` is a 13-digit millisecond timestamp and ``digest`` is the
hex SHA-512 of ``salt + expiry + secret``. Fields are sliced from the end of
the string at fixed widths, so any holder of the secret can mint tokens
offline and the server needs nothing but the secret and a clock.

Provides:
- Token encode/decode/validate helpers
- Random-salt token minting for tooling
- ``authorize_token`` gate used by the FastAPI dependencies
"""

import hashlib
import hmac
import re
import secrets
import time
from dataclasses import dataclass
from typing import Optional

from fastapi import HTTPException, status

from security.config import SecurityConfig

DIGEST_LENGTH = 128
EXPIRY_LENGTH = 13
MIN_SALT_LENGTH = 25
MIN_TOKEN_LENGTH = DIGEST_LENGTH + EXPIRY_LENGTH + MIN_SALT_LENGTH

_EXPIRY_RE = re.compile(r"[0-9]{13}")
_DIGEST_RE = re.compile(r"[a-f0-9]{128}")


class APIAuthError(HTTPException):
    """Raised when a bearer token is present but does not validate."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


class MissingTokenError(HTTPException):
    """Raised when a protected route is hit without a usable x-btoken header."""

    def __init__(self, detail: str = "Missing x-btoken header"):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


@dataclass(frozen=True)
class BearerToken:
    """Logical fields of a bearer token."""

    salt: str
    expiry: str
    digest: str

    @property
    def expires_at_ms(self) -> int:
        return int(self.expiry)

    def __str__(self) -> str:
        return self.salt + self.expiry + self.digest


def current_time_ms() -> int:
    """Default clock for token validation (Unix milliseconds)."""
    return int(time.time() * 1000)


def compute_digest(salt: str, expiry: str, secret: str) -> str:
    return hashlib.sha512((salt + expiry + secret).encode("utf-8")).hexdigest()


def decode_token(token: str) -> Optional[BearerToken]:
    """Split a token into salt, expiry and digest.

    Args:
        token: Raw token string from the x-btoken header

    Returns:
        BearerToken if every field has the right shape, otherwise None
    """
    if not isinstance(token, str) or len(token) < MIN_TOKEN_LENGTH:
        return None

    salt = token[: -(EXPIRY_LENGTH + DIGEST_LENGTH)]
    expiry = token[-(EXPIRY_LENGTH + DIGEST_LENGTH) : -DIGEST_LENGTH]
    digest = token[-DIGEST_LENGTH:]

    if len(salt) < MIN_SALT_LENGTH:
        return None
    if not _EXPIRY_RE.fullmatch(expiry) or not _DIGEST_RE.fullmatch(digest):
        return None

    return BearerToken(salt=salt, expiry=expiry, digest=digest)


def encode_token(salt: str, expiry_ms: int, secret: str) -> str:
    """Build a token from its parts.

    Args:
        salt: Random prefix, at least 25 characters
        expiry_ms: Expiry as a Unix timestamp in milliseconds (13 digits)
        secret: Shared secret used to key the digest

    Returns:
        Token string ``salt + expiry + digest``

    Raises:
        ValueError: If the salt is too short or the expiry is not 13 digits
    """
    if len(salt) < MIN_SALT_LENGTH:
        raise ValueError(f"Salt must be at least {MIN_SALT_LENGTH} characters")

    expiry = str(expiry_ms)
    if not _EXPIRY_RE.fullmatch(expiry):
        raise ValueError(f"Expiry must be a {EXPIRY_LENGTH}-digit millisecond timestamp")

    return str(BearerToken(salt=salt, expiry=expiry, digest=compute_digest(salt, expiry, secret)))


def mint_token(
    secret: str,
    ttl_seconds: int,
    now_ms: Optional[int] = None,
    salt: Optional[str] = None,
) -> str:
    """Mint a token valid for ``ttl_seconds`` from ``now_ms``.

    Args:
        secret: Shared secret
        ttl_seconds: Token lifetime in seconds
        now_ms: Issue time (defaults to the current clock)
        salt: Explicit salt (defaults to 32 random hex characters)

    Returns:
        Token string
    """
    if ttl_seconds <= 0:
        raise ValueError("Token lifetime must be positive")

    if now_ms is None:
        now_ms = current_time_ms()
    if salt is None:
        salt = secrets.token_hex(16)

    return encode_token(salt, now_ms + ttl_seconds * 1000, secret)


def validate_bearer_token(token: str, secret: str, now_ms: int) -> bool:
    """Check a token against the shared secret and clock.

    Never raises; any malformed input simply fails validation.

    Args:
        token: Raw token string
        secret: Shared secret
        now_ms: Current time in Unix milliseconds

    Returns:
        True if the token is well formed, unexpired and its digest matches
    """
    parsed = decode_token(token)
    if parsed is None:
        return False

    if now_ms >= parsed.expires_at_ms:
        return False

    expected = compute_digest(parsed.salt, parsed.expiry, secret)
    return hmac.compare_digest(parsed.digest, expected)


def authorize_token(
    x_btoken: Optional[str],
    config: SecurityConfig,
    now_ms: Optional[int] = None,
) -> bool:
    """Gate a request on its x-btoken header.

    Args:
        x_btoken: Value of the x-btoken header, if any
        config: Security configuration
        now_ms: Current time (defaults to the current clock)

    Returns:
        True if the token is valid

    Raises:
        MissingTokenError: If the API is disabled or the header is absent
        APIAuthError: If the token does not validate
    """
    if not config.enabled or not x_btoken:
        raise MissingTokenError()

    if now_ms is None:
        now_ms = current_time_ms()

    if not validate_bearer_token(x_btoken, config.secret, now_ms):
        raise APIAuthError()

    return True
