#!/usr/bin/env python3
"""
Bearer token generator for the control panel API.

Tokens are minted offline from the shared secret: a random salt, a 13-digit
millisecond expiry and the SHA-512 digest of both plus the secret. Send the
result in the ``x-btoken`` header.

Usage:
    python scripts/generate_token.py
    python scripts/generate_token.py --ttl 3600
    python scripts/generate_token.py --secret my-secret --quiet
"""

import argparse
import sys
from datetime import datetime, timezone

from security.auth import decode_token, mint_token
from security.config import SecurityConfig


def main(argv=None) -> int:
    """Main entry point for token generator."""
    parser = argparse.ArgumentParser(
        description="Generate bearer tokens for the GSW control panel API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Token valid for one day, using SECRET from the environment
  python scripts/generate_token.py

  # Token valid for 10 minutes
  python scripts/generate_token.py --ttl 600

  # Explicit secret, token only (for scripting)
  python scripts/generate_token.py --secret my-secret --quiet
        """,
    )

    parser.add_argument(
        "--secret",
        default=None,
        help="Shared secret (default: SECRET environment variable)",
    )

    parser.add_argument(
        "--ttl",
        type=int,
        default=86400,
        help="Token lifetime in seconds (default: 86400)",
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Output only the token (for scripting)",
    )

    args = parser.parse_args(argv)

    config = SecurityConfig(secret=args.secret) if args.secret is not None else SecurityConfig.from_env()
    if not config.enabled:
        print("SECRET is empty - the protected API is disabled", file=sys.stderr)
        return 1

    try:
        token = mint_token(config.secret, args.ttl)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.quiet:
        print(token)
        return 0

    expires = datetime.fromtimestamp(decode_token(token).expires_at_ms / 1000, tz=timezone.utc)
    print("=" * 70)
    print("x-btoken Generation")
    print("=" * 70)
    print()
    print(f"Token (expires {expires.isoformat()}):")
    print(f"  {token}")
    print()
    print("Send with every protected request:")
    print(f"  x-btoken: {token}")
    print()
    print("=" * 70)
    return 0


if __name__ == "__main__":
    sys.exit(main())
