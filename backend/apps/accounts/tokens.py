"""
Session token issuing and decoding.

Tokens are HS256 JWTs carrying the verified phone number. They are
stateless: nothing is stored server-side, so a token stays valid until it
expires even after logout clears the cookie.
"""

import time
from typing import Any

import jwt
from django.conf import settings

from apps.accounts.constants import SESSION_TOKEN_ALGORITHM, TokenClaim


class SessionTokenError(Exception):
    """Raised when a session token cannot be issued or is not valid."""

    pass


def _get_secret() -> str:
    secret: str = settings.SESSION_TOKEN_SECRET
    if not secret:
        raise SessionTokenError("Session token secret not configured")
    return secret


def issue_session_token(phone_number: str, ttl_seconds: int | None = None) -> str:
    """
    Issue a signed session token for a verified phone number.

    Args:
        phone_number: Phone number the holder proved ownership of
        ttl_seconds: Lifetime in seconds (defaults to SESSION_TOKEN_TTL_SECONDS)

    Raises:
        SessionTokenError: If no signing secret is configured or signing fails
    """
    if ttl_seconds is None:
        ttl_seconds = settings.SESSION_TOKEN_TTL_SECONDS

    now = int(time.time())
    payload: dict[str, Any] = {
        TokenClaim.PHONE_NUMBER: phone_number,
        TokenClaim.ISSUED_AT: now,
        TokenClaim.EXPIRES_AT: now + ttl_seconds,
    }

    try:
        return jwt.encode(payload, _get_secret(), algorithm=SESSION_TOKEN_ALGORITHM)
    except jwt.PyJWTError as e:
        raise SessionTokenError(f"Failed to sign session token: {e}") from e


def decode_session_token(token: str) -> str:
    """
    Validate a session token and return the phone number it carries.

    Raises:
        SessionTokenError: If the token is expired, tampered with or malformed
    """
    try:
        payload = jwt.decode(
            token,
            _get_secret(),
            algorithms=[SESSION_TOKEN_ALGORITHM],
            options={"require": [TokenClaim.EXPIRES_AT, TokenClaim.PHONE_NUMBER]},
        )
    except jwt.ExpiredSignatureError:
        raise SessionTokenError("Session token has expired") from None
    except jwt.InvalidTokenError:
        raise SessionTokenError("Invalid session token") from None

    return str(payload[TokenClaim.PHONE_NUMBER])
