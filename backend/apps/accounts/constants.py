"""
Constants for accounts app.
"""

from enum import StrEnum


class TokenClaim(StrEnum):
    """Claim names in the session token payload."""

    PHONE_NUMBER = "phoneNumber"
    ISSUED_AT = "iat"
    EXPIRES_AT = "exp"


SESSION_TOKEN_ALGORITHM = "HS256"
