"""
Core security - authentication classes for API.
"""

from typing import TYPE_CHECKING

from django.conf import settings
from django.http import HttpRequest
from ninja.security import APIKeyCookie

from apps.core.logging import get_logger

if TYPE_CHECKING:
    from apps.accounts.models import User

logger = get_logger(__name__)


class SessionCookieAuth(APIKeyCookie):
    """
    Session cookie authentication for API endpoints.

    Reads the signed session token from the ``session_token`` cookie, checks
    its signature and expiry, and resolves the phone number it carries to a
    user record. Returning None makes django-ninja answer 401.
    """

    param_name = settings.SESSION_TOKEN_COOKIE_NAME

    def authenticate(self, request: HttpRequest, key: str | None) -> "User | None":
        from apps.accounts.models import User
        from apps.accounts.tokens import SessionTokenError, decode_session_token

        if not key:
            return None

        try:
            phone_number = decode_session_token(key)
        except SessionTokenError as e:
            logger.info("session_token_rejected", reason=str(e))
            return None

        # Phone uniqueness is not enforced by the store; the oldest record wins.
        return User.objects.filter(phone_number=phone_number).order_by("created_at", "id").first()
