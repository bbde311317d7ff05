"""
Custom type definitions for the application.

These types help mypy understand attributes added during request handling.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from django.http import HttpRequest

if TYPE_CHECKING:
    from apps.accounts.models import User


class SessionAuthenticatedHttpRequest(HttpRequest):
    """
    HttpRequest after SessionCookieAuth succeeded.

    django-ninja stores the value returned by the auth class on request.auth.
    """

    auth: "User"
    correlation_id: UUID
