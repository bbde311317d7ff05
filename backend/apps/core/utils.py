"""
Core utility functions.
"""

from typing import overload

from django.http import HttpRequest


@overload
def get_client_ip(request: HttpRequest) -> str | None: ...


@overload
def get_client_ip(request: HttpRequest, default: str) -> str: ...


def get_client_ip(request: HttpRequest, default: str | None = None) -> str | None:
    """
    Return the client address for log context.

    Takes the first entry of X-Forwarded-For (the original client behind the
    proxy chain) and falls back to REMOTE_ADDR, then to ``default``.
    """
    forwarded: str | None = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR") or default


def phone_last4(phone_number: str) -> str:
    """Last four digits of a phone number, the only part we ever log."""
    return phone_number[-4:]
