"""
Shared pytest fixtures for all tests.

Factories
---------
Import factories directly from their modules:

    from tests.accounts.factories import UserFactory

OTP provider
------------
API tests never talk to Twilio. The ``otp_provider`` fixture patches the
provider factory used by the users API and returns the fake, so tests can
inspect what was sent and checked:

    def test_login(api_client, otp_provider):
        api_client.post("/api/users/login", {...}, content_type="application/json")
        assert otp_provider.sent == ["+14155551234"]
"""

from collections.abc import Iterator
from unittest.mock import patch

import pytest
from django.test import Client, RequestFactory

from tests.verification.fakes import FakeOTPProvider


@pytest.fixture
def request_factory() -> RequestFactory:
    """Django request factory for unit testing middleware and auth classes."""
    return RequestFactory()


@pytest.fixture
def api_client() -> Client:
    """
    Django test client for full HTTP request/response cycle tests.

    Keeps cookies between requests, so a session set by /verify-otp is sent
    on the next call.
    """
    return Client()


@pytest.fixture
def fake_provider() -> FakeOTPProvider:
    """A fresh in-memory OTP provider that approves code 123456."""
    return FakeOTPProvider()


@pytest.fixture
def otp_provider(fake_provider: FakeOTPProvider) -> Iterator[FakeOTPProvider]:
    """Patch the users API to use the fake OTP provider."""
    with patch("apps.accounts.api.get_otp_provider", return_value=fake_provider):
        yield fake_provider
