"""
Tests for session cookie authentication.
"""

import pytest
from django.test import RequestFactory

from apps.accounts.tokens import issue_session_token
from apps.core.security import SessionCookieAuth
from tests.accounts.factories import UserFactory

PHONE = "+14155551234"


@pytest.mark.django_db
class TestSessionCookieAuth:
    """Tests for SessionCookieAuth.authenticate."""

    def test_reads_the_session_token_cookie(self) -> None:
        assert SessionCookieAuth.param_name == "session_token"

    def test_resolves_user_from_valid_token(self, request_factory: RequestFactory) -> None:
        user = UserFactory.create(phone_number=PHONE)

        result = SessionCookieAuth().authenticate(request_factory.get("/"), issue_session_token(PHONE))

        assert result == user

    def test_empty_key_is_rejected(self, request_factory: RequestFactory) -> None:
        assert SessionCookieAuth().authenticate(request_factory.get("/"), "") is None

    def test_invalid_token_is_rejected(self, request_factory: RequestFactory) -> None:
        UserFactory.create(phone_number=PHONE)

        assert SessionCookieAuth().authenticate(request_factory.get("/"), "garbage") is None

    def test_unknown_phone_is_rejected(self, request_factory: RequestFactory) -> None:
        token = issue_session_token("+19995550000")

        assert SessionCookieAuth().authenticate(request_factory.get("/"), token) is None

    def test_duplicate_phone_resolves_oldest_record(self, request_factory: RequestFactory) -> None:
        first = UserFactory.create(phone_number=PHONE)
        UserFactory.create(phone_number=PHONE)

        result = SessionCookieAuth().authenticate(request_factory.get("/"), issue_session_token(PHONE))

        assert result == first
