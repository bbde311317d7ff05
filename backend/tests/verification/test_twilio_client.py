"""
Tests for the Twilio Verify provider.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
from requests import ConnectionError as RequestsConnectionError
from twilio.base.exceptions import TwilioRestException

from apps.verification.providers import VerificationProviderError
from apps.verification.twilio_client import (
    TwilioVerifyConfig,
    TwilioVerifyProvider,
    get_otp_provider,
)

PHONE = "+14155551234"
CONFIG = TwilioVerifyConfig(
    account_sid="ACxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
    auth_token="secret-token",
    service_sid="VAxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxxx",
)
CREATED = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)


def _twilio_instance(status: str = "pending", valid: bool = False) -> MagicMock:
    return MagicMock(
        sid="VE0123456789abcdef0123456789abcdef",
        to=PHONE,
        channel="sms",
        status=status,
        valid=valid,
        date_created=CREATED,
    )


@pytest.fixture
def client() -> MagicMock:
    return MagicMock()


@pytest.fixture
def service(client: MagicMock) -> MagicMock:
    return client.verify.v2.services.return_value


class TestTwilioVerifyConfig:
    """Tests for configuration loading."""

    def test_from_settings(self, settings) -> None:
        settings.TWILIO_ACCOUNT_SID = "AC1"
        settings.TWILIO_AUTH_TOKEN = "token"
        settings.TWILIO_SERVICE_SID = "VA1"

        config = TwilioVerifyConfig.from_settings()

        assert config == TwilioVerifyConfig(account_sid="AC1", auth_token="token", service_sid="VA1")
        assert config.is_configured

    def test_incomplete_config(self) -> None:
        assert not TwilioVerifyConfig(account_sid="AC1", auth_token="", service_sid="VA1").is_configured


class TestSend:
    """Tests for TwilioVerifyProvider.send."""

    def test_creates_sms_verification(self, client: MagicMock, service: MagicMock) -> None:
        service.verifications.create.return_value = _twilio_instance()
        provider = TwilioVerifyProvider(CONFIG, client=client)

        session = provider.send(PHONE)

        client.verify.v2.services.assert_called_once_with(CONFIG.service_sid)
        service.verifications.create.assert_called_once_with(to=PHONE, channel="sms")
        assert session.sid == "VE0123456789abcdef0123456789abcdef"
        assert session.to == PHONE
        assert session.status == "pending"
        assert session.created_at == CREATED

    def test_wraps_rest_errors(self, client: MagicMock, service: MagicMock) -> None:
        service.verifications.create.side_effect = TwilioRestException(
            400, "/Verifications", msg="Invalid parameter `To`", code=60200
        )
        provider = TwilioVerifyProvider(CONFIG, client=client)

        with pytest.raises(VerificationProviderError, match="Invalid parameter"):
            provider.send(PHONE)

    def test_wraps_network_errors(self, client: MagicMock, service: MagicMock) -> None:
        service.verifications.create.side_effect = RequestsConnectionError("connection refused")
        provider = TwilioVerifyProvider(CONFIG, client=client)

        with pytest.raises(VerificationProviderError, match="connection refused"):
            provider.send(PHONE)

    def test_unconfigured_provider_fails_without_calling_twilio(self, client: MagicMock) -> None:
        provider = TwilioVerifyProvider(
            TwilioVerifyConfig(account_sid="", auth_token="", service_sid=""), client=client
        )

        with pytest.raises(VerificationProviderError, match="not configured"):
            provider.send(PHONE)

        client.verify.v2.services.assert_not_called()


class TestCheck:
    """Tests for TwilioVerifyProvider.check."""

    def test_approved_check(self, client: MagicMock, service: MagicMock) -> None:
        service.verification_checks.create.return_value = _twilio_instance("approved", valid=True)
        provider = TwilioVerifyProvider(CONFIG, client=client)

        check = provider.check(PHONE, "123456")

        service.verification_checks.create.assert_called_once_with(to=PHONE, code="123456")
        assert check.approved
        assert check.valid

    def test_wrong_code_is_not_approved(self, client: MagicMock, service: MagicMock) -> None:
        service.verification_checks.create.return_value = _twilio_instance("pending")
        provider = TwilioVerifyProvider(CONFIG, client=client)

        check = provider.check(PHONE, "000000")

        assert not check.approved
        assert check.status == "pending"

    def test_missing_verification_raises(self, client: MagicMock, service: MagicMock) -> None:
        """Twilio answers 404 once the verification expired or was already approved."""
        service.verification_checks.create.side_effect = TwilioRestException(
            404, "/VerificationCheck", msg="The requested resource was not found", code=20404
        )
        provider = TwilioVerifyProvider(CONFIG, client=client)

        with pytest.raises(VerificationProviderError, match="not found"):
            provider.check(PHONE, "123456")


class TestGetOTPProvider:
    """Tests for the provider factory."""

    def test_builds_twilio_provider_from_settings(self, settings) -> None:
        get_otp_provider.cache_clear()
        settings.TWILIO_SERVICE_SID = "VAfromsettings"

        with patch("apps.verification.twilio_client.Client") as mock_client_cls:
            provider = get_otp_provider()

        assert isinstance(provider, TwilioVerifyProvider)
        assert provider.config.service_sid == "VAfromsettings"
        # Client is created lazily on first use
        mock_client_cls.assert_not_called()
        get_otp_provider.cache_clear()

    def test_is_cached(self) -> None:
        get_otp_provider.cache_clear()

        assert get_otp_provider() is get_otp_provider()
        get_otp_provider.cache_clear()
