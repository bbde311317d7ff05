"""
Twilio Verify client wrapper.

Uses the Verify v2 API: verifications.create sends a code over SMS and
verification_checks.create checks a submitted code. Twilio owns code
generation, expiry and attempt tracking.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Any

from django.conf import settings
from requests import RequestException
from twilio.base.exceptions import TwilioException, TwilioRestException
from twilio.rest import Client

from apps.core.logging import get_logger
from apps.core.utils import phone_last4
from apps.verification.providers import (
    OTPProvider,
    VerificationCheck,
    VerificationProviderError,
    VerificationSession,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class TwilioVerifyConfig:
    """Credentials and service identifier for Twilio Verify."""

    account_sid: str
    auth_token: str
    service_sid: str

    @classmethod
    def from_settings(cls) -> "TwilioVerifyConfig":
        return cls(
            account_sid=settings.TWILIO_ACCOUNT_SID,
            auth_token=settings.TWILIO_AUTH_TOKEN,
            service_sid=settings.TWILIO_SERVICE_SID,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.account_sid and self.auth_token and self.service_sid)


class TwilioVerifyProvider:
    """OTPProvider backed by a Twilio Verify service."""

    channel = "sms"

    def __init__(self, config: TwilioVerifyConfig, client: Client | None = None) -> None:
        self.config = config
        self._client = client

    def _service(self) -> Any:
        if not self.config.is_configured:
            logger.error(
                "twilio_verify_not_configured",
                has_account_sid=bool(self.config.account_sid),
                has_auth_token=bool(self.config.auth_token),
                has_service_sid=bool(self.config.service_sid),
            )
            raise VerificationProviderError("Verification service not configured")

        if self._client is None:
            self._client = Client(self.config.account_sid, self.config.auth_token)
        return self._client.verify.v2.services(self.config.service_sid)

    def send(self, phone_number: str) -> VerificationSession:
        """
        Send an SMS verification code to ``phone_number``.

        Raises:
            VerificationProviderError: If Twilio rejects the request or is unreachable
        """
        try:
            verification = self._service().verifications.create(
                to=phone_number,
                channel=self.channel,
            )
        except TwilioRestException as e:
            logger.error(
                "twilio_verification_failed",
                phone_last4=phone_last4(phone_number),
                status=e.status,
                code=e.code,
                error=e.msg,
            )
            raise VerificationProviderError(f"Failed to send verification: {e.msg}") from e
        except (TwilioException, RequestException) as e:
            logger.error("twilio_verification_error", phone_last4=phone_last4(phone_number), error=str(e))
            raise VerificationProviderError(f"Verification service error: {e}") from e

        logger.info(
            "twilio_verification_sent",
            phone_last4=phone_last4(phone_number),
            verification_sid=verification.sid,
            status=verification.status,
        )

        return VerificationSession(
            sid=verification.sid,
            to=verification.to,
            channel=verification.channel,
            status=verification.status,
            valid=bool(verification.valid),
            created_at=verification.date_created,
        )

    def check(self, phone_number: str, code: str) -> VerificationCheck:
        """
        Check ``code`` for ``phone_number``.

        A wrong code comes back with a non-approved status. Twilio answers 404
        when there is no pending verification (expired, already approved or
        never sent); that surfaces as VerificationProviderError.
        """
        try:
            verification_check = self._service().verification_checks.create(
                to=phone_number,
                code=code,
            )
        except TwilioRestException as e:
            logger.warning(
                "twilio_verification_check_failed",
                phone_last4=phone_last4(phone_number),
                status=e.status,
                code=e.code,
                error=e.msg,
            )
            raise VerificationProviderError(f"Failed to check verification: {e.msg}") from e
        except (TwilioException, RequestException) as e:
            logger.error("twilio_verification_check_error", phone_last4=phone_last4(phone_number), error=str(e))
            raise VerificationProviderError(f"Verification service error: {e}") from e

        logger.info(
            "twilio_verification_checked",
            phone_last4=phone_last4(phone_number),
            verification_sid=verification_check.sid,
            status=verification_check.status,
        )

        return VerificationCheck(
            sid=verification_check.sid,
            to=verification_check.to,
            channel=verification_check.channel,
            status=verification_check.status,
            valid=bool(verification_check.valid),
            created_at=verification_check.date_created,
        )


@lru_cache(maxsize=1)
def get_otp_provider() -> OTPProvider:
    """
    Get the configured OTP provider (singleton).

    Built once from Django settings; flows receive it as an argument.
    """
    return TwilioVerifyProvider(TwilioVerifyConfig.from_settings())
