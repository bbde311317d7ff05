"""
Auth flow services - registration, login and OTP verification.

Each flow returns an AuthResult instead of raising; the API layer maps the
result kind to an HTTP status in one place. Provider, store and signing
failures become AuthResultKind.INTERNAL, and so does any unexpected
exception, which is logged with its traceback.

Known limitations:
- Registration checks for an existing phone number and then creates the
  record. Two concurrent registrations for the same number can both pass
  the check and both create records.
- If the record cannot be stored after the SMS was sent, the SMS is not
  reclaimed.
- otp_attempts is initialised but not incremented or enforced here.
"""

from dataclasses import dataclass
from enum import StrEnum

from django.db import DatabaseError

from apps.accounts.models import User
from apps.accounts.tokens import SessionTokenError, issue_session_token
from apps.core.logging import get_logger
from apps.core.utils import phone_last4
from apps.verification.providers import (
    OTPProvider,
    VerificationCheck,
    VerificationProviderError,
    VerificationSession,
)

logger = get_logger(__name__)

_INTERNAL_ERRORS = (VerificationProviderError, SessionTokenError, DatabaseError)


class AuthResultKind(StrEnum):
    """Outcome of an auth flow."""

    OK = "ok"
    CONFLICT = "conflict"
    NOT_FOUND = "not_found"
    INVALID_CODE = "invalid_code"
    INTERNAL = "internal"


@dataclass(frozen=True)
class AuthResult:
    """Result of an auth flow. Only the fields relevant to the flow are set."""

    kind: AuthResultKind
    user: User | None = None
    session: VerificationSession | None = None
    check: VerificationCheck | None = None
    token: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.kind == AuthResultKind.OK


def format_phone_number(country_code: str, phone_number: str) -> str:
    """Build the phone key used for lookups: country code followed by the national number."""
    return f"{country_code}{phone_number}"


def _phone_exists(phone_number: str) -> bool:
    return User.objects.filter(phone_number=phone_number).exists()


def register_user(
    *,
    name: str,
    email: str,
    country_code: str,
    phone_number: str,
    provider: OTPProvider,
) -> AuthResult:
    """
    Register a user and send them an OTP.

    Order: uniqueness check, SMS send, record creation. A failed send leaves
    no record behind.

    Returns:
        OK with user and session, CONFLICT if the number is taken, or INTERNAL
    """
    phone = format_phone_number(country_code, phone_number)

    try:
        if _phone_exists(phone):
            logger.info("registration_conflict", phone_last4=phone_last4(phone))
            return AuthResult(AuthResultKind.CONFLICT)

        session = provider.send(phone)

        user = User.objects.create(
            name=name,
            email=email,
            phone_number=phone,
            otp_attempts=0,
        )
    except _INTERNAL_ERRORS as e:
        logger.error("registration_failed", phone_last4=phone_last4(phone), error=str(e))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))
    except Exception as e:
        logger.exception("registration_unexpected_error", phone_last4=phone_last4(phone))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))

    logger.info(
        "user_registered",
        user_id=user.pk,
        phone_last4=phone_last4(phone),
        verification_sid=session.sid,
    )

    return AuthResult(AuthResultKind.OK, user=user, session=session)


def start_login(*, country_code: str, phone_number: str, provider: OTPProvider) -> AuthResult:
    """
    Send a login OTP to a registered phone number.

    No SMS is sent for unknown numbers.

    Returns:
        OK with session, NOT_FOUND for an unknown number, or INTERNAL
    """
    phone = format_phone_number(country_code, phone_number)

    try:
        if not _phone_exists(phone):
            logger.info("login_unknown_phone", phone_last4=phone_last4(phone))
            return AuthResult(AuthResultKind.NOT_FOUND)

        session = provider.send(phone)
    except _INTERNAL_ERRORS as e:
        logger.error("login_otp_failed", phone_last4=phone_last4(phone), error=str(e))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))
    except Exception as e:
        logger.exception("login_otp_unexpected_error", phone_last4=phone_last4(phone))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))

    logger.info("login_otp_sent", phone_last4=phone_last4(phone), verification_sid=session.sid)

    return AuthResult(AuthResultKind.OK, session=session)


def verify_login_otp(
    *,
    country_code: str,
    phone_number: str,
    code: str,
    provider: OTPProvider,
) -> AuthResult:
    """
    Check an OTP with the provider and issue a session token on approval.

    The provider tracks the verification lifecycle; only its reported status
    is used here. A token is issued for any approved number, registered or not.

    Returns:
        OK with check and token, INVALID_CODE when not approved, or INTERNAL
    """
    phone = format_phone_number(country_code, phone_number)

    try:
        check = provider.check(phone, code)

        if not check.approved:
            logger.info(
                "otp_not_approved",
                phone_last4=phone_last4(phone),
                status=check.status,
            )
            return AuthResult(AuthResultKind.INVALID_CODE, check=check)

        token = issue_session_token(phone)
    except _INTERNAL_ERRORS as e:
        logger.error("otp_verification_failed", phone_last4=phone_last4(phone), error=str(e))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))
    except Exception as e:
        logger.exception("otp_verification_unexpected_error", phone_last4=phone_last4(phone))
        return AuthResult(AuthResultKind.INTERNAL, error=str(e))

    logger.info("otp_verified", phone_last4=phone_last4(phone), verification_sid=check.sid)

    return AuthResult(AuthResultKind.OK, check=check, token=token)
