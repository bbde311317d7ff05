"""
Users API schemas - Pydantic models for request/response.

Wire keys are camelCase (countryCode, phoneNumber, otpSession).
"""

from datetime import datetime

from pydantic import Field

from apps.accounts.models import User
from apps.core.schemas import CamelSchema
from apps.verification.providers import VerificationCheck, VerificationSession

# --- Request Schemas ---


class RegisterRequest(CamelSchema):
    """Request to register a new user and send them an OTP."""

    name: str = Field(..., description="Display name", examples=["Ada Lovelace"])
    email: str = Field(..., description="Contact email", examples=["ada@example.com"])
    country_code: str = Field(..., description="Dialling prefix", examples=["+44"])
    phone_number: str = Field(..., description="National number", examples=["7700900123"])


class LoginRequest(CamelSchema):
    """Request to send a login OTP to a registered number."""

    country_code: str = Field(..., examples=["+44"])
    phone_number: str = Field(..., examples=["7700900123"])


class VerifyOTPRequest(CamelSchema):
    """Request to check an OTP and open a session."""

    country_code: str = Field(..., examples=["+44"])
    phone_number: str = Field(..., examples=["7700900123"])
    code: str = Field(..., description="The OTP code received via SMS", examples=["123456"])


# --- Response Schemas ---


class UserOut(CamelSchema):
    """Public view of a user. otp_attempts is deliberately absent."""

    id: int
    name: str
    email: str
    phone_number: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserOut":
        return cls(
            id=user.pk,
            name=user.name,
            email=user.email,
            phone_number=user.phone_number,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class VerificationSessionOut(CamelSchema):
    """Provider verification returned after sending a code."""

    sid: str
    to: str
    channel: str
    status: str
    valid: bool
    created_at: datetime | None = None

    @classmethod
    def from_session(cls, session: VerificationSession | VerificationCheck) -> "VerificationSessionOut":
        return cls(
            sid=session.sid,
            to=session.to,
            channel=session.channel,
            status=session.status,
            valid=session.valid,
            created_at=session.created_at,
        )


class RegisterResponse(CamelSchema):
    """Response after registering a user."""

    message: str
    user: UserOut
    otp_session: VerificationSessionOut


class LoginResponse(CamelSchema):
    """Response after sending a login OTP."""

    message: str
    otp_session: str = Field(..., description="Provider verification SID")


class VerifyOTPResponse(CamelSchema):
    """Response after a successful OTP check."""

    message: str
    verification_check: VerificationSessionOut
    token: str


class ErrorDetailResponse(CamelSchema):
    """Error response that also carries the underlying error text."""

    message: str
    error: str
