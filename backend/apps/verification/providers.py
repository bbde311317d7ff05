"""
OTP provider interface and the values it returns.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import Protocol


class VerificationProviderError(Exception):
    """Raised when the verification service cannot send or check a code."""

    pass


class VerificationStatus(StrEnum):
    """
    Verification statuses reported by the provider.

    The provider owns the lifecycle (pending -> approved | canceled |
    max_attempts_reached | expired ...). We only read the status it reports.
    """

    PENDING = "pending"
    APPROVED = "approved"
    CANCELED = "canceled"
    MAX_ATTEMPTS_REACHED = "max_attempts_reached"
    EXPIRED = "expired"
    FAILED = "failed"
    DELETED = "deleted"


@dataclass(frozen=True)
class VerificationSession:
    """A verification started by sending a code to a phone number."""

    sid: str
    to: str
    channel: str
    status: str
    valid: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class VerificationCheck:
    """Outcome of checking a submitted code."""

    sid: str
    to: str
    channel: str
    status: str
    valid: bool = False
    created_at: datetime | None = None

    @property
    def approved(self) -> bool:
        return self.status == VerificationStatus.APPROVED


class OTPProvider(Protocol):
    """Sends one-time codes by SMS and checks codes submitted back."""

    def send(self, phone_number: str) -> VerificationSession:
        """
        Start a verification by sending a code to ``phone_number``.

        Raises:
            VerificationProviderError: If the code could not be sent
        """
        ...

    def check(self, phone_number: str, code: str) -> VerificationCheck:
        """
        Check ``code`` against the pending verification for ``phone_number``.

        Raises:
            VerificationProviderError: If the provider rejected the request
        """
        ...
