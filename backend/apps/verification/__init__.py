"""
Phone verification providers.

The auth flows depend only on the OTPProvider protocol; the Twilio Verify
implementation lives in twilio_client.
"""

from apps.verification.providers import (
    OTPProvider,
    VerificationCheck,
    VerificationProviderError,
    VerificationSession,
    VerificationStatus,
)

__all__ = [
    "OTPProvider",
    "VerificationCheck",
    "VerificationProviderError",
    "VerificationSession",
    "VerificationStatus",
]
