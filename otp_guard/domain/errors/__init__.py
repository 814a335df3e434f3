"""Domain errors package.

Usage:
    from otp_guard.domain.errors import OtpCooldownError, IdentityProviderError
"""

from otp_guard.domain.errors.identity_provider_error import IdentityProviderError
from otp_guard.domain.errors.otp_error import (
    InvalidResetTokenError,
    OtpAttemptsExhaustedError,
    OtpCooldownError,
    OtpError,
    OtpExpiredError,
    OtpInvalidError,
    OtpNotFoundError,
    OtpRateLimitError,
    StoreUnavailableError,
)

__all__ = [
    "IdentityProviderError",
    # OTP errors
    "OtpError",
    "OtpCooldownError",
    "OtpRateLimitError",
    "OtpNotFoundError",
    "OtpExpiredError",
    "OtpInvalidError",
    "OtpAttemptsExhaustedError",
    "StoreUnavailableError",
    "InvalidResetTokenError",
]
