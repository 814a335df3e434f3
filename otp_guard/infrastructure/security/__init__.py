"""Security services (OTP digests, reset token generation)."""

from otp_guard.infrastructure.security.otp_code_service import OtpCodeService
from otp_guard.infrastructure.security.reset_token_service import ResetTokenService

__all__ = ["OtpCodeService", "ResetTokenService"]
