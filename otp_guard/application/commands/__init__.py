"""Application commands.

Usage:
    from otp_guard.application.commands import SendOtp, VerifyOtp, ResetPassword
"""

from otp_guard.application.commands.otp_commands import (
    ResetPassword,
    SendOtp,
    VerifyOtp,
)

__all__ = ["ResetPassword", "SendOtp", "VerifyOtp"]
