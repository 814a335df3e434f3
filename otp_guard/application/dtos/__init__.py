"""Application DTOs.

Usage:
    from otp_guard.application.dtos import OtpIssued, OtpVerification
"""

from otp_guard.application.dtos.otp_dtos import (
    OtpIssued,
    OtpSendReceipt,
    OtpVerification,
)

__all__ = ["OtpIssued", "OtpSendReceipt", "OtpVerification"]
