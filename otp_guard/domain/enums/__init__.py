"""Domain enums package.

Usage:
    from otp_guard.domain.enums import OtpPurpose
"""

from otp_guard.domain.enums.otp_purpose import OtpPurpose

__all__ = ["OtpPurpose"]
