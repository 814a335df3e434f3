"""Domain entities package.

Usage:
    from otp_guard.domain.entities import OtpChallenge, ResetTokenEntry
"""

from otp_guard.domain.entities.otp_challenge import OtpChallenge
from otp_guard.domain.entities.reset_token import ResetTokenEntry

__all__ = ["OtpChallenge", "ResetTokenEntry"]
