"""SQLAlchemy repositories.

Usage:
    from otp_guard.infrastructure.persistence.repositories import OtpChallengeRepository
"""

from otp_guard.infrastructure.persistence.repositories.otp_challenge_repository import (
    OtpChallengeRepository,
)

__all__ = ["OtpChallengeRepository"]
