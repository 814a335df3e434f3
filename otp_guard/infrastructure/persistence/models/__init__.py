"""Database models.

Import all models here so Alembic autogenerate and create_all see them.
"""

from otp_guard.infrastructure.persistence.models.otp_challenge import (
    OtpChallengeModel,
)

__all__ = ["OtpChallengeModel"]
