"""Persistence adapters.

Usage:
    from otp_guard.infrastructure.persistence import Database
"""

from otp_guard.infrastructure.persistence.base import BaseModel, BaseMutableModel
from otp_guard.infrastructure.persistence.database import Database

__all__ = ["BaseModel", "BaseMutableModel", "Database"]
