"""Core enums package.

Usage:
    from otp_guard.core.enums import ErrorCode, Environment
"""

from otp_guard.core.enums.environment import Environment
from otp_guard.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
