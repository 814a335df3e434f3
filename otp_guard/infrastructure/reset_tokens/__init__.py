"""Reset token vault backends.

Usage:
    from otp_guard.infrastructure.reset_tokens import RedisResetTokenVault
"""

from otp_guard.infrastructure.reset_tokens.memory_vault import InMemoryResetTokenVault
from otp_guard.infrastructure.reset_tokens.redis_vault import RedisResetTokenVault

__all__ = ["InMemoryResetTokenVault", "RedisResetTokenVault"]
