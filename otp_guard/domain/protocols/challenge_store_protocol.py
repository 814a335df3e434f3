"""ChallengeStore protocol (port) for OTP challenge persistence.

The store is the only place where OTP state lives. Every mutation of a
challenge happens inside `load_for_mutation`, which holds an exclusive
per-(identity, purpose) lock from read to commit. That lock is what makes
cooldown, quota and attempt counting race-free across concurrent requests
and across service instances.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
- The engine never sees sessions, rows or locks directly
"""

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from otp_guard.domain.entities import OtpChallenge
from otp_guard.domain.enums import OtpPurpose


class ChallengeStoreUnavailable(Exception):
    """Raised when a challenge cannot be locked, read or written.

    Covers lock acquisition timeouts and storage errors. When raised from
    `load_for_mutation` nothing has been committed for the call.
    """


class ChallengeStore(Protocol):
    """Protocol for keyed, lockable OTP challenge storage.

    Implementations:
        - OtpChallengeRepository (SQLAlchemy, row lock):
          otp_guard/infrastructure/persistence/repositories/
        - InMemoryChallengeStore (asyncio.Lock, single instance only):
          otp_guard/infrastructure/persistence/memory_challenge_store.py
    """

    def load_for_mutation(
        self, identity: str, purpose: OtpPurpose
    ) -> AbstractAsyncContextManager[OtpChallenge]:
        """Get-or-create a challenge and hold its exclusive lock.

        The yielded entity may be mutated freely. On normal exit of the
        block the entity is written back and committed; if the block raises,
        the transaction is rolled back and nothing is written.

        Args:
            identity: Normalized identity.
            purpose: Challenge purpose.

        Returns:
            Async context manager yielding the locked challenge.

        Raises:
            ChallengeStoreUnavailable: Lock not acquired within the timeout,
                or storage failed during read, write or commit.

        Example:
            async with store.load_for_mutation("a@x.com", purpose) as challenge:
                challenge.clear_otp()
        """
        ...

    async def load_read_only(
        self, identity: str, purpose: OtpPurpose
    ) -> OtpChallenge | None:
        """Read a challenge without locking or creating it.

        Args:
            identity: Normalized identity.
            purpose: Challenge purpose.

        Returns:
            Snapshot of the challenge, or None if no row exists.

        Raises:
            ChallengeStoreUnavailable: Storage failed.
        """
        ...
