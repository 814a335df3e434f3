"""In-memory challenge store (single instance only).

Holds challenges in a dict guarded by one asyncio.Lock per
(identity, purpose). Locks only serialize tasks inside one process, so
this store is valid for development, tests and single-instance
deployments. Multi-instance deployments use OtpChallengeRepository.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import replace

import structlog
from uuid_extensions import uuid7

from otp_guard.domain.entities import OtpChallenge
from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import ChallengeStoreUnavailable

logger = structlog.get_logger(__name__)

type _Key = tuple[str, OtpPurpose]


class InMemoryChallengeStore:
    """ChallengeStore backed by a dict and per-key asyncio locks.

    The block of load_for_mutation works on a copy of the stored entity;
    the copy replaces the stored entity only when the block exits normally,
    so an exception leaves the previous state untouched.
    """

    def __init__(self, *, lock_timeout_seconds: float = 5.0) -> None:
        self.lock_timeout_seconds = lock_timeout_seconds
        self._challenges: dict[_Key, OtpChallenge] = {}
        self._locks: dict[_Key, asyncio.Lock] = {}

    @asynccontextmanager
    async def load_for_mutation(
        self, identity: str, purpose: OtpPurpose
    ) -> AsyncIterator[OtpChallenge]:
        """Get-or-create, lock, yield a working copy, store it on normal exit.

        Raises:
            ChallengeStoreUnavailable: Lock not acquired within the timeout.
        """
        key = (identity, purpose)
        lock = self._locks.setdefault(key, asyncio.Lock())
        try:
            async with asyncio.timeout(self.lock_timeout_seconds):
                await lock.acquire()
        except TimeoutError as e:
            logger.warning(
                "challenge_lock_timeout",
                purpose=purpose.value,
                timeout_seconds=self.lock_timeout_seconds,
            )
            raise ChallengeStoreUnavailable("Timed out waiting for challenge lock") from e

        try:
            stored = self._challenges.get(key)
            if stored is None:
                stored = OtpChallenge(id=uuid7(), identity=identity, purpose=purpose)
            working = replace(stored)
            yield working
            self._challenges[key] = working
        finally:
            lock.release()

    async def load_read_only(
        self, identity: str, purpose: OtpPurpose
    ) -> OtpChallenge | None:
        """Return a snapshot of the challenge without locking or creating it."""
        stored = self._challenges.get((identity, purpose))
        return replace(stored) if stored is not None else None
