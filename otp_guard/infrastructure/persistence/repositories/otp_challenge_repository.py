"""OtpChallengeRepository - SQLAlchemy challenge store with row locking.

Each load_for_mutation call runs in its own transaction:

    1. INSERT ... ON CONFLICT (identity, purpose) DO NOTHING
       (concurrent first requests for a key never collide)
    2. SELECT ... FOR UPDATE on the row
       (PostgreSQL: bounded server-side by SET LOCAL lock_timeout)
    3. Caller mutates the domain entity
    4. Entity written back, transaction committed

Any SQLAlchemy error or lock timeout is reported as
ChallengeStoreUnavailable with the transaction rolled back.

SQLite (tests) has no row locks; SQLAlchemy omits FOR UPDATE there and the
database-level write lock serializes writers instead.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import structlog
from sqlalchemy import select, text
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from otp_guard.domain.entities import OtpChallenge
from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import ChallengeStoreUnavailable
from otp_guard.infrastructure.persistence.database import Database
from otp_guard.infrastructure.persistence.models.otp_challenge import (
    OtpChallengeModel,
)

logger = structlog.get_logger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite returns naive datetimes even for timezone-aware columns
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _to_entity(model: OtpChallengeModel) -> OtpChallenge:
    """Convert database model to domain entity."""
    return OtpChallenge(
        id=model.id,
        identity=model.identity,
        purpose=OtpPurpose(model.purpose),
        otp_hash=model.otp_hash,
        otp_expires_at=_as_utc(model.otp_expires_at),
        otp_issued_at=_as_utc(model.otp_issued_at),
        verify_attempts=model.verify_attempts,
        send_count=model.send_count,
        window_start=_as_utc(model.window_start),
    )


def _apply(entity: OtpChallenge, model: OtpChallengeModel) -> None:
    """Copy mutable entity state onto the locked row."""
    model.otp_hash = entity.otp_hash
    model.otp_expires_at = entity.otp_expires_at
    model.otp_issued_at = entity.otp_issued_at
    model.verify_attempts = entity.verify_attempts
    model.send_count = entity.send_count
    model.window_start = entity.window_start


class OtpChallengeRepository:
    """SQLAlchemy implementation of the ChallengeStore protocol.

    Attributes:
        database: Database providing sessions and transactions.
        lock_timeout_seconds: Upper bound on waiting for the row lock.

    Example:
        >>> repo = OtpChallengeRepository(database, lock_timeout_seconds=5.0)
        >>> async with repo.load_for_mutation("a@x.com", OtpPurpose.PASSWORD_RESET) as c:
        ...     c.clear_otp()
    """

    def __init__(self, database: Database, *, lock_timeout_seconds: float = 5.0) -> None:
        """Initialize repository.

        Args:
            database: Database wrapper (one transaction per call).
            lock_timeout_seconds: Row lock wait bound.
        """
        self.database = database
        self.lock_timeout_seconds = lock_timeout_seconds

    @asynccontextmanager
    async def load_for_mutation(
        self, identity: str, purpose: OtpPurpose
    ) -> AsyncIterator[OtpChallenge]:
        """Get-or-create the row, lock it, yield it, write it back on exit.

        Raises:
            ChallengeStoreUnavailable: Lock timeout or storage failure.
        """
        try:
            async with self.database.transaction() as session:
                async with asyncio.timeout(self.lock_timeout_seconds):
                    model = await self._lock_row(session, identity, purpose)
                challenge = _to_entity(model)
                yield challenge
                _apply(challenge, model)
                await session.flush()
        except TimeoutError as e:
            logger.warning(
                "challenge_lock_timeout",
                purpose=purpose.value,
                timeout_seconds=self.lock_timeout_seconds,
            )
            raise ChallengeStoreUnavailable("Timed out waiting for challenge lock") from e
        except SQLAlchemyError as e:
            logger.error(
                "challenge_store_error",
                purpose=purpose.value,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            raise ChallengeStoreUnavailable("Challenge store failure") from e

    async def load_read_only(
        self, identity: str, purpose: OtpPurpose
    ) -> OtpChallenge | None:
        """Read a challenge without locking or creating it.

        Raises:
            ChallengeStoreUnavailable: Storage failure.
        """
        stmt = select(OtpChallengeModel).where(
            OtpChallengeModel.identity == identity,
            OtpChallengeModel.purpose == purpose.value,
        )
        try:
            async with self.database.get_session() as session:
                result = await session.execute(stmt)
                model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise ChallengeStoreUnavailable("Challenge store failure") from e
        return _to_entity(model) if model else None

    async def _lock_row(
        self, session: AsyncSession, identity: str, purpose: OtpPurpose
    ) -> OtpChallengeModel:
        dialect = self.database.dialect_name
        if dialect == "postgresql":
            lock_timeout_ms = int(self.lock_timeout_seconds * 1000)
            await session.execute(text(f"SET LOCAL lock_timeout = '{lock_timeout_ms}ms'"))

        insert = postgresql.insert if dialect == "postgresql" else sqlite.insert
        await session.execute(
            insert(OtpChallengeModel)
            .values(identity=identity, purpose=purpose.value)
            .on_conflict_do_nothing(index_elements=["identity", "purpose"])
        )

        stmt = (
            select(OtpChallengeModel)
            .where(
                OtpChallengeModel.identity == identity,
                OtpChallengeModel.purpose == purpose.value,
            )
            .with_for_update()
        )
        result = await session.execute(stmt)
        return result.scalar_one()
