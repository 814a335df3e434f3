"""Redis reset token vault (multi-instance).

Storage:
    key:   {prefix}:{token}
    value: JSON {"identity", "expires_at", "is_reissue"}
    TTL:   token lifetime (SET ... EX), so Redis evicts unused tokens

Consumption uses GETDEL, which reads and deletes in one atomic command:
two instances consuming the same token concurrently get the value exactly
once. The stored expires_at is still checked after GETDEL so a token is
rejected at its exact expiry even if Redis has not evicted it yet.
"""

import json
from datetime import datetime

import structlog
from redis.asyncio import Redis
from redis.exceptions import RedisError

from otp_guard.core.constants import RESET_TOKEN_KEY_PREFIX, RESET_TOKEN_LOG_PREFIX_LENGTH
from otp_guard.core.enums import ErrorCode
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.entities import ResetTokenEntry
from otp_guard.domain.errors import StoreUnavailableError
from otp_guard.infrastructure.security import ResetTokenService

logger = structlog.get_logger(__name__)


class RedisResetTokenVault:
    """ResetTokenVault backed by Redis.

    Note: Does NOT inherit from ResetTokenVault (structural typing).
    """

    def __init__(
        self,
        redis_client: Redis,
        token_service: ResetTokenService,
        key_prefix: str = RESET_TOKEN_KEY_PREFIX,
    ) -> None:
        """Initialize vault.

        Args:
            redis_client: Async Redis client.
            token_service: Token generator and expiry clock.
            key_prefix: Namespace for token keys.
        """
        self._redis = redis_client
        self._tokens = token_service
        self._key_prefix = key_prefix

    def _key(self, token: str) -> str:
        return f"{self._key_prefix}:{token}"

    async def issue(
        self, identity: str, *, is_reissue: bool = False
    ) -> Result[str, StoreUnavailableError]:
        """Mint a token and store it with a Redis TTL.

        Returns:
            Success(token), or Failure(StoreUnavailableError) when Redis fails.
        """
        token = self._tokens.generate_token()
        payload = json.dumps(
            {
                "identity": identity,
                "expires_at": self._tokens.calculate_expiration().isoformat(),
                "is_reissue": is_reissue,
            }
        )
        try:
            await self._redis.set(self._key(token), payload, ex=self._tokens.ttl_seconds)
        except RedisError as e:
            logger.error(
                "reset_token_store_failed",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return self._unavailable("Reset token could not be stored. Please try again.")
        return Success(value=token)

    async def consume(
        self, token: str
    ) -> Result[ResetTokenEntry | None, StoreUnavailableError]:
        """Atomically fetch-and-delete the entry (GETDEL).

        Returns:
            Success(entry) if present and unexpired, Success(None) otherwise.
            Failure(StoreUnavailableError) when Redis fails; the token may
            still be live, so the caller may retry.
        """
        try:
            raw = await self._redis.getdel(self._key(token))
        except RedisError as e:
            logger.error(
                "reset_token_consume_failed",
                token_prefix=token[:RESET_TOKEN_LOG_PREFIX_LENGTH],
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return self._unavailable(
                "Reset token could not be checked. Please try again."
            )
        if raw is None:
            return Success(value=None)

        data = json.loads(raw.decode("utf-8") if isinstance(raw, bytes) else raw)
        entry = ResetTokenEntry(
            token=token,
            identity=data["identity"],
            expires_at=datetime.fromisoformat(data["expires_at"]),
            is_reissue=bool(data.get("is_reissue", False)),
        )
        if entry.is_expired(self._tokens.now()):
            return Success(value=None)
        return Success(value=entry)

    def _unavailable(self, message: str) -> Failure[StoreUnavailableError]:
        return Failure(
            error=StoreUnavailableError(
                code=ErrorCode.OTP_STORE_UNAVAILABLE,
                message=message,
            )
        )
