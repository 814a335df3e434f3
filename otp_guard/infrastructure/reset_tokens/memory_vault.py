"""In-memory reset token vault (single instance only).

dict.pop is atomic with respect to other asyncio tasks (no await between
lookup and removal), which gives exactly-once consumption inside one
process.
"""

import structlog

from otp_guard.core.result import Result, Success
from otp_guard.domain.entities import ResetTokenEntry
from otp_guard.domain.errors import StoreUnavailableError
from otp_guard.infrastructure.security import ResetTokenService

logger = structlog.get_logger(__name__)


class InMemoryResetTokenVault:
    """ResetTokenVault backed by a process-local dict."""

    def __init__(self, token_service: ResetTokenService) -> None:
        """Initialize vault.

        Args:
            token_service: Token generator and expiry clock.
        """
        self._tokens = token_service
        self._entries: dict[str, ResetTokenEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    async def issue(
        self, identity: str, *, is_reissue: bool = False
    ) -> Result[str, StoreUnavailableError]:
        """Mint a token for identity (never fails for this backend)."""
        self._purge_expired()
        token = self._tokens.generate_token()
        self._entries[token] = ResetTokenEntry(
            token=token,
            identity=identity,
            expires_at=self._tokens.calculate_expiration(),
            is_reissue=is_reissue,
        )
        return Success(value=token)

    async def consume(
        self, token: str
    ) -> Result[ResetTokenEntry | None, StoreUnavailableError]:
        """Remove and return the entry; Success(None) if absent or expired."""
        entry = self._entries.pop(token, None)
        if entry is None or entry.is_expired(self._tokens.now()):
            return Success(value=None)
        return Success(value=entry)

    def _purge_expired(self) -> None:
        now = self._tokens.now()
        expired = [token for token, entry in self._entries.items() if entry.is_expired(now)]
        for token in expired:
            del self._entries[token]
        if expired:
            logger.debug("reset_tokens_purged", count=len(expired))
