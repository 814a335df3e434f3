"""ResetTokenVault protocol (port) for single-use reset tokens.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
"""

from typing import Protocol

from otp_guard.core.result import Result
from otp_guard.domain.entities import ResetTokenEntry
from otp_guard.domain.errors import StoreUnavailableError


class ResetTokenVault(Protocol):
    """Protocol for ephemeral reset token storage.

    Consumption is atomic and destructive: two concurrent consumes of the
    same token yield the entry exactly once, and a consumed token is gone
    even if the caller's downstream work fails.

    Implementations:
        - InMemoryResetTokenVault: single instance only
        - RedisResetTokenVault: multi-instance (SET EX / GETDEL)
    """

    async def issue(
        self, identity: str, *, is_reissue: bool = False
    ) -> Result[str, StoreUnavailableError]:
        """Mint and store a new token for identity.

        Args:
            identity: Verified identity the token authorizes.
            is_reissue: Mark the token as a grace replacement.

        Returns:
            Success(token): Opaque URL-safe token.
            Failure(StoreUnavailableError): Backend unreachable.
        """
        ...

    async def consume(
        self, token: str
    ) -> Result[ResetTokenEntry | None, StoreUnavailableError]:
        """Atomically remove and return the entry for token.

        Args:
            token: Token presented by the caller.

        Returns:
            Success(entry): Token existed and had not expired.
            Success(None): Unknown, expired or already consumed.
            Failure(StoreUnavailableError): Backend unreachable; the token
                may still be live.
        """
        ...
