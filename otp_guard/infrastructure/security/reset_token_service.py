"""Password reset token generation.

Token Strategy:
    - 32 random bytes, URL-safe base64 (43 characters)
    - 15-minute expiration by default
    - Stored only in the reset token vault, destroyed on first use
"""

import secrets
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from otp_guard.core.constants import RESET_TOKEN_BYTES


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ResetTokenService:
    """Reset token generation service shared by the vault backends.

    Usage:
        service = ResetTokenService(ttl_seconds=900)
        token = service.generate_token()
        expires_at = service.calculate_expiration()
    """

    def __init__(
        self,
        ttl_seconds: int = 900,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize reset token service.

        Args:
            ttl_seconds: Token lifetime.
            clock: Returns the current timezone-aware time.
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def now(self) -> datetime:
        """Current time according to the injected clock."""
        return self._clock()

    def generate_token(self) -> str:
        """Generate an unguessable URL-safe token (256 bits of entropy)."""
        return secrets.token_urlsafe(RESET_TOKEN_BYTES)

    def calculate_expiration(self) -> datetime:
        """Expiration timestamp for a token issued now."""
        return self._clock() + timedelta(seconds=self.ttl_seconds)
