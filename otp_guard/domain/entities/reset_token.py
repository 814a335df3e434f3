"""ResetTokenEntry domain entity.

A reset token is a bearer credential minted after a successful
PASSWORD_RESET verification. It lives only in the reset token vault and is
destroyed on first consumption.
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class ResetTokenEntry:
    """Single-use, time-boxed password reset authorization.

    Attributes:
        token: Opaque URL-safe random identifier.
        identity: Verified identity the token authorizes.
        expires_at: Issuance time + reset token TTL.
        is_reissue: True for a grace replacement issued after an identity
            provider failure. Grace tokens are never replaced again.
    """

    token: str
    identity: str
    expires_at: datetime
    is_reissue: bool = False

    def is_expired(self, now: datetime) -> bool:
        """Check expiry (inclusive at expires_at)."""
        return now >= self.expires_at
