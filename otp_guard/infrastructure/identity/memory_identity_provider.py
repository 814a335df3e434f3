"""In-memory identity provider (development/testing).

Stores passwords per identity in a dict. Only registered identities can
have their password changed, mirroring a real account store.
"""

from otp_guard.core.enums import ErrorCode
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.errors import IdentityProviderError


class InMemoryIdentityProvider:
    """IdentityProviderProtocol implementation backed by a dict.

    Attributes:
        passwords: Current password per registered identity.
        updates: Identities whose password was changed, in order.
    """

    provider_name = "memory"

    def __init__(self, registered: dict[str, str] | None = None) -> None:
        """Initialize provider.

        Args:
            registered: Initial identity -> password mapping.
        """
        self.passwords: dict[str, str] = dict(registered or {})
        self.updates: list[str] = []

    def register(self, identity: str, password: str) -> None:
        """Add or overwrite an account."""
        self.passwords[identity] = password

    async def set_password(
        self, identity: str, new_password: str
    ) -> Result[None, IdentityProviderError]:
        """Replace the stored password; fails for unknown identities."""
        if identity not in self.passwords:
            return Failure(
                error=IdentityProviderError(
                    code=ErrorCode.IDENTITY_PROVIDER_FAILED,
                    message="No account registered for this email",
                    provider_name=self.provider_name,
                )
            )
        self.passwords[identity] = new_password
        self.updates.append(identity)
        return Success(value=None)
