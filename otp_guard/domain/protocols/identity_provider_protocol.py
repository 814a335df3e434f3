"""IdentityProviderProtocol - applies password changes to user accounts.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
"""

from typing import Protocol

from otp_guard.core.result import Result
from otp_guard.domain.errors import IdentityProviderError


class IdentityProviderProtocol(Protocol):
    """Protocol for the external account store.

    Implementations:
        - InMemoryIdentityProvider: otp_guard/infrastructure/identity/ (dev/test)
        - KeycloakIdentityProvider: otp_guard/infrastructure/identity/ (production)
    """

    async def set_password(
        self, identity: str, new_password: str
    ) -> Result[None, IdentityProviderError]:
        """Replace the password of the account registered under identity.

        Args:
            identity: Normalized email of the account.
            new_password: New plaintext password (never logged).

        Returns:
            Success(None): Password changed.
            Failure(IdentityProviderError): Account missing or provider failure.
        """
        ...
