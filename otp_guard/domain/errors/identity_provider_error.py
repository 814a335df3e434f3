"""Identity provider error type.

Returned by IdentityProviderProtocol implementations when a password
change could not be applied (provider unreachable, admin authentication
rejected, user not found, non-2xx response).

Usage:
    from otp_guard.domain.errors import IdentityProviderError

    return Failure(
        IdentityProviderError(
            code=ErrorCode.IDENTITY_PROVIDER_FAILED,
            message="Identity provider request timed out",
            provider_name="keycloak",
        )
    )
"""

from dataclasses import dataclass

from otp_guard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class IdentityProviderError(DomainError):
    """Password change could not be applied at the identity provider.

    Attributes:
        code: Domain ErrorCode (IDENTITY_PROVIDER_FAILED).
        message: Human-readable message.
        provider_name: Identity provider name (keycloak, memory).
        details: Additional context. The password reset flow stores a
            grace replacement token under "reset_token".
    """

    provider_name: str
