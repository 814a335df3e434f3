"""Identity provider adapters."""

from otp_guard.infrastructure.identity.keycloak_identity_provider import (
    KeycloakIdentityProvider,
)
from otp_guard.infrastructure.identity.memory_identity_provider import (
    InMemoryIdentityProvider,
)

__all__ = ["InMemoryIdentityProvider", "KeycloakIdentityProvider"]
