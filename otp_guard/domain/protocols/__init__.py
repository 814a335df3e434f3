"""Domain protocols (ports) package.

Infrastructure adapters implement these protocols structurally, without
inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from otp_guard.domain.protocols import ChallengeStore, ResetTokenVault
"""

from otp_guard.domain.protocols.challenge_store_protocol import (
    ChallengeStore,
    ChallengeStoreUnavailable,
)
from otp_guard.domain.protocols.identity_provider_protocol import (
    IdentityProviderProtocol,
)
from otp_guard.domain.protocols.logger_protocol import LoggerProtocol
from otp_guard.domain.protocols.otp_code_service_protocol import (
    OtpCodeServiceProtocol,
)
from otp_guard.domain.protocols.otp_delivery_protocol import (
    OtpDeliveryContext,
    OtpDeliveryProtocol,
)
from otp_guard.domain.protocols.reset_token_vault_protocol import ResetTokenVault

__all__ = [
    # Repository protocols
    "ChallengeStore",
    "ChallengeStoreUnavailable",
    "ResetTokenVault",
    # Service protocols
    "IdentityProviderProtocol",
    "LoggerProtocol",
    "OtpCodeServiceProtocol",
    "OtpDeliveryContext",
    "OtpDeliveryProtocol",
]
