# mypy: disable-error-code="return-value"
"""Dependency factories (composition root).

Application-scoped singletons are cached with lru_cache; handlers are
cheap and created per request. Adapter selection by configuration happens
here and nowhere else.

Usage:
    # Presentation Layer (FastAPI Depends)
    handler: SendOtpHandler = Depends(get_send_otp_handler)

    # Tests
    app.dependency_overrides[get_send_otp_handler] = lambda: handler
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from otp_guard.core.config import settings
from otp_guard.core.enums import Environment

if TYPE_CHECKING:
    from redis.asyncio import Redis

    from otp_guard.application.commands.handlers.reset_password_handler import (
        ResetPasswordHandler,
    )
    from otp_guard.application.commands.handlers.send_otp_handler import (
        SendOtpHandler,
    )
    from otp_guard.application.commands.handlers.verify_otp_handler import (
        VerifyOtpHandler,
    )
    from otp_guard.application.services.otp_engine import OtpEngine
    from otp_guard.domain.protocols import (
        ChallengeStore,
        IdentityProviderProtocol,
        LoggerProtocol,
        OtpCodeServiceProtocol,
        OtpDeliveryProtocol,
        ResetTokenVault,
    )
    from otp_guard.infrastructure.persistence.database import Database


# ============================================================================
# Infrastructure Singletons
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from otp_guard.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.environment != Environment.DEVELOPMENT
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_database() -> "Database":
    """Get database singleton (connection pool shared app-wide)."""
    from otp_guard.infrastructure.persistence.database import Database

    return Database(database_url=settings.database_url, echo=settings.db_echo)


@lru_cache()
def get_redis() -> "Redis":
    """Get Redis client singleton (connection pool shared app-wide)."""
    from redis.asyncio import Redis

    return Redis.from_url(
        settings.redis_url,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )


@lru_cache()
def get_challenge_store() -> "ChallengeStore":
    """Get challenge store selected by CHALLENGE_STORE_BACKEND.

    - 'database': OtpChallengeRepository (row locks, multi-instance)
    - 'memory': InMemoryChallengeStore (single instance only)
    """
    if settings.challenge_store_backend == "memory":
        from otp_guard.infrastructure.persistence.memory_challenge_store import (
            InMemoryChallengeStore,
        )

        return InMemoryChallengeStore(
            lock_timeout_seconds=settings.otp_lock_timeout_seconds
        )

    from otp_guard.infrastructure.persistence.repositories import (
        OtpChallengeRepository,
    )

    return OtpChallengeRepository(
        get_database(), lock_timeout_seconds=settings.otp_lock_timeout_seconds
    )


@lru_cache()
def get_reset_token_vault() -> "ResetTokenVault":
    """Get reset token vault selected by RESET_TOKEN_BACKEND.

    - 'redis': RedisResetTokenVault (GETDEL, multi-instance)
    - 'memory': InMemoryResetTokenVault (single instance only)
    """
    from otp_guard.infrastructure.security import ResetTokenService

    token_service = ResetTokenService(ttl_seconds=settings.reset_token_ttl_seconds)

    if settings.reset_token_backend == "memory":
        from otp_guard.infrastructure.reset_tokens import InMemoryResetTokenVault

        return InMemoryResetTokenVault(token_service)

    from otp_guard.infrastructure.reset_tokens import RedisResetTokenVault

    return RedisResetTokenVault(get_redis(), token_service)


@lru_cache()
def get_otp_code_service() -> "OtpCodeServiceProtocol":
    """Get OTP code service (HMAC digests when a pepper is configured)."""
    from otp_guard.infrastructure.security import OtpCodeService

    return OtpCodeService(pepper=settings.otp_hash_pepper)


@lru_cache()
def get_otp_delivery() -> "OtpDeliveryProtocol":
    """Get OTP delivery adapter selected by OTP_DELIVERY_BACKEND.

    The stub only keeps an outbox in development and testing.
    """
    from otp_guard.core.constants import STUB_OUTBOX_MAX_MESSAGES
    from otp_guard.infrastructure.email import StubOtpDelivery

    keep_outbox = settings.is_development or settings.is_testing
    return StubOtpDelivery(
        app_name=settings.app_name,
        outbox_size=STUB_OUTBOX_MAX_MESSAGES if keep_outbox else 0,
    )


@lru_cache()
def get_identity_provider() -> "IdentityProviderProtocol":
    """Get identity provider selected by IDENTITY_PROVIDER_BACKEND.

    Raises:
        ValueError: If 'keycloak' is selected without complete Keycloak settings.
    """
    if settings.identity_provider_backend == "keycloak":
        from otp_guard.infrastructure.identity import KeycloakIdentityProvider

        if not (
            settings.keycloak_base_url
            and settings.keycloak_realm
            and settings.keycloak_admin_client_id
            and settings.keycloak_admin_client_secret
        ):
            raise ValueError(
                "IDENTITY_PROVIDER_BACKEND=keycloak requires KEYCLOAK_BASE_URL, "
                "KEYCLOAK_REALM, KEYCLOAK_ADMIN_CLIENT_ID and "
                "KEYCLOAK_ADMIN_CLIENT_SECRET"
            )
        return KeycloakIdentityProvider(
            base_url=settings.keycloak_base_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_admin_client_id,
            client_secret=settings.keycloak_admin_client_secret,
            timeout=settings.keycloak_timeout_seconds,
        )

    from otp_guard.infrastructure.identity import InMemoryIdentityProvider

    return InMemoryIdentityProvider()


# ============================================================================
# Application Services
# ============================================================================


@lru_cache()
def get_otp_engine() -> "OtpEngine":
    """Get OTP engine singleton wired from settings."""
    from otp_guard.application.services.otp_engine import OtpEngine

    return OtpEngine(
        store=get_challenge_store(),
        vault=get_reset_token_vault(),
        code_service=get_otp_code_service(),
        logger=get_logger(),
        otp_ttl_seconds=settings.otp_ttl_seconds,
        cooldown_seconds=settings.otp_cooldown_seconds,
        max_sends=settings.otp_max_sends,
        send_window_seconds=settings.otp_send_window_seconds,
        max_verify_attempts=settings.otp_max_verify_attempts,
    )


# ============================================================================
# Handler Factories (request-scoped)
# ============================================================================


def get_send_otp_handler() -> "SendOtpHandler":
    """Get SendOtp command handler."""
    from otp_guard.application.commands.handlers.send_otp_handler import (
        SendOtpHandler,
    )

    return SendOtpHandler(
        engine=get_otp_engine(),
        delivery=get_otp_delivery(),
        logger=get_logger(),
    )


def get_verify_otp_handler() -> "VerifyOtpHandler":
    """Get VerifyOtp command handler."""
    from otp_guard.application.commands.handlers.verify_otp_handler import (
        VerifyOtpHandler,
    )

    return VerifyOtpHandler(engine=get_otp_engine())


def get_reset_password_handler() -> "ResetPasswordHandler":
    """Get ResetPassword command handler."""
    from otp_guard.application.commands.handlers.reset_password_handler import (
        ResetPasswordHandler,
    )

    return ResetPasswordHandler(
        engine=get_otp_engine(),
        identity_provider=get_identity_provider(),
        logger=get_logger(),
        grace_reissue=settings.reset_token_grace_reissue,
    )
