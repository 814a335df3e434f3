"""Unit tests for container factories.

Tests cover:
- Backend selection per settings (memory, database, redis, keycloak)
- Singleton caching of infrastructure factories
- Fresh handler instances per call
- Keycloak configuration validation

Note:
    Factories read the module-level settings object, so tests patch
    otp_guard.core.container.settings and clear the lru_cache around each
    call.
"""

from unittest.mock import patch

import fakeredis
import pytest

from otp_guard.core import container
from otp_guard.core.constants import STUB_OUTBOX_MAX_MESSAGES
from otp_guard.core.container import (
    get_challenge_store,
    get_identity_provider,
    get_otp_code_service,
    get_otp_delivery,
    get_otp_engine,
    get_redis,
    get_reset_token_vault,
    get_send_otp_handler,
    get_verify_otp_handler,
)
from otp_guard.infrastructure.identity import (
    InMemoryIdentityProvider,
    KeycloakIdentityProvider,
)
from otp_guard.infrastructure.persistence.memory_challenge_store import (
    InMemoryChallengeStore,
)
from otp_guard.infrastructure.persistence.repositories import OtpChallengeRepository
from otp_guard.infrastructure.reset_tokens import (
    InMemoryResetTokenVault,
    RedisResetTokenVault,
)

_CACHED_FACTORIES = [
    container.get_logger,
    container.get_database,
    container.get_redis,
    container.get_challenge_store,
    container.get_reset_token_vault,
    container.get_otp_code_service,
    container.get_otp_delivery,
    container.get_identity_provider,
    container.get_otp_engine,
]


@pytest.fixture(autouse=True)
def clear_container_caches():
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()
    yield
    for factory in _CACHED_FACTORIES:
        factory.cache_clear()


@pytest.fixture
def mock_settings():
    with patch("otp_guard.core.container.settings") as settings:
        settings.environment = "testing"
        settings.is_development = False
        settings.is_testing = True
        settings.log_level = "INFO"
        settings.database_url = "sqlite+aiosqlite:///:memory:"
        settings.db_echo = False
        settings.redis_url = "redis://localhost:6379/15"
        settings.otp_lock_timeout_seconds = 1.0
        settings.reset_token_ttl_seconds = 900
        settings.otp_hash_pepper = None
        settings.challenge_store_backend = "memory"
        settings.reset_token_backend = "memory"
        settings.identity_provider_backend = "memory"
        settings.app_name = "OTP Guard"
        settings.otp_ttl_seconds = 600
        settings.otp_cooldown_seconds = 60
        settings.otp_max_sends = 5
        settings.otp_send_window_seconds = 7200
        settings.otp_max_verify_attempts = 5
        settings.reset_token_grace_reissue = True
        settings.keycloak_base_url = None
        settings.keycloak_realm = None
        settings.keycloak_admin_client_id = None
        settings.keycloak_admin_client_secret = None
        settings.keycloak_timeout_seconds = 10.0
        yield settings


@pytest.mark.unit
class TestChallengeStoreSelection:
    def test_memory_backend(self, mock_settings):
        store = get_challenge_store()

        assert isinstance(store, InMemoryChallengeStore)

    def test_database_backend(self, mock_settings):
        mock_settings.challenge_store_backend = "database"

        store = get_challenge_store()

        assert isinstance(store, OtpChallengeRepository)
        assert store.lock_timeout_seconds == 1.0

    def test_store_is_singleton(self, mock_settings):
        assert get_challenge_store() is get_challenge_store()


@pytest.mark.unit
class TestResetTokenVaultSelection:
    def test_memory_backend(self, mock_settings):
        assert isinstance(get_reset_token_vault(), InMemoryResetTokenVault)

    def test_redis_backend(self, mock_settings):
        mock_settings.reset_token_backend = "redis"

        with patch("otp_guard.core.container.get_redis") as mock_get_redis:
            mock_get_redis.return_value = fakeredis.aioredis.FakeRedis()
            vault = get_reset_token_vault()

        assert isinstance(vault, RedisResetTokenVault)
        mock_get_redis.assert_called_once()

    def test_redis_client_from_url(self, mock_settings):
        with patch("redis.asyncio.Redis.from_url") as mock_from_url:
            client = get_redis()

        mock_from_url.assert_called_once()
        assert mock_from_url.call_args[0][0] == "redis://localhost:6379/15"
        assert client is mock_from_url.return_value


@pytest.mark.unit
class TestIdentityProviderSelection:
    def test_memory_backend(self, mock_settings):
        assert isinstance(get_identity_provider(), InMemoryIdentityProvider)

    def test_keycloak_backend(self, mock_settings):
        mock_settings.identity_provider_backend = "keycloak"
        mock_settings.keycloak_base_url = "https://auth.example.com"
        mock_settings.keycloak_realm = "users"
        mock_settings.keycloak_admin_client_id = "admin-cli"
        mock_settings.keycloak_admin_client_secret = "s3cret"

        provider = get_identity_provider()

        assert isinstance(provider, KeycloakIdentityProvider)

    def test_keycloak_incomplete_settings_raise(self, mock_settings):
        mock_settings.identity_provider_backend = "keycloak"
        mock_settings.keycloak_base_url = "https://auth.example.com"

        with pytest.raises(ValueError, match="KEYCLOAK_REALM"):
            get_identity_provider()


@pytest.mark.unit
class TestOtpDeliverySelection:
    def test_stub_keeps_outbox_when_testing(self, mock_settings):
        delivery = get_otp_delivery()

        assert delivery.outbox.maxlen == STUB_OUTBOX_MAX_MESSAGES

    def test_stub_keeps_no_outbox_in_production(self, mock_settings):
        mock_settings.is_testing = False

        delivery = get_otp_delivery()

        assert delivery.outbox.maxlen == 0


@pytest.mark.unit
class TestEngineAndHandlers:
    def test_code_service_uses_pepper(self, mock_settings):
        mock_settings.otp_hash_pepper = "pepper"

        service = get_otp_code_service()

        assert service.hash_code("123456") != type(service)().hash_code("123456")

    def test_engine_wired_from_settings(self, mock_settings):
        mock_settings.otp_max_sends = 3

        engine = get_otp_engine()

        assert engine.max_sends == 3
        assert engine.otp_ttl_seconds == 600
        assert get_otp_engine() is engine

    def test_handlers_are_request_scoped(self, mock_settings):
        first = get_send_otp_handler()
        second = get_send_otp_handler()

        assert first is not second
        assert get_verify_otp_handler() is not get_verify_otp_handler()
