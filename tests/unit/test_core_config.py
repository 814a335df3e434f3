"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Settings loading from environment variables
- Environment detection
- Validation (positive limits, timeouts, URL normalization)
- Default OTP policy values
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from otp_guard.core.config import Settings, get_settings
from otp_guard.core.enums import Environment


@pytest.fixture
def base_test_env():
    """Minimal required settings; tests merge overrides into this dict."""
    return {
        "DATABASE_URL": "postgresql+asyncpg://test",
        "REDIS_URL": "redis://test",
    }


class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


class TestSettingsDefaults:
    """Test default OTP policy."""

    def test_otp_policy_defaults(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = Settings()

        assert settings.otp_ttl_seconds == 600
        assert settings.otp_cooldown_seconds == 60
        assert settings.otp_max_sends == 5
        assert settings.otp_send_window_seconds == 7200
        assert settings.otp_max_verify_attempts == 5
        assert settings.reset_token_ttl_seconds == 900
        assert settings.reset_token_grace_reissue is True
        assert settings.otp_hash_pepper is None

    def test_backend_defaults(self, base_test_env):
        with patch.dict(os.environ, base_test_env, clear=True):
            settings = Settings()

        assert settings.challenge_store_backend == "database"
        assert settings.reset_token_backend == "redis"
        assert settings.otp_delivery_backend == "stub"
        assert settings.identity_provider_backend == "memory"

    def test_missing_database_url_fails(self):
        with patch.dict(os.environ, {"REDIS_URL": "redis://test"}, clear=True):
            with pytest.raises(ValidationError):
                Settings()


class TestSettingsValidation:
    """Test Settings field validation."""

    def test_env_overrides_policy(self, base_test_env):
        env_values = base_test_env | {
            "OTP_MAX_SENDS": "3",
            "OTP_COOLDOWN_SECONDS": "30",
            "OTP_HASH_PEPPER": "pepper",
        }
        with patch.dict(os.environ, env_values, clear=True):
            settings = Settings()

        assert settings.otp_max_sends == 3
        assert settings.otp_cooldown_seconds == 30
        assert settings.otp_hash_pepper == "pepper"

    @pytest.mark.parametrize(
        "name",
        [
            "OTP_TTL_SECONDS",
            "OTP_COOLDOWN_SECONDS",
            "OTP_MAX_SENDS",
            "OTP_SEND_WINDOW_SECONDS",
            "OTP_MAX_VERIFY_ATTEMPTS",
            "RESET_TOKEN_TTL_SECONDS",
        ],
    )
    def test_policy_limits_must_be_positive(self, base_test_env, name):
        with patch.dict(os.environ, base_test_env | {name: "0"}, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

        assert "OTP policy limits must be positive" in str(exc_info.value)

    def test_timeouts_must_be_positive(self, base_test_env):
        env_values = base_test_env | {"OTP_LOCK_TIMEOUT_SECONDS": "-1"}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError) as exc_info:
                Settings()

        assert "timeouts must be positive" in str(exc_info.value)

    def test_unknown_backend_rejected(self, base_test_env):
        env_values = base_test_env | {"RESET_TOKEN_BACKEND": "memcached"}
        with patch.dict(os.environ, env_values, clear=True):
            with pytest.raises(ValidationError):
                Settings()

    def test_urls_strip_trailing_slash(self, base_test_env):
        env_values = base_test_env | {
            "KEYCLOAK_BASE_URL": "https://auth.example.com/",
            "API_BASE_URL": "https://api.example.com//",
        }
        with patch.dict(os.environ, env_values, clear=True):
            settings = Settings()

        assert settings.keycloak_base_url == "https://auth.example.com"
        assert settings.api_base_url == "https://api.example.com"


class TestEnvironmentDetection:
    """Test convenience properties."""

    @pytest.mark.parametrize(
        ("value", "dev", "testing", "prod"),
        [
            ("development", True, False, False),
            ("testing", False, True, False),
            ("ci", False, False, False),
            ("production", False, False, True),
        ],
    )
    def test_properties(self, base_test_env, value, dev, testing, prod):
        with patch.dict(os.environ, base_test_env | {"ENVIRONMENT": value}, clear=True):
            settings = Settings()

        assert settings.is_development is dev
        assert settings.is_testing is testing
        assert settings.is_production is prod


class TestGetSettings:
    """Test cached singleton."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
