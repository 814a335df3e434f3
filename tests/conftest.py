"""Pytest configuration and shared fixtures.

Environment defaults are set before any otp_guard import so that
Settings (which requires DATABASE_URL and REDIS_URL) can load without a
.env file. Tests build their own adapters; nothing here talks to a real
database or Redis server.

Fixtures:
- clock: controllable time source injected into the engine and vaults
- store / vault / code_service / logger: in-memory engine ports
- engine: OtpEngine wired with the fixtures above
"""

import asyncio
import os
from datetime import UTC, datetime, timedelta
from unittest.mock import Mock

import pytest

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/15")
os.environ.setdefault("CHALLENGE_STORE_BACKEND", "memory")
os.environ.setdefault("RESET_TOKEN_BACKEND", "memory")
os.environ.setdefault("IDENTITY_PROVIDER_BACKEND", "memory")

from otp_guard.application.services import OtpEngine  # noqa: E402
from otp_guard.infrastructure.persistence.memory_challenge_store import (  # noqa: E402
    InMemoryChallengeStore,
)
from otp_guard.infrastructure.reset_tokens import InMemoryResetTokenVault  # noqa: E402
from otp_guard.infrastructure.security import (  # noqa: E402
    OtpCodeService,
    ResetTokenService,
)

T0 = datetime(2026, 1, 15, 12, 0, 0, tzinfo=UTC)


class FakeClock:
    """Mutable time source.

    Usage:
        clock = FakeClock()
        clock.advance(61)
        engine = OtpEngine(..., clock=clock)
    """

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now

    def at(self, seconds: float) -> datetime:
        """Jump to T0 + seconds."""
        self.now = T0 + timedelta(seconds=seconds)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def logger() -> Mock:
    return Mock()


@pytest.fixture
def store() -> InMemoryChallengeStore:
    return InMemoryChallengeStore(lock_timeout_seconds=1.0)


@pytest.fixture
def code_service() -> OtpCodeService:
    return OtpCodeService(pepper="test-pepper")


@pytest.fixture
def reset_token_service(clock: FakeClock) -> ResetTokenService:
    return ResetTokenService(ttl_seconds=900, clock=clock)


@pytest.fixture
def vault(reset_token_service: ResetTokenService) -> InMemoryResetTokenVault:
    return InMemoryResetTokenVault(reset_token_service)


@pytest.fixture
def engine(store, vault, code_service, logger, clock) -> OtpEngine:
    return OtpEngine(
        store=store,
        vault=vault,
        code_service=code_service,
        logger=logger,
        clock=clock,
    )


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers",
        "integration: Integration tests with real adapters (SQLite, fakeredis, mocked HTTP)",
    )
    config.addinivalue_line("markers", "api: HTTP endpoint tests")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
