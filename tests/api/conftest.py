"""Fixtures for HTTP endpoint tests.

The real handlers and OtpEngine run over in-memory adapters with a
controllable clock; only the container factories are overridden.
"""

from dataclasses import dataclass
from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from otp_guard.application.commands.handlers.reset_password_handler import (
    ResetPasswordHandler,
)
from otp_guard.application.commands.handlers.send_otp_handler import SendOtpHandler
from otp_guard.application.commands.handlers.verify_otp_handler import (
    VerifyOtpHandler,
)
from otp_guard.application.services import OtpEngine
from otp_guard.core.container import (
    get_otp_engine,
    get_reset_password_handler,
    get_send_otp_handler,
    get_verify_otp_handler,
)
from otp_guard.infrastructure.email import StubOtpDelivery
from otp_guard.infrastructure.identity import InMemoryIdentityProvider
from otp_guard.main import app


@dataclass
class OtpStack:
    """Adapters behind the overridden dependencies."""

    engine: OtpEngine
    delivery: StubOtpDelivery
    identity_provider: InMemoryIdentityProvider


@pytest.fixture
def otp_stack(store, vault, code_service, clock) -> OtpStack:
    engine = OtpEngine(
        store=store,
        vault=vault,
        code_service=code_service,
        logger=Mock(),
        clock=clock,
    )
    identity_provider = InMemoryIdentityProvider()
    identity_provider.register("user@example.com", "Old-pass-123")
    return OtpStack(
        engine=engine,
        delivery=StubOtpDelivery(),
        identity_provider=identity_provider,
    )


@pytest.fixture
def client(otp_stack: OtpStack):
    app.dependency_overrides[get_otp_engine] = lambda: otp_stack.engine
    app.dependency_overrides[get_send_otp_handler] = lambda: SendOtpHandler(
        engine=otp_stack.engine, delivery=otp_stack.delivery, logger=Mock()
    )
    app.dependency_overrides[get_verify_otp_handler] = lambda: VerifyOtpHandler(
        engine=otp_stack.engine
    )
    app.dependency_overrides[get_reset_password_handler] = lambda: ResetPasswordHandler(
        engine=otp_stack.engine,
        identity_provider=otp_stack.identity_provider,
        logger=Mock(),
    )
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()
