"""Unit tests for ErrorResponseBuilder.

Tests cover:
- ErrorCode to HTTP status mapping for every OTP failure
- Extension members (retry, quota, attempts, grace reset token)
- Retry-After and X-Trace-Id headers
"""

import json
from unittest.mock import MagicMock

import pytest

from otp_guard.core.config import settings
from otp_guard.core.enums import ErrorCode
from otp_guard.domain.errors import (
    IdentityProviderError,
    InvalidResetTokenError,
    OtpAttemptsExhaustedError,
    OtpCooldownError,
    OtpExpiredError,
    OtpInvalidError,
    OtpNotFoundError,
    OtpRateLimitError,
    StoreUnavailableError,
)
from otp_guard.presentation.api.middleware.trace_middleware import trace_id_context
from otp_guard.presentation.routers.api.v1.errors import ErrorResponseBuilder


def _request(path: str = "/api/v1/otp-challenges") -> MagicMock:
    request = MagicMock()
    request.url.path = path
    return request


def _body(response) -> dict:
    return json.loads(bytes(response.body).decode())


@pytest.fixture
def trace_id():
    token = trace_id_context.set("trace-123")
    yield "trace-123"
    trace_id_context.reset(token)


@pytest.mark.unit
class TestStatusMapping:
    @pytest.mark.parametrize(
        ("error", "expected_status"),
        [
            (OtpNotFoundError(code=ErrorCode.OTP_NOT_FOUND, message="m"), 404),
            (OtpExpiredError(code=ErrorCode.OTP_EXPIRED, message="m"), 410),
            (OtpAttemptsExhaustedError(code=ErrorCode.OTP_ATTEMPTS_EXHAUSTED, message="m"), 423),
            (StoreUnavailableError(code=ErrorCode.OTP_STORE_UNAVAILABLE, message="m"), 503),
            (InvalidResetTokenError(code=ErrorCode.RESET_TOKEN_INVALID, message="m"), 400),
            (
                IdentityProviderError(
                    code=ErrorCode.IDENTITY_PROVIDER_FAILED,
                    message="m",
                    provider_name="keycloak",
                ),
                502,
            ),
        ],
    )
    def test_status_per_error(self, error, expected_status):
        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert response.status_code == expected_status
        body = _body(response)
        assert body["status"] == expected_status
        assert body["code"] == error.code.value
        assert body["detail"] == "m"

    def test_problem_type_uri(self):
        error = OtpExpiredError(code=ErrorCode.OTP_EXPIRED, message="gone")

        body = _body(ErrorResponseBuilder.from_domain_error(error, _request()))

        assert body["type"] == f"{settings.api_base_url}/errors/otp-expired"
        assert body["title"] == "OTP Expired"
        assert body["instance"] == "/api/v1/otp-challenges"

    @pytest.mark.parametrize("code", list(ErrorCode))
    def test_every_code_is_mapped(self, code):
        assert ErrorResponseBuilder.get_status_code(code) != 500


@pytest.mark.unit
class TestExtensionMembers:
    def test_cooldown_sets_retry_after(self):
        error = OtpCooldownError(
            code=ErrorCode.OTP_COOLDOWN,
            message="wait",
            retry_after_seconds=30,
            send_count=1,
            max_sends=5,
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "30"
        body = _body(response)
        assert body["retry_after_seconds"] == 30
        assert body["send_count"] == 1
        assert body["max_sends"] == 5

    def test_rate_limit_sets_retry_after(self):
        error = OtpRateLimitError(
            code=ErrorCode.OTP_RATE_LIMIT_EXCEEDED,
            message="quota",
            retry_after_seconds=6895,
            send_count=5,
            max_sends=5,
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "6895"
        assert _body(response)["title"] == "OTP Send Limit Reached"

    def test_invalid_sets_attempts(self):
        error = OtpInvalidError(
            code=ErrorCode.OTP_INVALID,
            message="wrong",
            attempts_remaining=4,
            max_attempts=5,
        )

        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert response.status_code == 400
        assert "Retry-After" not in response.headers
        body = _body(response)
        assert body["attempts_remaining"] == 4
        assert body["max_attempts"] == 5

    def test_identity_provider_grace_token(self):
        error = IdentityProviderError(
            code=ErrorCode.IDENTITY_PROVIDER_FAILED,
            message="down",
            provider_name="keycloak",
            details={"reset_token": "replacement"},
        )

        body = _body(ErrorResponseBuilder.from_domain_error(error, _request()))

        assert body["reset_token"] == "replacement"

    def test_absent_members_are_omitted(self):
        error = OtpNotFoundError(code=ErrorCode.OTP_NOT_FOUND, message="none")

        body = _body(ErrorResponseBuilder.from_domain_error(error, _request()))

        for key in ("retry_after_seconds", "attempts_remaining", "reset_token", "errors"):
            assert key not in body


@pytest.mark.unit
class TestTraceId:
    def test_trace_id_in_body_and_header(self, trace_id):
        error = OtpNotFoundError(code=ErrorCode.OTP_NOT_FOUND, message="none")

        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert response.headers["X-Trace-Id"] == trace_id
        assert _body(response)["trace_id"] == trace_id

    def test_no_trace_id_outside_request(self):
        error = OtpNotFoundError(code=ErrorCode.OTP_NOT_FOUND, message="none")

        response = ErrorResponseBuilder.from_domain_error(error, _request())

        assert "X-Trace-Id" not in response.headers
        assert "trace_id" not in _body(response)
