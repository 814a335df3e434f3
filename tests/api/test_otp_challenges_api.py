"""API tests for OTP challenge endpoints.

- POST /api/v1/otp-challenges (send a code)
- GET  /api/v1/otp-challenges (resend telemetry)

Architecture:
- Real app, real handlers and OtpEngine over in-memory adapters
- Container factories overridden in tests/api/conftest.py
- RFC 7807 problem details for every failure
"""

from unittest.mock import AsyncMock

import pytest

from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import ChallengeStoreUnavailable

URL = "/api/v1/otp-challenges"
EMAIL = "user@example.com"


def _send(client, email: str = EMAIL, purpose: str = "password_reset", **extra):
    return client.post(URL, json={"email": email, "purpose": purpose, **extra})


def problem_fields(response) -> list[str]:
    return [error["field"] for error in response.json()["errors"]]


@pytest.mark.api
class TestCreateOtpChallenge:
    def test_send_returns_201(self, client, otp_stack):
        response = _send(client, first_name="Ada")

        assert response.status_code == 201
        data = response.json()
        assert data == {
            "send_count": 1,
            "max_sends": 5,
            "window_reset_in_seconds": 7200,
            "message": "Verification code sent. Please check your email.",
        }
        assert "otp" not in data
        code = otp_stack.delivery.last_otp_for(EMAIL, OtpPurpose.PASSWORD_RESET)
        assert code is not None and len(code) == 6
        assert "Hi Ada," in otp_stack.delivery.outbox[-1].email.text_body

    def test_email_is_trimmed_and_keyed_case_insensitively(self, client, otp_stack):
        response = _send(client, email="  User@Example.COM ")

        assert response.status_code == 201
        assert otp_stack.delivery.outbox[-1].recipient == "User@Example.COM"
        status = client.get(URL, params={"email": EMAIL, "purpose": "password_reset"})
        assert status.json()["send_count"] == 1

    def test_cooldown_returns_429_with_retry_after(self, client, clock):
        _send(client)
        clock.at(30)

        response = _send(client)

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "30"
        problem = response.json()
        assert problem["code"] == "otp_cooldown"
        assert problem["retry_after_seconds"] == 30
        assert problem["send_count"] == 1
        assert problem["max_sends"] == 5
        assert problem["instance"] == URL

    def test_send_quota_returns_429(self, client, clock):
        for i in range(5):
            clock.at(i * 61)
            assert _send(client).status_code == 201
        clock.at(305)

        response = _send(client)

        assert response.status_code == 429
        problem = response.json()
        assert problem["code"] == "otp_rate_limit_exceeded"
        assert problem["retry_after_seconds"] == 6895
        assert response.headers["Retry-After"] == "6895"

    def test_purposes_are_independent(self, client):
        assert _send(client, purpose="password_reset").status_code == 201
        assert _send(client, purpose="email_verification").status_code == 201

    def test_invalid_email_returns_422(self, client):
        response = _send(client, email="not-an-email")

        assert response.status_code == 422
        problem = response.json()
        assert problem["title"] == "Validation Failed"
        assert [error["field"] for error in problem["errors"]] == ["email"]

    def test_unknown_purpose_returns_422(self, client):
        response = _send(client, purpose="login")

        assert response.status_code == 422
        assert problem_fields(response) == ["purpose"]

    def test_trace_id_echoed(self, client):
        response = client.post(
            URL,
            json={"email": EMAIL, "purpose": "password_reset"},
            headers={"X-Trace-Id": "trace-abc"},
        )

        assert response.headers["X-Trace-Id"] == "trace-abc"


@pytest.mark.api
class TestGetOtpChallenge:
    def test_status_before_any_send(self, client):
        response = client.get(URL, params={"email": EMAIL, "purpose": "password_reset"})

        assert response.status_code == 200
        assert response.json() == {
            "has_active_otp": False,
            "send_count": 0,
            "max_sends": 5,
            "cooldown_remaining_seconds": 0,
        }

    def test_status_after_send(self, client, clock):
        _send(client)
        clock.at(20)

        response = client.get(
            URL, params={"email": " USER@example.com", "purpose": "password_reset"}
        )

        assert response.json() == {
            "has_active_otp": True,
            "send_count": 1,
            "max_sends": 5,
            "cooldown_remaining_seconds": 40,
        }

    def test_store_unavailable_returns_503(self, client, store, monkeypatch):
        monkeypatch.setattr(
            store,
            "load_read_only",
            AsyncMock(side_effect=ChallengeStoreUnavailable("down")),
        )

        response = client.get(URL, params={"email": EMAIL, "purpose": "password_reset"})

        assert response.status_code == 503
        assert response.json()["code"] == "otp_store_unavailable"
