"""Integration tests for KeycloakIdentityProvider with mocked HTTP (pytest-httpx).

Tests cover:
- Full password change flow (token, user search, reset-password)
- Non-2xx responses at each step
- Unknown user and malformed user search responses
- Timeouts and connection errors
"""

import json

import httpx
import pytest
from pytest_httpx import HTTPXMock

from otp_guard.core.enums import ErrorCode
from otp_guard.core.result import Failure, Success
from otp_guard.infrastructure.identity import KeycloakIdentityProvider

BASE_URL = "https://auth.example.com"
REALM = "customers"
TOKEN_URL = f"{BASE_URL}/realms/{REALM}/protocol/openid-connect/token"
USERS_URL = f"{BASE_URL}/admin/realms/{REALM}/users"
EMAIL = "user@example.com"
USER_ID = "7f3c2a10-1111-2222-3333-444455556666"


@pytest.fixture
def provider() -> KeycloakIdentityProvider:
    return KeycloakIdentityProvider(
        base_url=f"{BASE_URL}/",
        realm=REALM,
        client_id="otp-guard-admin",
        client_secret="s3cret",
        timeout=2.0,
    )


def _search_url(email: str = EMAIL) -> httpx.URL:
    return httpx.URL(USERS_URL, params={"email": email, "exact": "true"})


def _mock_token(httpx_mock: HTTPXMock) -> None:
    httpx_mock.add_response(
        method="POST", url=TOKEN_URL, json={"access_token": "admin-token"}
    )


@pytest.mark.integration
class TestKeycloakSetPassword:
    async def test_success(self, provider, httpx_mock: HTTPXMock):
        _mock_token(httpx_mock)
        httpx_mock.add_response(method="GET", url=_search_url(), json=[{"id": USER_ID}])
        httpx_mock.add_response(
            method="PUT", url=f"{USERS_URL}/{USER_ID}/reset-password", status_code=204
        )

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert result == Success(value=None)

        token_request, search_request, reset_request = httpx_mock.get_requests()
        assert b"grant_type=client_credentials" in token_request.content
        assert search_request.headers["Authorization"] == "Bearer admin-token"
        assert json.loads(reset_request.content) == {
            "type": "password",
            "value": "N3w-password!",
            "temporary": False,
        }

    async def test_admin_token_rejected(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_response(
            method="POST", url=TOKEN_URL, status_code=401, text="unauthorized_client"
        )

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IDENTITY_PROVIDER_FAILED
        assert result.error.provider_name == "keycloak"
        assert result.error.details == {
            "status_code": 401,
            "response_body": "unauthorized_client",
        }

    async def test_token_response_without_access_token(
        self, provider, httpx_mock: HTTPXMock
    ):
        httpx_mock.add_response(method="POST", url=TOKEN_URL, json={"error": "nope"})

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert "access_token" in result.error.message

    async def test_unknown_user(self, provider, httpx_mock: HTTPXMock):
        _mock_token(httpx_mock)
        httpx_mock.add_response(method="GET", url=_search_url(), json=[])

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert result.error.message == "No account registered for this email"

    async def test_reset_password_rejected(self, provider, httpx_mock: HTTPXMock):
        _mock_token(httpx_mock)
        httpx_mock.add_response(method="GET", url=_search_url(), json=[{"id": USER_ID}])
        httpx_mock.add_response(
            method="PUT",
            url=f"{USERS_URL}/{USER_ID}/reset-password",
            status_code=400,
            json={"error": "invalidPasswordMinLengthMessage"},
        )

        result = await provider.set_password(EMAIL, "short")

        assert isinstance(result, Failure)
        assert result.error.details["status_code"] == 400
        assert "invalidPasswordMinLengthMessage" in result.error.details["response_body"]

    async def test_timeout(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ReadTimeout("timed out"), url=TOKEN_URL)

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert result.error.message == "Keycloak request timed out"

    async def test_connection_error(self, provider, httpx_mock: HTTPXMock):
        httpx_mock.add_exception(httpx.ConnectError("refused"), url=TOKEN_URL)

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert result.error.message.startswith("Failed to connect to Keycloak")

    @pytest.mark.parametrize(
        "body",
        [{"error": "x"}, [{"username": "user"}], ["not-a-user"]],
        ids=["object", "entry-without-id", "entry-not-object"],
    )
    async def test_malformed_user_search(self, provider, httpx_mock: HTTPXMock, body):
        _mock_token(httpx_mock)
        httpx_mock.add_response(method="GET", url=_search_url(), json=body)

        result = await provider.set_password(EMAIL, "N3w-password!")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.IDENTITY_PROVIDER_FAILED
        assert "unexpected shape" in result.error.message
