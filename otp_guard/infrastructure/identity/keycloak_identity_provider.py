"""Keycloak identity provider (admin REST API).

Password change flow:
    1. POST /realms/{realm}/protocol/openid-connect/token
       (client_credentials grant for the admin client)
    2. GET  /admin/realms/{realm}/users?email={email}&exact=true
    3. PUT  /admin/realms/{realm}/users/{id}/reset-password
       with a non-temporary password credential

Every failure (timeout, connection error, non-2xx, user not found,
malformed response) is returned as IdentityProviderError.

Reference:
    - https://www.keycloak.org/docs-api/latest/rest-api/index.html
"""

from typing import Any

import httpx
import structlog

from otp_guard.core.constants import (
    IDENTITY_PROVIDER_TIMEOUT_DEFAULT,
    RESPONSE_BODY_MAX_LENGTH,
)
from otp_guard.core.enums import ErrorCode
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.errors import IdentityProviderError

logger = structlog.get_logger(__name__)


class KeycloakIdentityProvider:
    """IdentityProviderProtocol implementation for Keycloak.

    Configuration loaded from settings (otp_guard/core/config.py):
        - keycloak_base_url
        - keycloak_realm
        - keycloak_admin_client_id
        - keycloak_admin_client_secret
        - keycloak_timeout_seconds
    """

    provider_name = "keycloak"

    def __init__(
        self,
        *,
        base_url: str,
        realm: str,
        client_id: str,
        client_secret: str,
        timeout: float = IDENTITY_PROVIDER_TIMEOUT_DEFAULT,
    ) -> None:
        """Initialize provider.

        Args:
            base_url: Keycloak base URL (no trailing slash).
            realm: Realm owning the user accounts.
            client_id: Admin client id (service account with manage-users).
            client_secret: Admin client secret.
            timeout: Per-request timeout in seconds.
        """
        self._base_url = base_url.rstrip("/")
        self._realm = realm
        self._client_id = client_id
        self._client_secret = client_secret
        self._timeout = timeout

    @property
    def _token_url(self) -> str:
        return f"{self._base_url}/realms/{self._realm}/protocol/openid-connect/token"

    @property
    def _users_url(self) -> str:
        return f"{self._base_url}/admin/realms/{self._realm}/users"

    async def set_password(
        self, identity: str, new_password: str
    ) -> Result[None, IdentityProviderError]:
        """Set a new, non-temporary password for the account with this email.

        Args:
            identity: Normalized email.
            new_password: New password (never logged).

        Returns:
            Success(None) or Failure(IdentityProviderError).
        """
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                token_result = await self._admin_token(client)
                if isinstance(token_result, Failure):
                    return token_result
                headers = {"Authorization": f"Bearer {token_result.value}"}

                user_result = await self._find_user_id(client, identity, headers)
                if isinstance(user_result, Failure):
                    return user_result
                user_id = user_result.value

                response = await client.put(
                    f"{self._users_url}/{user_id}/reset-password",
                    headers=headers,
                    json={
                        "type": "password",
                        "value": new_password,
                        "temporary": False,
                    },
                )
                if not response.is_success:
                    return self._http_failure("reset_password", response)

        except httpx.TimeoutException as e:
            logger.warning("keycloak_request_timeout", error=str(e))
            return self._failure("Keycloak request timed out")
        except httpx.RequestError as e:
            logger.warning("keycloak_connection_error", error=str(e))
            return self._failure(f"Failed to connect to Keycloak: {e}")

        logger.info("keycloak_password_updated", user_id=user_id)
        return Success(value=None)

    async def _admin_token(
        self, client: httpx.AsyncClient
    ) -> Result[str, IdentityProviderError]:
        response = await client.post(
            self._token_url,
            data={
                "grant_type": "client_credentials",
                "client_id": self._client_id,
                "client_secret": self._client_secret,
            },
        )
        if not response.is_success:
            return self._http_failure("admin_token", response)
        try:
            return Success(value=response.json()["access_token"])
        except (ValueError, KeyError, TypeError):
            return self._failure("Keycloak token response missing access_token")

    async def _find_user_id(
        self,
        client: httpx.AsyncClient,
        identity: str,
        headers: dict[str, str],
    ) -> Result[str, IdentityProviderError]:
        response = await client.get(
            self._users_url,
            headers=headers,
            params={"email": identity, "exact": "true"},
        )
        if not response.is_success:
            return self._http_failure("find_user", response)
        try:
            users = response.json()
        except ValueError:
            return self._failure("Keycloak user search returned invalid JSON")
        if isinstance(users, list) and not users:
            logger.info("keycloak_user_not_found")
            return self._failure("No account registered for this email")
        try:
            return Success(value=str(users[0]["id"]))
        except (KeyError, IndexError, TypeError):
            logger.warning("keycloak_user_search_malformed")
            return self._failure("Keycloak user search returned an unexpected shape")

    def _http_failure(
        self, step: str, response: httpx.Response
    ) -> Failure[IdentityProviderError]:
        logger.warning(
            "keycloak_request_failed",
            step=step,
            status_code=response.status_code,
        )
        return self._failure(
            f"Keycloak {step} failed with HTTP {response.status_code}",
            details={
                "status_code": response.status_code,
                "response_body": response.text[:RESPONSE_BODY_MAX_LENGTH],
            },
        )

    def _failure(
        self, message: str, details: dict[str, Any] | None = None
    ) -> Failure[IdentityProviderError]:
        return Failure(
            error=IdentityProviderError(
                code=ErrorCode.IDENTITY_PROVIDER_FAILED,
                message=message,
                provider_name=self.provider_name,
                details=details,
            )
        )
