"""ResetPassword command handler.

Flow:
1. Consume the reset token (destroyed even if later steps fail)
2. Set the new password at the identity provider
3. On provider failure, issue one grace replacement token when the
   consumed token was not itself a replacement

Architecture:
- Application layer ONLY imports from domain/core and the engine
- Identity provider is injected via protocol
"""

from __future__ import annotations

from dataclasses import replace

from otp_guard.application.commands.otp_commands import ResetPassword
from otp_guard.application.services.otp_engine import OtpEngine
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.errors import (
    IdentityProviderError,
    InvalidResetTokenError,
    StoreUnavailableError,
)
from otp_guard.domain.protocols import IdentityProviderProtocol, LoggerProtocol


class ResetPasswordHandler:
    """Handler for ResetPassword command.

    Grace policy:
        When the identity provider fails after the token was consumed, the
        user would otherwise have to start over from a fresh OTP. If the
        consumed token was an original (not a grace replacement), exactly
        one replacement token is minted and returned in the error details
        under "reset_token". A replacement that fails again is not
        replaced.
    """

    def __init__(
        self,
        engine: OtpEngine,
        identity_provider: IdentityProviderProtocol,
        logger: LoggerProtocol,
        *,
        grace_reissue: bool = True,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            engine: OTP engine (reset token consumption and reissue).
            identity_provider: Account store applying the password.
            logger: Structured logger.
            grace_reissue: Enable the one-shot replacement token.
        """
        self._engine = engine
        self._identity_provider = identity_provider
        self._logger = logger
        self._grace_reissue = grace_reissue

    async def handle(
        self, cmd: ResetPassword
    ) -> Result[
        None, InvalidResetTokenError | IdentityProviderError | StoreUnavailableError
    ]:
        """Handle ResetPassword command.

        Args:
            cmd: ResetPassword command.

        Returns:
            Success(None): Password changed.
            Failure(InvalidResetTokenError): Token unknown, expired or used.
            Failure(StoreUnavailableError): Vault unreachable; the request may be
                retried with the same token.
            Failure(IdentityProviderError): Provider failed; details may carry
                a grace replacement token.
        """
        consumed = await self._engine.consume_reset_token_entry(cmd.reset_token)
        if isinstance(consumed, Failure):
            return consumed
        entry = consumed.value

        result = await self._identity_provider.set_password(
            entry.identity, cmd.new_password
        )
        match result:
            case Success():
                self._logger.info("password_reset_completed", identity=entry.identity)
                return Success(value=None)
            case Failure(error=error):
                self._logger.warning(
                    "password_reset_provider_failed",
                    identity=entry.identity,
                    provider=error.provider_name,
                    is_reissue=entry.is_reissue,
                )
                if not self._grace_reissue or entry.is_reissue:
                    return Failure(error=error)
                return await self._with_grace_token(entry.identity, error)

    async def _with_grace_token(
        self, identity: str, error: IdentityProviderError
    ) -> Failure[IdentityProviderError]:
        match await self._engine.reissue_reset_token(identity):
            case Success(value=token):
                self._logger.info("reset_token_reissued", identity=identity)
                details = {**(error.details or {}), "reset_token": token}
                return Failure(error=replace(error, details=details))
            case Failure(error=vault_error):
                self._logger.error(
                    "reset_token_reissue_failed",
                    identity=identity,
                    error_code=vault_error.code.value,
                )
                return Failure(error=error)
