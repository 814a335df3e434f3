"""VerifyOtp command handler.

Thin application entry point over OtpEngine.verify. A PASSWORD_RESET
success carries the reset token; an EMAIL_VERIFICATION success carries
only the "OK" status.
"""

from __future__ import annotations

from otp_guard.application.commands.otp_commands import VerifyOtp
from otp_guard.application.dtos import OtpVerification
from otp_guard.application.services.otp_engine import OtpEngine
from otp_guard.core.result import Result
from otp_guard.domain.errors import OtpError


class VerifyOtpHandler:
    """Handler for VerifyOtp command."""

    def __init__(self, engine: OtpEngine) -> None:
        self._engine = engine

    async def handle(self, cmd: VerifyOtp) -> Result[OtpVerification, OtpError]:
        """Handle VerifyOtp command.

        Args:
            cmd: VerifyOtp command.

        Returns:
            Success(OtpVerification) or Failure(OtpError) from the engine.
        """
        return await self._engine.verify(cmd.email, cmd.purpose, cmd.code)
