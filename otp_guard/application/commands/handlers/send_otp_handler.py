"""SendOtp command handler.

Flow:
1. Issue a code through the engine (cooldown and quota enforced there)
2. Build the email context for the purpose
3. Hand the plaintext code to the delivery adapter
4. Return quota telemetry without the code

Delivery failures are logged and do not change the result: the code is
already committed, and the user can request another one after the
cooldown.

Security:
- Runs the same way for unregistered emails (no user enumeration)
- The plaintext code never leaves this handler except towards delivery
"""

from __future__ import annotations

from otp_guard.application.commands.otp_commands import SendOtp
from otp_guard.application.dtos import OtpSendReceipt
from otp_guard.application.services.otp_engine import OtpEngine
from otp_guard.application.services.otp_messages import build_delivery_context
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.errors import OtpError
from otp_guard.domain.protocols import LoggerProtocol, OtpDeliveryProtocol


class SendOtpHandler:
    """Handler for SendOtp command."""

    def __init__(
        self,
        engine: OtpEngine,
        delivery: OtpDeliveryProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize handler with dependencies.

        Args:
            engine: OTP engine.
            delivery: OTP delivery adapter.
            logger: Structured logger.
        """
        self._engine = engine
        self._delivery = delivery
        self._logger = logger

    async def handle(self, cmd: SendOtp) -> Result[OtpSendReceipt, OtpError]:
        """Handle SendOtp command.

        Args:
            cmd: SendOtp command.

        Returns:
            Success(OtpSendReceipt): Code issued (delivery attempted).
            Failure(OtpError): Cooldown, quota or store failure from the engine.
        """
        result = await self._engine.generate(cmd.email, cmd.purpose)
        if isinstance(result, Failure):
            return result

        issued = result.value
        context = build_delivery_context(
            cmd.purpose,
            cmd.first_name,
            expires_in_minutes=self._engine.otp_ttl_seconds // 60,
        )
        try:
            await self._delivery.send_otp(cmd.email.strip(), issued.otp, context)
        except Exception as e:
            self._logger.error(
                "otp_delivery_failed",
                error=e,
                purpose=cmd.purpose.value,
                send_count=issued.send_count,
            )

        return Success(
            value=OtpSendReceipt(
                send_count=issued.send_count,
                max_sends=issued.max_sends,
                window_reset_in_seconds=issued.window_reset_in_seconds,
            )
        )
