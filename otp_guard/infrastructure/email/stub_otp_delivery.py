"""Stub OTP delivery (development/testing).

Renders the email and keeps it in a bounded in-process outbox instead of
sending it. Logs the delivery event without the code. Outside development
and testing the outbox is sized 0, so no plaintext code outlives the call.
"""

from collections import deque
from dataclasses import dataclass

import structlog

from otp_guard.core.constants import STUB_OUTBOX_MAX_MESSAGES
from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import OtpDeliveryContext
from otp_guard.infrastructure.email.otp_templates import (
    RenderedOtpEmail,
    render_otp_email,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True, kw_only=True)
class OutboxMessage:
    """A message captured by the stub."""

    recipient: str
    purpose: OtpPurpose
    otp: str
    email: RenderedOtpEmail


class StubOtpDelivery:
    """OtpDeliveryProtocol implementation that captures messages.

    Attributes:
        outbox: Most recent messages "sent", oldest first, at most
            outbox_size of them.
    """

    def __init__(
        self,
        app_name: str = "OTP Guard",
        outbox_size: int = STUB_OUTBOX_MAX_MESSAGES,
    ) -> None:
        self._app_name = app_name
        self.outbox: deque[OutboxMessage] = deque(maxlen=outbox_size)

    async def send_otp(
        self,
        recipient: str,
        otp: str,
        context: OtpDeliveryContext,
    ) -> None:
        """Render and capture an OTP email."""
        email = render_otp_email(otp, context, app_name=self._app_name)
        self.outbox.append(
            OutboxMessage(
                recipient=recipient,
                purpose=context.purpose,
                otp=otp,
                email=email,
            )
        )
        logger.info(
            "otp_email_stubbed",
            recipient=recipient,
            purpose=context.purpose.value,
            subject=email.subject,
        )

    def last_otp_for(self, recipient: str, purpose: OtpPurpose) -> str | None:
        """Most recent code captured for (recipient, purpose), case-insensitive."""
        for message in reversed(self.outbox):
            if (
                message.recipient.lower() == recipient.strip().lower()
                and message.purpose is purpose
            ):
                return message.otp
        return None
