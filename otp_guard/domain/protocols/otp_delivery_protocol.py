"""OtpDeliveryProtocol - outbound transport for plaintext codes.

Delivery is the caller's job, not the engine's: the engine returns the
plaintext code once and forgets it. Delivery failures never change
challenge state.
"""

from dataclasses import dataclass
from typing import Protocol

from otp_guard.domain.enums import OtpPurpose


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpDeliveryContext:
    """Template inputs for an OTP message.

    Attributes:
        purpose: What the code authorizes.
        recipient_name: Greeting name ("there" when unknown).
        heading: Message heading.
        intro: Sentence introducing the code.
        footer: Closing note.
        expires_in_minutes: Code lifetime shown to the recipient.
    """

    purpose: OtpPurpose
    recipient_name: str
    heading: str
    intro: str
    footer: str
    expires_in_minutes: int


class OtpDeliveryProtocol(Protocol):
    """Protocol for OTP delivery.

    Implementations:
        - StubOtpDelivery: otp_guard/infrastructure/email/stub_otp_delivery.py (dev/test)
    """

    async def send_otp(
        self,
        recipient: str,
        otp: str,
        context: OtpDeliveryContext,
    ) -> None:
        """Deliver a code to its recipient.

        Args:
            recipient: Destination email address.
            otp: Plaintext code.
            context: Template inputs.
        """
        ...
