"""OTP DTOs (Data Transfer Objects).

Result dataclasses returned by the OTP engine and the flow handlers.

DTOs:
    - OtpIssued: Result of OtpEngine.generate (contains the plaintext code)
    - OtpSendReceipt: Result of SendOtp (same telemetry, code withheld)
    - OtpVerification: Result of OtpEngine.verify / VerifyOtp
"""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class OtpIssued:
    """A freshly issued code with quota telemetry.

    The plaintext code exists only in this object. It must be handed to
    a delivery collaborator and never persisted or logged.

    Attributes:
        otp: Plaintext code (leading zeros preserved).
        send_count: Issuances in the current window, this one included.
        max_sends: Issuances allowed per window.
        window_reset_in_seconds: Seconds until the send window rolls over.
    """

    otp: str
    send_count: int
    max_sends: int
    window_reset_in_seconds: int

    def __repr__(self) -> str:
        return (
            f"OtpIssued(otp='******', send_count={self.send_count}, "
            f"max_sends={self.max_sends}, "
            f"window_reset_in_seconds={self.window_reset_in_seconds})"
        )


@dataclass(frozen=True, kw_only=True)
class OtpSendReceipt:
    """Issuance telemetry safe to return to API clients.

    Attributes:
        send_count: Issuances in the current window.
        max_sends: Issuances allowed per window.
        window_reset_in_seconds: Seconds until the send window rolls over.
    """

    send_count: int
    max_sends: int
    window_reset_in_seconds: int


@dataclass(frozen=True, kw_only=True)
class OtpVerification:
    """Outcome of a successful verification.

    Attributes:
        status: Always "OK".
        reset_token: Single-use reset token for PASSWORD_RESET, None for
            EMAIL_VERIFICATION.
    """

    status: str = "OK"
    reset_token: str | None = None
