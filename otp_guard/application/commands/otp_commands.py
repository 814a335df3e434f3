"""OTP commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments
(kw_only=True). Handlers execute the logic and return Result types.
"""

from dataclasses import dataclass

from otp_guard.domain.enums import OtpPurpose


@dataclass(frozen=True, kw_only=True)
class SendOtp:
    """Issue a code and deliver it by email.

    Attributes:
        email: Recipient address (normalized by the engine).
        purpose: What the code authorizes.
        first_name: Greeting name; "there" when missing or blank.

    Example:
        >>> command = SendOtp(email="user@example.com", purpose=OtpPurpose.PASSWORD_RESET)
        >>> result = await handler.handle(command)
    """

    email: str
    purpose: OtpPurpose
    first_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class VerifyOtp:
    """Check a code the user typed in.

    Attributes:
        email: Address the code was sent to.
        purpose: What the code authorizes.
        code: Candidate code.
    """

    email: str
    purpose: OtpPurpose
    code: str


@dataclass(frozen=True, kw_only=True)
class ResetPassword:
    """Redeem a reset token and set a new password.

    Attributes:
        reset_token: Token returned by a PASSWORD_RESET verification.
        new_password: New plaintext password (never logged).
    """

    reset_token: str
    new_password: str

    def __repr__(self) -> str:
        return "ResetPassword(reset_token='***', new_password='***')"
