"""OTP error types.

These errors are part of the OtpEngine contract: every way an issuance,
verification or reset token consumption can be refused is one of these
types, returned inside a Failure and never raised.

Architecture:
- Domain layer errors (part of the engine contract)
- Inherit from DomainError (core layer)
- Presentation maps each type to its own HTTP status and problem type

Usage:
    from otp_guard.domain.errors import OtpCooldownError
    from otp_guard.core.enums import ErrorCode
    from otp_guard.core.result import Failure

    return Failure(
        OtpCooldownError(
            code=ErrorCode.OTP_COOLDOWN,
            message="Please wait before requesting another code",
            retry_after_seconds=30,
            send_count=1,
            max_sends=5,
        )
    )
"""

from dataclasses import dataclass

from otp_guard.core.errors import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpError(DomainError):
    """Base OTP error.

    Attributes:
        code: ErrorCode identifying the failure kind.
        message: Human-readable message.
        details: Additional context.
    """

    pass  # Inherits all fields from DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpCooldownError(OtpError):
    """A code was issued too recently for this identity and purpose.

    Checked before the send quota, so it is returned even when quota
    remains.

    Attributes:
        retry_after_seconds: Seconds until the cooldown ends.
        send_count: Issuances already counted in the current window.
        max_sends: Issuances allowed per window.
    """

    retry_after_seconds: int
    send_count: int
    max_sends: int


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpRateLimitError(OtpError):
    """The send quota for the current window is used up.

    Attributes:
        retry_after_seconds: Seconds until the window rolls over (>= 1).
        send_count: Issuances counted in the current window.
        max_sends: Issuances allowed per window.
    """

    retry_after_seconds: int
    send_count: int
    max_sends: int


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpNotFoundError(OtpError):
    """No active code exists for this identity and purpose."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpExpiredError(OtpError):
    """The active code reached its expiry and has been cleared."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpInvalidError(OtpError):
    """The candidate code did not match.

    Attributes:
        attempts_remaining: Wrong guesses left before the code is cleared.
        max_attempts: Wrong guesses allowed per code.
    """

    attempts_remaining: int
    max_attempts: int


@dataclass(frozen=True, slots=True, kw_only=True)
class OtpAttemptsExhaustedError(OtpError):
    """The attempt budget is spent; the code has been cleared.

    Recovery: request a new code (subject to cooldown and quota).
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class StoreUnavailableError(OtpError):
    """The challenge store or reset token vault could not be used.

    Covers lock timeouts and storage failures. No partial mutation was
    committed.
    """

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidResetTokenError(OtpError):
    """Reset token is unknown, expired or already consumed.

    The three cases are deliberately indistinguishable to callers.
    """

    pass
