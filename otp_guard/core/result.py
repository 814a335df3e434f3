"""Result types for railway-oriented programming.

Every OTP operation can fail in several expected ways (cooldown, quota,
expiry, wrong code). Those outcomes are returned as values instead of being
raised, so callers handle each one explicitly.

Usage:
    def check_code(candidate: str) -> Result[str, OtpError]:
        if not candidate.isdigit():
            return Failure(error=OtpInvalidError(...))
        return Success(value=candidate)

    match engine_result:
        case Success(value=issued):
            deliver(issued.otp)
        case Failure(error=OtpCooldownError() as err):
            show_timer(err.retry_after_seconds)
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
