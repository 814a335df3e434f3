"""RFC 7807 Problem Details for HTTP APIs.

RFC 7807: https://tools.ietf.org/html/rfc7807

OTP failures carry extension members (retry_after_seconds, send_count,
attempts_remaining, ...) next to the standard fields so clients can
render countdowns and remaining-attempt hints without parsing text.

Exports:
    ErrorDetail: Individual field-specific error
    ProblemDetails: RFC 7807 compliant error response schema
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Individual field-specific error.

    Used for validation errors where multiple fields may have errors.

    Examples:
        >>> error = ErrorDetail(
        ...     field="email",
        ...     code="value_error",
        ...     message="value is not a valid email address",
        ... )
    """

    field: str = Field(..., description="Field name")
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    Examples:
        >>> problem = ProblemDetails(
        ...     type="https://otp-guard.local/errors/otp-cooldown",
        ...     title="OTP Cooldown",
        ...     status=429,
        ...     detail="Please wait 30 seconds before requesting another code",
        ...     instance="/api/v1/otp-challenges",
        ...     code="otp_cooldown",
        ...     retry_after_seconds=30,
        ...     send_count=1,
        ...     max_sends=5,
        ... )
    """

    type: str = Field(
        ...,
        description="URI reference identifying the problem type",
        examples=["https://otp-guard.local/errors/otp-invalid"],
    )
    title: str = Field(
        ...,
        description="Short, human-readable summary",
        examples=["Invalid OTP"],
    )
    status: int = Field(..., description="HTTP status code", examples=[400])
    detail: str = Field(
        ...,
        description="Human-readable explanation",
        examples=["The code you entered is incorrect"],
    )
    instance: str = Field(
        ...,
        description="URI reference identifying this occurrence",
        examples=["/api/v1/otp-verifications"],
    )
    code: str | None = Field(
        None,
        description="Machine-readable domain error code",
        examples=["otp_invalid"],
    )
    errors: list[ErrorDetail] | None = Field(
        None,
        description="List of field-specific errors",
    )
    trace_id: str | None = Field(
        None,
        description="Request trace ID for debugging",
    )

    # OTP extension members
    retry_after_seconds: int | None = Field(
        None, description="Seconds until another code may be requested"
    )
    send_count: int | None = Field(
        None, description="Codes sent in the current window"
    )
    max_sends: int | None = Field(None, description="Codes allowed per window")
    attempts_remaining: int | None = Field(
        None, description="Wrong guesses left for the active code"
    )
    max_attempts: int | None = Field(
        None, description="Wrong guesses allowed per code"
    )
    reset_token: str | None = Field(
        None,
        description="Replacement reset token issued after an identity provider failure",
    )
