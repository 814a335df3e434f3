"""OTP request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

RESTful Endpoints:
    POST   /api/v1/otp-challenges       - Create challenge (send a code)
    GET    /api/v1/otp-challenges       - Read resend telemetry
    POST   /api/v1/otp-verifications    - Create verification (check a code)
    POST   /api/v1/password-resets      - Create reset (redeem reset token)
"""

from pydantic import BaseModel, ConfigDict, Field

from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.types import Email, NewPassword, OtpCode, ResetTokenValue


# =============================================================================
# Issuance
# =============================================================================


class OtpChallengeCreateRequest(BaseModel):
    """Request schema for sending a code.

    POST /api/v1/otp-challenges
    Returns: 201 Created
    """

    email: Email
    purpose: OtpPurpose = Field(..., description="What the code authorizes")
    first_name: str | None = Field(
        None,
        max_length=100,
        description="Name used in the email greeting",
        examples=["Ada"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "purpose": "password_reset",
                "first_name": "Ada",
            }
        }
    )


class OtpChallengeCreateResponse(BaseModel):
    """Response schema for a sent code (201 Created).

    The code itself only travels by email.
    """

    send_count: int = Field(..., description="Codes sent in the current window")
    max_sends: int = Field(..., description="Codes allowed per window")
    window_reset_in_seconds: int = Field(
        ..., description="Seconds until the send window rolls over"
    )
    message: str = Field(
        default="Verification code sent. Please check your email.",
        description="Success message",
    )


class OtpChallengeStatusResponse(BaseModel):
    """Response schema for resend telemetry."""

    has_active_otp: bool
    send_count: int
    max_sends: int
    cooldown_remaining_seconds: int


# =============================================================================
# Verification
# =============================================================================


class OtpVerificationCreateRequest(BaseModel):
    """Request schema for checking a code.

    POST /api/v1/otp-verifications
    Returns: 200 OK
    """

    email: Email
    purpose: OtpPurpose = Field(..., description="What the code authorizes")
    code: OtpCode


class OtpVerificationCreateResponse(BaseModel):
    """Response schema for an accepted code.

    reset_token is only present for password_reset codes.
    """

    status: str = Field(default="OK")
    reset_token: str | None = Field(
        None,
        description="Single-use password reset token (password_reset only)",
    )


# =============================================================================
# Password Reset
# =============================================================================


class PasswordResetCreateRequest(BaseModel):
    """Request schema for password reset execution.

    POST /api/v1/password-resets
    Returns: 201 Created
    """

    reset_token: ResetTokenValue
    new_password: NewPassword


class PasswordResetCreateResponse(BaseModel):
    """Response schema for password reset (201 Created)."""

    message: str = Field(
        default="Password has been reset successfully.",
        description="Success message",
    )
