"""Annotated types with centralized validation.

Define validation once, use in every request schema.

Usage:
    from otp_guard.domain.types import Email, OtpCode

    class VerifyOtpRequest(BaseModel):
        email: Email
        code: OtpCode
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from otp_guard.core.constants import IDENTITY_MAX_LENGTH
from otp_guard.domain.value_objects import validate_email, validate_otp_code

Email = Annotated[
    str,
    Field(
        min_length=3,
        max_length=IDENTITY_MAX_LENGTH,
        description="Email address",
        examples=["user@example.com"],
    ),
    AfterValidator(validate_email),
]
"""Email address, validated and trimmed; casing kept for delivery."""

OtpCode = Annotated[
    str,
    Field(
        min_length=1,
        max_length=32,
        description="Six-digit one-time passcode",
        examples=["042137"],
    ),
    AfterValidator(validate_otp_code),
]
"""One-time passcode as typed by the user."""

ResetTokenValue = Annotated[
    str,
    Field(
        min_length=16,
        max_length=256,
        description="Opaque password reset token (urlsafe base64)",
        pattern=r"^[A-Za-z0-9_-]+$",
        examples=["q0pXxk3l0bXh2Y3Nqb2ZkbGtqZnNkbGtmag"],
    ),
]
"""Single-use reset token returned by a password reset verification."""

NewPassword = Annotated[
    str,
    Field(
        min_length=8,
        max_length=128,
        description="New account password",
        examples=["SecurePass123!"],
    ),
]
"""New password; the identity provider enforces its own policy on top."""
