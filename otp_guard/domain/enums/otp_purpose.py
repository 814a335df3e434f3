"""OTP purpose enum.

A challenge is keyed by (identity, purpose): the same email can hold an
email-verification code and a password-reset code at the same time, each
with its own cooldown, quota and attempt budget.

Usage:
    from otp_guard.domain.enums import OtpPurpose

    await engine.generate("a@x.com", OtpPurpose.PASSWORD_RESET)
"""

from enum import Enum


class OtpPurpose(str, Enum):
    """What a one-time passcode authorizes.

    String Enum:
        Inherits from str so values serialize directly into JSON bodies
        and database columns.
    """

    EMAIL_VERIFICATION = "email_verification"
    """Prove control of the address during signup."""

    PASSWORD_RESET = "password_reset"
    """Authorize a password change; success yields a reset token."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all purpose values as strings.

        Returns:
            List of purpose string values.
        """
        return [purpose.value for purpose in cls]
