"""Message content for OTP emails.

Selects heading, intro and footer per purpose. Rendering into HTML/text is
the delivery adapter's job.
"""

from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import OtpDeliveryContext

DEFAULT_RECIPIENT_NAME = "there"

_COPY: dict[OtpPurpose, tuple[str, str, str]] = {
    OtpPurpose.EMAIL_VERIFICATION: (
        "Verify Your Email",
        "You requested email verification for your account. "
        "Use the code below to complete your registration.",
        "If you did not create an account, you can safely ignore this email.",
    ),
    OtpPurpose.PASSWORD_RESET: (
        "Reset Your Password",
        "We received a request to reset the password for your account.",
        "If you did not request a password reset, you can safely ignore this "
        "email. Your account is secure.",
    ),
}


def build_delivery_context(
    purpose: OtpPurpose,
    first_name: str | None,
    expires_in_minutes: int,
) -> OtpDeliveryContext:
    """Build template inputs for an OTP email.

    Args:
        purpose: What the code authorizes.
        first_name: Recipient first name; blank or None greets "there".
        expires_in_minutes: Code lifetime shown in the footer.

    Returns:
        OtpDeliveryContext for the delivery adapter.
    """
    heading, intro, footer = _COPY[purpose]
    name = first_name.strip() if first_name and first_name.strip() else None
    return OtpDeliveryContext(
        purpose=purpose,
        recipient_name=name or DEFAULT_RECIPIENT_NAME,
        heading=heading,
        intro=intro,
        footer=f"This code expires in {expires_in_minutes} minutes. {footer}",
        expires_in_minutes=expires_in_minutes,
    )
