"""OTP email templates.

Renders subject, HTML body and plain-text fallback from an
OtpDeliveryContext. All interpolated text is HTML-escaped.
"""

from dataclasses import dataclass
from html import escape

from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.protocols import OtpDeliveryContext

SUBJECTS: dict[OtpPurpose, str] = {
    OtpPurpose.EMAIL_VERIFICATION: "Verify your email address",
    OtpPurpose.PASSWORD_RESET: "Password reset code",
}


@dataclass(frozen=True, kw_only=True)
class RenderedOtpEmail:
    """A rendered OTP message."""

    subject: str
    html_body: str
    text_body: str


def render_otp_email(
    otp: str, context: OtpDeliveryContext, app_name: str = "OTP Guard"
) -> RenderedOtpEmail:
    """Render an OTP email.

    Args:
        otp: Plaintext code.
        context: Template inputs.
        app_name: Product name shown in subject and header.

    Returns:
        RenderedOtpEmail with subject, HTML and text bodies.
    """
    subject = f"{app_name} - {SUBJECTS[context.purpose]}"
    html_body = f"""<!DOCTYPE html>
<html lang="en">
<head><meta charset="UTF-8"/><title>{escape(app_name)}</title></head>
<body style="margin:0;padding:24px;background:#f0f4ff;font-family:Arial,sans-serif;">
  <h1 style="font-size:22px;color:#1a1a2e;">{escape(context.heading)}</h1>
  <p style="font-size:15px;color:#52525b;">Hi {escape(context.recipient_name)},<br/><br/>{escape(context.intro)}</p>
  <div style="text-align:center;margin:24px 0;">
    <span style="font-size:36px;font-weight:900;font-family:'Courier New',monospace;letter-spacing:10px;color:#1a237e;">{escape(otp)}</span>
  </div>
  <p style="font-size:13px;color:#71717a;">{escape(context.footer)}</p>
  <p style="font-size:12px;color:#a1a1aa;">This is an automated message, please do not reply.</p>
</body>
</html>
"""
    text_body = (
        f"Hi {context.recipient_name},\n\n"
        f"{context.intro}\n\n"
        f"Your code: {otp}\n\n"
        f"{context.footer}\n"
    )
    return RenderedOtpEmail(subject=subject, html_body=html_body, text_body=text_body)
