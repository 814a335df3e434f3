"""Identity normalization and input validators.

Challenges and reset tokens are keyed by the normalized identity so that
" A@X.com " and "a@x.com" share one cooldown, one quota and one attempt
budget. Validators are pure functions that raise ValueError, reused by the
Annotated types in otp_guard.domain.types.
"""

from email_validator import EmailNotValidError, validate_email as _validate_email

from otp_guard.core.constants import OTP_DIGITS


def normalize_identity(identity: str) -> str:
    """Trim surrounding whitespace and lower-case an identity.

    Args:
        identity: Raw identity as supplied by the caller.

    Returns:
        Normalized identity used as the storage key.

    Example:
        >>> normalize_identity("  Alice@Example.COM ")
        'alice@example.com'
    """
    return identity.strip().lower()


def validate_email(v: str) -> str:
    """Validate email syntax with email-validator (no deliverability lookup).

    Args:
        v: Email address to validate.

    Returns:
        The address trimmed, casing kept. Challenge keys are normalized
        separately with normalize_identity.

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email(" User@Example.COM ")
        'User@Example.COM'
    """
    stripped = v.strip()
    try:
        _validate_email(stripped, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValueError(f"Invalid email: {e}") from e
    return stripped


def validate_otp_code(v: str) -> str:
    """Validate a candidate code is OTP_DIGITS decimal digits.

    Surrounding whitespace is stripped first.

    Raises:
        ValueError: If the code is not exactly OTP_DIGITS digits.
    """
    stripped = v.strip()
    if len(stripped) != OTP_DIGITS or not stripped.isdigit():
        raise ValueError(f"Code must be {OTP_DIGITS} digits")
    return stripped
