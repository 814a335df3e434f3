"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and are the stable
signal clients key on (the HTTP layer maps each one to its own problem type).

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- OTP challenge errors (OTP_*)
- Reset token errors (RESET_TOKEN_*)
- Collaborator errors (IDENTITY_PROVIDER_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    VALIDATION_FAILED = "validation_failed"

    # OTP issuance errors
    OTP_COOLDOWN = "otp_cooldown"
    OTP_RATE_LIMIT_EXCEEDED = "otp_rate_limit_exceeded"

    # OTP verification errors
    OTP_NOT_FOUND = "otp_not_found"
    OTP_EXPIRED = "otp_expired"
    OTP_INVALID = "otp_invalid"
    OTP_ATTEMPTS_EXHAUSTED = "otp_attempts_exhausted"

    # Storage errors
    OTP_STORE_UNAVAILABLE = "otp_store_unavailable"

    # Reset token errors
    RESET_TOKEN_INVALID = "reset_token_invalid"

    # Collaborator errors
    IDENTITY_PROVIDER_FAILED = "identity_provider_failed"
