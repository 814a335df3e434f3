"""Centralized constants for internal implementation details.

These are fixed implementation details, NOT environment-specific
configuration. Tunable limits (TTLs, quotas, timeouts) live in
`otp_guard/core/config.py`.

Example:
    >>> from otp_guard.core.constants import OTP_DIGITS
    >>> f"{secrets.randbelow(10**OTP_DIGITS):0{OTP_DIGITS}d}"
"""

# =============================================================================
# OTP Codes
# =============================================================================

OTP_DIGITS: int = 6
"""Number of decimal digits in a generated OTP (leading zeros preserved)."""

OTP_HASH_HEX_LENGTH: int = 64
"""Length of the hex-encoded SHA-256 / HMAC-SHA256 digest stored per challenge."""

IDENTITY_MAX_LENGTH: int = 320
"""Maximum length of a normalized identity (RFC 5321 address limit)."""


# =============================================================================
# Reset Tokens
# =============================================================================

RESET_TOKEN_BYTES: int = 32
"""Random bytes per reset token (32 bytes = 256 bits of entropy)."""

RESET_TOKEN_LOG_PREFIX_LENGTH: int = 8
"""Characters of a reset token that may appear in logs."""

RESET_TOKEN_KEY_PREFIX: str = "otp_guard:reset_token"
"""Redis key prefix for reset token entries."""

STUB_OUTBOX_MAX_MESSAGES: int = 100
"""Messages the stub delivery keeps in development and testing (oldest dropped)."""


# =============================================================================
# Identity Provider
# =============================================================================

IDENTITY_PROVIDER_TIMEOUT_DEFAULT: float = 10.0
"""Default timeout for identity provider admin API calls in seconds."""

RESPONSE_BODY_MAX_LENGTH: int = 500
"""Maximum length for response body in error messages (truncation limit)."""


# =============================================================================
# Request tracing
# =============================================================================

TRACE_ID_MAX_LENGTH: int = 64
"""Longest caller-supplied X-Trace-Id accepted; longer ones are replaced."""
