"""Domain value objects and validators.

Usage:
    from otp_guard.domain.value_objects import normalize_identity
"""

from otp_guard.domain.value_objects.identity import (
    normalize_identity,
    validate_email,
    validate_otp_code,
)

__all__ = ["normalize_identity", "validate_email", "validate_otp_code"]
