"""OTP code generation and digesting.

Architecture:
    - Implements OtpCodeServiceProtocol (structural typing)
    - Codes come from the secrets CSPRNG, never from random

Digest Strategy:
    - With a pepper: HMAC-SHA256(pepper, code)
    - Without: SHA-256(code)
    - Comparison uses hmac.compare_digest (constant time)

A six-digit code has only 10^6 values, so an unkeyed digest can be
reversed by enumeration if the table leaks; configuring a pepper (kept
outside the database) closes that gap.
"""

import hashlib
import hmac
import secrets

from otp_guard.core.constants import OTP_DIGITS


class OtpCodeService:
    """Generates fixed-width decimal codes and their digests.

    Usage:
        service = OtpCodeService(pepper=settings.otp_hash_pepper)
        code = service.generate_code()          # "004271"
        digest = service.hash_code(code)        # 64 hex chars
        service.verify_code(" 004271", digest)  # False (callers strip input)
    """

    def __init__(self, pepper: str | None = None, digits: int = OTP_DIGITS) -> None:
        """Initialize code service.

        Args:
            pepper: Optional secret key for HMAC digests.
            digits: Code width (default 6).
        """
        self._pepper = pepper.encode("utf-8") if pepper else None
        self._digits = digits

    def generate_code(self) -> str:
        """Generate a uniformly random code, zero-padded to the configured width."""
        return f"{secrets.randbelow(10**self._digits):0{self._digits}d}"

    def hash_code(self, code: str) -> str:
        """Digest a code for storage (hex)."""
        data = code.encode("utf-8")
        if self._pepper is not None:
            return hmac.new(self._pepper, data, hashlib.sha256).hexdigest()
        return hashlib.sha256(data).hexdigest()

    def verify_code(self, candidate: str, otp_hash: str) -> bool:
        """Constant-time comparison of a candidate's digest with otp_hash."""
        return hmac.compare_digest(self.hash_code(candidate), otp_hash)
