"""OtpCodeServiceProtocol - code generation and digesting.

Following hexagonal architecture:
- Domain defines what it needs (protocol/port)
- Infrastructure provides implementation (adapter)
"""

from typing import Protocol


class OtpCodeServiceProtocol(Protocol):
    """Protocol for OTP generation and digest comparison.

    Implementations:
        - OtpCodeService: otp_guard/infrastructure/security/otp_code_service.py
    """

    def generate_code(self) -> str:
        """Generate a cryptographically random fixed-width decimal code.

        Returns:
            Code string with leading zeros preserved (e.g. "004271").
        """
        ...

    def hash_code(self, code: str) -> str:
        """Digest a code for storage.

        Args:
            code: Plaintext code.

        Returns:
            Hex digest (64 characters).
        """
        ...

    def verify_code(self, candidate: str, otp_hash: str) -> bool:
        """Compare a candidate against a stored digest in constant time.

        Args:
            candidate: Code supplied by the caller.
            otp_hash: Stored digest.

        Returns:
            True if the candidate digests to otp_hash.
        """
        ...
