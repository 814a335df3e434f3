"""Core errors package.

Usage:
    from otp_guard.core.errors import DomainError
"""

from otp_guard.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
