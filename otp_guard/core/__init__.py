"""Core shared kernel.

Foundational utilities used across all layers:
- Result types for railway-oriented programming
- Base error class and machine-readable error codes

The core module has NO dependencies on other application layers.
"""

from otp_guard.core.enums import ErrorCode
from otp_guard.core.errors import DomainError
from otp_guard.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
