"""Application services.

Usage:
    from otp_guard.application.services import OtpEngine
"""

from otp_guard.application.services.otp_engine import OtpEngine, OtpStatus

__all__ = ["OtpEngine", "OtpStatus"]
