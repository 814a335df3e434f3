"""OTP delivery adapters."""

from otp_guard.infrastructure.email.stub_otp_delivery import StubOtpDelivery

__all__ = ["StubOtpDelivery"]
