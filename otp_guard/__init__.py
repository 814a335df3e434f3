"""OTP Guard: one-time passcode issuance, verification and password reset."""
