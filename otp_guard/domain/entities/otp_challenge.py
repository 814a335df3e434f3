"""OtpChallenge domain entity.

Pure business logic, no framework dependencies.

One challenge row exists per (identity, purpose). The row is created
lazily on first use and then reused forever: issuing, verifying, expiring
and exhausting a code only reset fields, they never delete the row. That
bounds storage to identities x purposes and keeps the send quota alive
across successive codes.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from otp_guard.domain.enums import OtpPurpose


@dataclass(slots=True, kw_only=True)
class OtpChallenge:
    """Per-(identity, purpose) OTP state.

    Business Rules:
        - otp_hash is None exactly when otp_expires_at is None
        - verify_attempts counts wrong guesses against the current hash only
        - send_count counts issuances inside the window that began at
          window_start
        - Only the digest of a code is ever held, never the code itself

    Attributes:
        identity: Normalized (trimmed, lower-cased) email.
        purpose: What the code authorizes.
        otp_hash: Hex digest of the active code, None when no code is active.
        otp_expires_at: Expiry of the active code.
        otp_issued_at: Last issuance time, drives the cooldown.
        verify_attempts: Wrong guesses against the active code.
        send_count: Issuances in the current send window.
        window_start: Start of the current send window.
        id: Row identifier (assigned by persistence, None for new entities).

    Example:
        >>> challenge = OtpChallenge(identity="a@x.com", purpose=OtpPurpose.PASSWORD_RESET)
        >>> challenge.has_active_otp()
        False
    """

    identity: str
    purpose: OtpPurpose
    otp_hash: str | None = None
    otp_expires_at: datetime | None = None
    otp_issued_at: datetime | None = None
    verify_attempts: int = 0
    send_count: int = 0
    window_start: datetime | None = None
    id: UUID | None = None

    def has_active_otp(self) -> bool:
        """Check whether a code has been issued and not yet cleared."""
        return self.otp_hash is not None

    def is_otp_expired(self, now: datetime) -> bool:
        """Check whether the active code has reached its expiry.

        Expiry is inclusive: a code is dead at exactly otp_expires_at.

        Args:
            now: Current time (timezone-aware).

        Returns:
            True if there is no expiry on record or now >= otp_expires_at.
        """
        return self.otp_expires_at is None or now >= self.otp_expires_at

    def is_window_elapsed(self, now: datetime, window: timedelta) -> bool:
        """Check whether the send window must be restarted.

        Args:
            now: Current time.
            window: Length of the send window.

        Returns:
            True if no window is open or now >= window_start + window.
        """
        return self.window_start is None or now >= self.window_start + window

    def start_window(self, now: datetime) -> None:
        """Open a fresh send window starting at now."""
        self.send_count = 0
        self.window_start = now

    def seconds_since_issue(self, now: datetime) -> int | None:
        """Whole seconds (floored) since the last issuance, or None if never issued."""
        if self.otp_issued_at is None:
            return None
        return int((now - self.otp_issued_at).total_seconds() // 1)

    def issue(self, otp_hash: str, now: datetime, ttl: timedelta) -> None:
        """Record a freshly generated code.

        Replaces any previous code, restarts the attempt budget and
        consumes one unit of send quota.

        Args:
            otp_hash: Digest of the new code.
            now: Issuance time.
            ttl: Code lifetime.
        """
        self.otp_hash = otp_hash
        self.otp_expires_at = now + ttl
        self.otp_issued_at = now
        self.verify_attempts = 0
        self.send_count += 1

    def record_failed_attempt(self) -> int:
        """Count one wrong guess.

        Returns:
            Total wrong guesses against the active code.
        """
        self.verify_attempts += 1
        return self.verify_attempts

    def clear_otp(self) -> None:
        """Drop the active code and its attempt counter.

        Quota fields (send_count, window_start) are left untouched so that
        expiring or exhausting a code never refunds sends.
        """
        self.otp_hash = None
        self.otp_expires_at = None
        self.otp_issued_at = None
        self.verify_attempts = 0

    def reset_quota(self) -> None:
        """Forget the send window (used after a successful verification)."""
        self.send_count = 0
        self.window_start = None
