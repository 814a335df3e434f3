"""OTP engine: issuance, verification and reset token consumption.

Every decision about a challenge (cooldown, quota, expiry, attempt budget)
is taken while the challenge row is locked by the challenge store, and the
resulting mutation is committed together with the decision. Two concurrent
requests for the same (identity, purpose) therefore see each other's
effects in full or not at all.

Issuance rules:
    1. Send window restarts once WINDOW has elapsed since window_start
    2. Cooldown (checked first, independent of remaining quota)
    3. Send quota per window
    4. New code replaces any previous one and restarts the attempt budget

Verification rules:
    1. No active code -> not found
    2. Expired (now >= otp_expires_at) -> cleared, expired
    3. Attempt budget spent -> cleared, exhausted
    4. Wrong code -> attempt counted; last allowed miss clears the code
    5. Right code -> code cleared and send quota reset

Architecture:
    - Application service (uses domain ports only)
    - Returns Result types; store outages surface as StoreUnavailableError
    - No delivery and no identity provider calls happen here

Usage:
    engine = OtpEngine(store=store, vault=vault, code_service=codes, logger=logger)

    result = await engine.generate("a@x.com", OtpPurpose.PASSWORD_RESET)
    match result:
        case Success(value=issued):
            await delivery.send_otp("a@x.com", issued.otp, context)
        case Failure(error=OtpCooldownError() as error):
            retry_after = error.retry_after_seconds
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from otp_guard.application.dtos import OtpIssued, OtpVerification
from otp_guard.core.constants import RESET_TOKEN_LOG_PREFIX_LENGTH
from otp_guard.core.enums import ErrorCode
from otp_guard.core.result import Failure, Result, Success
from otp_guard.domain.entities import OtpChallenge, ResetTokenEntry
from otp_guard.domain.enums import OtpPurpose
from otp_guard.domain.errors import (
    InvalidResetTokenError,
    OtpAttemptsExhaustedError,
    OtpCooldownError,
    OtpError,
    OtpExpiredError,
    OtpInvalidError,
    OtpNotFoundError,
    OtpRateLimitError,
    StoreUnavailableError,
)
from otp_guard.domain.protocols import (
    ChallengeStore,
    ChallengeStoreUnavailable,
    LoggerProtocol,
    OtpCodeServiceProtocol,
    ResetTokenVault,
)
from otp_guard.domain.value_objects import normalize_identity


def _utc_now() -> datetime:
    return datetime.now(UTC)


def format_duration(seconds: int) -> str:
    """Render a wait time for humans ("1h 59m", "4m 10s", "45s").

    Args:
        seconds: Non-negative number of seconds.

    Returns:
        Compact duration string.
    """
    hours, remainder = divmod(seconds, 3600)
    minutes, secs = divmod(remainder, 60)
    if hours:
        return f"{hours}h {minutes}m" if minutes else f"{hours}h"
    if minutes:
        return f"{minutes}m {secs}s" if secs else f"{minutes}m"
    return f"{secs}s"


@dataclass(frozen=True, kw_only=True)
class OtpStatus:
    """Read-only view of a challenge for resend timers.

    Attributes:
        has_active_otp: Whether a code is outstanding (it may have expired).
        send_count: Issuances counted in the current window.
        max_sends: Issuances allowed per window.
        cooldown_remaining_seconds: Seconds before another send is allowed
            by the cooldown (0 when none applies).
    """

    has_active_otp: bool
    send_count: int
    max_sends: int
    cooldown_remaining_seconds: int


class OtpEngine:
    """Issues and verifies OTPs against locked challenge rows.

    Attributes:
        max_sends: Issuances allowed per send window.
        max_verify_attempts: Wrong guesses allowed per code.
        otp_ttl_seconds: Code lifetime.
    """

    def __init__(
        self,
        store: ChallengeStore,
        vault: ResetTokenVault,
        code_service: OtpCodeServiceProtocol,
        logger: LoggerProtocol,
        *,
        otp_ttl_seconds: int = 600,
        cooldown_seconds: int = 60,
        max_sends: int = 5,
        send_window_seconds: int = 7200,
        max_verify_attempts: int = 5,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        """Initialize engine with its ports and policy limits.

        Args:
            store: Challenge store providing locked read-modify-write.
            vault: Reset token vault.
            code_service: Code generation and digest service.
            logger: Structured logger.
            otp_ttl_seconds: Code lifetime.
            cooldown_seconds: Minimum spacing between two issuances.
            max_sends: Issuances allowed per send window.
            send_window_seconds: Length of the send window.
            max_verify_attempts: Wrong guesses allowed per code.
            clock: Returns the current timezone-aware time.
        """
        self._store = store
        self._vault = vault
        self._codes = code_service
        self._logger = logger
        self._ttl = timedelta(seconds=otp_ttl_seconds)
        self._cooldown_seconds = cooldown_seconds
        self._window = timedelta(seconds=send_window_seconds)
        self._clock = clock
        self.otp_ttl_seconds = otp_ttl_seconds
        self.max_sends = max_sends
        self.max_verify_attempts = max_verify_attempts

    # =========================================================================
    # Issuance
    # =========================================================================

    async def generate(
        self, identity: str, purpose: OtpPurpose
    ) -> Result[OtpIssued, OtpError]:
        """Issue a new code for (identity, purpose).

        Args:
            identity: Email address (normalized here).
            purpose: What the code authorizes.

        Returns:
            Success(OtpIssued): Plaintext code plus quota telemetry.
            Failure(OtpCooldownError): Previous code issued too recently.
            Failure(OtpRateLimitError): Send quota for the window used up.
            Failure(StoreUnavailableError): Row could not be locked or written.
        """
        identity = normalize_identity(identity)
        try:
            async with self._store.load_for_mutation(identity, purpose) as challenge:
                result = self._issue(challenge, self._clock())
        except ChallengeStoreUnavailable as e:
            return self._store_unavailable("generate", identity, purpose, e)

        match result:
            case Success(value=issued):
                self._logger.info(
                    "otp_issued",
                    identity=identity,
                    purpose=purpose.value,
                    send_count=issued.send_count,
                    max_sends=issued.max_sends,
                )
            case Failure(error=error):
                self._logger.info(
                    "otp_generate_refused",
                    identity=identity,
                    purpose=purpose.value,
                    error_code=error.code.value,
                )
        return result

    def _issue(
        self, challenge: OtpChallenge, now: datetime
    ) -> Result[OtpIssued, OtpError]:
        if challenge.is_window_elapsed(now, self._window):
            challenge.start_window(now)

        elapsed = challenge.seconds_since_issue(now)
        if elapsed is not None and elapsed < self._cooldown_seconds:
            wait = self._cooldown_seconds - elapsed
            return Failure(
                error=OtpCooldownError(
                    code=ErrorCode.OTP_COOLDOWN,
                    message=(
                        f"Please wait {wait}s before requesting another code "
                        f"({challenge.send_count}/{self.max_sends} requests used)"
                    ),
                    retry_after_seconds=wait,
                    send_count=challenge.send_count,
                    max_sends=self.max_sends,
                )
            )

        window_reset_in = self._window_reset_in(challenge, now)
        if challenge.send_count >= self.max_sends:
            retry_after = max(1, window_reset_in)
            return Failure(
                error=OtpRateLimitError(
                    code=ErrorCode.OTP_RATE_LIMIT_EXCEEDED,
                    message=(
                        f"All {self.max_sends}/{self.max_sends} code requests used. "
                        f"Try again in {format_duration(retry_after)}"
                    ),
                    retry_after_seconds=retry_after,
                    send_count=challenge.send_count,
                    max_sends=self.max_sends,
                )
            )

        otp = self._codes.generate_code()
        challenge.issue(self._codes.hash_code(otp), now, self._ttl)
        return Success(
            value=OtpIssued(
                otp=otp,
                send_count=challenge.send_count,
                max_sends=self.max_sends,
                window_reset_in_seconds=window_reset_in,
            )
        )

    def _window_reset_in(self, challenge: OtpChallenge, now: datetime) -> int:
        # window_start is always set once the window check has run
        assert challenge.window_start is not None
        remaining = challenge.window_start + self._window - now
        return int(remaining.total_seconds())

    # =========================================================================
    # Verification
    # =========================================================================

    async def verify(
        self, identity: str, purpose: OtpPurpose, candidate: str
    ) -> Result[OtpVerification, OtpError]:
        """Check a candidate code for (identity, purpose).

        Args:
            identity: Email address (normalized here).
            purpose: What the code authorizes.
            candidate: Code supplied by the user (surrounding whitespace ignored).

        Returns:
            Success(OtpVerification): Code accepted. reset_token is set for
                PASSWORD_RESET.
            Failure(OtpNotFoundError): No active code.
            Failure(OtpExpiredError): Code expired (now cleared).
            Failure(OtpInvalidError): Wrong code, attempts remain.
            Failure(OtpAttemptsExhaustedError): Attempt budget spent (cleared).
            Failure(StoreUnavailableError): Row could not be locked or written,
                or the reset token could not be stored.
        """
        identity = normalize_identity(identity)
        candidate = candidate.strip()
        try:
            async with self._store.load_for_mutation(identity, purpose) as challenge:
                result = self._check(challenge, candidate, self._clock())
        except ChallengeStoreUnavailable as e:
            return self._store_unavailable("verify", identity, purpose, e)

        if isinstance(result, Failure):
            self._logger.info(
                "otp_verify_failed",
                identity=identity,
                purpose=purpose.value,
                error_code=result.error.code.value,
            )
            return result

        reset_token: str | None = None
        if purpose is OtpPurpose.PASSWORD_RESET:
            # Row lock is released at this point
            match await self._vault.issue(identity):
                case Success(value=token):
                    reset_token = token
                case Failure(error=error):
                    self._logger.error(
                        "reset_token_issue_failed",
                        identity=identity,
                        error_code=error.code.value,
                    )
                    return Failure(error=error)

        self._logger.info("otp_verified", identity=identity, purpose=purpose.value)
        return Success(value=OtpVerification(reset_token=reset_token))

    def _check(
        self, challenge: OtpChallenge, candidate: str, now: datetime
    ) -> Result[None, OtpError]:
        if challenge.otp_hash is None:
            return Failure(
                error=OtpNotFoundError(
                    code=ErrorCode.OTP_NOT_FOUND,
                    message="No active code found. Please request a new one.",
                )
            )

        if challenge.is_otp_expired(now):
            challenge.clear_otp()
            return Failure(
                error=OtpExpiredError(
                    code=ErrorCode.OTP_EXPIRED,
                    message="Code has expired. Please request a new one.",
                )
            )

        if challenge.verify_attempts >= self.max_verify_attempts:
            challenge.clear_otp()
            return self._exhausted()

        if not self._codes.verify_code(candidate, challenge.otp_hash):
            remaining = self.max_verify_attempts - challenge.record_failed_attempt()
            if remaining <= 0:
                challenge.clear_otp()
                return self._exhausted()
            plural = "" if remaining == 1 else "s"
            return Failure(
                error=OtpInvalidError(
                    code=ErrorCode.OTP_INVALID,
                    message=(
                        f"Incorrect code. {remaining}/{self.max_verify_attempts} "
                        f"attempt{plural} remaining."
                    ),
                    attempts_remaining=remaining,
                    max_attempts=self.max_verify_attempts,
                )
            )

        challenge.clear_otp()
        challenge.reset_quota()
        return Success(value=None)

    def _exhausted(self) -> Failure[OtpAttemptsExhaustedError]:
        return Failure(
            error=OtpAttemptsExhaustedError(
                code=ErrorCode.OTP_ATTEMPTS_EXHAUSTED,
                message="Too many incorrect attempts. Please request a new code.",
            )
        )

    # =========================================================================
    # Reset tokens
    # =========================================================================

    async def consume_reset_token(
        self, token: str
    ) -> Result[str, InvalidResetTokenError | StoreUnavailableError]:
        """Redeem a reset token for the identity it authorizes.

        Args:
            token: Token returned by a PASSWORD_RESET verification.

        Returns:
            Success(identity): Token was live and is now destroyed.
            Failure(InvalidResetTokenError): Unknown, expired or already used.
            Failure(StoreUnavailableError): Vault unreachable.
        """
        match await self.consume_reset_token_entry(token):
            case Success(value=entry):
                return Success(value=entry.identity)
            case Failure(error=error):
                return Failure(error=error)

    async def consume_reset_token_entry(
        self, token: str
    ) -> Result[ResetTokenEntry, InvalidResetTokenError | StoreUnavailableError]:
        """Redeem a reset token, returning the full entry.

        Same semantics as consume_reset_token; the entry also tells whether
        the token was a grace re-issue.
        """
        token_prefix = token[:RESET_TOKEN_LOG_PREFIX_LENGTH]
        consumed = await self._vault.consume(token)
        if isinstance(consumed, Failure):
            self._logger.error(
                "reset_token_vault_unavailable",
                token_prefix=token_prefix,
                error_code=consumed.error.code.value,
            )
            return consumed
        entry = consumed.value
        if entry is None:
            self._logger.info("reset_token_rejected", token_prefix=token_prefix)
            return Failure(
                error=InvalidResetTokenError(
                    code=ErrorCode.RESET_TOKEN_INVALID,
                    message="Invalid or expired reset token",
                )
            )
        self._logger.info(
            "reset_token_consumed",
            identity=entry.identity,
            token_prefix=token_prefix,
            is_reissue=entry.is_reissue,
        )
        return Success(value=entry)

    async def reissue_reset_token(
        self, identity: str
    ) -> Result[str, StoreUnavailableError]:
        """Issue a grace replacement token for an already verified identity."""
        return await self._vault.issue(normalize_identity(identity), is_reissue=True)

    # =========================================================================
    # Status
    # =========================================================================

    async def get_status(
        self, identity: str, purpose: OtpPurpose
    ) -> Result[OtpStatus, StoreUnavailableError]:
        """Read resend telemetry without locking or creating the challenge.

        Args:
            identity: Email address (normalized here).
            purpose: Challenge purpose.

        Returns:
            Success(OtpStatus): Current view (all zeros for unknown identities).
            Failure(StoreUnavailableError): Storage failed.
        """
        identity = normalize_identity(identity)
        try:
            challenge = await self._store.load_read_only(identity, purpose)
        except ChallengeStoreUnavailable as e:
            return self._store_unavailable("get_status", identity, purpose, e)

        if challenge is None:
            return Success(
                value=OtpStatus(
                    has_active_otp=False,
                    send_count=0,
                    max_sends=self.max_sends,
                    cooldown_remaining_seconds=0,
                )
            )

        now = self._clock()
        send_count = (
            0 if challenge.is_window_elapsed(now, self._window) else challenge.send_count
        )
        elapsed = challenge.seconds_since_issue(now)
        cooldown = (
            max(0, self._cooldown_seconds - elapsed) if elapsed is not None else 0
        )
        return Success(
            value=OtpStatus(
                has_active_otp=challenge.has_active_otp(),
                send_count=send_count,
                max_sends=self.max_sends,
                cooldown_remaining_seconds=cooldown,
            )
        )

    def _store_unavailable(
        self,
        operation: str,
        identity: str,
        purpose: OtpPurpose,
        error: ChallengeStoreUnavailable,
    ) -> Failure[StoreUnavailableError]:
        self._logger.error(
            "challenge_store_unavailable",
            error=error,
            operation=operation,
            identity=identity,
            purpose=purpose.value,
        )
        return Failure(
            error=StoreUnavailableError(
                code=ErrorCode.OTP_STORE_UNAVAILABLE,
                message="OTP service temporarily unavailable. Please try again.",
            )
        )
