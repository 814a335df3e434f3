"""OTP challenge database model.

One row per (identity, purpose). Rows are created lazily by the challenge
repository and then reused: no code path deletes them, so the table is
bounded by identities x purposes and needs no cleanup job.

Security:
    - otp_hash: digest only, the plaintext code is never stored
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from otp_guard.core.constants import IDENTITY_MAX_LENGTH, OTP_HASH_HEX_LENGTH
from otp_guard.infrastructure.persistence.base import BaseMutableModel


class OtpChallengeModel(BaseMutableModel):
    """OTP challenge row.

    Fields:
        id: UUID primary key (from BaseModel)
        created_at / updated_at: Row timestamps (from BaseMutableModel)
        identity: Normalized email
        purpose: OtpPurpose value
        otp_hash: Hex digest of the active code (NULL when none)
        otp_expires_at: Expiry of the active code (NULL iff otp_hash NULL)
        otp_issued_at: Last issuance (cooldown anchor)
        verify_attempts: Wrong guesses against the active code
        send_count: Issuances in the current window
        window_start: Start of the current send window

    Constraints:
        - uq_otp_challenges_identity_purpose: (identity, purpose); the
          repository's INSERT ... ON CONFLICT DO NOTHING relies on it
    """

    __tablename__ = "otp_challenges"

    identity: Mapped[str] = mapped_column(
        String(IDENTITY_MAX_LENGTH),
        nullable=False,
        comment="Normalized (trimmed, lower-cased) email",
    )

    purpose: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="email_verification or password_reset",
    )

    otp_hash: Mapped[str | None] = mapped_column(
        String(OTP_HASH_HEX_LENGTH),
        nullable=True,
        default=None,
        comment="Hex digest of the active code",
    )

    otp_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Expiry of the active code",
    )

    otp_issued_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Last issuance time (cooldown anchor)",
    )

    verify_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Wrong guesses against the active code",
    )

    send_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
        comment="Issuances in the current send window",
    )

    window_start: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Start of the current send window",
    )

    __table_args__ = (
        UniqueConstraint(
            "identity", "purpose", name="uq_otp_challenges_identity_purpose"
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<OtpChallengeModel("
            f"id={self.id}, "
            f"purpose={self.purpose}, "
            f"active={self.otp_hash is not None}, "
            f"send_count={self.send_count}"
            f")>"
        )
