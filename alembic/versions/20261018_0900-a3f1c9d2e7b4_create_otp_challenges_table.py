"""create_otp_challenges_table

Revision ID: a3f1c9d2e7b4
Revises:
Create Date: 2026-10-18 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a3f1c9d2e7b4"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create otp_challenges table."""
    op.create_table(
        "otp_challenges",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # Challenge key
        sa.Column(
            "identity",
            sa.String(length=320),
            nullable=False,
            comment="Normalized (trimmed, lower-cased) email",
        ),
        sa.Column(
            "purpose",
            sa.String(length=32),
            nullable=False,
            comment="email_verification or password_reset",
        ),
        # Active code
        sa.Column(
            "otp_hash",
            sa.String(length=64),
            nullable=True,
            comment="Hex digest of the active code",
        ),
        sa.Column(
            "otp_expires_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Expiry of the active code",
        ),
        sa.Column(
            "otp_issued_at",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Last issuance time (cooldown anchor)",
        ),
        # Counters
        sa.Column(
            "verify_attempts",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="Wrong guesses against the active code",
        ),
        sa.Column(
            "send_count",
            sa.Integer(),
            server_default="0",
            nullable=False,
            comment="Issuances in the current send window",
        ),
        sa.Column(
            "window_start",
            sa.DateTime(timezone=True),
            nullable=True,
            comment="Start of the current send window",
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "identity", "purpose", name="uq_otp_challenges_identity_purpose"
        ),
    )


def downgrade() -> None:
    """Drop otp_challenges table."""
    op.drop_table("otp_challenges")
