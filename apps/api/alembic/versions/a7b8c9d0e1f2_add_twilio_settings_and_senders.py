"""add twilio settings and senders

Revision ID: a7b8c9d0e1f2
Revises:
Create Date: 2026-10-19 09:00:00.000000

This migration:
1. Creates the messaging_channel enum type
2. Creates twilio_settings (one row per RTO, auth token stored encrypted)
3. Creates twilio_senders (sender numbers per RTO, E.164)

auth_token_cipher holds base64(IV || GCM tag || ciphertext); the plaintext
token is never stored.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "a7b8c9d0e1f2"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    """Create twilio_settings and twilio_senders tables."""
    channel_enum = postgresql.ENUM(
        "whatsapp",
        "sms",
        name="messaging_channel",
        create_type=False,
    )
    channel_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "twilio_settings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("rto_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("account_sid", sa.String(64), nullable=True),
        sa.Column("auth_token_cipher", sa.Text(), nullable=True),
        sa.Column("auth_token_masked", sa.String(32), nullable=True),
        sa.Column("messaging_service_sid", sa.String(64), nullable=True),
        sa.Column("default_template_sid", sa.String(64), nullable=True),
        sa.Column(
            "validate_webhooks", sa.Boolean(), nullable=False, server_default=sa.text("true")
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_twilio_settings_rto_id", "twilio_settings", ["rto_id"], unique=True)

    op.create_table(
        "twilio_senders",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("rto_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("friendly_name", sa.String(200), nullable=False),
        sa.Column("phone_e164", sa.String(16), nullable=False),
        sa.Column("channel", channel_enum, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("phone_number_sid", sa.String(64), nullable=True),
        sa.Column("sender_sid", sa.String(64), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.UniqueConstraint(
            "rto_id", "phone_e164", "channel", name="uq_twilio_senders_rto_phone"
        ),
    )
    op.create_index("ix_twilio_senders_rto_id", "twilio_senders", ["rto_id"])


def downgrade() -> None:
    """Drop twilio_senders and twilio_settings tables."""
    op.drop_index("ix_twilio_senders_rto_id", table_name="twilio_senders")
    op.drop_table("twilio_senders")

    op.drop_index("ix_twilio_settings_rto_id", table_name="twilio_settings")
    op.drop_table("twilio_settings")

    postgresql.ENUM(name="messaging_channel").drop(op.get_bind(), checkfirst=True)
