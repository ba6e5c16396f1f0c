"""
Twilio Settings Models

Per-RTO messaging provider configuration. The provider auth token is stored
only as an AES-256-GCM envelope (``auth_token_cipher``) plus a masked form for
display; the plaintext token is never persisted.
"""

import uuid

from sqlalchemy import Boolean, Enum, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from rto_api.core.phone import Channel
from rto_api.modules.shared import BaseModel


class TwilioSettings(BaseModel):
    """
    Messaging provider credentials for one RTO.

    One row per tenant. ``rto_id`` references the tenant owned by the
    surrounding application.
    """

    __tablename__ = "twilio_settings"

    rto_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        nullable=False,
        unique=True,
        index=True,
    )

    account_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Write-only secret: envelope text and display mask
    auth_token_cipher: Mapped[str | None] = mapped_column(Text, nullable=True)
    auth_token_masked: Mapped[str | None] = mapped_column(String(32), nullable=True)

    messaging_service_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    default_template_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    validate_webhooks: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<TwilioSettings(id={self.id}, rto_id={self.rto_id})>"


class TwilioSender(BaseModel):
    """A phone number an RTO can send from, on a given channel."""

    __tablename__ = "twilio_senders"

    rto_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    friendly_name: Mapped[str] = mapped_column(String(200), nullable=False)
    phone_e164: Mapped[str] = mapped_column(String(16), nullable=False)
    channel: Mapped[Channel] = mapped_column(
        Enum(Channel, name="messaging_channel", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone_number_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sender_sid: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("rto_id", "phone_e164", "channel", name="uq_twilio_senders_rto_phone"),
        Index("ix_twilio_senders_rto_id", "rto_id"),
    )

    def __repr__(self) -> str:
        return f"<TwilioSender(id={self.id}, channel={self.channel.value})>"
