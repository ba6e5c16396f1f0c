"""
Twilio Settings Repository

Database operations for per-RTO provider settings and senders. No business
logic and no cryptography here: callers pass already-encrypted values.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import TwilioSender, TwilioSettings


async def get_settings_by_rto(db: AsyncSession, rto_id: UUID) -> TwilioSettings | None:
    """Get the settings row for an RTO."""
    result = await db.execute(select(TwilioSettings).where(TwilioSettings.rto_id == rto_id))
    return result.scalar_one_or_none()


async def upsert_settings(db: AsyncSession, rto_id: UUID, updates: dict[str, Any]) -> TwilioSettings:
    """
    Apply ``updates`` to the RTO's settings row, creating it if missing.

    Args:
        db: Database session
        rto_id: Tenant id
        updates: Column name to value mapping

    Returns:
        The persisted TwilioSettings row
    """
    existing = await get_settings_by_rto(db, rto_id)

    if existing is None:
        existing = TwilioSettings(rto_id=rto_id, **updates)
        db.add(existing)
    else:
        for column, value in updates.items():
            setattr(existing, column, value)

    await db.commit()
    await db.refresh(existing)
    return existing


async def create_sender(db: AsyncSession, rto_id: UUID, **fields: Any) -> TwilioSender:
    """Create a sender for an RTO."""
    sender = TwilioSender(rto_id=rto_id, **fields)
    db.add(sender)
    await db.commit()
    await db.refresh(sender)
    return sender


async def get_sender(db: AsyncSession, rto_id: UUID, sender_id: UUID) -> TwilioSender | None:
    """Get a sender by id, scoped to the RTO."""
    result = await db.execute(
        select(TwilioSender).where(
            TwilioSender.id == sender_id,
            TwilioSender.rto_id == rto_id,
        )
    )
    return result.scalar_one_or_none()


async def list_senders(db: AsyncSession, rto_id: UUID) -> list[TwilioSender]:
    """List an RTO's senders, newest first."""
    result = await db.execute(
        select(TwilioSender)
        .where(TwilioSender.rto_id == rto_id)
        .order_by(TwilioSender.created_at.desc())
    )
    return list(result.scalars().all())


async def update_sender(db: AsyncSession, sender: TwilioSender, updates: dict[str, Any]) -> TwilioSender:
    """Apply ``updates`` to a sender."""
    for column, value in updates.items():
        setattr(sender, column, value)
    await db.commit()
    await db.refresh(sender)
    return sender


async def delete_sender(db: AsyncSession, sender: TwilioSender) -> None:
    """Delete a sender."""
    await db.delete(sender)
    await db.commit()
