"""
WhatsApp Messaging Schemas
"""

from uuid import UUID

from pydantic import BaseModel, Field


class SendWhatsAppRequest(BaseModel):
    """Request body for POST /rtos/{rto_id}/whatsapp/messages.

    ``to`` may be a bare E.164 number or a channel address such as
    ``whatsapp:+61412345678`` (e.g. the counterparty of an existing thread).
    Either ``body`` or ``template_sid`` is required unless the RTO has a
    default template configured.
    """

    to: str = Field(..., min_length=1, max_length=64)
    sender_id: UUID | None = None
    body: str | None = Field(None, max_length=4096)
    media_urls: list[str] | None = Field(None, max_length=10)
    template_sid: str | None = Field(None, max_length=64)
    template_params: dict[str, str] | None = None


class SendResult(BaseModel):
    """Outcome of a provider send."""

    ok: bool
    sid: str | None = None
    to: str
    error: str | None = None
