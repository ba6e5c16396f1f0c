"""
Twilio Settings Schemas

Pydantic schemas for request validation and response serialization, plus the
in-memory credential bundle produced by the decrypt path.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rto_api.core.phone import Channel


class TwilioConfigUpdate(BaseModel):
    """Request body for PUT /rtos/{rto_id}/twilio/config.

    ``auth_token`` is write-only. Fields that are omitted are left unchanged;
    ``messaging_service_sid`` and ``default_template_sid`` may be sent as null
    to clear them.
    """

    account_sid: str | None = Field(None, max_length=64)
    auth_token: str | None = Field(None, max_length=256)
    messaging_service_sid: str | None = Field(None, max_length=64)
    default_template_sid: str | None = Field(None, max_length=64)
    validate_webhooks: bool | None = None

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        token = "<redacted>" if self.auth_token else None
        return (
            f"TwilioConfigUpdate(account_sid={self.account_sid!r}, auth_token={token}, "
            f"messaging_service_sid={self.messaging_service_sid!r})"
        )


class TwilioConfigResponse(BaseModel):
    """Masked view of an RTO's provider configuration."""

    model_config = ConfigDict(from_attributes=True)

    account_sid: str | None = None
    messaging_service_sid: str | None = None
    default_template_sid: str | None = None
    validate_webhooks: bool = True
    auth_token_masked: str | None = None
    has_token: bool = False


class TwilioSenderCreate(BaseModel):
    """Request body for POST /rtos/{rto_id}/twilio/senders."""

    friendly_name: str = Field(..., min_length=1, max_length=200)
    phone_e164: str = Field(..., min_length=1, max_length=64)
    channel: Channel
    description: str | None = Field(None, max_length=1000)
    phone_number_sid: str | None = Field(None, max_length=64)
    sender_sid: str | None = Field(None, max_length=64)

    @field_validator("friendly_name")
    @classmethod
    def strip_friendly_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("friendly_name is required")
        return value


class TwilioSenderUpdate(BaseModel):
    """Request body for PUT /rtos/{rto_id}/twilio/senders/{sender_id}. Omitted fields are unchanged."""

    friendly_name: str | None = Field(None, min_length=1, max_length=200)
    phone_e164: str | None = Field(None, min_length=1, max_length=64)
    channel: Channel | None = None
    description: str | None = Field(None, max_length=1000)
    phone_number_sid: str | None = Field(None, max_length=64)
    sender_sid: str | None = Field(None, max_length=64)

    @field_validator("friendly_name")
    @classmethod
    def strip_friendly_name(cls, value: str | None) -> str | None:
        if value is None:
            return value
        value = value.strip()
        if not value:
            raise ValueError("friendly_name cannot be blank")
        return value


class TwilioSenderResponse(BaseModel):
    """A configured sender."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    friendly_name: str
    phone_e164: str
    channel: Channel
    description: str | None = None
    phone_number_sid: str | None = None
    sender_sid: str | None = None
    created_at: datetime


@dataclass
class TwilioCredentials:
    """
    Decrypted provider credentials for one RTO.

    Used transiently to authenticate an outbound call; never persisted.
    """

    account_sid: str
    auth_token: str = field(repr=False)
    messaging_service_sid: str | None = None
    default_template_sid: str | None = None
    validate_webhooks: bool = True
