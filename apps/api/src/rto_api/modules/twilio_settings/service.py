"""
Twilio Settings Service Layer

Credential configuration boundary for the messaging provider.

Write path:
   - Trim and validate submitted fields
   - Encrypt the auth token with the process-wide cipher
   - Persist only the envelope and a masked form

Read path:
   - Load the RTO's settings
   - Decrypt the auth token for transient use by an outbound call

Security considerations:
- The plaintext token is never persisted, logged or returned by the API
- Decryption failures are surfaced as hard errors (HTTP 500); there is no
  fallback to an unencrypted or partially decrypted value
- Sender phone numbers are canonicalized to E.164 before being stored
"""

import logging
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rto_api.core.crypto import IntegrityError, SecretEnvelopeCipher, mask_secret
from rto_api.core.phone import InvalidFormatError, normalize_phone
from rto_api.core.validators import is_valid_template_identifier
from rto_api.modules.twilio_settings import repository
from rto_api.modules.twilio_settings.models import TwilioSender, TwilioSettings
from rto_api.modules.twilio_settings.schemas import (
    TwilioConfigResponse,
    TwilioConfigUpdate,
    TwilioCredentials,
    TwilioSenderCreate,
    TwilioSenderUpdate,
)

logger = logging.getLogger(__name__)


class CredentialServiceError(Exception):
    """Base exception for credential configuration errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class NoFieldsToUpdateError(CredentialServiceError):
    """Raised when a config update carries no changes."""

    def __init__(self):
        super().__init__(message="No fields to update", error_code="NO_FIELDS_TO_UPDATE")


class InvalidTemplateIdError(CredentialServiceError):
    """Raised when a template identifier is malformed."""

    def __init__(self):
        super().__init__(
            message="Template identifier must be at least 6 characters of letters, digits, _ - : .",
            error_code="INVALID_TEMPLATE_ID",
        )


class InvalidPhoneError(CredentialServiceError):
    """Raised when a sender phone number is not E.164."""

    def __init__(self):
        super().__init__(
            message="phone_e164 must be in E.164 format, e.g. +61412345678",
            error_code="INVALID_PHONE",
        )


class SettingsNotFoundError(CredentialServiceError):
    """Raised when an RTO has no usable provider settings."""

    def __init__(self, message: str = "Twilio settings not found for RTO"):
        super().__init__(message=message, error_code="SETTINGS_NOT_FOUND", status_code=404)


class SenderNotFoundError(CredentialServiceError):
    """Raised when a sender does not exist for the RTO."""

    def __init__(self, sender_id: UUID):
        super().__init__(
            message=f"Sender {sender_id} not found",
            error_code="SENDER_NOT_FOUND",
            status_code=404,
        )


class CredentialDecryptionError(CredentialServiceError):
    """Raised when a stored credential envelope fails integrity verification."""

    def __init__(self):
        super().__init__(
            message="Stored provider credentials could not be decrypted",
            error_code="CREDENTIAL_DECRYPTION_FAILED",
            status_code=500,
        )


def _to_public_config(row: TwilioSettings | None) -> TwilioConfigResponse:
    if row is None:
        return TwilioConfigResponse()
    return TwilioConfigResponse(
        account_sid=row.account_sid,
        messaging_service_sid=row.messaging_service_sid,
        default_template_sid=row.default_template_sid,
        validate_webhooks=row.validate_webhooks,
        auth_token_masked=row.auth_token_masked,
        has_token=bool(row.auth_token_masked),
    )


async def get_public_config(db: AsyncSession, rto_id: UUID) -> TwilioConfigResponse:
    """Return the masked provider configuration for an RTO."""
    row = await repository.get_settings_by_rto(db, rto_id)
    return _to_public_config(row)


async def upsert_config(
    db: AsyncSession,
    cipher: SecretEnvelopeCipher,
    rto_id: UUID,
    data: TwilioConfigUpdate,
) -> TwilioConfigResponse:
    """
    Create or update an RTO's provider configuration.

    Args:
        db: Database session
        cipher: Credential cipher built from configuration
        rto_id: Tenant id
        data: Submitted fields (omitted fields are left unchanged)

    Returns:
        Masked configuration after the update

    Raises:
        NoFieldsToUpdateError: If nothing would change
        InvalidTemplateIdError: If default_template_sid is malformed
    """
    submitted = data.model_fields_set
    updates: dict[str, Any] = {}

    if data.account_sid and data.account_sid.strip():
        updates["account_sid"] = data.account_sid.strip()

    if "messaging_service_sid" in submitted:
        updates["messaging_service_sid"] = (data.messaging_service_sid or "").strip() or None

    if "default_template_sid" in submitted:
        template_sid = (data.default_template_sid or "").strip() or None
        if template_sid is not None and not is_valid_template_identifier(template_sid):
            raise InvalidTemplateIdError()
        updates["default_template_sid"] = template_sid

    if data.validate_webhooks is not None:
        updates["validate_webhooks"] = data.validate_webhooks

    if data.auth_token and data.auth_token.strip():
        token = data.auth_token.strip()
        updates["auth_token_cipher"] = cipher.encrypt(token.encode("utf-8"))
        updates["auth_token_masked"] = mask_secret(token)

    if not updates:
        raise NoFieldsToUpdateError()

    row = await repository.upsert_settings(db, rto_id, updates)

    # Column names only; values may be secret
    logger.info(f"Updated Twilio settings for RTO {rto_id}: fields={sorted(updates)}")
    return _to_public_config(row)


async def get_config_for_rto(
    db: AsyncSession,
    cipher: SecretEnvelopeCipher,
    rto_id: UUID,
) -> TwilioCredentials:
    """
    Load and decrypt an RTO's provider credentials.

    Raises:
        SettingsNotFoundError: If settings, account SID or token are missing
        CredentialDecryptionError: If the stored envelope fails verification
    """
    row = await repository.get_settings_by_rto(db, rto_id)
    if row is None:
        raise SettingsNotFoundError()
    if not row.account_sid or not row.auth_token_cipher:
        raise SettingsNotFoundError("Twilio account SID or auth token not configured for RTO")

    try:
        auth_token = cipher.decrypt(row.auth_token_cipher).decode("utf-8")
    except IntegrityError as e:
        logger.error(f"Twilio auth token for RTO {rto_id} failed integrity verification")
        raise CredentialDecryptionError() from e

    return TwilioCredentials(
        account_sid=row.account_sid,
        auth_token=auth_token,
        messaging_service_sid=row.messaging_service_sid,
        default_template_sid=row.default_template_sid,
        validate_webhooks=row.validate_webhooks,
    )


async def create_sender(
    db: AsyncSession,
    rto_id: UUID,
    data: TwilioSenderCreate,
) -> TwilioSender:
    """
    Register a sender number for an RTO.

    Raises:
        InvalidPhoneError: If phone_e164 is not canonical E.164
    """
    try:
        phone_e164 = normalize_phone(data.phone_e164)
    except InvalidFormatError as e:
        logger.warning(f"Rejected sender for RTO {rto_id}: invalid phone format")
        raise InvalidPhoneError() from e

    sender = await repository.create_sender(
        db,
        rto_id,
        friendly_name=data.friendly_name,
        phone_e164=phone_e164,
        channel=data.channel,
        description=data.description,
        phone_number_sid=data.phone_number_sid,
        sender_sid=data.sender_sid,
    )

    logger.info(f"Created {data.channel.value} sender {sender.id} for RTO {rto_id}")
    return sender


async def list_senders(db: AsyncSession, rto_id: UUID) -> list[TwilioSender]:
    """List an RTO's senders."""
    return await repository.list_senders(db, rto_id)


async def update_sender(
    db: AsyncSession,
    rto_id: UUID,
    sender_id: UUID,
    data: TwilioSenderUpdate,
) -> TwilioSender:
    """
    Update a sender. A changed phone number is canonicalized like on create.

    Raises:
        NoFieldsToUpdateError: If no fields were submitted
        InvalidPhoneError: If phone_e164 is not canonical E.164
        SenderNotFoundError: If the sender does not belong to the RTO
    """
    updates = data.model_dump(exclude_unset=True)
    # Required columns cannot be cleared
    for column in ("friendly_name", "phone_e164", "channel"):
        if column in updates and updates[column] is None:
            del updates[column]
    if not updates:
        raise NoFieldsToUpdateError()

    if "phone_e164" in updates:
        try:
            updates["phone_e164"] = normalize_phone(updates["phone_e164"])
        except InvalidFormatError as e:
            logger.warning(f"Rejected sender update for RTO {rto_id}: invalid phone format")
            raise InvalidPhoneError() from e

    sender = await repository.get_sender(db, rto_id, sender_id)
    if sender is None:
        raise SenderNotFoundError(sender_id)

    sender = await repository.update_sender(db, sender, updates)

    logger.info(f"Updated sender {sender_id} for RTO {rto_id}: fields={sorted(updates)}")
    return sender


async def delete_sender(db: AsyncSession, rto_id: UUID, sender_id: UUID) -> None:
    """
    Delete a sender.

    Raises:
        SenderNotFoundError: If the sender does not belong to the RTO
    """
    sender = await repository.get_sender(db, rto_id, sender_id)
    if sender is None:
        raise SenderNotFoundError(sender_id)

    await repository.delete_sender(db, sender)
    logger.info(f"Deleted sender {sender_id} for RTO {rto_id}")
