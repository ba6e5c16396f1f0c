"""
WhatsApp Messaging Service Layer

Messaging send boundary. Every check that can reject a send runs before the
provider is called, so malformed destinations never consume provider quota:

1. Destination: canonicalized to E.164 (channel prefixes are stripped)
2. Template identifier sanity check
3. Credentials: decrypted via the credential read path (hard failure on
   integrity errors)
4. Content: a body, a template, or the RTO's default template
5. Sender: explicit sender, else the messaging service SID

Provider failures after these checks are returned as SendResult(ok=False).
"""

import json
import logging
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from rto_api.core.crypto import SecretEnvelopeCipher
from rto_api.core.phone import Channel, InvalidFormatError, normalize_phone, to_channel_address
from rto_api.core.validators import is_valid_template_identifier
from rto_api.modules.twilio_settings import repository as settings_repository
from rto_api.modules.twilio_settings import service as settings_service
from rto_api.modules.twilio_settings.schemas import TwilioCredentials
from rto_api.modules.whatsapp.provider import (
    MessagePayload,
    MessagingProvider,
    MessagingProviderError,
)
from rto_api.modules.whatsapp.schemas import SendResult, SendWhatsAppRequest

logger = logging.getLogger(__name__)


class MessagingServiceError(Exception):
    """Base exception for messaging send errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)


class MissingContentError(MessagingServiceError):
    """Raised when neither a body nor a template is available."""

    def __init__(self):
        super().__init__(
            message="Either body or template_sid is required",
            error_code="MISSING_CONTENT",
        )


class InvalidDestinationError(MessagingServiceError):
    """Raised when the destination is not a valid E.164 number."""

    def __init__(self):
        super().__init__(
            message="Destination must be in E.164 format, e.g. +61412345678",
            error_code="INVALID_PHONE",
        )


class InvalidTemplateError(MessagingServiceError):
    """Raised when a template identifier is malformed."""

    def __init__(self):
        super().__init__(
            message="Template identifier must be at least 6 characters of letters, digits, _ - : .",
            error_code="INVALID_TEMPLATE_ID",
        )


class SenderNotFoundError(MessagingServiceError):
    """Raised when the requested sender does not exist for the RTO."""

    def __init__(self, sender_id: UUID):
        super().__init__(
            message=f"Sender {sender_id} not found",
            error_code="SENDER_NOT_FOUND",
            status_code=404,
        )


class SenderChannelError(MessagingServiceError):
    """Raised when the selected sender is not registered for WhatsApp."""

    def __init__(self, sender_id: UUID):
        super().__init__(
            message=f"Sender {sender_id} is not a WhatsApp sender",
            error_code="SENDER_NOT_WHATSAPP",
        )


class NoSenderError(MessagingServiceError):
    """Raised when no sender is selected and no messaging service is configured."""

    def __init__(self):
        super().__init__(
            message="No sender selected and no Messaging Service SID configured",
            error_code="NO_SENDER",
        )


async def _select_from(
    db: AsyncSession,
    rto_id: UUID,
    sender_id: UUID | None,
    credentials: TwilioCredentials,
) -> MessagePayload:
    """Resolve the sending identity into a partial payload."""
    if sender_id:
        sender = await settings_repository.get_sender(db, rto_id, sender_id)
        if sender is None:
            raise SenderNotFoundError(sender_id)
        if sender.channel != Channel.WHATSAPP:
            raise SenderChannelError(sender_id)
        return MessagePayload(to="", from_=to_channel_address(sender.phone_e164, Channel.WHATSAPP))

    if credentials.messaging_service_sid:
        return MessagePayload(to="", messaging_service_sid=credentials.messaging_service_sid)

    raise NoSenderError()


async def send_whatsapp_message(
    db: AsyncSession,
    cipher: SecretEnvelopeCipher,
    provider: MessagingProvider,
    rto_id: UUID,
    request: SendWhatsAppRequest,
) -> SendResult:
    """
    Validate and send a WhatsApp message.

    Args:
        db: Database session
        cipher: Credential cipher
        provider: Outbound messaging provider
        rto_id: Tenant id
        request: Send request

    Returns:
        SendResult with the provider SID, or ok=False with the provider error

    Raises:
        InvalidDestinationError: If ``to`` is not E.164 (no provider call)
        InvalidTemplateError: If ``template_sid`` is malformed
        MissingContentError: If there is no body and no template
        SenderNotFoundError / NoSenderError: If no sending identity resolves
        SenderChannelError: If the selected sender is not a WhatsApp sender
        CredentialServiceError: If credentials are missing or fail decryption
    """
    try:
        to_e164 = normalize_phone(request.to)
    except InvalidFormatError as e:
        logger.warning(f"WhatsApp send for RTO {rto_id} aborted: invalid destination")
        raise InvalidDestinationError() from e

    if request.template_sid is not None and not is_valid_template_identifier(request.template_sid):
        raise InvalidTemplateError()

    credentials = await settings_service.get_config_for_rto(db, cipher, rto_id)

    template_sid = request.template_sid
    if not request.body and not template_sid:
        template_sid = credentials.default_template_sid
    if not request.body and not template_sid:
        raise MissingContentError()

    payload = await _select_from(db, rto_id, request.sender_id, credentials)
    payload.to = to_channel_address(to_e164, Channel.WHATSAPP)

    if template_sid:
        payload.content_sid = template_sid
        if request.template_params:
            payload.content_variables = json.dumps(request.template_params)
    else:
        payload.body = request.body
        payload.media_url = list(request.media_urls or [])

    try:
        sid = await provider.send(credentials, payload)
    except MessagingProviderError as e:
        logger.error(f"WhatsApp send failed for RTO {rto_id}: {e}")
        return SendResult(ok=False, to=to_e164, error=str(e))

    logger.info(f"WhatsApp message sent for RTO {rto_id}: sid={sid}")
    return SendResult(ok=True, sid=sid, to=to_e164)
