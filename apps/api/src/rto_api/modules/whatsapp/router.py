"""
WhatsApp Messaging Router

Endpoints:
- POST /rtos/{rto_id}/whatsapp/messages - Send a WhatsApp message
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rto_api.core.crypto import SecretEnvelopeCipher
from rto_api.core.database import get_db
from rto_api.core.security import get_secret_cipher
from rto_api.modules.twilio_settings.service import CredentialServiceError
from rto_api.modules.whatsapp import service
from rto_api.modules.whatsapp.provider import MessagingProvider, get_messaging_provider
from rto_api.modules.whatsapp.schemas import SendResult, SendWhatsAppRequest
from rto_api.modules.whatsapp.service import MessagingServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/messages",
    response_model=SendResult,
    summary="Send WhatsApp Message",
    responses={
        400: {"description": "Invalid destination, template or missing content"},
        404: {"description": "Sender or provider settings not found"},
        500: {"description": "Credentials could not be decrypted"},
        502: {"description": "Provider rejected the message"},
    },
)
async def send_message(
    rto_id: UUID,
    data: SendWhatsAppRequest,
    db: AsyncSession = Depends(get_db),
    cipher: SecretEnvelopeCipher = Depends(get_secret_cipher),
    provider: MessagingProvider = Depends(get_messaging_provider),
) -> SendResult:
    """
    Send a WhatsApp message from the RTO's account.

    Invalid input is rejected before the provider is called.

    Raises:
        HTTPException 400/404: Validation or lookup failure
        HTTPException 500: Credential decryption failure
        HTTPException 502: Provider failure
    """
    try:
        result = await service.send_whatsapp_message(db, cipher, provider, rto_id, data)
    except (MessagingServiceError, CredentialServiceError) as e:
        raise HTTPException(
            status_code=e.status_code,
            detail={
                "error": e.error_code,
                "message": e.message,
            },
        ) from e

    if not result.ok:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail={
                "error": "PROVIDER_ERROR",
                "message": result.error or "Message could not be sent",
            },
        )

    return result
