"""
Twilio Settings Router

Credential configuration endpoints for an RTO's messaging provider.

Endpoints:
- GET /rtos/{rto_id}/twilio/config - Masked provider configuration
- PUT /rtos/{rto_id}/twilio/config - Create/update configuration (auth token write-only)
- GET /rtos/{rto_id}/twilio/senders - List senders
- POST /rtos/{rto_id}/twilio/senders - Register a sender
- PUT /rtos/{rto_id}/twilio/senders/{sender_id} - Update a sender
- DELETE /rtos/{rto_id}/twilio/senders/{sender_id} - Delete a sender

Security:
- The auth token is encrypted before storage and never returned
- Tenant authorization is enforced by the surrounding application
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from rto_api.core.crypto import SecretEnvelopeCipher
from rto_api.core.database import get_db
from rto_api.core.security import get_secret_cipher
from rto_api.modules.twilio_settings import service
from rto_api.modules.twilio_settings.schemas import (
    TwilioConfigResponse,
    TwilioConfigUpdate,
    TwilioSenderCreate,
    TwilioSenderResponse,
    TwilioSenderUpdate,
)
from rto_api.modules.twilio_settings.service import CredentialServiceError

logger = logging.getLogger(__name__)

router = APIRouter()


def _to_http_exception(e: CredentialServiceError) -> HTTPException:
    return HTTPException(
        status_code=e.status_code,
        detail={
            "error": e.error_code,
            "message": e.message,
        },
    )


@router.get(
    "/config",
    response_model=TwilioConfigResponse,
    summary="Get Twilio Configuration",
)
async def get_config(
    rto_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> TwilioConfigResponse:
    """Return the masked configuration. The auth token itself is never returned."""
    return await service.get_public_config(db, rto_id)


@router.put(
    "/config",
    response_model=TwilioConfigResponse,
    summary="Update Twilio Configuration",
    responses={
        400: {"description": "No fields to update or invalid template identifier"},
        500: {"description": "Server encryption key misconfigured"},
    },
)
async def update_config(
    rto_id: UUID,
    data: TwilioConfigUpdate,
    db: AsyncSession = Depends(get_db),
    cipher: SecretEnvelopeCipher = Depends(get_secret_cipher),
) -> TwilioConfigResponse:
    """
    Create or update provider configuration.

    A supplied ``auth_token`` is encrypted before storage; only its masked
    form is returned.

    Raises:
        HTTPException 400: If there is nothing to update or a field is invalid
        HTTPException 500: If the encryption key is misconfigured
    """
    try:
        return await service.upsert_config(db, cipher, rto_id, data)
    except CredentialServiceError as e:
        logger.warning(f"Twilio config update rejected for RTO {rto_id}: {e.error_code}")
        raise _to_http_exception(e) from e


@router.get(
    "/senders",
    response_model=list[TwilioSenderResponse],
    summary="List Senders",
)
async def list_senders(
    rto_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> list[TwilioSenderResponse]:
    """List the RTO's configured senders, newest first."""
    senders = await service.list_senders(db, rto_id)
    return [TwilioSenderResponse.model_validate(sender) for sender in senders]


@router.post(
    "/senders",
    response_model=TwilioSenderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register Sender",
    responses={400: {"description": "Phone number is not in E.164 format"}},
)
async def create_sender(
    rto_id: UUID,
    data: TwilioSenderCreate,
    db: AsyncSession = Depends(get_db),
) -> TwilioSenderResponse:
    """
    Register a sender number.

    Raises:
        HTTPException 400: If phone_e164 is not canonical E.164
    """
    try:
        sender = await service.create_sender(db, rto_id, data)
    except CredentialServiceError as e:
        raise _to_http_exception(e) from e

    return TwilioSenderResponse.model_validate(sender)


@router.put(
    "/senders/{sender_id}",
    response_model=TwilioSenderResponse,
    summary="Update Sender",
    responses={
        400: {"description": "No fields to update or phone number is not in E.164 format"},
        404: {"description": "Sender not found"},
    },
)
async def update_sender(
    rto_id: UUID,
    sender_id: UUID,
    data: TwilioSenderUpdate,
    db: AsyncSession = Depends(get_db),
) -> TwilioSenderResponse:
    """
    Update a sender.

    Raises:
        HTTPException 400: If phone_e164 is not canonical E.164
        HTTPException 404: If the sender does not exist for the RTO
    """
    try:
        sender = await service.update_sender(db, rto_id, sender_id, data)
    except CredentialServiceError as e:
        raise _to_http_exception(e) from e

    return TwilioSenderResponse.model_validate(sender)


@router.delete(
    "/senders/{sender_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Sender",
    responses={404: {"description": "Sender not found"}},
)
async def delete_sender(
    rto_id: UUID,
    sender_id: UUID,
    db: AsyncSession = Depends(get_db),
) -> None:
    """Delete a sender."""
    try:
        await service.delete_sender(db, rto_id, sender_id)
    except CredentialServiceError as e:
        raise _to_http_exception(e) from e
