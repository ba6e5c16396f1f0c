"""
USI Router

Endpoints:
- POST /usi/verify - Pre-check a single USI
- POST /usi/verify-batch - Pre-check many USIs (e.g. from a CSV import)

A failed pre-check returns HTTP 400 with ``valid: false``; no registry call
is attempted.
"""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from rto_api.core.config import settings
from rto_api.modules.usi import service
from rto_api.modules.usi.schemas import (
    USIBatchVerifyRequest,
    USIBatchVerifyResponse,
    USIVerifyRequest,
    USIVerifyResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/verify",
    response_model=USIVerifyResponse,
    summary="Pre-check a USI",
    responses={
        400: {
            "description": "USI failed the local checksum pre-check",
            "content": {
                "application/json": {
                    "example": {
                        "valid": False,
                        "outcome": "mismatch",
                        "error": "INVALID_USI_CHECKSUM",
                        "message": "Invalid USI Checksum. Please check the USI for typing errors.",
                    }
                }
            },
        },
    },
)
async def verify_usi(data: USIVerifyRequest, response: Response) -> USIVerifyResponse:
    """
    Validate a USI locally using the Luhn mod N checksum.

    Args:
        data: Request body containing the USI
        response: Outgoing response (status set to 400 on rejection)

    Returns:
        Pre-check result
    """
    result = service.verify_usi(data.usi)
    if not result.valid:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.post(
    "/verify-batch",
    response_model=USIBatchVerifyResponse,
    summary="Pre-check a batch of USIs",
)
async def verify_usi_batch(data: USIBatchVerifyRequest) -> USIBatchVerifyResponse:
    """
    Validate many USIs at once. Always returns 200; inspect each result.

    Raises:
        HTTPException 400: If the batch exceeds the configured maximum size
    """
    if len(data.usis) > settings.usi_batch_max_items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": "BATCH_TOO_LARGE",
                "message": f"A batch may contain at most {settings.usi_batch_max_items} USIs.",
            },
        )

    return service.verify_usi_batch(data.usis)
