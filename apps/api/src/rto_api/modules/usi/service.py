"""
USI Service Layer

Local pre-check of Unique Student Identifiers before any call to the USI
Registry. The registry is rate-limited and costly to call, so malformed or
mistyped identifiers are rejected here with a reason the caller can act on.

The remote registry lookup itself is not implemented.
"""

import logging

from rto_api.core.checksum import ChecksumOutcome, check_identifier
from rto_api.modules.usi.schemas import (
    USIBatchItem,
    USIBatchVerifyResponse,
    USIVerifyResponse,
)

logger = logging.getLogger(__name__)

_REJECTIONS: dict[ChecksumOutcome, tuple[str, str]] = {
    ChecksumOutcome.MALFORMED: (
        "MALFORMED_USI",
        "USI must be 10 characters using digits 2-9 and letters other than I and O.",
    ),
    ChecksumOutcome.MISMATCH: (
        "INVALID_USI_CHECKSUM",
        "Invalid USI Checksum. Please check the USI for typing errors.",
    ),
}


def verify_usi(usi: str) -> USIVerifyResponse:
    """
    Pre-check a single USI.

    Args:
        usi: User-submitted identifier (any case)

    Returns:
        USIVerifyResponse with ``valid`` and, on failure, an error code
    """
    outcome = check_identifier(usi)

    if outcome is ChecksumOutcome.VALID:
        return USIVerifyResponse(
            valid=True,
            outcome=outcome,
            message="USI format is valid. Registry verification is not performed.",
        )

    error_code, message = _REJECTIONS[outcome]
    logger.info(f"USI pre-check rejected: outcome={outcome.value}")
    return USIVerifyResponse(valid=False, outcome=outcome, error=error_code, message=message)


def verify_usi_batch(usis: list[str]) -> USIBatchVerifyResponse:
    """
    Pre-check a list of USIs independently.

    Results are returned in input order. One malformed entry never affects
    the others.
    """
    results = []
    for index, usi in enumerate(usis):
        outcome = check_identifier(usi)
        results.append(
            USIBatchItem(
                index=index,
                usi=usi,
                valid=outcome is ChecksumOutcome.VALID,
                outcome=outcome,
            )
        )

    valid_count = sum(1 for item in results if item.valid)
    logger.info(f"USI batch pre-check: total={len(results)}, valid={valid_count}")

    return USIBatchVerifyResponse(
        results=results,
        valid_count=valid_count,
        invalid_count=len(results) - valid_count,
    )
