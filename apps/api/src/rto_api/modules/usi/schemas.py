"""
USI Schemas

Pydantic schemas for the USI pre-check endpoints.
"""

from pydantic import BaseModel, Field

from rto_api.core.checksum import ChecksumOutcome


class USIVerifyRequest(BaseModel):
    """Request body for POST /usi/verify."""

    usi: str = Field(..., min_length=1, max_length=64)


class USIVerifyResponse(BaseModel):
    """Result of a local USI pre-check.

    ``error`` is only present when ``valid`` is False.
    """

    valid: bool
    outcome: ChecksumOutcome
    error: str | None = None
    message: str


class USIBatchVerifyRequest(BaseModel):
    """Request body for POST /usi/verify-batch."""

    usis: list[str] = Field(..., min_length=1)


class USIBatchItem(BaseModel):
    """A single entry in a batch result, in input order."""

    index: int
    usi: str
    valid: bool
    outcome: ChecksumOutcome


class USIBatchVerifyResponse(BaseModel):
    """Response for POST /usi/verify-batch."""

    results: list[USIBatchItem]
    valid_count: int
    invalid_count: int
