"""
Shared test fixtures.
"""

from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import pytest

from rto_api.core.crypto import SecretEnvelopeCipher

TEST_PASSPHRASE = "test-passphrase-0123456789-abcdefghij"


@pytest.fixture
def passphrase():
    """A passphrase comfortably above the 32 character minimum."""
    return TEST_PASSPHRASE


@pytest.fixture
def cipher():
    """Credential cipher bound to the test passphrase."""
    return SecretEnvelopeCipher(TEST_PASSPHRASE)


@pytest.fixture
def mock_db():
    """Create a mock database session."""
    db = AsyncMock()
    db.commit = AsyncMock()
    db.refresh = AsyncMock()
    db.get = AsyncMock()
    db.execute = AsyncMock()
    db.add = MagicMock()
    return db


@pytest.fixture
def rto_id():
    """Return a consistent RTO UUID for testing."""
    return UUID("00000000-0000-0000-0000-0000000000aa")
