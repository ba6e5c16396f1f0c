"""
Security Dependencies

Builds the credential cipher from configuration. The passphrase is read from
settings once and passed into SecretEnvelopeCipher explicitly; route handlers
receive the cipher through the ``get_secret_cipher`` dependency.

SECURITY NOTE:
- A missing or short TWILIO_CFG_ENC_KEY is fatal at startup in production
- In other environments it is fatal at first use (HTTP 500)
- There is no unencrypted fallback path
"""

import logging
from functools import lru_cache

from fastapi import HTTPException, status

from rto_api.core.config import settings
from rto_api.core.crypto import KeyConfigurationError, SecretEnvelopeCipher

logger = logging.getLogger(__name__)


@lru_cache
def build_secret_cipher() -> SecretEnvelopeCipher:
    """
    Build the process-wide credential cipher from settings.

    Raises:
        KeyConfigurationError: If the passphrase is missing or too short.
    """
    key = settings.twilio_cfg_enc_key
    return SecretEnvelopeCipher(key.get_secret_value() if key else None)


def check_secret_cipher_configuration() -> bool:
    """
    Validate the credential cipher configuration at startup.

    Returns:
        True if the cipher is usable.

    Raises:
        KeyConfigurationError: In production, if the passphrase is invalid.
    """
    try:
        build_secret_cipher()
        return True
    except KeyConfigurationError:
        logger.error("TWILIO_CFG_ENC_KEY is missing or shorter than 32 characters")
        if settings.is_production:
            raise
        return False


def get_secret_cipher() -> SecretEnvelopeCipher:
    """
    FastAPI dependency returning the credential cipher.

    Raises:
        HTTPException 500: If the encryption key is misconfigured.
    """
    try:
        return build_secret_cipher()
    except KeyConfigurationError as e:
        logger.error("Credential cipher unavailable: encryption key misconfigured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "error": "ENCRYPTION_KEY_MISCONFIGURED",
                "message": "Missing server encryption key TWILIO_CFG_ENC_KEY",
            },
        ) from e


__all__ = [
    "build_secret_cipher",
    "check_secret_cipher_configuration",
    "get_secret_cipher",
]
