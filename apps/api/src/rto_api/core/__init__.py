"""
Core module - Configuration, database, and the identifier/secret integrity layer.
"""

from rto_api.core.checksum import (
    USI_ALPHABET,
    ChecksumAlphabet,
    ChecksumOutcome,
    MalformedInputError,
    check_identifier,
    compute_check_symbol,
    generate_ssid,
    validate_ssid,
    verify,
)
from rto_api.core.config import get_settings, settings
from rto_api.core.crypto import (
    IntegrityError,
    KeyConfigurationError,
    SecretCipherError,
    SecretEnvelopeCipher,
    decrypt_secret,
    encrypt_secret,
    mask_secret,
)
from rto_api.core.phone import Channel, InvalidFormatError, is_e164, normalize_phone
from rto_api.core.validators import is_valid_template_identifier

__all__ = [
    # Config
    "settings",
    "get_settings",
    # Checksum
    "USI_ALPHABET",
    "ChecksumAlphabet",
    "ChecksumOutcome",
    "MalformedInputError",
    "check_identifier",
    "compute_check_symbol",
    "verify",
    "generate_ssid",
    "validate_ssid",
    # Phone
    "Channel",
    "InvalidFormatError",
    "is_e164",
    "normalize_phone",
    # Crypto
    "SecretCipherError",
    "KeyConfigurationError",
    "IntegrityError",
    "SecretEnvelopeCipher",
    "encrypt_secret",
    "decrypt_secret",
    "mask_secret",
    # Validators
    "is_valid_template_identifier",
]
