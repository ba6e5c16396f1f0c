"""
Secret Envelope Encryption

Authenticated encryption of third-party API credentials (messaging provider
auth tokens) so that a database leak does not expose usable secrets.

Envelope layout (base64 encoded for storage):

    IV (12 bytes) || GCM tag (16 bytes) || ciphertext

The AES-256 key is the SHA-256 digest of a passphrase of at least 32
characters. Exactly one cipher suite is supported; there is no key
identifier in the envelope.

SECURITY:
- A fresh IV is drawn from os.urandom for every encryption
- The tag is verified before any plaintext is returned
- Passphrases, keys and plaintexts never appear in logs or error messages
"""

import base64
import binascii
import hashlib
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

MIN_PASSPHRASE_LENGTH = 32
IV_LENGTH = 12
TAG_LENGTH = 16
HEADER_LENGTH = IV_LENGTH + TAG_LENGTH


class SecretCipherError(Exception):
    """Base exception for secret envelope errors."""


class KeyConfigurationError(SecretCipherError):
    """Raised when the encryption passphrase is missing or too short."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message
            or f"Encryption key missing or too short (min {MIN_PASSPHRASE_LENGTH} chars)"
        )


class IntegrityError(SecretCipherError):
    """Raised when an envelope fails authentication or cannot be parsed."""

    def __init__(self, message: str = "Secret envelope failed integrity verification"):
        super().__init__(message)


def derive_key(passphrase: str | None) -> bytes:
    """
    Derive the 256-bit AES key from a passphrase.

    Raises:
        KeyConfigurationError: If the passphrase is missing or shorter than
            MIN_PASSPHRASE_LENGTH characters.
    """
    if not passphrase or len(passphrase) < MIN_PASSPHRASE_LENGTH:
        raise KeyConfigurationError()
    return hashlib.sha256(passphrase.encode("utf-8")).digest()


class SecretEnvelopeCipher:
    """
    AES-256-GCM cipher bound to one passphrase.

    The passphrase is supplied at construction (from configuration) and
    validated immediately, so a misconfigured key fails at first use rather
    than at the first decrypt.
    """

    def __init__(self, passphrase: str | None):
        self._aesgcm = AESGCM(derive_key(passphrase))

    def __repr__(self) -> str:
        return "SecretEnvelopeCipher(<redacted>)"

    def encrypt(self, plaintext: bytes) -> str:
        """
        Encrypt ``plaintext`` into a base64 envelope.

        Args:
            plaintext: Secret bytes to protect

        Returns:
            Base64 text of IV || tag || ciphertext
        """
        iv = os.urandom(IV_LENGTH)
        # AESGCM appends the tag to the ciphertext
        sealed = self._aesgcm.encrypt(iv, bytes(plaintext), None)
        ciphertext, tag = sealed[:-TAG_LENGTH], sealed[-TAG_LENGTH:]
        return base64.b64encode(iv + tag + ciphertext).decode("ascii")

    def decrypt(self, envelope: str) -> bytes:
        """
        Decrypt a base64 envelope produced by ``encrypt``.

        Raises:
            IntegrityError: If the envelope is not valid base64, is too short,
                or its tag does not verify (tampering, wrong key, corruption).
        """
        try:
            payload = base64.b64decode(envelope, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            raise IntegrityError("Secret envelope is not valid base64") from e

        # Non-zero padding bits decode to the same bytes; only the canonical text is accepted
        if base64.b64encode(payload).decode("ascii") != envelope:
            raise IntegrityError("Secret envelope is not canonical base64")

        if len(payload) < HEADER_LENGTH:
            raise IntegrityError("Secret envelope is truncated")

        iv = payload[:IV_LENGTH]
        tag = payload[IV_LENGTH:HEADER_LENGTH]
        ciphertext = payload[HEADER_LENGTH:]

        try:
            return self._aesgcm.decrypt(iv, ciphertext + tag, None)
        except InvalidTag as e:
            raise IntegrityError() from e


def encrypt_secret(plaintext: bytes, passphrase: str | None) -> str:
    """Encrypt ``plaintext`` under ``passphrase``. See SecretEnvelopeCipher.encrypt."""
    return SecretEnvelopeCipher(passphrase).encrypt(plaintext)


def decrypt_secret(envelope: str, passphrase: str | None) -> bytes:
    """Decrypt ``envelope`` under ``passphrase``. See SecretEnvelopeCipher.decrypt."""
    return SecretEnvelopeCipher(passphrase).decrypt(envelope)


def mask_secret(value: str) -> str:
    """Show only the last 4 characters of a secret. Display formatting only."""
    return f"**** **** **** {value[-4:]}"
