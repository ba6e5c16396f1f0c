"""
Unit tests for secret envelope encryption.

These tests cover:
- Round trip encryption/decryption
- Tamper detection on every byte of the envelope
- Passphrase length gate
- Envelope layout and IV freshness
- Display masking
"""

import base64

import pytest

from rto_api.core.crypto import (
    HEADER_LENGTH,
    IV_LENGTH,
    TAG_LENGTH,
    IntegrityError,
    KeyConfigurationError,
    SecretEnvelopeCipher,
    decrypt_secret,
    encrypt_secret,
    mask_secret,
)


def _flip_bit(envelope: str, byte_index: int, bit: int = 0) -> str:
    raw = bytearray(base64.b64decode(envelope))
    raw[byte_index] ^= 1 << bit
    return base64.b64encode(bytes(raw)).decode("ascii")


class TestRoundTrip:
    """Tests for encrypt/decrypt round trips."""

    @pytest.mark.parametrize(
        "plaintext",
        [b"x", b"twilio-auth-token-0123456789abcdef", "pässwörd ✓".encode(), bytes(range(256))],
    )
    def test_round_trip(self, cipher, plaintext):
        assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext

    def test_module_functions_round_trip(self, passphrase):
        envelope = encrypt_secret(b"secret", passphrase)
        assert decrypt_secret(envelope, passphrase) == b"secret"

    def test_separate_cipher_instances_share_key(self, passphrase):
        envelope = SecretEnvelopeCipher(passphrase).encrypt(b"secret")
        assert SecretEnvelopeCipher(passphrase).decrypt(envelope) == b"secret"

    def test_exactly_32_character_passphrase(self):
        passphrase = "p" * 32
        assert decrypt_secret(encrypt_secret(b"ok", passphrase), passphrase) == b"ok"


class TestEnvelopeLayout:
    """Tests for the IV || tag || ciphertext layout."""

    def test_envelope_length(self, cipher):
        plaintext = b"0123456789"
        raw = base64.b64decode(cipher.encrypt(plaintext))
        assert len(raw) == IV_LENGTH + TAG_LENGTH + len(plaintext)
        assert HEADER_LENGTH == 28

    def test_fresh_iv_per_call(self, cipher):
        first = base64.b64decode(cipher.encrypt(b"same"))
        second = base64.b64decode(cipher.encrypt(b"same"))
        assert first[:IV_LENGTH] != second[:IV_LENGTH]
        assert first != second

    def test_ciphertext_does_not_contain_plaintext(self, cipher):
        plaintext = b"very-recognisable-secret"
        raw = base64.b64decode(cipher.encrypt(plaintext))
        assert plaintext not in raw


class TestTamperDetection:
    """Any modification of the envelope must fail closed."""

    def test_flipping_any_byte_fails(self, cipher):
        envelope = cipher.encrypt(b"auth-token-value")
        length = len(base64.b64decode(envelope))
        for index in range(length):
            with pytest.raises(IntegrityError):
                cipher.decrypt(_flip_bit(envelope, index, bit=index % 8))

    @pytest.mark.parametrize("plaintext", [b"a", b"ab", b"abc", b"abcd", b"abcde"])
    def test_editing_any_envelope_character_fails(self, cipher, plaintext):
        """Bit edits to the stored text fail, including unused base64 padding bits."""
        envelope = cipher.encrypt(plaintext)
        for position, char in enumerate(envelope):
            for bit in range(7):
                edited = envelope[:position] + chr(ord(char) ^ (1 << bit)) + envelope[position + 1 :]
                with pytest.raises(IntegrityError):
                    cipher.decrypt(edited)

    def test_non_canonical_padding_bits_fail(self, cipher):
        envelope = cipher.encrypt(b"a")
        assert envelope.endswith("=")
        symbols = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
        last = envelope.rstrip("=")[-1]
        padding = envelope[len(envelope.rstrip("=")) :]
        sibling = symbols[symbols.index(last) ^ 1]
        edited = envelope.rstrip("=")[:-1] + sibling + padding
        assert base64.b64decode(edited) == base64.b64decode(envelope)
        with pytest.raises(IntegrityError):
            cipher.decrypt(edited)

    def test_wrong_key_fails(self, cipher):
        envelope = cipher.encrypt(b"auth-token-value")
        other = SecretEnvelopeCipher("another-passphrase-that-is-long-enough")
        with pytest.raises(IntegrityError):
            other.decrypt(envelope)

    def test_truncated_envelope_fails(self, cipher):
        raw = base64.b64decode(cipher.encrypt(b"auth-token-value"))
        with pytest.raises(IntegrityError):
            cipher.decrypt(base64.b64encode(raw[:HEADER_LENGTH - 1]).decode())
        with pytest.raises(IntegrityError):
            cipher.decrypt(base64.b64encode(raw[:-1]).decode())

    def test_appended_byte_fails(self, cipher):
        raw = base64.b64decode(cipher.encrypt(b"auth-token-value"))
        with pytest.raises(IntegrityError):
            cipher.decrypt(base64.b64encode(raw + b"\x00").decode())

    @pytest.mark.parametrize("envelope", ["not base64!!", "", "iv:deadbeef"])
    def test_garbage_envelope_fails(self, cipher, envelope):
        with pytest.raises(IntegrityError):
            cipher.decrypt(envelope)


class TestKeyLengthGate:
    """Passphrases shorter than 32 characters are rejected."""

    @pytest.mark.parametrize("passphrase", [None, "", "short", "p" * 31])
    def test_encrypt_rejects_short_passphrase(self, passphrase):
        with pytest.raises(KeyConfigurationError):
            encrypt_secret(b"secret", passphrase)

    @pytest.mark.parametrize("passphrase", [None, "", "p" * 31])
    def test_decrypt_rejects_short_passphrase(self, cipher, passphrase):
        envelope = cipher.encrypt(b"secret")
        with pytest.raises(KeyConfigurationError):
            decrypt_secret(envelope, passphrase)

    def test_constructor_rejects_short_passphrase(self):
        with pytest.raises(KeyConfigurationError):
            SecretEnvelopeCipher("p" * 31)

    def test_error_message_does_not_leak_passphrase(self):
        passphrase = "leaky-passphrase"
        with pytest.raises(KeyConfigurationError) as exc_info:
            SecretEnvelopeCipher(passphrase)
        assert passphrase not in str(exc_info.value)

    def test_repr_is_redacted(self, cipher, passphrase):
        assert passphrase not in repr(cipher)


class TestMaskSecret:
    """Tests for mask_secret."""

    def test_shows_last_four(self):
        assert mask_secret("abcdef123456") == "**** **** **** 3456"

    def test_short_value(self):
        assert mask_secret("ab") == "**** **** **** ab"
