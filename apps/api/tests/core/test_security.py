"""
Unit tests for the credential cipher dependencies.
"""

from unittest.mock import patch

import pytest
from fastapi import HTTPException
from pydantic import SecretStr

from rto_api.core import security
from rto_api.core.crypto import KeyConfigurationError, SecretEnvelopeCipher


@pytest.fixture(autouse=True)
def clear_cipher_cache():
    """Each test builds the cipher from its own patched settings."""
    security.build_secret_cipher.cache_clear()
    yield
    security.build_secret_cipher.cache_clear()


class TestGetSecretCipher:
    """Tests for get_secret_cipher."""

    def test_returns_cipher_when_configured(self, passphrase):
        with patch.object(security.settings, "twilio_cfg_enc_key", SecretStr(passphrase)):
            cipher = security.get_secret_cipher()
        assert isinstance(cipher, SecretEnvelopeCipher)

    def test_missing_key_is_http_500(self):
        with patch.object(security.settings, "twilio_cfg_enc_key", None):
            with pytest.raises(HTTPException) as exc_info:
                security.get_secret_cipher()
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail["error"] == "ENCRYPTION_KEY_MISCONFIGURED"

    def test_short_key_is_http_500(self):
        with patch.object(security.settings, "twilio_cfg_enc_key", SecretStr("p" * 31)):
            with pytest.raises(HTTPException) as exc_info:
                security.get_secret_cipher()
        assert exc_info.value.status_code == 500


class TestCheckSecretCipherConfiguration:
    """Tests for the startup configuration check."""

    def test_valid_key(self, passphrase):
        with patch.object(security.settings, "twilio_cfg_enc_key", SecretStr(passphrase)):
            assert security.check_secret_cipher_configuration() is True

    def test_invalid_key_in_development_returns_false(self):
        with (
            patch.object(security.settings, "twilio_cfg_enc_key", None),
            patch.object(security.settings, "python_env", "development"),
        ):
            assert security.check_secret_cipher_configuration() is False

    def test_invalid_key_in_production_is_fatal(self):
        with (
            patch.object(security.settings, "twilio_cfg_enc_key", SecretStr("short")),
            patch.object(security.settings, "python_env", "production"),
        ):
            with pytest.raises(KeyConfigurationError):
                security.check_secret_cipher_configuration()
