"""
Unit tests for phone number canonicalization.
"""

import pytest

from rto_api.core.phone import (
    Channel,
    InvalidFormatError,
    is_e164,
    normalize_phone,
    to_channel_address,
)


class TestNormalizePhone:
    """Tests for normalize_phone."""

    def test_canonical_input_unchanged(self):
        assert normalize_phone("+61412345678") == "+61412345678"

    def test_strips_whatsapp_prefix(self):
        assert normalize_phone("whatsapp:+61412345678") == "+61412345678"

    def test_strips_sms_prefix(self):
        assert normalize_phone("sms:+61412345678") == "+61412345678"

    def test_prefix_is_case_insensitive(self):
        assert normalize_phone("WhatsApp:+61412345678") == "+61412345678"

    def test_trims_whitespace(self):
        assert normalize_phone("  whatsapp: +61412345678 \n") == "+61412345678"

    def test_boundary_lengths(self):
        assert normalize_phone("+123456") == "+123456"
        assert normalize_phone("+123456789012345") == "+123456789012345"

    @pytest.mark.parametrize(
        "raw",
        [
            "0412345678",  # no country code inference
            "+123",  # fewer than 6 digits
            "+12345",
            "+1234567890123456",  # more than 15 digits
            "+61 412 345 678",  # no reformatting
            "+61-412-345-678",
            "61412345678",
            "whatsapp:0412345678",
            "telegram:+61412345678",
            "+61412345678\n+61412345678",
            "+６１４１２３４５６７８",  # non-ASCII digits
            "",
        ],
    )
    def test_rejects_non_canonical_input(self, raw):
        with pytest.raises(InvalidFormatError):
            normalize_phone(raw)

    def test_rejects_non_string(self):
        with pytest.raises(InvalidFormatError):
            normalize_phone(None)

    def test_error_keeps_original_value(self):
        with pytest.raises(InvalidFormatError) as exc_info:
            normalize_phone("0412345678")
        assert exc_info.value.value == "0412345678"

    @pytest.mark.parametrize(
        "raw",
        ["+61412345678", "whatsapp:+61412345678", " sms:+447700900123 "],
    )
    def test_idempotent(self, raw):
        once = normalize_phone(raw)
        assert normalize_phone(once) == once


class TestIsE164:
    """Tests for is_e164."""

    def test_exact_match_only(self):
        assert is_e164("+61412345678")
        assert not is_e164(" +61412345678")
        assert not is_e164("whatsapp:+61412345678")


class TestToChannelAddress:
    """Tests for to_channel_address."""

    def test_whatsapp_address(self):
        assert to_channel_address("+61412345678", Channel.WHATSAPP) == "whatsapp:+61412345678"

    def test_sms_address_is_bare_number(self):
        assert to_channel_address("whatsapp:+61412345678", Channel.SMS) == "+61412345678"

    def test_invalid_number_raises(self):
        with pytest.raises(InvalidFormatError):
            to_channel_address("0412345678", Channel.WHATSAPP)
