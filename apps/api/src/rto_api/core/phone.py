"""
Phone Number Canonicalization

Validates phone numbers into E.164 form (``+`` followed by 6-15 digits)
before they reach a paid messaging API. This is a validator, not a parser:
no country code is inferred and no reformatting is attempted.
"""

import enum
import re

E164_PATTERN = re.compile(r"\+[0-9]{6,15}")


class Channel(str, enum.Enum):
    """Messaging channels supported by the provider."""

    WHATSAPP = "whatsapp"
    SMS = "sms"


CHANNEL_PREFIXES = tuple(f"{channel.value}:" for channel in Channel)


class InvalidFormatError(ValueError):
    """Raised when a phone number is not in canonical E.164 form."""

    def __init__(self, value: str):
        self.value = value
        super().__init__("Phone number must be in E.164 format, e.g. +61412345678")


def is_e164(value: str) -> bool:
    """Return True if ``value`` is exactly in canonical form."""
    return E164_PATTERN.fullmatch(value) is not None


def normalize_phone(raw: str) -> str:
    """
    Canonicalize a phone number.

    Leading/trailing whitespace is removed and a single channel prefix such
    as ``whatsapp:`` is stripped. The remainder must already be E.164.

    Raises:
        InvalidFormatError: If the result is not ``+`` followed by 6-15 digits.
    """
    if not isinstance(raw, str):
        raise InvalidFormatError(repr(raw))

    value = raw.strip()
    lowered = value.lower()
    for prefix in CHANNEL_PREFIXES:
        if lowered.startswith(prefix):
            value = value[len(prefix) :].strip()
            break

    if not is_e164(value):
        raise InvalidFormatError(raw)

    return value


def to_channel_address(phone: str, channel: Channel) -> str:
    """Format a phone number as the provider address for ``channel``."""
    e164 = normalize_phone(phone)
    if channel is Channel.WHATSAPP:
        return f"whatsapp:{e164}"
    return e164
