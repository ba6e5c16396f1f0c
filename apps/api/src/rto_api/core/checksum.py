"""
Identifier Checksums

Local checksum validation for identifiers that are later sent to external
registries:

- USI (Unique Student Identifier): 10 symbols, Luhn mod N check symbol over
  a 32-symbol alphabet. Validated before any registry call so malformed input
  never reaches the rate-limited registry API.
- SSID (Software Subscription Identifier): 10 decimal digits, the last being
  the sum of the first nine modulo 10 (not Luhn).

Every function here is pure; nothing is cached or shared between calls.
"""

import enum
import secrets

USI_LENGTH = 10
USI_PAYLOAD_LENGTH = USI_LENGTH - 1

SSID_LENGTH = 10


class MalformedInputError(ValueError):
    """Raised when a checksum payload has the wrong length or an unknown symbol."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class ChecksumOutcome(str, enum.Enum):
    """Result of checking an identifier."""

    VALID = "valid"
    MALFORMED = "malformed"
    MISMATCH = "mismatch"


class ChecksumAlphabet:
    """
    Ordered, immutable set of checksum symbols.

    Each symbol maps to its position in the sequence. The alphabet size is
    the modulus used by the Luhn mod N algorithm.
    """

    __slots__ = ("_symbols", "_index")

    def __init__(self, symbols: str):
        if len(set(symbols)) != len(symbols):
            raise ValueError("Checksum alphabet symbols must be distinct")
        self._symbols = symbols
        self._index = {symbol: position for position, symbol in enumerate(symbols)}

    def __len__(self) -> int:
        return len(self._symbols)

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._index

    def __iter__(self):
        return iter(self._symbols)

    def __repr__(self) -> str:
        return f"ChecksumAlphabet({self._symbols!r})"

    @property
    def symbols(self) -> str:
        return self._symbols

    def index_of(self, symbol: str) -> int:
        """Return the index of ``symbol``, raising MalformedInputError if absent."""
        try:
            return self._index[symbol]
        except KeyError:
            raise MalformedInputError(f"Invalid character {symbol!r} in identifier") from None

    def symbol_at(self, index: int) -> str:
        return self._symbols[index]


# 0, 1, I and O are excluded to avoid visual ambiguity.
USI_ALPHABET = ChecksumAlphabet("23456789ABCDEFGHJKLMNPQRSTUVWXYZ")


def compute_check_symbol(payload: str, alphabet: ChecksumAlphabet = USI_ALPHABET) -> str:
    """
    Compute the Luhn mod N check symbol for a 9-symbol USI payload.

    Symbols are processed right to left with a weighting factor that starts
    at 2 and alternates with 1. Each weighted value is folded into base N
    (quotient plus remainder) before being summed.

    Args:
        payload: The first nine symbols of a USI. No case folding is applied.
        alphabet: Symbol set defining the modulus.

    Returns:
        The check symbol.

    Raises:
        MalformedInputError: If the payload length is wrong or a symbol is
            not part of the alphabet.
    """
    if len(payload) != USI_PAYLOAD_LENGTH:
        raise MalformedInputError(
            f"Payload must be {USI_PAYLOAD_LENGTH} characters, got {len(payload)}"
        )

    n = len(alphabet)
    factor = 2
    total = 0

    for symbol in reversed(payload):
        addend = factor * alphabet.index_of(symbol)
        factor = 1 if factor == 2 else 2
        total += addend // n + addend % n

    return alphabet.symbol_at((n - total % n) % n)


def check_identifier(identifier: object) -> ChecksumOutcome:
    """
    Check a USI and report why it failed, if it did.

    Only ASCII input is accepted: Unicode case mapping can change the
    length ("\u00df" -> "SS") or map foreign letters onto alphabet symbols
    ("\u017f" -> "S"). Never raises.
    """
    if not isinstance(identifier, str) or not identifier.isascii():
        return ChecksumOutcome.MALFORMED
    if len(identifier) != USI_LENGTH:
        return ChecksumOutcome.MALFORMED

    candidate = identifier.upper()

    try:
        expected = compute_check_symbol(candidate[:USI_PAYLOAD_LENGTH])
    except MalformedInputError:
        return ChecksumOutcome.MALFORMED

    if candidate[USI_PAYLOAD_LENGTH] != expected:
        return ChecksumOutcome.MISMATCH

    return ChecksumOutcome.VALID


def verify(identifier: object) -> bool:
    """Return True if ``identifier`` is a well-formed USI with a valid check symbol."""
    return check_identifier(identifier) is ChecksumOutcome.VALID


def _ssid_check_digit(prefix: str) -> str:
    return str(sum(int(digit) for digit in prefix) % 10)


def generate_ssid() -> str:
    """
    Generate a Software Subscription Identifier.

    Nine random digits followed by their digit sum modulo 10. Leading zeros
    are preserved, so the result is always 10 characters.
    """
    prefix = "".join(str(secrets.randbelow(10)) for _ in range(SSID_LENGTH - 1))
    return prefix + _ssid_check_digit(prefix)


def validate_ssid(value: object) -> bool:
    """Return True if ``value`` is 10 ASCII digits with a matching check digit."""
    if not isinstance(value, str) or len(value) != SSID_LENGTH:
        return False
    if not (value.isascii() and value.isdigit()):
        return False
    return value[-1] == _ssid_check_digit(value[:-1])
