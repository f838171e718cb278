"""Numeric codec for Starknet calldata words.

Converts between native Python integers/strings and the word-level
representation the contracts expect:
- u128 <-> (low, high) limbs of a 256-bit integer (128-bit split, always)
- felt word <-> short ASCII string (token name/symbol)
- address string syntax validation and parsing

All parse functions raise InvalidInput carrying the offending value; none of
them let a bare ValueError escape on malformed external input.
"""

from __future__ import annotations

from enum import Enum

from autoswappr.constants import (
    FIELD_PRIME,
    U8_MAX,
    U16_MAX,
    U32_MAX,
    U64_MAX,
    U128_MAX,
    UINT256_MAX,
)
from autoswappr.errors import InvalidInput, Uint128Overflow

LIMB_BITS = 128
LIMB_MASK = (1 << LIMB_BITS) - 1

# Short strings pack at most 31 bytes into one felt
SHORT_STRING_MAX_LEN = 31

# word_to_ascii only inspects the 8 low-order bytes of a word
ASCII_SCAN_BYTES = 8


class WordKind(str, Enum):
    """Cairo value kinds a calldata field or return slot can hold."""

    FELT = "felt252"
    BOOL = "bool"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    U256 = "u256"
    I129 = "i129"

    @property
    def size(self) -> int:
        """Number of words the kind occupies on the wire."""
        if self is WordKind.U256:
            return 2
        if self is WordKind.I129:
            return 3
        return 1

    @property
    def max_value(self) -> int:
        """Largest native value the kind can carry."""
        return _MAX_VALUES[self]


_MAX_VALUES = {
    WordKind.FELT: FIELD_PRIME - 1,
    WordKind.BOOL: 1,
    WordKind.U8: U8_MAX,
    WordKind.U16: U16_MAX,
    WordKind.U32: U32_MAX,
    WordKind.U64: U64_MAX,
    WordKind.U128: U128_MAX,
    WordKind.U256: UINT256_MAX,
    WordKind.I129: U128_MAX,
}


def u128_to_limbs(value: int) -> tuple[int, int]:
    """Split a u128 into (low, high) words of a uint256.

    Args:
        value: Integer in [0, 2^128)

    Returns:
        Tuple of (value mod 2^128, value div 2^128). The high limb is always 0
        for a u128 input; it only becomes non-zero for wider values, which go
        through Uint256.from_int instead.

    Raises:
        InvalidInput: If value is negative
        Uint128Overflow: If value does not fit in 128 bits
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidInput(f"u128 must be an int, got {type(value).__name__}", value)
    if value < 0:
        raise InvalidInput(f"u128 cannot be negative: {value}", value)
    if value > U128_MAX:
        raise Uint128Overflow(f"u128 overflow: {value} > 2^128-1", value)
    return value & LIMB_MASK, value >> LIMB_BITS


def limbs_to_u128(low: int, high: int) -> int:
    """Join (low, high) limbs back into a u128.

    Must mirror u128_to_limbs: the high limb is shifted by 128 bits.

    Raises:
        InvalidInput: If a limb is not an int
        Uint128Overflow: If either limb exceeds 128 bits, or the joined value
            does not fit in a u128 (any non-zero high limb). No wraparound.
    """
    for name, limb in (("low", low), ("high", high)):
        if not isinstance(limb, int) or isinstance(limb, bool):
            raise InvalidInput(f"{name} limb must be an int, got {type(limb).__name__}", limb)
        if limb < 0 or limb > U128_MAX:
            raise Uint128Overflow(f"{name} limb out of u128 range: {limb}", limb)
    value = low + (high << LIMB_BITS)
    if value > U128_MAX:
        raise Uint128Overflow(f"uint256 value {value} does not fit in u128", value)
    return value


def address_is_valid(address: str) -> bool:
    """Check if a string is a valid Starknet address.

    Args:
        address: String to validate

    Returns:
        True if it starts with 0x, has at least one hex digit after the
        prefix, and the value is below the field prime
    """
    if not isinstance(address, str):
        return False
    if not address.startswith("0x") or len(address) <= 2:
        return False
    try:
        value = int(address[2:], 16)
    except ValueError:
        return False
    return value < FIELD_PRIME


def parse_address(address: str, *, name: str = "address") -> int:
    """Parse a hex address string into a word.

    Raises:
        InvalidInput: If the address fails address_is_valid
    """
    if not address_is_valid(address):
        raise InvalidInput(f"Invalid {name}: {address!r}", address)
    return int(address[2:], 16)


def normalize_address(address: str) -> str:
    """Return the canonical 0x + 64 lowercase hex digit form of an address.

    Raises:
        InvalidInput: If the address is invalid
    """
    return "0x" + format(parse_address(address), "064x")


def parse_word(value: int | str, *, name: str = "word") -> int:
    """Parse an int, 0x-hex string or decimal string into a felt word.

    Raises:
        InvalidInput: If the value is not numeric or outside [0, FIELD_PRIME)
    """
    if isinstance(value, bool):
        raise InvalidInput(f"Invalid {name}: bool is not a word", value)
    if isinstance(value, int):
        word = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            word = int(text[2:], 16) if text.lower().startswith("0x") else int(text, 10)
        except ValueError as err:
            raise InvalidInput(f"Invalid {name}: {value!r}", value) from err
    else:
        raise InvalidInput(f"Invalid {name}: expected int or str, got {type(value).__name__}", value)

    if word < 0 or word >= FIELD_PRIME:
        raise InvalidInput(f"Invalid {name}: {value!r} is outside the field", value)
    return word


def to_hex(word: int) -> str:
    """Render a word as a 0x-prefixed lowercase hex string."""
    return hex(word)


def word_to_ascii(word: int) -> str:
    """Decode a short ASCII string from the low-order bytes of a word.

    Walks at most 8 bytes from the least significant end, stops at the first
    zero byte, keeps printable bytes only and reverses them to restore the
    big-endian layout. Falls back to the hex rendering of the word when no
    printable byte is found.

    Note: lossy by construction. Strings longer than 8 bytes are truncated to
    their last 8 characters, and non-printable bytes are dropped.
    """
    if not isinstance(word, int) or isinstance(word, bool) or word < 0:
        raise InvalidInput(f"Short string word must be a non-negative int: {word!r}", word)
    collected = bytearray()
    remaining = word
    for _ in range(ASCII_SCAN_BYTES):
        byte = remaining & 0xFF
        if byte == 0:
            break
        if 32 <= byte <= 126:
            collected.append(byte)
        remaining >>= 8

    collected.reverse()
    if not collected:
        return to_hex(word)
    try:
        return collected.decode("utf-8")
    except UnicodeDecodeError:
        return to_hex(word)


def ascii_to_word(text: str) -> int:
    """Encode a short ASCII string (at most 31 chars) as a felt word.

    Raises:
        InvalidInput: If the string is too long or not ASCII
    """
    if not isinstance(text, str):
        raise InvalidInput(f"Short string must be a str, got {type(text).__name__}", text)
    if len(text) > SHORT_STRING_MAX_LEN:
        raise InvalidInput(f"Short string longer than {SHORT_STRING_MAX_LEN} chars: {text!r}", text)
    try:
        raw = text.encode("ascii")
    except UnicodeEncodeError as err:
        raise InvalidInput(f"Short string is not ASCII: {text!r}", text) from err
    return int.from_bytes(raw, "big")


def check_width(value: int, kind: WordKind, *, name: str = "value") -> int:
    """Validate that an int fits the given kind.

    Raises:
        Uint128Overflow: For u128 values that do not fit
        InvalidInput: For any other out-of-range value
    """
    if not isinstance(value, int):
        raise InvalidInput(f"{name} must be an int, got {type(value).__name__}", value)
    if value < 0:
        raise InvalidInput(f"{name} cannot be negative: {value}", value)
    if value > kind.max_value:
        if kind is WordKind.U128:
            raise Uint128Overflow(f"{name} overflow: {value} > 2^128-1", value)
        raise InvalidInput(f"{name} does not fit in {kind.value}: {value}", value)
    return value



def check_bool(value: bool, *, name: str = "value") -> bool:
    """Validate a Cairo bool member; ints and strings are not coerced.

    Raises:
        InvalidInput: If value is not a bool
    """
    if not isinstance(value, bool):
        raise InvalidInput(f"{name} must be a bool, got {type(value).__name__}", value)
    return value


__all__ = [
    "LIMB_BITS",
    "WordKind",
    "u128_to_limbs",
    "limbs_to_u128",
    "address_is_valid",
    "parse_address",
    "normalize_address",
    "parse_word",
    "to_hex",
    "word_to_ascii",
    "ascii_to_word",
    "check_width",
    "check_bool",
]
