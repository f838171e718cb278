"""On-chain scalar value types shared by the swap and contract models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from autoswappr.codec import LIMB_BITS, WordKind, check_bool, check_width, u128_to_limbs
from autoswappr.constants import UINT256_MAX
from autoswappr.errors import InvalidInput

HEX_DIGITS_PER_LIMB = 32


@dataclass(frozen=True)
class Uint256:
    """256-bit unsigned integer stored as two u128 limbs.

    The logical value is always low + high * 2^128.
    """

    low: int
    high: int = 0

    def __post_init__(self) -> None:
        check_width(self.low, WordKind.U128, name="Uint256.low")
        check_width(self.high, WordKind.U128, name="Uint256.high")

    @classmethod
    def from_u128(cls, value: int) -> Uint256:
        """Build from a u128; high is always 0."""
        low, high = u128_to_limbs(value)
        return cls(low=low, high=high)

    @classmethod
    def from_int(cls, value: int) -> Uint256:
        """Build from any integer in [0, 2^256)."""
        if not isinstance(value, int) or value < 0 or value > UINT256_MAX:
            raise InvalidInput(f"Value out of uint256 range: {value!r}", value)
        return cls(low=value & ((1 << LIMB_BITS) - 1), high=value >> LIMB_BITS)

    @classmethod
    def from_decimal_string(cls, text: str) -> Uint256:
        """Parse a base-10 string.

        Raises:
            InvalidInput: If the string is not a non-negative decimal integer
                within uint256 range
        """
        stripped = text.strip() if isinstance(text, str) else ""
        if not (stripped.isascii() and stripped.isdigit()):
            raise InvalidInput(f"Uint256 must be a decimal integer string: {text!r}", text)
        return cls.from_int(int(stripped))

    @classmethod
    def from_hex_string(cls, text: str) -> Uint256:
        """Parse the output of to_hex_string (or any 0x-hex uint256)."""
        if not isinstance(text, str) or not text.startswith("0x") or len(text) <= 2:
            raise InvalidInput(f"Uint256 hex string must start with 0x: {text!r}", text)
        try:
            value = int(text[2:], 16)
        except ValueError as err:
            raise InvalidInput(f"Invalid uint256 hex string: {text!r}", text) from err
        return cls.from_int(value)

    def to_hex_string(self) -> str:
        """Render as 0x + 32 hex digits of high + 32 hex digits of low."""
        return f"0x{self.high:0{HEX_DIGITS_PER_LIMB}x}{self.low:0{HEX_DIGITS_PER_LIMB}x}"

    @property
    def value(self) -> int:
        """The logical integer value."""
        return self.low + (self.high << LIMB_BITS)

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class I129:
    """Signed-magnitude integer: sign=True means negative.

    Zero is always stored with sign=False.
    """

    mag: int
    sign: bool = False

    def __post_init__(self) -> None:
        check_width(self.mag, WordKind.U128, name="I129.mag")
        check_bool(self.sign, name="I129.sign")
        if self.mag == 0 and self.sign:
            object.__setattr__(self, "sign", False)

    @classmethod
    def new(cls, mag: int, sign: bool) -> I129:
        return cls(mag=mag, sign=sign)

    @classmethod
    def from_int(cls, value: int) -> I129:
        """Build from a signed Python int."""
        return cls(mag=abs(value), sign=value < 0)

    @property
    def value(self) -> int:
        return -self.mag if self.sign else self.mag


class FeeType(int, Enum):
    """Router fee model, encoded on-chain as a single byte."""

    FIXED = 0
    PERCENTAGE = 1

    @classmethod
    def from_u8(cls, raw: int) -> FeeType:
        """Map a raw byte to a fee type.

        Any byte other than 1 maps to FIXED, matching how the router's
        contract_parameters decoder treats unknown values.

        Raises:
            InvalidInput: If raw is not a byte
        """
        check_width(raw, WordKind.U8, name="fee_type")
        if raw == cls.PERCENTAGE.value:
            return cls.PERCENTAGE
        return cls.FIXED

    def to_u8(self) -> int:
        return int(self.value)


__all__ = ["Uint256", "I129", "FeeType"]
