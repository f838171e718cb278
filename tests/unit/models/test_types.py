"""Tests for Uint256, I129 and FeeType."""

import pytest

from autoswappr.constants import MAX_SQRT_RATIO, U128_MAX, UINT256_MAX
from autoswappr.errors import InvalidInput, Uint128Overflow
from autoswappr.models import I129, FeeType, Uint256
from autoswappr.serializer import encode


class TestUint256:
    """Tests for Uint256 construction and rendering."""

    def test_from_u128_sets_high_zero(self):
        """A u128 fits entirely in the low limb."""
        value = Uint256.from_u128(U128_MAX)
        assert value.low == U128_MAX
        assert value.high == 0

    def test_from_u128_overflow(self):
        """from_u128 rejects 2^128."""
        with pytest.raises(Uint128Overflow):
            Uint256.from_u128(2**128)

    def test_from_int_splits_at_128_bits(self):
        """from_int puts bits above 128 in the high limb."""
        value = Uint256.from_int(2**128 + 7)
        assert (value.low, value.high) == (7, 1)
        assert value.value == 2**128 + 7
        assert int(value) == 2**128 + 7

    def test_from_int_range(self):
        """from_int accepts [0, 2^256) only."""
        assert Uint256.from_int(UINT256_MAX).value == UINT256_MAX
        with pytest.raises(InvalidInput):
            Uint256.from_int(UINT256_MAX + 1)
        with pytest.raises(InvalidInput):
            Uint256.from_int(-1)

    def test_limbs_validated(self):
        """Each limb must be a u128."""
        with pytest.raises(Uint128Overflow):
            Uint256(low=2**128)
        with pytest.raises(InvalidInput):
            Uint256(low=0, high=-1)

    def test_from_decimal_string(self):
        """Decimal strings parse, surrounding whitespace is ignored."""
        assert Uint256.from_decimal_string("1000000000000000000").value == 10**18
        assert Uint256.from_decimal_string(" 42 ").value == 42

    @pytest.mark.parametrize("text", ["", "abc", "-1", "1.5", "0x10", "١٢"])
    def test_from_decimal_string_rejects_non_numeric(self, text):
        """Anything but ASCII decimal digits is rejected."""
        with pytest.raises(InvalidInput):
            Uint256.from_decimal_string(text)

    def test_to_hex_string_layout(self):
        """High limb digits come first, each limb is 32 hex digits."""
        value = Uint256(low=1, high=2)
        assert value.to_hex_string() == "0x" + "0" * 31 + "2" + "0" * 31 + "1"

    @pytest.mark.parametrize("value", [0, 1, U128_MAX, 2**128, MAX_SQRT_RATIO, UINT256_MAX])
    def test_hex_round_trip(self, value):
        """from_hex_string reads back what to_hex_string writes."""
        expected = Uint256.from_int(value)
        assert Uint256.from_hex_string(expected.to_hex_string()) == expected

    @pytest.mark.parametrize("text", ["", "0x", "ff", "0xgg"])
    def test_from_hex_string_rejects_malformed(self, text):
        """Hex strings need a 0x prefix and valid digits."""
        with pytest.raises(InvalidInput):
            Uint256.from_hex_string(text)


class TestI129:
    """Tests for the signed-magnitude integer."""

    def test_negative(self):
        """from_int stores the magnitude and sets sign for negatives."""
        amount = I129.from_int(-5)
        assert amount.mag == 5
        assert amount.sign is True
        assert amount.value == -5

    def test_zero_sign_normalized(self):
        """Negative zero is stored with sign=False."""
        assert I129.new(0, True).sign is False
        assert I129(mag=0, sign=True) == I129(mag=0)

    def test_magnitude_is_u128(self):
        """The magnitude must fit in 128 bits."""
        with pytest.raises(Uint128Overflow):
            I129.from_int(2**128)
        with pytest.raises(InvalidInput):
            I129(mag=-1)

    @pytest.mark.parametrize("sign", [2, 1, 0, "yes", None])
    def test_sign_must_be_bool(self, sign):
        """Non-bool signs are rejected instead of leaking into calldata."""
        with pytest.raises(InvalidInput, match="I129.sign"):
            I129(5, sign)

    def test_sign_encodes_as_single_bit(self):
        """A valid sign encodes as a 0 or 1 word."""
        assert encode(I129(5, True)) == [5, 0, 1]
        assert encode(I129(5)) == [5, 0, 0]


class TestFeeType:
    """Tests for FeeType byte mapping."""

    def test_from_u8(self):
        """Bytes 0 and 1 map to their fee types."""
        assert FeeType.from_u8(0) is FeeType.FIXED
        assert FeeType.from_u8(1) is FeeType.PERCENTAGE

    def test_unknown_byte_maps_to_fixed(self):
        """Bytes other than 0 and 1 decode as FIXED."""
        assert FeeType.from_u8(2) is FeeType.FIXED
        assert FeeType.from_u8(255) is FeeType.FIXED

    def test_wider_than_byte_rejected(self):
        """Values above 255 are not bytes."""
        with pytest.raises(InvalidInput):
            FeeType.from_u8(256)

    def test_to_u8(self):
        """to_u8 returns the on-chain byte."""
        assert FeeType.FIXED.to_u8() == 0
        assert FeeType.PERCENTAGE.to_u8() == 1
