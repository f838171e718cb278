"""Conversions between raw on-chain integers and human token amounts.

All arithmetic runs under a high-precision Decimal context so uint256-sized
values never pick up rounding artifacts.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from autoswappr.codec import WordKind, check_width
from autoswappr.errors import InvalidInput

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DECIMAL_HIGH_PREC_CONTEXT = decimal.Context(prec=78)


def to_decimal_amount(raw: int, decimals: int) -> Decimal:
    """Scale a raw integer amount down by 10^decimals.

    Example: to_decimal_amount(1_500_000, 6) == Decimal("1.5")
    """
    check_width(raw, WordKind.U256, name="raw amount")
    check_width(decimals, WordKind.U8, name="decimals")
    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        return Decimal(raw).scaleb(-decimals)


def to_raw_amount(amount: Decimal | int | str, decimals: int) -> int:
    """Scale a human amount up by 10^decimals.

    Raises:
        InvalidInput: If the amount is negative, not a number, or has more
            fractional digits than the token supports
    """
    check_width(decimals, WordKind.U8, name="decimals")
    if isinstance(amount, float):
        raise InvalidInput("Pass token amounts as Decimal, int or str, not float", amount)
    try:
        value = Decimal(amount)
    except (decimal.InvalidOperation, TypeError, ValueError) as err:
        raise InvalidInput(f"Invalid token amount: {amount!r}", amount) from err
    if not value.is_finite() or value < 0:
        raise InvalidInput(f"Token amount must be a non-negative number: {amount!r}", amount)

    with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
        scaled = value.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise InvalidInput(
                f"Token amount {amount} has more than {decimals} decimal places", amount
            )
        return int(scaled)


__all__ = ["DECIMAL_HIGH_PREC_CONTEXT", "to_decimal_amount", "to_raw_amount"]
