"""Swap payload models for the AutoSwappr router entry points.

Field declaration order is the calldata order expected by the Cairo ABI.
Reordering fields here changes the wire format.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from autoswappr.codec import WordKind, check_bool, check_width, normalize_address
from autoswappr.constants import DEFAULT_SQRT_RATIO_LIMIT, POOL_TIERS, ZERO_ADDRESS
from autoswappr.errors import InvalidInput, InvalidPoolConfig, ZeroAmount
from autoswappr.models.fields import (
    address_field,
    bool_field,
    felt_array_field,
    normalize_fields,
    uint_field,
)
from autoswappr.models.types import I129, Uint256


@dataclass(frozen=True)
class PoolKey:
    """Ekubo pool identifier: token pair plus fee tier and extension."""

    token0: str = address_field()
    token1: str = address_field()
    fee: int = uint_field(WordKind.U128)
    tick_spacing: int = uint_field(WordKind.U32)
    extension: str = address_field(default=ZERO_ADDRESS)

    def __post_init__(self) -> None:
        normalize_fields(self)
        if self.token0 == self.token1:
            raise InvalidPoolConfig(f"Pool tokens must differ: {self.token0}", self.token0)

    @classmethod
    def derive(
        cls,
        token0: str,
        token1: str,
        *,
        fee: int | None = None,
        tick_spacing: int | None = None,
        extension: str = ZERO_ADDRESS,
        tiers: dict[str, tuple[int, int]] | None = None,
    ) -> PoolKey:
        """Build a pool key, looking up the fee tier by destination token.

        Explicit fee/tick_spacing always win. Otherwise token1 is looked up in
        the tier table; a pair outside the table is rejected instead of
        producing a zero-fee key.

        Raises:
            InvalidPoolConfig: If no tier is known and none was supplied
        """
        if fee is None or tick_spacing is None:
            table = POOL_TIERS if tiers is None else tiers
            tier = table.get(normalize_address(token1))
            if tier is None:
                raise InvalidPoolConfig(
                    f"No pool tier known for token1 {token1}; pass fee and tick_spacing explicitly",
                    token1,
                )
            fee = tier[0] if fee is None else fee
            tick_spacing = tier[1] if tick_spacing is None else tick_spacing
        return cls(
            token0=token0,
            token1=token1,
            fee=fee,
            tick_spacing=tick_spacing,
            extension=extension,
        )


@dataclass(frozen=True)
class SwapParameters:
    """Ekubo swap parameters."""

    amount: I129
    sqrt_ratio_limit: Uint256
    is_token1: bool = bool_field()
    skip_ahead: int = uint_field(WordKind.U32, default=0)

    def __post_init__(self) -> None:
        if not isinstance(self.amount, I129):
            raise InvalidInput("SwapParameters.amount must be an I129", self.amount)
        if not isinstance(self.sqrt_ratio_limit, Uint256):
            raise InvalidInput(
                "SwapParameters.sqrt_ratio_limit must be a Uint256", self.sqrt_ratio_limit
            )
        normalize_fields(self)

    @classmethod
    def new(cls, amount: I129, is_token1: bool) -> SwapParameters:
        """Parameters with the default sqrt ratio limit and skip_ahead=0.

        The default limit is the minimum Ekubo sqrt ratio. It is only right
        for one swap direction; production callers should use
        with_sqrt_ratio_limit.
        """
        return cls(
            amount=amount,
            sqrt_ratio_limit=Uint256.from_int(DEFAULT_SQRT_RATIO_LIMIT),
            is_token1=is_token1,
            skip_ahead=0,
        )

    @classmethod
    def with_sqrt_ratio_limit(
        cls,
        amount: I129,
        is_token1: bool,
        sqrt_ratio_limit: int | Uint256,
        skip_ahead: int = 0,
    ) -> SwapParameters:
        """Parameters with an explicit price limit."""
        if not isinstance(sqrt_ratio_limit, Uint256):
            sqrt_ratio_limit = Uint256.from_int(sqrt_ratio_limit)
        return cls(
            amount=amount,
            sqrt_ratio_limit=sqrt_ratio_limit,
            is_token1=is_token1,
            skip_ahead=skip_ahead,
        )


@dataclass(frozen=True)
class SwapData:
    """Full payload for ekubo_swap / ekubo_manual_swap."""

    params: SwapParameters
    pool_key: PoolKey
    caller: str = address_field()

    def __post_init__(self) -> None:
        normalize_fields(self)


@dataclass(frozen=True)
class Route:
    """One leg of an AVNU swap."""

    token_from: str = address_field()
    token_to: str = address_field()
    exchange_address: str = address_field()
    percent: int = uint_field(WordKind.U128)
    additional_swap_params: tuple[int, ...] = felt_array_field()

    def __post_init__(self) -> None:
        normalize_fields(self)


@dataclass(frozen=True)
class RouteParams:
    """Fibrous route header."""

    token_in: str = address_field()
    token_out: str = address_field()
    amount_in: Uint256 = field(default_factory=lambda: Uint256(0))
    min_received: Uint256 = field(default_factory=lambda: Uint256(0))
    destination: str = address_field(default=ZERO_ADDRESS)

    def __post_init__(self) -> None:
        normalize_fields(self)


@dataclass(frozen=True)
class SwapParams:
    """One Fibrous swap step."""

    token_in: str = address_field()
    token_out: str = address_field()
    rate: int = uint_field(WordKind.U32)
    protocol_id: int = uint_field(WordKind.U32)
    pool_address: str = address_field()
    extra_data: tuple[int, ...] = felt_array_field()

    def __post_init__(self) -> None:
        normalize_fields(self)


@dataclass(frozen=True)
class Delta:
    """Token balance changes reported by an Ekubo swap."""

    amount0: I129
    amount1: I129


@dataclass(frozen=True)
class SwapResult:
    delta: Delta


@dataclass(frozen=True)
class SwapOptions:
    """Caller-level knobs for building SwapParameters.

    Attributes:
        amount: Raw amount in the token's smallest unit
        is_token1: Whether the input token is token1
        skip_ahead: Ekubo skip_ahead hint
        sqrt_ratio_limit: Explicit price limit, None for the default sentinel
    """

    amount: int
    is_token1: bool = False
    skip_ahead: int = 0
    sqrt_ratio_limit: int | None = None

    def __post_init__(self) -> None:
        check_width(self.amount, WordKind.U128, name="SwapOptions.amount")
        if self.amount == 0:
            raise ZeroAmount()
        check_width(self.skip_ahead, WordKind.U32, name="SwapOptions.skip_ahead")
        check_bool(self.is_token1, name="SwapOptions.is_token1")

    def to_swap_parameters(self) -> SwapParameters:
        limit = DEFAULT_SQRT_RATIO_LIMIT if self.sqrt_ratio_limit is None else self.sqrt_ratio_limit
        return SwapParameters.with_sqrt_ratio_limit(
            I129(mag=self.amount, sign=False), self.is_token1, limit, self.skip_ahead
        )


__all__ = [
    "PoolKey",
    "SwapParameters",
    "SwapData",
    "Route",
    "RouteParams",
    "SwapParams",
    "Delta",
    "SwapResult",
    "SwapOptions",
]
