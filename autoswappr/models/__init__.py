"""Typed value models for AutoSwappr calldata and responses."""

from autoswappr.models.config import AutoSwapprConfig, Network
from autoswappr.models.contract import ContractInfo, TokenInfo, TokenMetadata
from autoswappr.models.swap import (
    Delta,
    PoolKey,
    Route,
    RouteParams,
    SwapData,
    SwapOptions,
    SwapParameters,
    SwapParams,
    SwapResult,
)
from autoswappr.models.types import I129, FeeType, Uint256

__all__ = [
    # Scalars
    "Uint256",
    "I129",
    "FeeType",
    # Swap payloads
    "PoolKey",
    "SwapParameters",
    "SwapData",
    "Route",
    "RouteParams",
    "SwapParams",
    "Delta",
    "SwapResult",
    "SwapOptions",
    # Read-side
    "ContractInfo",
    "TokenInfo",
    "TokenMetadata",
    # Config
    "AutoSwapprConfig",
    "Network",
]
