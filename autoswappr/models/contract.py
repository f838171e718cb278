"""Read-side models decoded from router and token responses."""

from __future__ import annotations

from dataclasses import dataclass

from autoswappr.models.types import FeeType


@dataclass(frozen=True)
class ContractInfo:
    """Snapshot of the router configuration returned by contract_parameters.

    Addresses are the decimal rendering of the returned felts. Built fresh on
    every query; never cached.
    """

    fees_collector: str
    fibrous_exchange_address: str
    avnu_exchange_address: str
    oracle_address: str
    owner: str
    fee_type: FeeType
    percentage_fee: int


@dataclass(frozen=True)
class TokenInfo:
    """Static token metadata."""

    address: str
    symbol: str
    decimals: int
    name: str


@dataclass(frozen=True)
class TokenMetadata:
    """Token metadata read on-chain through the ERC20 getters."""

    name: str
    symbol: str
    decimals: int


__all__ = ["ContractInfo", "TokenInfo", "TokenMetadata"]
