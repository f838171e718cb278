"""Entry-point names and selector computation for the AutoSwappr ABI."""

from __future__ import annotations

from functools import lru_cache

from web3 import Web3

from autoswappr.constants import SELECTOR_MASK

# AutoSwappr router entry points
EKUBO_SWAP = "ekubo_swap"
EKUBO_MANUAL_SWAP = "ekubo_manual_swap"
AVNU_SWAP = "avnu_swap"
FIBROUS_SWAP = "fibrous_swap"
CONTRACT_PARAMETERS = "contract_parameters"
GET_TOKEN_AMOUNT_IN_USD = "get_token_amount_in_usd"
GET_TOKEN_FROM_STATUS_AND_VALUE = "get_token_from_status_and_value"
SET_FEE_TYPE = "set_fee_type"
SUPPORT_NEW_TOKEN_FROM = "support_new_token_from"
REMOVE_TOKEN_FROM = "remove_token_from"

ROUTER_ENTRY_POINTS = (
    EKUBO_SWAP,
    EKUBO_MANUAL_SWAP,
    AVNU_SWAP,
    FIBROUS_SWAP,
    CONTRACT_PARAMETERS,
    GET_TOKEN_AMOUNT_IN_USD,
    GET_TOKEN_FROM_STATUS_AND_VALUE,
    SET_FEE_TYPE,
    SUPPORT_NEW_TOKEN_FROM,
    REMOVE_TOKEN_FROM,
)

# ERC20 entry points (Cairo snake_case names)
APPROVE = "approve"
ALLOWANCE = "allowance"
BALANCE_OF = "balance_of"
DECIMALS = "decimals"
SYMBOL = "symbol"
NAME = "name"

ERC20_ENTRY_POINTS = (APPROVE, ALLOWANCE, BALANCE_OF, DECIMALS, SYMBOL, NAME)


@lru_cache(maxsize=128)
def get_selector_from_name(name: str) -> int:
    """Compute the Starknet selector of an entry point.

    The selector is starknet_keccak(name): keccak256 of the ASCII name with the
    result truncated to its low 250 bits.
    """
    digest = Web3.keccak(text=name)
    return int.from_bytes(digest, "big") & SELECTOR_MASK


__all__ = [
    "EKUBO_SWAP",
    "EKUBO_MANUAL_SWAP",
    "AVNU_SWAP",
    "FIBROUS_SWAP",
    "CONTRACT_PARAMETERS",
    "GET_TOKEN_AMOUNT_IN_USD",
    "GET_TOKEN_FROM_STATUS_AND_VALUE",
    "SET_FEE_TYPE",
    "SUPPORT_NEW_TOKEN_FROM",
    "REMOVE_TOKEN_FROM",
    "ROUTER_ENTRY_POINTS",
    "APPROVE",
    "ALLOWANCE",
    "BALANCE_OF",
    "DECIMALS",
    "SYMBOL",
    "NAME",
    "ERC20_ENTRY_POINTS",
    "get_selector_from_name",
]
