"""Test helpers module for shared test utilities.

- constants: Account and token addresses
- fakes: Recording account and selector shorthand
"""

from tests.helpers.constants import (
    ACCOUNT,
    CALLER,
    ETH,
    OTHER_ACCOUNT,
    PRIVATE_KEY,
    ROUTER,
    STRK,
    TOKEN_A,
    TOKEN_B,
    UNKNOWN_TOKEN,
    USDC,
    USDT,
    WBTC,
)
from tests.helpers.fakes import RecordingAccount, selector

__all__ = [
    # Constants
    "ACCOUNT",
    "OTHER_ACCOUNT",
    "PRIVATE_KEY",
    "ROUTER",
    "TOKEN_A",
    "TOKEN_B",
    "CALLER",
    "UNKNOWN_TOKEN",
    "ETH",
    "STRK",
    "USDC",
    "USDT",
    "WBTC",
    # Fakes
    "RecordingAccount",
    "selector",
]
