"""Token registry and per-network address book.

The registry is an explicit object handed to the client rather than a module
global, so tests and alternative deployments can supply their own token set.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from autoswappr import constants
from autoswappr.codec import address_is_valid, normalize_address
from autoswappr.errors import UnsupportedToken
from autoswappr.models.config import Network
from autoswappr.models.contract import TokenInfo

logger = structlog.get_logger()


class TokenRegistry:
    """Static token metadata, indexed by symbol and by address.

    Symbols are matched case-insensitively; addresses are compared in their
    canonical 0x + 64 hex digit form.
    """

    def __init__(self, tokens: list[TokenInfo] | None = None) -> None:
        self._by_symbol: dict[str, TokenInfo] = {}
        self._by_address: dict[str, TokenInfo] = {}
        if tokens:
            for token in tokens:
                self.add_token(token)

    def add_token(self, token: TokenInfo) -> None:
        """Register a token, replacing any entry with the same symbol or address."""
        address = normalize_address(token.address)
        self._by_symbol[token.symbol.upper()] = token
        self._by_address[address] = token
        logger.debug("token_registered", symbol=token.symbol, address=address)

    def get_token_info(self, symbol: str) -> TokenInfo:
        """Look up a token by symbol.

        Raises:
            UnsupportedToken: If the symbol is not registered
        """
        token = self._by_symbol.get(symbol.upper())
        if token is None:
            raise UnsupportedToken(symbol)
        return token

    def get_token_info_by_address(self, address: str) -> TokenInfo:
        """Look up a token by address.

        Raises:
            UnsupportedToken: If the address is malformed or not registered
        """
        if not address_is_valid(address):
            raise UnsupportedToken(address)
        token = self._by_address.get(normalize_address(address))
        if token is None:
            raise UnsupportedToken(address)
        return token

    def get_token_address(self, symbol: str) -> str:
        return self.get_token_info(symbol).address

    @property
    def symbols(self) -> list[str]:
        return [token.symbol for token in self._by_symbol.values()]

    def __contains__(self, symbol_or_address: str) -> bool:
        if symbol_or_address.upper() in self._by_symbol:
            return True
        return (
            address_is_valid(symbol_or_address)
            and normalize_address(symbol_or_address) in self._by_address
        )

    def __len__(self) -> int:
        return len(self._by_symbol)


DEFAULT_TOKENS = [
    TokenInfo(address=constants.ETH, symbol="ETH", decimals=18, name="Ether"),
    TokenInfo(address=constants.USDC, symbol="USDC", decimals=6, name="USD Coin"),
    TokenInfo(address=constants.USDT, symbol="USDT", decimals=6, name="Tether USD"),
    TokenInfo(address=constants.WBTC, symbol="WBTC", decimals=8, name="Wrapped BTC"),
    TokenInfo(address=constants.STRK, symbol="STRK", decimals=18, name="Starknet Token"),
]


def default_registry() -> TokenRegistry:
    """Registry with the tokens the router supports out of the box."""
    return TokenRegistry(DEFAULT_TOKENS)


@dataclass(frozen=True)
class NetworkAddresses:
    """Protocol contract addresses deployed on one network."""

    autoswappr: str
    ekubo_core: str
    fibrous_exchange: str
    avnu_exchange: str


# Sepolia currently points at the mainnet deployment
ADDRESS_BOOK: dict[Network, NetworkAddresses] = {
    Network.MAINNET: NetworkAddresses(
        autoswappr=constants.AUTOSWAPPR_MAINNET,
        ekubo_core=constants.EKUBO_CORE,
        fibrous_exchange=constants.FIBROUS_EXCHANGE,
        avnu_exchange=constants.AVNU_EXCHANGE,
    ),
    Network.SEPOLIA: NetworkAddresses(
        autoswappr=constants.AUTOSWAPPR_MAINNET,
        ekubo_core=constants.EKUBO_CORE,
        fibrous_exchange=constants.FIBROUS_EXCHANGE,
        avnu_exchange=constants.AVNU_EXCHANGE,
    ),
}


def get_network_addresses(network: Network | str) -> NetworkAddresses:
    """Address book entry for a network ("mainnet" or "sepolia")."""
    return ADDRESS_BOOK[Network(network)]


__all__ = [
    "TokenRegistry",
    "DEFAULT_TOKENS",
    "default_registry",
    "NetworkAddresses",
    "ADDRESS_BOOK",
    "get_network_addresses",
]
