"""Client configuration model.

Configuration comes from an explicit AutoSwapprConfig or from environment
variables via AutoSwapprConfig.from_env():
- AUTOSWAPPR_CONTRACT_ADDRESS: Router address (default: mainnet deployment)
- STARKNET_RPC_URL: JSON-RPC endpoint (default: the network's public endpoint)
- STARKNET_NETWORK: mainnet or sepolia (default: mainnet)
- STARKNET_ACCOUNT_ADDRESS: Account that signs writes
- STARKNET_PRIVATE_KEY: Account private key
- AUTOSWAPPR_REQUEST_TIMEOUT: Transport timeout in seconds (default: 30)
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, SecretStr, TypeAdapter, field_validator

from autoswappr.codec import address_is_valid
from autoswappr.constants import AUTOSWAPPR_MAINNET, SN_MAIN, SN_SEPOLIA

DEFAULT_REQUEST_TIMEOUT = 30.0


class Network(str, Enum):
    """Starknet networks with a known public RPC endpoint."""

    MAINNET = "mainnet"
    SEPOLIA = "sepolia"

    @property
    def rpc_url(self) -> str:
        return _RPC_URLS[self]

    @property
    def chain_id(self) -> int:
        return _CHAIN_IDS[self]


_RPC_URLS = {
    Network.MAINNET: "https://starknet-mainnet.public.blastapi.io/rpc/v0_7",
    Network.SEPOLIA: "https://starknet-sepolia.public.blastapi.io/rpc/v0_7",
}

_CHAIN_IDS = {
    Network.MAINNET: SN_MAIN,
    Network.SEPOLIA: SN_SEPOLIA,
}

_NETWORK_ADAPTER = TypeAdapter(Network)


class AutoSwapprConfig(BaseModel):
    """Connection and account settings for AutoSwapprClient."""

    contract_address: str = Field(description="AutoSwappr router address (0x hex).")
    rpc_url: str = Field(description="Starknet JSON-RPC endpoint (http or https).")
    account_address: str = Field(description="Account address that signs writes (0x hex).")
    private_key: SecretStr = Field(description="Account private key (0x hex). Never logged.")
    chain_id: int = Field(default=SN_MAIN, ge=0)
    request_timeout: float = Field(default=DEFAULT_REQUEST_TIMEOUT, gt=0)

    model_config = {"frozen": True, "hide_input_in_errors": True}

    @field_validator("contract_address", "account_address")
    @classmethod
    def _check_address(cls, value: str) -> str:
        if not address_is_valid(value):
            raise ValueError(f"Invalid address: {value!r} (must be 0x + hex, below field prime)")
        return value

    @field_validator("private_key")
    @classmethod
    def _check_private_key(cls, value: SecretStr) -> SecretStr:
        # Message must not echo the key
        if not address_is_valid(value.get_secret_value()):
            raise ValueError("Invalid private key: must be 0x + hex, below field prime")
        return value

    @field_validator("rpc_url")
    @classmethod
    def _check_rpc_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")) or len(value.split("://", 1)[1]) == 0:
            raise ValueError(f"Invalid RPC URL: {value!r}")
        return value

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None, **overrides: Any) -> AutoSwapprConfig:
        """Build a config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests)
            **overrides: Explicit values that win over the environment

        Raises:
            pydantic.ValidationError: If required values are missing or malformed
        """
        env = os.environ if environ is None else environ
        network = _NETWORK_ADAPTER.validate_python(
            env.get("STARKNET_NETWORK", Network.MAINNET.value).lower()
        )
        values: dict[str, Any] = {
            "contract_address": env.get("AUTOSWAPPR_CONTRACT_ADDRESS", AUTOSWAPPR_MAINNET),
            "rpc_url": env.get("STARKNET_RPC_URL", network.rpc_url),
            "account_address": env.get("STARKNET_ACCOUNT_ADDRESS", ""),
            "private_key": env.get("STARKNET_PRIVATE_KEY", ""),
            "chain_id": network.chain_id,
            "request_timeout": env.get("AUTOSWAPPR_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
        }
        values.update(overrides)
        return cls.model_validate(values)


__all__ = ["AutoSwapprConfig", "Network", "DEFAULT_REQUEST_TIMEOUT"]
