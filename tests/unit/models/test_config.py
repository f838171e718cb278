"""Tests for AutoSwapprConfig and Network."""

import pytest
from pydantic import ValidationError

from autoswappr.constants import AUTOSWAPPR_MAINNET, SN_MAIN, SN_SEPOLIA
from autoswappr.models import AutoSwapprConfig, Network
from tests.helpers import ACCOUNT, PRIVATE_KEY, ROUTER


def make_config(**overrides) -> AutoSwapprConfig:
    values = {
        "contract_address": ROUTER,
        "rpc_url": "https://rpc.example.com",
        "account_address": ACCOUNT,
        "private_key": PRIVATE_KEY,
    }
    values.update(overrides)
    return AutoSwapprConfig(**values)


class TestAutoSwapprConfig:
    """Tests for config validation."""

    def test_valid(self):
        """Defaults fill chain id and timeout."""
        config = make_config()
        assert config.chain_id == SN_MAIN
        assert config.request_timeout == 30.0

    @pytest.mark.parametrize("field", ["contract_address", "account_address"])
    def test_invalid_address(self, field):
        """Addresses must be 0x hex below the field prime."""
        with pytest.raises(ValidationError, match="Invalid address"):
            make_config(**{field: "1234"})

    def test_invalid_private_key_not_echoed(self):
        """The validation message never contains the rejected key."""
        with pytest.raises(ValidationError) as exc_info:
            make_config(private_key="secret-not-hex")
        assert "secret-not-hex" not in str(exc_info.value)

    def test_private_key_hidden_in_repr(self):
        """The key is a SecretStr and never appears in repr."""
        config = make_config()
        assert PRIVATE_KEY not in repr(config)
        assert config.private_key.get_secret_value() == PRIVATE_KEY

    @pytest.mark.parametrize("url", ["ftp://rpc", "rpc.example.com", "https://"])
    def test_invalid_rpc_url(self, url):
        """Only http and https URLs with a host are accepted."""
        with pytest.raises(ValidationError):
            make_config(rpc_url=url)

    def test_timeout_must_be_positive(self):
        """A zero timeout is rejected."""
        with pytest.raises(ValidationError):
            make_config(request_timeout=0)

    def test_frozen(self):
        """Configs are immutable."""
        config = make_config()
        with pytest.raises(ValidationError):
            config.rpc_url = "https://other.example.com"


class TestFromEnv:
    """Tests for loading config from environment variables."""

    def test_defaults_to_mainnet(self):
        """Without STARKNET_NETWORK the mainnet defaults apply."""
        config = AutoSwapprConfig.from_env(
            {"STARKNET_ACCOUNT_ADDRESS": ACCOUNT, "STARKNET_PRIVATE_KEY": PRIVATE_KEY}
        )
        assert config.contract_address == AUTOSWAPPR_MAINNET
        assert config.rpc_url == Network.MAINNET.rpc_url
        assert config.chain_id == SN_MAIN

    def test_sepolia(self):
        """The network name is case-insensitive and selects its endpoint."""
        config = AutoSwapprConfig.from_env(
            {
                "STARKNET_NETWORK": "SEPOLIA",
                "STARKNET_ACCOUNT_ADDRESS": ACCOUNT,
                "STARKNET_PRIVATE_KEY": PRIVATE_KEY,
            }
        )
        assert config.chain_id == SN_SEPOLIA
        assert config.rpc_url == Network.SEPOLIA.rpc_url

    def test_explicit_values(self):
        """Explicit variables override the network defaults."""
        config = AutoSwapprConfig.from_env(
            {
                "AUTOSWAPPR_CONTRACT_ADDRESS": "0x123",
                "STARKNET_RPC_URL": "http://localhost:5050",
                "STARKNET_ACCOUNT_ADDRESS": ACCOUNT,
                "STARKNET_PRIVATE_KEY": PRIVATE_KEY,
                "AUTOSWAPPR_REQUEST_TIMEOUT": "5",
            }
        )
        assert config.contract_address == "0x123"
        assert config.rpc_url == "http://localhost:5050"
        assert config.request_timeout == 5.0

    def test_overrides_win(self):
        """Keyword overrides win over the environment."""
        config = AutoSwapprConfig.from_env(
            {"STARKNET_ACCOUNT_ADDRESS": ACCOUNT, "STARKNET_PRIVATE_KEY": PRIVATE_KEY},
            request_timeout=2.5,
        )
        assert config.request_timeout == 2.5

    def test_missing_account_fails(self):
        """Missing account credentials fail validation."""
        with pytest.raises(ValidationError):
            AutoSwapprConfig.from_env({})

    def test_unknown_network_fails_validation(self):
        """An unknown network name raises a pydantic ValidationError."""
        with pytest.raises(ValidationError):
            AutoSwapprConfig.from_env(
                {
                    "STARKNET_NETWORK": "goerli",
                    "STARKNET_ACCOUNT_ADDRESS": ACCOUNT,
                    "STARKNET_PRIVATE_KEY": PRIVATE_KEY,
                }
            )

    def test_non_numeric_timeout_fails_validation(self):
        """A non-numeric timeout raises a pydantic ValidationError."""
        with pytest.raises(ValidationError, match="request_timeout"):
            AutoSwapprConfig.from_env(
                {
                    "STARKNET_ACCOUNT_ADDRESS": ACCOUNT,
                    "STARKNET_PRIVATE_KEY": PRIVATE_KEY,
                    "AUTOSWAPPR_REQUEST_TIMEOUT": "x",
                }
            )
