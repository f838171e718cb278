"""Pytest configuration and fixtures."""

import pytest

from autoswappr.client import AutoSwapprClient
from autoswappr.models import AutoSwapprConfig
from autoswappr.provider import MockQueryProvider
from tests.helpers import ACCOUNT, PRIVATE_KEY, ROUTER, RecordingAccount


@pytest.fixture
def config() -> AutoSwapprConfig:
    """A valid mainnet config pointing at a local RPC URL."""
    return AutoSwapprConfig(
        contract_address=ROUTER,
        rpc_url="http://localhost:5050/rpc",
        account_address=ACCOUNT,
        private_key=PRIVATE_KEY,
    )


@pytest.fixture
def provider() -> MockQueryProvider:
    """Mock provider with no responses configured."""
    return MockQueryProvider()


@pytest.fixture
def account() -> RecordingAccount:
    """Account that records submitted batches."""
    return RecordingAccount(ACCOUNT)


@pytest.fixture
def client(
    config: AutoSwapprConfig, provider: MockQueryProvider, account: RecordingAccount
) -> AutoSwapprClient:
    """Client wired to the mock provider and recording account."""
    return AutoSwapprClient(config, provider, account=account)
