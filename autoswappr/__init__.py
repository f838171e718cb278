"""AutoSwappr - Python client for the AutoSwappr router on Starknet."""

from autoswappr.client import AutoSwapprClient
from autoswappr.models import AutoSwapprConfig, Network
from autoswappr.provider import JsonRpcProvider, MockQueryProvider
from autoswappr.tokens import TokenRegistry, default_registry

__version__ = "0.1.0"
__all__ = [
    "AutoSwapprClient",
    "AutoSwapprConfig",
    "Network",
    "JsonRpcProvider",
    "MockQueryProvider",
    "TokenRegistry",
    "default_registry",
    "__version__",
]
