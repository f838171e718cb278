"""Read-only query providers.

This allows swapping between the real JSON-RPC provider and a mock provider
for testing, behind the QueryProvider protocol.
"""

from __future__ import annotations

import itertools
from collections.abc import Sequence
from typing import Any, Protocol

import httpx
import structlog

from autoswappr.abi import ERC20_ENTRY_POINTS, ROUTER_ENTRY_POINTS, get_selector_from_name
from autoswappr.codec import to_hex
from autoswappr.errors import ProviderError
from autoswappr.models.config import DEFAULT_REQUEST_TIMEOUT

logger = structlog.get_logger()

# Block tags accepted by starknet_call
BLOCK_LATEST = "latest"
BLOCK_PRE_CONFIRMED = "pre_confirmed"


class QueryProvider(Protocol):
    """Protocol for read-only contract calls."""

    def call(
        self,
        contract_address: int,
        entry_point_selector: int,
        calldata: Sequence[int],
        block_id: str = BLOCK_LATEST,
    ) -> list[int]:
        """Call a view entry point.

        Args:
            contract_address: Target contract
            entry_point_selector: starknet_keccak of the entry point name
            calldata: Serialized arguments
            block_id: Block tag to read at

        Returns:
            Returned words

        Raises:
            ProviderError: On any transport or node failure
        """
        ...


class JsonRpcProvider:
    """Starknet JSON-RPC provider over httpx.

    Requests are bounded only by the httpx timeout passed at construction;
    no retry and no extra timeout layer is applied here. A single instance is
    safe to share across threads for concurrent reads.
    """

    def __init__(
        self,
        rpc_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize provider.

        Args:
            rpc_url: HTTP(S) JSON-RPC endpoint
            timeout: Transport timeout in seconds
            client: Pre-built httpx client (e.g. with a MockTransport in tests)
        """
        self.rpc_url = rpc_url
        self._client = client if client is not None else httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def call(
        self,
        contract_address: int,
        entry_point_selector: int,
        calldata: Sequence[int],
        block_id: str = BLOCK_LATEST,
    ) -> list[int]:
        params = {
            "request": {
                "contract_address": to_hex(contract_address),
                "entry_point_selector": to_hex(entry_point_selector),
                "calldata": [to_hex(word) for word in calldata],
            },
            "block_id": block_id,
        }
        result = self._request("starknet_call", params)
        if not isinstance(result, list):
            raise ProviderError(f"starknet_call returned a non-list result: {result!r}")
        try:
            return [int(word, 16) for word in result]
        except (TypeError, ValueError) as err:
            raise ProviderError(f"starknet_call returned a non-hex word: {result!r}") from err

    def chain_id(self) -> int:
        """Return the chain id reported by the node."""
        result = self._request("starknet_chainId", [])
        try:
            return int(result, 16)
        except (TypeError, ValueError) as err:
            raise ProviderError(f"starknet_chainId returned {result!r}") from err

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> JsonRpcProvider:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, params: Any) -> Any:
        payload = {"jsonrpc": "2.0", "method": method, "params": params, "id": next(self._ids)}
        try:
            response = self._client.post(self.rpc_url, json=payload)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as e:
            logger.warning("rpc_timeout", method=method, error=str(e))
            raise ProviderError(f"RPC timeout calling {method}: {e}") from e
        except httpx.HTTPError as e:
            logger.warning("rpc_http_error", method=method, error=str(e))
            raise ProviderError(f"RPC transport error calling {method}: {e}") from e
        except ValueError as e:
            logger.warning("rpc_invalid_json", method=method, error=str(e))
            raise ProviderError(f"RPC returned invalid JSON for {method}: {e}") from e

        if not isinstance(body, dict):
            raise ProviderError(f"RPC returned a non-object body for {method}: {body!r}")

        error = body.get("error")
        if error is not None:
            code = error.get("code") if isinstance(error, dict) else None
            message = error.get("message", "") if isinstance(error, dict) else str(error)
            data = error.get("data") if isinstance(error, dict) else None
            logger.warning("rpc_error", method=method, code=code, message=message)
            detail = f"{message} ({data})" if data else message
            raise ProviderError(f"RPC error {code} calling {method}: {detail}", code=code)

        if "result" not in body:
            raise ProviderError(f"RPC response for {method} has no result")
        return body["result"]


class MockQueryProvider:
    """Mock provider for testing without RPC calls.

    Configure return words per entry point name, and track calls for
    assertions.
    """

    def __init__(
        self,
        responses: dict[str, list[int]] | None = None,
        errors: dict[str, Exception] | None = None,
    ) -> None:
        """Initialize mock provider.

        Args:
            responses: Entry point name -> returned words
            errors: Entry point name -> exception to raise instead
        """
        self.responses = responses or {}
        self.errors = errors or {}
        # (contract_address, entry_point_name, calldata, block_id)
        self.calls: list[tuple[int, str, list[int], str]] = []
        self._names = {
            get_selector_from_name(name): name
            for name in (*ROUTER_ENTRY_POINTS, *ERC20_ENTRY_POINTS)
        }

    def call(
        self,
        contract_address: int,
        entry_point_selector: int,
        calldata: Sequence[int],
        block_id: str = BLOCK_LATEST,
    ) -> list[int]:
        name = self._names.get(entry_point_selector, to_hex(entry_point_selector))
        self.calls.append((contract_address, name, list(calldata), block_id))

        if name in self.errors:
            raise self.errors[name]
        if name not in self.responses:
            raise ProviderError(f"No mock response configured for {name}")
        return list(self.responses[name])


__all__ = [
    "BLOCK_LATEST",
    "BLOCK_PRE_CONFIRMED",
    "QueryProvider",
    "JsonRpcProvider",
    "MockQueryProvider",
]
