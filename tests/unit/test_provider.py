"""Unit tests for the JSON-RPC and mock query providers."""

import json

import httpx
import pytest

from autoswappr.abi import get_selector_from_name
from autoswappr.constants import SN_MAIN
from autoswappr.errors import ProviderError
from autoswappr.provider import (
    BLOCK_LATEST,
    BLOCK_PRE_CONFIRMED,
    JsonRpcProvider,
    MockQueryProvider,
)

RPC_URL = "http://localhost:5050/rpc"


def make_provider(handler) -> tuple[JsonRpcProvider, list[dict]]:
    """Provider whose transport records request bodies and delegates to handler."""
    bodies: list[dict] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return handler(request)

    client = httpx.Client(transport=httpx.MockTransport(recording_handler))
    return JsonRpcProvider(RPC_URL, client=client), bodies


def result_response(result) -> httpx.Response:
    return httpx.Response(200, json={"jsonrpc": "2.0", "id": 1, "result": result})


class TestJsonRpcProviderCall:
    """Tests for starknet_call requests and responses."""

    def test_request_body(self):
        """starknet_call sends hex words and parses the hex result."""
        provider, bodies = make_provider(lambda request: result_response(["0x1", "0xff"]))

        words = provider.call(0x1234, 0xABC, [1, 16])

        assert words == [1, 255]
        body = bodies[0]
        assert body["jsonrpc"] == "2.0"
        assert body["method"] == "starknet_call"
        assert body["params"] == {
            "request": {
                "contract_address": "0x1234",
                "entry_point_selector": "0xabc",
                "calldata": ["0x1", "0x10"],
            },
            "block_id": BLOCK_LATEST,
        }

    def test_block_id_passed_through(self):
        """The block id reaches the request params."""
        provider, bodies = make_provider(lambda request: result_response([]))
        provider.call(1, 2, [], block_id=BLOCK_PRE_CONFIRMED)
        assert bodies[0]["params"]["block_id"] == "pre_confirmed"

    def test_request_ids_increment(self):
        """Each request gets a fresh id."""
        provider, bodies = make_provider(lambda request: result_response([]))
        provider.call(1, 2, [])
        provider.call(1, 2, [])
        assert bodies[1]["id"] == bodies[0]["id"] + 1

    def test_rpc_error_object(self):
        """A JSON-RPC error object becomes a retryable ProviderError."""
        def handler(request):
            return httpx.Response(
                200,
                json={"jsonrpc": "2.0", "id": 1, "error": {"code": 20, "message": "Contract not found"}},
            )

        provider, _ = make_provider(handler)
        with pytest.raises(ProviderError, match="Contract not found") as exc_info:
            provider.call(1, 2, [])
        assert exc_info.value.code == 20
        assert exc_info.value.retryable is True

    def test_http_error_status(self):
        """Non-2xx statuses raise ProviderError."""
        provider, _ = make_provider(lambda request: httpx.Response(503))
        with pytest.raises(ProviderError, match="transport"):
            provider.call(1, 2, [])

    def test_timeout(self):
        """Transport timeouts raise ProviderError."""
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider, _ = make_provider(handler)
        with pytest.raises(ProviderError, match="timeout"):
            provider.call(1, 2, [])

    def test_connection_error(self):
        """Connection failures raise ProviderError."""
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        provider, _ = make_provider(handler)
        with pytest.raises(ProviderError):
            provider.call(1, 2, [])

    def test_invalid_json(self):
        """A non-JSON body raises ProviderError."""
        provider, _ = make_provider(lambda request: httpx.Response(200, content=b"not json"))
        with pytest.raises(ProviderError, match="invalid JSON"):
            provider.call(1, 2, [])

    def test_non_list_result(self):
        """A result that is not a list is rejected."""
        provider, _ = make_provider(lambda request: result_response("0x1"))
        with pytest.raises(ProviderError):
            provider.call(1, 2, [])

    def test_non_hex_word(self):
        """Result words must be hex."""
        provider, _ = make_provider(lambda request: result_response(["0x1", "zz"]))
        with pytest.raises(ProviderError):
            provider.call(1, 2, [])

    def test_missing_result(self):
        """A response without result or error is rejected."""
        provider, _ = make_provider(lambda request: httpx.Response(200, json={"jsonrpc": "2.0", "id": 1}))
        with pytest.raises(ProviderError, match="no result"):
            provider.call(1, 2, [])


class TestJsonRpcProviderMisc:
    """Tests for chain id and lifecycle."""

    def test_chain_id(self):
        """chain_id parses the starknet_chainId result."""
        provider, bodies = make_provider(lambda request: result_response(hex(SN_MAIN)))
        assert provider.chain_id() == SN_MAIN
        assert bodies[0]["method"] == "starknet_chainId"

    def test_context_manager_closes_client(self):
        """Leaving the context closes the httpx client."""
        client = httpx.Client(transport=httpx.MockTransport(lambda request: result_response([])))
        with JsonRpcProvider(RPC_URL, client=client):
            pass
        assert client.is_closed


class TestMockQueryProvider:
    """Tests for MockQueryProvider."""

    def test_returns_configured_response(self):
        """Responses are looked up by entry-point name."""
        provider = MockQueryProvider(responses={"decimals": [18]})
        assert provider.call(0x1, get_selector_from_name("decimals"), []) == [18]

    def test_records_calls_by_name(self):
        """Calls are recorded with the resolved name and block id."""
        provider = MockQueryProvider(responses={"allowance": [5, 0]})
        provider.call(0x1, get_selector_from_name("allowance"), [2, 3], BLOCK_PRE_CONFIRMED)
        assert provider.calls == [(0x1, "allowance", [2, 3], "pre_confirmed")]

    def test_missing_response_raises(self):
        """An unconfigured entry point raises ProviderError."""
        provider = MockQueryProvider()
        with pytest.raises(ProviderError, match="symbol"):
            provider.call(0x1, get_selector_from_name("symbol"), [])

    def test_configured_error(self):
        """Configured errors are raised for their entry point."""
        provider = MockQueryProvider(errors={"name": ProviderError("down")})
        with pytest.raises(ProviderError, match="down"):
            provider.call(0x1, get_selector_from_name("name"), [])

    def test_unknown_selector_recorded_as_hex(self):
        """Unknown selectors are keyed by their hex form."""
        provider = MockQueryProvider(responses={"0x99": [1]})
        assert provider.call(0x1, 0x99, []) == [1]
        assert provider.calls[0][1] == "0x99"
