"""Contract bindings for the AutoSwappr router and ERC20 tokens.

A Contract binds an address to a QueryProvider for reads. Writes go through
an Account passed per call, so one binding can be shared by several signers.
Each method builds calldata with the serializer, dispatches, and decodes the
returned words strictly.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import structlog

from autoswappr import abi
from autoswappr.abi import get_selector_from_name
from autoswappr.account import Account, Call
from autoswappr.codec import WordKind, check_width, parse_address, to_hex, word_to_ascii
from autoswappr.errors import AccountError, AutoSwapprError, ProviderError
from autoswappr.models.contract import ContractInfo
from autoswappr.models.swap import Route, RouteParams, SwapData, SwapParams
from autoswappr.models.types import FeeType, Uint256
from autoswappr.provider import BLOCK_LATEST, QueryProvider
from autoswappr.serializer import decode_contract_info, decode_tuple, encode, encode_many

logger = structlog.get_logger()


def execute_calls(account: Account, calls: Sequence[Call]) -> int:
    """Submit calls as one atomic transaction.

    No retry is attempted: resubmitting a swap can execute it twice.

    Returns:
        Transaction hash

    Raises:
        AccountError: If signing or submission fails
    """
    entry_points = [to_hex(call.selector) for call in calls]
    try:
        tx_hash = account.execute(list(calls))
    except AutoSwapprError:
        raise
    except Exception as e:
        logger.warning("transaction_failed", calls=len(calls), error=str(e))
        raise AccountError(f"Transaction submission failed: {e}") from e

    logger.info(
        "transaction_submitted",
        calls=len(calls),
        selectors=entry_points,
        tx_hash=to_hex(tx_hash),
    )
    return tx_hash


class Contract:
    """Address bound to a read provider."""

    def __init__(self, address: str | int, provider: QueryProvider) -> None:
        self.address = address if isinstance(address, int) else parse_address(address)
        self.provider = provider

    def call_read(
        self,
        entry_point: str,
        calldata: Iterable[int] = (),
        block_id: str = BLOCK_LATEST,
    ) -> list[int]:
        """Call a view entry point and return the raw words.

        Raises:
            ProviderError: On transport or node failure
        """
        words = list(calldata)
        logger.debug(
            "contract_call",
            contract=to_hex(self.address),
            entry_point=entry_point,
            calldata_len=len(words),
            block_id=block_id,
        )
        try:
            return self.provider.call(
                self.address, get_selector_from_name(entry_point), words, block_id
            )
        except AutoSwapprError:
            raise
        except Exception as e:
            raise ProviderError(f"{entry_point} call failed: {e}") from e

    def build_call(self, entry_point: str, calldata: Iterable[int] = ()) -> Call:
        """Build an invoke without submitting it, for multicall bundling."""
        return Call(
            to=self.address,
            selector=get_selector_from_name(entry_point),
            calldata=tuple(calldata),
        )

    def call_write(
        self, account: Account, entry_point: str, calldata: Iterable[int] = ()
    ) -> int:
        """Submit a single invoke and return its transaction hash.

        Raises:
            AccountError: If signing or submission fails
        """
        return execute_calls(account, [self.build_call(entry_point, calldata)])


class AutoSwapprContract(Contract):
    """The AutoSwappr router."""

    def get_contract_parameters(self) -> ContractInfo:
        """Read the router configuration.

        Raises:
            DeserializationError: On a short or out-of-range response
        """
        return decode_contract_info(self.call_read(abi.CONTRACT_PARAMETERS))

    def build_ekubo_manual_swap(self, swap_data: SwapData) -> Call:
        return self.build_call(abi.EKUBO_MANUAL_SWAP, encode(swap_data))

    def ekubo_swap(self, account: Account, swap_data: SwapData) -> int:
        return self.call_write(account, abi.EKUBO_SWAP, encode(swap_data))

    def ekubo_manual_swap(self, account: Account, swap_data: SwapData) -> int:
        return execute_calls(account, [self.build_ekubo_manual_swap(swap_data)])

    def avnu_swap(
        self,
        account: Account,
        *,
        protocol_swapper: str,
        token_from: str,
        token_from_amount: Uint256,
        token_to: str,
        token_to_min_amount: Uint256,
        beneficiary: str,
        integrator_fee_amount_bps: int,
        integrator_fee_recipient: str,
        routes: Sequence[Route],
    ) -> int:
        """Swap through AVNU.

        Calldata: protocol_swapper, token_from, amount (u256), token_to,
        min amount (u256), beneficiary, integrator fee bps (u128), integrator
        fee recipient, then the length-prefixed routes.
        """
        check_width(integrator_fee_amount_bps, WordKind.U128, name="integrator_fee_amount_bps")
        calldata = encode_many(
            protocol_swapper,
            token_from,
            token_from_amount,
            token_to,
            token_to_min_amount,
            beneficiary,
            integrator_fee_amount_bps,
            integrator_fee_recipient,
            list(routes),
        )
        return self.call_write(account, abi.AVNU_SWAP, calldata)

    def fibrous_swap(
        self,
        account: Account,
        *,
        route_params: RouteParams,
        swap_params: Sequence[SwapParams],
        protocol_swapper: str,
        beneficiary: str,
    ) -> int:
        """Swap through Fibrous.

        Calldata: protocol_swapper, beneficiary, route params, then the
        length-prefixed swap steps.
        """
        calldata = encode_many(protocol_swapper, beneficiary, route_params, list(swap_params))
        return self.call_write(account, abi.FIBROUS_SWAP, calldata)

    def get_token_amount_in_usd(self, token: str, amount: Uint256) -> Uint256:
        """Quote a token amount in USD through the router's oracle."""
        words = self.call_read(abi.GET_TOKEN_AMOUNT_IN_USD, encode_many(token, amount))
        (usd,) = decode_tuple(words, (WordKind.U256,), context=abi.GET_TOKEN_AMOUNT_IN_USD)
        return usd

    def get_token_from_status_and_value(self, token_from: str) -> tuple[bool, int]:
        """Whether token_from is supported, and its oracle feed id."""
        words = self.call_read(abi.GET_TOKEN_FROM_STATUS_AND_VALUE, encode(token_from))
        status, value = decode_tuple(
            words,
            (WordKind.BOOL, WordKind.FELT),
            context=abi.GET_TOKEN_FROM_STATUS_AND_VALUE,
        )
        return status, value

    def set_fee_type(self, account: Account, fee_type: FeeType, percentage_fee: int) -> int:
        check_width(percentage_fee, WordKind.U16, name="percentage_fee")
        return self.call_write(account, abi.SET_FEE_TYPE, encode_many(fee_type, percentage_fee))

    def support_new_token_from(self, account: Account, token_from: str, feed_id: int) -> int:
        return self.call_write(
            account, abi.SUPPORT_NEW_TOKEN_FROM, encode_many(token_from, feed_id)
        )

    def remove_token_from(self, account: Account, token_from: str) -> int:
        return self.call_write(account, abi.REMOVE_TOKEN_FROM, encode(token_from))


class Erc20Contract(Contract):
    """An ERC20 token with Cairo snake_case entry points."""

    def build_approve(self, spender: str, amount: Uint256) -> Call:
        return self.build_call(abi.APPROVE, encode_many(spender, amount))

    def approve(self, account: Account, spender: str, amount: Uint256) -> int:
        return execute_calls(account, [self.build_approve(spender, amount)])

    def allowance(self, owner: str, spender: str, block_id: str = BLOCK_LATEST) -> Uint256:
        words = self.call_read(abi.ALLOWANCE, encode_many(owner, spender), block_id)
        (value,) = decode_tuple(words, (WordKind.U256,), context=abi.ALLOWANCE)
        return value

    def balance_of(self, account: str) -> Uint256:
        words = self.call_read(abi.BALANCE_OF, encode(account))
        (value,) = decode_tuple(words, (WordKind.U256,), context=abi.BALANCE_OF)
        return value

    def decimals(self) -> int:
        (value,) = decode_tuple(self.call_read(abi.DECIMALS), (WordKind.U8,), context=abi.DECIMALS)
        return value

    def symbol(self) -> str:
        (word,) = decode_tuple(self.call_read(abi.SYMBOL), (WordKind.FELT,), context=abi.SYMBOL)
        return word_to_ascii(word)

    def name(self) -> str:
        (word,) = decode_tuple(self.call_read(abi.NAME), (WordKind.FELT,), context=abi.NAME)
        return word_to_ascii(word)


__all__ = ["Contract", "AutoSwapprContract", "Erc20Contract", "execute_calls"]
