"""High-level AutoSwappr client.

Composes the layers below it: validate inputs with the codec, build typed
models, serialize them, dispatch through the contract bindings and decode the
response. Every address argument is validated before any network call.

Writes on one client must be serialized by the caller: the account handles
nonces and this class does no locking.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

import structlog

from autoswappr.account import Account, Call
from autoswappr.amounts import to_decimal_amount, to_raw_amount
from autoswappr.codec import normalize_address, parse_address, to_hex
from autoswappr.contracts import AutoSwapprContract, Erc20Contract, execute_calls
from autoswappr.errors import AccountError, SwapFailed, ZeroAmount
from autoswappr.models.config import AutoSwapprConfig
from autoswappr.models.contract import ContractInfo, TokenMetadata
from autoswappr.models.swap import (
    PoolKey,
    Route,
    RouteParams,
    SwapData,
    SwapOptions,
    SwapParameters,
    SwapParams,
)
from autoswappr.models.types import I129, FeeType, Uint256
from autoswappr.provider import BLOCK_PRE_CONFIRMED, JsonRpcProvider, QueryProvider
from autoswappr.tokens import TokenRegistry, default_registry

logger = structlog.get_logger()


def _checked(address: str, name: str) -> str:
    """Validate an address argument and return its canonical form."""
    parse_address(address, name=name)
    return normalize_address(address)


class AutoSwapprClient:
    """Client for the AutoSwappr router and the tokens it trades.

    Reads go through the QueryProvider. Writes need an Account, which is
    supplied by the caller; signing is never done here.
    """

    def __init__(
        self,
        config: AutoSwapprConfig,
        provider: QueryProvider,
        account: Account | None = None,
        registry: TokenRegistry | None = None,
    ) -> None:
        """Initialize client.

        Args:
            config: Validated connection and account settings
            provider: Read transport
            account: Signer for write operations, None for a read-only client
            registry: Token metadata (defaults to the built-in token set)
        """
        self.config = config
        self.provider = provider
        self._account = account
        self.registry = registry if registry is not None else default_registry()
        self.autoswappr_contract = AutoSwapprContract(config.contract_address, provider)

    @classmethod
    def from_config(
        cls,
        config: AutoSwapprConfig,
        account: Account | None = None,
        registry: TokenRegistry | None = None,
    ) -> AutoSwapprClient:
        """Build a client talking JSON-RPC to config.rpc_url."""
        provider = JsonRpcProvider(config.rpc_url, timeout=config.request_timeout)
        logger.debug(
            "autoswappr_client_created",
            rpc_url=config.rpc_url,
            contract=config.contract_address,
            account=config.account_address,
        )
        return cls(config, provider, account=account, registry=registry)

    @property
    def account(self) -> Account:
        if self._account is None:
            raise AccountError("No account configured; write operations need an Account")
        return self._account

    @property
    def account_address(self) -> str:
        return normalize_address(self.config.account_address)

    @property
    def contract_address(self) -> str:
        return normalize_address(self.config.contract_address)

    def _erc20(self, token_address: str) -> Erc20Contract:
        return Erc20Contract(_checked(token_address, "token address"), self.provider)

    # =========================================================================
    # Reads
    # =========================================================================

    def get_contract_parameters(self) -> ContractInfo:
        return self.autoswappr_contract.get_contract_parameters()

    def get_token_amount_in_usd(self, token: str, token_amount: int) -> int:
        """Raw USD value of a raw token amount, as quoted by the router oracle."""
        token = _checked(token, "token address")
        usd = self.autoswappr_contract.get_token_amount_in_usd(
            token, Uint256.from_u128(token_amount)
        )
        logger.debug("token_usd_quote", token=token, amount=token_amount, usd=usd.value)
        return usd.value

    def get_token_amount_in_usd_formatted(
        self, token: str, token_amount: int, decimals: int
    ) -> Decimal:
        """USD value scaled down by 10^decimals."""
        return to_decimal_amount(self.get_token_amount_in_usd(token, token_amount), decimals)

    def get_allowance(self, token_address: str, owner: str, spender: str) -> int:
        erc20 = self._erc20(token_address)
        owner = _checked(owner, "owner address")
        spender = _checked(spender, "spender address")
        return erc20.allowance(owner, spender).value

    def get_token_balance(self, token_address: str) -> int:
        """Raw balance of the configured account."""
        return self._erc20(token_address).balance_of(self.account_address).value

    def get_token_balance_formatted(self, token_address: str) -> Decimal:
        """Balance of the configured account in whole token units.

        Decimals come from the registry when the token is known, otherwise
        from the token contract.
        """
        raw = self.get_token_balance(token_address)
        if token_address in self.registry:
            decimals = self.registry.get_token_info_by_address(token_address).decimals
        else:
            decimals = self._erc20(token_address).decimals()
        return to_decimal_amount(raw, decimals)

    def get_token_info(self, token_address: str) -> TokenMetadata:
        """Read name, symbol and decimals from the token contract."""
        erc20 = self._erc20(token_address)
        return TokenMetadata(name=erc20.name(), symbol=erc20.symbol(), decimals=erc20.decimals())

    def get_token_from_status_and_value(self, token_from: str) -> tuple[bool, int]:
        token_from = _checked(token_from, "token_from address")
        return self.autoswappr_contract.get_token_from_status_and_value(token_from)

    # =========================================================================
    # Writes
    # =========================================================================

    def approve_token(self, token_address: str, spender: str, amount: int) -> int:
        erc20 = self._erc20(token_address)
        spender = _checked(spender, "spender address")
        tx_hash = erc20.approve(self.account, spender, Uint256.from_u128(amount))
        logger.info(
            "erc20_approve_submitted",
            token=to_hex(erc20.address),
            spender=spender,
            amount=amount,
            tx_hash=to_hex(tx_hash),
        )
        return tx_hash

    def execute_ekubo_swap(self, swap_data: SwapData) -> int:
        tx_hash = self.autoswappr_contract.ekubo_swap(self.account, swap_data)
        logger.info("ekubo_swap_submitted", tx_hash=to_hex(tx_hash))
        return tx_hash

    def execute_ekubo_manual_swap(self, swap_data: SwapData) -> int:
        tx_hash = self.autoswappr_contract.ekubo_manual_swap(self.account, swap_data)
        logger.info("ekubo_manual_swap_submitted", tx_hash=to_hex(tx_hash))
        return tx_hash

    def execute_avnu_swap(
        self,
        protocol_swapper: str,
        token_from_address: str,
        token_from_amount: int,
        token_to_address: str,
        token_to_min_amount: int,
        beneficiary: str,
        integrator_fee_amount_bps: int,
        integrator_fee_recipient: str,
        routes: Sequence[Route],
    ) -> int:
        """Swap through AVNU with raw u128 amounts."""
        tx_hash = self.autoswappr_contract.avnu_swap(
            self.account,
            protocol_swapper=_checked(protocol_swapper, "protocol swapper address"),
            token_from=_checked(token_from_address, "token from address"),
            token_from_amount=Uint256.from_u128(token_from_amount),
            token_to=_checked(token_to_address, "token to address"),
            token_to_min_amount=Uint256.from_u128(token_to_min_amount),
            beneficiary=_checked(beneficiary, "beneficiary address"),
            integrator_fee_amount_bps=integrator_fee_amount_bps,
            integrator_fee_recipient=_checked(
                integrator_fee_recipient, "integrator fee recipient address"
            ),
            routes=routes,
        )
        logger.info("avnu_swap_submitted", routes=len(routes), tx_hash=to_hex(tx_hash))
        return tx_hash

    def execute_fibrous_swap(
        self,
        protocol_swapper: str,
        beneficiary: str,
        route_params: RouteParams,
        swap_params: Sequence[SwapParams],
    ) -> int:
        tx_hash = self.autoswappr_contract.fibrous_swap(
            self.account,
            route_params=route_params,
            swap_params=swap_params,
            protocol_swapper=_checked(protocol_swapper, "protocol swapper address"),
            beneficiary=_checked(beneficiary, "beneficiary address"),
        )
        logger.info("fibrous_swap_submitted", steps=len(swap_params), tx_hash=to_hex(tx_hash))
        return tx_hash

    def execute_swap_with_approval(self, token_in: str, swap_data: SwapData, amount: int) -> int:
        """Approve the router for amount, then run ekubo_manual_swap.

        These are two separate transactions, not an atomic bundle: if the swap
        fails the approval stays on-chain. Use ekubo_manual_swap for the atomic
        approve + swap path.

        Returns:
            Transaction hash of the swap

        Raises:
            SwapFailed: If either transaction fails; the cause is chained
        """
        try:
            approve_tx = self.approve_token(token_in, self.contract_address, amount)
        except AccountError as err:
            raise SwapFailed(f"Approval of {token_in} failed: {err}") from err

        try:
            return self.execute_ekubo_manual_swap(swap_data)
        except AccountError as err:
            raise SwapFailed(
                f"Swap failed after approval {to_hex(approve_tx)} was submitted: {err}"
            ) from err

    def build_swap_data(self, token0: str, token1: str, options: SwapOptions) -> SwapData:
        """Build a validated SwapData for the configured account, offline.

        Raises:
            InvalidInput: On malformed addresses
            InvalidPoolConfig: If the pair has no known fee tier
        """
        pool_key = PoolKey.derive(
            _checked(token0, "token0 address"), _checked(token1, "token1 address")
        )
        return SwapData(
            params=options.to_swap_parameters(),
            pool_key=pool_key,
            caller=self.account_address,
        )

    def ekubo_manual_swap(
        self, token_from: str, token_to: str, amount: int | Decimal | str
    ) -> int:
        """Swap a whole-unit amount of token_from into token_to through Ekubo.

        The amount is scaled by the token's registry decimals. If the router's
        allowance (read at the pre-confirmed block) already covers it, only the
        swap is submitted; otherwise approve and swap are bundled atomically in
        one transaction.

        Returns:
            Transaction hash

        Raises:
            UnsupportedToken: If token_from is not in the registry
            ZeroAmount: If the amount is zero
            SwapFailed: If the transaction fails; the cause is chained
        """
        token_from = _checked(token_from, "token_from address")
        token_to = _checked(token_to, "token_to address")
        decimals = self.registry.get_token_info_by_address(token_from).decimals
        raw_amount = to_raw_amount(amount, decimals)
        if raw_amount == 0:
            raise ZeroAmount()

        swap_data = SwapData(
            params=SwapParameters.new(I129(mag=raw_amount, sign=False), is_token1=False),
            pool_key=PoolKey.derive(token_from, token_to),
            caller=self.account_address,
        )
        account = self.account
        erc20 = Erc20Contract(token_from, self.provider)
        allowance = erc20.allowance(
            self.account_address, self.contract_address, block_id=BLOCK_PRE_CONFIRMED
        ).value

        calls: list[Call] = []
        if allowance < raw_amount:
            calls.append(erc20.build_approve(self.contract_address, Uint256.from_u128(raw_amount)))
        calls.append(self.autoswappr_contract.build_ekubo_manual_swap(swap_data))

        logger.info(
            "ekubo_manual_swap_prepared",
            token_from=token_from,
            token_to=token_to,
            amount=raw_amount,
            allowance=allowance,
            with_approval=len(calls) > 1,
        )
        try:
            return execute_calls(account, calls)
        except AccountError as err:
            raise SwapFailed(f"Ekubo manual swap failed: {err}") from err

    # =========================================================================
    # Admin
    # =========================================================================

    def set_fee_type(self, fee_type: FeeType, percentage_fee: int) -> int:
        tx_hash = self.autoswappr_contract.set_fee_type(self.account, fee_type, percentage_fee)
        logger.info(
            "fee_type_updated",
            fee_type=fee_type.name,
            percentage_fee=percentage_fee,
            tx_hash=to_hex(tx_hash),
        )
        return tx_hash

    def support_new_token_from(self, token_from: str, feed_id: int) -> int:
        token_from = _checked(token_from, "token_from address")
        tx_hash = self.autoswappr_contract.support_new_token_from(self.account, token_from, feed_id)
        logger.info("token_from_supported", token=token_from, tx_hash=to_hex(tx_hash))
        return tx_hash

    def remove_token_from(self, token_from: str) -> int:
        token_from = _checked(token_from, "token_from address")
        tx_hash = self.autoswappr_contract.remove_token_from(self.account, token_from)
        logger.info("token_from_removed", token=token_from, tx_hash=to_hex(tx_hash))
        return tx_hash


__all__ = ["AutoSwapprClient"]
