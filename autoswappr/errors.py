"""AutoSwappr error classes.

Every failure raised by this package derives from AutoSwapprError, so callers
can catch one type at the boundary and still branch on the specific cause.
"""

from __future__ import annotations

from typing import Any


class AutoSwapprError(Exception):
    """Base error for AutoSwappr operations."""

    pass


class InvalidInput(AutoSwapprError, ValueError):
    """Malformed address, hex string, URL or number supplied by the caller.

    Always raised before any network call is made. Never retried.

    Attributes:
        value: The offending input
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class ZeroAmount(InvalidInput):
    """Swap or approval amount is zero."""

    def __init__(self, message: str = "Amount cannot be zero") -> None:
        super().__init__(message, 0)


class UnsupportedToken(InvalidInput):
    """Token is not present in the token registry."""

    def __init__(self, token: str) -> None:
        super().__init__(f"Unsupported token: {token}", token)
        self.token = token


class InvalidPoolConfig(InvalidInput):
    """Pool key cannot be built for the given pair."""

    pass


class Uint128Overflow(InvalidInput, OverflowError):
    """Value does not fit in 128 bits."""

    pass


class ContractError(AutoSwapprError):
    """Base error for contract invocation failures."""

    retryable = False


class DeserializationError(ContractError):
    """Contract returned fewer words than expected, or a word of the wrong width."""

    pass


class ProviderError(ContractError):
    """Transport, network or node failure on a read.

    Reads are idempotent, so callers may retry these at their discretion.

    Attributes:
        code: JSON-RPC error code, if the node returned one
    """

    retryable = True

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class AccountError(ContractError):
    """Signing or submission failure on a write.

    Must not be retried automatically: resubmitting may execute the swap twice.
    """

    pass


class InsufficientAllowance(AutoSwapprError):
    """Spender allowance is lower than the amount required."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Insufficient allowance. Required: {required}, Available: {available}")
        self.required = required
        self.available = available


class InsufficientBalance(AutoSwapprError):
    """Token balance is lower than the amount required."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"Insufficient balance. Required: {required}, Available: {available}")
        self.required = required
        self.available = available


class SwapFailed(AutoSwapprError):
    """A multi-call swap operation failed; the cause is chained."""

    pass


__all__ = [
    "AutoSwapprError",
    "InvalidInput",
    "ZeroAmount",
    "UnsupportedToken",
    "InvalidPoolConfig",
    "Uint128Overflow",
    "ContractError",
    "DeserializationError",
    "ProviderError",
    "AccountError",
    "InsufficientAllowance",
    "InsufficientBalance",
    "SwapFailed",
]
