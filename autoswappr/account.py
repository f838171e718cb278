"""Write-side collaborator: the signing account.

Signing, nonce management and fee estimation live outside this package. The
client only needs something that can execute a batch of calls atomically and
report the transaction hash.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Call:
    """One invoke in a multicall: target contract, selector and calldata."""

    to: int
    selector: int
    calldata: tuple[int, ...]


class Account(Protocol):
    """Protocol for a Starknet account that signs and submits invokes."""

    @property
    def address(self) -> int:
        ...

    def execute(self, calls: Sequence[Call]) -> int:
        """Sign and submit the calls as one atomic transaction.

        Args:
            calls: Invokes to bundle, executed in order

        Returns:
            Transaction hash
        """
        ...


__all__ = ["Call", "Account"]
