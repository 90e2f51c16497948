"""In-memory fungible asset with balances and allowances."""

from __future__ import annotations

import logging
from typing import Any

from ..core import DEFAULT_DECIMALS, MAX_ALLOWANCE, AssetError

logger = logging.getLogger(__name__)


class InMemoryAsset:
    """Token ledger keyed by address strings.

    An allowance of :data:`~yield_share.core.MAX_ALLOWANCE` is treated as
    unlimited and is never decremented by :meth:`transfer_from`.
    """

    def __init__(self, symbol: str = "USDC", decimals: int = DEFAULT_DECIMALS) -> None:
        if decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {decimals}")
        self.symbol = symbol
        self.decimals = decimals
        self.total_supply = 0
        self._balances: dict[str, int] = {}
        self._allowances: dict[tuple[str, str], int] = {}

    def balance_of(self, owner: str) -> int:
        return self._balances.get(owner, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    def mint(self, to: str, amount: int) -> None:
        if amount < 0:
            raise AssetError(f"cannot mint negative amount {amount}")
        self._balances[to] = self.balance_of(to) + amount
        self.total_supply += amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        if amount < 0:
            raise AssetError(f"cannot approve negative amount {amount}")
        self._allowances[(owner, spender)] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if amount < 0:
            raise AssetError(f"cannot transfer negative amount {amount}")
        balance = self.balance_of(sender)
        if balance < amount:
            raise AssetError(
                f"{self.symbol}: balance of {sender} is {balance}, needs {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> None:
        allowed = self.allowance(sender, spender)
        if allowed < amount:
            raise AssetError(
                f"{self.symbol}: allowance of {spender} over {sender} is {allowed}, needs {amount}"
            )
        self.transfer(sender, recipient, amount)
        if allowed != MAX_ALLOWANCE:
            self._allowances[(sender, spender)] = allowed - amount

    def snapshot(self) -> dict[str, Any]:
        return {
            "balances": dict(self._balances),
            "allowances": dict(self._allowances),
            "total_supply": self.total_supply,
        }

    def restore(self, state: dict[str, Any]) -> None:
        self._balances = dict(state["balances"])
        self._allowances = dict(state["allowances"])
        self.total_supply = state["total_supply"]
        logger.debug("%s state restored", self.symbol)


__all__ = ["InMemoryAsset"]
