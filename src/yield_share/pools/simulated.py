"""Simulated ERC-4626 style pool backed by an :class:`InMemoryAsset`."""

from __future__ import annotations

import logging
from typing import Any

from ..conversion import asset_value, shares_for_assets
from ..core import AssetError, PoolError
from .asset import InMemoryAsset

logger = logging.getLogger(__name__)


class SimulatedPool:
    """Pool with an explicit exchange rate that yield accrual pushes upwards.

    The rate is the asset value of one whole share (``10**decimals`` share
    base units).  :meth:`accrue` mints the underlying into the pool so its
    reserves always cover the value of outstanding shares; :meth:`mark_down`
    lowers the rate to simulate a loss event.  ``withdraw_haircut_bps`` skims
    every withdrawal, which is the other way a pool can pay out less than
    expected.
    """

    def __init__(
        self,
        asset: InMemoryAsset,
        *,
        address: str = "pool",
        initial_rate: int | None = None,
        withdraw_haircut_bps: int = 0,
    ) -> None:
        self.asset = asset
        self.address = address
        self.withdraw_haircut_bps = withdraw_haircut_bps
        self._decimals = asset.decimals
        self._rate = initial_rate if initial_rate is not None else 10**asset.decimals
        if self._rate <= 0:
            raise ValueError(f"initial_rate must be positive, got {self._rate}")
        self._shares: dict[str, int] = {}
        self.total_shares = 0

    # -----------------
    # Pool protocol
    # -----------------

    def asset_decimals(self) -> int:
        return self._decimals

    def exchange_rate(self) -> int:
        return self._rate

    def deposit(self, caller: str, amount: int) -> int:
        if amount <= 0:
            raise PoolError(f"deposit amount must be positive, got {amount}")
        shares = shares_for_assets(amount, self._rate, self._decimals)
        if shares == 0:
            raise PoolError(f"deposit of {amount} mints zero shares at rate {self._rate}")
        try:
            self.asset.transfer_from(self.address, caller, self.address, amount)
        except AssetError as exc:
            raise PoolError(f"deposit transfer failed: {exc}") from exc
        self._shares[caller] = self.balance_of(caller) + shares
        self.total_shares += shares
        logger.debug("deposit %s assets from %s -> %s shares", amount, caller, shares)
        return shares

    def withdraw(self, caller: str, shares: int, recipient: str) -> int:
        owned = self.balance_of(caller)
        if shares <= 0 or shares > owned:
            raise PoolError(f"{caller} cannot redeem {shares} shares (owns {owned})")
        amount = asset_value(shares, self._rate, self._decimals)
        if self.withdraw_haircut_bps:
            amount -= amount * self.withdraw_haircut_bps // 10_000
        self._shares[caller] = owned - shares
        self.total_shares -= shares
        try:
            self.asset.transfer(self.address, recipient, amount)
        except AssetError as exc:
            raise PoolError(f"withdraw transfer failed: {exc}") from exc
        logger.debug("withdraw %s shares by %s -> %s assets to %s", shares, caller, amount, recipient)
        return amount

    # -----------------
    # Simulation controls
    # -----------------

    def balance_of(self, owner: str) -> int:
        return self._shares.get(owner, 0)

    def total_assets(self) -> int:
        return asset_value(self.total_shares, self._rate, self._decimals)

    def accrue(self, new_rate: int) -> None:
        """Raise the exchange rate to ``new_rate`` and top up reserves."""

        if new_rate < self._rate:
            raise ValueError(
                f"accrual cannot lower the exchange rate ({self._rate} -> {new_rate}); "
                "use mark_down for losses"
            )
        self._rate = new_rate
        shortfall = self.total_assets() - self.asset.balance_of(self.address)
        if shortfall > 0:
            self.asset.mint(self.address, shortfall)

    def grow(self, bps: int) -> int:
        """Accrue yield of ``bps`` basis points on the current rate."""

        new_rate = self._rate * (10_000 + bps) // 10_000
        self.accrue(new_rate)
        return new_rate

    def mark_down(self, new_rate: int) -> None:
        if new_rate <= 0:
            raise ValueError(f"exchange rate must stay positive, got {new_rate}")
        logger.warning("pool %s marked down: rate %s -> %s", self.address, self._rate, new_rate)
        self._rate = new_rate

    def snapshot(self) -> dict[str, Any]:
        return {
            "rate": self._rate,
            "shares": dict(self._shares),
            "total_shares": self.total_shares,
        }

    def restore(self, state: dict[str, Any]) -> None:
        self._rate = state["rate"]
        self._shares = dict(state["shares"])
        self.total_shares = state["total_shares"]


__all__ = ["SimulatedPool"]
