"""Collaborator protocols and in-process implementations used by :mod:`yield_share`.

The ledger only talks to a pool and an asset through the protocols below.
:class:`InMemoryAsset` and :class:`SimulatedPool` implement them for tests,
simulations and the demo; on-chain adapters would implement the same surface.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .asset import InMemoryAsset
from .simulated import SimulatedPool


class YieldPool(Protocol):
    """Yield-generating pool exchanging asset units for shares."""

    address: str

    def deposit(self, caller: str, amount: int) -> int: ...

    def withdraw(self, caller: str, shares: int, recipient: str) -> int: ...

    def exchange_rate(self) -> int: ...

    def asset_decimals(self) -> int: ...


class Asset(Protocol):
    """Fungible asset with pull-based transfers."""

    def balance_of(self, owner: str) -> int: ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> None: ...


@runtime_checkable
class Snapshotable(Protocol):
    """Collaborator whose state can be captured and restored by a transaction."""

    def snapshot(self) -> object: ...

    def restore(self, state: object) -> None: ...


__all__ = ["YieldPool", "Asset", "Snapshotable", "InMemoryAsset", "SimulatedPool"]
