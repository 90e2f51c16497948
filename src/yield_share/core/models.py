"""Immutable data models used throughout YieldShare."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Union

import pandas as pd


@dataclass(frozen=True)
class LedgerEntry:
    """Snapshot of a donator's position in the ledger.

    Amounts are integers in base units: ``principal_assets`` in the underlying
    asset, ``share_balance`` in pool shares.  An inactive entry has all three
    fields empty.
    """

    donator: str
    principal_assets: int = 0
    share_balance: int = 0
    receiver: str | None = None

    @property
    def is_active(self) -> bool:
        return self.receiver is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class StartShare:
    """Emitted when a donator opens a position for a receiver."""

    receiver: str
    donator: str
    amount: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "StartShare",
            "receiver": self.receiver,
            "donator": self.donator,
            "amount": self.amount,
            "share_balance": None,
        }


@dataclass(frozen=True)
class StopShare:
    """Emitted when a donator unwinds a position."""

    donator: str
    amount_returned: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "StopShare",
            "receiver": None,
            "donator": self.donator,
            "amount": self.amount_returned,
            "share_balance": 0,
        }


@dataclass(frozen=True)
class Claimed:
    """Emitted when a receiver withdraws yield."""

    receiver: str
    donator: str
    claimed_amount: int
    new_share_balance: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "event": "Claimed",
            "receiver": self.receiver,
            "donator": self.donator,
            "amount": self.claimed_amount,
            "share_balance": self.new_share_balance,
        }


LedgerEvent = Union[StartShare, StopShare, Claimed]


@dataclass(frozen=True)
class RateObservation:
    """Pool exchange rate (assets per ``10**decimals`` shares) at a point in time."""

    timestamp: pd.Timestamp
    exchange_rate: int

    def to_dict(self) -> dict[str, Any]:
        return {"timestamp": self.timestamp, "exchange_rate": self.exchange_rate}


__all__ = [
    "LedgerEntry",
    "StartShare",
    "StopShare",
    "Claimed",
    "LedgerEvent",
    "RateObservation",
]
