"""Replay an exchange rate schedule against a ledger and a simulated pool.

The output is a timeline that can feed reporting and visualisation: for each
rate observation it records the donator's principal, the value of the shares
backing it, the yield still claimable and the yield claimed so far.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import pandas as pd

from .config import LedgerConfig
from .conversion import asset_value
from .core import (
    DEFAULT_DECIMALS,
    ClaimExceedsYield,
    InsufficientYieldAfterRounding,
    LedgerError,
    NoYieldAvailable,
    RateObservation,
)
from .ledger import YieldShareLedger
from .pools import InMemoryAsset, SimulatedPool
from .sources import RateSource

logger = logging.getLogger(__name__)

TIMELINE_COLUMNS = [
    "exchange_rate",
    "principal",
    "share_balance",
    "share_value",
    "claimable",
    "claimed",
    "cumulative_claimed",
]


@dataclass(frozen=True)
class SimulationResult:
    """Container for the outputs of a simulation run.

    Attributes
    ----------
    timeline:
        One row per rate observation, indexed by timestamp, with the columns
        listed in :data:`TIMELINE_COLUMNS` (asset base units).
    total_claimed:
        Sum of all yield paid to the receiver.
    returned_at_stop:
        Amount returned to the donator by the final stop, ``None`` when the
        position was left open or the stop failed.
    stop_error:
        Message of the error raised by the final stop, if any.
    """

    timeline: pd.DataFrame
    total_claimed: int
    returned_at_stop: int | None = None
    stop_error: str | None = None


def open_ledger(
    *,
    decimals: int = DEFAULT_DECIMALS,
    initial_rate: int | None = None,
    config: LedgerConfig | None = None,
    symbol: str = "USDC",
) -> tuple[InMemoryAsset, SimulatedPool, YieldShareLedger]:
    """Wire an in-memory asset, a simulated pool and a ledger together."""

    asset = InMemoryAsset(symbol=symbol, decimals=decimals)
    pool = SimulatedPool(asset, initial_rate=initial_rate)
    ledger = YieldShareLedger(pool, asset, config=config)
    return asset, pool, ledger


def load_schedule(sources: Sequence[RateSource]) -> list[RateObservation]:
    """Merge observations from several sources, skipping sources that fail."""

    rows: list[RateObservation] = []
    for source in sources:
        try:
            rows.extend(source.fetch())
        except Exception as exc:
            logger.warning("Source %s failed: %s", source.__class__.__name__, exc)
            continue
    return sorted(rows, key=lambda row: row.timestamp)


def _move_rate(pool: SimulatedPool, rate: int) -> None:
    if rate >= pool.exchange_rate():
        pool.accrue(rate)
    else:
        pool.mark_down(rate)


def simulate(
    ledger: YieldShareLedger,
    pool: SimulatedPool,
    schedule: Sequence[RateObservation],
    *,
    donator: str,
    receiver: str,
    amount: int,
    claim_every: int = 1,
    stop_at_end: bool = True,
) -> SimulationResult:
    """Open a position at the first observation and follow it through the schedule.

    Parameters
    ----------
    ledger, pool:
        Ledger under test and the simulated pool it deposits into.
    schedule:
        Time-ordered rate observations; the first one sets the entry rate.
    donator, receiver:
        Parties of the position.  The donator is minted ``amount`` and
        approves the ledger before starting.
    amount:
        Deposit in asset base units.
    claim_every:
        The receiver claims on every ``claim_every``-th observation after
        the first; ``0`` disables claims.
    stop_at_end:
        Unwind the position after the last observation.
    """

    if not schedule:
        empty = pd.DataFrame(columns=TIMELINE_COLUMNS)
        return SimulationResult(timeline=empty, total_claimed=0)

    asset = pool.asset
    asset.mint(donator, amount)
    asset.approve(donator, ledger.address, amount)

    _move_rate(pool, schedule[0].exchange_rate)
    ledger.start(donator, receiver, amount)

    precision = pool.asset_decimals()
    records: list[dict[str, object]] = []
    index: list[pd.Timestamp] = []
    cumulative = 0

    for i, observation in enumerate(schedule):
        if i > 0:
            _move_rate(pool, observation.exchange_rate)
        claimed = 0
        if claim_every and i > 0 and i % claim_every == 0:
            try:
                claimed = ledger.claim(receiver, donator)
            except (NoYieldAvailable, InsufficientYieldAfterRounding, ClaimExceedsYield) as exc:
                logger.debug("no claim at %s: %s", observation.timestamp, exc)
        cumulative += claimed
        entry = ledger.entry(donator)
        records.append(
            {
                "exchange_rate": observation.exchange_rate,
                "principal": entry.principal_assets,
                "share_balance": entry.share_balance,
                "share_value": asset_value(entry.share_balance, pool.exchange_rate(), precision),
                "claimable": ledger.claimable(donator, receiver),
                "claimed": claimed,
                "cumulative_claimed": cumulative,
            }
        )
        index.append(observation.timestamp)

    timeline = pd.DataFrame(records, index=pd.DatetimeIndex(index, name="timestamp"))
    timeline = timeline.reindex(columns=TIMELINE_COLUMNS)

    returned: int | None = None
    stop_error: str | None = None
    if stop_at_end:
        try:
            returned = ledger.stop(donator)
        except LedgerError as exc:
            logger.warning("final stop for %s failed: %s", donator, exc)
            stop_error = str(exc)

    return SimulationResult(
        timeline=timeline,
        total_claimed=cumulative,
        returned_at_stop=returned,
        stop_error=stop_error,
    )


__all__ = ["SimulationResult", "TIMELINE_COLUMNS", "load_schedule", "open_ledger", "simulate"]
