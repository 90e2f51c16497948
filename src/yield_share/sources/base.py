"""Base utilities for YieldShare rate sources."""

from __future__ import annotations

import pandas as pd

from ..core import RateObservation


class ConstantGrowthSource:
    """Synthetic schedule compounding ``bps_per_period`` onto ``start_rate``.

    Each step applies the growth with integer arithmetic, rounding down, the
    same way :meth:`~yield_share.pools.SimulatedPool.grow` does.
    """

    def __init__(
        self,
        start_rate: int,
        bps_per_period: int,
        periods: int,
        *,
        start: str = "2024-01-01",
        freq: str = "D",
    ) -> None:
        if start_rate <= 0:
            raise ValueError(f"start_rate must be positive, got {start_rate}")
        if bps_per_period < 0:
            raise ValueError(f"bps_per_period must be non-negative, got {bps_per_period}")
        self.start_rate = start_rate
        self.bps_per_period = bps_per_period
        self.periods = periods
        self.start = start
        self.freq = freq

    def fetch(self) -> list[RateObservation]:
        index = pd.date_range(self.start, periods=self.periods, freq=self.freq, tz="UTC")
        rows: list[RateObservation] = []
        rate = self.start_rate
        for ts in index:
            rows.append(RateObservation(timestamp=ts, exchange_rate=rate))
            rate = rate * (10_000 + self.bps_per_period) // 10_000
        return rows


__all__ = ["ConstantGrowthSource"]
