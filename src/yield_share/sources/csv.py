"""CSV-backed exchange rate schedules."""

from __future__ import annotations

import pandas as pd

from ..core import RateObservation


class RateScheduleCSVSource:
    """Load pool exchange rates from a CSV with ``timestamp`` and ``exchange_rate`` columns.

    Rates are integers in asset base units per whole share.  Rows are returned
    sorted by timestamp.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def fetch(self) -> list[RateObservation]:
        df = pd.read_csv(self.path)
        required = {"timestamp", "exchange_rate"}
        missing = required.difference(df.columns)
        if missing:
            raise ValueError(f"CSV missing columns: {missing}")
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
        df = df.sort_values("timestamp")
        rows = [
            RateObservation(
                timestamp=pd.Timestamp(r["timestamp"]),
                exchange_rate=int(r["exchange_rate"]),
            )
            for _, r in df.iterrows()
        ]
        return rows


__all__ = ["RateScheduleCSVSource"]
