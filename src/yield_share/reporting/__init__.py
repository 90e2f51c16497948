"""CSV reports for ledger state, events and simulation timelines."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..core import EventLog
from ..ledger import YieldShareLedger
from ..simulation import SimulationResult

_RECEIVER_COLUMNS = ["receiver", "claims", "total_claimed", "donators", "last_share_balance"]


def _ensure_outdir(outdir: str | Path) -> Path:
    p = Path(outdir)
    p.mkdir(parents=True, exist_ok=True)
    return p


def summarise_claims(events: EventLog | pd.DataFrame) -> pd.DataFrame:
    """Aggregate ``Claimed`` events per receiver.

    Returns one row per receiver with the number of claims, the total amount
    claimed, the number of distinct donators claimed from and the share
    balance left behind by the most recent claim.
    """

    df = events.to_dataframe() if isinstance(events, EventLog) else events
    if df.empty:
        return pd.DataFrame(columns=_RECEIVER_COLUMNS)
    claims = df[df["event"] == "Claimed"]
    if claims.empty:
        return pd.DataFrame(columns=_RECEIVER_COLUMNS)
    summary = (
        claims.groupby("receiver")
        .agg(
            claims=("amount", "count"),
            total_claimed=("amount", "sum"),
            donators=("donator", "nunique"),
            last_share_balance=("share_balance", "last"),
        )
        .reset_index()
        .sort_values("total_claimed", ascending=False, kind="stable")
        .reset_index(drop=True)
    )
    return summary.reindex(columns=_RECEIVER_COLUMNS)


def ledger_report(ledger: YieldShareLedger, outdir: str | Path) -> dict[str, Path]:
    """Write ``entries.csv``, ``events.csv`` and ``receivers.csv`` to ``outdir``.

    Returns a mapping of report name to the written path.
    """

    out = _ensure_outdir(outdir)
    paths = {
        "entries": out / "entries.csv",
        "events": out / "events.csv",
        "receivers": out / "receivers.csv",
    }

    entries = ledger.active_entries().to_dataframe()
    if entries.empty:
        entries = pd.DataFrame(columns=["donator", "principal_assets", "share_balance", "receiver"])
    entries.to_csv(paths["entries"], index=False)

    ledger.events.to_dataframe().to_csv(paths["events"])
    summarise_claims(ledger.events).to_csv(paths["receivers"], index=False)
    return paths


def timeline_report(result: SimulationResult, outdir: str | Path) -> Path:
    """Write the simulation timeline plus a one-row summary next to it."""

    out = _ensure_outdir(outdir)
    path = out / "timeline.csv"
    result.timeline.to_csv(path)
    pd.DataFrame(
        [
            {
                "total_claimed": result.total_claimed,
                "returned_at_stop": result.returned_at_stop,
                "stop_error": result.stop_error or "",
            }
        ]
    ).to_csv(out / "summary.csv", index=False)
    return path


__all__ = ["ledger_report", "summarise_claims", "timeline_report"]
