from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

from yield_share import (
    ConstantGrowthSource,
    EventLog,
    LedgerConfig,
    open_ledger,
    simulate,
)
from yield_share.core import MAX_ALLOWANCE, Claimed, StartShare
from yield_share.reporting import ledger_report, summarise_claims, timeline_report

UNIT = 10**6


@pytest.fixture
def busy_ledger():
    asset, pool, ledger = open_ledger(decimals=6, config=LedgerConfig(dust_threshold=10 * UNIT))
    for donator in ("0xalice", "0xbob", "0xcarol"):
        asset.mint(donator, 1_000 * UNIT)
        asset.approve(donator, ledger.address, MAX_ALLOWANCE)
    ledger.start("0xalice", "0xfund", 1_000 * UNIT)
    ledger.start("0xbob", "0xfund", 1_000 * UNIT)
    ledger.start("0xcarol", "0xclub", 500 * UNIT)
    pool.accrue(1_050_000)
    ledger.claim("0xfund", "0xalice")
    ledger.claim("0xfund", "0xbob")
    ledger.claim("0xclub", "0xcarol")
    ledger.stop("0xbob")
    return ledger


def test_summarise_claims_groups_by_receiver(busy_ledger) -> None:
    summary = summarise_claims(busy_ledger.events)

    assert list(summary["receiver"]) == ["0xfund", "0xclub"]
    fund = summary.iloc[0]
    assert fund["claims"] == 2
    assert fund["total_claimed"] == 80 * UNIT
    assert fund["donators"] == 2
    assert fund["last_share_balance"] == 961_904_761
    # 525 value against 500 principal plus 10 dust leaves 15 claimable.
    assert summary.iloc[1]["total_claimed"] == 15 * UNIT


def test_summarise_claims_accepts_frames_and_empty_logs() -> None:
    log = EventLog([StartShare(receiver="0xr", donator="0xd", amount=5)])
    assert summarise_claims(log).empty
    assert summarise_claims(EventLog()).empty

    log.append(Claimed(receiver="0xr", donator="0xd", claimed_amount=3, new_share_balance=2))
    summary = summarise_claims(log.to_dataframe())
    assert summary.loc[0, "total_claimed"] == 3


def test_ledger_report_writes_csvs(tmp_path: Path, busy_ledger) -> None:
    paths = ledger_report(busy_ledger, tmp_path / "out")

    assert set(paths) == {"entries", "events", "receivers"}
    for path in paths.values():
        assert path.exists()

    entries = pd.read_csv(paths["entries"])
    assert sorted(entries["donator"]) == ["0xalice", "0xcarol"]
    events = pd.read_csv(paths["events"], index_col="sequence")
    assert list(events["event"]) == [
        "StartShare",
        "StartShare",
        "StartShare",
        "Claimed",
        "Claimed",
        "Claimed",
        "StopShare",
    ]
    receivers = pd.read_csv(paths["receivers"])
    assert receivers["total_claimed"].sum() == 95 * UNIT


def test_ledger_report_on_empty_ledger(tmp_path: Path) -> None:
    _, _, ledger = open_ledger()
    paths = ledger_report(ledger, tmp_path)
    assert pd.read_csv(paths["entries"]).empty
    assert pd.read_csv(paths["receivers"]).empty


def test_timeline_report_writes_timeline_and_summary(tmp_path: Path) -> None:
    _, pool, ledger = open_ledger(decimals=6)
    schedule = ConstantGrowthSource(UNIT, bps_per_period=50, periods=5).fetch()
    result = simulate(
        ledger, pool, schedule, donator="0xd", receiver="0xr", amount=1_000 * UNIT
    )

    path = timeline_report(result, tmp_path)

    timeline = pd.read_csv(path, index_col="timestamp")
    assert len(timeline) == 5
    assert timeline["cumulative_claimed"].iloc[-1] == result.total_claimed
    summary = pd.read_csv(tmp_path / "summary.csv")
    assert summary.loc[0, "total_claimed"] == result.total_claimed
    assert summary.loc[0, "returned_at_stop"] == result.returned_at_stop
