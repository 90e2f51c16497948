from pathlib import Path

import pandas as pd
import pytest

from yield_share.sources import RateScheduleCSVSource


def test_rate_schedule_csv_source_parses_and_sorts(tmp_path: Path) -> None:
    csv_path = tmp_path / "rates.csv"
    csv_path.write_text(
        "timestamp,exchange_rate\n"
        "2024-01-03,1001000\n"
        "2024-01-01,1000000\n"
        "2024-01-02,1000500\n"
    )

    rows = RateScheduleCSVSource(str(csv_path)).fetch()

    assert [row.exchange_rate for row in rows] == [1_000_000, 1_000_500, 1_001_000]
    assert all(isinstance(row.exchange_rate, int) for row in rows)
    assert rows[0].timestamp == pd.Timestamp("2024-01-01", tz="UTC")


def test_rate_schedule_csv_source_requires_columns(tmp_path: Path) -> None:
    csv_path = tmp_path / "bad.csv"
    csv_path.write_text("timestamp,rate\n2024-01-01,1\n")
    with pytest.raises(ValueError, match="missing columns"):
        RateScheduleCSVSource(str(csv_path)).fetch()


def test_bundled_sample_schedule_is_monotonic() -> None:
    path = Path(__file__).resolve().parents[2] / "src" / "sample_rates.csv"
    rows = RateScheduleCSVSource(str(path)).fetch()
    rates = [row.exchange_rate for row in rows]
    assert len(rates) == 30
    assert rates[0] == 1_000_000
    assert rates == sorted(rates)
