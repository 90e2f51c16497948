from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
import pytest

import yield_share_demo
from yield_share import Visualizer

ROOT = Path(__file__).resolve().parents[1]


class _Canvas:
    def __init__(self) -> None:
        self.saved: list[str] = []

    def savefig(self, path: str, **kwargs: Any) -> None:
        self.saved.append(path)

    def __getattr__(self, name: str):
        return lambda *args, **kwargs: None


def test_demo_writes_reports_and_charts(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    canvas = _Canvas()
    monkeypatch.setattr(Visualizer, "_plt", staticmethod(lambda: canvas))
    monkeypatch.chdir(ROOT)
    monkeypatch.setattr("sys.argv", ["yield_share_demo"])
    monkeypatch.setenv("YIELD_SHARE_CONFIG", str(ROOT / "configs" / "demo.toml"))
    monkeypatch.setenv("YIELD_SHARE_OUTDIR", str(tmp_path))

    yield_share_demo.main()

    out = capsys.readouterr().out
    assert "Observations replayed: 30" in out
    assert "Returned to donator at stop" in out
    for name in ("entries.csv", "events.csv", "receivers.csv", "timeline.csv", "summary.csv"):
        assert (tmp_path / name).exists()
    summary = pd.read_csv(tmp_path / "summary.csv")
    assert summary.loc[0, "total_claimed"] > 0
    assert summary.loc[0, "returned_at_stop"] >= 1_000 * 10**6
    assert sorted(Path(p).name for p in canvas.saved) == [
        "claims_by_receiver.png",
        "position_timeline.png",
    ]


def test_demo_runs_with_zero_dust(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(Visualizer, "_plt", staticmethod(lambda: _Canvas()))
    monkeypatch.chdir(ROOT)
    monkeypatch.setattr("sys.argv", ["yield_share_demo"])
    monkeypatch.setenv("YIELD_SHARE_CONFIG", str(ROOT / "configs" / "demo.toml"))
    monkeypatch.setenv("YIELD_SHARE_OUTDIR", str(tmp_path))
    monkeypatch.setenv("YIELD_SHARE_DUST_THRESHOLD", "0")

    yield_share_demo.main()

    assert "Returned to donator at stop" in capsys.readouterr().out
