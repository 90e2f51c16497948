import pandas as pd
import pytest

from yield_share.core import (
    Claimed,
    EntryRepository,
    EventLog,
    LedgerEntry,
    StartShare,
    StopShare,
)


@pytest.fixture
def sample_entries() -> list[LedgerEntry]:
    """Mix of active and inactive positions across two receivers."""

    return [
        LedgerEntry("alice", 1_000, 950, "carol"),
        LedgerEntry("bob", 50, 48, "carol"),
        LedgerEntry("dave", 2_000, 1_990, "erin"),
        LedgerEntry("frank"),
    ]


@pytest.fixture
def repository(sample_entries: list[LedgerEntry]) -> EntryRepository:
    return EntryRepository(sample_entries)


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({"active_only": True}, ["alice", "bob", "dave"]),
        ({"receiver": "carol"}, ["alice", "bob"]),
        ({"min_principal": 100}, ["alice", "dave"]),
        ({"receiver": "erin", "min_principal": 5_000}, []),
    ],
)
def test_filter_respects_criteria(
    repository: EntryRepository,
    sample_entries: list[LedgerEntry],
    kwargs: dict[str, object],
    expected: list[str],
) -> None:
    filtered = repository.filter(**kwargs)

    assert isinstance(filtered, EntryRepository)
    assert [entry.donator for entry in filtered] == expected
    assert [entry.donator for entry in repository] == [e.donator for e in sample_entries]


def test_total_principal_and_dataframe(repository: EntryRepository) -> None:
    assert repository.total_principal() == 3_050
    df = repository.to_dataframe()
    assert list(df.columns) == ["donator", "principal_assets", "share_balance", "receiver"]
    assert df.loc[df["donator"] == "frank", "principal_assets"].item() == 0


def test_inactive_entry_flags() -> None:
    assert not LedgerEntry("nobody").is_active
    assert LedgerEntry("x", 1, 1, "y").is_active


def test_event_log_dataframe_has_uniform_columns() -> None:
    log = EventLog()
    log.append(StartShare("carol", "alice", 1_000))
    log.extend([Claimed("carol", "alice", 25, 975), StopShare("alice", 1_010)])

    df = log.to_dataframe()

    assert list(df.columns) == ["event", "receiver", "donator", "amount", "share_balance"]
    assert df["event"].tolist() == ["StartShare", "Claimed", "StopShare"]
    assert df["amount"].tolist() == [1_000, 25, 1_010]
    assert df.index.name == "sequence"
    assert log.of_type(Claimed) == [Claimed("carol", "alice", 25, 975)]
    assert len(log) == 3


def test_empty_event_log_exports_headers_only() -> None:
    df = EventLog().to_dataframe()
    assert isinstance(df, pd.DataFrame)
    assert df.empty
    assert "receiver" in df.columns
