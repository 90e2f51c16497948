"""In-memory repositories for YieldShare data models."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import pandas as pd

from .models import LedgerEntry, LedgerEvent

_EVENT_COLUMNS = ["event", "receiver", "donator", "amount", "share_balance"]


class EntryRepository:
    """Lightweight collection of :class:`LedgerEntry` snapshots with pandas export."""

    def __init__(self, entries: Iterable[LedgerEntry] | None = None) -> None:
        self._entries: list[LedgerEntry] = list(entries) if entries else []

    def add(self, entry: LedgerEntry) -> None:
        self._entries.append(entry)

    def filter(
        self,
        *,
        receiver: str | None = None,
        min_principal: int = 0,
        active_only: bool = False,
    ) -> "EntryRepository":
        res: list[LedgerEntry] = []
        for entry in self._entries:
            if active_only and not entry.is_active:
                continue
            if receiver is not None and entry.receiver != receiver:
                continue
            if entry.principal_assets < min_principal:
                continue
            res.append(entry)
        return EntryRepository(res)

    def total_principal(self) -> int:
        return sum(entry.principal_assets for entry in self._entries)

    def to_dataframe(self) -> pd.DataFrame:
        return pd.DataFrame([entry.to_dict() for entry in self._entries])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LedgerEntry]:
        return iter(self._entries)


class EventLog:
    """Append-only record of published ledger events."""

    def __init__(self, events: Iterable[LedgerEvent] | None = None) -> None:
        self._events: list[LedgerEvent] = list(events) if events else []

    def append(self, event: LedgerEvent) -> None:
        self._events.append(event)

    def extend(self, events: Iterable[LedgerEvent]) -> None:
        self._events.extend(events)

    def of_type(self, cls: type) -> list[LedgerEvent]:
        return [event for event in self._events if isinstance(event, cls)]

    def to_dataframe(self) -> pd.DataFrame:
        if not self._events:
            return pd.DataFrame(columns=_EVENT_COLUMNS)
        df = pd.DataFrame([event.to_dict() for event in self._events], columns=_EVENT_COLUMNS)
        df.index.name = "sequence"
        return df

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[LedgerEvent]:
        return iter(self._events)


__all__ = ["EntryRepository", "EventLog"]
