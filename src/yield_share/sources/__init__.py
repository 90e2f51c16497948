"""Exchange rate schedule adapters used by :mod:`yield_share`."""

from __future__ import annotations

from typing import Protocol

from ..core import RateObservation
from .base import ConstantGrowthSource
from .csv import RateScheduleCSVSource


class RateSource(Protocol):
    """Adapter protocol returning time-ordered :class:`RateObservation` rows."""

    def fetch(self) -> list[RateObservation]: ...


__all__ = ["RateSource", "ConstantGrowthSource", "RateScheduleCSVSource"]
