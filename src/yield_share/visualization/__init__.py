"""Chart helpers for :mod:`yield_share`."""

from __future__ import annotations

from .visualizer import Visualizer

__all__ = ["Visualizer"]
