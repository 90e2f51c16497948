"""
YieldShare: share-based yield accounting between donators and receivers.

Design goals:
- A donator keeps the full principal; a single bound receiver claims only the yield
- Integer share/asset conversions at the pool's live exchange rate
- All-or-nothing operations with effects applied before pool interactions
- Pluggable pool and asset collaborators (simulated in-process implementations included)
- pandas exports and matplotlib charts for ledgers and simulations
"""

from __future__ import annotations

from . import conversion, reporting, simulation
from .config import LedgerConfig, default_dust_threshold, ledger_config, load_config
from .conversion import Rounding, asset_value, shares_for_assets
from .core import (
    AlreadyActive,
    AssetError,
    Claimed,
    ClaimExceedsYield,
    CollaboratorError,
    EntryRepository,
    EventLog,
    InsufficientYieldAfterRounding,
    InvalidAmount,
    InvalidReceiver,
    LedgerEntry,
    LedgerError,
    NoActivePosition,
    NotAuthorizedReceiver,
    NoYieldAvailable,
    PoolError,
    PrincipalLoss,
    RateObservation,
    StartShare,
    StopShare,
    ZERO_ADDRESS,
)
from .ledger import ClaimQuote, YieldShareLedger
from .pools import Asset, InMemoryAsset, SimulatedPool, Snapshotable, YieldPool
from .simulation import SimulationResult, load_schedule, open_ledger, simulate
from .sources import ConstantGrowthSource, RateScheduleCSVSource, RateSource
from .visualization import Visualizer

__all__ = [
    # Ledger
    "YieldShareLedger",
    "ClaimQuote",
    "LedgerConfig",
    "load_config",
    "ledger_config",
    "default_dust_threshold",
    # Conversions
    "Rounding",
    "asset_value",
    "shares_for_assets",
    # Models
    "LedgerEntry",
    "StartShare",
    "StopShare",
    "Claimed",
    "RateObservation",
    "EntryRepository",
    "EventLog",
    "ZERO_ADDRESS",
    # Errors
    "LedgerError",
    "InvalidReceiver",
    "InvalidAmount",
    "AlreadyActive",
    "NoActivePosition",
    "PrincipalLoss",
    "NotAuthorizedReceiver",
    "NoYieldAvailable",
    "InsufficientYieldAfterRounding",
    "ClaimExceedsYield",
    "CollaboratorError",
    "AssetError",
    "PoolError",
    # Collaborators
    "YieldPool",
    "Asset",
    "Snapshotable",
    "InMemoryAsset",
    "SimulatedPool",
    # Sources & simulation
    "RateSource",
    "ConstantGrowthSource",
    "RateScheduleCSVSource",
    "SimulationResult",
    "load_schedule",
    "open_ledger",
    "simulate",
    # Outputs
    "Visualizer",
    "conversion",
    "reporting",
    "simulation",
]
