"""Core data structures for :mod:`yield_share`.

This subpackage groups the fundamental models, errors and repositories used
across the project so they can be shared without importing the ledger or the
simulated collaborators exposed in :mod:`yield_share.__init__`.
"""

from __future__ import annotations

from .constants import DEFAULT_DECIMALS, DUST_DIVISOR, MAX_ALLOWANCE, ZERO_ADDRESS
from .errors import (
    AlreadyActive,
    AssetError,
    ClaimExceedsYield,
    CollaboratorError,
    InsufficientYieldAfterRounding,
    InvalidAmount,
    InvalidReceiver,
    LedgerError,
    NoActivePosition,
    NotAuthorizedReceiver,
    NoYieldAvailable,
    PoolError,
    PrincipalLoss,
)
from .models import Claimed, LedgerEntry, LedgerEvent, RateObservation, StartShare, StopShare
from .repositories import EntryRepository, EventLog

__all__ = [
    "LedgerEntry",
    "StartShare",
    "StopShare",
    "Claimed",
    "LedgerEvent",
    "RateObservation",
    "EntryRepository",
    "EventLog",
    "ZERO_ADDRESS",
    "MAX_ALLOWANCE",
    "DUST_DIVISOR",
    "DEFAULT_DECIMALS",
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
]
