"""Core constants shared across YieldShare modules."""

from __future__ import annotations

# Placeholder identity that can never own a position or receive yield.
ZERO_ADDRESS = "0x" + "0" * 40

# Allowance granted once by the ledger to the pool at construction.
MAX_ALLOWANCE = 2**256 - 1

# The default dust threshold is one ten-thousandth of a whole asset unit,
# i.e. ``10**decimals // DUST_DIVISOR`` base units.
DUST_DIVISOR = 10_000

# Decimals used by the simulated collaborators when nothing else is configured.
DEFAULT_DECIMALS = 6

__all__ = ["ZERO_ADDRESS", "MAX_ALLOWANCE", "DUST_DIVISOR", "DEFAULT_DECIMALS"]
