"""Exception hierarchy raised by the yield-sharing ledger and its collaborators.

Every ledger error aborts the operation that raised it; the ledger restores
its own state (and the state of snapshot-capable collaborators) before the
exception reaches the caller, so there is no partial success mode.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for failures of a ledger operation."""


class InvalidReceiver(LedgerError, ValueError):
    """Receiver is missing, the zero address, or the donator itself."""


class InvalidAmount(LedgerError, ValueError):
    """Deposit amount is zero, negative or not an integer."""


class AlreadyActive(LedgerError):
    """Donator already has a bound receiver and must stop first."""


class NoActivePosition(LedgerError):
    """Stop was requested for a donator without an active entry."""


class PrincipalLoss(LedgerError):
    """The pool returned less than the recorded principal on a full withdrawal."""


class NotAuthorizedReceiver(LedgerError):
    """Claim caller is not the receiver bound to the donator."""


class NoYieldAvailable(LedgerError):
    """Share value has not exceeded principal plus the dust threshold."""


class InsufficientYieldAfterRounding(LedgerError):
    """Yield exists but rounds to zero claimable shares."""


class ClaimExceedsYield(LedgerError):
    """Claiming would leave the retained shares worth less than the principal."""


class CollaboratorError(Exception):
    """Base class for failures raised by pool and asset implementations."""


class AssetError(CollaboratorError):
    """Transfer failed (insufficient balance or allowance)."""


class PoolError(CollaboratorError):
    """Pool deposit or withdrawal could not be honoured."""


__all__ = [
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
