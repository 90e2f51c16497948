"""Share-based yield accounting ledger.

A donator deposits the underlying asset through :meth:`YieldShareLedger.start`
and binds a single receiver.  The ledger records the principal in asset units
and the pool shares that back it.  As the pool's exchange rate rises, the
shares become worth more than the principal; the receiver may withdraw the
shares in excess of ``principal + dust_threshold`` via :meth:`claim`.  The
donator unwinds everything with :meth:`stop`.

Two rules keep the bookkeeping safe:

- internal balances are updated before the pool is asked to withdraw, so a
  callback into the ledger during the withdrawal sees the reduced entry;
- every state-changing operation runs inside :meth:`transaction`, which
  restores the ledger (and snapshot-capable collaborators) if anything fails.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from .config import LedgerConfig
from .conversion import Rounding, asset_value, shares_for_assets
from .core import (
    MAX_ALLOWANCE,
    ZERO_ADDRESS,
    AlreadyActive,
    Claimed,
    ClaimExceedsYield,
    EntryRepository,
    EventLog,
    InsufficientYieldAfterRounding,
    InvalidAmount,
    InvalidReceiver,
    LedgerEntry,
    LedgerEvent,
    NoActivePosition,
    NotAuthorizedReceiver,
    NoYieldAvailable,
    PrincipalLoss,
    StartShare,
    StopShare,
)
from .pools import Asset, Snapshotable, YieldPool

logger = logging.getLogger(__name__)

EventListener = Callable[[LedgerEvent], None]


@dataclass(frozen=True)
class ClaimQuote:
    """Figures behind a claim, all taken at a single exchange rate."""

    principal_assets: int
    share_balance: int
    exchange_rate: int
    current_value: int
    remaining_shares: int
    shares_to_claim: int
    claim_value: int


class YieldShareLedger:
    """Tracks donator positions in a yield pool and the receivers of their yield."""

    def __init__(
        self,
        pool: YieldPool,
        asset: Asset,
        *,
        address: str = "yield-share-ledger",
        config: LedgerConfig | None = None,
    ) -> None:
        self.pool = pool
        self.asset = asset
        self.address = address
        self.config = config or LedgerConfig()
        self._dust_threshold = self.config.dust_threshold
        self._rounding = self.config.rounding

        self._principal: dict[str, int] = {}
        self._shares: dict[str, int] = {}
        self._receiver_of: dict[str, str] = {}
        self._donators_of: dict[str, set[str]] = {}

        self.events = EventLog()
        self._listeners: list[EventListener] = []
        self._pending: list[LedgerEvent] | None = None

        asset.approve(self.address, pool.address, MAX_ALLOWANCE)

    # -----------------
    # Configuration
    # -----------------

    @property
    def dust_threshold(self) -> int:
        return self._dust_threshold

    @property
    def rounding(self) -> Rounding:
        return self._rounding

    def set_dust_threshold(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"dust_threshold must be non-negative, got {value}")
        logger.info("dust threshold changed %s -> %s", self._dust_threshold, value)
        self._dust_threshold = value

    def subscribe(self, listener: EventListener) -> None:
        """Register a callback invoked for every committed event."""

        self._listeners.append(listener)

    # -----------------
    # Operations
    # -----------------

    def start(self, donator: str, receiver: str | None, amount: int) -> int:
        """Deposit ``amount`` for ``donator`` and bind ``receiver`` to its yield.

        Returns the number of pool shares minted for the deposit.
        """

        if receiver is None or receiver == ZERO_ADDRESS or receiver == donator:
            raise InvalidReceiver(f"invalid receiver {receiver!r} for donator {donator!r}")
        if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
            raise InvalidAmount(f"amount must be a positive integer, got {amount!r}")
        if donator in self._receiver_of:
            raise AlreadyActive(
                f"{donator} already shares yield with {self._receiver_of[donator]}; stop first"
            )

        with self.transaction("start"):
            # Bound before the external calls so a reentrant start is refused.
            self._bind(donator, receiver)
            self.asset.transfer_from(self.address, donator, self.address, amount)
            shares = self.pool.deposit(self.address, amount)
            if shares <= 0:
                raise InvalidAmount(f"deposit of {amount} minted no shares")
            self._principal[donator] = amount
            self._shares[donator] = shares
            self._emit(StartShare(receiver=receiver, donator=donator, amount=amount))

        logger.info("start: %s -> %s, %s assets as %s shares", donator, receiver, amount, shares)
        return shares

    def stop(self, donator: str) -> int:
        """Withdraw the donator's whole position back to the donator."""

        principal = self._principal.get(donator, 0)
        shares = self._shares.get(donator, 0)
        if principal == 0 or shares == 0:
            raise NoActivePosition(f"{donator} has no active position")

        with self.transaction("stop"):
            # Cleared before the pool call so a reentrant stop finds nothing.
            self._principal.pop(donator, None)
            self._shares.pop(donator, None)
            self._unbind(donator)
            returned = self.pool.withdraw(self.address, shares, donator)
            if returned < principal:
                raise PrincipalLoss(
                    f"pool returned {returned} for {shares} shares, principal is {principal}"
                )
            self._emit(StopShare(donator=donator, amount_returned=returned))

        logger.info("stop: %s withdrew %s assets (principal %s)", donator, returned, principal)
        return returned

    def claim(self, caller: str, donator: str) -> int:
        """Withdraw the yield accrued on ``donator``'s position to ``caller``.

        ``caller`` must be the receiver currently bound to ``donator``.
        Returns the asset amount sent to the receiver.
        """

        receiver = self._receiver_of.get(donator)
        if receiver is None or caller != receiver:
            raise NotAuthorizedReceiver(f"{caller} is not the receiver for {donator}")

        quote = self._quote(donator)
        precision = self.pool.asset_decimals()

        with self.transaction("claim"):
            self._shares[donator] = quote.remaining_shares
            claimed = self.pool.withdraw(self.address, quote.shares_to_claim, receiver)
            retained = asset_value(quote.remaining_shares, self.pool.exchange_rate(), precision)
            if retained < quote.principal_assets:
                raise ClaimExceedsYield(
                    f"retained shares worth {retained} after claim, principal is "
                    f"{quote.principal_assets}"
                )
            self._emit(
                Claimed(
                    receiver=receiver,
                    donator=donator,
                    claimed_amount=claimed,
                    new_share_balance=quote.remaining_shares,
                )
            )

        logger.info(
            "claim: %s took %s assets from %s (%s shares left)",
            receiver,
            claimed,
            donator,
            quote.remaining_shares,
        )
        return claimed

    def claimable(self, donator: str, receiver: str) -> int:
        """Preview the amount :meth:`claim` would pay ``receiver`` right now."""

        if self._receiver_of.get(donator) != receiver:
            return 0
        try:
            return self._quote(donator).claim_value
        except (NoYieldAvailable, InsufficientYieldAfterRounding, ClaimExceedsYield):
            return 0

    # -----------------
    # Queries
    # -----------------

    def entry(self, donator: str) -> LedgerEntry:
        return LedgerEntry(
            donator=donator,
            principal_assets=self._principal.get(donator, 0),
            share_balance=self._shares.get(donator, 0),
            receiver=self._receiver_of.get(donator),
        )

    def receiver_of(self, donator: str) -> str | None:
        return self._receiver_of.get(donator)

    def donators_of(self, receiver: str) -> frozenset[str]:
        return frozenset(self._donators_of.get(receiver, ()))

    def is_bound(self, receiver: str, donator: str) -> bool:
        return donator in self._donators_of.get(receiver, ())

    def active_entries(self) -> EntryRepository:
        return EntryRepository(self.entry(donator) for donator in sorted(self._receiver_of))

    def invariant_violations(self) -> list[str]:
        """Describe every broken bookkeeping invariant; empty when consistent."""

        problems: list[str] = []
        donators = set(self._principal) | set(self._shares) | set(self._receiver_of)
        for donator in sorted(donators):
            principal = self._principal.get(donator, 0)
            shares = self._shares.get(donator, 0)
            bound = donator in self._receiver_of
            if not ((principal > 0) == (shares > 0) == bound):
                problems.append(
                    f"{donator}: principal={principal} shares={shares} bound={bound}"
                )
        for receiver, members in self._donators_of.items():
            for donator in members:
                if self._receiver_of.get(donator) != receiver:
                    problems.append(f"reverse index lists {donator} under stale {receiver}")
        for donator, receiver in self._receiver_of.items():
            if donator not in self._donators_of.get(receiver, ()):
                problems.append(f"reverse index misses {donator} under {receiver}")
        return problems

    # -----------------
    # Transactions
    # -----------------

    @contextmanager
    def transaction(self, label: str = "operation") -> Iterator[None]:
        """Run a block atomically.

        Ledger state and the state of every collaborator implementing
        :class:`~yield_share.pools.Snapshotable` are captured on entry and
        restored if the block raises.  Events emitted inside the block are
        published once the outermost transaction commits.  Nested
        transactions behave as savepoints.
        """

        if self._pending is None:
            outermost, pending = True, []
            self._pending = pending
        else:
            outermost, pending = False, self._pending
        mark = len(pending)
        saved = self._snapshot()
        external = [(c, c.snapshot()) for c in self._collaborators()]
        try:
            yield
        except BaseException as exc:
            for collaborator, state in reversed(external):
                collaborator.restore(state)
            self._restore(saved)
            del pending[mark:]
            if outermost:
                self._pending = None
            logger.warning("%s rolled back: %s", label, exc)
            raise
        if outermost:
            self._pending = None
            self._publish(pending)

    def _collaborators(self) -> list[Snapshotable]:
        seen: set[int] = set()
        out: list[Snapshotable] = []
        for candidate in (self.pool, self.asset):
            if isinstance(candidate, Snapshotable) and id(candidate) not in seen:
                seen.add(id(candidate))
                out.append(candidate)
        return out

    def _snapshot(self) -> tuple[dict[str, int], dict[str, int], dict[str, str], dict[str, set[str]]]:
        return (
            dict(self._principal),
            dict(self._shares),
            dict(self._receiver_of),
            {receiver: set(members) for receiver, members in self._donators_of.items()},
        )

    def _restore(
        self, saved: tuple[dict[str, int], dict[str, int], dict[str, str], dict[str, set[str]]]
    ) -> None:
        self._principal, self._shares, self._receiver_of, self._donators_of = saved

    def _emit(self, event: LedgerEvent) -> None:
        if self._pending is None:
            self._publish([event])
        else:
            self._pending.append(event)

    def _publish(self, events: list[LedgerEvent]) -> None:
        for event in events:
            self.events.append(event)
            for listener in self._listeners:
                try:
                    listener(event)
                except Exception:
                    logger.exception("event listener %r failed on %s", listener, event)

    # -----------------
    # Internals
    # -----------------

    def _bind(self, donator: str, receiver: str) -> None:
        self._receiver_of[donator] = receiver
        self._donators_of.setdefault(receiver, set()).add(donator)

    def _unbind(self, donator: str) -> None:
        receiver = self._receiver_of.pop(donator, None)
        if receiver is None:
            return
        members = self._donators_of.get(receiver)
        if members is not None:
            members.discard(donator)
            if not members:
                del self._donators_of[receiver]

    def _quote(self, donator: str) -> ClaimQuote:
        principal = self._principal.get(donator, 0)
        shares = self._shares.get(donator, 0)
        if principal == 0 or shares == 0:
            raise NoYieldAvailable(f"{donator} has no active position")

        rate = self.pool.exchange_rate()
        precision = self.pool.asset_decimals()
        current_value = asset_value(shares, rate, precision)
        floor_value = principal + self._dust_threshold
        if current_value <= floor_value:
            raise NoYieldAvailable(
                f"{donator}: shares worth {current_value}, principal plus dust is {floor_value}"
            )

        remaining = shares_for_assets(floor_value, rate, precision, self._rounding)
        if shares <= remaining:
            raise InsufficientYieldAfterRounding(
                f"{donator}: {shares} shares held, {remaining} must be retained"
            )
        if asset_value(remaining, rate, precision) < principal:
            raise ClaimExceedsYield(
                f"{donator}: retaining {remaining} shares would leave less than {principal}"
            )

        to_claim = shares - remaining
        claim_value = asset_value(to_claim, rate, precision)
        if claim_value == 0:
            raise InsufficientYieldAfterRounding(
                f"{donator}: {to_claim} claimable shares are worth nothing at rate {rate}"
            )
        logger.debug(
            "quote %s: rate=%s value=%s retain=%s claim=%s", donator, rate, current_value, remaining, to_claim
        )
        return ClaimQuote(
            principal_assets=principal,
            share_balance=shares,
            exchange_rate=rate,
            current_value=current_value,
            remaining_shares=remaining,
            shares_to_claim=to_claim,
            claim_value=claim_value,
        )


__all__ = ["ClaimQuote", "EventListener", "YieldShareLedger"]
