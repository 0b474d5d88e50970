"""Period ledger rules.

Ledger invariants, per owner and per kind:
    - at most one open period
    - started_at < ended_at whenever both are set
    - periods never overlap, a new period may start at the previous end

A LedgerPlan stages every change one operation needs against an in-memory
copy of the history, checking each change as it is staged. Nothing is
written until the whole plan has been checked, so a rejected operation
never leaves a partial write behind.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from ringside.domain.errors.ledger import InvalidDateRangeError, LedgerInvariantError
from ringside.domain.models.period import Period, PeriodHistory, PeriodKind


class LedgerChangeType(Enum):
    """Kind of staged ledger write."""

    OPEN = "open"
    CLOSE = "close"
    MOVE_START = "move_start"


@dataclass(frozen=True)
class LedgerChange:
    """One staged ledger write and the period it produces."""

    change_type: LedgerChangeType
    period: Period


@dataclass
class LedgerPlan:
    """Staged ledger writes for a single operation.

    Attributes:
        history: History as it will look once every staged change is applied.
        changes: Staged writes in application order.
    """

    history: PeriodHistory
    changes: list[LedgerChange] = field(default_factory=list)

    def open(self, kind: PeriodKind, started_at: datetime) -> Period:
        """Stage a new open period.

        Raises:
            LedgerInvariantError: A period of this kind is already open.
            InvalidDateRangeError: The start precedes the end of an earlier period.
        """
        current = self.history.open_period(kind)
        if current is not None:
            raise LedgerInvariantError(
                self.history.owner,
                kind,
                f"period {current.id} is already open since "
                f"{current.started_at.isoformat()}",
            )
        previous = self.history.latest_closed(kind)
        if previous is not None and previous.ended_at is not None:
            if started_at < previous.ended_at:
                raise InvalidDateRangeError(
                    self.history.owner, kind, started_at, previous.ended_at
                )

        period = Period(owner=self.history.owner, kind=kind, started_at=started_at)
        self._stage(LedgerChangeType.OPEN, period)
        return period

    def close(self, kind: PeriodKind, ended_at: datetime) -> Period | None:
        """Stage the close of the open period of a kind.

        Closing a kind with no open period is a no-op and returns None.

        Raises:
            InvalidDateRangeError: The end does not come after the start.
        """
        current = self.history.open_period(kind)
        if current is None:
            return None
        if ended_at <= current.started_at:
            raise InvalidDateRangeError(
                self.history.owner, kind, ended_at, current.started_at
            )
        closed = current.with_end(ended_at)
        self._stage(LedgerChangeType.CLOSE, closed)
        return closed

    def require_close(self, kind: PeriodKind, ended_at: datetime) -> Period:
        """Stage the close of an open period that must exist.

        Raises:
            LedgerInvariantError: No period of this kind is open.
        """
        closed = self.close(kind, ended_at)
        if closed is None:
            raise LedgerInvariantError(
                self.history.owner, kind, "expected an open period to close"
            )
        return closed

    def move_start(self, kind: PeriodKind, started_at: datetime) -> Period:
        """Stage a new start date for the open period of a kind.

        Raises:
            LedgerInvariantError: No period of this kind is open.
            InvalidDateRangeError: The new start overlaps an earlier period.
        """
        current = self.history.open_period(kind)
        if current is None:
            raise LedgerInvariantError(
                self.history.owner, kind, "expected an open period to move"
            )
        earlier = [
            p
            for p in self.history.of_kind(kind)
            if p.id != current.id and p.ended_at is not None
        ]
        for period in earlier:
            if period.ended_at is not None and started_at < period.ended_at:
                raise InvalidDateRangeError(
                    self.history.owner, kind, started_at, period.ended_at
                )
        moved = current.with_start(started_at)
        self._stage(LedgerChangeType.MOVE_START, moved)
        return moved

    def _stage(self, change_type: LedgerChangeType, period: Period) -> None:
        self.changes.append(LedgerChange(change_type=change_type, period=period))
        self.history = self.history.with_period(period)


def verify_history(history: PeriodHistory) -> None:
    """Check a full history against every ledger invariant.

    Raises:
        LedgerInvariantError: More than one open period of a kind, or two
            periods of the same kind overlap.
    """
    for kind in PeriodKind:
        periods = history.of_kind(kind)
        open_count = sum(1 for p in periods if p.is_open)
        if open_count > 1:
            raise LedgerInvariantError(
                history.owner, kind, f"{open_count} open periods"
            )
        for earlier, later in zip(periods, periods[1:]):
            if earlier.ended_at is None or earlier.ended_at > later.started_at:
                raise LedgerInvariantError(
                    history.owner,
                    kind,
                    f"period {earlier.id} overlaps period {later.id}",
                )
