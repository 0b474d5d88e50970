"""Period records: the ledger rows every status is derived from.

A period is one time-bounded instance of a state: an employment, a
suspension, an injury, a retirement or an activation. An unset end means the
period is open and describes the current state.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from ringside.domain.models.roster import EntityRef


class PeriodKind(Enum):
    """Kind of ledger period. Each kind is a separate ledger per owner."""

    EMPLOYMENT = "employment"
    SUSPENSION = "suspension"
    INJURY = "injury"
    RETIREMENT = "retirement"
    ACTIVATION = "activation"


@dataclass(frozen=True, eq=True)
class Period:
    """A single time-bounded period owned by one roster entity.

    Attributes:
        owner: The entity the period belongs to.
        kind: Which ledger the period lives in.
        started_at: Start of the period (UTC).
        ended_at: End of the period, None while the period is open.
        id: Unique identifier of the row.
    """

    owner: EntityRef
    kind: PeriodKind
    started_at: datetime
    ended_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Validate that the period does not end before it starts."""
        if self.ended_at is not None and self.ended_at <= self.started_at:
            raise ValueError(
                f"{self.kind.value} period must end after it starts "
                f"({self.started_at.isoformat()} -> {self.ended_at.isoformat()})"
            )

    @property
    def is_open(self) -> bool:
        """True while the period has no end."""
        return self.ended_at is None

    def with_end(self, ended_at: datetime) -> Period:
        """Return a closed copy of this period."""
        return replace(self, ended_at=ended_at)

    def with_start(self, started_at: datetime) -> Period:
        """Return a copy of this period with a moved start."""
        return replace(self, started_at=started_at)


@dataclass(frozen=True)
class PeriodHistory:
    """Every period recorded for one owner, across all kinds.

    The history is an immutable snapshot read from the repository; the
    status projector and the ledger rules work exclusively from it.
    """

    owner: EntityRef
    periods: tuple[Period, ...] = ()

    def of_kind(self, kind: PeriodKind) -> tuple[Period, ...]:
        """Periods of one kind ordered by start."""
        return tuple(
            sorted(
                (p for p in self.periods if p.kind == kind),
                key=lambda p: p.started_at,
            )
        )

    def open_periods(self, kind: PeriodKind) -> tuple[Period, ...]:
        """All open periods of one kind. More than one is a ledger defect."""
        return tuple(p for p in self.of_kind(kind) if p.is_open)

    def open_period(self, kind: PeriodKind) -> Period | None:
        """The open period of a kind, if any."""
        open_periods = self.open_periods(kind)
        return open_periods[-1] if open_periods else None

    def latest(self, kind: PeriodKind) -> Period | None:
        """The most recently started period of a kind, if any."""
        periods = self.of_kind(kind)
        return periods[-1] if periods else None

    def latest_closed(self, kind: PeriodKind) -> Period | None:
        """The closed period of a kind with the latest end, if any."""
        closed = [p for p in self.of_kind(kind) if p.ended_at is not None]
        if not closed:
            return None
        return max(closed, key=lambda p: p.ended_at)  # type: ignore[arg-type, return-value]

    def is_open(self, kind: PeriodKind) -> bool:
        return self.open_period(kind) is not None

    def with_period(self, period: Period) -> PeriodHistory:
        """Return a history with a period added or replaced by id."""
        others = tuple(p for p in self.periods if p.id != period.id)
        return PeriodHistory(owner=self.owner, periods=others + (period,))
