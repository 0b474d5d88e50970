"""Period ledger errors.

InvalidDateRangeError is a caller mistake (a date that would make a period
end before it starts or overlap an earlier one). LedgerInvariantError is an
unexpected-state failure: it should be impossible when validators are
correct, and it halts the operation instead of repairing data.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.period import PeriodKind
    from ringside.domain.models.roster import EntityRef


class InvalidDateRangeError(RingsideError):
    """Raised when an effective date would break period ordering.

    Attributes:
        owner: Entity whose ledger would be affected.
        kind: Ledger, membership or championship kind.
        effective_at: The rejected date.
        boundary: The date it conflicts with.
    """

    def __init__(
        self,
        owner: EntityRef,
        kind: Enum,
        effective_at: datetime,
        boundary: datetime,
        message: str | None = None,
    ) -> None:
        self.owner = owner
        self.kind = kind
        self.effective_at = effective_at
        self.boundary = boundary
        super().__init__(
            message
            or (
                f"Invalid {kind.value} date for {owner}: "
                f"{effective_at.isoformat()} conflicts with {boundary.isoformat()}"
            )
        )


class LedgerInvariantError(RingsideError):
    """Raised when a ledger write would break a period invariant.

    Attributes:
        owner: Entity whose ledger is affected.
        kind: Ledger kind.
        detail: Description of the broken invariant.
    """

    def __init__(self, owner: EntityRef, kind: PeriodKind, detail: str) -> None:
        self.owner = owner
        self.kind = kind
        self.detail = detail
        super().__init__(f"Ledger invariant violated for {owner} ({kind.value}): {detail}")
