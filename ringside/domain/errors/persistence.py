"""Persistence errors raised by repository adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.roster import EntityRef


class RosterPersistenceError(RingsideError):
    """Raised when the storage layer fails.

    The operation's writes are rolled back before this propagates.

    Attributes:
        operation: Repository operation that failed.
    """

    def __init__(self, operation: str, message: str) -> None:
        self.operation = operation
        super().__init__(f"Roster persistence failed during {operation}: {message}")


class ConcurrentModificationError(RingsideError):
    """Raised when an optimistic version check fails.

    Another unit of work changed the entity between read and write. This is
    recoverable: the caller may re-read and retry.

    Attributes:
        ref: Entity that was being modified.
        expected_version: Version read by this unit of work.
        actual_version: Version found at write time, if known.
    """

    def __init__(
        self,
        ref: EntityRef,
        expected_version: int,
        actual_version: int | None = None,
    ) -> None:
        self.ref = ref
        self.expected_version = expected_version
        self.actual_version = actual_version
        found = f", found {actual_version}" if actual_version is not None else ""
        super().__init__(
            f"Concurrent modification detected for {ref}: "
            f"expected version {expected_version}{found}"
        )
