"""Deletion and restore errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.roster import EntityRef


class CannotBeDeletedError(RingsideError):
    """Raised when an entity cannot be soft-deleted.

    Attributes:
        ref: Entity that was targeted.
        reason: Why the deletion was rejected.
    """

    def __init__(self, ref: EntityRef, reason: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot delete {ref}: {reason}")


class CannotBeRestoredError(RingsideError):
    """Raised when an entity cannot be restored from deletion.

    Attributes:
        ref: Entity that was targeted.
        reason: Why the restore was rejected.
    """

    def __init__(self, ref: EntityRef, reason: str) -> None:
        self.ref = ref
        self.reason = reason
        super().__init__(f"Cannot restore {ref}: {reason}")
