"""Not-found errors for roster lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.membership import MembershipKind
    from ringside.domain.models.roster import EntityRef


class EntityNotFoundError(RingsideError):
    """Raised when a referenced entity does not exist or is deleted.

    Attributes:
        ref: The missing entity reference.
    """

    def __init__(self, ref: EntityRef) -> None:
        self.ref = ref
        super().__init__(f"{ref.family.label.capitalize()} {ref.id} not found")


class MembershipNotFoundError(RingsideError):
    """Raised when no current membership joins the member to the group.

    Attributes:
        kind: Relationship that was looked up.
        group: Group side of the relationship.
        member: Member side of the relationship.
    """

    def __init__(self, kind: MembershipKind, group: EntityRef, member: EntityRef) -> None:
        self.kind = kind
        self.group = group
        self.member = member
        super().__init__(f"No current {kind.value} membership of {member} in {group}")


class ChampionshipNotFoundError(RingsideError):
    """Raised when a title has no current championship or a reign id is unknown.

    Attributes:
        title_id: Title that was looked up.
    """

    def __init__(self, title_id: UUID, message: str | None = None) -> None:
        self.title_id = title_id
        super().__init__(message or f"Title {title_id} has no current champion")
