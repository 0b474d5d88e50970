"""Membership errors for tag teams, stables and managers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.membership import MembershipKind
    from ringside.domain.models.roster import EntityRef


class MembershipConflictError(RingsideError):
    """Raised when a membership cannot be opened.

    Covers duplicate membership, a wrestler already on another team, a
    member already in another stable, a full tag team, and members whose
    status bars them from joining.

    Attributes:
        kind: Relationship being opened.
        group: Group the member tried to join.
        member: Member that tried to join.
        reason: Description of the conflict.
    """

    def __init__(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        reason: str,
    ) -> None:
        self.kind = kind
        self.group = group
        self.member = member
        self.reason = reason
        super().__init__(f"{member} cannot join {group} ({kind.value}): {reason}")


class NotEnoughMembersError(RingsideError):
    """Raised when a group has too few current members for an operation.

    Attributes:
        group: The tag team or stable.
        required: Minimum number of members.
        actual: Current number of members.
    """

    def __init__(self, group: EntityRef, required: int, actual: int) -> None:
        self.group = group
        self.required = required
        self.actual = actual
        super().__init__(
            f"{group.family.label.capitalize()} {group.id} needs {required} "
            f"current members, has {actual}"
        )
