"""Membership rows joining a group entity to a member entity.

Three relationships share the same shape: tag-team partners, stable members
and manager clients. Each row records when the member joined and, once
closed, when the member left.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from ringside.domain.models.roster import EntityRef, RosterFamily


class MembershipKind(Enum):
    """Relationship recorded by a membership row.

    Kinds:
        TAG_TEAM_PARTNER: group is a tag team, member is a wrestler
        STABLE_MEMBER: group is a stable, member is a wrestler or tag team
        MANAGEMENT: group is a manager, member is a wrestler or tag team
    """

    TAG_TEAM_PARTNER = "tag_team_partner"
    STABLE_MEMBER = "stable_member"
    MANAGEMENT = "management"

    @property
    def group_family(self) -> RosterFamily:
        return MEMBERSHIP_GROUP_FAMILY[self]

    @property
    def member_families(self) -> frozenset[RosterFamily]:
        return MEMBERSHIP_MEMBER_FAMILIES[self]


MEMBERSHIP_GROUP_FAMILY: dict[MembershipKind, RosterFamily] = {
    MembershipKind.TAG_TEAM_PARTNER: RosterFamily.TAG_TEAM,
    MembershipKind.STABLE_MEMBER: RosterFamily.STABLE,
    MembershipKind.MANAGEMENT: RosterFamily.MANAGER,
}

MEMBERSHIP_MEMBER_FAMILIES: dict[MembershipKind, frozenset[RosterFamily]] = {
    MembershipKind.TAG_TEAM_PARTNER: frozenset({RosterFamily.WRESTLER}),
    MembershipKind.STABLE_MEMBER: frozenset(
        {RosterFamily.WRESTLER, RosterFamily.TAG_TEAM}
    ),
    MembershipKind.MANAGEMENT: frozenset(
        {RosterFamily.WRESTLER, RosterFamily.TAG_TEAM}
    ),
}


@dataclass(frozen=True, eq=True)
class Membership:
    """One membership of a member in a group.

    Attributes:
        kind: Relationship recorded by the row.
        group: Tag team, stable or manager.
        member: Wrestler or tag team.
        joined_at: Start of the membership (UTC).
        left_at: End of the membership, None while current.
        id: Unique identifier of the row.
    """

    kind: MembershipKind
    group: EntityRef
    member: EntityRef
    joined_at: datetime
    left_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Validate families and dates."""
        if self.group.family != self.kind.group_family:
            raise ValueError(
                f"{self.kind.value} group must be a {self.kind.group_family.label}"
            )
        if self.member.family not in self.kind.member_families:
            raise ValueError(
                f"{self.member.family.label} cannot be a {self.kind.value} member"
            )
        if self.left_at is not None and self.left_at <= self.joined_at:
            raise ValueError("Membership must end after it starts")

    @property
    def is_current(self) -> bool:
        return self.left_at is None

    def with_left_at(self, left_at: datetime) -> Membership:
        return replace(self, left_at=left_at)
