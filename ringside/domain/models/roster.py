"""Roster families and polymorphic entity references.

Champions, stable members and managed clients can be more than one kind of
entity. Instead of a bare id column, every reference carries its family as a
discriminant and callers switch on it explicitly when resolving.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from uuid import UUID


class RosterFamily(Enum):
    """Kind of entity managed by the roster.

    Families:
        WRESTLER: Individual performer
        REFEREE: Individual official
        MANAGER: Individual who manages wrestlers and tag teams
        TAG_TEAM: Composite of wrestler partners
        TITLE: Championship belt
        STABLE: Faction of wrestlers and tag teams
    """

    WRESTLER = "wrestler"
    REFEREE = "referee"
    MANAGER = "manager"
    TAG_TEAM = "tag_team"
    TITLE = "title"
    STABLE = "stable"

    def is_employable(self) -> bool:
        """Check if this family moves through the employment lifecycle.

        Returns:
            True for wrestlers, referees, managers and tag teams.
        """
        return self in EMPLOYABLE_FAMILIES

    def is_activatable(self) -> bool:
        """Check if this family moves through the activation lifecycle.

        Returns:
            True for titles and stables.
        """
        return self in ACTIVATABLE_FAMILIES

    def is_individual(self) -> bool:
        """Check if this family is a single person."""
        return self in INDIVIDUAL_FAMILIES

    @property
    def label(self) -> str:
        """Human readable name, e.g. "tag team"."""
        return self.value.replace("_", " ")


INDIVIDUAL_FAMILIES: frozenset[RosterFamily] = frozenset(
    {RosterFamily.WRESTLER, RosterFamily.REFEREE, RosterFamily.MANAGER}
)

EMPLOYABLE_FAMILIES: frozenset[RosterFamily] = INDIVIDUAL_FAMILIES | {
    RosterFamily.TAG_TEAM
}

ACTIVATABLE_FAMILIES: frozenset[RosterFamily] = frozenset(
    {RosterFamily.TITLE, RosterFamily.STABLE}
)

# Families that can hold a title
CHAMPION_FAMILIES: frozenset[RosterFamily] = frozenset(
    {RosterFamily.WRESTLER, RosterFamily.TAG_TEAM}
)


@dataclass(frozen=True, order=True)
class EntityRef:
    """Reference to a roster entity, tagged with its family.

    Attributes:
        family: Discriminant naming which kind of entity is referenced.
        id: Identifier of the entity within the roster.
    """

    family: RosterFamily
    id: UUID

    @classmethod
    def wrestler(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.WRESTLER, entity_id)

    @classmethod
    def referee(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.REFEREE, entity_id)

    @classmethod
    def manager(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.MANAGER, entity_id)

    @classmethod
    def tag_team(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.TAG_TEAM, entity_id)

    @classmethod
    def title(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.TITLE, entity_id)

    @classmethod
    def stable(cls, entity_id: UUID) -> EntityRef:
        return cls(RosterFamily.STABLE, entity_id)

    def __str__(self) -> str:
        return f"{self.family.value}:{self.id}"
