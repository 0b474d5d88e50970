"""Roster entity with its cached lifecycle status."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import UUID, uuid4

from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status


@dataclass(frozen=True, eq=True)
class RosterEntity:
    """A wrestler, referee, manager, tag team, title or stable.

    The status field is a cache of the projection of the entity's periods.
    It is only ever written by a transition, immediately after the ledger
    change that justifies it.

    Attributes:
        ref: Family-tagged identity.
        name: Display name.
        status: Cached projected status.
        created_at: Registration timestamp (UTC).
        deleted_at: Soft-deletion timestamp, None while the entity is live.
        version: Optimistic concurrency counter, bumped on every status write.
    """

    ref: EntityRef
    name: str
    status: Status
    created_at: datetime
    deleted_at: datetime | None = None
    version: int = 0

    def __post_init__(self) -> None:
        """Validate that the status enum matches the entity family."""
        if not self.name.strip():
            raise ValueError("Roster entity name must not be blank")
        expected = initial_status(self.ref.family).__class__
        if not isinstance(self.status, expected):
            raise ValueError(
                f"{self.ref.family.label} status must be a {expected.__name__}, "
                f"got {self.status!r}"
            )

    @classmethod
    def register(
        cls,
        family: RosterFamily,
        name: str,
        created_at: datetime,
        entity_id: UUID | None = None,
    ) -> RosterEntity:
        """Create a new entity in its family's initial status.

        Args:
            family: Kind of entity to create.
            name: Display name.
            created_at: Registration timestamp from the time authority.
            entity_id: Optional explicit identifier (generated when omitted).

        Returns:
            New RosterEntity with no periods behind it.
        """
        return cls(
            ref=EntityRef(family, entity_id or uuid4()),
            name=name,
            status=initial_status(family),
            created_at=created_at,
        )

    @property
    def id(self) -> UUID:
        return self.ref.id

    @property
    def family(self) -> RosterFamily:
        return self.ref.family

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def with_status(self, status: Status) -> RosterEntity:
        return replace(self, status=status, version=self.version + 1)

    def with_deleted_at(self, deleted_at: datetime | None) -> RosterEntity:
        return replace(self, deleted_at=deleted_at, version=self.version + 1)


def initial_status(family: RosterFamily) -> Status:
    """Status of a freshly registered entity of the given family."""
    if family.is_activatable():
        return ActivationStatus.UNACTIVATED
    return EmploymentStatus.UNEMPLOYED
