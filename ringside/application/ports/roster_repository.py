"""Roster repository port.

This module defines the persistence boundary consumed by the lifecycle
services: entities with their cached status, period ledgers, membership
rows and championship reigns.

Atomicity:
    Every write an operation performs happens inside ``atomic()``. Leaving
    the block normally commits, leaving it with an exception rolls back
    every write made inside it. Blocks nest: only the outermost block
    commits or rolls back.

Serialization:
    ``lock(ref)`` is the per-entity serialization point. Two units of work
    holding the lock for the same entity never interleave their
    read-validate-write sequences. ``save_entity`` also checks the entity
    version so a stale write is rejected instead of silently applied.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from datetime import datetime
from typing import Protocol

from ringside.domain.models.championship import TitleChampionship
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.period import Period, PeriodHistory, PeriodKind
from ringside.domain.models.roster import EntityRef, RosterFamily


class RosterRepositoryProtocol(Protocol):
    """Protocol for roster storage.

    Implementations:
        RosterRepositoryStub: in-memory, for tests and development
        SqlAlchemyRosterRepository: relational storage through SQLAlchemy

    Failures of the underlying storage surface as RosterPersistenceError.
    """

    # Units of work

    def atomic(self) -> AbstractContextManager[None]:
        """Open (or join) a unit of work."""
        ...

    def lock(self, ref: EntityRef) -> RosterEntity | None:
        """Lock an entity for the rest of the current unit of work.

        Returns:
            The entity (deleted or not), or None if it never existed.
        """
        ...

    # Entities

    def add_entity(self, entity: RosterEntity) -> RosterEntity:
        ...

    def get_entity(self, ref: EntityRef) -> RosterEntity | None:
        """Get an entity by reference, including soft-deleted ones."""
        ...

    def list_entities(self, family: RosterFamily) -> list[RosterEntity]:
        """List live (not deleted) entities of a family, ordered by name."""
        ...

    def save_entity(self, entity: RosterEntity) -> RosterEntity:
        """Persist status and deletion fields of an entity.

        The stored version must equal ``entity.version - 1``.

        Raises:
            ConcurrentModificationError: The stored version differs.
            EntityNotFoundError: The entity was never added.
        """
        ...

    # Period ledger

    def create_period(self, period: Period) -> Period:
        ...

    def end_open_period(
        self, owner: EntityRef, kind: PeriodKind, ended_at: datetime
    ) -> Period | None:
        """Close the open period of a kind.

        Returns:
            The closed period, or None when no period was open.
        """
        ...

    def move_open_period_start(
        self, owner: EntityRef, kind: PeriodKind, started_at: datetime
    ) -> Period | None:
        """Move the start of the open period of a kind."""
        ...

    def current_period(self, owner: EntityRef, kind: PeriodKind) -> Period | None:
        ...

    def previous_periods(self, owner: EntityRef, kind: PeriodKind) -> list[Period]:
        """Closed periods of a kind, ordered by start."""
        ...

    def period_history(self, owner: EntityRef) -> PeriodHistory:
        ...

    # Memberships

    def attach_membership(self, membership: Membership) -> Membership:
        ...

    def detach_open_membership(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        left_at: datetime,
    ) -> Membership | None:
        """Close the current membership joining member to group.

        Returns:
            The closed membership, or None when none was current.
        """
        ...

    def memberships(
        self,
        kind: MembershipKind,
        group: EntityRef | None = None,
        member: EntityRef | None = None,
        current_only: bool = False,
    ) -> list[Membership]:
        """Membership rows of a kind, filtered by either side, ordered by join."""
        ...

    # Championships

    def create_championship(self, championship: TitleChampionship) -> TitleChampionship:
        ...

    def end_open_championship(
        self, title: EntityRef, lost_at: datetime
    ) -> TitleChampionship | None:
        """Close the current reign of a title.

        Returns:
            The closed reign, or None when the title was vacant.
        """
        ...

    def current_championship(self, title: EntityRef) -> TitleChampionship | None:
        ...

    def championships(self, title: EntityRef) -> list[TitleChampionship]:
        """Every reign of a title, ordered by won_at."""
        ...

    def championships_held_by(
        self, champion: EntityRef, current_only: bool = True
    ) -> list[TitleChampionship]:
        ...

