"""Roster repository stub implementation.

This module provides an in-memory implementation of
RosterRepositoryProtocol for tests and development.

Units of work:
    A single re-entrant lock is held for the whole outermost ``atomic()``
    block, so units of work never interleave. The block snapshots every
    table on entry and restores the snapshot if the block raises. All
    stored rows are frozen dataclasses, so a shallow copy of each table is
    a complete snapshot.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from uuid import UUID

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.domain.errors.championship import ChampionshipConflictError
from ringside.domain.errors.ledger import LedgerInvariantError
from ringside.domain.errors.membership import MembershipConflictError
from ringside.domain.errors.not_found import EntityNotFoundError
from ringside.domain.errors.persistence import (
    ConcurrentModificationError,
    RosterPersistenceError,
)
from ringside.domain.models.championship import TitleChampionship
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.period import Period, PeriodHistory, PeriodKind
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.primitives.ensure_atomicity import AtomicOperationContext

_Snapshot = tuple[
    dict[EntityRef, RosterEntity],
    dict[UUID, Period],
    dict[UUID, Membership],
    dict[UUID, TitleChampionship],
]


class RosterRepositoryStub(RosterRepositoryProtocol):
    """In-memory stub for roster storage (testing only).

    Mirrors the storage-level guarantees of the relational adapter: one
    open period per owner and kind, one current reign per title, one
    current row per (kind, group, member) and a version check on entity
    writes.
    """

    def __init__(self) -> None:
        """Initialize the stub with empty storage."""
        self._entities: dict[EntityRef, RosterEntity] = {}
        self._periods: dict[UUID, Period] = {}
        self._memberships: dict[UUID, Membership] = {}
        self._championships: dict[UUID, TitleChampionship] = {}
        self._lock = threading.RLock()
        self._depth = 0

    def clear(self) -> None:
        """Clear all stored rows (for test cleanup)."""
        with self._lock:
            self._entities.clear()
            self._periods.clear()
            self._memberships.clear()
            self._championships.clear()

    # Units of work

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            if self._depth > 0:
                self._depth += 1
                try:
                    yield
                finally:
                    self._depth -= 1
                return

            self._depth = 1
            try:
                with AtomicOperationContext() as ctx:
                    snapshot = self._snapshot()
                    ctx.add_rollback(lambda: self._restore(snapshot))
                    yield
            finally:
                self._depth = 0

    def lock(self, ref: EntityRef) -> RosterEntity | None:
        # The unit-of-work lock already serializes every writer
        with self._lock:
            return self._entities.get(ref)

    # Entities

    def add_entity(self, entity: RosterEntity) -> RosterEntity:
        with self._lock:
            if entity.ref in self._entities:
                raise RosterPersistenceError(
                    "add_entity", f"{entity.ref} already exists"
                )
            self._entities[entity.ref] = entity
            return entity

    def get_entity(self, ref: EntityRef) -> RosterEntity | None:
        with self._lock:
            return self._entities.get(ref)

    def list_entities(self, family: RosterFamily) -> list[RosterEntity]:
        with self._lock:
            live = [
                e
                for e in self._entities.values()
                if e.family == family and not e.is_deleted
            ]
        return sorted(live, key=lambda e: (e.name, str(e.id)))

    def save_entity(self, entity: RosterEntity) -> RosterEntity:
        with self._lock:
            stored = self._entities.get(entity.ref)
            if stored is None:
                raise EntityNotFoundError(entity.ref)
            if stored.version != entity.version - 1:
                raise ConcurrentModificationError(
                    entity.ref, entity.version - 1, stored.version
                )
            self._entities[entity.ref] = entity
            return entity

    # Period ledger

    def create_period(self, period: Period) -> Period:
        with self._lock:
            current = self._open_period(period.owner, period.kind)
            if current is not None:
                raise LedgerInvariantError(
                    period.owner, period.kind, "a period is already open"
                )
            self._periods[period.id] = period
            return period

    def end_open_period(
        self, owner: EntityRef, kind: PeriodKind, ended_at: datetime
    ) -> Period | None:
        with self._lock:
            current = self._open_period(owner, kind)
            if current is None:
                return None
            closed = current.with_end(ended_at)
            self._periods[closed.id] = closed
            return closed

    def move_open_period_start(
        self, owner: EntityRef, kind: PeriodKind, started_at: datetime
    ) -> Period | None:
        with self._lock:
            current = self._open_period(owner, kind)
            if current is None:
                return None
            moved = current.with_start(started_at)
            self._periods[moved.id] = moved
            return moved

    def current_period(self, owner: EntityRef, kind: PeriodKind) -> Period | None:
        with self._lock:
            return self._open_period(owner, kind)

    def previous_periods(self, owner: EntityRef, kind: PeriodKind) -> list[Period]:
        return [p for p in self.period_history(owner).of_kind(kind) if not p.is_open]

    def period_history(self, owner: EntityRef) -> PeriodHistory:
        with self._lock:
            periods = tuple(p for p in self._periods.values() if p.owner == owner)
        return PeriodHistory(owner=owner, periods=periods)

    # Memberships

    def attach_membership(self, membership: Membership) -> Membership:
        with self._lock:
            if self.memberships(
                membership.kind,
                group=membership.group,
                member=membership.member,
                current_only=True,
            ):
                raise MembershipConflictError(
                    membership.kind,
                    membership.group,
                    membership.member,
                    "already a current member",
                )
            self._memberships[membership.id] = membership
            return membership

    def detach_open_membership(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        left_at: datetime,
    ) -> Membership | None:
        with self._lock:
            current = self.memberships(kind, group=group, member=member, current_only=True)
            if not current:
                return None
            closed = current[0].with_left_at(left_at)
            self._memberships[closed.id] = closed
            return closed

    def memberships(
        self,
        kind: MembershipKind,
        group: EntityRef | None = None,
        member: EntityRef | None = None,
        current_only: bool = False,
    ) -> list[Membership]:
        with self._lock:
            rows = [
                m
                for m in self._memberships.values()
                if m.kind == kind
                and (group is None or m.group == group)
                and (member is None or m.member == member)
                and (not current_only or m.is_current)
            ]
        return sorted(rows, key=lambda m: m.joined_at)

    # Championships

    def create_championship(self, championship: TitleChampionship) -> TitleChampionship:
        with self._lock:
            if self.current_championship(championship.title) is not None:
                raise ChampionshipConflictError(championship.title.id)
            self._championships[championship.id] = championship
            return championship

    def end_open_championship(
        self, title: EntityRef, lost_at: datetime
    ) -> TitleChampionship | None:
        with self._lock:
            current = self.current_championship(title)
            if current is None:
                return None
            closed = current.with_lost_at(lost_at)
            self._championships[closed.id] = closed
            return closed

    def current_championship(self, title: EntityRef) -> TitleChampionship | None:
        with self._lock:
            return next(
                (
                    c
                    for c in self._championships.values()
                    if c.title == title and c.is_current
                ),
                None,
            )

    def championships(self, title: EntityRef) -> list[TitleChampionship]:
        with self._lock:
            rows = [c for c in self._championships.values() if c.title == title]
        return sorted(rows, key=lambda c: c.won_at)

    def championships_held_by(
        self, champion: EntityRef, current_only: bool = True
    ) -> list[TitleChampionship]:
        with self._lock:
            rows = [
                c
                for c in self._championships.values()
                if c.champion == champion and (not current_only or c.is_current)
            ]
        return sorted(rows, key=lambda c: c.won_at)

    # Internals

    def _open_period(self, owner: EntityRef, kind: PeriodKind) -> Period | None:
        return next(
            (
                p
                for p in self._periods.values()
                if p.owner == owner and p.kind == kind and p.is_open
            ),
            None,
        )

    def _snapshot(self) -> _Snapshot:
        return (
            dict(self._entities),
            dict(self._periods),
            dict(self._memberships),
            dict(self._championships),
        )

    def _restore(self, snapshot: _Snapshot) -> None:
        entities, periods, memberships, championships = snapshot
        self._entities = entities
        self._periods = periods
        self._memberships = memberships
        self._championships = championships
