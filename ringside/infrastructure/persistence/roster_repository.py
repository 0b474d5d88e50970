"""SQLAlchemy implementation of RosterRepositoryProtocol.

Each outermost ``atomic()`` block owns one Session and one transaction.
Nested blocks on the same thread join it. Entity locks use
``SELECT ... FOR UPDATE`` where the dialect supports it, and every entity
write is a compare-and-swap on the version column, so a stale writer is
rejected even on dialects without row locks.
"""

from __future__ import annotations

import threading
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

from sqlalchemy import Select, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from structlog import get_logger

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
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status
from ringside.domain.primitives.ensure_atomicity import AtomicOperationContext
from ringside.infrastructure.persistence.models import (
    ChampionshipRow,
    MembershipRow,
    PeriodRow,
    RosterEntityRow,
)

logger = get_logger()


class SqlAlchemyRosterRepository(RosterRepositoryProtocol):
    """Roster storage on any SQLAlchemy-supported database.

    Attributes:
        _session_factory: Factory for the Session of each unit of work.
        _local: Per-thread current Session and nesting depth.
    """

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        """Initialize the repository.

        Args:
            session_factory: SQLAlchemy session factory.
        """
        self._session_factory = session_factory
        self._local = threading.local()

    # Units of work

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if getattr(self._local, "session", None) is not None:
            self._local.depth += 1
            try:
                yield
            finally:
                self._local.depth -= 1
            return

        session = self._session_factory()
        self._local.session = session
        self._local.depth = 1
        try:
            with AtomicOperationContext() as ctx:
                ctx.add_rollback(session.rollback)
                try:
                    yield
                    session.commit()
                except SQLAlchemyError as exc:
                    logger.error(
                        "roster_transaction_failed",
                        error=str(exc),
                        error_type=type(exc).__name__,
                    )
                    raise RosterPersistenceError("commit", str(exc)) from exc
        finally:
            session.close()
            self._local.session = None
            self._local.depth = 0

    def lock(self, ref: EntityRef) -> RosterEntity | None:
        with self.atomic():
            row = self._execute_one(self._entity_query(ref).with_for_update())
            return _to_entity(row) if row is not None else None

    # Entities

    def add_entity(self, entity: RosterEntity) -> RosterEntity:
        with self.atomic():
            session = self._session()
            session.add(
                RosterEntityRow(
                    id=entity.id,
                    family=entity.family.value,
                    name=entity.name,
                    status=entity.status.value,
                    created_at=entity.created_at,
                    deleted_at=entity.deleted_at,
                    version=entity.version,
                )
            )
            self._flush("add_entity")
            return entity

    def get_entity(self, ref: EntityRef) -> RosterEntity | None:
        with self.atomic():
            row = self._execute_one(self._entity_query(ref))
            return _to_entity(row) if row is not None else None

    def list_entities(self, family: RosterFamily) -> list[RosterEntity]:
        with self.atomic():
            rows = self._execute_all(
                select(RosterEntityRow)
                .where(
                    RosterEntityRow.family == family.value,
                    RosterEntityRow.deleted_at.is_(None),
                )
                .order_by(RosterEntityRow.name, RosterEntityRow.id)
            )
            return [_to_entity(row) for row in rows]

    def save_entity(self, entity: RosterEntity) -> RosterEntity:
        expected = entity.version - 1
        with self.atomic():
            result: Any = self._session().execute(
                update(RosterEntityRow)
                .where(
                    RosterEntityRow.id == entity.id,
                    RosterEntityRow.family == entity.family.value,
                    RosterEntityRow.version == expected,
                )
                .values(
                    status=entity.status.value,
                    deleted_at=entity.deleted_at,
                    version=entity.version,
                )
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                stored = self._execute_one(self._entity_query(entity.ref))
                if stored is None:
                    raise EntityNotFoundError(entity.ref)
                raise ConcurrentModificationError(entity.ref, expected, stored.version)
            return entity

    # Period ledger

    def create_period(self, period: Period) -> Period:
        with self.atomic():
            self._session().add(
                PeriodRow(
                    id=period.id,
                    owner_family=period.owner.family.value,
                    owner_id=period.owner.id,
                    kind=period.kind.value,
                    started_at=period.started_at,
                    ended_at=period.ended_at,
                )
            )
            try:
                self._session().flush()
            except IntegrityError as exc:
                raise LedgerInvariantError(
                    period.owner, period.kind, "a period is already open"
                ) from exc
            return period

    def end_open_period(
        self, owner: EntityRef, kind: PeriodKind, ended_at: datetime
    ) -> Period | None:
        with self.atomic():
            row = self._execute_one(self._open_period_query(owner, kind))
            if row is None:
                return None
            row.ended_at = ended_at
            self._flush("end_open_period")
            return _to_period(row)

    def move_open_period_start(
        self, owner: EntityRef, kind: PeriodKind, started_at: datetime
    ) -> Period | None:
        with self.atomic():
            row = self._execute_one(self._open_period_query(owner, kind))
            if row is None:
                return None
            row.started_at = started_at
            self._flush("move_open_period_start")
            return _to_period(row)

    def current_period(self, owner: EntityRef, kind: PeriodKind) -> Period | None:
        with self.atomic():
            row = self._execute_one(self._open_period_query(owner, kind))
            return _to_period(row) if row is not None else None

    def previous_periods(self, owner: EntityRef, kind: PeriodKind) -> list[Period]:
        with self.atomic():
            rows = self._execute_all(
                select(PeriodRow)
                .where(
                    PeriodRow.owner_family == owner.family.value,
                    PeriodRow.owner_id == owner.id,
                    PeriodRow.kind == kind.value,
                    PeriodRow.ended_at.is_not(None),
                )
                .order_by(PeriodRow.started_at)
            )
            return [_to_period(row) for row in rows]

    def period_history(self, owner: EntityRef) -> PeriodHistory:
        with self.atomic():
            rows = self._execute_all(
                select(PeriodRow)
                .where(
                    PeriodRow.owner_family == owner.family.value,
                    PeriodRow.owner_id == owner.id,
                )
                .order_by(PeriodRow.started_at)
            )
            return PeriodHistory(
                owner=owner, periods=tuple(_to_period(row) for row in rows)
            )

    # Memberships

    def attach_membership(self, membership: Membership) -> Membership:
        with self.atomic():
            self._session().add(
                MembershipRow(
                    id=membership.id,
                    kind=membership.kind.value,
                    group_family=membership.group.family.value,
                    group_id=membership.group.id,
                    member_family=membership.member.family.value,
                    member_id=membership.member.id,
                    joined_at=membership.joined_at,
                    left_at=membership.left_at,
                )
            )
            try:
                self._session().flush()
            except IntegrityError as exc:
                raise MembershipConflictError(
                    membership.kind,
                    membership.group,
                    membership.member,
                    "already a current member",
                ) from exc
            return membership

    def detach_open_membership(
        self,
        kind: MembershipKind,
        group: EntityRef,
        member: EntityRef,
        left_at: datetime,
    ) -> Membership | None:
        with self.atomic():
            row = self._execute_one(
                self._membership_query(kind, group, member).where(
                    MembershipRow.left_at.is_(None)
                )
            )
            if row is None:
                return None
            row.left_at = left_at
            self._flush("detach_open_membership")
            return _to_membership(row)

    def memberships(
        self,
        kind: MembershipKind,
        group: EntityRef | None = None,
        member: EntityRef | None = None,
        current_only: bool = False,
    ) -> list[Membership]:
        query = self._membership_query(kind, group, member)
        if current_only:
            query = query.where(MembershipRow.left_at.is_(None))
        with self.atomic():
            rows = self._execute_all(query.order_by(MembershipRow.joined_at))
            return [_to_membership(row) for row in rows]

    # Championships

    def create_championship(self, championship: TitleChampionship) -> TitleChampionship:
        with self.atomic():
            self._session().add(
                ChampionshipRow(
                    id=championship.id,
                    title_id=championship.title.id,
                    champion_family=championship.champion.family.value,
                    champion_id=championship.champion.id,
                    won_at=championship.won_at,
                    lost_at=championship.lost_at,
                )
            )
            try:
                self._session().flush()
            except IntegrityError as exc:
                raise ChampionshipConflictError(championship.title.id) from exc
            return championship

    def end_open_championship(
        self, title: EntityRef, lost_at: datetime
    ) -> TitleChampionship | None:
        with self.atomic():
            row = self._execute_one(self._current_championship_query(title))
            if row is None:
                return None
            row.lost_at = lost_at
            self._flush("end_open_championship")
            return _to_championship(row)

    def current_championship(self, title: EntityRef) -> TitleChampionship | None:
        with self.atomic():
            row = self._execute_one(self._current_championship_query(title))
            return _to_championship(row) if row is not None else None

    def championships(self, title: EntityRef) -> list[TitleChampionship]:
        with self.atomic():
            rows = self._execute_all(
                select(ChampionshipRow)
                .where(ChampionshipRow.title_id == title.id)
                .order_by(ChampionshipRow.won_at)
            )
            return [_to_championship(row) for row in rows]

    def championships_held_by(
        self, champion: EntityRef, current_only: bool = True
    ) -> list[TitleChampionship]:
        query = select(ChampionshipRow).where(
            ChampionshipRow.champion_family == champion.family.value,
            ChampionshipRow.champion_id == champion.id,
        )
        if current_only:
            query = query.where(ChampionshipRow.lost_at.is_(None))
        with self.atomic():
            rows = self._execute_all(query.order_by(ChampionshipRow.won_at))
            return [_to_championship(row) for row in rows]

    # Internals

    def _session(self) -> Session:
        session: Session | None = getattr(self._local, "session", None)
        if session is None:
            raise RosterPersistenceError("session", "no unit of work is open")
        return session

    def _flush(self, operation: str) -> None:
        try:
            self._session().flush()
        except SQLAlchemyError as exc:
            raise RosterPersistenceError(operation, str(exc)) from exc

    def _execute_one(self, query: Select[Any]) -> Any:
        return (
            self._session()
            .execute(query.execution_options(populate_existing=True))
            .scalar_one_or_none()
        )

    def _execute_all(self, query: Select[Any]) -> list[Any]:
        return list(
            self._session()
            .execute(query.execution_options(populate_existing=True))
            .scalars()
        )

    @staticmethod
    def _entity_query(ref: EntityRef) -> Select[Any]:
        return select(RosterEntityRow).where(
            RosterEntityRow.id == ref.id,
            RosterEntityRow.family == ref.family.value,
        )

    @staticmethod
    def _open_period_query(owner: EntityRef, kind: PeriodKind) -> Select[Any]:
        return select(PeriodRow).where(
            PeriodRow.owner_family == owner.family.value,
            PeriodRow.owner_id == owner.id,
            PeriodRow.kind == kind.value,
            PeriodRow.ended_at.is_(None),
        )

    @staticmethod
    def _membership_query(
        kind: MembershipKind,
        group: EntityRef | None,
        member: EntityRef | None,
    ) -> Select[Any]:
        query = select(MembershipRow).where(MembershipRow.kind == kind.value)
        if group is not None:
            query = query.where(
                MembershipRow.group_family == group.family.value,
                MembershipRow.group_id == group.id,
            )
        if member is not None:
            query = query.where(
                MembershipRow.member_family == member.family.value,
                MembershipRow.member_id == member.id,
            )
        return query

    @staticmethod
    def _current_championship_query(title: EntityRef) -> Select[Any]:
        return select(ChampionshipRow).where(
            ChampionshipRow.title_id == title.id,
            ChampionshipRow.lost_at.is_(None),
        )


def _status_for(family: RosterFamily, value: str) -> Status:
    if family.is_activatable():
        return ActivationStatus(value)
    return EmploymentStatus(value)


def _to_entity(row: RosterEntityRow) -> RosterEntity:
    family = RosterFamily(row.family)
    return RosterEntity(
        ref=EntityRef(family, row.id),
        name=row.name,
        status=_status_for(family, row.status),
        created_at=row.created_at,
        deleted_at=row.deleted_at,
        version=row.version,
    )


def _to_period(row: PeriodRow) -> Period:
    return Period(
        owner=EntityRef(RosterFamily(row.owner_family), row.owner_id),
        kind=PeriodKind(row.kind),
        started_at=row.started_at,
        ended_at=row.ended_at,
        id=row.id,
    )


def _to_membership(row: MembershipRow) -> Membership:
    return Membership(
        kind=MembershipKind(row.kind),
        group=EntityRef(RosterFamily(row.group_family), row.group_id),
        member=EntityRef(RosterFamily(row.member_family), row.member_id),
        joined_at=row.joined_at,
        left_at=row.left_at,
        id=row.id,
    )


def _to_championship(row: ChampionshipRow) -> TitleChampionship:
    return TitleChampionship(
        title=EntityRef.title(row.title_id),
        champion=EntityRef(RosterFamily(row.champion_family), row.champion_id),
        won_at=row.won_at,
        lost_at=row.lost_at,
        id=row.id,
    )
