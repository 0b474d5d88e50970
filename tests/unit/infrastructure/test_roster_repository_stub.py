"""Unit tests for the in-memory roster repository."""

from uuid import uuid4

import pytest

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.domain.errors import (
    ChampionshipConflictError,
    ConcurrentModificationError,
    EntityNotFoundError,
    LedgerInvariantError,
    MembershipConflictError,
    RosterPersistenceError,
)
from ringside.domain.models import (
    EmploymentStatus,
    EntityRef,
    Membership,
    MembershipKind,
    Period,
    PeriodKind,
    RosterEntity,
    RosterFamily,
    TitleChampionship,
)
from ringside.infrastructure.stubs import RosterRepositoryStub
from tests.helpers import utc


@pytest.fixture
def stub() -> RosterRepositoryStub:
    return RosterRepositoryStub()


def _entity(family: RosterFamily, name: str = "Goldberg") -> RosterEntity:
    return RosterEntity.register(family, name, utc(2024, 1, 1))


class TestEntities:
    """Tests for entity rows."""

    def test_declares_protocol(self) -> None:
        assert RosterRepositoryProtocol in RosterRepositoryStub.__mro__

    def test_add_and_get(self, stub: RosterRepositoryStub) -> None:
        entity = stub.add_entity(_entity(RosterFamily.WRESTLER))
        assert stub.get_entity(entity.ref) == entity
        assert stub.lock(entity.ref) == entity

    def test_duplicate_add_rejected(self, stub: RosterRepositoryStub) -> None:
        entity = stub.add_entity(_entity(RosterFamily.WRESTLER))
        with pytest.raises(RosterPersistenceError, match="already exists"):
            stub.add_entity(entity)

    def test_list_hides_deleted(self, stub: RosterRepositoryStub) -> None:
        kept = stub.add_entity(_entity(RosterFamily.WRESTLER, "Kevin Nash"))
        gone = stub.add_entity(_entity(RosterFamily.WRESTLER, "Scott Hall"))
        stub.save_entity(gone.with_deleted_at(utc(2024, 6, 1)))

        assert stub.list_entities(RosterFamily.WRESTLER) == [kept]

    def test_save_checks_version(self, stub: RosterRepositoryStub) -> None:
        entity = stub.add_entity(_entity(RosterFamily.WRESTLER))
        stub.save_entity(entity.with_status(EmploymentStatus.EMPLOYED))

        with pytest.raises(ConcurrentModificationError) as exc_info:
            stub.save_entity(entity.with_status(EmploymentStatus.RELEASED))
        assert exc_info.value.expected_version == 0
        assert exc_info.value.actual_version == 1

    def test_save_unknown(self, stub: RosterRepositoryStub) -> None:
        unsaved = _entity(RosterFamily.REFEREE).with_status(EmploymentStatus.EMPLOYED)
        with pytest.raises(EntityNotFoundError):
            stub.save_entity(unsaved)


class TestStorageGuards:
    """The stub refuses the same rows the relational schema refuses."""

    def test_second_open_period_rejected(self, stub: RosterRepositoryStub) -> None:
        owner = EntityRef.wrestler(uuid4())
        stub.create_period(Period(owner, PeriodKind.INJURY, utc(2024, 1, 1)))
        with pytest.raises(LedgerInvariantError, match="already open"):
            stub.create_period(Period(owner, PeriodKind.INJURY, utc(2024, 2, 1)))

    def test_end_and_move_without_open_period(self, stub: RosterRepositoryStub) -> None:
        owner = EntityRef.wrestler(uuid4())
        assert stub.end_open_period(owner, PeriodKind.INJURY, utc(2024, 1, 1)) is None
        assert stub.move_open_period_start(owner, PeriodKind.INJURY, utc(2024, 1, 1)) is None

    def test_second_current_membership_rejected(self, stub: RosterRepositoryStub) -> None:
        team, hawk = EntityRef.tag_team(uuid4()), EntityRef.wrestler(uuid4())
        kind = MembershipKind.TAG_TEAM_PARTNER
        stub.attach_membership(Membership(kind, team, hawk, utc(2024, 1, 1)))
        with pytest.raises(MembershipConflictError):
            stub.attach_membership(Membership(kind, team, hawk, utc(2024, 2, 1)))

    def test_detach_closes_current_row(self, stub: RosterRepositoryStub) -> None:
        manager, client = EntityRef.manager(uuid4()), EntityRef.wrestler(uuid4())
        kind = MembershipKind.MANAGEMENT
        stub.attach_membership(Membership(kind, manager, client, utc(2024, 1, 1)))

        closed = stub.detach_open_membership(kind, manager, client, utc(2024, 3, 1))

        assert closed is not None
        assert closed.left_at == utc(2024, 3, 1)
        assert stub.memberships(kind, group=manager, current_only=True) == []
        assert stub.detach_open_membership(kind, manager, client, utc(2024, 4, 1)) is None

    def test_second_current_reign_rejected(self, stub: RosterRepositoryStub) -> None:
        title = EntityRef.title(uuid4())
        stub.create_championship(
            TitleChampionship(title, EntityRef.wrestler(uuid4()), utc(2024, 1, 1))
        )
        with pytest.raises(ChampionshipConflictError):
            stub.create_championship(
                TitleChampionship(title, EntityRef.wrestler(uuid4()), utc(2024, 2, 1))
            )

    def test_championship_queries(self, stub: RosterRepositoryStub) -> None:
        title = EntityRef.title(uuid4())
        champion = EntityRef.tag_team(uuid4())
        stub.create_championship(TitleChampionship(title, champion, utc(2024, 1, 1)))
        ended = stub.end_open_championship(title, utc(2024, 2, 1))

        assert stub.current_championship(title) is None
        assert stub.championships(title) == [ended]
        assert stub.championships_held_by(champion) == []
        assert stub.championships_held_by(champion, current_only=False) == [ended]


class TestAtomic:
    """Tests for units of work."""

    def test_failure_restores_every_table(self, stub: RosterRepositoryStub) -> None:
        entity = stub.add_entity(_entity(RosterFamily.WRESTLER))

        with pytest.raises(RuntimeError):
            with stub.atomic():
                stub.save_entity(entity.with_status(EmploymentStatus.EMPLOYED))
                stub.create_period(Period(entity.ref, PeriodKind.EMPLOYMENT, utc(2024, 1, 1)))
                raise RuntimeError("boom")

        assert stub.get_entity(entity.ref) == entity
        assert stub.period_history(entity.ref).periods == ()

    def test_nested_blocks_join_outer(self, stub: RosterRepositoryStub) -> None:
        """An inner block's writes roll back with the outer block."""
        with pytest.raises(RuntimeError):
            with stub.atomic():
                with stub.atomic():
                    stub.add_entity(_entity(RosterFamily.MANAGER))
                raise RuntimeError("boom")

        assert stub.list_entities(RosterFamily.MANAGER) == []

    def test_success_keeps_writes(self, stub: RosterRepositoryStub) -> None:
        with stub.atomic():
            entity = stub.add_entity(_entity(RosterFamily.STABLE, "nWo"))
        assert stub.get_entity(entity.ref) == entity

    def test_clear(self, stub: RosterRepositoryStub) -> None:
        entity = stub.add_entity(_entity(RosterFamily.TITLE, "TV Title"))
        stub.create_period(Period(entity.ref, PeriodKind.ACTIVATION, utc(2024, 1, 1)))
        stub.clear()

        assert stub.get_entity(entity.ref) is None
        assert stub.period_history(entity.ref).periods == ()
