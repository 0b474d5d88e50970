"""Unit tests for transition cascades."""

import pytest
from structlog.testing import capture_logs

from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.roster_lifecycle import RosterLifecycle
from ringside.bootstrap.roster import build_roster_lifecycle
from ringside.config import RosterConfig
from ringside.domain.errors import InvalidDateRangeError
from ringside.domain.models import EmploymentStatus, EntityRef, MembershipKind, PeriodKind
from ringside.infrastructure.stubs import RosterRepositoryStub
from tests.helpers import FakeTimeAuthority, RosterBuilder, utc


@pytest.fixture
def champion_setup(
    roster: RosterBuilder, lifecycle: RosterLifecycle
) -> tuple[EntityRef, EntityRef]:
    title = roster.title(activated_at=utc(2024, 1, 1))
    champion = roster.wrestler(employed_at=utc(2024, 1, 1))
    lifecycle.championships.award(title.id, champion, utc(2024, 2, 1))
    return title, champion


class TestEmployableLeaving:
    """Release and retirement of employables."""

    @pytest.mark.parametrize("leave", ["release", "retire"])
    def test_champion_leaving_vacates_title(
        self,
        lifecycle: RosterLifecycle,
        champion_setup: tuple[EntityRef, EntityRef],
        leave: str,
    ) -> None:
        """The reign ends on the effective date of the release or retirement."""
        title, champion = champion_setup
        getattr(lifecycle.wrestlers, leave)(champion.id, utc(2024, 4, 1))

        assert lifecycle.championships.current_champion(title.id) is None
        reign = lifecycle.championships.history(title.id)[0]
        assert reign.lost_at == utc(2024, 4, 1)

    def test_injury_keeps_title(
        self,
        lifecycle: RosterLifecycle,
        champion_setup: tuple[EntityRef, EntityRef],
    ) -> None:
        """An injured champion keeps the title."""
        title, champion = champion_setup
        lifecycle.wrestlers.injure(champion.id, utc(2024, 3, 1))
        assert lifecycle.championships.current_champion(title.id) == champion

    def test_release_closes_every_membership(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """Partnerships, stables and managers all end with the contract."""
        wrestler = roster.wrestler(employed_at=utc(2024, 1, 1))
        team = roster.tag_team(partners=(wrestler,), joined_at=utc(2024, 1, 5))
        stable = roster.stable()
        manager = roster.manager(employed_at=utc(2024, 1, 1))
        lifecycle.memberships.join_stable(stable.id, wrestler, utc(2024, 1, 5))
        lifecycle.memberships.assign_manager(manager.id, wrestler, utc(2024, 1, 5))

        lifecycle.wrestlers.release(wrestler.id, utc(2024, 3, 1))

        assert lifecycle.memberships.current_partners(team.id) == []
        assert lifecycle.memberships.current_members(stable.id) == []
        assert lifecycle.memberships.current_managers(wrestler) == []

    def test_manager_release_closes_clients(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """A released manager manages no one."""
        manager = roster.manager(employed_at=utc(2024, 1, 1))
        client = roster.wrestler(employed_at=utc(2024, 1, 1))
        lifecycle.memberships.assign_manager(manager.id, client, utc(2024, 1, 5))

        lifecycle.managers.release(manager.id, utc(2024, 2, 1))

        assert lifecycle.memberships.current_clients(manager.id) == []
        assert roster.status(client) == EmploymentStatus.EMPLOYED

    def test_leave_date_on_join_date_rolls_back(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """A cascade that cannot close a row undoes the whole transition."""
        wrestler = roster.wrestler(employed_at=utc(2024, 1, 1))
        stable = roster.stable()
        lifecycle.memberships.join_stable(stable.id, wrestler, utc(2024, 2, 1))

        with pytest.raises(InvalidDateRangeError):
            lifecycle.wrestlers.release(wrestler.id, utc(2024, 2, 1))

        assert roster.status(wrestler) == EmploymentStatus.EMPLOYED
        assert lifecycle.memberships.current_members(stable.id) == [wrestler]


class TestEmployingClients:
    """Employing a wrestler or tag team brings its managers along."""

    def test_employing_client_employs_manager(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """The manager's contract starts with the client's."""
        manager = roster.manager("Jimmy Hart")
        client = roster.wrestler("Honky Tonk Man")
        lifecycle.memberships.assign_manager(manager.id, client, utc(2024, 1, 1))

        lifecycle.wrestlers.employ(client.id, utc(2024, 2, 1))

        assert roster.status(manager) == EmploymentStatus.EMPLOYED
        employment = lifecycle.ledger.current_period(manager, PeriodKind.EMPLOYMENT)
        assert employment is not None
        assert employment.started_at == utc(2024, 2, 1)

    def test_employing_tag_team_employs_its_manager(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        manager = roster.manager("Mr. Fuji")
        team = roster.tag_team(
            "Demolition", partners=(roster.wrestler("Ax"),), joined_at=utc(2024, 1, 1)
        )
        lifecycle.memberships.assign_manager(manager.id, team, utc(2024, 1, 1))

        lifecycle.tag_teams.employ(team.id, utc(2024, 2, 1))

        assert roster.status(manager) == EmploymentStatus.EMPLOYED

    def test_employed_manager_keeps_contract(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        manager = roster.manager(employed_at=utc(2023, 6, 1))
        client = roster.wrestler()
        lifecycle.memberships.assign_manager(manager.id, client, utc(2024, 1, 1))

        lifecycle.wrestlers.employ(client.id, utc(2024, 2, 1))

        (employment,) = lifecycle.ledger.history(manager).of_kind(PeriodKind.EMPLOYMENT)
        assert employment.started_at == utc(2023, 6, 1)

    def test_injured_manager_is_left_alone(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """Managers whose status forbids employment are skipped."""
        manager = roster.manager(employed_at=utc(2023, 6, 1))
        client = roster.wrestler()
        lifecycle.memberships.assign_manager(manager.id, client, utc(2024, 1, 1))
        lifecycle.managers.injure(manager.id, utc(2024, 1, 10))

        assert lifecycle.wrestlers.employ(client.id, utc(2024, 2, 1)).status == (
            EmploymentStatus.EMPLOYED
        )
        assert roster.status(manager) == EmploymentStatus.INJURED


class TestCascadeEngine:
    """Direct tests of the engine's helpers."""

    def test_open_memberships_of_covers_both_sides(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        repository: RosterRepositoryStub,
    ) -> None:
        """A tag team is a group of partners and a member of stables."""
        wrestler = roster.wrestler()
        team = roster.tag_team(partners=(wrestler,), joined_at=utc(2024, 1, 1))
        stable = roster.stable()
        lifecycle.memberships.join_stable(stable.id, team, utc(2024, 1, 1))

        engine = CascadeEngine(repository, lifecycle.ledger)
        rows = engine.open_memberships_of(team)

        assert {row.kind for row in rows} == {
            MembershipKind.TAG_TEAM_PARTNER,
            MembershipKind.STABLE_MEMBER,
        }

    def test_cascade_is_logged(
        self,
        fake_time_authority: FakeTimeAuthority,
        config: RosterConfig,
    ) -> None:
        """A cascade that changes anything logs what it did."""
        with capture_logs() as logs:
            lifecycle = build_roster_lifecycle(
                RosterRepositoryStub(), fake_time_authority, config
            )
            roster = RosterBuilder(lifecycle)
            title = roster.title(activated_at=utc(2024, 1, 1))
            champion = roster.wrestler(employed_at=utc(2024, 1, 1))
            lifecycle.championships.award(title.id, champion, utc(2024, 2, 1))
            lifecycle.wrestlers.retire(champion.id, utc(2024, 3, 1))

        cascades = [entry for entry in logs if entry["event"] == "cascade_applied"]
        assert len(cascades) == 1
        assert cascades[0]["vacated"] == 1
