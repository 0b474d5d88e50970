"""Unit tests for tag-team transitions and their partner cascades."""

import pytest

from ringside.application.services.roster_lifecycle import RosterLifecycle
from ringside.domain.errors import (
    CannotBeRetiredError,
    CannotBeSuspendedError,
    TransitionNotSupportedError,
)
from ringside.domain.models import EmploymentStatus, EntityRef
from tests.helpers import RosterBuilder, utc


@pytest.fixture
def partners(roster: RosterBuilder) -> tuple[EntityRef, EntityRef]:
    return roster.wrestler("Bret Hart"), roster.wrestler("Jim Neidhart")


@pytest.fixture
def team(roster: RosterBuilder, partners: tuple[EntityRef, EntityRef]) -> EntityRef:
    return roster.tag_team(
        partners=partners, joined_at=utc(2024, 1, 1), employed_at=utc(2024, 1, 15)
    )


class TestTagTeamEmploy:
    """Tests for employing a team."""

    def test_employ_cascades_to_partners(
        self,
        roster: RosterBuilder,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        """Unemployed partners are employed with the team, on the same date."""
        assert roster.status(team) == EmploymentStatus.EMPLOYED
        for partner in partners:
            assert roster.status(partner) == EmploymentStatus.EMPLOYED

    def test_employ_skips_partners_already_employed(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """An already employed partner is left as it is."""
        veteran = roster.wrestler("Owen Hart", employed_at=utc(2023, 6, 1))
        rookie = roster.wrestler("Davey Boy Smith")
        team = roster.tag_team(partners=(veteran, rookie), joined_at=utc(2024, 1, 1))

        lifecycle.tag_teams.employ(team.id, utc(2024, 2, 1))

        assert roster.status(rookie) == EmploymentStatus.EMPLOYED
        history = lifecycle.ledger.history(veteran)
        assert len(history.periods) == 1
        assert history.periods[0].started_at == utc(2023, 6, 1)

    def test_employ_without_partners(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        """A team with no partners can still be employed."""
        team = roster.tag_team()
        assert lifecycle.tag_teams.employ(team.id, utc(2024, 1, 1)).status == (
            EmploymentStatus.EMPLOYED
        )


class TestTagTeamSuspension:
    """Tests for suspending and reinstating a team."""

    def test_suspend_cascades_to_partners(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        lifecycle.tag_teams.suspend(team.id, utc(2024, 3, 1))

        assert roster.status(team) == EmploymentStatus.SUSPENDED
        assert {roster.status(p) for p in partners} == {EmploymentStatus.SUSPENDED}

    def test_reinstate_cascades_to_partners(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        lifecycle.tag_teams.suspend(team.id, utc(2024, 3, 1))
        lifecycle.tag_teams.reinstate(team.id, utc(2024, 4, 1))

        assert roster.status(team) == EmploymentStatus.EMPLOYED
        assert {roster.status(p) for p in partners} == {EmploymentStatus.EMPLOYED}

    def test_suspend_without_partners_rejected(
        self, roster: RosterBuilder, lifecycle: RosterLifecycle
    ) -> None:
        team = roster.tag_team(employed_at=utc(2024, 1, 1))
        with pytest.raises(CannotBeSuspendedError, match="no partners"):
            lifecycle.tag_teams.suspend(team.id, utc(2024, 2, 1))

    def test_suspend_with_injured_partner_rejected(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        """No partial suspension: the team and both partners stay employed."""
        lifecycle.wrestlers.injure(partners[0].id, utc(2024, 2, 1))

        with pytest.raises(CannotBeSuspendedError, match="injured"):
            lifecycle.tag_teams.suspend(team.id, utc(2024, 3, 1))

        assert roster.status(team) == EmploymentStatus.EMPLOYED
        assert roster.status(partners[1]) == EmploymentStatus.EMPLOYED


class TestTagTeamRetirement:
    """Tests for retiring and releasing a team."""

    def test_retire_with_suspended_partner_rejected(
        self,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        lifecycle.wrestlers.suspend(partners[1].id, utc(2024, 2, 1))
        with pytest.raises(CannotBeRetiredError, match="partner is suspended"):
            lifecycle.tag_teams.retire(team.id, utc(2024, 3, 1))

    def test_retire_closes_partnerships(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        """A retired team keeps no current partners, who stay employed."""
        lifecycle.tag_teams.retire(team.id, utc(2024, 6, 1))

        assert roster.status(team) == EmploymentStatus.RETIRED
        assert lifecycle.memberships.current_partners(team.id) == []
        assert {roster.status(p) for p in partners} == {EmploymentStatus.EMPLOYED}

    def test_release_closes_partnerships(
        self,
        roster: RosterBuilder,
        lifecycle: RosterLifecycle,
        team: EntityRef,
        partners: tuple[EntityRef, EntityRef],
    ) -> None:
        lifecycle.tag_teams.release(team.id, utc(2024, 6, 1))

        assert roster.status(team) == EmploymentStatus.RELEASED
        assert lifecycle.memberships.current_partners(team.id) == []
        assert {roster.status(p) for p in partners} == {EmploymentStatus.EMPLOYED}


class TestTagTeamUnsupported:
    """Tag teams are never injured."""

    def test_injure_not_supported(
        self, lifecycle: RosterLifecycle, team: EntityRef
    ) -> None:
        with pytest.raises(TransitionNotSupportedError):
            lifecycle.tag_teams.injure(team.id, utc(2024, 2, 1))

    def test_clear_injury_not_supported(
        self, lifecycle: RosterLifecycle, team: EntityRef
    ) -> None:
        with pytest.raises(TransitionNotSupportedError):
            lifecycle.tag_teams.clear_injury(team.id, utc(2024, 2, 1))
