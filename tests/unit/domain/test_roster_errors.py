"""Unit tests for roster domain errors."""

from uuid import uuid4

import pytest

from ringside.domain.errors import (
    CannotBeActivatedError,
    CannotBeClearedFromInjuryError,
    CannotBeDeactivatedError,
    CannotBeDeletedError,
    CannotBeEmployedError,
    CannotBeInjuredError,
    CannotBeReinstatedError,
    CannotBeReleasedError,
    CannotBeRestoredError,
    CannotBeRetiredError,
    CannotBeSuspendedError,
    CannotBeUnretiredError,
    CannotTransitionError,
    CannotWinTitleError,
    ChampionshipConflictError,
    ChampionshipNotFoundError,
    ConcurrentModificationError,
    EntityNotFoundError,
    InvalidDateRangeError,
    LedgerInvariantError,
    MembershipConflictError,
    MembershipNotFoundError,
    NotEnoughMembersError,
    RingsideError,
    RosterPersistenceError,
    TransitionNotSupportedError,
    cannot_transition,
)
from ringside.domain.models import (
    ActivationStatus,
    EmploymentStatus,
    EntityRef,
    MembershipKind,
    PeriodKind,
    RosterFamily,
    Transition,
)
from tests.helpers import utc


class TestRingsideError:
    """Tests for the root error."""

    @pytest.mark.parametrize(
        "error_class",
        [
            CannotTransitionError,
            TransitionNotSupportedError,
            InvalidDateRangeError,
            LedgerInvariantError,
            EntityNotFoundError,
            MembershipNotFoundError,
            ChampionshipNotFoundError,
            MembershipConflictError,
            NotEnoughMembersError,
            CannotWinTitleError,
            ChampionshipConflictError,
            CannotBeDeletedError,
            CannotBeRestoredError,
            RosterPersistenceError,
            ConcurrentModificationError,
        ],
    )
    def test_every_error_is_a_ringside_error(self, error_class: type) -> None:
        """Callers can catch every roster failure through RingsideError."""
        assert issubclass(error_class, RingsideError)


class TestCannotTransitionError:
    """Tests for illegal transition errors."""

    def test_message_names_transition_and_status(self) -> None:
        """The rejection names the transition and the current status."""
        error = CannotBeSuspendedError(
            transition=Transition.SUSPEND,
            current_status=EmploymentStatus.INJURED,
            family=RosterFamily.WRESTLER,
        )
        assert str(error) == "Cannot suspend wrestler with status injured"
        assert error.transition == Transition.SUSPEND
        assert error.current_status == EmploymentStatus.INJURED

    def test_message_includes_reason(self) -> None:
        """A composite reason is appended to the message."""
        error = CannotTransitionError(
            Transition.RETIRE,
            EmploymentStatus.EMPLOYED,
            RosterFamily.TAG_TEAM,
            reason="partner is injured",
        )
        assert str(error).endswith(": partner is injured")
        assert "tag team" in str(error)

    @pytest.mark.parametrize(
        ("transition", "status", "expected"),
        [
            (Transition.EMPLOY, EmploymentStatus.EMPLOYED, CannotBeEmployedError),
            (Transition.RELEASE, EmploymentStatus.UNEMPLOYED, CannotBeReleasedError),
            (Transition.SUSPEND, EmploymentStatus.INJURED, CannotBeSuspendedError),
            (Transition.REINSTATE, EmploymentStatus.EMPLOYED, CannotBeReinstatedError),
            (Transition.INJURE, EmploymentStatus.SUSPENDED, CannotBeInjuredError),
            (
                Transition.CLEAR_INJURY,
                EmploymentStatus.EMPLOYED,
                CannotBeClearedFromInjuryError,
            ),
            (Transition.RETIRE, EmploymentStatus.RETIRED, CannotBeRetiredError),
            (Transition.UNRETIRE, EmploymentStatus.EMPLOYED, CannotBeUnretiredError),
            (Transition.ACTIVATE, ActivationStatus.ACTIVE, CannotBeActivatedError),
            (
                Transition.DEACTIVATE,
                ActivationStatus.INACTIVE,
                CannotBeDeactivatedError,
            ),
        ],
    )
    def test_factory_picks_named_subclass(
        self,
        transition: Transition,
        status: EmploymentStatus | ActivationStatus,
        expected: type[CannotTransitionError],
    ) -> None:
        """cannot_transition returns the error named after the transition."""
        error = cannot_transition(transition, status, RosterFamily.WRESTLER)
        assert type(error) is expected
        assert isinstance(error, CannotTransitionError)

    def test_clear_injury_message_uses_verb(self) -> None:
        """Transition verbs are human readable."""
        error = cannot_transition(
            Transition.CLEAR_INJURY, EmploymentStatus.EMPLOYED, RosterFamily.REFEREE
        )
        assert str(error) == "Cannot clear injury referee with status employed"


class TestTransitionNotSupportedError:
    """Tests for unsupported transitions."""

    def test_message(self) -> None:
        """The message names the family and the transition."""
        error = TransitionNotSupportedError(Transition.INJURE, RosterFamily.TAG_TEAM)
        assert str(error) == "A tag team cannot be asked to injure"


class TestLedgerErrors:
    """Tests for ledger errors."""

    def test_invalid_date_range_message(self) -> None:
        """The message shows both conflicting dates."""
        owner = EntityRef.wrestler(uuid4())
        error = InvalidDateRangeError(
            owner, PeriodKind.EMPLOYMENT, utc(2024, 1, 1), utc(2024, 2, 1)
        )
        assert "employment" in str(error)
        assert "2024-01-01" in str(error)
        assert "2024-02-01" in str(error)
        assert error.owner == owner

    def test_invalid_date_range_accepts_membership_kind(self) -> None:
        """Membership dates use the same error."""
        owner = EntityRef.wrestler(uuid4())
        error = InvalidDateRangeError(
            owner, MembershipKind.STABLE_MEMBER, utc(2024, 1, 1), utc(2024, 2, 1)
        )
        assert "stable_member" in str(error)

    def test_ledger_invariant_message(self) -> None:
        """The message names the owner, kind and broken invariant."""
        owner = EntityRef.wrestler(uuid4())
        error = LedgerInvariantError(owner, PeriodKind.INJURY, "2 open periods")
        assert str(error) == f"Ledger invariant violated for {owner} (injury): 2 open periods"


class TestLookupAndConflictErrors:
    """Tests for not-found, membership, championship and persistence errors."""

    def test_entity_not_found(self) -> None:
        """The message names the family."""
        ref = EntityRef.tag_team(uuid4())
        assert str(EntityNotFoundError(ref)) == f"Tag team {ref.id} not found"

    def test_membership_not_found(self) -> None:
        """The message names both sides."""
        group = EntityRef.stable(uuid4())
        member = EntityRef.wrestler(uuid4())
        error = MembershipNotFoundError(MembershipKind.STABLE_MEMBER, group, member)
        assert str(group) in str(error)
        assert str(member) in str(error)

    def test_championship_not_found_default_message(self) -> None:
        """A vacant title is reported by id."""
        title_id = uuid4()
        assert "has no current champion" in str(ChampionshipNotFoundError(title_id))

    def test_not_enough_members(self) -> None:
        """The message shows required and actual counts."""
        group = EntityRef.stable(uuid4())
        error = NotEnoughMembersError(group, required=3, actual=1)
        assert "needs 3" in str(error)
        assert "has 1" in str(error)

    def test_membership_conflict_keeps_reason(self) -> None:
        """The conflict reason is kept and shown."""
        error = MembershipConflictError(
            MembershipKind.TAG_TEAM_PARTNER,
            EntityRef.tag_team(uuid4()),
            EntityRef.wrestler(uuid4()),
            "tag team is full",
        )
        assert error.reason == "tag team is full"
        assert str(error).endswith("tag team is full")

    def test_cannot_win_title(self) -> None:
        """The reason is part of the message."""
        error = CannotWinTitleError(uuid4(), EntityRef.wrestler(uuid4()), "title is not active")
        assert "title is not active" in str(error)

    def test_concurrent_modification(self) -> None:
        """Expected and actual versions are reported."""
        ref = EntityRef.wrestler(uuid4())
        error = ConcurrentModificationError(ref, expected_version=2, actual_version=3)
        assert "expected version 2, found 3" in str(error)

    def test_persistence_error(self) -> None:
        """The failed operation is named."""
        error = RosterPersistenceError("commit", "disk full")
        assert error.operation == "commit"
        assert str(error) == "Roster persistence failed during commit: disk full"

    def test_delete_and_restore_errors(self) -> None:
        """Reasons are shown in the message."""
        ref = EntityRef.wrestler(uuid4())
        assert str(CannotBeDeletedError(ref, "x")) == f"Cannot delete {ref}: x"
        assert str(CannotBeRestoredError(ref, "y")) == f"Cannot restore {ref}: y"
