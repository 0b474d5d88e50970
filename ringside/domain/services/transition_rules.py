"""Transition legality rules, keyed by (transition family, transition).

Validation is a table lookup rather than a class hierarchy: each pair maps
to the exact set of statuses the transition may start from. Pairs missing
from the table are transitions the family does not support at all.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum

from ringside.domain.errors.transition import (
    TransitionNotSupportedError,
    cannot_transition,
)
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status
from ringside.domain.models.transition import Transition


class TransitionFamily(Enum):
    """Validation family an entity belongs to.

    Families:
        INDIVIDUAL: wrestlers, referees and managers
        TAG_TEAM: composite of wrestler partners
        TITLE: championship belts
        STABLE: factions
    """

    INDIVIDUAL = "individual"
    TAG_TEAM = "tag_team"
    TITLE = "title"
    STABLE = "stable"

    @classmethod
    def of(cls, family: RosterFamily) -> TransitionFamily:
        if family.is_individual():
            return cls.INDIVIDUAL
        return cls(family.value)


_E = EmploymentStatus
_A = ActivationStatus

_EMPLOYMENT_RULES: dict[Transition, frozenset[Status]] = {
    Transition.EMPLOY: frozenset({_E.UNEMPLOYED, _E.RELEASED, _E.FUTURE_EMPLOYED}),
    Transition.RELEASE: frozenset({_E.EMPLOYED, _E.SUSPENDED}),
    Transition.SUSPEND: frozenset({_E.EMPLOYED}),
    Transition.REINSTATE: frozenset({_E.SUSPENDED}),
    Transition.INJURE: frozenset({_E.EMPLOYED}),
    Transition.CLEAR_INJURY: frozenset({_E.INJURED}),
    Transition.RETIRE: frozenset({_E.EMPLOYED, _E.SUSPENDED, _E.RELEASED}),
    Transition.UNRETIRE: frozenset({_E.RETIRED}),
}

_ACTIVATION_RULES: dict[Transition, frozenset[Status]] = {
    Transition.ACTIVATE: frozenset(
        {_A.UNACTIVATED, _A.PENDING_ACTIVATION, _A.INACTIVE}
    ),
    Transition.DEACTIVATE: frozenset({_A.ACTIVE}),
    Transition.RETIRE: frozenset({_A.ACTIVE, _A.INACTIVE}),
    Transition.UNRETIRE: frozenset({_A.RETIRED}),
}

TRANSITION_RULES: dict[tuple[TransitionFamily, Transition], frozenset[Status]] = {
    **{(TransitionFamily.INDIVIDUAL, t): s for t, s in _EMPLOYMENT_RULES.items()},
    **{
        (TransitionFamily.TAG_TEAM, t): s
        for t, s in _EMPLOYMENT_RULES.items()
        if t not in (Transition.INJURE, Transition.CLEAR_INJURY)
    },
    **{(TransitionFamily.TITLE, t): s for t, s in _ACTIVATION_RULES.items()},
    **{(TransitionFamily.STABLE, t): s for t, s in _ACTIVATION_RULES.items()},
}


def legal_source_statuses(
    family: RosterFamily, transition: Transition
) -> frozenset[Status]:
    """Statuses a transition may start from for a family.

    Raises:
        TransitionNotSupportedError: The family has no such transition.
    """
    key = (TransitionFamily.of(family), transition)
    if key not in TRANSITION_RULES:
        raise TransitionNotSupportedError(transition, family)
    return TRANSITION_RULES[key]


def ensure_transition_allowed(
    ref: EntityRef, transition: Transition, current_status: Status
) -> None:
    """Reject a transition that is illegal from the current status.

    Raises:
        TransitionNotSupportedError: The family has no such transition.
        CannotTransitionError: The named subclass for the transition.
    """
    if current_status not in legal_source_statuses(ref.family, transition):
        raise cannot_transition(
            transition, current_status, ref.family, entity=ref
        )


def ensure_tag_team_partners_allow(
    ref: EntityRef,
    transition: Transition,
    team_status: Status,
    partner_statuses: Sequence[EmploymentStatus],
) -> None:
    """Composite preconditions that depend on a tag team's current partners.

    Suspending needs at least one partner and no partner already suspended
    or injured. Retiring is refused while any partner is suspended or
    injured.

    Raises:
        CannotBeSuspendedError: Suspension preconditions fail.
        CannotBeRetiredError: Retirement preconditions fail.
    """
    unavailable = [
        s
        for s in partner_statuses
        if s in (EmploymentStatus.SUSPENDED, EmploymentStatus.INJURED)
    ]
    if transition == Transition.SUSPEND:
        if not partner_statuses:
            raise cannot_transition(
                transition, team_status, ref.family, "tag team has no partners", ref
            )
        if unavailable:
            raise cannot_transition(
                transition,
                team_status,
                ref.family,
                f"partner already {unavailable[0].value}",
                ref,
            )
    elif transition == Transition.RETIRE and unavailable:
        raise cannot_transition(
            transition,
            team_status,
            ref.family,
            f"partner is {unavailable[0].value}",
            ref,
        )
