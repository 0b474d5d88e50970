"""Status projection from period history.

The projection is a pure function of the period history and the moment it
is evaluated at. Evaluation is an ordered cascade of checks where the first
match wins. The cached status on an entity must always equal the
projection of its periods.
"""

from __future__ import annotations

from datetime import datetime

from ringside.domain.models.period import PeriodHistory, PeriodKind
from ringside.domain.models.roster import RosterFamily
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status


def project_employment_status(
    history: PeriodHistory, as_of: datetime
) -> EmploymentStatus:
    """Project the status of a wrestler, referee, manager or tag team.

    Order of checks:
        1. open retirement -> RETIRED
        2. no employment at all -> UNEMPLOYED
        3. latest employment starts after as_of -> FUTURE_EMPLOYED
        4. latest employment closed -> RELEASED, or UNEMPLOYED when a
           retirement ended at or after that employment's end
        5. open employment -> INJURED, SUSPENDED or EMPLOYED

    Args:
        history: All periods of the entity.
        as_of: Moment the projection is evaluated at.

    Returns:
        The projected EmploymentStatus.
    """
    if history.is_open(PeriodKind.RETIREMENT):
        return EmploymentStatus.RETIRED

    employment = history.latest(PeriodKind.EMPLOYMENT)
    if employment is None:
        return EmploymentStatus.UNEMPLOYED

    if employment.started_at > as_of:
        return EmploymentStatus.FUTURE_EMPLOYED

    if employment.ended_at is not None:
        retirement = history.latest_closed(PeriodKind.RETIREMENT)
        if (
            retirement is not None
            and retirement.ended_at is not None
            and retirement.ended_at >= employment.ended_at
        ):
            # Unretired without a new contract
            return EmploymentStatus.UNEMPLOYED
        return EmploymentStatus.RELEASED

    if history.is_open(PeriodKind.INJURY):
        return EmploymentStatus.INJURED
    if history.is_open(PeriodKind.SUSPENSION):
        return EmploymentStatus.SUSPENDED
    return EmploymentStatus.EMPLOYED


def project_activation_status(
    history: PeriodHistory, as_of: datetime
) -> ActivationStatus:
    """Project the status of a title or stable.

    Order of checks:
        1. open retirement -> RETIRED
        2. no activation at all -> UNACTIVATED
        3. latest activation starts after as_of -> PENDING_ACTIVATION
        4. latest activation closed -> INACTIVE
        5. otherwise -> ACTIVE
    """
    if history.is_open(PeriodKind.RETIREMENT):
        return ActivationStatus.RETIRED

    activation = history.latest(PeriodKind.ACTIVATION)
    if activation is None:
        return ActivationStatus.UNACTIVATED
    if activation.started_at > as_of:
        return ActivationStatus.PENDING_ACTIVATION
    if activation.ended_at is not None:
        return ActivationStatus.INACTIVE
    return ActivationStatus.ACTIVE


def project_status(
    family: RosterFamily, history: PeriodHistory, as_of: datetime
) -> Status:
    """Project the status of any entity, dispatching on its family."""
    if family.is_activatable():
        return project_activation_status(history, as_of)
    return project_employment_status(history, as_of)
