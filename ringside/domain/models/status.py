"""Lifecycle statuses for roster entities.

Employable entities (wrestlers, referees, managers, tag teams) carry an
EmploymentStatus. Titles and stables carry an ActivationStatus. Both are
cached on the entity but are always derived from period history.
"""

from __future__ import annotations

from enum import Enum
from typing import Union


class EmploymentStatus(Enum):
    """Projected status of an employable entity.

    States:
        UNEMPLOYED: Never employed, or back from retirement without a new contract
        FUTURE_EMPLOYED: Employment starts after the current time
        EMPLOYED: Open employment, not injured or suspended
        SUSPENDED: Open employment with an open suspension
        INJURED: Open employment with an open injury
        RELEASED: Most recent employment has ended
        RETIRED: Open retirement
    """

    UNEMPLOYED = "unemployed"
    FUTURE_EMPLOYED = "future_employed"
    EMPLOYED = "employed"
    SUSPENDED = "suspended"
    INJURED = "injured"
    RELEASED = "released"
    RETIRED = "retired"


class ActivationStatus(Enum):
    """Projected status of a title or stable.

    States:
        UNACTIVATED: Never activated
        PENDING_ACTIVATION: Activation starts after the current time
        ACTIVE: Open activation
        INACTIVE: Most recent activation has ended
        RETIRED: Open retirement
    """

    UNACTIVATED = "unactivated"
    PENDING_ACTIVATION = "pending_activation"
    ACTIVE = "active"
    INACTIVE = "inactive"
    RETIRED = "retired"


Status = Union[EmploymentStatus, ActivationStatus]
