"""Domain models for the roster lifecycle."""

from ringside.domain.models.championship import TitleChampionship
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.period import Period, PeriodHistory, PeriodKind
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status
from ringside.domain.models.transition import Transition

__all__ = [
    "ActivationStatus",
    "EmploymentStatus",
    "EntityRef",
    "Membership",
    "MembershipKind",
    "Period",
    "PeriodHistory",
    "PeriodKind",
    "RosterEntity",
    "RosterFamily",
    "Status",
    "TitleChampionship",
    "Transition",
]
