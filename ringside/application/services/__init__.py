"""Application services for the roster lifecycle."""

from ringside.application.services.availability_service import (
    AvailabilityService,
    TagTeamEligibility,
)
from ringside.application.services.cascade_engine import CascadeEngine, CascadeResult
from ringside.application.services.championship_service import ChampionshipService
from ringside.application.services.deletion_service import DeletionService
from ringside.application.services.membership_service import MembershipService
from ringside.application.services.period_ledger import PeriodLedger
from ringside.application.services.roster_lifecycle import (
    FamilyTransitions,
    RosterLifecycle,
)
from ringside.application.services.roster_registry import RosterRegistry
from ringside.application.services.time_authority_service import SystemTimeAuthority
from ringside.application.services.transition_service import TransitionService

__all__ = [
    "AvailabilityService",
    "CascadeEngine",
    "CascadeResult",
    "ChampionshipService",
    "DeletionService",
    "FamilyTransitions",
    "MembershipService",
    "PeriodLedger",
    "RosterLifecycle",
    "RosterRegistry",
    "SystemTimeAuthority",
    "TagTeamEligibility",
    "TransitionService",
]
