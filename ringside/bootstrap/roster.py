"""Bootstrap wiring for roster lifecycle dependencies."""

from __future__ import annotations

import os

from structlog import get_logger

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.availability_service import AvailabilityService
from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.championship_service import ChampionshipService
from ringside.application.services.deletion_service import DeletionService
from ringside.application.services.membership_service import MembershipService
from ringside.application.services.period_ledger import PeriodLedger
from ringside.application.services.roster_lifecycle import RosterLifecycle
from ringside.application.services.roster_registry import RosterRegistry
from ringside.application.services.time_authority_service import SystemTimeAuthority
from ringside.application.services.transition_service import TransitionService
from ringside.config.roster_config import RosterConfig
from ringside.infrastructure.stubs.roster_repository_stub import RosterRepositoryStub

logger = get_logger()

_roster_repository: RosterRepositoryProtocol | None = None
_roster_lifecycle: RosterLifecycle | None = None


def build_roster_lifecycle(
    repository: RosterRepositoryProtocol,
    time_authority: TimeAuthorityProtocol | None = None,
    config: RosterConfig | None = None,
) -> RosterLifecycle:
    """Wire every roster service around one repository and one clock."""
    time = time_authority or SystemTimeAuthority()
    settings = config or RosterConfig.from_environment()

    ledger = PeriodLedger(repository, time)
    cascades = CascadeEngine(repository, ledger)
    registry = RosterRegistry(repository, time, ledger)
    transitions = TransitionService(repository, time, ledger, cascades, settings)
    availability = AvailabilityService(repository, ledger, settings)
    championships = ChampionshipService(
        repository, time, ledger, availability, cascades
    )
    memberships = MembershipService(repository, time, ledger, cascades, settings)
    deletion = DeletionService(repository, time, ledger, cascades, memberships)

    return RosterLifecycle(
        registry=registry,
        ledger=ledger,
        transitions=transitions,
        availability=availability,
        championships=championships,
        memberships=memberships,
        deletion=deletion,
    )


def get_roster_repository() -> RosterRepositoryProtocol:
    """Get the roster repository instance.

    Returns the SQLAlchemy repository if DATABASE_URL is configured,
    otherwise the in-memory stub.
    """
    global _roster_repository
    if _roster_repository is None:
        if os.environ.get("DATABASE_URL"):
            from ringside.bootstrap.database import get_session_factory
            from ringside.infrastructure.persistence.roster_repository import (
                SqlAlchemyRosterRepository,
            )

            _roster_repository = SqlAlchemyRosterRepository(get_session_factory())
            logger.info("roster_repository_initialized", repository_type="SQLAlchemy")
        else:
            logger.warning(
                "roster_repository_initialized",
                repository_type="InMemoryStub",
                message="DATABASE_URL not set - using in-memory stub (data will not persist)",
            )
            _roster_repository = RosterRepositoryStub()
    return _roster_repository


def get_roster_lifecycle() -> RosterLifecycle:
    """Get the roster lifecycle facade."""
    global _roster_lifecycle
    if _roster_lifecycle is None:
        _roster_lifecycle = build_roster_lifecycle(get_roster_repository())
    return _roster_lifecycle


def reset_roster_bootstrap() -> None:
    """Reset roster singletons for testing."""
    global _roster_repository, _roster_lifecycle
    _roster_repository = None
    _roster_lifecycle = None
