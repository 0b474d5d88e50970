"""Roster lifecycle facade.

Exposes one object per family with one callable per transition, each
taking ``(entity_id, effective_date=None)`` and returning the updated
entity or raising a typed RingsideError:

    lifecycle.wrestlers.employ(wrestler_id, datetime(2024, 1, 1, tzinfo=timezone.utc))
    lifecycle.tag_teams.suspend(team_id)
    lifecycle.titles.activate(title_id)

Authorization is the caller's concern and is assumed to have been checked
before any of these are called.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from ringside.application.services.availability_service import AvailabilityService
from ringside.application.services.championship_service import ChampionshipService
from ringside.application.services.deletion_service import DeletionService
from ringside.application.services.membership_service import MembershipService
from ringside.application.services.period_ledger import PeriodLedger
from ringside.application.services.roster_registry import RosterRegistry
from ringside.application.services.transition_service import TransitionService
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.transition import Transition


class FamilyTransitions:
    """Transition callables bound to one roster family.

    Transitions the family does not support raise
    TransitionNotSupportedError.
    """

    def __init__(
        self,
        family: RosterFamily,
        registry: RosterRegistry,
        transitions: TransitionService,
    ) -> None:
        self.family = family
        self._registry = registry
        self._transitions = transitions

    def ref(self, entity_id: UUID) -> EntityRef:
        return EntityRef(self.family, entity_id)

    def register(self, name: str, entity_id: UUID | None = None) -> RosterEntity:
        return self._registry.register(self.family, name, entity_id)

    def get(self, entity_id: UUID) -> RosterEntity:
        return self._registry.get(self.ref(entity_id))

    def all(self) -> list[RosterEntity]:
        return self._registry.list_entities(self.family)

    def employ(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.EMPLOY, entity_id, effective_date)

    def release(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.RELEASE, entity_id, effective_date)

    def suspend(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.SUSPEND, entity_id, effective_date)

    def reinstate(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.REINSTATE, entity_id, effective_date)

    def injure(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.INJURE, entity_id, effective_date)

    def clear_injury(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.CLEAR_INJURY, entity_id, effective_date)

    def retire(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.RETIRE, entity_id, effective_date)

    def unretire(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.UNRETIRE, entity_id, effective_date)

    def activate(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.ACTIVATE, entity_id, effective_date)

    def deactivate(
        self, entity_id: UUID, effective_date: datetime | None = None
    ) -> RosterEntity:
        return self._run(Transition.DEACTIVATE, entity_id, effective_date)

    def _run(
        self,
        transition: Transition,
        entity_id: UUID,
        effective_date: datetime | None,
    ) -> RosterEntity:
        return self._transitions.apply(self.ref(entity_id), transition, effective_date)


@dataclass
class RosterLifecycle:
    """Every roster service, wired together."""

    registry: RosterRegistry
    ledger: PeriodLedger
    transitions: TransitionService
    availability: AvailabilityService
    championships: ChampionshipService
    memberships: MembershipService
    deletion: DeletionService

    def __post_init__(self) -> None:
        self.wrestlers = self._family(RosterFamily.WRESTLER)
        self.referees = self._family(RosterFamily.REFEREE)
        self.managers = self._family(RosterFamily.MANAGER)
        self.tag_teams = self._family(RosterFamily.TAG_TEAM)
        self.titles = self._family(RosterFamily.TITLE)
        self.stables = self._family(RosterFamily.STABLE)

    def family(self, family: RosterFamily) -> FamilyTransitions:
        return {
            RosterFamily.WRESTLER: self.wrestlers,
            RosterFamily.REFEREE: self.referees,
            RosterFamily.MANAGER: self.managers,
            RosterFamily.TAG_TEAM: self.tag_teams,
            RosterFamily.TITLE: self.titles,
            RosterFamily.STABLE: self.stables,
        }[family]

    def refresh_status(self, ref: EntityRef) -> RosterEntity:
        return self.registry.refresh_status(ref)

    def delete(self, ref: EntityRef, at: datetime | None = None) -> RosterEntity:
        return self.deletion.delete(ref, at)

    def restore(self, ref: EntityRef, restore_memberships: bool = False) -> RosterEntity:
        return self.deletion.restore(ref, restore_memberships)

    def _family(self, family: RosterFamily) -> FamilyTransitions:
        return FamilyTransitions(family, self.registry, self.transitions)
