"""Bookability of roster members.

Eligibility is a read-time property derived from statuses and current
memberships. It is never stored: a tag team that loses a partner keeps its
employment status and simply stops being bookable.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import cast

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.services.period_ledger import PeriodLedger
from ringside.config.roster_config import RosterConfig
from ringside.domain.models.membership import MembershipKind
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.status import EmploymentStatus


@dataclass(frozen=True)
class TagTeamEligibility:
    """Why a tag team is or is not bookable.

    Attributes:
        team: The tag team.
        team_status: Projected status of the team itself.
        partners: Current partners.
        required_partners: Configured partner count.
        unavailable_partners: Current partners that are not bookable.
    """

    team: EntityRef
    team_status: EmploymentStatus
    partners: tuple[EntityRef, ...]
    required_partners: int
    unavailable_partners: tuple[EntityRef, ...]

    @property
    def is_bookable(self) -> bool:
        return (
            self.team_status == EmploymentStatus.EMPLOYED
            and len(self.partners) == self.required_partners
            and not self.unavailable_partners
        )


class AvailabilityService:
    """Answers whether wrestlers, referees, managers and tag teams can be booked."""

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        ledger: PeriodLedger,
        config: RosterConfig,
    ) -> None:
        self._repository = repository
        self._ledger = ledger
        self._config = config

    def is_bookable(self, ref: EntityRef) -> bool:
        """True when the entity exists, is live and can be booked now.

        Individuals are bookable while EMPLOYED (not injured or suspended).
        Tag teams also need exactly the configured number of current
        partners, each of them bookable.
        """
        if not ref.family.is_employable():
            return False
        entity = self._repository.get_entity(ref)
        if entity is None or entity.is_deleted:
            return False
        if ref.family == RosterFamily.TAG_TEAM:
            return self.tag_team_eligibility(ref).is_bookable
        return self._ledger.project(ref) == EmploymentStatus.EMPLOYED

    def tag_team_eligibility(self, team: EntityRef) -> TagTeamEligibility:
        partners = tuple(
            m.member
            for m in self._repository.memberships(
                MembershipKind.TAG_TEAM_PARTNER, group=team, current_only=True
            )
        )
        unavailable = tuple(p for p in partners if not self.is_bookable(p))
        status = cast(EmploymentStatus, self._ledger.project(team))
        return TagTeamEligibility(
            team=team,
            team_status=status,
            partners=partners,
            required_partners=self._config.tag_team_partners,
            unavailable_partners=unavailable,
        )

    def bookable(self, family: RosterFamily) -> list[EntityRef]:
        """Every live entity of a family that is bookable now."""
        return [
            entity.ref
            for entity in self._repository.list_entities(family)
            if self.is_bookable(entity.ref)
        ]
