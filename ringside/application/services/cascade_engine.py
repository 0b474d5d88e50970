"""Cascade engine.

Propagates the consequences of a successful transition to related rows
and entities, inside the same unit of work as the transition itself:

    release / retire of an employable
        - vacate every championship the entity holds
        - close its tag-team partnership, stable and management rows
        - tag team: close every partner membership of the team
        - manager: close every management row of the manager
    employ / suspend / reinstate of a tag team
        - apply the same transition to current partners whose status allows it
    employ of a wrestler or tag team
        - employ its current managers whose status allows it
    retire of a title
        - vacate the title
    deactivate / retire of a stable
        - close every current membership of the stable

Injury and suspension of an individual do not cascade: an injured or
suspended champion keeps the title and stays on the team.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.services.base import LoggingMixin
from ringside.application.services.period_ledger import PeriodLedger
from ringside.domain.errors.ledger import InvalidDateRangeError
from ringside.domain.models.championship import TitleChampionship
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.transition import Transition
from ringside.domain.services.transition_rules import legal_source_statuses

TransitionRunner = Callable[[EntityRef, Transition, datetime], RosterEntity]

_LEAVING_TRANSITIONS = (Transition.RELEASE, Transition.RETIRE)
_PARTNER_TRANSITIONS = (Transition.EMPLOY, Transition.SUSPEND, Transition.REINSTATE)
_MANAGED_FAMILIES = MembershipKind.MANAGEMENT.member_families


@dataclass
class CascadeResult:
    """Rows and entities touched by one cascade run."""

    vacated_championships: list[TitleChampionship] = field(default_factory=list)
    closed_memberships: list[Membership] = field(default_factory=list)
    cascaded_transitions: list[RosterEntity] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (
            self.vacated_championships
            or self.closed_memberships
            or self.cascaded_transitions
        )


class CascadeEngine(LoggingMixin):
    """Applies the side effects of a transition to related entities."""

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        ledger: PeriodLedger,
    ) -> None:
        self._repository = repository
        self._ledger = ledger
        self._init_logger(component="cascade")

    def after_transition(
        self,
        entity: RosterEntity,
        transition: Transition,
        effective_at: datetime,
        run: TransitionRunner,
    ) -> CascadeResult:
        """Fire every cascade for a transition that has just been applied.

        Args:
            entity: The entity after its own transition.
            transition: The transition that was applied.
            effective_at: Effective date of the transition, reused for every
                row the cascade closes.
            run: Callback applying a nested transition to a related entity.

        Returns:
            CascadeResult describing what was changed.
        """
        result = CascadeResult()
        family = entity.family

        if family.is_employable() and transition in _LEAVING_TRANSITIONS:
            self._vacate_held_championships(entity.ref, effective_at, result)
            self._leave_groups(entity.ref, effective_at, result)
        elif family == RosterFamily.TITLE and transition == Transition.RETIRE:
            self.vacate_title(entity.ref, effective_at, result)
        elif family == RosterFamily.STABLE and transition in (
            Transition.DEACTIVATE,
            Transition.RETIRE,
        ):
            self.close_memberships(
                self._repository.memberships(
                    MembershipKind.STABLE_MEMBER, group=entity.ref, current_only=True
                ),
                effective_at,
                result,
            )

        if family == RosterFamily.TAG_TEAM and transition in _PARTNER_TRANSITIONS:
            partners = self._repository.memberships(
                MembershipKind.TAG_TEAM_PARTNER, group=entity.ref, current_only=True
            )
            self._cascade_to(
                [m.member for m in partners], transition, effective_at, run, result
            )
        if family in _MANAGED_FAMILIES and transition == Transition.EMPLOY:
            managements = self._repository.memberships(
                MembershipKind.MANAGEMENT, member=entity.ref, current_only=True
            )
            self._cascade_to(
                [m.group for m in managements], transition, effective_at, run, result
            )

        if not result.is_empty:
            self._log_operation(
                "cascade",
                entity=str(entity.ref),
                transition=transition.value,
            ).info(
                "cascade_applied",
                vacated=len(result.vacated_championships),
                closed_memberships=len(result.closed_memberships),
                cascaded=len(result.cascaded_transitions),
            )
        return result

    def vacate_title(
        self,
        title: EntityRef,
        at: datetime,
        result: CascadeResult | None = None,
    ) -> TitleChampionship | None:
        """Close the current reign of a title, if any."""
        current = self._repository.current_championship(title)
        if current is None:
            return None
        if at <= current.won_at:
            raise InvalidDateRangeError(title, RosterFamily.TITLE, at, current.won_at)
        vacated = self._repository.end_open_championship(title, at)
        if vacated is not None:
            self._log_operation("vacate_title", title=str(title)).info(
                "championship_vacated",
                champion=str(vacated.champion),
                lost_at=at.isoformat(),
            )
            if result is not None:
                result.vacated_championships.append(vacated)
        return vacated

    def close_memberships(
        self,
        memberships: list[Membership],
        at: datetime,
        result: CascadeResult | None = None,
    ) -> list[Membership]:
        """Close current membership rows at a date.

        Raises:
            InvalidDateRangeError: The date is not after a row's join date.
                Checked for every row before any row is closed.
        """
        current = [m for m in memberships if m.is_current]
        for membership in current:
            if at <= membership.joined_at:
                raise InvalidDateRangeError(
                    membership.member, membership.kind, at, membership.joined_at
                )

        closed: list[Membership] = []
        for membership in current:
            row = self._repository.detach_open_membership(
                membership.kind, membership.group, membership.member, at
            )
            if row is None:
                continue
            closed.append(row)
            self._log_operation("close_membership", group=str(row.group)).info(
                "membership_closed",
                kind=row.kind.value,
                member=str(row.member),
                left_at=at.isoformat(),
            )
        if result is not None:
            result.closed_memberships.extend(closed)
        return closed

    def open_memberships_of(self, ref: EntityRef) -> list[Membership]:
        """Every current row where the entity is the group or the member."""
        rows: list[Membership] = []
        for kind in MembershipKind:
            if ref.family in kind.member_families:
                rows.extend(
                    self._repository.memberships(kind, member=ref, current_only=True)
                )
            if ref.family == kind.group_family:
                rows.extend(
                    self._repository.memberships(kind, group=ref, current_only=True)
                )
        return rows

    def _vacate_held_championships(
        self, ref: EntityRef, at: datetime, result: CascadeResult
    ) -> None:
        for reign in self._repository.championships_held_by(ref, current_only=True):
            self.vacate_title(reign.title, at, result)

    def _leave_groups(self, ref: EntityRef, at: datetime, result: CascadeResult) -> None:
        self.close_memberships(self.open_memberships_of(ref), at, result)

    def _cascade_to(
        self,
        related: list[EntityRef],
        transition: Transition,
        at: datetime,
        run: TransitionRunner,
        result: CascadeResult,
    ) -> None:
        """Apply a transition to related entities whose status allows it."""
        for ref in related:
            legal = legal_source_statuses(ref.family, transition)
            if self._ledger.project(ref) not in legal:
                continue
            result.cascaded_transitions.append(run(ref, transition, at))
