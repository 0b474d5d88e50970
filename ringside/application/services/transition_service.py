"""Transition actions for every roster family.

Each transition runs as one unit of work:

    1. lock the entity and project its current status from its periods
    2. check the (family, transition) rule and composite preconditions
    3. stage and check every ledger change, then write them
    4. re-project and persist the cached status
    5. fire cascades

Any failure rolls back every write of the unit of work, cascades included.
"""

from __future__ import annotations

from datetime import datetime

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.base import LoggingMixin
from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.period_ledger import PeriodLedger
from ringside.config.roster_config import RosterConfig
from ringside.domain.errors.ledger import InvalidDateRangeError
from ringside.domain.errors.membership import NotEnoughMembersError
from ringside.domain.errors.not_found import EntityNotFoundError
from ringside.domain.exceptions import RingsideError
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import MembershipKind
from ringside.domain.models.period import PeriodKind
from ringside.domain.models.roster import EntityRef, RosterFamily
from ringside.domain.models.status import ActivationStatus, EmploymentStatus, Status
from ringside.domain.models.transition import Transition
from ringside.domain.services.period_ledger import LedgerPlan
from ringside.domain.services.transition_rules import (
    ensure_tag_team_partners_allow,
    ensure_transition_allowed,
)


class TransitionService(LoggingMixin):
    """Validates and applies lifecycle transitions.

    Every public transition accepts an entity reference and an optional
    effective date, defaulting to the time authority's now, and returns the
    updated entity.
    """

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        ledger: PeriodLedger,
        cascades: CascadeEngine,
        config: RosterConfig,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._ledger = ledger
        self._cascades = cascades
        self._config = config
        self._init_logger(component="transitions")

    def employ(self, ref: EntityRef, effective_at: datetime | None = None) -> RosterEntity:
        return self.apply(ref, Transition.EMPLOY, effective_at)

    def release(self, ref: EntityRef, effective_at: datetime | None = None) -> RosterEntity:
        return self.apply(ref, Transition.RELEASE, effective_at)

    def suspend(self, ref: EntityRef, effective_at: datetime | None = None) -> RosterEntity:
        return self.apply(ref, Transition.SUSPEND, effective_at)

    def reinstate(
        self, ref: EntityRef, effective_at: datetime | None = None
    ) -> RosterEntity:
        return self.apply(ref, Transition.REINSTATE, effective_at)

    def injure(self, ref: EntityRef, effective_at: datetime | None = None) -> RosterEntity:
        return self.apply(ref, Transition.INJURE, effective_at)

    def clear_injury(
        self, ref: EntityRef, effective_at: datetime | None = None
    ) -> RosterEntity:
        return self.apply(ref, Transition.CLEAR_INJURY, effective_at)

    def retire(self, ref: EntityRef, effective_at: datetime | None = None) -> RosterEntity:
        return self.apply(ref, Transition.RETIRE, effective_at)

    def unretire(
        self, ref: EntityRef, effective_at: datetime | None = None
    ) -> RosterEntity:
        return self.apply(ref, Transition.UNRETIRE, effective_at)

    def activate(
        self, ref: EntityRef, effective_at: datetime | None = None
    ) -> RosterEntity:
        return self.apply(ref, Transition.ACTIVATE, effective_at)

    def deactivate(
        self, ref: EntityRef, effective_at: datetime | None = None
    ) -> RosterEntity:
        return self.apply(ref, Transition.DEACTIVATE, effective_at)

    def apply(
        self,
        ref: EntityRef,
        transition: Transition,
        effective_at: datetime | None = None,
    ) -> RosterEntity:
        """Apply a transition as a single all-or-nothing unit of work.

        Args:
            ref: Entity to transition.
            transition: Requested transition.
            effective_at: Effective date (defaults to now).

        Returns:
            The entity with its re-projected cached status.

        Raises:
            EntityNotFoundError: The entity does not exist or is deleted.
            TransitionNotSupportedError: The family has no such transition.
            CannotTransitionError: The current status does not allow it.
            InvalidDateRangeError: The date would break period ordering.
            LedgerInvariantError: Stored periods contradict the projection.
            RosterPersistenceError: Storage failed; nothing was written.
        """
        at = effective_at if effective_at is not None else self._time.now()
        log = self._log_operation(
            "apply_transition",
            entity=str(ref),
            transition=transition.value,
            effective_at=at.isoformat(),
        )
        log.info("transition_started")

        try:
            with self._repository.atomic():
                entity = self._require_live(ref)
                plan = self._ledger.plan(ref)
                current = self._ledger.project(ref)

                ensure_transition_allowed(ref, transition, current)
                self._check_composite_rules(ref, transition, current)

                self._stage(plan, transition, current, at)
                self._ledger.apply(plan)

                updated = self._ledger.sync_status(entity, force=True)
                self._cascades.after_transition(updated, transition, at, self.apply)
        except RingsideError as exc:
            log.info(
                "transition_rejected",
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        log.info(
            "transition_applied",
            from_status=current.value,
            to_status=updated.status.value,
        )
        return updated

    def _require_live(self, ref: EntityRef) -> RosterEntity:
        entity = self._repository.lock(ref)
        if entity is None or entity.is_deleted:
            raise EntityNotFoundError(ref)
        return entity

    def _check_composite_rules(
        self, ref: EntityRef, transition: Transition, current: Status
    ) -> None:
        if ref.family == RosterFamily.TAG_TEAM and transition in (
            Transition.SUSPEND,
            Transition.RETIRE,
        ):
            partners = self._repository.memberships(
                MembershipKind.TAG_TEAM_PARTNER, group=ref, current_only=True
            )
            statuses = [self._ledger.project(m.member) for m in partners]
            ensure_tag_team_partners_allow(
                ref,
                transition,
                current,
                [s for s in statuses if isinstance(s, EmploymentStatus)],
            )
        elif ref.family == RosterFamily.STABLE and transition == Transition.ACTIVATE:
            members = self._repository.memberships(
                MembershipKind.STABLE_MEMBER, group=ref, current_only=True
            )
            required = self._config.stable_minimum_members
            if len(members) < required:
                raise NotEnoughMembersError(ref, required, len(members))

    def _stage(
        self,
        plan: LedgerPlan,
        transition: Transition,
        current: Status,
        at: datetime,
    ) -> None:
        """Stage the ledger changes for a transition already judged legal."""
        if transition == Transition.EMPLOY:
            self._ensure_after_closed(plan, PeriodKind.EMPLOYMENT, PeriodKind.RETIREMENT, at)
            if current == EmploymentStatus.FUTURE_EMPLOYED:
                plan.move_start(PeriodKind.EMPLOYMENT, at)
            else:
                plan.open(PeriodKind.EMPLOYMENT, at)
        elif transition == Transition.RELEASE:
            # Suspension first, so no sub-period outlives its employment
            plan.close(PeriodKind.SUSPENSION, at)
            plan.require_close(PeriodKind.EMPLOYMENT, at)
        elif transition in (Transition.SUSPEND, Transition.INJURE):
            kind = (
                PeriodKind.SUSPENSION
                if transition == Transition.SUSPEND
                else PeriodKind.INJURY
            )
            self._ensure_within_employment(plan, kind, at)
            plan.open(kind, at)
        elif transition == Transition.REINSTATE:
            plan.require_close(PeriodKind.SUSPENSION, at)
        elif transition == Transition.CLEAR_INJURY:
            plan.require_close(PeriodKind.INJURY, at)
        elif transition == Transition.RETIRE:
            if isinstance(current, ActivationStatus):
                self._ensure_after_closed(
                    plan, PeriodKind.RETIREMENT, PeriodKind.ACTIVATION, at
                )
                plan.close(PeriodKind.ACTIVATION, at)
            else:
                self._ensure_after_closed(
                    plan, PeriodKind.RETIREMENT, PeriodKind.EMPLOYMENT, at
                )
                plan.close(PeriodKind.SUSPENSION, at)
                plan.close(PeriodKind.EMPLOYMENT, at)
            plan.open(PeriodKind.RETIREMENT, at)
        elif transition == Transition.UNRETIRE:
            plan.require_close(PeriodKind.RETIREMENT, at)
        elif transition == Transition.ACTIVATE:
            self._ensure_after_closed(plan, PeriodKind.ACTIVATION, PeriodKind.RETIREMENT, at)
            if current == ActivationStatus.PENDING_ACTIVATION:
                plan.move_start(PeriodKind.ACTIVATION, at)
            else:
                plan.open(PeriodKind.ACTIVATION, at)
        elif transition == Transition.DEACTIVATE:
            plan.require_close(PeriodKind.ACTIVATION, at)

    @staticmethod
    def _ensure_after_closed(
        plan: LedgerPlan, kind: PeriodKind, other: PeriodKind, at: datetime
    ) -> None:
        """Reject a period of one kind starting before the last period of another ended.

        Retirement and employment (or activation) take turns, so a new one
        may not start inside the closed stretch of the other.
        """
        previous = plan.history.latest_closed(other)
        if previous is not None and previous.ended_at is not None:
            if at < previous.ended_at:
                raise InvalidDateRangeError(
                    plan.history.owner, kind, at, previous.ended_at
                )

    @staticmethod
    def _ensure_within_employment(
        plan: LedgerPlan, kind: PeriodKind, at: datetime
    ) -> None:
        employment = plan.history.open_period(PeriodKind.EMPLOYMENT)
        if employment is not None and at < employment.started_at:
            raise InvalidDateRangeError(
                plan.history.owner, kind, at, employment.started_at
            )
