"""Period ledger service.

Reads period histories through the repository, applies checked LedgerPlans
and keeps each entity's cached status equal to the projection of its
periods.
"""

from __future__ import annotations

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.base import LoggingMixin
from ringside.domain.errors.ledger import LedgerInvariantError
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.period import Period, PeriodHistory, PeriodKind
from ringside.domain.models.roster import EntityRef
from ringside.domain.models.status import Status
from ringside.domain.services.period_ledger import (
    LedgerChangeType,
    LedgerPlan,
    verify_history,
)
from ringside.domain.services.status_projector import project_status


class PeriodLedger(LoggingMixin):
    """Period ledger for every roster entity.

    Example:
        plan = ledger.plan(ref)
        plan.close(PeriodKind.SUSPENSION, at)
        plan.require_close(PeriodKind.EMPLOYMENT, at)
        ledger.apply(plan)
        entity = ledger.sync_status(entity)
    """

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._init_logger(component="ledger")

    def history(self, owner: EntityRef) -> PeriodHistory:
        return self._repository.period_history(owner)

    def plan(self, owner: EntityRef) -> LedgerPlan:
        """Start a plan against the owner's current history."""
        return LedgerPlan(history=self.history(owner))

    def current_period(self, owner: EntityRef, kind: PeriodKind) -> Period | None:
        return self._repository.current_period(owner, kind)

    def previous_periods(self, owner: EntityRef, kind: PeriodKind) -> list[Period]:
        return self._repository.previous_periods(owner, kind)

    def apply(self, plan: LedgerPlan) -> None:
        """Write every staged change of a plan, in staging order.

        Must run inside the caller's unit of work.

        The resulting history is verified first, so a plan that would leave
        overlapping or doubly open periods writes nothing.

        Raises:
            LedgerInvariantError: The resulting history breaks a ledger
                invariant, or storage disagrees with the plan, e.g. the
                period to close is no longer open.
        """
        owner = plan.history.owner
        verify_history(plan.history)
        log = self._log_operation("apply_plan", entity=str(owner))
        for change in plan.changes:
            period = change.period
            if change.change_type == LedgerChangeType.OPEN:
                self._repository.create_period(period)
            elif change.change_type == LedgerChangeType.CLOSE:
                if (
                    period.ended_at is None
                    or self._repository.end_open_period(
                        owner, period.kind, period.ended_at
                    )
                    is None
                ):
                    raise LedgerInvariantError(
                        owner, period.kind, "open period disappeared before close"
                    )
            else:
                if (
                    self._repository.move_open_period_start(
                        owner, period.kind, period.started_at
                    )
                    is None
                ):
                    raise LedgerInvariantError(
                        owner, period.kind, "open period disappeared before move"
                    )
            log.debug(
                "period_written",
                change=change.change_type.value,
                kind=period.kind.value,
                started_at=period.started_at.isoformat(),
                ended_at=period.ended_at.isoformat() if period.ended_at else None,
            )

    def project(self, owner: EntityRef) -> Status:
        """Project the status of an entity from its stored periods, as of now."""
        return project_status(owner.family, self.history(owner), self._time.now())

    def sync_status(self, entity: RosterEntity, force: bool = False) -> RosterEntity:
        """Re-project and persist the cached status of an entity.

        Args:
            entity: Entity as currently stored.
            force: Save even when the status did not change, bumping the
                version so concurrent writers are detected.

        Returns:
            The entity with its cached status equal to the projection.
        """
        projected = self.project(entity.ref)
        if projected == entity.status and not force:
            return entity
        return self._repository.save_entity(entity.with_status(projected))
