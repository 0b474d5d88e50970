"""Soft deletion and restore of roster entities."""

from __future__ import annotations

from datetime import datetime

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.base import LoggingMixin
from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.membership_service import MembershipService
from ringside.application.services.period_ledger import PeriodLedger
from ringside.domain.errors.not_found import EntityNotFoundError
from ringside.domain.errors.restore import CannotBeDeletedError, CannotBeRestoredError
from ringside.domain.exceptions import RingsideError
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.membership import Membership, MembershipKind
from ringside.domain.models.roster import EntityRef, RosterFamily


class DeletionService(LoggingMixin):
    """Deletes entities without losing history, and brings them back.

    Deleting closes every current membership of the entity at the deletion
    date. Periods and championship history are kept untouched, so the
    status re-projected on restore is the status the entity had.
    """

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        ledger: PeriodLedger,
        cascades: CascadeEngine,
        memberships: MembershipService,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._ledger = ledger
        self._cascades = cascades
        self._memberships = memberships
        self._init_logger(component="deletion")

    def delete(self, ref: EntityRef, at: datetime | None = None) -> RosterEntity:
        """Soft-delete an entity.

        Raises:
            EntityNotFoundError: Unknown or already deleted.
            CannotBeDeletedError: The entity holds, or is, a title with a
                current reign.
        """
        when = at if at is not None else self._time.now()
        log = self._log_operation("delete", entity=str(ref))

        with self._repository.atomic():
            entity = self._repository.lock(ref)
            if entity is None or entity.is_deleted:
                raise EntityNotFoundError(ref)

            if self._repository.championships_held_by(ref, current_only=True):
                raise CannotBeDeletedError(ref, "entity is a current champion")
            if (
                ref.family == RosterFamily.TITLE
                and self._repository.current_championship(ref) is not None
            ):
                raise CannotBeDeletedError(ref, "title has a current champion")

            closed = self._cascades.close_memberships(
                self._cascades.open_memberships_of(ref), when
            )
            deleted = self._repository.save_entity(entity.with_deleted_at(when))

        log.info("entity_deleted", closed_memberships=len(closed))
        return deleted

    def restore(self, ref: EntityRef, restore_memberships: bool = False) -> RosterEntity:
        """Undo a soft deletion.

        Args:
            ref: Deleted entity.
            restore_memberships: Re-open, as new rows starting now, the
                memberships the deletion closed. Rows whose other side is
                gone are skipped.

        Raises:
            EntityNotFoundError: The entity never existed.
            CannotBeRestoredError: The entity is not deleted, or a
                membership cannot be re-opened.
        """
        log = self._log_operation("restore", entity=str(ref))

        with self._repository.atomic():
            entity = self._repository.lock(ref)
            if entity is None:
                raise EntityNotFoundError(ref)
            if entity.deleted_at is None:
                raise CannotBeRestoredError(ref, "entity is not deleted")

            closed_by_deletion = self._closed_at(ref, entity.deleted_at)
            restored = self._repository.save_entity(entity.with_deleted_at(None))
            restored = self._ledger.sync_status(restored)

            reattached = 0
            if restore_memberships:
                reattached = self._reattach(ref, closed_by_deletion)

        log.info("entity_restored", reattached_memberships=reattached)
        return restored

    def _closed_at(self, ref: EntityRef, deleted_at: datetime) -> list[Membership]:
        rows: list[Membership] = []
        for kind in MembershipKind:
            if ref.family in kind.member_families:
                rows.extend(self._repository.memberships(kind, member=ref))
            if ref.family == kind.group_family:
                rows.extend(self._repository.memberships(kind, group=ref))
        return [m for m in rows if m.left_at == deleted_at]

    def _reattach(self, ref: EntityRef, rows: list[Membership]) -> int:
        now = self._time.now()
        count = 0
        for row in rows:
            other = row.group if row.member == ref else row.member
            other_entity = self._repository.get_entity(other)
            if other_entity is None or other_entity.is_deleted:
                continue
            try:
                self._memberships.join(row.kind, row.group, row.member, now)
            except RingsideError as exc:
                raise CannotBeRestoredError(
                    ref, f"cannot re-open {row.kind.value} with {other}: {exc}"
                ) from exc
            count += 1
        return count
