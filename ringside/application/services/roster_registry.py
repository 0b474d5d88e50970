"""Registration and lookup of roster entities."""

from __future__ import annotations

from uuid import UUID

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.base import LoggingMixin
from ringside.application.services.period_ledger import PeriodLedger
from ringside.domain.errors.not_found import EntityNotFoundError
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.roster import EntityRef, RosterFamily


class RosterRegistry(LoggingMixin):
    """Creates entities in their initial status and reads them back.

    Deleted entities are invisible here: ``get`` raises EntityNotFoundError
    for them exactly as for an unknown id.
    """

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        ledger: PeriodLedger,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._ledger = ledger
        self._init_logger(component="registry")

    def register(
        self, family: RosterFamily, name: str, entity_id: UUID | None = None
    ) -> RosterEntity:
        """Add a new entity: Unemployed for employables, Unactivated otherwise."""
        entity = RosterEntity.register(
            family=family,
            name=name,
            created_at=self._time.now(),
            entity_id=entity_id,
        )
        with self._repository.atomic():
            stored = self._repository.add_entity(entity)
        self._log_operation("register", entity=str(stored.ref)).info(
            "entity_registered", name=stored.name, status=stored.status.value
        )
        return stored

    def get(self, ref: EntityRef) -> RosterEntity:
        entity = self._repository.get_entity(ref)
        if entity is None or entity.is_deleted:
            raise EntityNotFoundError(ref)
        return entity

    def list_entities(self, family: RosterFamily) -> list[RosterEntity]:
        return self._repository.list_entities(family)

    def refresh_status(self, ref: EntityRef) -> RosterEntity:
        """Re-project a cached status whose meaning changed with time.

        A FutureEmployed wrestler whose start date has passed is Employed
        without any new ledger write; this brings the cache up to date.
        """
        with self._repository.atomic():
            entity = self._repository.lock(ref)
            if entity is None or entity.is_deleted:
                raise EntityNotFoundError(ref)
            refreshed = self._ledger.sync_status(entity)

        if refreshed.status != entity.status:
            self._log_operation("refresh_status", entity=str(ref)).info(
                "status_refreshed",
                from_status=entity.status.value,
                to_status=refreshed.status.value,
            )
        return refreshed
