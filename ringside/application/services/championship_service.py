"""Title championships: awarding, vacating and reign history."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol
from ringside.application.services.availability_service import AvailabilityService
from ringside.application.services.base import LoggingMixin
from ringside.application.services.cascade_engine import CascadeEngine
from ringside.application.services.period_ledger import PeriodLedger
from ringside.domain.errors.championship import (
    ChampionshipConflictError,
    CannotWinTitleError,
)
from ringside.domain.errors.ledger import InvalidDateRangeError
from ringside.domain.errors.not_found import (
    ChampionshipNotFoundError,
    EntityNotFoundError,
)
from ringside.domain.models.championship import TitleChampionship
from ringside.domain.models.entity import RosterEntity
from ringside.domain.models.roster import CHAMPION_FAMILIES, EntityRef, RosterFamily
from ringside.domain.models.status import ActivationStatus


class ChampionshipService(LoggingMixin):
    """Manages who holds each title.

    A title has at most one current reign. Awarding a title that already
    has a champion is a title change: the old reign ends when the new one
    begins.
    """

    def __init__(
        self,
        repository: RosterRepositoryProtocol,
        time_authority: TimeAuthorityProtocol,
        ledger: PeriodLedger,
        availability: AvailabilityService,
        cascades: CascadeEngine,
    ) -> None:
        self._repository = repository
        self._time = time_authority
        self._ledger = ledger
        self._availability = availability
        self._cascades = cascades
        self._init_logger(component="championships")

    def award(
        self,
        title_id: UUID,
        champion: EntityRef,
        won_at: datetime | None = None,
    ) -> TitleChampionship:
        """Start a new reign for a champion.

        Args:
            title_id: Title being won.
            champion: Wrestler or tag team winning it.
            won_at: Start of the reign (defaults to now).

        Returns:
            The new current TitleChampionship.

        Raises:
            EntityNotFoundError: Title or champion does not exist.
            CannotWinTitleError: Title not active, champion not bookable,
                or champion already holds the title.
            InvalidDateRangeError: won_at precedes the end of an earlier reign.
        """
        at = won_at if won_at is not None else self._time.now()
        title = EntityRef.title(title_id)
        log = self._log_operation(
            "award", title=str(title), champion=str(champion), won_at=at.isoformat()
        )

        with self._repository.atomic():
            self._require_live(title)
            if champion.family not in CHAMPION_FAMILIES:
                raise CannotWinTitleError(
                    title_id, champion, f"a {champion.family.label} cannot hold a title"
                )
            self._require_live(champion)

            if self._ledger.project(title) != ActivationStatus.ACTIVE:
                raise CannotWinTitleError(title_id, champion, "title is not active")
            if not self._availability.is_bookable(champion):
                raise CannotWinTitleError(title_id, champion, "champion is not bookable")

            current = self._repository.current_championship(title)
            if current is not None and current.champion == champion:
                raise CannotWinTitleError(
                    title_id, champion, "already the current champion"
                )

            last_lost = max(
                (r.lost_at for r in self._repository.championships(title) if r.lost_at),
                default=None,
            )
            if last_lost is not None and at < last_lost:
                raise InvalidDateRangeError(title, RosterFamily.TITLE, at, last_lost)

            if current is not None:
                self._cascades.vacate_title(title, at)
                log.info("title_changed_hands", previous=str(current.champion))

            if self._repository.current_championship(title) is not None:
                raise ChampionshipConflictError(title_id)
            championship = self._repository.create_championship(
                TitleChampionship(title=title, champion=champion, won_at=at)
            )

        log.info("championship_awarded", championship_id=str(championship.id))
        return championship

    def vacate(self, title_id: UUID, at: datetime | None = None) -> TitleChampionship:
        """End the current reign of a title without a new champion.

        Raises:
            ChampionshipNotFoundError: The title is already vacant.
        """
        when = at if at is not None else self._time.now()
        title = EntityRef.title(title_id)
        with self._repository.atomic():
            self._require_live(title)
            vacated = self._cascades.vacate_title(title, when)
            if vacated is None:
                raise ChampionshipNotFoundError(title_id)
        return vacated

    def current_championship(self, title_id: UUID) -> TitleChampionship | None:
        return self._repository.current_championship(EntityRef.title(title_id))

    def current_champion(self, title_id: UUID) -> EntityRef | None:
        """The wrestler or tag team holding a title, None while vacant."""
        current = self.current_championship(title_id)
        return current.champion if current is not None else None

    def history(self, title_id: UUID) -> list[TitleChampionship]:
        """Every reign of a title, oldest first."""
        return self._repository.championships(EntityRef.title(title_id))

    def championships_held_by(
        self, champion: EntityRef, current_only: bool = True
    ) -> list[TitleChampionship]:
        return self._repository.championships_held_by(champion, current_only)

    def reign_length_days(self, championship: TitleChampionship) -> int:
        """Length of a reign in whole days, measured to now while still held."""
        return championship.reign_length_days(self._time.now())

    def _require_live(self, ref: EntityRef) -> RosterEntity:
        entity = self._repository.lock(ref)
        if entity is None or entity.is_deleted:
            raise EntityNotFoundError(ref)
        return entity
