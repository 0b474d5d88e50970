"""Title championship reigns."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from uuid import UUID, uuid4

from ringside.domain.models.roster import CHAMPION_FAMILIES, EntityRef, RosterFamily


@dataclass(frozen=True, eq=True)
class TitleChampionship:
    """One reign of a champion over a title.

    The champion is polymorphic: a wrestler or a tag team, resolved through
    the family discriminant on the reference.

    Attributes:
        title: The title held.
        champion: Wrestler or tag team holding the title.
        won_at: Start of the reign (UTC).
        lost_at: End of the reign, None while the title is held.
        id: Unique identifier of the row.
    """

    title: EntityRef
    champion: EntityRef
    won_at: datetime
    lost_at: datetime | None = None
    id: UUID = field(default_factory=uuid4)

    def __post_init__(self) -> None:
        """Validate the title reference, champion family and dates."""
        if self.title.family != RosterFamily.TITLE:
            raise ValueError("Championship title reference must be a title")
        if self.champion.family not in CHAMPION_FAMILIES:
            raise ValueError(
                f"{self.champion.family.label} cannot hold a championship"
            )
        if self.lost_at is not None and self.lost_at <= self.won_at:
            raise ValueError("Championship must be lost after it is won")

    @property
    def is_current(self) -> bool:
        return self.lost_at is None

    def reign_length_days(self, as_of: datetime) -> int:
        """Whole days from won_at to lost_at, or to as_of while still held."""
        end = self.lost_at if self.lost_at is not None else as_of
        return max((end - self.won_at).days, 0)

    def with_lost_at(self, lost_at: datetime) -> TitleChampionship:
        return replace(self, lost_at=lost_at)
