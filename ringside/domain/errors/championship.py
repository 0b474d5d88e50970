"""Championship errors."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.roster import EntityRef


class CannotWinTitleError(RingsideError):
    """Raised when a championship cannot be awarded.

    Attributes:
        title_id: Title being awarded.
        champion: Intended champion.
        reason: Why the award was rejected.
    """

    def __init__(self, title_id: UUID, champion: EntityRef, reason: str) -> None:
        self.title_id = title_id
        self.champion = champion
        self.reason = reason
        super().__init__(f"{champion} cannot win title {title_id}: {reason}")


class ChampionshipConflictError(RingsideError):
    """Raised when a title would end up with more than one current reign.

    Attributes:
        title_id: Title with the conflicting reigns.
    """

    def __init__(self, title_id: UUID) -> None:
        self.title_id = title_id
        super().__init__(f"Title {title_id} already has a current championship")
