"""Domain errors for the roster lifecycle.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from RingsideError.
"""

from ringside.domain.errors.championship import (
    ChampionshipConflictError,
    CannotWinTitleError,
)
from ringside.domain.errors.ledger import InvalidDateRangeError, LedgerInvariantError
from ringside.domain.errors.membership import (
    MembershipConflictError,
    NotEnoughMembersError,
)
from ringside.domain.errors.not_found import (
    ChampionshipNotFoundError,
    EntityNotFoundError,
    MembershipNotFoundError,
)
from ringside.domain.errors.persistence import (
    ConcurrentModificationError,
    RosterPersistenceError,
)
from ringside.domain.errors.restore import CannotBeDeletedError, CannotBeRestoredError
from ringside.domain.errors.transition import (
    CannotBeActivatedError,
    CannotBeClearedFromInjuryError,
    CannotBeDeactivatedError,
    CannotBeEmployedError,
    CannotBeInjuredError,
    CannotBeReinstatedError,
    CannotBeReleasedError,
    CannotBeRetiredError,
    CannotBeSuspendedError,
    CannotBeUnretiredError,
    CannotTransitionError,
    TransitionNotSupportedError,
    cannot_transition,
)
from ringside.domain.exceptions import RingsideError

__all__: list[str] = [
    "CannotBeActivatedError",
    "CannotBeClearedFromInjuryError",
    "CannotBeDeactivatedError",
    "CannotBeDeletedError",
    "CannotBeEmployedError",
    "CannotBeInjuredError",
    "CannotBeReinstatedError",
    "CannotBeReleasedError",
    "CannotBeRestoredError",
    "CannotBeRetiredError",
    "CannotBeSuspendedError",
    "CannotBeUnretiredError",
    "CannotTransitionError",
    "CannotWinTitleError",
    "ChampionshipConflictError",
    "ChampionshipNotFoundError",
    "ConcurrentModificationError",
    "EntityNotFoundError",
    "InvalidDateRangeError",
    "LedgerInvariantError",
    "MembershipConflictError",
    "MembershipNotFoundError",
    "NotEnoughMembersError",
    "RingsideError",
    "RosterPersistenceError",
    "TransitionNotSupportedError",
    "cannot_transition",
]
