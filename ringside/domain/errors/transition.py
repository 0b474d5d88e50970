"""Illegal transition errors.

A transition is rejected when the entity's projected status is not in the
legal source set for the (family, transition) pair, or when a composite
precondition (e.g. tag-team partners) does not hold.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ringside.domain.exceptions import RingsideError

if TYPE_CHECKING:
    from ringside.domain.models.roster import EntityRef, RosterFamily
    from ringside.domain.models.status import Status
    from ringside.domain.models.transition import Transition


class CannotTransitionError(RingsideError):
    """Raised when a transition is not legal from the current status.

    Never retried automatically. Callers surface it as a rejection naming
    the attempted transition and the current status.

    Attributes:
        transition: The transition that was requested.
        current_status: Projected status of the entity at request time.
        family: Family of the entity.
        reason: Optional extra detail for composite preconditions.
        entity: Optional reference to the rejected entity.
    """

    def __init__(
        self,
        transition: Transition,
        current_status: Status,
        family: RosterFamily,
        reason: str | None = None,
        entity: EntityRef | None = None,
    ) -> None:
        """Initialize cannot transition error.

        Args:
            transition: Requested transition.
            current_status: Current projected status.
            family: Entity family.
            reason: Extra detail (optional).
            entity: Rejected entity (optional).
        """
        self.transition = transition
        self.current_status = current_status
        self.family = family
        self.reason = reason
        self.entity = entity

        detail = f": {reason}" if reason else ""
        super().__init__(
            f"Cannot {transition.verb} {family.label} with status "
            f"{current_status.value}{detail}"
        )


class CannotBeEmployedError(CannotTransitionError):
    """Raised when an entity cannot be employed."""


class CannotBeReleasedError(CannotTransitionError):
    """Raised when an entity cannot be released."""


class CannotBeSuspendedError(CannotTransitionError):
    """Raised when an entity cannot be suspended."""


class CannotBeReinstatedError(CannotTransitionError):
    """Raised when an entity cannot be reinstated."""


class CannotBeInjuredError(CannotTransitionError):
    """Raised when an entity cannot be injured."""


class CannotBeClearedFromInjuryError(CannotTransitionError):
    """Raised when an entity cannot be cleared from injury."""


class CannotBeRetiredError(CannotTransitionError):
    """Raised when an entity cannot be retired."""


class CannotBeUnretiredError(CannotTransitionError):
    """Raised when an entity cannot be unretired."""


class CannotBeActivatedError(CannotTransitionError):
    """Raised when a title or stable cannot be activated."""


class CannotBeDeactivatedError(CannotTransitionError):
    """Raised when a title or stable cannot be deactivated."""


class TransitionNotSupportedError(RingsideError):
    """Raised when a family has no such transition at all.

    Examples: injuring a tag team, employing a title.

    Attributes:
        transition: The requested transition.
        family: Family that does not support it.
    """

    def __init__(self, transition: Transition, family: RosterFamily) -> None:
        self.transition = transition
        self.family = family
        super().__init__(f"A {family.label} cannot be asked to {transition.verb}")


_ERROR_BY_TRANSITION: dict[str, type[CannotTransitionError]] = {
    "employ": CannotBeEmployedError,
    "release": CannotBeReleasedError,
    "suspend": CannotBeSuspendedError,
    "reinstate": CannotBeReinstatedError,
    "injure": CannotBeInjuredError,
    "clear_injury": CannotBeClearedFromInjuryError,
    "retire": CannotBeRetiredError,
    "unretire": CannotBeUnretiredError,
    "activate": CannotBeActivatedError,
    "deactivate": CannotBeDeactivatedError,
}


def cannot_transition(
    transition: Transition,
    current_status: Status,
    family: RosterFamily,
    reason: str | None = None,
    entity: EntityRef | None = None,
) -> CannotTransitionError:
    """Build the named rejection for a transition.

    Returns:
        Instance of the CannotTransitionError subclass for the transition.
    """
    error_class = _ERROR_BY_TRANSITION.get(transition.value, CannotTransitionError)
    return error_class(
        transition=transition,
        current_status=current_status,
        family=family,
        reason=reason,
        entity=entity,
    )
