"""Named lifecycle transitions."""

from __future__ import annotations

from enum import Enum


class Transition(Enum):
    """A lifecycle transition a caller may request.

    Employment transitions apply to wrestlers, referees, managers and tag
    teams. ACTIVATE and DEACTIVATE apply to titles and stables, which also
    share RETIRE and UNRETIRE.
    """

    EMPLOY = "employ"
    RELEASE = "release"
    SUSPEND = "suspend"
    REINSTATE = "reinstate"
    INJURE = "injure"
    CLEAR_INJURY = "clear_injury"
    RETIRE = "retire"
    UNRETIRE = "unretire"
    ACTIVATE = "activate"
    DEACTIVATE = "deactivate"

    @property
    def verb(self) -> str:
        """Verb phrase used in error messages, e.g. "clear injury"."""
        return self.value.replace("_", " ")
