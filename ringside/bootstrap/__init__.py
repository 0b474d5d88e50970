"""Bootstrap wiring for the roster lifecycle."""

from ringside.bootstrap.roster import (
    build_roster_lifecycle,
    get_roster_lifecycle,
    get_roster_repository,
    reset_roster_bootstrap,
)

__all__ = [
    "build_roster_lifecycle",
    "get_roster_lifecycle",
    "get_roster_repository",
    "reset_roster_bootstrap",
]
