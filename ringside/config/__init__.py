"""Configuration for the roster lifecycle."""

from ringside.config.roster_config import (
    DEFAULT_ROSTER_CONFIG,
    TEST_ROSTER_CONFIG,
    RosterConfig,
)

__all__ = ["DEFAULT_ROSTER_CONFIG", "TEST_ROSTER_CONFIG", "RosterConfig"]
