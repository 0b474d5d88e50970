"""Roster lifecycle configuration.

This module defines the tunable composite rules of the roster with
environment variable overrides.

Environment Variables:
- RINGSIDE_TAG_TEAM_PARTNERS: Current partners a bookable tag team needs (default: 2)
- RINGSIDE_STABLE_MINIMUM_MEMBERS: Current members needed to activate a stable (default: 3)
- RINGSIDE_ENFORCE_SINGLE_STABLE: Allow at most one current stable per member (default: true)
"""

from __future__ import annotations

import os
from dataclasses import dataclass


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/true/yes and 0/false/no, case-insensitive. Anything else
    falls back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in ("1", "true", "yes"):
        return True
    if normalized in ("0", "false", "no"):
        return False
    return default


@dataclass(frozen=True)
class RosterConfig:
    """Configuration for the roster composite rules.

    Attributes:
        tag_team_partners: Number of current partners a tag team needs to be
            bookable. Also the maximum number of current partners.
            Default: 2.
        stable_minimum_members: Current members a stable needs before it
            can be activated. Default: 3.
        enforce_single_stable: When True a wrestler or tag team may hold at
            most one current stable membership. Default: True.
    """

    tag_team_partners: int = 2
    stable_minimum_members: int = 3
    enforce_single_stable: bool = True

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.tag_team_partners < 2:
            raise ValueError(
                f"tag_team_partners must be at least 2, got {self.tag_team_partners}"
            )
        if self.stable_minimum_members < 1:
            raise ValueError(
                "stable_minimum_members must be positive, "
                f"got {self.stable_minimum_members}"
            )

    @classmethod
    def from_environment(cls) -> "RosterConfig":
        """Create config from environment variables with defaults.

        Returns:
            RosterConfig with values from environment or defaults.
        """
        return cls(
            tag_team_partners=_get_int_env("RINGSIDE_TAG_TEAM_PARTNERS", 2),
            stable_minimum_members=_get_int_env("RINGSIDE_STABLE_MINIMUM_MEMBERS", 3),
            enforce_single_stable=_get_bool_env("RINGSIDE_ENFORCE_SINGLE_STABLE", True),
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_ROSTER_CONFIG = RosterConfig()

# Testing config with a small stable minimum
TEST_ROSTER_CONFIG = RosterConfig(
    tag_team_partners=2,
    stable_minimum_members=2,
    enforce_single_stable=True,
)
