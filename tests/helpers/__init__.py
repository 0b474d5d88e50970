"""Test helpers for Ringside tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeTimeAuthority: Controllable time authority for deterministic tests
    RosterBuilder: Shortcuts for registering entities in a known state
    utc: Shorthand for a timezone-aware UTC datetime

Usage:
    from tests.helpers import FakeTimeAuthority, utc
"""

from datetime import datetime, timezone

from tests.helpers.fake_time_authority import FakeTimeAuthority
from tests.helpers.roster_builder import RosterBuilder


def utc(year: int, month: int, day: int, hour: int = 0) -> datetime:
    """Timezone-aware UTC datetime."""
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


__all__ = ["FakeTimeAuthority", "RosterBuilder", "utc"]
