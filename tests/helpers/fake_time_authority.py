"""FakeTimeAuthority - Controllable time authority for deterministic tests.

Effective dates default to the time authority's now, and every status is
projected as of now, so roster tests pin the clock instead of reading the
system time.

Usage Patterns:
--------------

1. Frozen Time Pattern:
    Tests that need a specific point in time.

    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2024, 12, 31, tzinfo=timezone.utc))
    >>> ledger = PeriodLedger(repository, fake_time)
    >>> assert fake_time.now() == datetime(2024, 12, 31, tzinfo=timezone.utc)

2. Time Advancement Pattern:
    Tests that need to simulate time passing, e.g. a future employment
    start being reached.

    >>> fake_time = FakeTimeAuthority(frozen_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
    >>> fake_time.advance(delta=timedelta(days=30))
    >>> assert fake_time.now() == datetime(2024, 1, 31, tzinfo=timezone.utc)

3. Pytest Fixture Pattern:
    Use the `fake_time_authority` fixture from conftest.py.

    def test_future_employment_becomes_current(lifecycle, fake_time_authority):
        lifecycle.wrestlers.employ(wrestler_id, fake_time_authority.now() + timedelta(days=7))
        fake_time_authority.advance(delta=timedelta(days=8))
        assert lifecycle.refresh_status(ref).status == EmploymentStatus.EMPLOYED
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from ringside.application.ports.time_authority import TimeAuthorityProtocol

DEFAULT_FROZEN_AT = datetime(2024, 12, 31, 0, 0, 0, tzinfo=timezone.utc)


def _as_utc(dt: datetime) -> datetime:
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthorityProtocol):
    """Controllable time authority for deterministic tests.

    This implementation allows tests to:
    - Freeze time at a specific point
    - Advance time by a specified amount
    - Set time to an arbitrary value

    Attributes:
        _current_time: The controlled current time.
    """

    def __init__(self, frozen_at: datetime | None = None) -> None:
        """Initialize the fake time authority.

        Args:
            frozen_at: Optional datetime to freeze time at. Defaults to
                2024-12-31T00:00:00 UTC. Naive values are taken as UTC.
        """
        self._current_time: datetime = _as_utc(frozen_at or DEFAULT_FROZEN_AT)

    # =========================================================================
    # TimeAuthorityProtocol Implementation
    # =========================================================================

    def now(self) -> datetime:
        """Return the controlled current time (UTC)."""
        return self._current_time

    # =========================================================================
    # Test Control Methods
    # =========================================================================

    def advance(
        self,
        seconds: float | int | None = None,
        delta: timedelta | None = None,
    ) -> None:
        """Advance time by the specified amount.

        Args:
            seconds: Number of seconds to advance (int or float).
            delta: A timedelta to advance by. Takes precedence over seconds.

        Raises:
            ValueError: If neither seconds nor delta is provided.
            ValueError: If attempting to advance by negative time.
        """
        if delta is None:
            if seconds is None:
                raise ValueError("Must provide either 'seconds' or 'delta' argument")
            delta = timedelta(seconds=seconds)

        if delta < timedelta(0):
            raise ValueError(
                f"Cannot advance time backwards. Got {delta.total_seconds()} seconds. "
                "Use set_time() for explicit time changes."
            )

        self._current_time += delta

    def set_time(self, dt: datetime) -> None:
        """Set the current time to an explicit value. Naive values are taken as UTC."""
        self._current_time = _as_utc(dt)

    def reset(self, to: datetime | None = None) -> None:
        """Reset time to a specific point or the default."""
        self._current_time = _as_utc(to or DEFAULT_FROZEN_AT)

    @property
    def current_time(self) -> datetime:
        return self._current_time

    def __repr__(self) -> str:
        return f"FakeTimeAuthority(current_time={self._current_time.isoformat()})"
