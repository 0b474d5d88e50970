"""System time authority.

The one production module allowed to read the wall clock. Everything else
receives a TimeAuthorityProtocol by injection.
"""

from datetime import datetime, timezone

from ringside.application.ports.time_authority import TimeAuthorityProtocol


class SystemTimeAuthority(TimeAuthorityProtocol):
    """Time authority backed by the system clock. Always returns UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)
