"""Time Authority Protocol - interface for consistent timestamp provisioning.

All services that need timestamps inject a TimeAuthorityProtocol
implementation instead of reading the system clock. Defaulted
effective dates and status projections both come from here.

For production:
    Use SystemTimeAuthority from ringside/application/services/

For testing:
    Use FakeTimeAuthority from tests/helpers/fake_time_authority.py
"""

from abc import ABC, abstractmethod
from datetime import datetime


class TimeAuthorityProtocol(ABC):
    """Abstract interface for time authority.

    Example usage:
        class RosterRegistry:
            def __init__(self, time_authority: TimeAuthorityProtocol) -> None:
                self._time = time_authority

            def register(self, family: RosterFamily, name: str) -> RosterEntity:
                return RosterEntity.register(family, name, self._time.now())
    """

    @abstractmethod
    def now(self) -> datetime:
        """Return current time with timezone awareness.

        Returns:
            Current datetime with timezone information (UTC).
        """
        ...
