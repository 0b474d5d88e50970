"""Ports consumed by the application services."""

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.ports.time_authority import TimeAuthorityProtocol

__all__ = ["RosterRepositoryProtocol", "TimeAuthorityProtocol"]
