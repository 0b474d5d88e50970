"""In-memory stub implementations of the application ports."""

from ringside.infrastructure.stubs.roster_repository_stub import RosterRepositoryStub

__all__ = ["RosterRepositoryStub"]
