"""
Pytest configuration and shared fixtures for Ringside tests.

Testing Standards:
- The roster core is synchronous; tests call services directly
- Time-dependent tests use FakeTimeAuthority, frozen at 2024-12-31 UTC
- Unit tests go in tests/unit/ and run against the in-memory repository stub
- Integration tests go in tests/integration/ and also run on SQLite
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
import structlog

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.application.services.roster_lifecycle import RosterLifecycle
from ringside.bootstrap.roster import build_roster_lifecycle
from ringside.config import TEST_ROSTER_CONFIG, RosterConfig
from ringside.infrastructure.stubs import RosterRepositoryStub
from tests.helpers import FakeTimeAuthority, utc
from tests.helpers.roster_builder import RosterBuilder


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from ringside import __version__

    return __version__


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Undo any structlog configuration a test applies."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_time_authority() -> FakeTimeAuthority:
    """Clock frozen at 2024-12-31 UTC, after every scenario date."""
    return FakeTimeAuthority(frozen_at=utc(2024, 12, 31))


@pytest.fixture
def config() -> RosterConfig:
    return TEST_ROSTER_CONFIG


@pytest.fixture
def repository() -> RosterRepositoryProtocol:
    return RosterRepositoryStub()


@pytest.fixture
def lifecycle(
    repository: RosterRepositoryProtocol,
    fake_time_authority: FakeTimeAuthority,
    config: RosterConfig,
) -> RosterLifecycle:
    return build_roster_lifecycle(repository, fake_time_authority, config)


@pytest.fixture
def roster(lifecycle: RosterLifecycle) -> RosterBuilder:
    return RosterBuilder(lifecycle)
