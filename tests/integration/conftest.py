"""
Integration fixtures: every scenario runs on both roster repositories.

The SQLAlchemy repository runs on in-memory SQLite, one fresh database per
test. Row locks are not available there; the version check and the
partial unique indexes still reject conflicting writes.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy.orm import sessionmaker

from ringside.application.ports.roster_repository import RosterRepositoryProtocol
from ringside.bootstrap.database import create_roster_engine, create_schema
from ringside.infrastructure.persistence.roster_repository import (
    SqlAlchemyRosterRepository,
)
from ringside.infrastructure.stubs import RosterRepositoryStub


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if "tests/integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)


@pytest.fixture(params=["stub", "sqlalchemy"])
def repository(request: pytest.FixtureRequest) -> Iterator[RosterRepositoryProtocol]:
    if request.param == "stub":
        yield RosterRepositoryStub()
        return

    engine = create_roster_engine("sqlite://")
    create_schema(engine)
    try:
        yield SqlAlchemyRosterRepository(
            sessionmaker(bind=engine, expire_on_commit=False)
        )
    finally:
        engine.dispose()
