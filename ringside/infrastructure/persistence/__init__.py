"""Relational persistence for the roster through SQLAlchemy."""

from ringside.infrastructure.persistence.models import Base
from ringside.infrastructure.persistence.roster_repository import (
    SqlAlchemyRosterRepository,
)

__all__ = ["Base", "SqlAlchemyRosterRepository"]
