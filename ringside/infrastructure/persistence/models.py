"""SQLAlchemy table mappings for the roster.

Storage-level guarantees, enforced with partial unique indexes:
    - one open period per (owner, kind)
    - one current reign per title
    - one current membership per (kind, group, member)
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Index, Integer, String, Uuid, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ringside.infrastructure.persistence.types import UTCDateTime


class Base(DeclarativeBase):
    """Declarative base for roster tables."""


class RosterEntityRow(Base):
    __tablename__ = "roster_entities"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    family: Mapped[str] = mapped_column(String(16), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(32), nullable=False)
    created_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    deleted_at: Mapped[datetime | None] = mapped_column(UTCDateTime)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class PeriodRow(Base):
    __tablename__ = "periods"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    owner_family: Mapped[str] = mapped_column(String(16), nullable=False)
    owner_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    kind: Mapped[str] = mapped_column(String(16), nullable=False)
    started_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    ended_at: Mapped[datetime | None] = mapped_column(UTCDateTime)

    __table_args__ = (
        Index("ix_periods_owner", "owner_family", "owner_id", "kind"),
        Index(
            "uq_periods_one_open",
            "owner_family",
            "owner_id",
            "kind",
            unique=True,
            sqlite_where=text("ended_at IS NULL"),
            postgresql_where=text("ended_at IS NULL"),
        ),
    )


class MembershipRow(Base):
    __tablename__ = "memberships"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    kind: Mapped[str] = mapped_column(String(24), nullable=False)
    group_family: Mapped[str] = mapped_column(String(16), nullable=False)
    group_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    member_family: Mapped[str] = mapped_column(String(16), nullable=False)
    member_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    joined_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    left_at: Mapped[datetime | None] = mapped_column(UTCDateTime)

    __table_args__ = (
        Index("ix_memberships_group", "kind", "group_id"),
        Index("ix_memberships_member", "kind", "member_id"),
        Index(
            "uq_memberships_one_current",
            "kind",
            "group_id",
            "member_id",
            unique=True,
            sqlite_where=text("left_at IS NULL"),
            postgresql_where=text("left_at IS NULL"),
        ),
    )


class ChampionshipRow(Base):
    __tablename__ = "title_championships"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    title_id: Mapped[UUID] = mapped_column(Uuid, nullable=False, index=True)
    champion_family: Mapped[str] = mapped_column(String(16), nullable=False)
    champion_id: Mapped[UUID] = mapped_column(Uuid, nullable=False)
    won_at: Mapped[datetime] = mapped_column(UTCDateTime, nullable=False)
    lost_at: Mapped[datetime | None] = mapped_column(UTCDateTime)

    __table_args__ = (
        Index("ix_title_championships_champion", "champion_family", "champion_id"),
        Index(
            "uq_title_championships_one_current",
            "title_id",
            unique=True,
            sqlite_where=text("lost_at IS NULL"),
            postgresql_where=text("lost_at IS NULL"),
        ),
    )
