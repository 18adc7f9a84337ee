"""Base ORM classes for SQLAlchemy models."""

from __future__ import annotations

import datetime

from sqlalchemy import Integer
from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from .types import UTCDateTime


def utcnow() -> datetime.datetime:
    """Return the current UTC time with microsecond resolution."""
    return datetime.datetime.now(datetime.timezone.utc)


class Base(AsyncAttrs, DeclarativeBase):
    """Root declarative base with async support."""


class Entity(Base):
    """Abstract ORM entity with an engine-assigned integer id and audit timestamps.

    ``updated_at`` is refreshed by the column ``onupdate`` hook, which fires for
    ORM flushes and Core ``update()`` statements alike.
    """

    __abstract__ = True

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime.datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False)
    updated_at: Mapped[datetime.datetime] = mapped_column(
        UTCDateTime(), default=utcnow, onupdate=utcnow, nullable=False
    )
