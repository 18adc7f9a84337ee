"""Todo ORM model."""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from todokit.core.models import Entity


class Priority(StrEnum):
    """Task priority levels, lowest first."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Todo(Entity):
    """ORM model for a single task."""

    __tablename__ = "todos"
    # AUTOINCREMENT keeps SQLite from reusing ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    title: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    priority: Mapped[Priority] = mapped_column(
        Enum(
            Priority,
            name="todo_priority",
            native_enum=False,
            create_constraint=True,
            length=16,
            values_callable=lambda members: [m.value for m in members],
        ),
        nullable=False,
        default=Priority.MEDIUM,
    )
