"""Todo schemas for request bodies, responses, filters and sorting."""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, field_validator
from pydantic_core.core_schema import ValidationInfo

from todokit.core.schemas import CamelModel, EntityIn, EntityOut

from .models import Priority


class TodoIn(EntityIn):
    """Input schema for creating a task."""

    title: str = Field(min_length=1, description="Task title")
    description: str = Field(default="", description="Free-form details")
    completed: bool = Field(default=False, description="Completion flag")
    priority: Priority = Field(default=Priority.MEDIUM, description="Task priority")

    @field_validator("description", "completed", "priority", mode="before")
    @classmethod
    def null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        """Treat explicit nulls on optional fields as omitted."""
        if value is None:
            return cls.model_fields[info.field_name].default
        return value


class TodoUpdate(CamelModel):
    """Partial update; only fields present in the body are applied."""

    title: str | None = None
    description: str | None = None
    completed: bool | None = None
    priority: Priority | None = None

    def changes(self) -> dict[str, Any]:
        """Return the supplied fields that carry a value to write."""
        values: dict[str, Any] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "title":
                values[name] = value
            elif name == "description":
                values[name] = value if value is not None else ""
            elif value is not None:
                values[name] = value
        return values


class TodoStatusUpdate(CamelModel):
    """Body of the status toggle operation."""

    completed: bool | None = None


class TodoBulkDelete(CamelModel):
    """Body of the bulk delete operation."""

    ids: list[int] = Field(min_length=1, description="Ids of the tasks to delete")


class TodoOut(EntityOut):
    """Output schema for task entities."""

    title: str
    description: str
    completed: bool
    priority: Priority


class SortField(StrEnum):
    """Fields a task list can be ordered by."""

    TITLE = "title"
    PRIORITY = "priority"
    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"


class SortDirection(StrEnum):
    """Ordering direction."""

    ASC = "asc"
    DESC = "desc"


class TodoFilter(BaseModel):
    """Conjunctive set of optional predicates; None means unconstrained."""

    completed: bool | None = None
    priority: Priority | None = None
    search: str | None = None

    @field_validator("completed", "priority", mode="before")
    @classmethod
    def empty_value_is_none(cls, value: Any) -> Any:
        """An empty query value (``?priority=``) does not constrain the list."""
        return None if value == "" else value

    @field_validator("search")
    @classmethod
    def empty_search_is_none(cls, value: str | None) -> str | None:
        """An empty search string does not constrain the list."""
        return value or None


class TodoSort(BaseModel):
    """Validated (field, direction) pair."""

    field: SortField = SortField.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    @classmethod
    def parse(cls, field: str | None, direction: str | None) -> Self:
        """Build a sort order, falling back to createdAt/desc for unknown values."""
        try:
            sort_field = SortField(field) if field is not None else SortField.CREATED_AT
        except ValueError:
            sort_field = SortField.CREATED_AT
        try:
            sort_direction = SortDirection(direction) if direction is not None else SortDirection.DESC
        except ValueError:
            sort_direction = SortDirection.DESC
        return cls(field=sort_field, direction=sort_direction)

    def toggled(self, field: SortField) -> TodoSort:
        """Flip direction when re-selecting the active field; a new field starts descending."""
        if field == self.field:
            direction = SortDirection.ASC if self.direction == SortDirection.DESC else SortDirection.DESC
            return TodoSort(field=field, direction=direction)
        return TodoSort(field=field, direction=SortDirection.DESC)
