"""Base Pydantic schemas for entity input and output."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema serialized with camelCase keys and accepting either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EntityIn(CamelModel):
    """Base input schema for entities."""


class EntityOut(CamelModel):
    """Base output schema for entities with id and timestamps."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime
