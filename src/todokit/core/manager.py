"""Base classes for service layer managers with lifecycle hooks."""

from __future__ import annotations

from typing import Generic, Sequence, TypeVar

from pydantic import BaseModel

from .models import Entity
from .repository import BaseRepository

ModelT = TypeVar("ModelT", bound=Entity)
InSchemaT = TypeVar("InSchemaT", bound=BaseModel)
OutSchemaT = TypeVar("OutSchemaT", bound=BaseModel)


class BaseManager(Generic[ModelT, InSchemaT, OutSchemaT]):
    """Base manager translating between input schemas, ORM entities and output schemas."""

    def __init__(
        self,
        repo: BaseRepository[ModelT],
        model_cls: type[ModelT],
        out_schema_cls: type[OutSchemaT],
    ) -> None:
        """Initialize manager with repository, model class, and output schema class."""
        self.repo = repo
        self.model_cls = model_cls
        self.out_schema_cls = out_schema_cls

    def _to_output_schema(self, entity: ModelT) -> OutSchemaT:
        """Convert ORM entity to output schema."""
        return self.out_schema_cls.model_validate(entity, from_attributes=True)

    # Lifecycle hooks - override in subclasses

    def _before_save(self, entity: ModelT, data: InSchemaT) -> None:
        """Hook called before a new entity is added to the session."""
        pass

    def _after_save(self, entity: ModelT) -> None:
        """Hook called after an entity has been committed and refreshed."""
        pass

    async def save(self, data: InSchemaT) -> OutSchemaT:
        """Create an entity from input data and return its output schema."""
        entity = self.model_cls(**data.model_dump())
        self._before_save(entity, data)
        await self.repo.save(entity)
        await self.repo.commit()
        await self.repo.refresh_many([entity])
        self._after_save(entity)
        return self._to_output_schema(entity)

    async def save_all(self, items: Sequence[InSchemaT]) -> list[OutSchemaT]:
        """Create several entities in one transaction."""
        entities = [self.model_cls(**item.model_dump()) for item in items]
        for entity, item in zip(entities, items):
            self._before_save(entity, item)
        await self.repo.save_all(entities)
        await self.repo.commit()
        await self.repo.refresh_many(entities)
        for entity in entities:
            self._after_save(entity)
        return [self._to_output_schema(entity) for entity in entities]

    async def find_all(self) -> list[OutSchemaT]:
        """Find all entities."""
        entities = await self.repo.find_all()
        return [self._to_output_schema(entity) for entity in entities]

    async def find_by_id(self, id: int) -> OutSchemaT | None:
        """Find an entity by id."""
        entity = await self.repo.find_by_id(id)
        if entity is None:
            return None
        return self._to_output_schema(entity)

    async def exists_by_id(self, id: int) -> bool:
        """Check if an entity exists by id."""
        return await self.repo.exists_by_id(id)

    async def delete_by_id(self, id: int) -> None:
        """Delete an entity by id."""
        await self.repo.delete_by_id(id)
        await self.repo.commit()

    async def delete_all_by_id(self, ids: Sequence[int]) -> int:
        """Delete several entities by id in one transaction."""
        deleted = await self.repo.delete_all_by_id(ids)
        await self.repo.commit()
        return deleted

    async def count(self) -> int:
        """Count entities."""
        return await self.repo.count()
