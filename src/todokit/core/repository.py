"""Base repository classes for data access layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Iterable, Sequence, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import Entity

T = TypeVar("T")
IdT = TypeVar("IdT")
EntityT = TypeVar("EntityT", bound=Entity)


class Repository(ABC, Generic[T, IdT]):
    """Abstract repository interface for data access operations."""

    @abstractmethod
    async def save(self, entity: T) -> T:
        """Save an entity to the database."""
        ...

    @abstractmethod
    async def save_all(self, entities: Iterable[T]) -> Sequence[T]:
        """Save multiple entities to the database."""
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Commit the current database transaction."""
        ...

    @abstractmethod
    async def refresh_many(self, entities: Iterable[T]) -> None:
        """Refresh multiple entities from the database."""
        ...

    @abstractmethod
    async def find_all(self) -> Sequence[T]:
        """Find all entities."""
        ...

    @abstractmethod
    async def find_by_id(self, id: IdT) -> T | None:
        """Find an entity by its ID."""
        ...

    @abstractmethod
    async def exists_by_id(self, id: IdT) -> bool:
        """Check if an entity exists by its ID."""
        ...

    @abstractmethod
    async def delete_by_id(self, id: IdT) -> None:
        """Delete an entity by its ID."""
        ...

    @abstractmethod
    async def delete_all_by_id(self, ids: Sequence[IdT]) -> int:
        """Delete multiple entities by their IDs, returning the number of rows removed."""
        ...

    @abstractmethod
    async def count(self) -> int:
        """Count the number of entities."""
        ...


class BaseRepository(Repository[EntityT, int]):
    """Base repository implementation with common CRUD operations."""

    def __init__(self, session: AsyncSession, model: type[EntityT]) -> None:
        """Initialize repository with database session and model type."""
        self.s = session
        self.model = model

    async def save(self, entity: EntityT) -> EntityT:
        """Save an entity to the database."""
        self.s.add(entity)
        return entity

    async def save_all(self, entities: Iterable[EntityT]) -> Sequence[EntityT]:
        """Save multiple entities to the database."""
        entity_list = list(entities)
        self.s.add_all(entity_list)
        return entity_list

    async def commit(self) -> None:
        """Commit the current database transaction."""
        await self.s.commit()

    async def refresh_many(self, entities: Iterable[EntityT]) -> None:
        """Refresh multiple entities from the database."""
        for entity in entities:
            await self.s.refresh(entity)

    async def find_all(self) -> Sequence[EntityT]:
        """Find all entities."""
        result = await self.s.scalars(select(self.model))
        return result.all()

    async def find_by_id(self, id: int) -> EntityT | None:
        """Find an entity by its ID."""
        return await self.s.get(self.model, id)

    async def exists_by_id(self, id: int) -> bool:
        """Check if an entity exists by its ID."""
        result = await self.s.scalar(select(select(self.model.id).where(self.model.id == id).exists()))
        return bool(result)

    async def delete_by_id(self, id: int) -> None:
        """Delete an entity by its ID."""
        entity = await self.s.get(self.model, id)
        if entity is not None:
            await self.s.delete(entity)

    async def delete_all_by_id(self, ids: Sequence[int]) -> int:
        """Delete multiple entities by their IDs in a single statement."""
        if not ids:
            return 0
        result = await self.s.execute(delete(self.model).where(self.model.id.in_(ids)))
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def count(self) -> int:
        """Count the number of entities."""
        result = await self.s.scalar(select(func.count()).select_from(self.model))
        return result or 0
