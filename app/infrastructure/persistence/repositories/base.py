"""Base repository: generic CRUD and lifecycle hooks (activity log, cache invalidation)."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_many, create, save, delete and hooks.

    Subclasses override _on_after_create, _on_after_update, _on_before_delete
    to emit activity log entries. LSP: subclasses are substitutable for BaseRepository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None.

        populate_existing refreshes an instance already in the identity map,
        so a re-read sees writes made through Core UPDATE statements.
        """
        model: Any = self.model
        result = await self.db.execute(
            select(self.model)
            .where(model.id == entity_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_many(self, entity_ids: Iterable[str]) -> list[ModelType]:
        """Return records whose id is in entity_ids (order not guaranteed)."""
        ids = list(dict.fromkeys(entity_ids))
        if not ids:
            return []
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id.in_(ids)))
        return list(result.scalars().all())

    async def create(self, obj: ModelType) -> ModelType:
        """Persist a new record and run _on_after_create hook."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_create(obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush changes to an attached record and run _on_after_update hook."""
        await self.db.flush()
        await self.db.refresh(obj)
        await self._on_after_update(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Run _on_before_delete hook then delete the record."""
        await self._on_before_delete(obj)
        await self.db.delete(obj)
        await self.db.flush()

    async def _on_after_create(self, obj: ModelType) -> None:
        """Override in subclasses to emit activity or invalidate caches."""

    async def _on_after_update(self, obj: ModelType) -> None:
        """Override in subclasses to emit activity or invalidate caches."""

    async def _on_before_delete(self, obj: ModelType) -> None:
        """Override in subclasses to emit activity or invalidate caches."""
