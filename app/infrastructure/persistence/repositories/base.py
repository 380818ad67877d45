"""Base repository: generic get/create/update/delete on one model."""

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get_by_id, get_many, create, update and delete.

    Subclasses add domain queries and map rows to application DTOs.
    LSP: subclasses are substitutable for BaseRepository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_by_id(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
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
        """Persist a new record (flush + refresh so server defaults are loaded)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached record and reload it."""
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def delete(self, obj: ModelType) -> None:
        """Delete the record."""
        await self.db.delete(obj)
        await self.db.flush()

    async def delete_by_ids(self, entity_ids: Iterable[str]) -> int:
        """Bulk delete by primary key. Returns number of rows deleted."""
        ids = list(dict.fromkeys(entity_ids))
        if not ids:
            return 0
        model: Any = self.model
        result = await self.db.execute(delete(self.model).where(model.id.in_(ids)))
        return result.rowcount or 0
