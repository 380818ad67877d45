"""Shared queries for records owned by one role and assigned to others (tasks, objectives)."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.persistence.repositories.base import BaseRepository, ModelType


class RoleScopedRepository(BaseRepository[ModelType]):
    """Base for models with owner_role_id and an assigned-role link table.

    Subclasses set link_model (the link ORM class) and link_key (name of the
    link column pointing at the owning record).
    """

    link_model: Any
    link_key: str

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        super().__init__(db, model)

    def _link_column(self) -> Any:
        return getattr(self.link_model, self.link_key)

    async def assigned_roles_for(self, record_ids: Iterable[str]) -> dict[str, list[str]]:
        ids = list(dict.fromkeys(record_ids))
        by_record: dict[str, list[str]] = defaultdict(list)
        if not ids:
            return by_record
        link_col = self._link_column()
        result = await self.db.execute(
            select(link_col, self.link_model.role_id).where(link_col.in_(ids))
        )
        for record_id, role_id in result.all():
            by_record[record_id].append(role_id)
        return by_record

    async def ids_visible_to(self, role_id: str) -> list[str]:
        """Ids of records owned by or assigned to role_id."""
        return await self.ids_touching_roles([role_id])

    async def ids_touching_roles(self, role_ids: Iterable[str]) -> list[str]:
        """Ids of records whose owner or any assigned role is in role_ids."""
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return []
        model: Any = self.model
        link_col = self._link_column()
        assigned = select(link_col).where(self.link_model.role_id.in_(ids))
        result = await self.db.execute(
            select(model.id).where(
                or_(model.owner_role_id.in_(ids), model.id.in_(assigned))
            )
        )
        return list(result.scalars().all())

    async def replace_assigned_roles(self, record_id: str, role_ids: Iterable[str]) -> None:
        link_col = self._link_column()
        await self.db.execute(delete(self.link_model).where(link_col == record_id))
        for role_id in dict.fromkeys(role_ids):
            self.db.add(self.link_model(**{self.link_key: record_id, "role_id": role_id}))
        await self.db.flush()

    async def delete_with_links(self, record_ids: Iterable[str]) -> int:
        """Delete link rows, then the records. Returns records deleted."""
        ids = list(dict.fromkeys(record_ids))
        if not ids:
            return 0
        await self.db.execute(
            delete(self.link_model).where(self._link_column().in_(ids))
        )
        return await self.delete_by_ids(ids)

    async def delete_touching_roles(self, role_ids: Iterable[str]) -> int:
        return await self.delete_with_links(await self.ids_touching_roles(role_ids))
