"""CompanyRole repository: user memberships in companies through roles."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import CompanyRoleResult
from app.infrastructure.persistence.models.user import CompanyRole
from app.infrastructure.persistence.repositories.base import BaseRepository


def _membership_to_result(m: CompanyRole) -> CompanyRoleResult:
    return CompanyRoleResult(
        company_id=m.company_id,
        department_id=m.department_id,
        role_id=m.role_id,
    )


class CompanyRoleRepository(BaseRepository[CompanyRole]):
    """Membership rows only. Add/remove and list memberships per user or role."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, CompanyRole)

    async def list_for_user(self, user_id: str) -> list[CompanyRoleResult]:
        """Memberships of a user in insertion order."""
        result = await self.db.execute(
            select(CompanyRole)
            .where(CompanyRole.user_id == user_id)
            .order_by(CompanyRole.created_at, CompanyRole.id)
        )
        return [_membership_to_result(m) for m in result.scalars().all()]

    async def has_membership(self, user_id: str, role_id: str) -> bool:
        result = await self.db.execute(
            select(CompanyRole.id).where(
                CompanyRole.user_id == user_id, CompanyRole.role_id == role_id
            )
        )
        return result.first() is not None

    async def add(
        self,
        user_id: str,
        company_id: str,
        department_id: str | None,
        role_id: str,
    ) -> CompanyRoleResult:
        created = await self.create(
            CompanyRole(
                user_id=user_id,
                company_id=company_id,
                department_id=department_id,
                role_id=role_id,
            )
        )
        return _membership_to_result(created)

    async def user_ids_for_roles(self, role_ids: Iterable[str]) -> dict[str, list[str]]:
        """Map role_id -> user ids holding it (in membership order)."""
        ids = list(dict.fromkeys(role_ids))
        by_role: dict[str, list[str]] = defaultdict(list)
        if not ids:
            return by_role
        result = await self.db.execute(
            select(CompanyRole.role_id, CompanyRole.user_id)
            .where(CompanyRole.role_id.in_(ids))
            .order_by(CompanyRole.created_at, CompanyRole.id)
        )
        for role_id, user_id in result.all():
            if user_id not in by_role[role_id]:
                by_role[role_id].append(user_id)
        return by_role

    async def remove_for_role(
        self, role_id: str, user_ids: Iterable[str] | None = None
    ) -> int:
        """Remove entries referencing role_id (optionally only for the given users)."""
        stmt = delete(CompanyRole).where(CompanyRole.role_id == role_id)
        if user_ids is not None:
            ids = list(user_ids)
            if not ids:
                return 0
            stmt = stmt.where(CompanyRole.user_id.in_(ids))
        result = await self.db.execute(stmt)
        return result.rowcount or 0

    async def remove_for_user_in_company(self, user_id: str, company_id: str) -> int:
        result = await self.db.execute(
            delete(CompanyRole).where(
                CompanyRole.user_id == user_id, CompanyRole.company_id == company_id
            )
        )
        return result.rowcount or 0

    async def remove_for_user(self, user_id: str) -> int:
        result = await self.db.execute(
            delete(CompanyRole).where(CompanyRole.user_id == user_id)
        )
        return result.rowcount or 0

    async def set_department_for_roles(
        self, role_ids: Iterable[str], department_id: str | None
    ) -> int:
        """Set (or unset, with None) department_id on every entry for these roles."""
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return 0
        result = await self.db.execute(
            update(CompanyRole)
            .where(CompanyRole.role_id.in_(ids))
            .values(department_id=department_id)
        )
        return result.rowcount or 0
