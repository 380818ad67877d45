"""Department repository. Role lists are derived from Role.department_id."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.company import DepartmentResult
from app.infrastructure.persistence.models.company import Department
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _department_to_result(d: Department, role_ids: Iterable[str] = ()) -> DepartmentResult:
    return DepartmentResult(
        id=d.id,
        company_id=d.company_id,
        name=d.name,
        roles=tuple(role_ids),
        created_at=ensure_utc(d.created_at),
        updated_at=ensure_utc(d.updated_at),
    )


class DepartmentRepository(BaseRepository[Department]):
    """Department CRUD scoped by company."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def _role_ids_by_department(
        self, department_ids: Iterable[str]
    ) -> dict[str, list[str]]:
        ids = list(department_ids)
        by_department: dict[str, list[str]] = defaultdict(list)
        if not ids:
            return by_department
        result = await self.db.execute(
            select(Role.department_id, Role.id)
            .where(Role.department_id.in_(ids))
            .order_by(Role.created_at, Role.id)
        )
        for department_id, role_id in result.all():
            by_department[department_id].append(role_id)
        return by_department

    async def get_result(self, department_id: str) -> DepartmentResult | None:
        department = await self.get_by_id(department_id)
        if not department:
            return None
        roles = await self._role_ids_by_department([department.id])
        return _department_to_result(department, roles[department.id])

    async def get_in_company(
        self, company_id: str, department_id: str
    ) -> DepartmentResult | None:
        result = await self.get_result(department_id)
        if result is None or result.company_id != company_id:
            return None
        return result

    async def list_for_company(self, company_id: str) -> list[DepartmentResult]:
        result = await self.db.execute(
            select(Department)
            .where(Department.company_id == company_id)
            .order_by(Department.created_at, Department.id)
        )
        departments = list(result.scalars().all())
        roles = await self._role_ids_by_department(d.id for d in departments)
        return [_department_to_result(d, roles[d.id]) for d in departments]

    async def ids_for_company(self, company_id: str) -> list[str]:
        result = await self.db.execute(
            select(Department.id).where(Department.company_id == company_id)
        )
        return list(result.scalars().all())

    async def create_department(self, company_id: str, name: str) -> DepartmentResult:
        created = await self.create(Department(company_id=company_id, name=name))
        return _department_to_result(created)

    async def rename(self, department_id: str, name: str) -> bool:
        department = await self.get_by_id(department_id)
        if not department:
            return False
        department.name = name
        await self.update(department)
        return True
