"""Role repository: roles plus the supervision edge table."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from typing import Any

from sqlalchemy import delete, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.infrastructure.persistence.models.company import Department
from app.infrastructure.persistence.models.role import Role, RoleSupervision
from app.infrastructure.persistence.models.user import CompanyRole
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc

# Scalar columns a role update may set directly.
ROLE_SCALAR_FIELDS = (
    "user_id",
    "hierarchy_level",
    "job_title",
    "job_description",
    "permissions",
)


class RoleRepository(BaseRepository[Role]):
    """Role CRUD, level lookups and supervision edges.

    One RoleSupervision row is both supervisor.supervises and
    supervised.supervised_by.
    """

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Role)

    async def _to_results(self, roles: list[Role]) -> list[RoleResult]:
        """Attach supervision edges and occupant users to each role (batched)."""
        ids = [r.id for r in roles]
        supervises: dict[str, list[str]] = defaultdict(list)
        supervised_by: dict[str, list[str]] = defaultdict(list)
        users: dict[str, list[str]] = defaultdict(list)
        if ids:
            edges = await self.db.execute(
                select(RoleSupervision.supervisor_role_id, RoleSupervision.supervised_role_id)
                .where(
                    or_(
                        RoleSupervision.supervisor_role_id.in_(ids),
                        RoleSupervision.supervised_role_id.in_(ids),
                    )
                )
                .order_by(RoleSupervision.created_at)
            )
            for supervisor, supervised in edges.all():
                supervises[supervisor].append(supervised)
                supervised_by[supervised].append(supervisor)
            holders = await self.db.execute(
                select(CompanyRole.role_id, CompanyRole.user_id)
                .where(CompanyRole.role_id.in_(ids))
                .order_by(CompanyRole.created_at, CompanyRole.id)
            )
            for role_id, user_id in holders.all():
                if user_id not in users[role_id]:
                    users[role_id].append(user_id)
        return [
            RoleResult(
                id=r.id,
                department_id=r.department_id,
                user_id=r.user_id,
                hierarchy_level=r.hierarchy_level,
                job_title=r.job_title,
                job_description=r.job_description,
                permissions=list(r.permissions or []),
                supervises=tuple(supervises[r.id]),
                supervised_by=tuple(supervised_by[r.id]),
                users=tuple(users[r.id]),
                created_at=ensure_utc(r.created_at),
                updated_at=ensure_utc(r.updated_at),
            )
            for r in roles
        ]

    async def get_result(self, role_id: str) -> RoleResult | None:
        role = await self.get_by_id(role_id)
        if not role:
            return None
        return (await self._to_results([role]))[0]

    async def get_in_department(self, department_id: str, role_id: str) -> Role | None:
        result = await self.db.execute(
            select(Role).where(Role.id == role_id, Role.department_id == department_id)
        )
        return result.scalar_one_or_none()

    async def list_for_department(self, department_id: str) -> list[RoleResult]:
        result = await self.db.execute(
            select(Role)
            .where(Role.department_id == department_id)
            .order_by(Role.created_at, Role.id)
        )
        return await self._to_results(list(result.scalars().all()))

    async def levels_for(self, role_ids: Iterable[str]) -> dict[str, str]:
        """Map role id -> hierarchy level for the roles that exist."""
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return {}
        result = await self.db.execute(
            select(Role.id, Role.hierarchy_level).where(Role.id.in_(ids))
        )
        return {role_id: level for role_id, level in result.all()}

    async def existing_ids(self, role_ids: Iterable[str]) -> set[str]:
        return set(await self.levels_for(role_ids))

    async def ids_in_company(self, role_ids: Iterable[str], company_id: str) -> set[str]:
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return set()
        # Roles of a deleted department are matched through their memberships.
        membership = (
            select(CompanyRole.id)
            .where(CompanyRole.role_id == Role.id, CompanyRole.company_id == company_id)
            .exists()
        )
        result = await self.db.execute(
            select(Role.id)
            .outerjoin(Department, Department.id == Role.department_id)
            .where(
                Role.id.in_(ids),
                or_(Department.company_id == company_id, membership),
            )
        )
        return set(result.scalars().all())

    async def ids_for_departments(self, department_ids: Iterable[str]) -> list[str]:
        ids = list(dict.fromkeys(department_ids))
        if not ids:
            return []
        result = await self.db.execute(select(Role.id).where(Role.department_id.in_(ids)))
        return list(result.scalars().all())

    async def create_role(self, department_id: str, fields: dict[str, Any]) -> Role:
        role = Role(department_id=department_id)
        for key in ROLE_SCALAR_FIELDS:
            if key in fields:
                setattr(role, key, fields[key])
        return await self.create(role)

    async def apply_fields(self, role: Role, fields: dict[str, Any]) -> Role:
        for key in ROLE_SCALAR_FIELDS:
            if key in fields:
                setattr(role, key, fields[key])
        return await self.update(role)

    async def move_to_department(self, role_ids: Iterable[str], department_id: str) -> int:
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return 0
        result = await self.db.execute(
            update(Role).where(Role.id.in_(ids)).values(department_id=department_id)
        )
        return result.rowcount or 0

    # Supervision edges

    async def supervised_ids(self, role_id: str) -> set[str]:
        """Ids of roles that role_id supervises."""
        result = await self.db.execute(
            select(RoleSupervision.supervised_role_id).where(
                RoleSupervision.supervisor_role_id == role_id
            )
        )
        return set(result.scalars().all())

    async def supervisor_ids(self, role_id: str) -> set[str]:
        """Ids of roles that supervise role_id."""
        result = await self.db.execute(
            select(RoleSupervision.supervisor_role_id).where(
                RoleSupervision.supervised_role_id == role_id
            )
        )
        return set(result.scalars().all())

    async def add_supervision(self, supervisor_id: str, supervised_id: str) -> bool:
        """Add the edge if absent. Returns True when a row was inserted."""
        existing = await self.db.execute(
            select(RoleSupervision.supervisor_role_id).where(
                RoleSupervision.supervisor_role_id == supervisor_id,
                RoleSupervision.supervised_role_id == supervised_id,
            )
        )
        if existing.first() is not None:
            return False
        self.db.add(
            RoleSupervision(
                supervisor_role_id=supervisor_id, supervised_role_id=supervised_id
            )
        )
        await self.db.flush()
        return True

    async def remove_supervision(self, supervisor_id: str, supervised_id: str) -> int:
        result = await self.db.execute(
            delete(RoleSupervision).where(
                RoleSupervision.supervisor_role_id == supervisor_id,
                RoleSupervision.supervised_role_id == supervised_id,
            )
        )
        return result.rowcount or 0

    async def delete_roles(self, role_ids: Iterable[str]) -> int:
        """Delete roles and every supervision edge touching them."""
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return 0
        await self.db.execute(
            delete(RoleSupervision).where(
                or_(
                    RoleSupervision.supervisor_role_id.in_(ids),
                    RoleSupervision.supervised_role_id.in_(ids),
                )
            )
        )
        return await self.delete_by_ids(ids)
