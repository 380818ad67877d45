"""Company repository, including the denormalized department list."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.company import CompanyResult
from app.domain.enums import SubscriptionPlan
from app.infrastructure.persistence.models.company import Company
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils.datetime import ensure_utc


def _company_to_result(c: Company) -> CompanyResult:
    return CompanyResult(
        id=c.id,
        name=c.name,
        subscription_plan=c.subscription_plan,
        company_departments=list(c.company_departments or []),
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


class CompanyRepository(BaseRepository[Company]):
    """Company CRUD plus add/rename/remove on company_departments."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Company)

    async def get_result(self, company_id: str) -> CompanyResult | None:
        company = await self.get_by_id(company_id)
        return _company_to_result(company) if company else None

    async def list_results(self, company_ids: Iterable[str]) -> list[CompanyResult]:
        """Companies for the given ids, in the order the ids were given."""
        ids = list(dict.fromkeys(company_ids))
        by_id = {c.id: c for c in await self.get_many(ids)}
        return [_company_to_result(by_id[i]) for i in ids if i in by_id]

    async def create_company(
        self, name: str, subscription_plan: str | None = None
    ) -> CompanyResult:
        company = Company(
            name=name,
            subscription_plan=subscription_plan or SubscriptionPlan.FREE.value,
            company_departments=[],
        )
        return _company_to_result(await self.create(company))

    async def update_company(
        self, company_id: str, changes: dict[str, Any]
    ) -> CompanyResult | None:
        company = await self.get_by_id(company_id)
        if not company:
            return None
        if changes.get("name") is not None:
            company.name = changes["name"]
        if changes.get("subscription_plan") is not None:
            company.subscription_plan = changes["subscription_plan"]
        return _company_to_result(await self.update(company))

    async def add_department_entry(
        self, company_id: str, department_id: str, department_name: str
    ) -> bool:
        company = await self.get_by_id(company_id)
        if not company:
            return False
        entries = [
            e for e in company.company_departments or []
            if e.get("department_id") != department_id
        ]
        entries.append({"department_id": department_id, "department_name": department_name})
        company.company_departments = entries
        await self.update(company)
        return True

    async def rename_department_entry(
        self, company_id: str, department_id: str, department_name: str
    ) -> bool:
        company = await self.get_by_id(company_id)
        if not company:
            return False
        company.company_departments = [
            {**e, "department_name": department_name}
            if e.get("department_id") == department_id
            else e
            for e in company.company_departments or []
        ]
        await self.update(company)
        return True

    async def remove_department_entry(self, company_id: str, department_id: str) -> bool:
        company = await self.get_by_id(company_id)
        if not company:
            return False
        company.company_departments = [
            e for e in company.company_departments or []
            if e.get("department_id") != department_id
        ]
        await self.update(company)
        return True

    async def delete_company(self, company_id: str) -> bool:
        company = await self.get_by_id(company_id)
        if not company:
            return False
        await self.delete(company)
        return True
