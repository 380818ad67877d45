"""Task repository. Interface methods return TaskResult."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskResult
from app.infrastructure.persistence.models.task import Task, TaskAssignedRole
from app.infrastructure.persistence.repositories.role_scoped_repo import (
    RoleScopedRepository,
)
from app.shared.utils.datetime import ensure_utc

TASK_FIELDS = (
    "objective_id",
    "title",
    "description",
    "task_rubric",
    "start_date",
    "due_date",
    "priority",
    "status",
    "recent_comments",
    "feedbacks",
)

# Task columns holding uploaded file names.
FILE_LIST_FIELDS = ("task_resources", "task_outputs")


def _task_to_result(t: Task, assigned: list[str]) -> TaskResult:
    return TaskResult(
        id=t.id,
        owner_role_id=t.owner_role_id,
        assigned_role_ids=tuple(assigned),
        objective_id=t.objective_id,
        title=t.title,
        description=t.description,
        task_rubric=list(t.task_rubric or []),
        start_date=ensure_utc(t.start_date),
        due_date=ensure_utc(t.due_date),
        priority=t.priority,
        status=t.status,
        task_resources=list(t.task_resources or []),
        task_outputs=list(t.task_outputs or []),
        recent_comments=list(t.recent_comments or []),
        feedbacks=list(t.feedbacks or []),
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


class TaskRepository(RoleScopedRepository[Task]):
    """Tasks owned by a role, assignable to other roles."""

    link_model = TaskAssignedRole
    link_key = "task_id"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def _results(self, tasks: list[Task]) -> list[TaskResult]:
        assigned = await self.assigned_roles_for(t.id for t in tasks)
        return [_task_to_result(t, assigned[t.id]) for t in tasks]

    async def get_result(self, task_id: str) -> TaskResult | None:
        task = await self.get_by_id(task_id)
        if not task:
            return None
        return (await self._results([task]))[0]

    async def list_for_role(self, role_id: str) -> list[TaskResult]:
        """Tasks owned by or assigned to role_id, oldest first."""
        ids = await self.ids_visible_to(role_id)
        if not ids:
            return []
        result = await self.db.execute(
            select(Task).where(Task.id.in_(ids)).order_by(Task.created_at, Task.id)
        )
        return await self._results(list(result.scalars().all()))

    async def get_owned(self, role_id: str, task_id: str) -> Task | None:
        result = await self.db.execute(
            select(Task).where(Task.id == task_id, Task.owner_role_id == role_id)
        )
        return result.scalar_one_or_none()

    async def create_task(
        self,
        owner_role_id: str,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> TaskResult:
        task = Task(owner_role_id=owner_role_id)
        for key in TASK_FIELDS:
            if fields.get(key) is not None:
                setattr(task, key, fields[key])
        created = await self.create(task)
        if assigned_role_ids:
            await self.replace_assigned_roles(created.id, assigned_role_ids)
        return (await self._results([created]))[0]

    async def update_task(
        self,
        task: Task,
        fields: dict[str, Any],
        assigned_role_ids: list[str] | None = None,
    ) -> TaskResult:
        for key in TASK_FIELDS:
            if key in fields:
                setattr(task, key, fields[key])
        updated = await self.update(task)
        if assigned_role_ids is not None:
            await self.replace_assigned_roles(updated.id, assigned_role_ids)
        return (await self._results([updated]))[0]

    async def set_file_list(self, task_id: str, field: str, names: list[str]) -> None:
        if field not in FILE_LIST_FIELDS:
            raise ValueError(f"Not a task file list: {field}")
        task = await self.get_by_id(task_id)
        if task is None:
            return
        setattr(task, field, list(names))
        await self.update(task)
