"""Task application service: role-scoped CRUD and task files in object storage.

A task is readable through its owner role or any assigned role and mutable
only through its owner role. Resource and output files are stored under
"{task_id}/{file_name}".
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from app.application.dtos.task import FileUpload, RoleTasks, TaskResult
from app.application.interfaces.repositories import ITaskRepository
from app.application.interfaces.services import IObjectStorage
from app.domain.exceptions import (
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import StorageKey
from app.infrastructure.exceptions import StorageException

logger = logging.getLogger(__name__)

# Route segment -> task column holding the file names.
FILE_KINDS = {"resources": "task_resources", "outputs": "task_outputs"}


class TaskService:
    """Tasks owned by or assigned to a role."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        storage: IObjectStorage | None = None,
        presigned_url_ttl_seconds: int = 60,
        max_parallel_uploads: int = 5,
    ) -> None:
        self.task_repo = task_repo
        self.storage = storage
        self.presigned_url_ttl_seconds = presigned_url_ttl_seconds
        self.max_parallel_uploads = max_parallel_uploads

    def _require_storage(self) -> IObjectStorage:
        if self.storage is None:
            raise RuntimeError("TaskService was built without object storage")
        return self.storage

    async def list_for_role(self, role_id: str) -> RoleTasks:
        tasks = await self.task_repo.list_for_role(role_id)
        return RoleTasks(
            owned=[t for t in tasks if t.owner_role_id == role_id],
            assigned=[t for t in tasks if t.owner_role_id != role_id],
        )

    async def get_visible(self, role_id: str, task_id: str) -> TaskResult:
        """Return the task if role_id owns it or is assigned to it."""
        task = await self.task_repo.get_result(task_id)
        if task is None:
            raise ResourceNotFoundException("Task", task_id, error="Invalid Task ID.")
        if not task.is_visible_to(role_id):
            raise AuthorizationException(
                error="Task not accessible by the specified role.",
                message="Access denied.",
            )
        return task

    async def create_task(self, role_id: str, fields: dict[str, Any]) -> TaskResult:
        assigned = fields.pop("assigned_role_ids", None)
        task = await self.task_repo.create_task(role_id, fields, assigned)
        logger.info("Role %s created task %s", role_id, task.id)
        return task

    async def update_task(
        self, role_id: str, task_id: str, fields: dict[str, Any]
    ) -> TaskResult:
        task = await self.task_repo.get_owned(role_id, task_id)
        if task is None:
            raise ResourceNotFoundException(
                "Task", task_id, error="Invalid ID for task or role."
            )
        assigned = fields.pop("assigned_role_ids", None)
        return await self.task_repo.update_task(task, fields, assigned)

    async def delete_task(self, role_id: str, task_id: str) -> None:
        if await self.task_repo.get_owned(role_id, task_id) is None:
            raise ResourceNotFoundException(
                "Task",
                task_id,
                error="Invalid ID for task or role.",
                message="Task not found, hence could not be deleted.",
            )
        await self.task_repo.delete_with_links([task_id])
        logger.info("Role %s deleted task %s", role_id, task_id)

    @staticmethod
    def _field_for(kind: str) -> str:
        try:
            return FILE_KINDS[kind]
        except KeyError:
            raise ValidationException(f"Unknown task file kind: {kind}", "kind") from None

    @staticmethod
    def _key(task_id: str, file_name: str) -> str:
        try:
            return StorageKey(task_id, file_name).value
        except ValueError as e:
            raise ValidationException(str(e), "file_name") from e

    async def upload_files(
        self, role_id: str, task_id: str, kind: str, files: list[FileUpload]
    ) -> list[str]:
        """Upload files concurrently and append their names to the task's list.

        Returns the uploaded file names in request order. If any upload fails
        the rest are cancelled, objects already stored are removed and the
        first error is raised; nothing is recorded on the task.
        """
        field = self._field_for(kind)
        task = await self.get_visible(role_id, task_id)
        if not files:
            raise ValidationException("At least one file is required.", "files")
        storage = self._require_storage()
        keys = [self._key(task_id, f.file_name) for f in files]
        semaphore = asyncio.Semaphore(self.max_parallel_uploads)
        stored: list[str] = []

        async def _upload(upload: FileUpload, key: str) -> None:
            async with semaphore:
                await storage.upload(upload.data, key, upload.content_type)
            stored.append(key)

        try:
            async with asyncio.TaskGroup() as group:
                for upload, key in zip(files, keys):
                    group.create_task(_upload(upload, key))
        except ExceptionGroup as failed:
            await self._discard(storage, stored)
            raise failed.exceptions[0] from None

        names = [f.file_name for f in files]
        current = list(getattr(task, field))
        merged = current + [n for n in dict.fromkeys(names) if n not in current]
        await self.task_repo.set_file_list(task_id, field, merged)
        logger.info("Uploaded %d %s to task %s", len(names), kind, task_id)
        return names

    @staticmethod
    async def _discard(storage: IObjectStorage, keys: list[str]) -> None:
        for key in dict.fromkeys(keys):
            try:
                await storage.delete(key)
            except StorageException:
                logger.warning("Could not remove orphaned upload %s", key, exc_info=True)

    async def file_url(
        self, role_id: str, task_id: str, kind: str, file_name: str
    ) -> str:
        """Presigned download URL for a file listed on the task."""
        field = self._field_for(kind)
        task = await self.get_visible(role_id, task_id)
        if file_name not in getattr(task, field):
            raise ResourceNotFoundException(
                "Task file",
                file_name,
                error="Invalid Task Resource Name.",
            )
        return await self._require_storage().generate_presigned_url(
            self._key(task_id, file_name), self.presigned_url_ttl_seconds
        )

    async def delete_file(
        self, role_id: str, task_id: str, kind: str, file_name: str
    ) -> None:
        field = self._field_for(kind)
        task = await self.get_visible(role_id, task_id)
        names = list(getattr(task, field))
        if file_name not in names:
            raise ResourceNotFoundException(
                "Task file",
                file_name,
                error="Invalid Task Resource Name.",
            )
        await self._require_storage().delete(self._key(task_id, file_name))
        await self.task_repo.set_file_list(
            task_id, field, [n for n in names if n != file_name]
        )
        logger.info("Deleted %s file %s from task %s", kind, file_name, task_id)
