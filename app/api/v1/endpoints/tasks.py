"""Role tasks API, including task resource and output files.

Writes require a task-management level (MANAGER and above) on the path's
role; reads require holding the role.
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends, File, Request, UploadFile

from app.api.v1.dependencies import (
    get_task_service,
    get_task_service_for_write,
    require_role_member,
    require_task_manager,
)
from app.application.dtos.auth import AuthPayload
from app.application.dtos.task import FileUpload
from app.application.services.task_service import TaskService
from app.core.limiter import limit_upload, limit_writes
from app.schemas.common import EmptyData, Envelope
from app.schemas.task import (
    FileUrlResponse,
    RoleTasksResponse,
    TaskCreateRequest,
    TaskFilesResponse,
    TaskResponse,
    TaskUpdate,
)

router = APIRouter()

TaskManager = Annotated[AuthPayload, Depends(require_task_manager)]
RoleMember = Annotated[AuthPayload, Depends(require_role_member)]
FileKind = Literal["resources", "outputs"]


@router.post("/{role_id}/tasks", response_model=Envelope[TaskResponse], status_code=201)
@limit_writes
async def create_task(
    request: Request,
    role_id: str,
    body: TaskCreateRequest,
    _payload: TaskManager,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Create a task owned by role_id, optionally assigned to other roles."""
    task = await task_service.create_task(role_id, body.model_dump())
    return Envelope(
        data=TaskResponse.model_validate(task), message="Task created successfully."
    )


@router.get("/{role_id}/tasks", response_model=Envelope[RoleTasksResponse])
async def list_tasks(
    role_id: str,
    _payload: RoleMember,
    task_service: TaskService = Depends(get_task_service),
):
    """Tasks owned by and assigned to the role."""
    tasks = await task_service.list_for_role(role_id)
    return Envelope(
        data=RoleTasksResponse(
            owned_tasks=[TaskResponse.model_validate(t) for t in tasks.owned],
            assigned_tasks=[TaskResponse.model_validate(t) for t in tasks.assigned],
        ),
        message="Tasks retrieved.",
    )


@router.get("/{role_id}/tasks/{task_id}", response_model=Envelope[TaskResponse])
async def get_task(
    role_id: str,
    task_id: str,
    _payload: RoleMember,
    task_service: TaskService = Depends(get_task_service),
):
    task = await task_service.get_visible(role_id, task_id)
    return Envelope(data=TaskResponse.model_validate(task), message="Task retrieved.")


@router.put("/{role_id}/tasks/{task_id}", response_model=Envelope[TaskResponse])
@limit_writes
async def update_task(
    request: Request,
    role_id: str,
    task_id: str,
    body: TaskUpdate,
    _payload: TaskManager,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Partial update through the owner role."""
    fields = {
        k: v for k, v in body.model_dump(exclude_unset=True).items() if v is not None
    }
    task = await task_service.update_task(role_id, task_id, fields)
    return Envelope(data=TaskResponse.model_validate(task), message="Task updated.")


@router.delete("/{role_id}/tasks/{task_id}", response_model=Envelope[EmptyData])
@limit_writes
async def delete_task(
    request: Request,
    role_id: str,
    task_id: str,
    _payload: TaskManager,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    await task_service.delete_task(role_id, task_id)
    return Envelope(data=EmptyData(), message="Task deleted.")


@router.post(
    "/{role_id}/tasks/{task_id}/{kind}",
    response_model=Envelope[TaskFilesResponse],
    status_code=201,
)
@limit_upload
async def upload_task_files(
    request: Request,
    role_id: str,
    task_id: str,
    kind: FileKind,
    _payload: TaskManager,
    files: list[UploadFile] = File(...),
    task_service: TaskService = Depends(get_task_service_for_write),
):
    """Upload resource or output files (multipart field "files")."""
    uploads = [
        FileUpload(
            file_name=f.filename or "file",
            content_type=f.content_type or "application/octet-stream",
            data=await f.read(),
        )
        for f in files
    ]
    names = await task_service.upload_files(role_id, task_id, kind, uploads)
    return Envelope(
        data=TaskFilesResponse(task_id=task_id, file_names=names),
        message="Files uploaded successfully.",
    )


@router.get(
    "/{role_id}/tasks/{task_id}/{kind}/{file_name}",
    response_model=Envelope[FileUrlResponse],
)
async def get_task_file_url(
    role_id: str,
    task_id: str,
    kind: FileKind,
    file_name: str,
    _payload: RoleMember,
    task_service: TaskService = Depends(get_task_service),
):
    """Short-lived download URL of a task file."""
    url = await task_service.file_url(role_id, task_id, kind, file_name)
    return Envelope(data=FileUrlResponse(url=url), message="File URL generated.")


@router.delete(
    "/{role_id}/tasks/{task_id}/{kind}/{file_name}",
    response_model=Envelope[EmptyData],
)
@limit_writes
async def delete_task_file(
    request: Request,
    role_id: str,
    task_id: str,
    kind: FileKind,
    file_name: str,
    _payload: TaskManager,
    task_service: TaskService = Depends(get_task_service_for_write),
):
    await task_service.delete_file(role_id, task_id, kind, file_name)
    return Envelope(data=EmptyData(), message="File deleted.")
