"""Task status endpoints: change status, list available next statuses."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_task_read_deps,
    get_task_status_service,
    require_permission,
)
from app.application.services import TaskStatusService, WorkflowTransitionService
from app.core.limiter import limit_status_changes
from app.domain.entities import Principal
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import TaskRepository
from app.schemas.task import (
    AvailableTransitionResponse,
    TaskStatusChangeRequest,
    TaskStatusChangeResponse,
)

router = APIRouter()


@router.patch("/{task_id}/status", response_model=TaskStatusChangeResponse)
@limit_status_changes
async def change_task_status(
    request: Request,
    task_id: str,
    body: TaskStatusChangeRequest,
    task_status_service: Annotated[TaskStatusService, Depends(get_task_status_service)],
    principal: Annotated[Principal, Depends(require_permission("tasks:update"))],
):
    """Move the task along an active transition.

    Remarks are stored as a system comment when given, and are mandatory on
    edges that require them.
    """
    result = await task_status_service.transition(
        task_id,
        body.status_id,
        principal,
        remarks=body.remarks,
    )
    return TaskStatusChangeResponse.model_validate(result)


@router.get("/{task_id}/transitions", response_model=list[AvailableTransitionResponse])
async def list_available_transitions(
    task_id: str,
    deps: Annotated[
        tuple[TaskRepository, WorkflowTransitionService], Depends(get_task_read_deps)
    ],
    principal: Annotated[Principal, Depends(require_permission("tasks:view"))],
):
    """Statuses the caller may move this task to, in display order."""
    task_repo, transition_service = deps
    task = await task_repo.get_task(task_id)
    if task is None:
        raise ResourceNotFoundException("task", task_id)
    options = await transition_service.available_transitions(task.status_id, principal)
    return [AvailableTransitionResponse.model_validate(o) for o in options]
