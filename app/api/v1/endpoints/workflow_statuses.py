"""Workflow statuses API. Reads are open to any authenticated user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_current_principal,
    get_status_read_service,
    get_status_service,
    require_permission,
)
from app.application.dtos.workflow import WorkflowStatusUpdate
from app.application.services import WorkflowStatusService
from app.core.limiter import limit_writes
from app.schemas.workflow import (
    WorkflowStatusCreateRequest,
    WorkflowStatusResponse,
    WorkflowStatusUpdateRequest,
)

router = APIRouter()

_configure = require_permission("workflow:configure")


@router.get("", response_model=list[WorkflowStatusResponse])
async def list_statuses(
    status_service: Annotated[WorkflowStatusService, Depends(get_status_read_service)],
    _: Annotated[object, Depends(get_current_principal)] = None,
):
    """List active statuses in display order."""
    return [WorkflowStatusResponse.model_validate(s) for s in await status_service.list_active()]


@router.get("/{status_id}", response_model=WorkflowStatusResponse)
async def get_status(
    status_id: str,
    status_service: Annotated[WorkflowStatusService, Depends(get_status_read_service)],
    _: Annotated[object, Depends(get_current_principal)] = None,
):
    return WorkflowStatusResponse.model_validate(await status_service.get(status_id))


@router.post("", response_model=WorkflowStatusResponse, status_code=201)
@limit_writes
async def create_status(
    request: Request,
    body: WorkflowStatusCreateRequest,
    status_service: Annotated[WorkflowStatusService, Depends(get_status_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    """Create a status; marking it default clears the previous default."""
    created = await status_service.create(
        name=body.name,
        order=body.order,
        slug=body.slug,
        color=body.color,
        is_default=body.is_default,
        is_final=body.is_final,
    )
    return WorkflowStatusResponse.model_validate(created)


@router.put("/{status_id}", response_model=WorkflowStatusResponse)
@limit_writes
async def update_status(
    request: Request,
    status_id: str,
    body: WorkflowStatusUpdateRequest,
    status_service: Annotated[WorkflowStatusService, Depends(get_status_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    patch = WorkflowStatusUpdate(**body.model_dump())
    return WorkflowStatusResponse.model_validate(await status_service.update(status_id, patch))


@router.delete("/{status_id}", response_model=WorkflowStatusResponse)
@limit_writes
async def deactivate_status(
    request: Request,
    status_id: str,
    status_service: Annotated[WorkflowStatusService, Depends(get_status_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    """Soft delete: the status stays on existing tasks but is no longer a target."""
    return WorkflowStatusResponse.model_validate(await status_service.deactivate(status_id))
