"""Workflow transitions API (directed edges between statuses)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_transition_read_service,
    get_transition_service,
    require_permission,
)
from app.application.dtos.workflow import WorkflowTransitionCreate, WorkflowTransitionUpdate
from app.application.services import WorkflowTransitionService
from app.core.limiter import limit_writes
from app.schemas.workflow import (
    WorkflowTransitionCreateRequest,
    WorkflowTransitionResponse,
    WorkflowTransitionUpdateRequest,
)

router = APIRouter()

_configure = require_permission("workflow:configure")


def _as_tuple(values: list[str] | None) -> tuple[str, ...] | None:
    return tuple(values) if values is not None else None


@router.get("", response_model=list[WorkflowTransitionResponse])
async def list_transitions(
    transition_service: Annotated[
        WorkflowTransitionService, Depends(get_transition_read_service)
    ],
    from_status_id: str | None = None,
    _: Annotated[object, Depends(_configure)] = None,
):
    """List active edges, optionally only those leaving from_status_id."""
    if from_status_id:
        edges = await transition_service.list_from(from_status_id)
    else:
        edges = await transition_service.list_active()
    return [WorkflowTransitionResponse.model_validate(e) for e in edges]


@router.get("/{transition_id}", response_model=WorkflowTransitionResponse)
async def get_transition(
    transition_id: str,
    transition_service: Annotated[
        WorkflowTransitionService, Depends(get_transition_read_service)
    ],
    _: Annotated[object, Depends(_configure)] = None,
):
    return WorkflowTransitionResponse.model_validate(
        await transition_service.get(transition_id)
    )


@router.post("", response_model=WorkflowTransitionResponse, status_code=201)
@limit_writes
async def create_transition(
    request: Request,
    body: WorkflowTransitionCreateRequest,
    transition_service: Annotated[WorkflowTransitionService, Depends(get_transition_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    created = await transition_service.create(
        WorkflowTransitionCreate(
            from_status_id=body.from_status_id,
            to_status_id=body.to_status_id,
            allowed_role_ids=tuple(body.allowed_role_ids),
            requires_remarks=body.requires_remarks,
            requires_approval=body.requires_approval,
            approver_role_ids=tuple(body.approver_role_ids),
        )
    )
    return WorkflowTransitionResponse.model_validate(created)


@router.put("/{transition_id}", response_model=WorkflowTransitionResponse)
@limit_writes
async def update_transition(
    request: Request,
    transition_id: str,
    body: WorkflowTransitionUpdateRequest,
    transition_service: Annotated[WorkflowTransitionService, Depends(get_transition_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    patch = WorkflowTransitionUpdate(
        allowed_role_ids=_as_tuple(body.allowed_role_ids),
        requires_remarks=body.requires_remarks,
        requires_approval=body.requires_approval,
        approver_role_ids=_as_tuple(body.approver_role_ids),
        is_active=body.is_active,
    )
    return WorkflowTransitionResponse.model_validate(
        await transition_service.update(transition_id, patch)
    )


@router.delete("/{transition_id}", response_model=WorkflowTransitionResponse)
@limit_writes
async def deactivate_transition(
    request: Request,
    transition_id: str,
    transition_service: Annotated[WorkflowTransitionService, Depends(get_transition_service)],
    _: Annotated[object, Depends(_configure)] = None,
):
    """Deactivate an edge; the pair stays reserved."""
    return WorkflowTransitionResponse.model_validate(
        await transition_service.deactivate(transition_id)
    )
