"""Roles API: list, get, create, update, delete and clone."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from app.api.v1.dependencies import (
    get_role_read_service,
    get_role_service,
    require_permission,
)
from app.application.dtos.role import RoleUpdate
from app.application.services import RoleService
from app.core.limiter import limit_writes
from app.domain.entities import Principal
from app.schemas.role import (
    RoleCloneRequest,
    RoleCreateRequest,
    RoleResponse,
    RoleUpdateRequest,
)

router = APIRouter()


@router.post("", response_model=RoleResponse, status_code=201)
@limit_writes
async def create_role(
    request: Request,
    body: RoleCreateRequest,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    principal: Annotated[Principal, Depends(require_permission("roles:create"))],
):
    """Create a custom role; the slug is derived from the name."""
    created = await role_service.create(
        name=body.name,
        description=body.description,
        permission_ids=body.permission_ids,
        created_by=principal.id,
    )
    return RoleResponse.model_validate(created)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    role_service: Annotated[RoleService, Depends(get_role_read_service)],
    include_inactive: bool = True,
    _: Annotated[object, Depends(require_permission("roles:view"))] = None,
):
    """List roles ordered by name."""
    roles = await role_service.list(include_inactive=include_inactive)
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    role_service: Annotated[RoleService, Depends(get_role_read_service)],
    _: Annotated[object, Depends(require_permission("roles:view"))] = None,
):
    """Get role by id with its permissions."""
    return RoleResponse.model_validate(await role_service.get(role_id))


@router.put("/{role_id}", response_model=RoleResponse)
@limit_writes
async def update_role(
    request: Request,
    role_id: str,
    body: RoleUpdateRequest,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("roles:update"))] = None,
):
    """Update name, description, permissions or active flag (partial)."""
    patch = RoleUpdate(
        name=body.name,
        description=body.description,
        permission_ids=tuple(body.permission_ids) if body.permission_ids is not None else None,
        is_active=body.is_active,
    )
    return RoleResponse.model_validate(await role_service.update(role_id, patch))


@router.delete("/{role_id}", status_code=204)
@limit_writes
async def delete_role(
    request: Request,
    role_id: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permission("roles:delete"))] = None,
):
    """Delete a custom role. System roles are protected."""
    await role_service.delete(role_id)


@router.post("/{role_id}/clone", response_model=RoleResponse, status_code=201)
@limit_writes
async def clone_role(
    request: Request,
    role_id: str,
    role_service: Annotated[RoleService, Depends(get_role_service)],
    principal: Annotated[Principal, Depends(require_permission("roles:clone"))],
    body: RoleCloneRequest | None = None,
):
    """Copy a role's permission set into a new custom role."""
    body = body or RoleCloneRequest()
    created = await role_service.clone(
        role_id,
        new_name=body.name,
        description=body.description,
        created_by=principal.id,
    )
    return RoleResponse.model_validate(created)
