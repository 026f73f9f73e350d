"""Permissions API: the fixed catalog, flat and grouped for display."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_permission_repo, require_permission
from app.application.services.permission_catalog import group_permissions
from app.infrastructure.persistence.repositories import PermissionRepository
from app.schemas.permission import PermissionCatalogResponse, PermissionResponse

router = APIRouter()


@router.get("", response_model=PermissionCatalogResponse)
async def list_permissions(
    permission_repo: Annotated[PermissionRepository, Depends(get_permission_repo)],
    _: Annotated[object, Depends(require_permission("roles:view"))] = None,
):
    """List every permission in the catalog, also grouped by display group."""
    perms = [
        PermissionResponse.model_validate(p)
        for p in await permission_repo.get_all_permissions()
    ]
    return PermissionCatalogResponse(permissions=perms, grouped=group_permissions(perms))
