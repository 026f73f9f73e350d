"""Endpoints about the calling principal."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_authorization_service, get_current_principal
from app.application.services import AuthorizationService
from app.domain.entities import Principal
from app.schemas.permission import MyPermissionsResponse

router = APIRouter()


@router.get("/permissions", response_model=MyPermissionsResponse)
async def my_permissions(
    principal: Annotated[Principal, Depends(get_current_principal)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
):
    """Return the resolved permission codes of the caller (sorted)."""
    permissions = await auth_svc.get_permissions(principal)
    return MyPermissionsResponse(
        user_id=principal.id,
        role_ids=sorted(principal.role_ids),
        permissions=sorted(permissions),
    )
