"""Permission API schemas."""

from pydantic import BaseModel, ConfigDict


class PermissionResponse(BaseModel):
    """Permission catalog entry."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    resource: str
    action: str
    description: str | None
    group: str


class PermissionCatalogResponse(BaseModel):
    """Flat catalog plus the same entries grouped by display group."""

    permissions: list[PermissionResponse]
    grouped: dict[str, list[PermissionResponse]]


class MyPermissionsResponse(BaseModel):
    """Resolved permission set of the calling principal."""

    user_id: str
    role_ids: list[str]
    permissions: list[str]
