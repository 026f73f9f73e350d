"""Pydantic request/response schemas for the API."""

from app.schemas.health import HealthResponse
from app.schemas.permission import (
    MyPermissionsResponse,
    PermissionCatalogResponse,
    PermissionResponse,
)
from app.schemas.role import (
    RoleCloneRequest,
    RoleCreateRequest,
    RoleResponse,
    RoleUpdateRequest,
)
from app.schemas.task import (
    AvailableTransitionResponse,
    TaskStatusChangeRequest,
    TaskStatusChangeResponse,
)
from app.schemas.workflow import (
    WorkflowStatusCreateRequest,
    WorkflowStatusResponse,
    WorkflowStatusUpdateRequest,
    WorkflowTransitionCreateRequest,
    WorkflowTransitionResponse,
    WorkflowTransitionUpdateRequest,
)

__all__ = [
    "AvailableTransitionResponse",
    "HealthResponse",
    "MyPermissionsResponse",
    "PermissionCatalogResponse",
    "PermissionResponse",
    "RoleCloneRequest",
    "RoleCreateRequest",
    "RoleResponse",
    "RoleUpdateRequest",
    "TaskStatusChangeRequest",
    "TaskStatusChangeResponse",
    "WorkflowStatusCreateRequest",
    "WorkflowStatusResponse",
    "WorkflowStatusUpdateRequest",
    "WorkflowTransitionCreateRequest",
    "WorkflowTransitionResponse",
    "WorkflowTransitionUpdateRequest",
]
