"""Workflow status and transition API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class WorkflowStatusCreateRequest(BaseModel):
    """Request body for creating a status. Slug defaults to the slugified name."""

    name: str = Field(..., min_length=1, max_length=100)
    slug: str | None = Field(default=None, max_length=100)
    color: str = Field(default="#6b7280", description="Hex color, #RRGGBB")
    order: int = Field(default=0, ge=0)
    is_default: bool = False
    is_final: bool = False


class WorkflowStatusUpdateRequest(BaseModel):
    """Request body for updating a status (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    slug: str | None = Field(default=None, min_length=1, max_length=100)
    color: str | None = None
    order: int | None = Field(default=None, ge=0)
    is_default: bool | None = None
    is_final: bool | None = None
    is_active: bool | None = None


class WorkflowStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    slug: str
    color: str
    order: int
    is_default: bool
    is_final: bool
    is_active: bool


class WorkflowTransitionCreateRequest(BaseModel):
    """Request body for creating a directed edge between two statuses.

    An empty allowed_role_ids means any role may use the edge.
    """

    from_status_id: str
    to_status_id: str
    allowed_role_ids: list[str] = Field(default_factory=list)
    requires_remarks: bool = False
    requires_approval: bool = False
    approver_role_ids: list[str] = Field(default_factory=list)


class WorkflowTransitionUpdateRequest(BaseModel):
    """Request body for updating an edge (partial). Endpoints cannot change."""

    allowed_role_ids: list[str] | None = None
    requires_remarks: bool | None = None
    requires_approval: bool | None = None
    approver_role_ids: list[str] | None = None
    is_active: bool | None = None


class WorkflowTransitionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    from_status_id: str
    to_status_id: str
    allowed_role_ids: list[str]
    requires_remarks: bool
    requires_approval: bool
    approver_role_ids: list[str]
    is_active: bool
