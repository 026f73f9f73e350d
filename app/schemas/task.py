"""Task status API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.workflow import WorkflowStatusResponse


class TaskStatusChangeRequest(BaseModel):
    """Request body for PATCH /tasks/{id}/status."""

    status_id: str = Field(..., min_length=1)
    remarks: str | None = Field(default=None, max_length=5000)


class StatusRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    status_id: str
    completed_at: datetime | None
    created_by: str
    department_id: str | None
    assignee_ids: list[str]
    version: int


class TaskCommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    task_id: str
    author_id: str
    content: str
    is_system_generated: bool
    created_at: datetime | None = None


class TaskStatusChangeResponse(BaseModel):
    """Updated task plus the before/after statuses and the remarks comment (if any)."""

    model_config = ConfigDict(from_attributes=True)

    task: TaskResponse
    from_status: StatusRef | None
    to_status: StatusRef
    comment: TaskCommentResponse | None


class AvailableTransitionResponse(BaseModel):
    """A status the caller may move the task to next."""

    model_config = ConfigDict(from_attributes=True)

    transition_id: str
    to_status: WorkflowStatusResponse
    requires_remarks: bool
    requires_approval: bool
