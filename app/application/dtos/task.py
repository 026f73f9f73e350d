"""DTOs for task status use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class TaskResult:
    """Task read-model (workflow-relevant fields only)."""

    id: str
    title: str
    status_id: str
    completed_at: datetime | None
    created_by: str
    department_id: str | None
    assignee_ids: tuple[str, ...]
    version: int


@dataclass(frozen=True)
class TaskCommentResult:
    """Task comment read-model."""

    id: str
    task_id: str
    author_id: str
    content: str
    is_system_generated: bool
    created_at: datetime | None = None


@dataclass(frozen=True)
class WorkflowStatusRef:
    """Minimal status reference carried in results and events."""

    id: str
    name: str


@dataclass(frozen=True)
class StatusChangeResult:
    """Outcome of a successful status transition."""

    task: TaskResult
    from_status: WorkflowStatusRef | None
    to_status: WorkflowStatusRef
    comment: TaskCommentResult | None
