"""DTOs for workflow status and transition use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkflowStatusResult:
    """Workflow status read-model."""

    id: str
    name: str
    slug: str
    color: str
    order: int
    is_default: bool
    is_final: bool
    is_active: bool


@dataclass(frozen=True)
class WorkflowStatusCreate:
    """Input for creating a workflow status."""

    name: str
    slug: str
    order: int
    color: str = "#6b7280"
    is_default: bool = False
    is_final: bool = False


@dataclass(frozen=True)
class WorkflowStatusUpdate:
    """Partial workflow status update. None means 'leave unchanged'."""

    name: str | None = None
    slug: str | None = None
    color: str | None = None
    order: int | None = None
    is_default: bool | None = None
    is_final: bool | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class WorkflowTransitionResult:
    """Workflow transition (directed edge) read-model."""

    id: str
    from_status_id: str
    to_status_id: str
    allowed_role_ids: tuple[str, ...]
    requires_remarks: bool
    requires_approval: bool
    approver_role_ids: tuple[str, ...]
    is_active: bool


@dataclass(frozen=True)
class WorkflowTransitionCreate:
    """Input for creating a workflow transition."""

    from_status_id: str
    to_status_id: str
    allowed_role_ids: tuple[str, ...] = ()
    requires_remarks: bool = False
    requires_approval: bool = False
    approver_role_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class WorkflowTransitionUpdate:
    """Partial transition update. Endpoints are immutable; None means 'leave unchanged'."""

    allowed_role_ids: tuple[str, ...] | None = None
    requires_remarks: bool | None = None
    requires_approval: bool | None = None
    approver_role_ids: tuple[str, ...] | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class StatusDefinition:
    """Default status used for provisioning (natural key: slug)."""

    name: str
    slug: str
    color: str
    order: int
    is_default: bool = False
    is_final: bool = False


@dataclass(frozen=True)
class TransitionDefinition:
    """Default transition used for provisioning, by status slug and role slug."""

    from_slug: str
    to_slug: str
    allowed_role_slugs: tuple[str, ...] = ()
    requires_remarks: bool = False


@dataclass(frozen=True)
class AvailableTransition:
    """A next status the principal may move a task to, with the edge's requirements."""

    transition_id: str
    to_status: WorkflowStatusResult
    requires_remarks: bool
    requires_approval: bool
