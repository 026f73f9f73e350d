"""Application DTOs (no ORM dependency)."""

from app.application.dtos.activity_log import ActivityLogEntry, ActivityLogResult
from app.application.dtos.notification import (
    NotificationCreate,
    NotificationResult,
    NotificationRuleResult,
)
from app.application.dtos.permission import PermissionDefinition, PermissionResult
from app.application.dtos.role import RoleDefinition, RoleResult, RoleUpdate
from app.application.dtos.task import (
    StatusChangeResult,
    TaskCommentResult,
    TaskResult,
    WorkflowStatusRef,
)
from app.application.dtos.user import DepartmentResult, UserResult
from app.application.dtos.workflow import (
    AvailableTransition,
    StatusDefinition,
    TransitionDefinition,
    WorkflowStatusCreate,
    WorkflowStatusResult,
    WorkflowStatusUpdate,
    WorkflowTransitionCreate,
    WorkflowTransitionResult,
    WorkflowTransitionUpdate,
)

__all__ = [
    "ActivityLogEntry",
    "ActivityLogResult",
    "AvailableTransition",
    "DepartmentResult",
    "NotificationCreate",
    "NotificationResult",
    "NotificationRuleResult",
    "PermissionDefinition",
    "PermissionResult",
    "RoleDefinition",
    "RoleResult",
    "RoleUpdate",
    "StatusChangeResult",
    "StatusDefinition",
    "TaskCommentResult",
    "TaskResult",
    "TransitionDefinition",
    "UserResult",
    "WorkflowStatusCreate",
    "WorkflowStatusRef",
    "WorkflowStatusResult",
    "WorkflowStatusUpdate",
    "WorkflowTransitionCreate",
    "WorkflowTransitionResult",
    "WorkflowTransitionUpdate",
]
