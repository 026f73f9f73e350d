"""Application services: use-case orchestration over repository protocols."""

from app.application.services.activity_log_service import ActivityLogService
from app.application.services.authorization_service import AuthorizationService
from app.application.services.notification_dispatcher import NotificationDispatcher
from app.application.services.permission_resolver import PermissionResolver
from app.application.services.role_service import RoleService
from app.application.services.status_change_dispatcher import (
    ActivityLogSink,
    StatusChangeDispatcher,
)
from app.application.services.task_status_service import TaskStatusService
from app.application.services.workflow_status_service import WorkflowStatusService
from app.application.services.workflow_transition_service import (
    WorkflowTransitionService,
)

__all__ = [
    "ActivityLogService",
    "ActivityLogSink",
    "AuthorizationService",
    "NotificationDispatcher",
    "PermissionResolver",
    "RoleService",
    "StatusChangeDispatcher",
    "TaskStatusService",
    "WorkflowStatusService",
    "WorkflowTransitionService",
]
