"""Repository implementations. Each implements a protocol from app.application.interfaces."""

from app.infrastructure.persistence.repositories.activity_log_repo import (
    ActivityLogRepository,
)
from app.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
    NotificationRuleRepository,
)
from app.infrastructure.persistence.repositories.permission_repo import (
    PermissionRepository,
)
from app.infrastructure.persistence.repositories.role_repo import RoleRepository
from app.infrastructure.persistence.repositories.task_repo import (
    TaskCommentRepository,
    TaskRepository,
)
from app.infrastructure.persistence.repositories.user_repo import (
    DepartmentRepository,
    UserRepository,
)
from app.infrastructure.persistence.repositories.workflow_status_repo import (
    WorkflowStatusRepository,
)
from app.infrastructure.persistence.repositories.workflow_transition_repo import (
    WorkflowTransitionRepository,
)

__all__ = [
    "ActivityLogRepository",
    "AuditableRepository",
    "BaseRepository",
    "DepartmentRepository",
    "NotificationRepository",
    "NotificationRuleRepository",
    "PermissionRepository",
    "RoleRepository",
    "TaskCommentRepository",
    "TaskRepository",
    "UserRepository",
    "WorkflowStatusRepository",
    "WorkflowTransitionRepository",
]
