"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.infrastructure.persistence.models.mixins import (
    ActiveFlagMixin,
    CuidMixin,
    IdentifiedModel,
    TimestampMixin,
    VersionedMixin,
)
from app.infrastructure.persistence.models.notification import (
    Notification,
    NotificationRule,
)
from app.infrastructure.persistence.models.permission import (
    Permission,
    UserRole,
    role_permission,
)
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.models.task import Task, TaskComment
from app.infrastructure.persistence.models.user import Department, User
from app.infrastructure.persistence.models.workflow import (
    WorkflowStatus,
    WorkflowTransition,
)

__all__ = [
    "ActivityLog",
    "Department",
    "Notification",
    "NotificationRule",
    "Permission",
    "Role",
    "Task",
    "TaskComment",
    "User",
    "UserRole",
    "WorkflowStatus",
    "WorkflowTransition",
    "role_permission",
    "ActiveFlagMixin",
    "CuidMixin",
    "IdentifiedModel",
    "TimestampMixin",
    "VersionedMixin",
]
