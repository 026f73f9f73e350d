"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.activity_log import ActivityLogEntry, ActivityLogResult
    from app.application.dtos.notification import (
        NotificationCreate,
        NotificationResult,
        NotificationRuleResult,
    )
    from app.application.dtos.permission import PermissionDefinition, PermissionResult
    from app.application.dtos.role import RoleResult
    from app.application.dtos.task import TaskCommentResult, TaskResult
    from app.application.dtos.user import DepartmentResult, UserResult
    from app.application.dtos.workflow import (
        WorkflowStatusCreate,
        WorkflowStatusResult,
        WorkflowTransitionCreate,
        WorkflowTransitionResult,
    )


# Permission repository interface
class IPermissionRepository(Protocol):
    """Protocol for the permission catalog store (DIP)."""

    async def get_all_permissions(self) -> list[PermissionResult]:
        """Return every permission ordered by group, resource, action."""

    async def get_by_ids(self, permission_ids: Iterable[str]) -> list[PermissionResult]:
        """Return permissions for the given ids (unknown ids are absent)."""

    async def get_by_codes(self, codes: Iterable[str]) -> list[PermissionResult]:
        """Return permissions for the given 'resource:action' codes."""

    async def get_all_codes(self) -> set[str]:
        """Return the set of every catalog code."""

    async def upsert(self, definition: PermissionDefinition) -> PermissionResult:
        """Insert or update by (resource, action); return the stored permission."""


# Role repository interface
class IRoleRepository(Protocol):
    """Protocol for role repository (DIP)."""

    async def get_role(self, role_id: str) -> RoleResult | None:
        """Return role by ID (active or not)."""

    async def get_by_slug(self, slug: str) -> RoleResult | None:
        """Return role by slug."""

    async def get_active_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        """Return active roles for the given ids; unknown ids are skipped."""

    async def get_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        """Return roles for the given ids regardless of is_active."""

    async def list_roles(self, include_inactive: bool = True) -> list[RoleResult]:
        """Return roles ordered by name."""

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None,
        permission_ids: Iterable[str],
        *,
        is_system: bool = False,
        created_by: str | None = None,
        cloned_from: str | None = None,
    ) -> RoleResult:
        """Create role with its permission set; return created role."""

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
        is_system: bool | None = None,
        permission_ids: Iterable[str] | None = None,
    ) -> RoleResult | None:
        """Apply given fields (None = unchanged); return updated role or None if missing."""

    async def delete_role(self, role_id: str) -> bool:
        """Hard delete role; return False if it did not exist."""


# User repository interface
class IUserRepository(Protocol):
    """Protocol for user reads (DIP)."""

    async def get_user(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_role_ids(self, user_id: str) -> list[str]:
        """Return the role ids assigned to user (may include dangling ids)."""

    async def get_active_user_ids_with_roles(self, role_ids: Iterable[str]) -> list[str]:
        """Return ids of active users holding any of the given roles."""

    async def get_users(self, user_ids: Iterable[str]) -> list[UserResult]:
        """Return users for the given ids."""


# Department repository interface
class IDepartmentRepository(Protocol):
    """Protocol for department reads (DIP)."""

    async def get_department(self, department_id: str) -> DepartmentResult | None:
        """Return department by ID."""


# Workflow status repository interface
class IWorkflowStatusRepository(Protocol):
    """Protocol for workflow status repository (DIP)."""

    async def get_status(self, status_id: str) -> WorkflowStatusResult | None:
        """Return status by ID (active or not)."""

    async def get_by_slug(self, slug: str) -> WorkflowStatusResult | None:
        """Return status by slug."""

    async def get_by_name(self, name: str) -> WorkflowStatusResult | None:
        """Return status by name."""

    async def get_default(self) -> WorkflowStatusResult | None:
        """Return the active default status, if any."""

    async def list_active(self) -> list[WorkflowStatusResult]:
        """Return active statuses ordered by order ascending."""

    async def create_status(self, data: WorkflowStatusCreate) -> WorkflowStatusResult:
        """Create status; return created status."""

    async def update_status(
        self, status_id: str, **fields: object
    ) -> WorkflowStatusResult | None:
        """Apply given fields; return updated status or None if missing."""

    async def clear_defaults(self, except_status_id: str | None = None) -> int:
        """Set is_default False on every other status; return rows changed."""


# Workflow transition repository interface
class IWorkflowTransitionRepository(Protocol):
    """Protocol for workflow transition repository (DIP)."""

    async def get_transition(self, transition_id: str) -> WorkflowTransitionResult | None:
        """Return transition by ID (active or not)."""

    async def get_by_pair(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        """Return the edge for the ordered pair regardless of is_active."""

    async def find_active_edge(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        """Return the active edge for the ordered pair, or None."""

    async def list_active(self) -> list[WorkflowTransitionResult]:
        """Return all active transitions."""

    async def list_active_from(self, from_status_id: str) -> list[WorkflowTransitionResult]:
        """Return active outgoing transitions of a status."""

    async def create_transition(
        self, data: WorkflowTransitionCreate
    ) -> WorkflowTransitionResult:
        """Create transition; return created edge."""

    async def update_transition(
        self, transition_id: str, **fields: object
    ) -> WorkflowTransitionResult | None:
        """Apply given fields; return updated edge or None if missing."""


# Task repository interface
class ITaskRepository(Protocol):
    """Protocol for task status persistence (DIP)."""

    async def get_task(self, task_id: str) -> TaskResult | None:
        """Return task by ID, always re-read from the store."""

    async def update_status_if_current(
        self,
        task_id: str,
        expected_status_id: str,
        new_status_id: str,
        completed_at: datetime | None = None,
    ) -> TaskResult | None:
        """Set status only if the stored status still equals expected_status_id.

        completed_at is written only when given. Returns the updated task, or
        None when another writer changed the status first.
        """


# Task comment repository interface
class ITaskCommentRepository(Protocol):
    """Protocol for task comments (DIP)."""

    async def create_comment(
        self,
        task_id: str,
        author_id: str,
        content: str,
        *,
        is_system_generated: bool = False,
    ) -> TaskCommentResult:
        """Append comment to task; return created comment."""

    async def list_for_task(self, task_id: str) -> list[TaskCommentResult]:
        """Return comments for task, oldest first."""


# Activity log repository interface
class IActivityLogRepository(Protocol):
    """Protocol for the append-only activity log (DIP)."""

    async def create_entry(self, entry: ActivityLogEntry) -> ActivityLogResult:
        """Append one entry; return stored entry."""

    async def list_for_resource(
        self, resource: str, resource_id: str, limit: int = 100
    ) -> list[ActivityLogResult]:
        """Return entries for one resource, newest first."""


# Notification rule repository interface
class INotificationRuleRepository(Protocol):
    """Protocol for notification rules (DIP)."""

    async def get_active_for_event(self, event: str) -> list[NotificationRuleResult]:
        """Return active rules subscribed to event."""


# Notification repository interface
class INotificationRepository(Protocol):
    """Protocol for in-app notifications (DIP)."""

    async def create_many(
        self, notifications: list[NotificationCreate]
    ) -> list[NotificationResult]:
        """Insert notifications; return stored rows in input order."""

    async def mark_email_sent(self, notification_ids: Iterable[str]) -> int:
        """Flag notifications as emailed; return rows changed."""

    async def list_for_recipient(
        self, recipient_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        """Return notifications for recipient, newest first."""
