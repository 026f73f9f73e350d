"""Static permission catalog, system role definitions and default workflow.

Provisioned into the database by CatalogProvisioningService. The catalog is
append-only: codes are never renamed or removed once shipped.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from app.application.dtos.permission import PermissionDefinition
from app.application.dtos.role import RoleDefinition
from app.application.dtos.workflow import StatusDefinition, TransitionDefinition
from app.core.constants import SUPER_ADMIN_ROLE_SLUG
from app.domain.value_objects import PermissionCode

_TASKS = "Task Management"
_USERS = "User Management"
_ROLES = "Role Management"
_DEPARTMENTS = "Department Management"


def _perm(resource: str, action: str, description: str, group: str) -> PermissionDefinition:
    # Malformed codes fail at import, before anything is provisioned.
    code = PermissionCode(resource, action)
    return PermissionDefinition(
        resource=code.resource, action=code.action, description=description, group=group
    )


PERMISSIONS: tuple[PermissionDefinition, ...] = (
    _perm("tasks", "create", "Create new tasks", _TASKS),
    _perm("tasks", "view", "View own/assigned tasks", _TASKS),
    _perm("tasks", "view_all", "View all tasks across departments", _TASKS),
    _perm("tasks", "update", "Update task details and status", _TASKS),
    _perm("tasks", "delete", "Delete tasks", _TASKS),
    _perm("tasks", "assign", "Assign tasks to users", _TASKS),
    _perm("tasks", "reassign", "Reassign tasks to different users", _TASKS),
    _perm("tasks", "approve", "Approve task completion", _TASKS),
    _perm("users", "create", "Create new users", _USERS),
    _perm("users", "view", "View user profiles", _USERS),
    _perm("users", "update", "Update user details", _USERS),
    _perm("users", "delete", "Deactivate users", _USERS),
    _perm("users", "import", "Bulk import users via CSV", _USERS),
    _perm("roles", "create", "Create new roles", _ROLES),
    _perm("roles", "view", "View roles", _ROLES),
    _perm("roles", "update", "Update role permissions", _ROLES),
    _perm("roles", "delete", "Delete roles", _ROLES),
    _perm("roles", "clone", "Clone existing roles", _ROLES),
    _perm("departments", "create", "Create departments", _DEPARTMENTS),
    _perm("departments", "view", "View departments", _DEPARTMENTS),
    _perm("departments", "update", "Update departments", _DEPARTMENTS),
    _perm("departments", "delete", "Delete departments", _DEPARTMENTS),
    _perm("workflow", "configure", "Configure workflow statuses and transitions", "Workflow"),
    _perm("reports", "view", "View reports and analytics", "Reports"),
    _perm("reports", "export", "Export reports to PDF/Excel", "Reports"),
    _perm("activity_logs", "view", "View activity logs", "Audit"),
    _perm("notifications", "manage_rules", "Configure notification rules", "Notifications"),
    _perm("dashboard", "admin", "Access admin dashboard", "Dashboards"),
    _perm("dashboard", "manager", "Access manager dashboard", "Dashboards"),
    _perm("dashboard", "staff", "Access staff dashboard", "Dashboards"),
)

ALL_PERMISSION_CODES: tuple[str, ...] = tuple(p.code for p in PERMISSIONS)


ROLE_DEFINITIONS: tuple[RoleDefinition, ...] = (
    RoleDefinition(
        slug=SUPER_ADMIN_ROLE_SLUG,
        name="Super Admin",
        description="Full system access",
        permission_codes=ALL_PERMISSION_CODES,
    ),
    RoleDefinition(
        slug="admin",
        name="Admin",
        description="Administrative access without workflow configuration",
        permission_codes=tuple(
            c for c in ALL_PERMISSION_CODES if not c.startswith("workflow:")
        ),
    ),
    RoleDefinition(
        slug="manager",
        name="Manager",
        description="Department manager with task oversight",
        permission_codes=(
            "tasks:create",
            "tasks:view",
            "tasks:view_all",
            "tasks:update",
            "tasks:assign",
            "tasks:reassign",
            "tasks:approve",
            "users:view",
            "roles:view",
            "departments:view",
            "reports:view",
            "reports:export",
            "activity_logs:view",
            "dashboard:manager",
            "dashboard:staff",
        ),
    ),
    RoleDefinition(
        slug="staff",
        name="Staff",
        description="Regular staff member",
        permission_codes=(
            "tasks:create",
            "tasks:view",
            "tasks:update",
            "users:view",
            "departments:view",
            "dashboard:staff",
        ),
    ),
    RoleDefinition(
        slug="viewer",
        name="Viewer",
        description="Read-only access",
        permission_codes=(
            "tasks:view",
            "users:view",
            "departments:view",
            "reports:view",
            "dashboard:staff",
        ),
    ),
)


DEFAULT_WORKFLOW_STATUSES: tuple[StatusDefinition, ...] = (
    StatusDefinition("To Do", "to-do", "#6b7280", 1, is_default=True),
    StatusDefinition("In Progress", "in-progress", "#3b82f6", 2),
    StatusDefinition("On Hold", "on-hold", "#f59e0b", 3),
    StatusDefinition("For Review", "for-review", "#8b5cf6", 4),
    StatusDefinition("Completed", "completed", "#10b981", 5, is_final=True),
    StatusDefinition("Cancelled", "cancelled", "#ef4444", 6, is_final=True),
)

# Reviews are closed by managers and above; everything else is open to tasks:update.
_REVIEWERS = (SUPER_ADMIN_ROLE_SLUG, "admin", "manager")

DEFAULT_WORKFLOW_TRANSITIONS: tuple[TransitionDefinition, ...] = (
    TransitionDefinition("to-do", "in-progress"),
    TransitionDefinition("to-do", "cancelled", requires_remarks=True),
    TransitionDefinition("in-progress", "on-hold", requires_remarks=True),
    TransitionDefinition("in-progress", "for-review"),
    TransitionDefinition("in-progress", "cancelled", requires_remarks=True),
    TransitionDefinition("on-hold", "in-progress"),
    TransitionDefinition("on-hold", "cancelled", requires_remarks=True),
    TransitionDefinition("for-review", "completed", allowed_role_slugs=_REVIEWERS),
    TransitionDefinition(
        "for-review", "in-progress", allowed_role_slugs=_REVIEWERS, requires_remarks=True
    ),
    TransitionDefinition(
        "completed", "in-progress", allowed_role_slugs=_REVIEWERS, requires_remarks=True
    ),
)


def list_permissions() -> list[PermissionDefinition]:
    """Return the catalog in declaration order."""
    return list(PERMISSIONS)


def group_permissions(permissions: Iterable[Any]) -> dict[str, list[Any]]:
    """Group anything with a .group label, preserving input order."""
    grouped: dict[str, list[Any]] = {}
    for perm in permissions:
        grouped.setdefault(perm.group, []).append(perm)
    return grouped


def list_grouped() -> dict[str, list[PermissionDefinition]]:
    """Return the catalog grouped for display (group -> permissions)."""
    return group_permissions(list(PERMISSIONS))
