"""Domain enumerations for the Taskflow application.

Enums represent fixed sets of domain values (e.g. notification channels).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class NotificationChannel(_ValuesMixin, str, Enum):
    """Delivery channel for a notification rule."""

    IN_APP = "in_app"
    EMAIL = "email"


class RecipientStrategy(_ValuesMixin, str, Enum):
    """How a notification rule picks its recipients for a task."""

    ASSIGNEES = "assignees"
    CREATOR = "creator"
    DEPARTMENT_HEAD = "department_head"
    SPECIFIC_ROLES = "specific_roles"


class NotificationType(_ValuesMixin, str, Enum):
    """Notification event types (rule.event and notification.type)."""

    TASK_ASSIGNED = "task_assigned"
    TASK_UPDATED = "task_updated"
    STATUS_CHANGED = "status_changed"
    COMMENT_ADDED = "comment_added"
    DEADLINE_APPROACHING = "deadline_approaching"
    TASK_OVERDUE = "task_overdue"
    APPROVAL_NEEDED = "approval_needed"
    APPROVAL_RESOLVED = "approval_resolved"
    MENTION = "mention"
    SYSTEM = "system"
