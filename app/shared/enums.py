"""Shared enumerations for the Taskflow application.

Cross-cutting enums used by application and infrastructure (e.g. activity
log actions, actor type). Domain-specific enums (e.g. RecipientStrategy)
live in app.domain.enums.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class ActorType(_ValuesMixin, str, Enum):
    """Actor type for activity tracking (who performed the action)."""

    USER = "user"
    SYSTEM = "system"


class AuditAction(_ValuesMixin, str, Enum):
    """Audit action suffixes; activity log action is '<entity>.<action>'."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    CLONED = "cloned"
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"
    STATUS_CHANGED = "status_changed"
