"""DTOs for notifications and notification rules (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class NotificationRuleResult:
    """Notification rule read-model."""

    id: str
    event: str
    channels: tuple[str, ...]
    recipient_strategy: str
    recipient_role_ids: tuple[str, ...]
    is_active: bool


@dataclass(frozen=True)
class NotificationCreate:
    """In-app notification to persist for one recipient."""

    recipient_id: str
    type: str
    title: str
    message: str
    related_task_id: str | None = None
    related_user_id: str | None = None


@dataclass(frozen=True)
class NotificationResult:
    """Notification read-model."""

    id: str
    recipient_id: str
    type: str
    title: str
    message: str
    related_task_id: str | None
    related_user_id: str | None
    is_read: bool
    email_sent: bool
    created_at: datetime | None = None
