"""DTOs for activity log (no dependency on ORM)."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class ActivityLogEntry:
    """Activity log record to persist."""

    action: str
    resource: str
    resource_id: str
    actor_id: str | None = None
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: str | None = None
    user_agent: str | None = None


@dataclass(frozen=True)
class ActivityLogResult:
    """Activity log read-model."""

    id: str
    action: str
    resource: str
    resource_id: str
    actor_id: str | None
    details: dict[str, Any]
    created_at: datetime | None = None
