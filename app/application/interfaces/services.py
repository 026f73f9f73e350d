"""Service interfaces (ports) for the application layer.

Protocols define contracts for application services (DIP).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.domain.events import TaskStatusChanged


# Permission resolver interface
class IPermissionResolver(Protocol):
    """Protocol for resolving role ids to permission codes (used by AuthorizationService)."""

    async def resolve(self, role_ids: Iterable[str]) -> set[str]:
        """Return set of permission codes (e.g. {'tasks:view', 'roles:create'})."""


# Activity logger interface
class IActivityLogger(Protocol):
    """Protocol for recording activity log entries (who did what to which resource)."""

    async def log(
        self,
        action: str,
        resource: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> None:
        """Append one entry. Actor defaults to the current request actor."""


# Status change sink interface
class IStatusChangeSink(Protocol):
    """Protocol for consumers of task.status_changed events."""

    async def handle(self, event: TaskStatusChanged) -> None:
        """Consume one event. May raise; the dispatcher logs and continues."""


# Notification sender interface (email channel)
class INotificationSender(Protocol):
    """Protocol for sending notifications (e.g. email) to a list of recipients."""

    async def send(
        self,
        to_emails: list[str],
        subject: str,
        body: str,
    ) -> None:
        """Send notification to the given addresses. No-op or log if not configured."""


# Cache service interface
class ICacheService(Protocol):
    """Minimal cache protocol for permission caching (DIP)."""

    def is_available(self) -> bool:
        """Return True if cache is connected."""

    async def get(self, key: str) -> Any:
        """Return cached value or None."""

    async def set(self, key: str, value: Any, ttl: int = 300) -> bool:
        """Store value with TTL. Returns True on success."""

    async def delete(self, key: str) -> bool:
        """Delete key. Returns True on success."""

    async def delete_pattern(self, pattern: str) -> int:
        """Delete keys matching pattern. Returns count deleted."""
