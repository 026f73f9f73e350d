"""Activity log service: append who-did-what entries (implements IActivityLogger)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from app.application.dtos.activity_log import ActivityLogEntry
from app.shared.context import get_actor_context

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IActivityLogRepository


class ActivityLogService:
    """Writes activity log entries, filling actor and client info from the request context."""

    def __init__(self, activity_log_repo: IActivityLogRepository) -> None:
        self._repo = activity_log_repo

    async def log(
        self,
        action: str,
        resource: str,
        resource_id: str,
        details: dict[str, Any] | None = None,
        actor_id: str | None = None,
    ) -> None:
        ctx = get_actor_context()
        await self._repo.create_entry(
            ActivityLogEntry(
                action=action,
                resource=resource,
                resource_id=resource_id,
                actor_id=actor_id or ctx.user_id,
                details=details or {},
                ip_address=ctx.ip_address,
                user_agent=ctx.user_agent,
            )
        )
