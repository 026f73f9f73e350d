"""Activity log repository (append-only; no update or delete)."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.activity_log import ActivityLogEntry, ActivityLogResult
from app.infrastructure.persistence.models.activity_log import ActivityLog
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc


def _log_to_result(a: ActivityLog) -> ActivityLogResult:
    """Map ORM ActivityLog to application ActivityLogResult."""
    return ActivityLogResult(
        id=a.id,
        action=a.action,
        resource=a.resource,
        resource_id=a.resource_id,
        actor_id=a.actor_id,
        details=dict(a.details or {}),
        created_at=ensure_utc(a.created_at),
    )


class ActivityLogRepository(BaseRepository[ActivityLog]):
    """Activity log repository. Entries are immutable once written."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ActivityLog)

    async def create_entry(self, entry: ActivityLogEntry) -> ActivityLogResult:
        log = ActivityLog(
            actor_id=entry.actor_id,
            action=entry.action,
            resource=entry.resource,
            resource_id=entry.resource_id,
            details=dict(entry.details),
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
        )
        created = await self.create(log)
        return _log_to_result(created)

    async def list_for_resource(
        self, resource: str, resource_id: str, limit: int = 100
    ) -> list[ActivityLogResult]:
        result = await self.db.execute(
            select(ActivityLog)
            .where(
                ActivityLog.resource == resource,
                ActivityLog.resource_id == resource_id,
            )
            .order_by(ActivityLog.created_at.desc(), ActivityLog.id.desc())
            .limit(limit)
        )
        return [_log_to_result(a) for a in result.scalars().all()]
