"""Notification and notification rule repositories."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import (
    NotificationCreate,
    NotificationResult,
    NotificationRuleResult,
)
from app.infrastructure.persistence.models.notification import (
    Notification,
    NotificationRule,
)
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import utc_now


def _rule_to_result(r: NotificationRule) -> NotificationRuleResult:
    """Map ORM NotificationRule to application NotificationRuleResult."""
    return NotificationRuleResult(
        id=r.id,
        event=r.event,
        channels=tuple(r.channels or ()),
        recipient_strategy=r.recipient_strategy,
        recipient_role_ids=tuple(r.recipient_role_ids or ()),
        is_active=r.is_active,
    )


def _notification_to_result(n: Notification) -> NotificationResult:
    """Map ORM Notification to application NotificationResult."""
    return NotificationResult(
        id=n.id,
        recipient_id=n.recipient_id,
        type=n.type,
        title=n.title,
        message=n.message,
        related_task_id=n.related_task_id,
        related_user_id=n.related_user_id,
        is_read=n.is_read,
        email_sent=n.email_sent,
        created_at=n.created_at,
    )


class NotificationRuleRepository(BaseRepository[NotificationRule]):
    """Notification rule reads (rules are configured by administrators)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, NotificationRule)

    async def get_active_for_event(self, event: str) -> list[NotificationRuleResult]:
        result = await self.db.execute(
            select(NotificationRule)
            .where(
                NotificationRule.event == event,
                NotificationRule.is_active.is_(True),
            )
            .order_by(NotificationRule.created_at)
        )
        return [_rule_to_result(r) for r in result.scalars().all()]

    async def create_rule(
        self,
        event: str,
        channels: Iterable[str],
        recipient_strategy: str,
        recipient_role_ids: Iterable[str] = (),
    ) -> NotificationRuleResult:
        rule = NotificationRule(
            event=event,
            channels=list(channels),
            recipient_strategy=recipient_strategy,
            recipient_role_ids=list(recipient_role_ids),
            is_active=True,
        )
        created = await self.create(rule)
        return _rule_to_result(created)


class NotificationRepository(BaseRepository[Notification]):
    """In-app notification store."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create_many(
        self, notifications: list[NotificationCreate]
    ) -> list[NotificationResult]:
        rows = [
            Notification(
                recipient_id=n.recipient_id,
                type=n.type,
                title=n.title,
                message=n.message,
                related_task_id=n.related_task_id,
                related_user_id=n.related_user_id,
            )
            for n in notifications
        ]
        if not rows:
            return []
        self.db.add_all(rows)
        await self.db.flush()
        for row in rows:
            await self.db.refresh(row)
        return [_notification_to_result(r) for r in rows]

    async def mark_email_sent(self, notification_ids: Iterable[str]) -> int:
        ids = list(notification_ids)
        if not ids:
            return 0
        result = await self.db.execute(
            update(Notification)
            .where(Notification.id.in_(ids))
            .values(email_sent=True, email_sent_at=utc_now())
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def list_for_recipient(
        self, recipient_id: str, unread_only: bool = False, limit: int = 50
    ) -> list[NotificationResult]:
        q = select(Notification).where(Notification.recipient_id == recipient_id)
        if unread_only:
            q = q.where(Notification.is_read.is_(False))
        result = await self.db.execute(
            q.order_by(Notification.created_at.desc()).limit(limit)
        )
        return [_notification_to_result(n) for n in result.scalars().all()]
