"""Notification dispatcher: turns task.status_changed into in-app and email notifications.

Active NotificationRules for the status_changed event decide who is notified
(assignees, creator, department head, holders of specific roles) and over
which channels. The acting user is never notified of their own change.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.application.dtos.notification import (
    NotificationCreate,
    NotificationResult,
    NotificationRuleResult,
)
from app.domain.enums import NotificationChannel, NotificationType, RecipientStrategy
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.task import TaskResult
    from app.application.interfaces.repositories import (
        IDepartmentRepository,
        INotificationRepository,
        INotificationRuleRepository,
        ITaskRepository,
        IUserRepository,
    )
    from app.application.interfaces.services import INotificationSender
    from app.domain.events import TaskStatusChanged

logger = get_logger(__name__)


def status_changed_title(task_title: str | None) -> str:
    return f'Status changed on "{task_title or "a task"}"'


def status_changed_message(from_status: str | None, to_status: str | None) -> str:
    return f'Status changed from "{from_status or ""}" to "{to_status or ""}".'


class NotificationDispatcher:
    """Status change sink that fans out notifications per active rule (implements IStatusChangeSink)."""

    def __init__(
        self,
        rule_repo: INotificationRuleRepository,
        notification_repo: INotificationRepository,
        task_repo: ITaskRepository,
        user_repo: IUserRepository,
        department_repo: IDepartmentRepository,
        sender: INotificationSender | None = None,
        *,
        email_enabled: bool = True,
    ) -> None:
        self._rule_repo = rule_repo
        self._notification_repo = notification_repo
        self._task_repo = task_repo
        self._user_repo = user_repo
        self._department_repo = department_repo
        self._sender = sender
        self._email_enabled = email_enabled

    async def resolve_recipients(
        self, rule: NotificationRuleResult, task: TaskResult, actor_id: str
    ) -> list[str]:
        """Return recipient user ids for rule (actor excluded, insertion order kept)."""
        recipients: dict[str, None] = {}
        strategy = rule.recipient_strategy
        if strategy == RecipientStrategy.ASSIGNEES.value:
            recipients.update(dict.fromkeys(task.assignee_ids))
        elif strategy == RecipientStrategy.CREATOR.value:
            recipients[task.created_by] = None
        elif strategy == RecipientStrategy.DEPARTMENT_HEAD.value:
            if task.department_id:
                dept = await self._department_repo.get_department(task.department_id)
                if dept is not None and dept.head_id:
                    recipients[dept.head_id] = None
        elif strategy == RecipientStrategy.SPECIFIC_ROLES.value:
            if rule.recipient_role_ids:
                user_ids = await self._user_repo.get_active_user_ids_with_roles(
                    rule.recipient_role_ids
                )
                recipients.update(dict.fromkeys(user_ids))
        else:
            logger.warning(
                "Unknown recipient strategy %r on notification rule %s", strategy, rule.id
            )
        recipients.pop(actor_id, None)
        return list(recipients)

    async def handle(self, event: TaskStatusChanged) -> None:
        event_type = NotificationType.STATUS_CHANGED.value
        rules = await self._rule_repo.get_active_for_event(event_type)
        if not rules:
            return
        task = await self._task_repo.get_task(event.task_id)
        if task is None:
            logger.warning("Task %s vanished before notifications were sent", event.task_id)
            return
        title = status_changed_title(event.task_title or task.title)
        message = status_changed_message(event.from_status_name, event.to_status_name)

        for rule in rules:
            recipients = await self.resolve_recipients(rule, task, event.actor_id)
            if not recipients:
                continue
            stored: list[NotificationResult] = []
            if NotificationChannel.IN_APP.value in rule.channels:
                stored = await self._notification_repo.create_many(
                    [
                        NotificationCreate(
                            recipient_id=recipient_id,
                            type=event_type,
                            title=title,
                            message=message,
                            related_task_id=task.id,
                            related_user_id=event.actor_id,
                        )
                        for recipient_id in recipients
                    ]
                )
            if NotificationChannel.EMAIL.value in rule.channels:
                emailed = set(await self._send_emails(recipients, title, message))
                sent_ids = [n.id for n in stored if n.recipient_id in emailed]
                if sent_ids:
                    await self._notification_repo.mark_email_sent(sent_ids)

    async def _send_emails(
        self, recipient_ids: list[str], subject: str, body: str
    ) -> list[str]:
        """Email each active recipient separately; return the user ids actually sent to.

        Failures are logged per address.
        """
        if not self._email_enabled or self._sender is None:
            return []
        sent: list[str] = []
        for user in await self._user_repo.get_users(recipient_ids):
            if not user.is_active or not user.email:
                continue
            try:
                await self._sender.send([user.email], subject, body)
                sent.append(user.id)
            except Exception as e:
                logger.warning(
                    "Failed to send email notification to user %s: %s",
                    user.id,
                    str(e),
                    exc_info=True,
                )
        return sent
