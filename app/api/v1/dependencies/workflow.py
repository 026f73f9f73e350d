"""Workflow configuration and task status dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services import (
    ActivityLogService,
    ActivityLogSink,
    NotificationDispatcher,
    StatusChangeDispatcher,
    TaskStatusService,
    WorkflowStatusService,
    WorkflowTransitionService,
)
from app.core.config import get_settings
from app.infrastructure.persistence.repositories import (
    DepartmentRepository,
    NotificationRepository,
    NotificationRuleRepository,
    RoleRepository,
    TaskCommentRepository,
    TaskRepository,
    UserRepository,
    WorkflowStatusRepository,
    WorkflowTransitionRepository,
)
from app.infrastructure.services import LogOnlyNotificationSender

from .db import get_db, get_db_transactional
from .rbac import get_activity_logger


def get_status_read_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowStatusService:
    return WorkflowStatusService(WorkflowStatusRepository(db))


def get_status_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    activity_logger: Annotated[ActivityLogService, Depends(get_activity_logger)],
) -> WorkflowStatusService:
    """Status service for writes (activity logged)."""
    return WorkflowStatusService(WorkflowStatusRepository(db, activity_logger))


def get_transition_read_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> WorkflowTransitionService:
    return WorkflowTransitionService(
        WorkflowTransitionRepository(db),
        WorkflowStatusRepository(db),
        RoleRepository(db),
    )


def get_transition_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    activity_logger: Annotated[ActivityLogService, Depends(get_activity_logger)],
) -> WorkflowTransitionService:
    """Transition service for writes (activity logged)."""
    return WorkflowTransitionService(
        WorkflowTransitionRepository(db, activity_logger),
        WorkflowStatusRepository(db),
        RoleRepository(db),
    )


def get_status_change_dispatcher(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    activity_logger: Annotated[ActivityLogService, Depends(get_activity_logger)],
) -> StatusChangeDispatcher:
    """Activity log and notification sinks; each runs under its own savepoint."""
    settings = get_settings()
    notifications = NotificationDispatcher(
        rule_repo=NotificationRuleRepository(db),
        notification_repo=NotificationRepository(db),
        task_repo=TaskRepository(db),
        user_repo=UserRepository(db),
        department_repo=DepartmentRepository(db),
        sender=LogOnlyNotificationSender(),
        email_enabled=settings.notification_email_enabled,
    )
    return StatusChangeDispatcher(
        sinks=[ActivityLogSink(activity_logger), notifications],
        isolate=db.begin_nested,
    )


def get_task_status_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    dispatcher: Annotated[StatusChangeDispatcher, Depends(get_status_change_dispatcher)],
) -> TaskStatusService:
    """Task status machine bound to the request's write transaction."""
    return TaskStatusService(
        task_repo=TaskRepository(db),
        comment_repo=TaskCommentRepository(db),
        status_repo=WorkflowStatusRepository(db),
        transition_repo=WorkflowTransitionRepository(db),
        dispatcher=dispatcher,
        conflict_retries=get_settings().status_change_conflict_retries,
    )


def get_task_read_deps(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> tuple[TaskRepository, WorkflowTransitionService]:
    """Task repository and transition service for GET /tasks/{id}/transitions."""
    return TaskRepository(db), get_transition_read_service(db)
