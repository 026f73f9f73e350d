"""Task and task comment repositories. Status writes are conditional (optimistic concurrency)."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import TaskCommentResult, TaskResult
from app.infrastructure.persistence.models.task import Task, TaskComment
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.utils import ensure_utc


def _task_to_result(t: Task) -> TaskResult:
    """Map ORM Task to application TaskResult."""
    return TaskResult(
        id=t.id,
        title=t.title,
        status_id=t.status_id,
        completed_at=ensure_utc(t.completed_at),
        created_by=t.created_by,
        department_id=t.department_id,
        assignee_ids=tuple(t.assignee_ids or ()),
        version=t.version,
    )


def _comment_to_result(c: TaskComment) -> TaskCommentResult:
    """Map ORM TaskComment to application TaskCommentResult."""
    return TaskCommentResult(
        id=c.id,
        task_id=c.task_id,
        author_id=c.author_id,
        content=c.content,
        is_system_generated=c.is_system_generated,
        created_at=c.created_at,
    )


class TaskRepository(BaseRepository[Task]):
    """Task repository (status fields only; task CRUD lives elsewhere)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def get_task(self, task_id: str) -> TaskResult | None:
        orm = await self.get_by_id(task_id)
        return _task_to_result(orm) if orm else None

    async def update_status_if_current(
        self,
        task_id: str,
        expected_status_id: str,
        new_status_id: str,
        completed_at: datetime | None = None,
    ) -> TaskResult | None:
        """Compare-and-set on status_id; bumps version. None when the row no longer matches."""
        values: dict[str, Any] = {
            "status_id": new_status_id,
            "version": Task.version + 1,
        }
        if completed_at is not None:
            values["completed_at"] = completed_at
        result = await self.db.execute(
            update(Task)
            .where(Task.id == task_id, Task.status_id == expected_status_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if not result.rowcount:
            return None
        return await self.get_task(task_id)


class TaskCommentRepository(BaseRepository[TaskComment]):
    """Task comment repository (append-only here)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, TaskComment)

    async def create_comment(
        self,
        task_id: str,
        author_id: str,
        content: str,
        *,
        is_system_generated: bool = False,
    ) -> TaskCommentResult:
        comment = TaskComment(
            task_id=task_id,
            author_id=author_id,
            content=content,
            is_system_generated=is_system_generated,
        )
        created = await self.create(comment)
        return _comment_to_result(created)

    async def list_for_task(self, task_id: str) -> list[TaskCommentResult]:
        result = await self.db.execute(
            select(TaskComment)
            .where(TaskComment.task_id == task_id)
            .order_by(TaskComment.created_at, TaskComment.id)
        )
        return [_comment_to_result(c) for c in result.scalars().all()]
