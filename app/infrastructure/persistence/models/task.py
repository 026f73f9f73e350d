"""Task and TaskComment ORM models (workflow-relevant fields only)."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdentifiedModel, VersionedMixin


class Task(IdentifiedModel, VersionedMixin, Base):
    """Task. Table: task. status_id references the current WorkflowStatus."""

    __tablename__ = "task"

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    status_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow_status.id"), nullable=False, index=True
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )
    assignee_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)


class TaskComment(IdentifiedModel, Base):
    """Comment on a task. Table: task_comment. System comments record status changes."""

    __tablename__ = "task_comment"

    task_id: Mapped[str] = mapped_column(
        String, ForeignKey("task.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(String, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    is_system_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (Index("ix_task_comment_task_created", "task_id", "created_at"),)
