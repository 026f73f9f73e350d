"""Notification and NotificationRule ORM models."""

from datetime import datetime

from sqlalchemy import JSON, Boolean, CheckConstraint, DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.domain.enums import RecipientStrategy
from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import ActiveFlagMixin, IdentifiedModel


class NotificationRule(IdentifiedModel, ActiveFlagMixin, Base):
    """Which event notifies whom over which channels. Table: notification_rule."""

    __tablename__ = "notification_rule"

    event: Mapped[str] = mapped_column(String, nullable=False, index=True)
    channels: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    recipient_strategy: Mapped[str] = mapped_column(String, nullable=False)
    recipient_role_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint(
            "recipient_strategy IN ({})".format(
                ", ".join(f"'{v}'" for v in RecipientStrategy.values())
            ),
            name="notification_rule_strategy_check",
        ),
    )


class Notification(IdentifiedModel, Base):
    """In-app notification for one recipient. Table: notification."""

    __tablename__ = "notification"

    recipient_id: Mapped[str] = mapped_column(String, nullable=False)
    type: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    related_task_id: Mapped[str | None] = mapped_column(String, nullable=True)
    related_user_id: Mapped[str | None] = mapped_column(String, nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    read_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    email_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    email_sent_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index("ix_notification_recipient_read", "recipient_id", "is_read", "created_at"),
    )
