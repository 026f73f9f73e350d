"""ActivityLog ORM model. Append-only record of who did what to which resource."""

from typing import Any

from sqlalchemy import JSON, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import IdentifiedModel


class ActivityLog(IdentifiedModel, Base):
    """Activity log entry. Table: activity_log. action is '<resource>.<verb>'."""

    __tablename__ = "activity_log"

    actor_id: Mapped[str | None] = mapped_column(String, nullable=True)
    action: Mapped[str] = mapped_column(String, nullable=False, index=True)
    resource: Mapped[str] = mapped_column(String, nullable=False)
    resource_id: Mapped[str] = mapped_column(String, nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        Index("ix_activity_log_actor_created", "actor_id", "created_at"),
        Index("ix_activity_log_resource", "resource", "resource_id", "created_at"),
    )
