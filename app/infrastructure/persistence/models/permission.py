"""Permission ORM model, role_permission link table, and UserRole assignment (RBAC)."""

from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, IdentifiedModel


class Permission(IdentifiedModel, Base):
    """Permission. Table: permission. Unique (resource, action); code is 'resource:action'."""

    __tablename__ = "permission"

    code: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    resource: Mapped[str] = mapped_column(String, nullable=False)
    action: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    group: Mapped[str] = mapped_column(String, nullable=False, default="General")

    __table_args__ = (
        UniqueConstraint("resource", "action", name="uq_permission_resource_action"),
    )


# Unordered set of permissions per role; rows go away with either side.
role_permission = Table(
    "role_permission",
    Base.metadata,
    Column(
        "role_id",
        String,
        ForeignKey("role.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "permission_id",
        String,
        ForeignKey("permission.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class UserRole(CuidMixin, Base):
    """User-role assignment. Table: user_role.

    role_id deliberately has no foreign key: deleting a role leaves
    assignments in place and the permission resolver skips them.
    """

    __tablename__ = "user_role"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    role_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    assigned_by: Mapped[str | None] = mapped_column(String, nullable=True)
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint("user_id", "role_id", name="uq_user_role"),
        Index("ix_user_role_user", "user_id"),
    )
