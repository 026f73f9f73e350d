"""User and Department ORM models (read-only for the workflow core)."""

from sqlalchemy import Boolean, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import ActiveFlagMixin, IdentifiedModel


class Department(IdentifiedModel, ActiveFlagMixin, Base):
    """Department. Table: department. head_id is the department head user."""

    __tablename__ = "department"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    code: Mapped[str | None] = mapped_column(String(10), nullable=True, unique=True)
    head_id: Mapped[str | None] = mapped_column(String, nullable=True)


class User(IdentifiedModel, Base):
    """User. Table: app_user (user is reserved in Postgres)."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    department_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("department.id", ondelete="SET NULL"), nullable=True
    )
