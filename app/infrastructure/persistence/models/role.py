"""Role ORM model. Named, slugged bundle of permissions (super-admin, admin, manager, ...)."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import ActiveFlagMixin, IdentifiedModel
from app.infrastructure.persistence.models.permission import Permission, role_permission


class Role(IdentifiedModel, ActiveFlagMixin, Base):
    """Role. Table: role. Unique name and slug; system roles are seeded and protected."""

    __tablename__ = "role"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_system: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)

    permissions: Mapped[list[Permission]] = relationship(
        secondary=role_permission,
        lazy="selectin",
        order_by=Permission.code,
    )
