"""WorkflowStatus and WorkflowTransition ORM models. Task lifecycle states and edges."""

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import ActiveFlagMixin, IdentifiedModel


class WorkflowStatus(IdentifiedModel, ActiveFlagMixin, Base):
    """Workflow status. Table: workflow_status. Unique name and slug."""

    __tablename__ = "workflow_status"

    name: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False, default="#6b7280")
    order: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_final: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)


class WorkflowTransition(IdentifiedModel, ActiveFlagMixin, Base):
    """Directed edge between two statuses. Table: workflow_transition.

    Unique per ordered (from_status_id, to_status_id) pair, active or not.
    Role gates are stored as id lists; an empty allowed_role_ids list means
    any principal with tasks:update may take the edge.
    """

    __tablename__ = "workflow_transition"

    from_status_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow_status.id", ondelete="CASCADE"), nullable=False
    )
    to_status_id: Mapped[str] = mapped_column(
        String, ForeignKey("workflow_status.id", ondelete="CASCADE"), nullable=False
    )
    allowed_role_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    requires_remarks: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    requires_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    approver_role_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    __table_args__ = (
        UniqueConstraint(
            "from_status_id", "to_status_id", name="uq_workflow_transition_pair"
        ),
    )
