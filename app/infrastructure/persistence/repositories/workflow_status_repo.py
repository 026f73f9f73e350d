"""Workflow status repository with activity log. Read methods return WorkflowStatusResult."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import WorkflowStatusCreate, WorkflowStatusResult
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.workflow import WorkflowStatus
from app.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from app.shared.enums import AuditAction

if TYPE_CHECKING:
    from app.application.interfaces.services import IActivityLogger

_UPDATABLE_FIELDS = frozenset(
    {"name", "slug", "color", "order", "is_default", "is_final", "is_active"}
)


def _status_to_result(s: WorkflowStatus) -> WorkflowStatusResult:
    """Map ORM WorkflowStatus to application WorkflowStatusResult."""
    return WorkflowStatusResult(
        id=s.id,
        name=s.name,
        slug=s.slug,
        color=s.color,
        order=s.order,
        is_default=s.is_default,
        is_final=s.is_final,
        is_active=s.is_active,
    )


def _status_conflict(name: str, slug: str) -> ConflictException:
    """Unique violation on workflow_status.name or slug."""
    return ConflictException(
        f"A status named '{name}' or with slug '{slug}' already exists",
        resource_type="workflow_status",
        name=name,
        slug=slug,
    )


class WorkflowStatusRepository(AuditableRepository[WorkflowStatus]):
    """Workflow status repository. Deactivation is a soft delete; rows are never removed."""

    def __init__(
        self,
        db: AsyncSession,
        activity_logger: IActivityLogger | None = None,
        *,
        enable_audit: bool = True,
    ) -> None:
        super().__init__(db, WorkflowStatus, activity_logger, enable_audit=enable_audit)

    def _get_entity_type(self) -> str:
        return "workflow_status"

    def _serialize_for_audit(self, obj: WorkflowStatus) -> dict[str, Any]:
        return {
            "name": obj.name,
            "slug": obj.slug,
            "order": obj.order,
            "is_default": obj.is_default,
            "is_final": obj.is_final,
            "is_active": obj.is_active,
        }

    async def get_status(self, status_id: str) -> WorkflowStatusResult | None:
        orm = await self.get_by_id(status_id)
        return _status_to_result(orm) if orm else None

    async def get_by_slug(self, slug: str) -> WorkflowStatusResult | None:
        result = await self.db.execute(
            select(WorkflowStatus).where(WorkflowStatus.slug == slug)
        )
        row = result.scalar_one_or_none()
        return _status_to_result(row) if row else None

    async def get_by_name(self, name: str) -> WorkflowStatusResult | None:
        result = await self.db.execute(
            select(WorkflowStatus).where(WorkflowStatus.name == name)
        )
        row = result.scalar_one_or_none()
        return _status_to_result(row) if row else None

    async def get_default(self) -> WorkflowStatusResult | None:
        result = await self.db.execute(
            select(WorkflowStatus)
            .where(
                WorkflowStatus.is_default.is_(True),
                WorkflowStatus.is_active.is_(True),
            )
            .order_by(WorkflowStatus.order)
            .limit(1)
        )
        row = result.scalar_one_or_none()
        return _status_to_result(row) if row else None

    async def list_active(self) -> list[WorkflowStatusResult]:
        result = await self.db.execute(
            select(WorkflowStatus)
            .where(WorkflowStatus.is_active.is_(True))
            .order_by(WorkflowStatus.order, WorkflowStatus.name)
        )
        return [_status_to_result(s) for s in result.scalars().all()]

    async def create_status(self, data: WorkflowStatusCreate) -> WorkflowStatusResult:
        status = WorkflowStatus(
            name=data.name,
            slug=data.slug,
            color=data.color,
            order=data.order,
            is_default=data.is_default,
            is_final=data.is_final,
            is_active=True,
        )
        try:
            created = await self.create(status)
        except IntegrityError as e:
            raise _status_conflict(data.name, data.slug) from e
        return _status_to_result(created)

    async def update_status(
        self, status_id: str, **fields: object
    ) -> WorkflowStatusResult | None:
        """Apply fields; is_active=False alone is recorded as workflow_status.deactivated."""
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown workflow status fields: {sorted(unknown)}")
        status = await self.get_by_id(status_id)
        if status is None:
            return None
        for key, value in fields.items():
            if value is not None:
                setattr(status, key, value)
        new_name, new_slug = status.name, status.slug
        try:
            if fields == {"is_active": False}:
                updated = await self.save_with_action(status, AuditAction.DEACTIVATED)
            else:
                updated = await self.save(status)
        except IntegrityError as e:
            raise _status_conflict(new_name, new_slug) from e
        return _status_to_result(updated)

    async def clear_defaults(self, except_status_id: str | None = None) -> int:
        stmt = (
            update(WorkflowStatus)
            .where(WorkflowStatus.is_default.is_(True))
            .values(is_default=False)
            .execution_options(synchronize_session="fetch")
        )
        if except_status_id is not None:
            stmt = stmt.where(WorkflowStatus.id != except_status_id)
        result = await self.db.execute(stmt)
        return result.rowcount or 0
