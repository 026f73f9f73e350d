"""Workflow transition repository with activity log. Read methods return WorkflowTransitionResult."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import (
    WorkflowTransitionCreate,
    WorkflowTransitionResult,
)
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.workflow import WorkflowTransition
from app.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from app.shared.enums import AuditAction

if TYPE_CHECKING:
    from app.application.interfaces.services import IActivityLogger

_UPDATABLE_FIELDS = frozenset(
    {
        "allowed_role_ids",
        "requires_remarks",
        "requires_approval",
        "approver_role_ids",
        "is_active",
    }
)
_LIST_FIELDS = frozenset({"allowed_role_ids", "approver_role_ids"})


def _transition_to_result(t: WorkflowTransition) -> WorkflowTransitionResult:
    """Map ORM WorkflowTransition to application WorkflowTransitionResult."""
    return WorkflowTransitionResult(
        id=t.id,
        from_status_id=t.from_status_id,
        to_status_id=t.to_status_id,
        allowed_role_ids=tuple(t.allowed_role_ids or ()),
        requires_remarks=t.requires_remarks,
        requires_approval=t.requires_approval,
        approver_role_ids=tuple(t.approver_role_ids or ()),
        is_active=t.is_active,
    )


class WorkflowTransitionRepository(AuditableRepository[WorkflowTransition]):
    """Workflow transition repository. One row per ordered (from, to) pair."""

    def __init__(
        self,
        db: AsyncSession,
        activity_logger: IActivityLogger | None = None,
        *,
        enable_audit: bool = True,
    ) -> None:
        super().__init__(
            db, WorkflowTransition, activity_logger, enable_audit=enable_audit
        )

    def _get_entity_type(self) -> str:
        return "workflow_transition"

    def _serialize_for_audit(self, obj: WorkflowTransition) -> dict[str, Any]:
        return {
            "from_status_id": obj.from_status_id,
            "to_status_id": obj.to_status_id,
            "allowed_role_ids": list(obj.allowed_role_ids or []),
            "requires_remarks": obj.requires_remarks,
            "requires_approval": obj.requires_approval,
            "is_active": obj.is_active,
        }

    async def get_transition(self, transition_id: str) -> WorkflowTransitionResult | None:
        orm = await self.get_by_id(transition_id)
        return _transition_to_result(orm) if orm else None

    async def get_by_pair(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        result = await self.db.execute(
            select(WorkflowTransition).where(
                WorkflowTransition.from_status_id == from_status_id,
                WorkflowTransition.to_status_id == to_status_id,
            )
        )
        row = result.scalar_one_or_none()
        return _transition_to_result(row) if row else None

    async def find_active_edge(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        result = await self.db.execute(
            select(WorkflowTransition).where(
                WorkflowTransition.from_status_id == from_status_id,
                WorkflowTransition.to_status_id == to_status_id,
                WorkflowTransition.is_active.is_(True),
            )
        )
        row = result.scalar_one_or_none()
        return _transition_to_result(row) if row else None

    async def list_active(self) -> list[WorkflowTransitionResult]:
        result = await self.db.execute(
            select(WorkflowTransition)
            .where(WorkflowTransition.is_active.is_(True))
            .order_by(WorkflowTransition.created_at)
        )
        return [_transition_to_result(t) for t in result.scalars().all()]

    async def list_active_from(self, from_status_id: str) -> list[WorkflowTransitionResult]:
        result = await self.db.execute(
            select(WorkflowTransition)
            .where(
                WorkflowTransition.from_status_id == from_status_id,
                WorkflowTransition.is_active.is_(True),
            )
            .order_by(WorkflowTransition.created_at)
        )
        return [_transition_to_result(t) for t in result.scalars().all()]

    async def create_transition(
        self, data: WorkflowTransitionCreate
    ) -> WorkflowTransitionResult:
        transition = WorkflowTransition(
            from_status_id=data.from_status_id,
            to_status_id=data.to_status_id,
            allowed_role_ids=list(data.allowed_role_ids),
            requires_remarks=data.requires_remarks,
            requires_approval=data.requires_approval,
            approver_role_ids=list(data.approver_role_ids),
            is_active=True,
        )
        try:
            created = await self.create(transition)
        except IntegrityError as e:
            raise ConflictException(
                "A transition between these statuses already exists",
                resource_type="workflow_transition",
                from_status_id=data.from_status_id,
                to_status_id=data.to_status_id,
            ) from e
        return _transition_to_result(created)

    async def update_transition(
        self, transition_id: str, **fields: object
    ) -> WorkflowTransitionResult | None:
        """Apply fields; is_active=False alone is recorded as workflow_transition.deactivated."""
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown workflow transition fields: {sorted(unknown)}")
        transition = await self.get_by_id(transition_id)
        if transition is None:
            return None
        for key, value in fields.items():
            if value is None:
                continue
            # JSON columns: assign a fresh list so the change is detected.
            setattr(transition, key, list(value) if key in _LIST_FIELDS else value)  # type: ignore[call-overload]
        if fields == {"is_active": False}:
            updated = await self.save_with_action(transition, AuditAction.DEACTIVATED)
        else:
            updated = await self.save(transition)
        return _transition_to_result(updated)
