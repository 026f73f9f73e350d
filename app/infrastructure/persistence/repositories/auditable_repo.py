"""Auditable repository: automatic activity log emission on CRUD.

Extends BaseRepository; subclasses implement _get_entity_type and
_serialize_for_audit. The activity logger is injected (no lazy init). When
activity_logger is None, no entries are recorded.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.repositories.base import BaseRepository
from app.shared.context import get_current_actor_id
from app.shared.enums import AuditAction
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.application.interfaces.services import IActivityLogger

ModelType = TypeVar("ModelType", bound=Base)
_logger = get_logger(__name__)


class AuditableRepository(BaseRepository[ModelType]):
    """Repository that records '<entity>.<action>' activity on create/update/delete.

    Pass activity_logger in constructor when auditing is needed (DIP).
    Subclasses implement _get_entity_type and _serialize_for_audit.
    """

    def __init__(
        self,
        db: AsyncSession,
        model: type[ModelType],
        activity_logger: IActivityLogger | None = None,
        *,
        enable_audit: bool = True,
    ) -> None:
        super().__init__(db, model)
        self._activity_logger = activity_logger
        self._audit_enabled = enable_audit

    def disable_auditing(self) -> None:
        """Turn off auditing (bulk provisioning)."""
        self._audit_enabled = False

    @property
    def activity_logger(self) -> IActivityLogger | None:
        """Injected activity logger (read-only)."""
        return self._activity_logger

    @abstractmethod
    def _get_entity_type(self) -> str:
        """Return entity type for activity entries (e.g. 'role')."""
        ...

    @abstractmethod
    def _serialize_for_audit(self, obj: ModelType) -> dict[str, Any]:
        """Return dict representation for the activity details."""
        ...

    async def _emit_activity(
        self,
        action: AuditAction,
        obj: ModelType,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        """Record one activity entry. No-op if auditing disabled or logger not set."""
        if not self._audit_enabled or self._activity_logger is None:
            return
        entity_type = self._get_entity_type()
        details = self._serialize_for_audit(obj)
        if metadata:
            details = {**details, **metadata}
        try:
            await self._activity_logger.log(
                action=f"{entity_type}.{action.value}",
                resource=entity_type,
                resource_id=getattr(obj, "id", str(obj)),
                details=details,
                actor_id=get_current_actor_id(),
            )
        except Exception as e:
            _logger.warning(
                "Failed to record activity for %s.%s: %s",
                entity_type,
                action.value,
                str(e),
                exc_info=True,
            )

    async def _on_after_create(self, obj: ModelType) -> None:
        await super()._on_after_create(obj)
        await self._emit_activity(AuditAction.CREATED, obj)

    async def _on_after_update(self, obj: ModelType) -> None:
        await super()._on_after_update(obj)
        await self._emit_activity(AuditAction.UPDATED, obj)

    async def _on_before_delete(self, obj: ModelType) -> None:
        await super()._on_before_delete(obj)
        await self._emit_activity(AuditAction.DELETED, obj)

    async def create_with_action(
        self,
        obj: ModelType,
        action: AuditAction,
        metadata: dict[str, Any] | None = None,
    ) -> ModelType:
        """Persist a new record and record a custom action instead of CREATED (e.g. cloned)."""
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        await self._emit_activity(action, obj, metadata)
        return obj

    async def save_with_action(
        self,
        obj: ModelType,
        action: AuditAction,
        metadata: dict[str, Any] | None = None,
    ) -> ModelType:
        """Flush an update and record a custom action instead of UPDATED (e.g. deactivated)."""
        await self.db.flush()
        await self.db.refresh(obj)
        await self._emit_activity(action, obj, metadata)
        return obj
