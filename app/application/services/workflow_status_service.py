"""Workflow status service: the ordered set of states a task may be in.

At most one active status is the default at a time; setting a new default
clears the flag everywhere else first. Statuses are never removed, only
deactivated, so historical tasks keep resolving their status by id.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING

from app.application.dtos.workflow import (
    StatusDefinition,
    WorkflowStatusCreate,
    WorkflowStatusResult,
    WorkflowStatusUpdate,
)
from app.core.constants import DEFAULT_STATUS_COLOR
from app.domain.exceptions import (
    ConflictException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import HexColor, Slug, slugify

if TYPE_CHECKING:
    from app.application.interfaces.repositories import IWorkflowStatusRepository


def _validated_color(color: str) -> str:
    try:
        return HexColor(color).value
    except ValueError as e:
        raise ValidationException(str(e), field="color") from e


def _validated_slug(slug: str) -> str:
    try:
        return Slug(slug).value
    except ValueError as e:
        raise ValidationException(str(e), field="slug") from e


class WorkflowStatusService:
    """Create, update, deactivate and read workflow statuses."""

    def __init__(self, status_repo: IWorkflowStatusRepository) -> None:
        self._repo = status_repo

    async def _ensure_unique(
        self, name: str | None, slug: str | None, exclude_id: str | None = None
    ) -> None:
        if name is not None:
            clash = await self._repo.get_by_name(name)
            if clash is not None and clash.id != exclude_id:
                raise ConflictException(
                    f"A status named '{name}' already exists",
                    resource_type="workflow_status",
                    name=name,
                )
        if slug is not None:
            clash = await self._repo.get_by_slug(slug)
            if clash is not None and clash.id != exclude_id:
                raise ConflictException(
                    f"A status with slug '{slug}' already exists",
                    resource_type="workflow_status",
                    slug=slug,
                )

    async def get(self, status_id: str) -> WorkflowStatusResult:
        """Return a status by id, active or not.

        Raises:
            ResourceNotFoundException: Unknown status id.
        """
        status = await self._repo.get_status(status_id)
        if status is None:
            raise ResourceNotFoundException("workflow_status", status_id)
        return status

    async def get_default(self) -> WorkflowStatusResult | None:
        return await self._repo.get_default()

    async def list_active(self) -> list[WorkflowStatusResult]:
        """Active statuses by ascending order (display only, not reachability)."""
        return await self._repo.list_active()

    async def create(
        self,
        name: str,
        order: int,
        slug: str | None = None,
        color: str = DEFAULT_STATUS_COLOR,
        is_default: bool = False,
        is_final: bool = False,
    ) -> WorkflowStatusResult:
        """Create a status; the slug is derived from the name when omitted.

        Raises:
            ConflictException: Name or slug already used.
            ValidationException: Malformed slug or color.
        """
        name = name.strip()
        if not name:
            raise ValidationException("Status name is required", field="name")
        slug = _validated_slug(slug if slug else slugify(name))
        color = _validated_color(color)
        await self._ensure_unique(name, slug)
        if is_default:
            await self._repo.clear_defaults()
        return await self._repo.create_status(
            WorkflowStatusCreate(
                name=name,
                slug=slug,
                order=order,
                color=color,
                is_default=is_default,
                is_final=is_final,
            )
        )

    async def update(self, status_id: str, patch: WorkflowStatusUpdate) -> WorkflowStatusResult:
        """Apply a partial update.

        Raises:
            ResourceNotFoundException: Unknown status id.
            ConflictException: Name or slug used by another status.
            ValidationException: Malformed slug or color.
        """
        await self.get(status_id)
        fields = {k: v for k, v in asdict(patch).items() if v is not None}
        if "name" in fields:
            fields["name"] = fields["name"].strip()
        if "slug" in fields:
            fields["slug"] = _validated_slug(fields["slug"])
        if "color" in fields:
            fields["color"] = _validated_color(fields["color"])
        await self._ensure_unique(fields.get("name"), fields.get("slug"), exclude_id=status_id)
        if fields.get("is_default") is True:
            await self._repo.clear_defaults(except_status_id=status_id)
        updated = await self._repo.update_status(status_id, **fields)
        if updated is None:
            raise ResourceNotFoundException("workflow_status", status_id)
        return updated

    async def deactivate(self, status_id: str) -> WorkflowStatusResult:
        """Soft delete. Tasks and transitions referring to the status are not checked.

        Raises:
            ResourceNotFoundException: Unknown status id.
        """
        await self.get(status_id)
        updated = await self._repo.update_status(status_id, is_active=False)
        if updated is None:
            raise ResourceNotFoundException("workflow_status", status_id)
        return updated

    async def upsert_by_slug(self, definition: StatusDefinition) -> WorkflowStatusResult:
        """Create or refresh a status by slug (provisioning). Returns the stored status."""
        existing = await self._repo.get_by_slug(definition.slug)
        if existing is None:
            return await self.create(
                name=definition.name,
                slug=definition.slug,
                order=definition.order,
                color=definition.color,
                is_default=definition.is_default,
                is_final=definition.is_final,
            )
        unchanged = (
            existing.name == definition.name
            and existing.color == definition.color
            and existing.order == definition.order
            and existing.is_default == definition.is_default
            and existing.is_final == definition.is_final
        )
        if unchanged:
            return existing
        return await self.update(
            existing.id,
            WorkflowStatusUpdate(
                name=definition.name,
                color=definition.color,
                order=definition.order,
                is_default=definition.is_default,
                is_final=definition.is_final,
            ),
        )
