"""Workflow transition service: directed edges between statuses.

An edge is unique per ordered (from, to) pair whether active or not, so the
reverse pair is a separate edge. Only active edges are usable by the task
status machine. Self-loops are accepted.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import asdict
from typing import TYPE_CHECKING

from app.application.dtos.workflow import (
    AvailableTransition,
    WorkflowTransitionCreate,
    WorkflowTransitionResult,
    WorkflowTransitionUpdate,
)
from app.application.services.transition_guards import passes_role_gate
from app.domain.exceptions import (
    ConflictException,
    InvalidReferenceException,
    ResourceNotFoundException,
)

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IRoleRepository,
        IWorkflowStatusRepository,
        IWorkflowTransitionRepository,
    )
    from app.domain.entities import Principal


class WorkflowTransitionService:
    """Create, update, deactivate and query workflow transitions."""

    def __init__(
        self,
        transition_repo: IWorkflowTransitionRepository,
        status_repo: IWorkflowStatusRepository,
        role_repo: IRoleRepository,
    ) -> None:
        self._repo = transition_repo
        self._status_repo = status_repo
        self._role_repo = role_repo

    async def _validate_statuses(self, *status_ids: str) -> None:
        missing: list[str] = []
        for status_id in dict.fromkeys(status_ids):
            status = await self._status_repo.get_status(status_id)
            if status is None or not status.is_active:
                missing.append(status_id)
        if missing:
            raise InvalidReferenceException("workflow_status", missing)

    async def _validate_roles(self, *role_id_sets: Iterable[str]) -> None:
        wanted = list(dict.fromkeys(r for ids in role_id_sets for r in ids))
        if not wanted:
            return
        found = {r.id for r in await self._role_repo.get_by_ids(wanted)}
        missing = [r for r in wanted if r not in found]
        if missing:
            raise InvalidReferenceException("role", missing)

    async def get(self, transition_id: str) -> WorkflowTransitionResult:
        """Return an edge by id, active or not.

        Raises:
            ResourceNotFoundException: Unknown transition id.
        """
        transition = await self._repo.get_transition(transition_id)
        if transition is None:
            raise ResourceNotFoundException("workflow_transition", transition_id)
        return transition

    async def create(self, data: WorkflowTransitionCreate) -> WorkflowTransitionResult:
        """Create an edge.

        Raises:
            InvalidReferenceException: Missing or inactive status, or unknown role id.
            ConflictException: The ordered pair already has an edge (active or not).
        """
        await self._validate_statuses(data.from_status_id, data.to_status_id)
        await self._validate_roles(data.allowed_role_ids, data.approver_role_ids)
        existing = await self._repo.get_by_pair(data.from_status_id, data.to_status_id)
        if existing is not None:
            raise ConflictException(
                "A transition between these statuses already exists",
                resource_type="workflow_transition",
                from_status_id=data.from_status_id,
                to_status_id=data.to_status_id,
                existing_id=existing.id,
            )
        return await self._repo.create_transition(data)

    async def update(
        self, transition_id: str, patch: WorkflowTransitionUpdate
    ) -> WorkflowTransitionResult:
        """Apply a partial update (endpoints are immutable).

        Raises:
            ResourceNotFoundException: Unknown transition id.
            InvalidReferenceException: Unknown role id.
        """
        await self.get(transition_id)
        await self._validate_roles(
            patch.allowed_role_ids or (), patch.approver_role_ids or ()
        )
        fields = {k: v for k, v in asdict(patch).items() if v is not None}
        updated = await self._repo.update_transition(transition_id, **fields)
        if updated is None:
            raise ResourceNotFoundException("workflow_transition", transition_id)
        return updated

    async def deactivate(self, transition_id: str) -> WorkflowTransitionResult:
        """Soft delete (is_active = False). The pair stays reserved.

        Raises:
            ResourceNotFoundException: Unknown transition id.
        """
        await self.get(transition_id)
        updated = await self._repo.update_transition(transition_id, is_active=False)
        if updated is None:
            raise ResourceNotFoundException("workflow_transition", transition_id)
        return updated

    async def find_edge(
        self, from_status_id: str, to_status_id: str
    ) -> WorkflowTransitionResult | None:
        """Return the active edge for the ordered pair, or None."""
        return await self._repo.find_active_edge(from_status_id, to_status_id)

    async def list_active(self) -> list[WorkflowTransitionResult]:
        return await self._repo.list_active()

    async def list_from(self, status_id: str) -> list[WorkflowTransitionResult]:
        return await self._repo.list_active_from(status_id)

    async def available_transitions(
        self, from_status_id: str, principal: Principal
    ) -> list[AvailableTransition]:
        """Active outgoing edges whose role gate the principal passes, to active statuses.

        Ordered by the target status' display order.
        """
        options: list[AvailableTransition] = []
        for edge in await self._repo.list_active_from(from_status_id):
            if not passes_role_gate(edge, principal):
                continue
            target = await self._status_repo.get_status(edge.to_status_id)
            if target is None or not target.is_active:
                continue
            options.append(
                AvailableTransition(
                    transition_id=edge.id,
                    to_status=target,
                    requires_remarks=edge.requires_remarks,
                    requires_approval=edge.requires_approval,
                )
            )
        options.sort(key=lambda o: (o.to_status.order, o.to_status.name))
        return options
