"""Catalog provisioning: permissions, system roles and the default workflow.

Every step is an upsert by natural key (permission by resource + action,
role and status by slug, transition by ordered status pair), so running it
again never duplicates rows. Provisioning writes are not recorded in the
activity log.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import (
    WorkflowTransitionCreate,
    WorkflowTransitionUpdate,
)
from app.application.services.permission_catalog import (
    DEFAULT_WORKFLOW_STATUSES,
    DEFAULT_WORKFLOW_TRANSITIONS,
    PERMISSIONS,
    ROLE_DEFINITIONS,
)
from app.application.services.role_service import RoleService
from app.application.services.workflow_status_service import WorkflowStatusService
from app.application.services.workflow_transition_service import (
    WorkflowTransitionService,
)
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
    WorkflowStatusRepository,
    WorkflowTransitionRepository,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ProvisioningSummary:
    """Ids of everything provisioned, keyed by natural key."""

    permission_ids: dict[str, str]
    role_ids: dict[str, str]
    status_ids: dict[str, str]
    transition_ids: dict[tuple[str, str], str]


class CatalogProvisioningService:
    """Loads the static catalog into the database. Safe to run on every deploy."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self._permission_repo = PermissionRepository(db)
        self._role_repo = RoleRepository(db, enable_audit=False)
        self._status_repo = WorkflowStatusRepository(db, enable_audit=False)
        self._transition_repo = WorkflowTransitionRepository(db, enable_audit=False)
        self._user_repo = UserRepository(db)

    async def provision(self, *, include_workflow: bool = True) -> ProvisioningSummary:
        """Upsert permissions and system roles, then (optionally) the default workflow."""
        permission_ids = await self._provision_permissions()
        role_ids = await self._provision_roles(permission_ids)
        status_ids: dict[str, str] = {}
        transition_ids: dict[tuple[str, str], str] = {}
        if include_workflow:
            status_ids = await self._provision_statuses()
            transition_ids = await self._provision_transitions(status_ids, role_ids)
        await self.db.flush()
        logger.info(
            "Catalog provisioned: %d permissions, %d roles, %d statuses, %d transitions",
            len(permission_ids),
            len(role_ids),
            len(status_ids),
            len(transition_ids),
        )
        return ProvisioningSummary(permission_ids, role_ids, status_ids, transition_ids)

    async def _provision_permissions(self) -> dict[str, str]:
        ids: dict[str, str] = {}
        for definition in PERMISSIONS:
            stored = await self._permission_repo.upsert(definition)
            ids[stored.code] = stored.id
        return ids

    async def _provision_roles(self, permission_ids: dict[str, str]) -> dict[str, str]:
        service = RoleService(self._role_repo, self._permission_repo)
        ids: dict[str, str] = {}
        for definition in ROLE_DEFINITIONS:
            role = await service.upsert_system_role(
                slug=definition.slug,
                name=definition.name,
                description=definition.description,
                permission_ids=[permission_ids[c] for c in definition.permission_codes],
            )
            ids[role.slug] = role.id
        return ids

    async def _provision_statuses(self) -> dict[str, str]:
        service = WorkflowStatusService(self._status_repo)
        ids: dict[str, str] = {}
        for definition in DEFAULT_WORKFLOW_STATUSES:
            status = await service.upsert_by_slug(definition)
            ids[status.slug] = status.id
        return ids

    async def _provision_transitions(
        self, status_ids: dict[str, str], role_ids: dict[str, str]
    ) -> dict[tuple[str, str], str]:
        service = WorkflowTransitionService(
            self._transition_repo, self._status_repo, self._role_repo
        )
        ids: dict[tuple[str, str], str] = {}
        for definition in DEFAULT_WORKFLOW_TRANSITIONS:
            from_id = status_ids[definition.from_slug]
            to_id = status_ids[definition.to_slug]
            allowed = tuple(role_ids[s] for s in definition.allowed_role_slugs)
            existing = await self._transition_repo.get_by_pair(from_id, to_id)
            if existing is None:
                edge = await service.create(
                    WorkflowTransitionCreate(
                        from_status_id=from_id,
                        to_status_id=to_id,
                        allowed_role_ids=allowed,
                        requires_remarks=definition.requires_remarks,
                    )
                )
            elif (
                set(existing.allowed_role_ids) != set(allowed)
                or existing.requires_remarks != definition.requires_remarks
            ):
                edge = await service.update(
                    existing.id,
                    WorkflowTransitionUpdate(
                        allowed_role_ids=allowed,
                        requires_remarks=definition.requires_remarks,
                    ),
                )
            else:
                edge = existing
            ids[(definition.from_slug, definition.to_slug)] = edge.id
        return ids

    async def assign_role(self, user_id: str, role_slug: str) -> None:
        """Assign a provisioned role to a user (e.g. the first super admin)."""
        role = await self._role_repo.get_by_slug(role_slug)
        if role is None:
            raise ResourceNotFoundException("role", role_slug)
        await self._user_repo.assign_role(user_id, role.id)
