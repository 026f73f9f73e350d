"""Role application service: create, update, delete and clone roles.

Roles are named, slugged bundles of permissions. System roles (seeded by
provisioning) cannot be deleted or renamed. Each mutation is recorded in the
activity log by the role repository and drops cached permission sets once
the write transaction commits.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import TYPE_CHECKING

from app.application.dtos.role import RoleResult, RoleUpdate
from app.domain.exceptions import (
    ConflictException,
    InvalidReferenceException,
    ProtectedResourceException,
    ResourceNotFoundException,
    ValidationException,
)
from app.domain.value_objects import slugify
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IPermissionRepository,
        IRoleRepository,
    )
    from app.application.services.authorization_service import AuthorizationService

logger = get_logger(__name__)


class RoleService:
    """Role store operations over IRoleRepository with uniqueness and reference checks."""

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
        authorization_service: AuthorizationService | None = None,
        after_commit: Callable[[Callable[[], Awaitable[None]]], None] | None = None,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo
        self._authorization = authorization_service
        self._after_commit = after_commit

    def _slug_for(self, name: str) -> str:
        slug = slugify(name)
        if not slug:
            raise ValidationException(
                "Role name must contain at least one letter or digit", field="name"
            )
        return slug

    async def _ensure_slug_free(self, slug: str, exclude_role_id: str | None = None) -> None:
        existing = await self._role_repo.get_by_slug(slug)
        if existing is not None and existing.id != exclude_role_id:
            raise ConflictException(
                f"A role with slug '{slug}' already exists",
                resource_type="role",
                slug=slug,
            )

    async def _validate_permission_ids(self, permission_ids: Iterable[str]) -> list[str]:
        """Return de-duplicated ids; raise InvalidReferenceException for unknown ones."""
        ids = list(dict.fromkeys(permission_ids))
        if not ids:
            return []
        found = {p.id for p in await self._permission_repo.get_by_ids(ids)}
        missing = [i for i in ids if i not in found]
        if missing:
            raise InvalidReferenceException("permission", missing)
        return ids

    async def _invalidate(self) -> None:
        """Drop cached permission sets, deferred to after commit when a scheduler is set."""
        if self._authorization is None:
            return
        if self._after_commit is not None:
            self._after_commit(self._authorization.invalidate_cache)
        else:
            await self._authorization.invalidate_cache()

    async def _get_or_404(self, role_id: str) -> RoleResult:
        role = await self._role_repo.get_role(role_id)
        if role is None:
            raise ResourceNotFoundException("role", role_id)
        return role

    async def get(self, role_id: str) -> RoleResult:
        """Return role with its permission codes.

        Raises:
            ResourceNotFoundException: Unknown role id.
        """
        return await self._get_or_404(role_id)

    async def list(self, include_inactive: bool = True) -> list[RoleResult]:
        return await self._role_repo.list_roles(include_inactive=include_inactive)

    async def create(
        self,
        name: str,
        description: str | None = None,
        permission_ids: Iterable[str] = (),
        created_by: str | None = None,
    ) -> RoleResult:
        """Create a non-system role.

        Raises:
            ConflictException: Derived slug already taken.
            InvalidReferenceException: Unknown permission id.
        """
        slug = self._slug_for(name)
        await self._ensure_slug_free(slug)
        ids = await self._validate_permission_ids(permission_ids)
        created = await self._role_repo.create_role(
            name=name.strip(),
            slug=slug,
            description=description,
            permission_ids=ids,
            is_system=False,
            created_by=created_by,
        )
        await self._invalidate()
        logger.info("Role created: %s (%s)", created.slug, created.id)
        return created

    async def update(self, role_id: str, patch: RoleUpdate) -> RoleResult:
        """Apply a partial update; the slug follows the name.

        Raises:
            ResourceNotFoundException: Unknown role id.
            ProtectedResourceException: Renaming a system role.
            ConflictException: New slug already taken.
            InvalidReferenceException: Unknown permission id.
        """
        role = await self._get_or_404(role_id)
        name = slug = None
        if patch.name is not None and patch.name.strip() != role.name:
            if role.is_system:
                raise ProtectedResourceException(
                    "System role names cannot be changed", "role", role_id
                )
            name = patch.name.strip()
            slug = self._slug_for(name)
            await self._ensure_slug_free(slug, exclude_role_id=role_id)
        permission_ids = None
        if patch.permission_ids is not None:
            permission_ids = await self._validate_permission_ids(patch.permission_ids)
        updated = await self._role_repo.update_role(
            role_id,
            name=name,
            slug=slug,
            description=patch.description,
            is_active=patch.is_active,
            permission_ids=permission_ids,
        )
        if updated is None:
            raise ResourceNotFoundException("role", role_id)
        await self._invalidate()
        return updated

    async def delete(self, role_id: str) -> None:
        """Hard delete a non-system role. User assignments are left dangling.

        Raises:
            ResourceNotFoundException: Unknown role id.
            ProtectedResourceException: System role.
        """
        role = await self._get_or_404(role_id)
        if role.is_system:
            raise ProtectedResourceException(
                "System roles cannot be deleted", "role", role_id
            )
        if not await self._role_repo.delete_role(role_id):
            raise ResourceNotFoundException("role", role_id)
        await self._invalidate()
        logger.info("Role deleted: %s (%s)", role.slug, role_id)

    async def clone(
        self,
        source_role_id: str,
        new_name: str | None = None,
        description: str | None = None,
        created_by: str | None = None,
    ) -> RoleResult:
        """Create a non-system copy of a role's permission set.

        The copy is by value: later edits to either role do not affect the other.

        Raises:
            ResourceNotFoundException: Unknown source role id.
            ConflictException: Derived slug already taken.
        """
        source = await self._get_or_404(source_role_id)
        name = (new_name or "").strip() or f"{source.name} (Copy)"
        slug = self._slug_for(name)
        await self._ensure_slug_free(slug)
        created = await self._role_repo.create_role(
            name=name,
            slug=slug,
            description=description if description is not None else source.description,
            permission_ids=source.permission_ids,
            is_system=False,
            created_by=created_by,
            cloned_from=source.id,
        )
        await self._invalidate()
        return created

    async def upsert_system_role(
        self,
        slug: str,
        name: str,
        description: str | None,
        permission_ids: Iterable[str],
    ) -> RoleResult:
        """Create or refresh a system role by slug (provisioning)."""
        ids = await self._validate_permission_ids(permission_ids)
        existing = await self._role_repo.get_by_slug(slug)
        if existing is None:
            result = await self._role_repo.create_role(
                name=name,
                slug=slug,
                description=description,
                permission_ids=ids,
                is_system=True,
            )
        elif (
            existing.is_system
            and existing.name == name
            and existing.description == description
            and set(existing.permission_ids) == set(ids)
        ):
            return existing
        else:
            result = await self._role_repo.update_role(
                existing.id,
                name=name if name != existing.name else None,
                description=description,
                is_system=True,
                permission_ids=ids,
            )
            if result is None:
                raise ResourceNotFoundException("role", existing.id)
        await self._invalidate()
        return result
