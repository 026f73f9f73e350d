"""Role repository with activity log. Read methods return RoleResult (DTO)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.role import RoleResult
from app.domain.exceptions import ConflictException
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.models.role import Role
from app.infrastructure.persistence.repositories.auditable_repo import (
    AuditableRepository,
)
from app.shared.enums import AuditAction

if TYPE_CHECKING:
    from app.application.interfaces.services import IActivityLogger


def _role_to_result(r: Role) -> RoleResult:
    """Map ORM Role to application RoleResult."""
    perms = sorted(r.permissions, key=lambda p: p.code)
    return RoleResult(
        id=r.id,
        name=r.name,
        slug=r.slug,
        description=r.description,
        is_system=r.is_system,
        is_active=r.is_active,
        permission_ids=tuple(p.id for p in perms),
        permission_codes=tuple(p.code for p in perms),
        created_by=r.created_by,
    )


def _role_conflict(name: str, slug: str) -> ConflictException:
    """Unique violation on role.name or role.slug (a concurrent write got there first)."""
    return ConflictException(
        f"A role named '{name}' or with slug '{slug}' already exists",
        resource_type="role",
        name=name,
        slug=slug,
    )


class RoleRepository(AuditableRepository[Role]):
    """Role repository. Permission sets are replaced wholesale, never merged."""

    def __init__(
        self,
        db: AsyncSession,
        activity_logger: IActivityLogger | None = None,
        *,
        enable_audit: bool = True,
    ) -> None:
        super().__init__(db, Role, activity_logger, enable_audit=enable_audit)

    def _get_entity_type(self) -> str:
        return "role"

    def _serialize_for_audit(self, obj: Role) -> dict[str, Any]:
        return {
            "name": obj.name,
            "slug": obj.slug,
            "is_system": obj.is_system,
            "is_active": obj.is_active,
            "permissions": sorted(p.code for p in obj.permissions),
        }

    async def _load_permissions(self, permission_ids: Iterable[str]) -> list[Permission]:
        ids = list(dict.fromkeys(permission_ids))
        if not ids:
            return []
        result = await self.db.execute(select(Permission).where(Permission.id.in_(ids)))
        return list(result.scalars().all())

    async def get_role(self, role_id: str) -> RoleResult | None:
        orm = await self.get_by_id(role_id)
        return _role_to_result(orm) if orm else None

    async def get_by_slug(self, slug: str) -> RoleResult | None:
        result = await self.db.execute(select(Role).where(Role.slug == slug))
        row = result.scalar_one_or_none()
        return _role_to_result(row) if row else None

    async def get_active_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return []
        result = await self.db.execute(
            select(Role).where(Role.id.in_(ids), Role.is_active.is_(True))
        )
        return [_role_to_result(r) for r in result.scalars().all()]

    async def get_by_ids(self, role_ids: Iterable[str]) -> list[RoleResult]:
        return [_role_to_result(r) for r in await self.get_many(role_ids)]

    async def list_roles(self, include_inactive: bool = True) -> list[RoleResult]:
        q = select(Role)
        if not include_inactive:
            q = q.where(Role.is_active.is_(True))
        result = await self.db.execute(q.order_by(Role.name))
        return [_role_to_result(r) for r in result.scalars().all()]

    async def create_role(
        self,
        name: str,
        slug: str,
        description: str | None,
        permission_ids: Iterable[str],
        *,
        is_system: bool = False,
        created_by: str | None = None,
        cloned_from: str | None = None,
    ) -> RoleResult:
        """Create a role; a clone records role.cloned instead of role.created."""
        role = Role(
            name=name,
            slug=slug,
            description=description,
            is_system=is_system,
            is_active=True,
            created_by=created_by,
            permissions=await self._load_permissions(permission_ids),
        )
        try:
            if cloned_from is not None:
                created = await self.create_with_action(
                    role, AuditAction.CLONED, {"source_role_id": cloned_from}
                )
            else:
                created = await self.create(role)
        except IntegrityError as e:
            raise _role_conflict(name, slug) from e
        return _role_to_result(created)

    async def update_role(
        self,
        role_id: str,
        *,
        name: str | None = None,
        slug: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
        is_system: bool | None = None,
        permission_ids: Iterable[str] | None = None,
    ) -> RoleResult | None:
        role = await self.get_by_id(role_id)
        if role is None:
            return None
        if name is not None:
            role.name = name
        if slug is not None:
            role.slug = slug
        if description is not None:
            role.description = description
        if is_active is not None:
            role.is_active = is_active
        if is_system is not None:
            role.is_system = is_system
        if permission_ids is not None:
            role.permissions = await self._load_permissions(permission_ids)
        new_name, new_slug = role.name, role.slug
        try:
            updated = await self.save(role)
        except IntegrityError as e:
            raise _role_conflict(new_name, new_slug) from e
        return _role_to_result(updated)

    async def delete_role(self, role_id: str) -> bool:
        """Hard delete; role_permission rows go with it, user_role rows stay."""
        role = await self.get_by_id(role_id)
        if role is None:
            return False
        await self.delete(role)
        return True
