"""Permission repository: catalog reads and idempotent upsert by (resource, action)."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.permission import PermissionDefinition, PermissionResult
from app.infrastructure.persistence.models.permission import Permission
from app.infrastructure.persistence.repositories.base import BaseRepository


def _permission_to_result(p: Permission) -> PermissionResult:
    """Map ORM Permission to application PermissionResult."""
    return PermissionResult(
        id=p.id,
        code=p.code,
        resource=p.resource,
        action=p.action,
        description=p.description,
        group=p.group,
    )


class PermissionRepository(BaseRepository[Permission]):
    """Permission repository. The catalog is append-only; no delete."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Permission)

    async def get_all_permissions(self) -> list[PermissionResult]:
        result = await self.db.execute(
            select(Permission).order_by(
                Permission.group, Permission.resource, Permission.action
            )
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_by_ids(self, permission_ids: Iterable[str]) -> list[PermissionResult]:
        return [_permission_to_result(p) for p in await self.get_many(permission_ids)]

    async def get_by_codes(self, codes: Iterable[str]) -> list[PermissionResult]:
        wanted = list(dict.fromkeys(codes))
        if not wanted:
            return []
        result = await self.db.execute(
            select(Permission).where(Permission.code.in_(wanted))
        )
        return [_permission_to_result(p) for p in result.scalars().all()]

    async def get_all_codes(self) -> set[str]:
        result = await self.db.execute(select(Permission.code))
        return set(result.scalars().all())

    async def upsert(self, definition: PermissionDefinition) -> PermissionResult:
        """Insert or refresh description/group for (resource, action)."""
        result = await self.db.execute(
            select(Permission).where(
                Permission.resource == definition.resource,
                Permission.action == definition.action,
            )
        )
        existing = result.scalar_one_or_none()
        if existing is None:
            created = await self.create(
                Permission(
                    code=definition.code,
                    resource=definition.resource,
                    action=definition.action,
                    description=definition.description,
                    group=definition.group,
                )
            )
            return _permission_to_result(created)
        if (
            existing.description != definition.description
            or existing.group != definition.group
        ):
            existing.description = definition.description
            existing.group = definition.group
            existing = await self.save(existing)
        return _permission_to_result(existing)
