"""User and department read repositories. Interface methods return application DTOs."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.user import DepartmentResult, UserResult
from app.infrastructure.persistence.models.permission import UserRole
from app.infrastructure.persistence.models.user import Department, User
from app.infrastructure.persistence.repositories.base import BaseRepository


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult."""
    return UserResult(
        id=u.id,
        name=u.name,
        email=u.email,
        is_active=u.is_active,
        department_id=u.department_id,
    )


class UserRepository(BaseRepository[User]):
    """User reads and role assignments. Users are managed outside this service."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_user(self, user_id: str) -> UserResult | None:
        orm = await self.get_by_id(user_id)
        return _user_to_result(orm) if orm else None

    async def get_users(self, user_ids: Iterable[str]) -> list[UserResult]:
        return [_user_to_result(u) for u in await self.get_many(user_ids)]

    async def get_role_ids(self, user_id: str) -> list[str]:
        result = await self.db.execute(
            select(UserRole.role_id)
            .where(UserRole.user_id == user_id)
            .order_by(UserRole.assigned_at)
        )
        return list(result.scalars().all())

    async def get_active_user_ids_with_roles(self, role_ids: Iterable[str]) -> list[str]:
        ids = list(dict.fromkeys(role_ids))
        if not ids:
            return []
        result = await self.db.execute(
            select(User.id)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.role_id.in_(ids), User.is_active.is_(True))
            .distinct()
        )
        return list(result.scalars().all())

    async def assign_role(
        self, user_id: str, role_id: str, assigned_by: str | None = None
    ) -> None:
        """Assign role to user; no-op when already assigned."""
        result = await self.db.execute(
            select(UserRole).where(
                UserRole.user_id == user_id, UserRole.role_id == role_id
            )
        )
        if result.scalar_one_or_none() is not None:
            return
        self.db.add(UserRole(user_id=user_id, role_id=role_id, assigned_by=assigned_by))
        await self.db.flush()


class DepartmentRepository(BaseRepository[Department]):
    """Department reads (head lookup for notification routing)."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Department)

    async def get_department(self, department_id: str) -> DepartmentResult | None:
        orm = await self.get_by_id(department_id)
        if orm is None:
            return None
        return DepartmentResult(id=orm.id, name=orm.name, head_id=orm.head_id)
