"""Resolves role ids to permission codes (implements IPermissionResolver)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from app.core.constants import SUPER_ADMIN_ROLE_SLUG

if TYPE_CHECKING:
    from app.application.interfaces.repositories import (
        IPermissionRepository,
        IRoleRepository,
    )


class PermissionResolver:
    """Union of the permission sets of a principal's active roles.

    Holding an active super-admin role short-circuits to the whole catalog,
    whatever that role's own permission list says. Unknown, deleted and
    inactive role ids contribute nothing.
    """

    def __init__(
        self,
        role_repo: IRoleRepository,
        permission_repo: IPermissionRepository,
    ) -> None:
        self._role_repo = role_repo
        self._permission_repo = permission_repo

    async def resolve(self, role_ids: Iterable[str]) -> set[str]:
        ids = {r for r in role_ids if r}
        if not ids:
            return set()
        roles = await self._role_repo.get_active_by_ids(ids)
        if any(r.slug == SUPER_ADMIN_ROLE_SLUG for r in roles):
            return await self._permission_repo.get_all_codes()
        granted: set[str] = set()
        for role in roles:
            granted.update(role.permission_codes)
        return granted
