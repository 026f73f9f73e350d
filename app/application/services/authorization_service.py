"""Authorization service: permission checks with optional caching (IPermissionResolver + cache)."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from app.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PERMISSION
from app.domain.exceptions import AuthenticationException, AuthorizationException
from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.interfaces.services import ICacheService, IPermissionResolver
    from app.domain.entities import Principal

logger = get_logger(__name__)


def permission_cache_key(principal: Principal) -> str:
    """Cache key for a resolved permission set (principal + its sorted role ids)."""
    roles = ",".join(sorted(principal.role_ids))
    return CACHE_KEY_SEP.join((CACHE_PREFIX_PERMISSION, principal.id, roles))


class AuthorizationService:
    """Centralized permission checking; uses cache when available (5 min TTL typical).

    Permission strings are compared exactly; there are no wildcards.
    """

    def __init__(
        self,
        permission_resolver: IPermissionResolver,
        cache: ICacheService | None = None,
        cache_ttl: int = 300,
    ) -> None:
        self.permission_resolver = permission_resolver
        self.cache = cache
        self.cache_ttl = cache_ttl

    def _available_cache(self) -> ICacheService | None:
        if self.cache is not None and self.cache.is_available():
            return self.cache
        return None

    async def get_permissions(self, principal: Principal) -> set[str]:
        """Return the principal's resolved permission codes. Uses cache if available."""
        key = permission_cache_key(principal)
        cache = self._available_cache()
        if cache is not None:
            cached = await cache.get(key)
            if cached is not None:
                return set(cached)

        permissions = await self.permission_resolver.resolve(principal.role_ids)
        cache = self._available_cache()
        if cache is not None:
            await cache.set(key, sorted(permissions), ttl=self.cache_ttl)
        return permissions

    async def has_permission(self, principal: Principal | None, permission: str) -> bool:
        """Return True if principal's resolved set contains permission."""
        if principal is None:
            return False
        return permission in await self.get_permissions(principal)

    async def authorize_any(
        self, principal: Principal | None, permissions: Iterable[str]
    ) -> bool:
        """Return True if principal holds at least one of permissions."""
        if principal is None:
            return False
        granted = await self.get_permissions(principal)
        return any(p in granted for p in permissions)

    async def authorize(self, principal: Principal | None, permission: str) -> None:
        """Return on success.

        Raises:
            AuthenticationException: No principal.
            AuthorizationException: Permission not in the resolved set.
        """
        if principal is None:
            raise AuthenticationException()
        if permission not in await self.get_permissions(principal):
            logger.info("Permission denied: user=%s permission=%s", principal.id, permission)
            raise AuthorizationException(permission=permission)

    async def invalidate_cache(self) -> None:
        """Drop every cached permission set (any role mutation may affect any principal)."""
        cache = self._available_cache()
        if cache is not None:
            await cache.delete_pattern(f"{CACHE_PREFIX_PERMISSION}{CACHE_KEY_SEP}*")
