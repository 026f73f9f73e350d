"""Principal and permission dependencies (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services import (
    AuthorizationService,
    PermissionResolver,
)
from app.core.config import get_settings
from app.domain.entities import Principal
from app.domain.exceptions import AuthenticationException
from app.domain.value_objects import PermissionCode
from app.infrastructure.persistence.repositories import (
    PermissionRepository,
    RoleRepository,
    UserRepository,
)
from app.infrastructure.security.jwt import user_id_from_token
from app.shared.context import set_current_user

from .db import get_db

_http_bearer = HTTPBearer(auto_error=False)


async def get_authorization_service(
    request: Request,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> AuthorizationService:
    """Build AuthorizationService with permission resolver and optional cache.

    Cache is set in app lifespan (app.state.cache) when Redis is enabled;
    otherwise permission checks hit the DB only.
    """
    resolver = PermissionResolver(RoleRepository(db), PermissionRepository(db))
    return AuthorizationService(
        permission_resolver=resolver,
        cache=getattr(request.app.state, "cache", None),
        cache_ttl=get_settings().cache_ttl_permissions,
    )


async def get_current_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Principal:
    """Return the principal for the bearer token; raise AuthenticationException otherwise.

    Also binds the actor to the request context for activity log attribution.
    """
    if credentials is None:
        raise AuthenticationException()
    try:
        user_id = user_id_from_token(credentials.credentials)
    except ValueError:
        raise AuthenticationException("Invalid or expired token") from None
    users = UserRepository(db)
    user = await users.get_user(user_id)
    if user is None or not user.is_active:
        raise AuthenticationException("User not found or inactive")
    principal = Principal.of(user.id, await users.get_role_ids(user.id))
    set_current_user(
        user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
    return principal


def require_permission(permission: str):
    """Dependency factory: require an authenticated principal holding permission.

    Raises ValueError at route declaration if permission is not 'resource:action'.
    """
    code = PermissionCode.parse(permission).code

    async def _require(
        principal: Annotated[Principal, Depends(get_current_principal)],
        auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
    ) -> Principal:
        await auth_svc.authorize(principal, code)
        return principal

    return _require
