"""Role and permission catalog dependencies (composition root)."""

from __future__ import annotations

from functools import partial
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.services import (
    ActivityLogService,
    AuthorizationService,
    RoleService,
)
from app.infrastructure.persistence.database import call_after_commit
from app.infrastructure.persistence.repositories import (
    ActivityLogRepository,
    PermissionRepository,
    RoleRepository,
)

from .auth import get_authorization_service
from .db import get_db, get_db_transactional


async def get_activity_logger(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
) -> ActivityLogService:
    """Activity logger writing in the request's write transaction."""
    return ActivityLogService(ActivityLogRepository(db))


async def get_permission_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> PermissionRepository:
    """Permission repository for catalog reads."""
    return PermissionRepository(db)


def get_role_read_service(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> RoleService:
    """Role service for list/get (no activity logging)."""
    return RoleService(RoleRepository(db), PermissionRepository(db))


def get_role_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    activity_logger: Annotated[ActivityLogService, Depends(get_activity_logger)],
    auth_svc: Annotated[AuthorizationService, Depends(get_authorization_service)],
) -> RoleService:
    """Role service for create/update/delete/clone.

    Mutations drop cached permission sets after the request transaction commits.
    """
    return RoleService(
        role_repo=RoleRepository(db, activity_logger),
        permission_repo=PermissionRepository(db),
        authorization_service=auth_svc,
        after_commit=partial(call_after_commit, db),
    )
