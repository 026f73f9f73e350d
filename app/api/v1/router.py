"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from app.api.v1.dependencies.
"""

from fastapi import APIRouter

from app.api.v1.endpoints import (
    health,
    me,
    permissions,
    roles,
    tasks,
    workflow_statuses,
    workflow_transitions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(permissions.router, prefix="/permissions", tags=["permissions"])
api_router.include_router(roles.router, prefix="/roles", tags=["roles"])
api_router.include_router(
    workflow_statuses.router, prefix="/workflow/statuses", tags=["workflow"]
)
api_router.include_router(
    workflow_transitions.router, prefix="/workflow/transitions", tags=["workflow"]
)
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(me.router, prefix="/me", tags=["me"])
