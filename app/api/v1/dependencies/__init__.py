"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the authenticated principal,
permission checks and application services. Routes depend only on these,
never on repositories or sessions directly.
"""

from .auth import (
    get_authorization_service,
    get_current_principal,
    require_permission,
)
from .db import get_db, get_db_transactional
from .rbac import (
    get_activity_logger,
    get_permission_repo,
    get_role_read_service,
    get_role_service,
)
from .workflow import (
    get_status_change_dispatcher,
    get_status_read_service,
    get_status_service,
    get_task_read_deps,
    get_task_status_service,
    get_transition_read_service,
    get_transition_service,
)

__all__ = [
    "get_activity_logger",
    "get_authorization_service",
    "get_current_principal",
    "get_db",
    "get_db_transactional",
    "get_permission_repo",
    "get_role_read_service",
    "get_role_service",
    "get_status_change_dispatcher",
    "get_status_read_service",
    "get_status_service",
    "get_task_read_deps",
    "get_task_status_service",
    "get_transition_read_service",
    "get_transition_service",
    "require_permission",
]
