"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import (
    IActivityLogRepository,
    IDepartmentRepository,
    INotificationRepository,
    INotificationRuleRepository,
    IPermissionRepository,
    IRoleRepository,
    ITaskCommentRepository,
    ITaskRepository,
    IUserRepository,
    IWorkflowStatusRepository,
    IWorkflowTransitionRepository,
)
from app.application.interfaces.services import (
    IActivityLogger,
    ICacheService,
    INotificationSender,
    IPermissionResolver,
    IStatusChangeSink,
)

__all__ = [
    "IActivityLogRepository",
    "IActivityLogger",
    "ICacheService",
    "IDepartmentRepository",
    "INotificationRepository",
    "INotificationRuleRepository",
    "INotificationSender",
    "IPermissionRepository",
    "IPermissionResolver",
    "IRoleRepository",
    "IStatusChangeSink",
    "ITaskCommentRepository",
    "ITaskRepository",
    "IUserRepository",
    "IWorkflowStatusRepository",
    "IWorkflowTransitionRepository",
]
