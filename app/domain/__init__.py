"""Domain layer: entities, value objects, enums, events, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.entities import Principal
from app.domain.enums import NotificationChannel, NotificationType, RecipientStrategy
from app.domain.events import TASK_STATUS_CHANGED, TaskStatusChanged
from app.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    InvalidReferenceException,
    InvalidTargetStatusException,
    ProtectedResourceException,
    RemarksRequiredException,
    ResourceNotFoundException,
    RoleNotPermittedException,
    StatusConflictException,
    TaskflowException,
    TransitionNotAllowedException,
    ValidationException,
)
from app.domain.value_objects import HexColor, PermissionCode, Slug, slugify

__all__ = [
    # Entities
    "Principal",
    # Enums
    "NotificationChannel",
    "NotificationType",
    "RecipientStrategy",
    # Events
    "TASK_STATUS_CHANGED",
    "TaskStatusChanged",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "InvalidReferenceException",
    "InvalidTargetStatusException",
    "ProtectedResourceException",
    "RemarksRequiredException",
    "ResourceNotFoundException",
    "RoleNotPermittedException",
    "StatusConflictException",
    "TaskflowException",
    "TransitionNotAllowedException",
    "ValidationException",
    # Value objects
    "HexColor",
    "PermissionCode",
    "Slug",
    "slugify",
]
