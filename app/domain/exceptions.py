"""Domain exceptions for the Taskflow application.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TaskflowException(Exception):
    """Base exception for all Taskflow application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON body used by the HTTP exception handler."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TaskflowException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(TaskflowException):
    """Raised when no authenticated principal is present (or the token is invalid)."""

    def __init__(self, message: str = "Authentication required") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TaskflowException):
    """Raised when the principal lacks the permission required for the operation."""

    def __init__(
        self,
        permission: str | None = None,
        message: str = "Permission denied",
    ) -> None:
        """Initialize with the missing permission code.

        Args:
            permission: Permission code that was required (e.g. 'tasks:update').
            message: Human-readable message; default used when permission omitted.
        """
        details: dict[str, Any] = {}
        if permission:
            message = f"Permission denied: {permission} is required"
            details["permission"] = permission
        super().__init__(message, "PERMISSION_DENIED", details)


class ProtectedResourceException(TaskflowException):
    """Raised when a structural change to a protected entity is attempted (e.g. deleting a system role)."""

    def __init__(self, message: str, resource_type: str, resource_id: str) -> None:
        super().__init__(
            message,
            "FORBIDDEN",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ResourceNotFoundException(TaskflowException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'role', 'task').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(TaskflowException):
    """Raised on a uniqueness violation (role slug, status name/slug, transition pair)."""

    def __init__(self, message: str, resource_type: str, **details_extra: Any) -> None:
        super().__init__(
            message,
            "CONFLICT",
            {"resource_type": resource_type, **details_extra},
        )


class InvalidReferenceException(TaskflowException):
    """Raised when a referenced id (permission, role, status) does not resolve."""

    def __init__(self, reference_type: str, reference_ids: list[str]) -> None:
        """Initialize with the reference type and the unresolved ids.

        Args:
            reference_type: Kind of entity referenced (e.g. 'permission').
            reference_ids: Ids that did not resolve to an existing entity.
        """
        super().__init__(
            f"Invalid {reference_type} reference(s): {', '.join(reference_ids)}",
            "INVALID_REFERENCE",
            {"reference_type": reference_type, "reference_ids": reference_ids},
        )


class InvalidTargetStatusException(TaskflowException):
    """Raised when a status transition names a target status that does not exist."""

    def __init__(self, status_id: str) -> None:
        super().__init__(
            "Invalid target status",
            "INVALID_TARGET_STATUS",
            {"status_id": status_id},
        )


class TransitionNotAllowedException(TaskflowException):
    """Raised when no active transition edge exists between two statuses."""

    def __init__(self, from_status: str | None, to_status: str) -> None:
        super().__init__(
            f"Transition from '{from_status}' to '{to_status}' is not allowed",
            "TRANSITION_NOT_ALLOWED",
            {"from_status": from_status, "to_status": to_status},
        )


class RoleNotPermittedException(TaskflowException):
    """Raised when none of the principal's roles may perform a role-gated transition."""

    def __init__(self, from_status: str | None, to_status: str) -> None:
        super().__init__(
            f"Your role is not allowed to move a task from '{from_status}' to '{to_status}'",
            "ROLE_NOT_PERMITTED",
            {"from_status": from_status, "to_status": to_status},
        )


class RemarksRequiredException(TaskflowException):
    """Raised when a transition requires remarks and none were supplied."""

    def __init__(self, from_status: str | None, to_status: str) -> None:
        super().__init__(
            f"Remarks are required to move a task from '{from_status}' to '{to_status}'",
            "REMARKS_REQUIRED",
            {"from_status": from_status, "to_status": to_status},
        )


class StatusConflictException(TaskflowException):
    """Raised when a concurrent request changed the task status first (optimistic lock)."""

    def __init__(self, task_id: str, expected_status: str | None) -> None:
        super().__init__(
            "Task status was changed by another request; reload and retry.",
            "STATUS_CONFLICT",
            {"task_id": task_id, "expected_status": expected_status},
        )
