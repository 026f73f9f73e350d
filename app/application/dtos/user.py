"""DTOs for user and department reads (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserResult:
    """User read-model."""

    id: str
    name: str
    email: str
    is_active: bool
    department_id: str | None = None


@dataclass(frozen=True)
class DepartmentResult:
    """Department read-model."""

    id: str
    name: str
    head_id: str | None
