"""DTOs for role use cases (no dependency on ORM)."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RoleResult:
    """Role read-model (result of get_by_id, get_all, create_role, etc.).

    permission_ids and permission_codes are parallel views of the same set,
    sorted by code.
    """

    id: str
    name: str
    slug: str
    description: str | None
    is_system: bool
    is_active: bool
    permission_ids: tuple[str, ...] = ()
    permission_codes: tuple[str, ...] = ()
    created_by: str | None = None


@dataclass(frozen=True)
class RoleUpdate:
    """Partial role update. None means 'leave unchanged'."""

    name: str | None = None
    description: str | None = None
    permission_ids: tuple[str, ...] | None = None
    is_active: bool | None = None


@dataclass(frozen=True)
class RoleDefinition:
    """System role definition used for provisioning (natural key: slug)."""

    slug: str
    name: str
    description: str
    permission_codes: tuple[str, ...] = field(default_factory=tuple)
