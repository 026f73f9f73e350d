"""DTOs for permission use cases (no dependency on ORM)."""

from dataclasses import dataclass


@dataclass(frozen=True)
class PermissionResult:
    """Permission read-model. code is 'resource:action'."""

    id: str
    code: str
    resource: str
    action: str
    description: str | None
    group: str


@dataclass(frozen=True)
class PermissionDefinition:
    """Catalog entry used for provisioning (natural key: resource + action)."""

    resource: str
    action: str
    description: str
    group: str

    @property
    def code(self) -> str:
        return f"{self.resource}:{self.action}"
