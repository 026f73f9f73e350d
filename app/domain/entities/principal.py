"""Principal domain entity: the authenticated actor behind a request."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Principal:
    """Authenticated actor identified by user id and the ids of the roles it holds.

    Role ids are stored as a frozenset; order is irrelevant and a user may
    hold zero roles (resolving to no permissions).
    """

    id: str
    role_ids: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def of(cls, user_id: str, role_ids: list[str] | set[str] | tuple[str, ...] = ()) -> "Principal":
        """Build a principal from any iterable of role ids."""
        return cls(id=user_id, role_ids=frozenset(role_ids))

    def holds_any_role(self, role_ids: frozenset[str] | set[str]) -> bool:
        """Return whether the principal holds at least one of role_ids."""
        return not self.role_ids.isdisjoint(role_ids)
