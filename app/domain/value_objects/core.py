"""Domain value objects for the Taskflow application.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Shared slug pattern: lowercase alphanumeric with optional hyphens (e.g. super-admin).
_SLUG_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
_SLUG_STRIP_RE = re.compile(r"[^a-z0-9\s-]")
_SLUG_SEPARATOR_RE = re.compile(r"[\s-]+")
_HEX_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")
_PERMISSION_PART_RE = re.compile(r"^[a-z][a-z0-9_]*$")


def slugify(value: str) -> str:
    """Return the lowercased, hyphenated form of value.

    Characters other than letters, digits, whitespace and hyphens are dropped;
    runs of whitespace/hyphens collapse to one hyphen.
    ("Manager (Copy)" -> "manager-copy", "Super Admin" -> "super-admin").
    """
    lowered = _SLUG_STRIP_RE.sub("", value.strip().lower())
    return _SLUG_SEPARATOR_RE.sub("-", lowered).strip("-")


@dataclass(frozen=True)
class Slug:
    """Value object for a natural key slug (roles, workflow statuses)."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("Slug must be a non-empty string")
        if len(self.value) > 100:
            raise ValueError("Slug must not exceed 100 characters")
        if not _SLUG_RE.match(self.value):
            raise ValueError(
                "Slug must be lowercase alphanumeric with optional hyphens "
                "(e.g., 'to-do', 'super-admin')"
            )


@dataclass(frozen=True)
class PermissionCode:
    """Value object for a `resource:action` permission string.

    The string form is what the authorization gate operates on.
    """

    resource: str
    action: str

    def __post_init__(self) -> None:
        for part, label in ((self.resource, "resource"), (self.action, "action")):
            if not part or not _PERMISSION_PART_RE.match(part):
                raise ValueError(
                    f"Permission {label} must be lowercase snake_case, got {part!r}"
                )

    @classmethod
    def parse(cls, code: str) -> "PermissionCode":
        """Parse 'resource:action'.

        Raises:
            ValueError: If code is not exactly one resource and one action.
        """
        resource, sep, action = code.partition(":")
        if not sep or ":" in action:
            raise ValueError(f"Permission code must be 'resource:action', got {code!r}")
        return cls(resource, action)

    @property
    def code(self) -> str:
        return f"{self.resource}:{self.action}"

    def __str__(self) -> str:
        return self.code


@dataclass(frozen=True)
class HexColor:
    """Value object for a display color (#rrggbb)."""

    value: str

    def __post_init__(self) -> None:
        if not _HEX_COLOR_RE.match(self.value or ""):
            raise ValueError("Color must be a hex value like '#6b7280'")
