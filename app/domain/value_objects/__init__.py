"""Domain value objects and shared value types."""

from app.domain.value_objects.core import HexColor, PermissionCode, Slug, slugify

__all__ = [
    "HexColor",
    "PermissionCode",
    "Slug",
    "slugify",
]
