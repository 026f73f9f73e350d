"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure (DRY).
"""

# Cache key prefixes (used as permission:<principal_id>:<role ids>)
CACHE_PREFIX_PERMISSION = "permission"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Role whose holders are granted the whole permission catalog
SUPER_ADMIN_ROLE_SLUG = "super-admin"

# Default workflow status color (#rrggbb)
DEFAULT_STATUS_COLOR = "#6b7280"
