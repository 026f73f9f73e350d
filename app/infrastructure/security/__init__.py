"""Security: JWT bearer token handling."""

from app.infrastructure.security.jwt import (
    create_access_token,
    user_id_from_token,
    verify_token,
)

__all__ = [
    "create_access_token",
    "user_id_from_token",
    "verify_token",
]
