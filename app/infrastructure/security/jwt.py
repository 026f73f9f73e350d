"""JWT bearer tokens: the sub claim carries the user id of the principal.

Uses app.core.config for secret, algorithm and default lifetime.
"""

from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.core.config import get_settings


def create_access_token(
    user_id: str,
    expires_delta: timedelta | None = None,
    extra_claims: dict[str, Any] | None = None,
) -> str:
    """Create a signed access token for user_id.

    Args:
        user_id: Stored as the sub claim.
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.
        extra_claims: Additional claims (never overrides sub or exp).

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims["sub"] = user_id
    claims["exp"] = datetime.now(UTC) + lifetime
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Raises:
        ValueError: If the token is invalid, expired, or missing exp/sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def user_id_from_token(token: str) -> str:
    """Return the sub claim of a valid token (see verify_token for errors)."""
    return str(verify_token(token)["sub"])
