"""Authentication, the permission catalog and /me/permissions."""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies.auth import require_permission
from app.application.services.permission_catalog import ALL_PERMISSION_CODES
from app.infrastructure.security.jwt import create_access_token


async def test_missing_token(client: AsyncClient, seeded) -> None:
    response = await client.get("/api/v1/me/permissions")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"
    assert response.json()["error"] == "AUTHENTICATION_ERROR"


async def test_expired_token(client: AsyncClient, seeded) -> None:
    token = create_access_token(seeded.user_ids["admin"], expires_delta=timedelta(minutes=-1))
    response = await client.get(
        "/api/v1/me/permissions", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid or expired token"


async def test_inactive_user(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/me/permissions", headers=headers["inactive"])
    assert response.status_code == 401


async def test_unknown_user(client: AsyncClient, seeded) -> None:
    token = create_access_token("nobody")
    response = await client.get(
        "/api/v1/me/permissions", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.status_code == 401


async def test_super_admin_sees_whole_catalog(client: AsyncClient, seeded, headers) -> None:
    response = await client.get("/api/v1/me/permissions", headers=headers["admin"])
    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == seeded.user_ids["admin"]
    assert body["role_ids"] == [seeded.role_ids["super-admin"]]
    assert body["permissions"] == sorted(ALL_PERMISSION_CODES)


async def test_staff_permissions(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/me/permissions", headers=headers["staff"])
    assert response.json()["permissions"] == [
        "dashboard:staff",
        "departments:view",
        "tasks:create",
        "tasks:update",
        "tasks:view",
        "users:view",
    ]


async def test_catalog_requires_roles_view(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/permissions", headers=headers["staff"])
    assert response.status_code == 403
    assert response.json()["details"] == {"permission": "roles:view"}


async def test_catalog_grouped(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/permissions", headers=headers["manager"])
    assert response.status_code == 200
    body = response.json()
    assert len(body["permissions"]) == len(ALL_PERMISSION_CODES)
    assert sum(len(v) for v in body["grouped"].values()) == len(ALL_PERMISSION_CODES)
    assert [p["code"] for p in body["grouped"]["Workflow"]] == ["workflow:configure"]


def test_malformed_route_permission_rejected_at_declaration() -> None:
    for bad in ("roles", "roles:view:all", "Roles:view", "roles:"):
        with pytest.raises(ValueError):
            require_permission(bad)
