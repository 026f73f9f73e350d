"""Roles API: gating, CRUD, clone and system role protection."""

from httpx import AsyncClient
from sqlalchemy import select

from app.infrastructure.persistence import models


async def test_list_roles(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/roles", headers=headers["manager"])
    assert response.status_code == 200
    names = [r["name"] for r in response.json()]
    assert names == sorted(names)
    assert {"super-admin", "admin", "manager", "staff", "viewer"} <= {
        r["slug"] for r in response.json()
    }


async def test_staff_cannot_view_roles(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/roles", headers=headers["staff"])
    assert response.status_code == 403


async def test_create_role(client: AsyncClient, seeded, headers) -> None:
    perm_ids = [seeded.permission_ids["tasks:view"], seeded.permission_ids["reports:view"]]
    response = await client.post(
        "/api/v1/roles",
        json={"name": "Auditor", "description": "Reads things", "permission_ids": perm_ids},
        headers=headers["admin"],
    )
    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "auditor"
    assert body["is_system"] is False
    assert body["created_by"] == seeded.user_ids["admin"]
    assert body["permission_codes"] == ["reports:view", "tasks:view"]

    fetched = await client.get(f"/api/v1/roles/{body['id']}", headers=headers["admin"])
    assert fetched.json()["permission_codes"] == ["reports:view", "tasks:view"]


async def test_create_role_records_activity(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    response = await client.post(
        "/api/v1/roles", json={"name": "Auditor"}, headers=headers["admin"]
    )
    role_id = response.json()["id"]
    async with session_factory() as session:
        rows = (
            await session.execute(
                select(models.ActivityLog).where(models.ActivityLog.resource_id == role_id)
            )
        ).scalars().all()
    assert [(r.action, r.actor_id) for r in rows] == [("role.created", seeded.user_ids["admin"])]


async def test_manager_cannot_create_roles(client: AsyncClient, headers) -> None:
    response = await client.post("/api/v1/roles", json={"name": "X"}, headers=headers["manager"])
    assert response.status_code == 403


async def test_duplicate_slug(client: AsyncClient, headers) -> None:
    response = await client.post("/api/v1/roles", json={"name": "Staff"}, headers=headers["admin"])
    assert response.status_code == 409
    assert response.json()["error"] == "CONFLICT"


async def test_unknown_permission(client: AsyncClient, headers) -> None:
    response = await client.post(
        "/api/v1/roles",
        json={"name": "Ghost", "permission_ids": ["nope"]},
        headers=headers["admin"],
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_REFERENCE"


async def test_empty_name_is_422(client: AsyncClient, headers) -> None:
    response = await client.post("/api/v1/roles", json={"name": ""}, headers=headers["admin"])
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_update_permissions_takes_effect(client: AsyncClient, seeded, headers) -> None:
    viewer_role = seeded.role_ids["viewer"]
    response = await client.put(
        f"/api/v1/roles/{viewer_role}",
        json={"permission_ids": [seeded.permission_ids["roles:view"]]},
        headers=headers["admin"],
    )
    assert response.status_code == 200
    assert response.json()["permission_codes"] == ["roles:view"]

    me = await client.get("/api/v1/me/permissions", headers=headers["viewer"])
    assert me.json()["permissions"] == ["roles:view"]


async def test_system_role_rename_forbidden(client: AsyncClient, seeded, headers) -> None:
    response = await client.put(
        f"/api/v1/roles/{seeded.role_ids['staff']}",
        json={"name": "Crew"},
        headers=headers["admin"],
    )
    assert response.status_code == 403
    assert response.json()["error"] == "FORBIDDEN"


async def test_delete_system_role_forbidden(client: AsyncClient, seeded, headers) -> None:
    response = await client.delete(
        f"/api/v1/roles/{seeded.role_ids['viewer']}", headers=headers["admin"]
    )
    assert response.status_code == 403


async def test_delete_custom_role_leaves_holders_without_it(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    created = await client.post(
        "/api/v1/roles",
        json={"name": "Temp", "permission_ids": [seeded.permission_ids["reports:export"]]},
        headers=headers["admin"],
    )
    role_id = created.json()["id"]
    async with session_factory() as session:
        session.add(models.UserRole(user_id=seeded.user_ids["staff"], role_id=role_id))
        await session.commit()
    me = await client.get("/api/v1/me/permissions", headers=headers["staff"])
    assert "reports:export" in me.json()["permissions"]

    response = await client.delete(f"/api/v1/roles/{role_id}", headers=headers["admin"])
    assert response.status_code == 204
    assert (await client.get(f"/api/v1/roles/{role_id}", headers=headers["admin"])).status_code == 404

    me = await client.get("/api/v1/me/permissions", headers=headers["staff"])
    assert me.status_code == 200
    assert "reports:export" not in me.json()["permissions"]


async def test_clone_role(client: AsyncClient, seeded, headers) -> None:
    source = seeded.role_ids["manager"]
    response = await client.post(f"/api/v1/roles/{source}/clone", headers=headers["admin"])
    assert response.status_code == 201
    clone = response.json()
    assert clone["name"] == "Manager (Copy)"
    assert clone["slug"] == "manager-copy"
    assert clone["is_system"] is False
    original = (await client.get(f"/api/v1/roles/{source}", headers=headers["admin"])).json()
    assert clone["permission_codes"] == original["permission_codes"]

    again = await client.post(f"/api/v1/roles/{source}/clone", headers=headers["admin"])
    assert again.status_code == 409


async def test_clone_with_name(client: AsyncClient, seeded, headers) -> None:
    response = await client.post(
        f"/api/v1/roles/{seeded.role_ids['staff']}/clone",
        json={"name": "Contractor"},
        headers=headers["admin"],
    )
    assert response.status_code == 201
    assert response.json()["slug"] == "contractor"


async def test_clone_missing(client: AsyncClient, headers) -> None:
    response = await client.post("/api/v1/roles/missing/clone", headers=headers["admin"])
    assert response.status_code == 404
