"""Task status changes over HTTP, with their activity and notification side effects."""

from httpx import AsyncClient
from sqlalchemy import select

from app.infrastructure.persistence import models


def _status_url(task_id: str) -> str:
    return f"/api/v1/tasks/{task_id}/status"


async def test_move_along_open_edge(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["staff"],
    )
    assert response.status_code == 200
    body = response.json()
    assert body["task"]["status_id"] == seeded.status_ids["in-progress"]
    assert body["task"]["version"] == 2
    assert body["task"]["completed_at"] is None
    assert body["from_status"] == {"id": seeded.status_ids["to-do"], "name": "To Do"}
    assert body["to_status"] == {"id": seeded.status_ids["in-progress"], "name": "In Progress"}
    assert body["comment"] is None


async def test_status_change_is_logged(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["staff"],
    )
    async with session_factory() as session:
        entry = (
            await session.execute(
                select(models.ActivityLog).where(
                    models.ActivityLog.action == "task.status_changed"
                )
            )
        ).scalar_one()
    assert entry.resource == "task"
    assert entry.resource_id == seeded.task_ids["todo"]
    assert entry.actor_id == seeded.user_ids["staff"]
    assert entry.details == {"from": "To Do", "to": "In Progress", "remarks": None}


async def test_remarks_become_system_comment(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["cancelled"], "remarks": "  scope dropped "},
        headers=headers["staff"],
    )
    assert response.status_code == 200
    body = response.json()
    assert body["task"]["completed_at"] is not None
    comment = body["comment"]
    assert comment["is_system_generated"] is True
    assert comment["author_id"] == seeded.user_ids["staff"]
    assert comment["content"] == 'Status changed from "To Do" to "Cancelled": scope dropped'


async def test_remarks_required(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["cancelled"], "remarks": "   "},
        headers=headers["staff"],
    )
    assert response.status_code == 400
    assert response.json()["error"] == "REMARKS_REQUIRED"


async def test_role_gated_edge(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["review"]),
        json={"status_id": seeded.status_ids["completed"]},
        headers=headers["staff"],
    )
    assert response.status_code == 403
    assert response.json()["error"] == "ROLE_NOT_PERMITTED"


async def test_manager_completes_review(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["review"]),
        json={"status_id": seeded.status_ids["completed"]},
        headers=headers["manager"],
    )
    assert response.status_code == 200
    assert response.json()["task"]["completed_at"] is not None


async def test_no_edge(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["completed"]},
        headers=headers["admin"],
    )
    assert response.status_code == 403
    assert response.json()["error"] == "TRANSITION_NOT_ALLOWED"


async def test_unknown_target(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": "missing"},
        headers=headers["staff"],
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_TARGET_STATUS"


async def test_unknown_task(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url("missing"),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["staff"],
    )
    assert response.status_code == 404


async def test_viewer_cannot_update(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["viewer"],
    )
    assert response.status_code == 403
    assert response.json()["error"] == "PERMISSION_DENIED"


async def test_missing_status_id_is_422(client: AsyncClient, seeded, headers) -> None:
    response = await client.patch(
        _status_url(seeded.task_ids["todo"]), json={}, headers=headers["staff"]
    )
    assert response.status_code == 422


async def test_failed_change_leaves_task_untouched(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    await client.patch(
        _status_url(seeded.task_ids["review"]),
        json={"status_id": seeded.status_ids["completed"]},
        headers=headers["staff"],
    )
    async with session_factory() as session:
        task = await session.get(models.Task, seeded.task_ids["review"])
    assert task.status_id == seeded.status_ids["for-review"]
    assert task.version == 1


async def test_notifies_assignees(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    async with session_factory() as session:
        session.add(
            models.NotificationRule(
                event="status_changed",
                channels=["in_app"],
                recipient_strategy="assignees",
                recipient_role_ids=[],
            )
        )
        await session.commit()

    response = await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["staff"],
    )
    assert response.status_code == 200

    async with session_factory() as session:
        rows = (await session.execute(select(models.Notification))).scalars().all()
    assert [(n.recipient_id, n.type, n.related_task_id) for n in rows] == [
        (seeded.user_ids["assignee"], "status_changed", seeded.task_ids["todo"])
    ]


async def test_actor_is_not_notified(
    client: AsyncClient, seeded, headers, session_factory
) -> None:
    async with session_factory() as session:
        session.add(
            models.NotificationRule(
                event="status_changed",
                channels=["in_app"],
                recipient_strategy="creator",
                recipient_role_ids=[],
            )
        )
        await session.commit()

    await client.patch(
        _status_url(seeded.task_ids["todo"]),
        json={"status_id": seeded.status_ids["in-progress"]},
        headers=headers["staff"],
    )
    async with session_factory() as session:
        rows = (await session.execute(select(models.Notification))).scalars().all()
    assert rows == []


async def test_available_transitions_for_staff(client: AsyncClient, seeded, headers) -> None:
    response = await client.get(
        f"/api/v1/tasks/{seeded.task_ids['todo']}/transitions", headers=headers["staff"]
    )
    assert response.status_code == 200
    options = response.json()
    assert [o["to_status"]["slug"] for o in options] == ["in-progress", "cancelled"]
    assert [o["requires_remarks"] for o in options] == [False, True]


async def test_available_transitions_respect_role_gates(
    client: AsyncClient, seeded, headers
) -> None:
    url = f"/api/v1/tasks/{seeded.task_ids['review']}/transitions"
    staff = await client.get(url, headers=headers["staff"])
    assert staff.json() == []

    manager = await client.get(url, headers=headers["manager"])
    assert [o["to_status"]["slug"] for o in manager.json()] == ["in-progress", "completed"]


async def test_available_transitions_unknown_task(client: AsyncClient, headers) -> None:
    response = await client.get("/api/v1/tasks/missing/transitions", headers=headers["staff"])
    assert response.status_code == 404
