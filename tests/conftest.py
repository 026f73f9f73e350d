"""Pytest configuration and fixtures for taskflow.

Environment is set before app.main is imported (it builds the app at import
time). Database fixtures run against an in-memory SQLite database created from
the ORM metadata, so no external services are needed. HTTP tests share one
session per request between the read and write session dependencies.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("REDIS_ENABLED", "false")

from collections.abc import AsyncIterator
from dataclasses import dataclass

import pytest
from fastapi import Depends
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings

get_settings.cache_clear()

from app.core.limiter import limiter
from app.infrastructure.persistence import models
from app.infrastructure.persistence.database import (
    Base,
    get_db,
    get_db_transactional,
    run_after_commit,
)
from app.infrastructure.security.jwt import create_access_token
from app.infrastructure.services import CatalogProvisioningService
from app.main import app


@pytest.fixture
async def db_engine() -> AsyncIterator[AsyncEngine]:
    """Fresh in-memory SQLite engine with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Let SQLAlchemy own BEGIN so SAVEPOINT (begin_nested) behaves.
    @event.listens_for(engine.sync_engine, "connect")
    def _no_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Session for repository/integration tests. Rolls back after the test."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@dataclass(frozen=True)
class SeededData:
    """Ids of the provisioned catalog plus a small cast of users and tasks."""

    role_ids: dict[str, str]
    status_ids: dict[str, str]
    permission_ids: dict[str, str]
    user_ids: dict[str, str]
    department_id: str
    task_ids: dict[str, str]


SEEDED_USERS = {
    "admin": "super-admin",
    "administrator": "admin",
    "manager": "manager",
    "staff": "staff",
    "viewer": "viewer",
    "assignee": "staff",
}


@pytest.fixture
async def seeded(session_factory: async_sessionmaker[AsyncSession]) -> SeededData:
    """Provision the catalog, then add users, a department and tasks.

    Users: admin (super-admin), administrator (admin), manager, staff, viewer,
    assignee (staff) and inactive (staff, deactivated). Tasks: "todo" in To Do
    and "review" in For Review, both created by staff and assigned to assignee.
    """
    async with session_factory() as session:
        async with session.begin():
            provisioning = CatalogProvisioningService(session)
            summary = await provisioning.provision()

            user_ids: dict[str, str] = {}
            for key in (*SEEDED_USERS, "inactive"):
                user = models.User(
                    id=f"user-{key}",
                    name=key.title(),
                    email=f"{key}@example.com",
                    is_active=key != "inactive",
                )
                session.add(user)
                user_ids[key] = user.id
            department = models.Department(
                id="dept-ops", name="Operations", head_id=user_ids["manager"]
            )
            session.add(department)
            await session.flush()

            for key, slug in SEEDED_USERS.items():
                await provisioning.assign_role(user_ids[key], slug)
            await provisioning.assign_role(user_ids["inactive"], "staff")

            task_ids: dict[str, str] = {}
            for key, status_slug in (("todo", "to-do"), ("review", "for-review")):
                task = models.Task(
                    id=f"task-{key}",
                    title=f"Quarterly report ({key})",
                    status_id=summary.status_ids[status_slug],
                    created_by=user_ids["staff"],
                    department_id=department.id,
                    assignee_ids=[user_ids["assignee"]],
                )
                session.add(task)
                task_ids[key] = task.id
            await session.flush()

    return SeededData(
        role_ids=summary.role_ids,
        status_ids=summary.status_ids,
        permission_ids=summary.permission_ids,
        user_ids=user_ids,
        department_id=department.id,
        task_ids=task_ids,
    )


def auth_header(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def headers(seeded: SeededData) -> dict[str, dict[str, str]]:
    """Bearer headers per seeded user key (admin, manager, staff, ...)."""
    return {key: auth_header(uid) for key, uid in seeded.user_ids.items()}


@pytest.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app, bound to the test database."""

    async def _request_session() -> AsyncIterator[AsyncSession]:
        async with session_factory() as session:
            yield session

    async def _db(session: AsyncSession = Depends(_request_session)):
        yield session

    async def _db_transactional(session: AsyncSession = Depends(_request_session)):
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        else:
            await session.commit()
            await run_after_commit(session)

    app.dependency_overrides[get_db] = _db
    app.dependency_overrides[get_db_transactional] = _db_transactional
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True
