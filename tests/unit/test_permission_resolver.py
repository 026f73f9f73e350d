"""Tests for PermissionResolver (role ids -> permission codes)."""

import pytest

from app.application.services.permission_resolver import PermissionResolver
from tests.unit.fakes import FakePermissionRepository, FakeRoleRepository


@pytest.fixture
def repos():
    perms = FakePermissionRepository()
    for code in ("tasks:view", "tasks:update", "roles:view", "workflow:configure"):
        perms.add(code)
    return perms, FakeRoleRepository(perms)


async def test_union_of_active_roles(repos) -> None:
    perms, roles = repos
    a = roles.add("reader", ["tasks:view"])
    b = roles.add("editor", ["tasks:view", "tasks:update"])
    resolver = PermissionResolver(roles, perms)
    assert await resolver.resolve([a.id, b.id]) == {"tasks:view", "tasks:update"}


async def test_no_roles_resolves_to_nothing(repos) -> None:
    perms, roles = repos
    resolver = PermissionResolver(roles, perms)
    assert await resolver.resolve([]) == set()
    assert await resolver.resolve(["", None]) == set()


async def test_unknown_and_inactive_roles_contribute_nothing(repos) -> None:
    perms, roles = repos
    inactive = roles.add("old", ["roles:view"], is_active=False)
    active = roles.add("reader", ["tasks:view"])
    resolver = PermissionResolver(roles, perms)
    assert await resolver.resolve([inactive.id, active.id, "deleted-role"]) == {"tasks:view"}


async def test_super_admin_gets_whole_catalog(repos) -> None:
    perms, roles = repos
    sa = roles.add("super-admin", [])
    resolver = PermissionResolver(roles, perms)
    assert await resolver.resolve([sa.id]) == {
        "tasks:view",
        "tasks:update",
        "roles:view",
        "workflow:configure",
    }


async def test_inactive_super_admin_is_not_special(repos) -> None:
    perms, roles = repos
    sa = roles.add("super-admin", ["tasks:view"], is_active=False)
    resolver = PermissionResolver(roles, perms)
    assert await resolver.resolve([sa.id]) == set()


async def test_super_admin_follows_catalog_growth(repos) -> None:
    perms, roles = repos
    sa = roles.add("super-admin", [])
    perms.add("reports:export")
    resolver = PermissionResolver(roles, perms)
    assert "reports:export" in await resolver.resolve([sa.id])
