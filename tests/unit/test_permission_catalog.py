"""Tests for the static permission catalog, system roles and default workflow."""

import pytest

from app.application.services.permission_catalog import (
    ALL_PERMISSION_CODES,
    DEFAULT_WORKFLOW_STATUSES,
    DEFAULT_WORKFLOW_TRANSITIONS,
    PERMISSIONS,
    ROLE_DEFINITIONS,
    group_permissions,
    list_grouped,
    list_permissions,
    _perm,
)
from app.domain.value_objects import PermissionCode, Slug


def _role(slug: str):
    return next(r for r in ROLE_DEFINITIONS if r.slug == slug)


class TestPermissions:
    def test_codes_unique_and_well_formed(self) -> None:
        assert len(set(ALL_PERMISSION_CODES)) == len(ALL_PERMISSION_CODES)
        for code in ALL_PERMISSION_CODES:
            assert PermissionCode.parse(code).code == code

    def test_gated_operations_are_in_catalog(self) -> None:
        for code in (
            "roles:create",
            "roles:view",
            "roles:update",
            "roles:delete",
            "roles:clone",
            "tasks:update",
            "tasks:view",
            "workflow:configure",
        ):
            assert code in ALL_PERMISSION_CODES

    def test_catalog_entry_rejects_malformed_code(self) -> None:
        with pytest.raises(ValueError):
            _perm("tasks", "View-All", "bad", "Task Management")

    def test_list_permissions_keeps_declaration_order(self) -> None:
        assert [p.code for p in list_permissions()] == list(ALL_PERMISSION_CODES)

    def test_grouping(self) -> None:
        grouped = list_grouped()
        assert sum(len(v) for v in grouped.values()) == len(PERMISSIONS)
        assert {p.code for p in grouped["Role Management"]} == {
            "roles:create",
            "roles:view",
            "roles:update",
            "roles:delete",
            "roles:clone",
        }
        assert [p.code for p in grouped["Workflow"]] == ["workflow:configure"]

    def test_group_permissions_accepts_any_grouped_objects(self) -> None:
        class Item:
            def __init__(self, group: str) -> None:
                self.group = group

        items = [Item("b"), Item("a"), Item("b")]
        grouped = group_permissions(items)
        assert list(grouped) == ["b", "a"]
        assert grouped["b"] == [items[0], items[2]]


class TestSystemRoles:
    def test_slugs(self) -> None:
        assert [r.slug for r in ROLE_DEFINITIONS] == [
            "super-admin",
            "admin",
            "manager",
            "staff",
            "viewer",
        ]

    def test_role_codes_exist_in_catalog(self) -> None:
        for role in ROLE_DEFINITIONS:
            assert set(role.permission_codes) <= set(ALL_PERMISSION_CODES), role.slug

    def test_super_admin_has_everything(self) -> None:
        assert set(_role("super-admin").permission_codes) == set(ALL_PERMISSION_CODES)

    def test_admin_cannot_configure_workflow(self) -> None:
        codes = set(_role("admin").permission_codes)
        assert "workflow:configure" not in codes
        assert "roles:create" in codes

    def test_staff_can_move_tasks_but_not_manage_roles(self) -> None:
        codes = set(_role("staff").permission_codes)
        assert "tasks:update" in codes
        assert not any(c.startswith("roles:") for c in codes)

    def test_viewer_is_read_only(self) -> None:
        codes = set(_role("viewer").permission_codes)
        assert "tasks:update" not in codes
        assert "tasks:view" in codes


class TestDefaultWorkflow:
    def test_single_default_status(self) -> None:
        defaults = [s for s in DEFAULT_WORKFLOW_STATUSES if s.is_default]
        assert [s.slug for s in defaults] == ["to-do"]

    def test_final_statuses(self) -> None:
        assert {s.slug for s in DEFAULT_WORKFLOW_STATUSES if s.is_final} == {
            "completed",
            "cancelled",
        }

    def test_slugs_valid_and_orders_unique(self) -> None:
        for s in DEFAULT_WORKFLOW_STATUSES:
            Slug(s.slug)
        orders = [s.order for s in DEFAULT_WORKFLOW_STATUSES]
        assert len(set(orders)) == len(orders)

    def test_transitions_reference_known_statuses_and_roles(self) -> None:
        statuses = {s.slug for s in DEFAULT_WORKFLOW_STATUSES}
        roles = {r.slug for r in ROLE_DEFINITIONS}
        pairs = set()
        for t in DEFAULT_WORKFLOW_TRANSITIONS:
            assert t.from_slug in statuses
            assert t.to_slug in statuses
            assert set(t.allowed_role_slugs) <= roles
            pairs.add((t.from_slug, t.to_slug))
        assert len(pairs) == len(DEFAULT_WORKFLOW_TRANSITIONS)

    def test_completion_is_gated_to_reviewers(self) -> None:
        edge = next(
            t
            for t in DEFAULT_WORKFLOW_TRANSITIONS
            if (t.from_slug, t.to_slug) == ("for-review", "completed")
        )
        assert set(edge.allowed_role_slugs) == {"super-admin", "admin", "manager"}

    def test_cancelling_requires_remarks(self) -> None:
        for t in DEFAULT_WORKFLOW_TRANSITIONS:
            if t.to_slug == "cancelled":
                assert t.requires_remarks
