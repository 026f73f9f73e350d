"""Tests for domain value objects (Slug, PermissionCode, HexColor, slugify)."""

import pytest

from app.domain.value_objects import HexColor, PermissionCode, Slug, slugify


class TestSlugify:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Super Admin", "super-admin"),
            ("Manager (Copy)", "manager-copy"),
            ("  In   Progress ", "in-progress"),
            ("For-Review", "for-review"),
            ("Q&A -- Team", "qa-team"),
        ],
    )
    def test_slugify(self, name: str, expected: str) -> None:
        assert slugify(name) == expected

    def test_only_punctuation_gives_empty(self) -> None:
        assert slugify("!!!") == ""


class TestSlug:
    def test_valid(self) -> None:
        assert Slug("to-do").value == "to-do"

    @pytest.mark.parametrize("bad", ["", "To-Do", "to--do", "-to", "to_do", "a" * 101])
    def test_invalid(self, bad: str) -> None:
        with pytest.raises(ValueError):
            Slug(bad)


class TestPermissionCode:
    def test_parse_and_format(self) -> None:
        code = PermissionCode.parse("activity_logs:view")
        assert code.resource == "activity_logs"
        assert code.action == "view"
        assert code.code == "activity_logs:view"
        assert str(code) == "activity_logs:view"

    @pytest.mark.parametrize("bad", ["tasks", "tasks:", ":view", "a:b:c", "Tasks:view", "tasks:*"])
    def test_parse_rejects(self, bad: str) -> None:
        with pytest.raises(ValueError):
            PermissionCode.parse(bad)

    def test_equality_by_value(self) -> None:
        assert PermissionCode("tasks", "view") == PermissionCode.parse("tasks:view")


class TestHexColor:
    def test_valid(self) -> None:
        assert HexColor("#3B82F6").value == "#3B82F6"

    @pytest.mark.parametrize("bad", ["", "3b82f6", "#fff", "#3b82fg", "blue"])
    def test_invalid(self, bad: str) -> None:
        with pytest.raises(ValueError):
            HexColor(bad)
