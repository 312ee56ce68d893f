"""Unit tests for docvault.security.models — level hierarchy and records."""

import pytest

from docvault.security.models import (
    LEVEL_HIERARCHY,
    Group,
    PermissionLevel,
    User,
    UserRole,
)
from docvault.security.resolver import has_permission_level, highest_level


class TestLevelHierarchy:
    """The order is view < edit < download < admin."""

    def test_exact_order(self):
        assert [lvl.value for lvl in LEVEL_HIERARCHY] == ["view", "edit", "download", "admin"]

    def test_download_above_edit(self):
        assert PermissionLevel.DOWNLOAD > PermissionLevel.EDIT
        assert PermissionLevel.EDIT < PermissionLevel.DOWNLOAD

    def test_not_alphabetical(self):
        # alphabetically "admin" < "view"
        assert PermissionLevel.ADMIN > PermissionLevel.VIEW

    def test_sorting(self):
        shuffled = [PermissionLevel.ADMIN, PermissionLevel.VIEW, PermissionLevel.DOWNLOAD, PermissionLevel.EDIT]
        assert sorted(shuffled) == LEVEL_HIERARCHY
        assert max(shuffled) == PermissionLevel.ADMIN

    def test_rank(self):
        assert PermissionLevel.VIEW.rank == 0
        assert PermissionLevel.ADMIN.rank == 3

    @pytest.mark.parametrize("held,required,expected", [
        ("view", "view", True),
        ("view", "edit", False),
        ("edit", "download", False),
        ("download", "edit", True),
        ("admin", "download", True),
        ("download", "admin", False),
    ])
    def test_has_permission_level(self, held, required, expected):
        assert has_permission_level(held, required) is expected

    def test_compare_with_non_str_unsupported(self):
        with pytest.raises(TypeError):
            PermissionLevel.VIEW < 3  # noqa: B015

    def test_compare_with_plain_str_uses_hierarchy(self):
        assert PermissionLevel.DOWNLOAD > "edit"
        assert PermissionLevel.VIEW < "admin"
        assert PermissionLevel.ADMIN >= "download"
        assert PermissionLevel.EDIT <= "edit"
        assert "edit" < PermissionLevel.DOWNLOAD
        assert not (PermissionLevel.ADMIN < "view")

    def test_compare_with_unknown_str_raises(self):
        with pytest.raises(ValueError):
            PermissionLevel.VIEW < "owner"  # noqa: B015


class TestHighestLevel:

    def test_empty(self):
        assert highest_level([]) is None


class TestRecords:

    def test_user_is_admin(self):
        assert User(id="1", name="A", email="a@x.com", role=UserRole.ADMIN).is_admin is True
        assert User(id="2", name="B", email="b@x.com").is_admin is False

    def test_group_defaults(self):
        group = Group(id="g", name="Eng")
        assert group.members == []
        assert group.description is None
        assert group.has_member("u") is False
