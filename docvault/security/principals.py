"""
DocVault Principal Store — owns Users and Groups.

Plain in-memory collections in insertion order. No validation happens here;
the Administration API (docvault.security.admin) checks every invariant
before calling a mutating method. Reads return deep copies so callers can
never mutate store state through a returned object.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from docvault.security.models import Group, User


class PrincipalStore:
    """Users and Groups keyed by id. Membership lives on the Group."""

    def __init__(self):
        self._users: Dict[str, User] = {}
        self._groups: Dict[str, Group] = {}

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------

    def add_user(self, user: User) -> User:
        self._users[user.id] = user.model_copy(deep=True)
        return user.model_copy(deep=True)

    def replace_user(self, user: User) -> User:
        """Overwrite an existing user record (same id, position kept)."""
        self._users[user.id] = user.model_copy(deep=True)
        return user.model_copy(deep=True)

    def get_user(self, user_id: str) -> Optional[User]:
        user = self._users.get(user_id)
        return user.model_copy(deep=True) if user else None

    def has_user(self, user_id: str) -> bool:
        return user_id in self._users

    def find_user_by_email(self, email: str) -> Optional[User]:
        """Case-insensitive lookup on the trimmed email."""
        needle = email.strip().lower()
        for user in self._users.values():
            if user.email == needle:
                return user.model_copy(deep=True)
        return None

    def list_users(self) -> List[User]:
        return [u.model_copy(deep=True) for u in self._users.values()]

    def user_count(self) -> int:
        return len(self._users)

    # -------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------

    def add_group(self, group: Group) -> Group:
        self._groups[group.id] = group.model_copy(deep=True)
        return group.model_copy(deep=True)

    def get_group(self, group_id: str) -> Optional[Group]:
        group = self._groups.get(group_id)
        return group.model_copy(deep=True) if group else None

    def has_group(self, group_id: str) -> bool:
        return group_id in self._groups

    def find_group_by_name(self, name: str) -> Optional[Group]:
        """Case-insensitive lookup on the trimmed name."""
        needle = name.strip().lower()
        for group in self._groups.values():
            if group.name.lower() == needle:
                return group.model_copy(deep=True)
        return None

    def list_groups(self) -> List[Group]:
        return [g.model_copy(deep=True) for g in self._groups.values()]

    # -------------------------------------------------------------------
    # Membership
    # -------------------------------------------------------------------

    def add_member(self, group_id: str, user_id: str) -> Group:
        group = self._groups[group_id]
        if user_id not in group.members:
            group.members.append(user_id)
        return group.model_copy(deep=True)

    def remove_member(self, group_id: str, user_id: str) -> Group:
        group = self._groups[group_id]
        if user_id in group.members:
            group.members.remove(user_id)
        return group.model_copy(deep=True)

    def group_ids_for_user(self, user_id: str) -> List[str]:
        return [g.id for g in self._groups.values() if user_id in g.members]

    def groups_for_user(self, user_id: str) -> List[Group]:
        return [
            g.model_copy(deep=True)
            for g in self._groups.values()
            if user_id in g.members
        ]
