"""
DocVault Security Models — Users, Groups, document Permissions.

User: identity with a unique, case-insensitive email and a role.
Group: named set of user ids.
Permission: one (document, grantee, level) grant with provenance.

Level hierarchy (total order, lowest first):
    view < edit < download < admin

"download" deliberately ranks above "edit"; compare levels through
PermissionLevel, never as plain strings.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    USER = "user"
    ADMIN = "admin"


class GranteeType(str, Enum):
    USER = "user"
    GROUP = "group"


class PermissionLevel(str, Enum):
    """Document permission level. Ordered by LEVEL_HIERARCHY, not alphabetically."""

    VIEW = "view"
    EDIT = "edit"
    DOWNLOAD = "download"
    ADMIN = "admin"

    @property
    def rank(self) -> int:
        return LEVEL_HIERARCHY.index(self)

    def satisfies(self, required: "PermissionLevel") -> bool:
        """True if holding this level grants an action requiring ``required``."""
        return self.rank >= required.rank

    def _coerce(self, other):
        """Plain strings are parsed as levels; unknown values raise ValueError."""
        if isinstance(other, PermissionLevel):
            return other
        if isinstance(other, str):
            return PermissionLevel(other)
        return None

    def __lt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank <= other.rank

    def __gt__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank > other.rank

    def __ge__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.rank >= other.rank


LEVEL_HIERARCHY: List[PermissionLevel] = [
    PermissionLevel.VIEW,
    PermissionLevel.EDIT,
    PermissionLevel.DOWNLOAD,
    PermissionLevel.ADMIN,
]


class User(BaseModel):
    """Principal identity. Email is stored trimmed and lowercased."""

    id: str = Field(description="System-generated unique id")
    name: str = Field(description="Display name")
    email: str = Field(description="Unique, lowercased email")
    role: UserRole = Field(default=UserRole.USER)

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


class Group(BaseModel):
    """Named set of users. Members are unique user ids in insertion order."""

    id: str = Field(description="System-generated unique id")
    name: str = Field(description="Unique (case-insensitive) group name")
    description: Optional[str] = Field(default=None)
    members: List[str] = Field(default_factory=list, description="Member user ids")

    def has_member(self, user_id: str) -> bool:
        return user_id in self.members


class Permission(BaseModel):
    """
    A grant of ``level`` on ``document_id`` to a user or group.

    At most one Permission exists per (document_id, grantee_id, grantee_type).
    Re-granting overwrites ``level`` and ``updated_at`` in place.
    """

    id: str
    document_id: str
    grantee_id: str
    grantee_type: GranteeType
    level: PermissionLevel
    granted_by: str = Field(description="User id of the grantor")
    granted_at: datetime
    updated_at: datetime

    @property
    def key(self) -> tuple:
        return (self.document_id, self.grantee_id, self.grantee_type)


class UserAccess(BaseModel):
    """Direct user grant on a document, for display."""

    user: User
    permission: Permission


class GroupAccess(BaseModel):
    """Group grant on a document, for display."""

    group: Group
    permission: Permission


class DocumentAccessList(BaseModel):
    """Raw grants on one document, split by grantee type."""

    users: List[UserAccess] = Field(default_factory=list)
    groups: List[GroupAccess] = Field(default_factory=list)
