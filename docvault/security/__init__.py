"""
DocVault Security — Principal store, grant store, resolver, administration API.
"""

from docvault.security.admin import AccessControl
from docvault.security.grants import GrantStore
from docvault.security.models import (
    LEVEL_HIERARCHY,
    DocumentAccessList,
    GranteeType,
    Group,
    GroupAccess,
    Permission,
    PermissionLevel,
    User,
    UserAccess,
    UserRole,
)
from docvault.security.principals import PrincipalStore
from docvault.security.resolver import PermissionResolver, has_permission_level

__all__ = [
    "AccessControl",
    "GrantStore",
    "PrincipalStore",
    "PermissionResolver",
    "has_permission_level",
    "LEVEL_HIERARCHY",
    "DocumentAccessList",
    "GranteeType",
    "Group",
    "GroupAccess",
    "Permission",
    "PermissionLevel",
    "User",
    "UserAccess",
    "UserRole",
]
