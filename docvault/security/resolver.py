"""
DocVault Permission Resolver — answers "may user U act at level L on document D?"

Resolution:
1. role == admin → always allowed, independent of grants
2. Effective set = direct user grants ∪ grants to any group containing the user
3. Empty effective set → denied
4. Highest level in the effective set (folded from "view") must satisfy L

Group membership is additive. There is no explicit deny: a missing grant
means no access.

The resolver only reads the stores. Callers that share the stores across
threads go through AccessControl, which holds the lock.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from docvault.security.grants import GrantStore
from docvault.security.models import (
    DocumentAccessList,
    GranteeType,
    GroupAccess,
    Permission,
    PermissionLevel,
    UserAccess,
)
from docvault.security.principals import PrincipalStore

logger = logging.getLogger("docvault.security.resolver")


def has_permission_level(held: PermissionLevel, required: PermissionLevel) -> bool:
    """True if ``held`` is at or above ``required`` in the level hierarchy."""
    return PermissionLevel(held).satisfies(PermissionLevel(required))


def highest_level(permissions: List[Permission]) -> Optional[PermissionLevel]:
    """Highest level across ``permissions``, or None when there are none."""
    if not permissions:
        return None
    highest = PermissionLevel.VIEW
    for perm in permissions:
        if perm.level > highest:
            highest = perm.level
    return highest


class PermissionResolver:
    """Computes effective access from a PrincipalStore and a GrantStore."""

    def __init__(self, principals: PrincipalStore, grants: GrantStore):
        self._principals = principals
        self._grants = grants

    def effective_permissions(self, document_id: str, user_id: str) -> List[Permission]:
        """Direct and group-inherited grants the user holds on the document."""
        group_ids = self._principals.group_ids_for_user(user_id)
        return self._grants.list_for_grantees(document_id, user_id, group_ids)

    def effective_level(self, document_id: str, user_id: str) -> Optional[PermissionLevel]:
        """
        Highest level the user holds on the document.

        Admins resolve to PermissionLevel.ADMIN. None means no access.
        """
        user = self._principals.get_user(user_id)
        if user is not None and user.is_admin:
            return PermissionLevel.ADMIN
        return highest_level(self.effective_permissions(document_id, user_id))

    def check_permission(
        self,
        document_id: str,
        user_id: str,
        required_level: Union[PermissionLevel, str],
    ) -> bool:
        """
        Check if the user may perform an action requiring ``required_level``.

        Returns:
            True if allowed, False if denied. Unknown users and unknown
            levels are denied.
        """
        user = self._principals.get_user(user_id)
        if user is not None and user.is_admin:
            logger.debug(f"Admin bypass: {user_id} → {document_id}")
            return True

        try:
            required = PermissionLevel(required_level)
        except ValueError:
            logger.debug(f"Unknown permission level '{required_level}' — denying")
            return False

        level = highest_level(self.effective_permissions(document_id, user_id))
        if level is None:
            logger.debug(f"No grants: {user_id} → {document_id}")
            return False

        allowed = level.satisfies(required)
        logger.debug(
            f"{'Allowed' if allowed else 'Denied'}: {user_id} → {document_id} "
            f"(held={level.value}, required={required.value})"
        )
        return allowed

    def get_document_access_list(self, document_id: str) -> DocumentAccessList:
        """
        Raw grants on the document paired with their principals.

        Group grants are not expanded to individual members.
        """
        access = DocumentAccessList()
        for perm in self._grants.list_for_document(document_id):
            if perm.grantee_type == GranteeType.USER:
                user = self._principals.get_user(perm.grantee_id)
                if user is not None:
                    access.users.append(UserAccess(user=user, permission=perm))
            else:
                group = self._principals.get_group(perm.grantee_id)
                if group is not None:
                    access.groups.append(GroupAccess(group=group, permission=perm))
        return access
