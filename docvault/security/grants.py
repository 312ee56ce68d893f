"""
DocVault Grant Store — owns document Permissions.

Permissions are keyed by (document_id, grantee_id, grantee_type), which makes
the at-most-one-grant-per-tuple invariant structural. Principals are
referenced by id only; nothing cascades from the Principal Store.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from docvault.security.models import GranteeType, Permission

GrantKey = Tuple[str, str, GranteeType]


class GrantStore:
    """Permissions in insertion order, unique per grant key."""

    def __init__(self):
        self._permissions: Dict[GrantKey, Permission] = {}

    @staticmethod
    def make_key(document_id: str, grantee_id: str, grantee_type: GranteeType) -> GrantKey:
        return (document_id, grantee_id, GranteeType(grantee_type))

    def get(self, document_id: str, grantee_id: str, grantee_type: GranteeType) -> Optional[Permission]:
        perm = self._permissions.get(self.make_key(document_id, grantee_id, grantee_type))
        return perm.model_copy(deep=True) if perm else None

    def put(self, permission: Permission) -> Permission:
        """Insert or overwrite the permission stored under its key."""
        self._permissions[permission.key] = permission.model_copy(deep=True)
        return permission.model_copy(deep=True)

    def remove(self, document_id: str, grantee_id: str, grantee_type: GranteeType) -> bool:
        key = self.make_key(document_id, grantee_id, grantee_type)
        if key not in self._permissions:
            return False
        del self._permissions[key]
        return True

    def list_for_document(self, document_id: str) -> List[Permission]:
        return [
            p.model_copy(deep=True)
            for p in self._permissions.values()
            if p.document_id == document_id
        ]

    def list_for_grantees(
        self,
        document_id: str,
        user_id: str,
        group_ids: Iterable[str],
    ) -> List[Permission]:
        """Grants on ``document_id`` held directly by ``user_id`` or by any of ``group_ids``."""
        group_ids = set(group_ids)
        matches = []
        for perm in self._permissions.values():
            if perm.document_id != document_id:
                continue
            if perm.grantee_type == GranteeType.USER and perm.grantee_id == user_id:
                matches.append(perm.model_copy(deep=True))
            elif perm.grantee_type == GranteeType.GROUP and perm.grantee_id in group_ids:
                matches.append(perm.model_copy(deep=True))
        return matches

    def __len__(self) -> int:
        return len(self._permissions)
