"""
DocVault Access Control — Administration API over the principal and grant stores.

Implements:
- User / group creation and update with uniqueness checks
- Group membership changes
- Grant (upsert) and revoke of document permissions
- Permission checks and access lists via PermissionResolver
- Admin seeding on first start

Every mutating operation validates fully before touching a store, so a failed
call leaves state unchanged. Failures are returned as ``Err`` values, never
raised. One re-entrant lock covers both stores: reads observe either the
pre- or post-mutation state, and concurrent grants on the same
(document, grantee) tuple cannot create duplicates.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, List, Optional, Type, TypeVar, Union

from docvault.engine.config import PlatformConfig, get_platform_config
from docvault.engine.context import get_execution_context
from docvault.engine.errors import (
    DocVaultConflictError,
    DocVaultNotFoundError,
    DocVaultValidationError,
)
from docvault.engine.logging import init_logging
from docvault.engine.result import Err, Ok, Result
from docvault.security.grants import GrantStore
from docvault.security.models import (
    DocumentAccessList,
    GranteeType,
    Group,
    Permission,
    PermissionLevel,
    User,
    UserRole,
)
from docvault.security.principals import PrincipalStore
from docvault.security.resolver import PermissionResolver

logger = logging.getLogger("docvault.security.admin")

E = TypeVar("E", UserRole, GranteeType, PermissionLevel)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _blank(value) -> bool:
    return not isinstance(value, str) or not value.strip()


def _parse_enum(enum_cls: Type[E], value, field: str) -> Union[E, Err]:
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = "/".join(m.value for m in enum_cls)
        return Err(DocVaultValidationError(
            f"Invalid {field} '{value}' (expected {allowed})",
            field=field,
        ))


class AccessControl:
    """
    Single entry point for administration and authorization queries.

    Stores are injected so tests can start from a fresh pair; the clock is
    injectable for deterministic timestamps.
    """

    def __init__(
        self,
        principals: Optional[PrincipalStore] = None,
        grants: Optional[GrantStore] = None,
        config: Optional[PlatformConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._principals = principals if principals is not None else PrincipalStore()
        self._grants = grants if grants is not None else GrantStore()
        self._config = config
        self._clock = clock or _utcnow
        self._resolver = PermissionResolver(self._principals, self._grants)
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: Optional[PlatformConfig] = None) -> "AccessControl":
        """Configure logging, build fresh stores and seed the admin user if configured."""
        config = config or get_platform_config()
        init_logging(config.logging)
        access = cls(config=config)
        access.initialize()
        return access

    @property
    def config(self) -> PlatformConfig:
        if self._config is None:
            self._config = get_platform_config()
        return self._config

    def initialize(self) -> Optional[User]:
        """
        Seed the configured administrator when no users exist yet.

        Returns the created admin, or None if seeding was skipped.
        """
        security = self.config.security
        with self._lock:
            if not security.seed_admin or self._principals.user_count() > 0:
                return None
            result = self.create_user(security.admin_name, security.admin_email, UserRole.ADMIN)
        return result.unwrap()

    # -------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------

    def create_user(
        self,
        name: str,
        email: str,
        role: Union[UserRole, str] = UserRole.USER,
    ) -> Result[User]:
        """
        Create a user. Email is trimmed and lowercased.

        Errors:
            DocVaultValidationError — empty name/email or unknown role
            DocVaultConflictError — email already used (case-insensitive)
        """
        if _blank(name) or _blank(email):
            return Err(DocVaultValidationError("Name and email are required", field="name/email"))

        parsed_role = _parse_enum(UserRole, role, "role")
        if isinstance(parsed_role, Err):
            return parsed_role

        normalized_email = email.strip().lower()
        with self._lock:
            if self._principals.find_user_by_email(normalized_email) is not None:
                return Err(DocVaultConflictError(
                    "User with this email already exists",
                    email=normalized_email,
                ))

            user = self._principals.add_user(User(
                id=str(uuid.uuid4()),
                name=name.strip(),
                email=normalized_email,
                role=parsed_role,
            ))

        logger.info(f"User created: {user.email} ({user.role.value}, id={user.id})")
        return Ok(user)

    def update_user(
        self,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        role: Optional[Union[UserRole, str]] = None,
    ) -> Result[User]:
        """Update the supplied fields of a user. Omitted fields are kept."""
        if name is not None and _blank(name):
            return Err(DocVaultValidationError("Name cannot be empty", field="name"))
        if email is not None and _blank(email):
            return Err(DocVaultValidationError("Email cannot be empty", field="email"))

        parsed_role = None
        if role is not None:
            parsed_role = _parse_enum(UserRole, role, "role")
            if isinstance(parsed_role, Err):
                return parsed_role

        with self._lock:
            user = self._principals.get_user(user_id)
            if user is None:
                return Err(DocVaultNotFoundError("User not found", entity="user", entity_id=user_id))

            changes = {}
            if name is not None:
                changes["name"] = name.strip()
            if email is not None:
                normalized_email = email.strip().lower()
                owner = self._principals.find_user_by_email(normalized_email)
                if owner is not None and owner.id != user_id:
                    return Err(DocVaultConflictError(
                        "User with this email already exists",
                        email=normalized_email,
                    ))
                changes["email"] = normalized_email
            if parsed_role is not None:
                changes["role"] = parsed_role

            updated = self._principals.replace_user(user.model_copy(update=changes))

        logger.info(f"User updated: {updated.id} ({', '.join(sorted(changes)) or 'no changes'})")
        return Ok(updated)

    def get_user(self, user_id: str) -> Result[User]:
        with self._lock:
            user = self._principals.get_user(user_id)
        if user is None:
            return Err(DocVaultNotFoundError("User not found", entity="user", entity_id=user_id))
        return Ok(user)

    def list_users(self) -> List[User]:
        with self._lock:
            return self._principals.list_users()

    # -------------------------------------------------------------------
    # Groups
    # -------------------------------------------------------------------

    def create_group(self, name: str, description: Optional[str] = None) -> Result[Group]:
        """
        Create an empty group.

        Errors:
            DocVaultValidationError — empty name
            DocVaultConflictError — name already used (case-insensitive)
        """
        if _blank(name):
            return Err(DocVaultValidationError("Group name is required", field="name"))
        if description is not None and not isinstance(description, str):
            return Err(DocVaultValidationError("Group description must be text", field="description"))

        with self._lock:
            if self._principals.find_group_by_name(name) is not None:
                return Err(DocVaultConflictError(
                    "Group with this name already exists",
                    name=name.strip(),
                ))

            group = self._principals.add_group(Group(
                id=str(uuid.uuid4()),
                name=name.strip(),
                description=(description or "").strip() or None,
            ))

        logger.info(f"Group created: {group.name} (id={group.id})")
        return Ok(group)

    def get_group(self, group_id: str) -> Result[Group]:
        with self._lock:
            group = self._principals.get_group(group_id)
        if group is None:
            return Err(DocVaultNotFoundError("Group not found", entity="group", entity_id=group_id))
        return Ok(group)

    def list_groups(self) -> List[Group]:
        with self._lock:
            return self._principals.list_groups()

    def groups_for_user(self, user_id: str) -> List[Group]:
        with self._lock:
            return self._principals.groups_for_user(user_id)

    def add_member(self, user_id: str, group_id: str) -> Result[Group]:
        """
        Add a user to a group.

        Errors:
            DocVaultNotFoundError — unknown user or group
            DocVaultConflictError — already a member
        """
        with self._lock:
            if not self._principals.has_user(user_id):
                return Err(DocVaultNotFoundError("User not found", entity="user", entity_id=user_id))
            group = self._principals.get_group(group_id)
            if group is None:
                return Err(DocVaultNotFoundError("Group not found", entity="group", entity_id=group_id))
            if group.has_member(user_id):
                return Err(DocVaultConflictError(
                    "User is already a member of this group",
                    user_id=user_id,
                    group_id=group_id,
                ))
            group = self._principals.add_member(group_id, user_id)

        logger.info(f"User {user_id} added to group {group.name}")
        return Ok(group)

    def remove_member(self, user_id: str, group_id: str) -> Result[Group]:
        """
        Remove a user from a group.

        Errors:
            DocVaultNotFoundError — unknown group, or user not a member
        """
        with self._lock:
            group = self._principals.get_group(group_id)
            if group is None:
                return Err(DocVaultNotFoundError("Group not found", entity="group", entity_id=group_id))
            if not group.has_member(user_id):
                return Err(DocVaultNotFoundError(
                    "User is not a member of this group",
                    entity="membership",
                    entity_id=user_id,
                    group_id=group_id,
                ))
            group = self._principals.remove_member(group_id, user_id)

        logger.info(f"User {user_id} removed from group {group.name}")
        return Ok(group)

    # -------------------------------------------------------------------
    # Grants
    # -------------------------------------------------------------------

    def grant(
        self,
        document_id: str,
        grantee_id: str,
        grantee_type: Union[GranteeType, str],
        level: Union[PermissionLevel, str],
        granted_by: Optional[str] = None,
    ) -> Result[Permission]:
        """
        Grant ``level`` on a document to a user or group.

        Upsert: if the (document, grantee) tuple already has a permission,
        its level and updated_at are overwritten and the same record is
        returned. ``granted_by`` defaults to the current execution context's
        user. The grantor's own rights are not checked.

        Errors:
            DocVaultValidationError — empty document id, bad type/level, no grantor
            DocVaultNotFoundError — grantee does not exist
        """
        if _blank(document_id):
            return Err(DocVaultValidationError("Document id is required", field="document_id"))

        parsed_type = _parse_enum(GranteeType, grantee_type, "grantee_type")
        if isinstance(parsed_type, Err):
            return parsed_type
        parsed_level = _parse_enum(PermissionLevel, level, "level")
        if isinstance(parsed_level, Err):
            return parsed_level

        if granted_by is None:
            ctx = get_execution_context()
            granted_by = ctx.user_id if ctx is not None else None
        if _blank(granted_by):
            return Err(DocVaultValidationError(
                "Grantor is required",
                field="granted_by",
                document_id=document_id,
            ))

        with self._lock:
            if parsed_type == GranteeType.USER and not self._principals.has_user(grantee_id):
                return Err(DocVaultNotFoundError(
                    "User not found",
                    entity="user",
                    entity_id=grantee_id,
                    document_id=document_id,
                ))
            if parsed_type == GranteeType.GROUP and not self._principals.has_group(grantee_id):
                return Err(DocVaultNotFoundError(
                    "Group not found",
                    entity="group",
                    entity_id=grantee_id,
                    document_id=document_id,
                ))

            existing = self._grants.get(document_id, grantee_id, parsed_type)
            if existing is not None:
                existing.level = parsed_level
                existing.updated_at = self._next_timestamp(existing.updated_at)
                permission = self._grants.put(existing)
                action = "updated"
            else:
                now = self._clock()
                permission = self._grants.put(Permission(
                    id=str(uuid.uuid4()),
                    document_id=document_id,
                    grantee_id=grantee_id,
                    grantee_type=parsed_type,
                    level=parsed_level,
                    granted_by=granted_by,
                    granted_at=now,
                    updated_at=now,
                ))
                action = "granted"

        logger.info(
            f"Permission {action}: {permission.level.value} on {document_id} "
            f"to {parsed_type.value} {grantee_id} by {granted_by}"
        )
        return Ok(permission)

    def revoke(
        self,
        document_id: str,
        grantee_id: str,
        grantee_type: Union[GranteeType, str],
    ) -> Result[None]:
        """
        Remove the permission for a (document, grantee) tuple.

        Errors:
            DocVaultValidationError — bad grantee type
            DocVaultNotFoundError — no such permission
        """
        parsed_type = _parse_enum(GranteeType, grantee_type, "grantee_type")
        if isinstance(parsed_type, Err):
            return parsed_type

        with self._lock:
            removed = self._grants.remove(document_id, grantee_id, parsed_type)
        if not removed:
            return Err(DocVaultNotFoundError(
                "Permission not found",
                entity="permission",
                entity_id=grantee_id,
                document_id=document_id,
            ))

        logger.info(f"Permission revoked on {document_id} from {parsed_type.value} {grantee_id}")
        return Ok(None)

    def list_for_document(self, document_id: str) -> List[Permission]:
        with self._lock:
            return self._grants.list_for_document(document_id)

    def _next_timestamp(self, previous: datetime) -> datetime:
        """Current time, bumped so it is strictly later than ``previous``."""
        now = self._clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    # -------------------------------------------------------------------
    # Authorization queries
    # -------------------------------------------------------------------

    def check_permission(
        self,
        document_id: str,
        user_id: str,
        required_level: Union[PermissionLevel, str],
    ) -> bool:
        with self._lock:
            return self._resolver.check_permission(document_id, user_id, required_level)

    def check_current_user(
        self,
        document_id: str,
        required_level: Union[PermissionLevel, str],
    ) -> bool:
        """Check the user of the active execution context. No context → denied."""
        ctx = get_execution_context()
        if ctx is None:
            return False
        return self.check_permission(document_id, ctx.user_id, required_level)

    def effective_level(self, document_id: str, user_id: str) -> Optional[PermissionLevel]:
        with self._lock:
            return self._resolver.effective_level(document_id, user_id)

    def get_document_access_list(self, document_id: str) -> DocumentAccessList:
        with self._lock:
            return self._resolver.get_document_access_list(document_id)
