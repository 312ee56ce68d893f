"""
DocVault Error Hierarchy — Structured errors returned by the authorization engine.

Errors are carried as values inside ``Err`` results (see ``docvault.engine.result``)
rather than raised. Each class is still an ``Exception`` so that callers who
prefer exceptions can ``result.unwrap()`` and get a normal raise.

Hierarchy:
    DocVaultError
    ├── DocVaultValidationError    — Malformed input (empty required field, unknown enum value)
    ├── DocVaultNotFoundError      — Referenced user / group / permission does not exist
    ├── DocVaultConflictError      — Uniqueness invariant would be violated
    └── DocVaultUnauthorizedError  — Caller lacks rights (reserved)
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class DocVaultError(Exception):
    """
    Base error for all DocVault engine failures.
    All context is serializable to JSON.
    """

    kind: str = "error"

    def __init__(self, message: str, **context: Any):
        self.message = message
        self.error_type: str = self.__class__.__name__
        self.context: Dict[str, Any] = context
        self.document_id: Optional[str] = context.get("document_id")
        self.timestamp: str = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error to a JSON-compatible dict."""
        return {
            "error_type": self.error_type,
            "kind": self.kind,
            "message": self.message,
            "document_id": self.document_id,
            "timestamp": self.timestamp,
            "context": {
                k: str(v) for k, v in self.context.items()
                if k != "document_id"
            },
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), default=str)

    def __repr__(self) -> str:
        parts = [f"{self.error_type}: {self.message}"]
        if self.document_id:
            parts.append(f"document_id={self.document_id}")
        return " | ".join(parts)


class DocVaultValidationError(DocVaultError):
    """
    Malformed input. Recoverable: the caller re-prompts.
    Includes the offending field name when known.
    """

    kind = "validation_error"

    def __init__(self, message: str, **context: Any):
        self.field: Optional[str] = context.get("field")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["field"] = self.field
        return d


class DocVaultNotFoundError(DocVaultError):
    """Referenced id does not exist. Recoverable: the caller refreshes state."""

    kind = "not_found"

    def __init__(self, message: str, **context: Any):
        self.entity: Optional[str] = context.get("entity")
        self.entity_id: Optional[str] = context.get("entity_id")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["entity"] = self.entity
        d["entity_id"] = self.entity_id
        return d


class DocVaultConflictError(DocVaultError):
    """A uniqueness invariant would be violated (email, group name, membership)."""

    kind = "conflict"


class DocVaultUnauthorizedError(DocVaultError):
    """
    Caller lacks the rights for an operation.
    Not produced by grant/revoke today; grantor rights are not checked.
    """

    kind = "unauthorized"

    def __init__(self, message: str, **context: Any):
        self.user_id: Optional[str] = context.get("user_id")
        self.required_permission: Optional[str] = context.get("required_permission")
        super().__init__(message, **context)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["user_id"] = self.user_id
        d["required_permission"] = self.required_permission
        return d
