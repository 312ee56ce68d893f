"""
DocVault Execution Context — identity of the caller for the current request.

The engine does not authenticate. The surrounding session layer resolves the
current user and publishes it here; the engine reads it as the default
grantor and as the subject of ``check_current_user``. Roles are not carried
here: the user record in the principal store is the only source of a role.

Usage:
    from docvault.engine.context import ExecutionContext, set_execution_context

    set_execution_context(ExecutionContext(user_id=user.id))
"""

from __future__ import annotations

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

current_execution_context: ContextVar[Optional["ExecutionContext"]] = ContextVar(
    "docvault_execution_context", default=None
)


@dataclass
class ExecutionContext:
    """Per-request identity, set by the session layer."""

    user_id: str
    execution_id: str = field(default_factory=lambda: f"exec_{uuid.uuid4().hex[:12]}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging."""
        return {
            "user_id": self.user_id,
            "execution_id": self.execution_id,
        }


def set_execution_context(ctx: ExecutionContext) -> None:
    """Set the execution context for the current thread/task."""
    current_execution_context.set(ctx)


def get_execution_context() -> Optional[ExecutionContext]:
    """Get the current execution context. Returns None if not set."""
    return current_execution_context.get()


def clear_execution_context() -> None:
    """Clear the execution context (e.g., on logout or request end)."""
    current_execution_context.set(None)
