"""
Result type for engine operations.

Every administration operation returns either ``Ok(value)`` or ``Err(error)``.
Callers branch on ``result.is_ok`` (or ``isinstance``) instead of probing the
shape of the returned value:

    result = access.create_user("Alice", "alice@x.com")
    if result.is_ok:
        user = result.value
    else:
        show(result.error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from docvault.engine.errors import DocVaultError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a DocVaultError."""

    error: DocVaultError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    @property
    def kind(self) -> str:
        return self.error.kind

    def unwrap(self):
        """Raise the carried error."""
        raise self.error


Result = Union[Ok[T], Err]
