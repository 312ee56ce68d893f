"""DocVault Engine — Errors, results, configuration, logging, execution context."""

from docvault.engine.errors import (  # noqa: F401
    DocVaultConflictError,
    DocVaultError,
    DocVaultNotFoundError,
    DocVaultUnauthorizedError,
    DocVaultValidationError,
)
from docvault.engine.result import Err, Ok, Result  # noqa: F401

__all__ = [
    "DocVaultError",
    "DocVaultValidationError",
    "DocVaultNotFoundError",
    "DocVaultConflictError",
    "DocVaultUnauthorizedError",
    "Ok",
    "Err",
    "Result",
]
