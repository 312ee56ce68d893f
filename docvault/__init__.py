"""
DocVault — Document access control engine.
Version: 1.0

Users, groups and per-document grants resolved against the level hierarchy
view < edit < download < admin, with an administrator override.

Usage:
    from docvault import AccessControl

    access = AccessControl.from_config()
    alice = access.create_user("Alice", "alice@x.com").unwrap()
"""

__version__ = "1.0.0"
__all__ = ["engine", "security", "AccessControl"]

from docvault.security.admin import AccessControl  # noqa: E402,F401
