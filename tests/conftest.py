"""
DocVault Test Suite — Shared fixtures and configuration.

Run:  pytest tests/ -v
"""

from __future__ import annotations

import pytest

from docvault.engine.config import PlatformConfig, SecurityConfig
from docvault.security.admin import AccessControl


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Reset global singletons between tests."""
    import docvault.engine.config as cfg_mod
    from docvault.engine.context import clear_execution_context
    from docvault.engine.logging import shutdown_logging

    cfg_mod._platform_config = None
    clear_execution_context()
    yield
    shutdown_logging()
    clear_execution_context()
    cfg_mod._platform_config = None


@pytest.fixture
def config():
    """Config with admin seeding disabled so stores start empty."""
    return PlatformConfig(security=SecurityConfig(seed_admin=False))


@pytest.fixture
def access(config):
    """Fresh AccessControl with empty stores."""
    return AccessControl(config=config)


@pytest.fixture
def admin_user(access):
    return access.create_user("Root", "root@example.com", "admin").unwrap()


@pytest.fixture
def alice(access):
    return access.create_user("Alice", "alice@x.com").unwrap()


@pytest.fixture
def bob(access):
    return access.create_user("Bob", "bob@x.com").unwrap()


@pytest.fixture
def eng(access):
    return access.create_group("Eng", "Engineering").unwrap()
