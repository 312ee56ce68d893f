"""
DocVault Configuration — Load and validate docvault.yaml at startup.

Usage:
    from docvault.engine.config import load_platform_config, get_platform_config

Example docvault.yaml:

    platform:
      name: DocVault
      environment: dev
    security:
      seed_admin: true
      admin_name: Admin
      admin_email: admin@example.com
    logging:
      level: INFO
      format: json
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, field_validator

CONFIG_FILENAME = "docvault.yaml"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


# ---------------------------------------------------------------------------
# Pydantic models for docvault.yaml
# ---------------------------------------------------------------------------

class SecurityConfig(BaseModel):
    seed_admin: bool = True
    admin_name: str = "Admin"
    admin_email: str = "admin@example.com"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"
    directory: Optional[str] = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in _LOG_LEVELS:
            raise ValueError(f"logging level must be one of {'/'.join(_LOG_LEVELS)}, got '{v}'")
        return v

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        if v not in ("json", "text"):
            raise ValueError(f"logging format must be json/text, got '{v}'")
        return v


class PlatformConfig(BaseModel):
    """Root model for docvault.yaml."""
    name: str = "DocVault"
    environment: str = "dev"

    security: SecurityConfig = SecurityConfig()
    logging: LoggingConfig = LoggingConfig()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        if v not in ("dev", "staging", "prod"):
            raise ValueError(f"environment must be dev/staging/prod, got '{v}'")
        return v


# ---------------------------------------------------------------------------
# Config Loading Functions
# ---------------------------------------------------------------------------

_platform_config: Optional[PlatformConfig] = None


def _find_project_root() -> Path:
    """Find the project root by looking for docvault.yaml."""
    current = Path.cwd()
    for parent in [current, *current.parents]:
        if (parent / CONFIG_FILENAME).exists():
            return parent
    return current


def load_platform_config(config_path: Optional[str] = None) -> PlatformConfig:
    """
    Load and validate docvault.yaml.

    Args:
        config_path: Explicit path to docvault.yaml. If None, auto-discovers.

    Returns:
        Validated PlatformConfig instance.
    """
    global _platform_config

    if config_path is None:
        config_path = str(_find_project_root() / CONFIG_FILENAME)

    path = Path(config_path)
    if not path.exists():
        _platform_config = PlatformConfig()
        return _platform_config

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    # Flatten the top-level "platform" key if present
    platform_data = raw.get("platform", {})
    config_data = {
        "name": platform_data.get("name", raw.get("name", "DocVault")),
        "environment": platform_data.get("environment", raw.get("environment", "dev")),
        "security": raw.get("security", {}),
        "logging": raw.get("logging", {}),
    }

    _platform_config = PlatformConfig(**config_data)
    return _platform_config


def get_platform_config() -> PlatformConfig:
    """Get the currently loaded platform config, loading if necessary."""
    global _platform_config
    if _platform_config is None:
        _platform_config = load_platform_config()
    return _platform_config
