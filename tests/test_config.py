"""Unit tests for docvault.engine.config — PlatformConfig and loading."""

import pytest

from docvault.engine.config import (
    LoggingConfig,
    PlatformConfig,
    SecurityConfig,
    get_platform_config,
    load_platform_config,
)


class TestPlatformConfig:
    """Test PlatformConfig Pydantic model."""

    def test_defaults(self):
        cfg = PlatformConfig()
        assert cfg.name == "DocVault"
        assert cfg.environment == "dev"
        assert cfg.security.seed_admin is True
        assert cfg.security.admin_email == "admin@example.com"
        assert cfg.logging.level == "INFO"
        assert cfg.logging.format == "json"
        assert cfg.logging.directory is None

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="dev/staging/prod"):
            PlatformConfig(environment="test")

    def test_log_level_normalized(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="logging level"):
            LoggingConfig(level="LOUD")

    def test_invalid_log_format(self):
        with pytest.raises(ValueError, match="json/text"):
            LoggingConfig(format="xml")

    def test_custom_security(self):
        cfg = PlatformConfig(security=SecurityConfig(seed_admin=False, admin_name="Ops"))
        assert cfg.security.seed_admin is False
        assert cfg.security.admin_name == "Ops"


class TestLoadPlatformConfig:

    def test_missing_file_gives_defaults(self, tmp_path):
        cfg = load_platform_config(str(tmp_path / "nope.yaml"))
        assert cfg == PlatformConfig()

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "docvault.yaml"
        path.write_text(
            "platform:\n"
            "  name: TestVault\n"
            "  environment: staging\n"
            "security:\n"
            "  seed_admin: false\n"
            "  admin_email: ops@example.com\n"
            "logging:\n"
            "  level: debug\n"
            "  format: text\n",
            encoding="utf-8",
        )
        cfg = load_platform_config(str(path))
        assert cfg.name == "TestVault"
        assert cfg.environment == "staging"
        assert cfg.security.seed_admin is False
        assert cfg.security.admin_email == "ops@example.com"
        assert cfg.logging.level == "DEBUG"
        assert cfg.logging.format == "text"

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "docvault.yaml"
        path.write_text("", encoding="utf-8")
        assert load_platform_config(str(path)).name == "DocVault"

    def test_invalid_yaml_values_rejected(self, tmp_path):
        path = tmp_path / "docvault.yaml"
        path.write_text("environment: qa\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_platform_config(str(path))

    def test_auto_discovery(self, tmp_path, monkeypatch):
        (tmp_path / "docvault.yaml").write_text("platform:\n  name: Found\n", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert load_platform_config().name == "Found"

    def test_get_platform_config_caches(self, tmp_path):
        path = tmp_path / "docvault.yaml"
        path.write_text("platform:\n  environment: prod\n", encoding="utf-8")
        load_platform_config(str(path))
        assert get_platform_config() is get_platform_config()
        assert get_platform_config().environment == "prod"
