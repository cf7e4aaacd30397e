"""Unit tests for Settings class and get_settings function."""

from pathlib import Path

import pytest

from pydantic import ValidationError

from batchtrace.config import build_settings, get_settings, reload_settings
from batchtrace.config.settings import Settings


class TestSettings:
    """Tests for Settings model."""

    def test_default_values(self) -> None:
        """Settings has sensible defaults."""
        settings = Settings()
        assert settings.app_name == "batchtrace"

    def test_registry_defaults(self) -> None:
        """Registry configuration has defaults."""
        settings = Settings()
        assert settings.registry.admin_identity is None
        assert settings.registry.emit_verification_events is False

    def test_storage_defaults(self) -> None:
        """Storage configuration has defaults."""
        settings = Settings()
        assert settings.storage.backend == "inmemory"

    def test_observability_defaults(self) -> None:
        """Observability configuration has defaults."""
        settings = Settings()
        assert settings.observability.logging.level == "INFO"
        assert settings.observability.logging.format == "json"
        assert settings.observability.metrics.enabled is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings returns a Settings instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'test'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")

        settings = get_settings()
        assert isinstance(settings, Settings)
        assert settings.app_name == "test"

    def test_settings_cached(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """get_settings returns cached instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'cached'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")

        settings1 = get_settings()
        settings2 = get_settings()
        assert settings1 is settings2

    def test_reload_settings_clears_cache(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """reload_settings returns fresh instance."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'original'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")

        settings1 = get_settings()
        assert settings1.app_name == "original"

        default_toml.write_text("app_name = 'updated'")

        settings2 = reload_settings()
        assert settings2.app_name == "updated"

    def test_environment_file_merged(
        self, mock_toml_files, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Environment TOML overrides nested defaults."""
        mock_toml_files({
            "default.toml": "[registry]\nemit_verification_events = false",
            "test.toml": "[registry]\nadmin_identity = '0xad'\nemit_verification_events = true",
        })
        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "test")

        settings = get_settings()
        assert settings.registry.admin_identity == "0xad"
        assert settings.registry.emit_verification_events is True


class TestEnvironmentVariableOverrides:
    """Tests for environment variable configuration overrides."""

    def test_top_level_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Top-level values can be overridden with env vars."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("app_name = 'file'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")
        monkeypatch.setenv("BATCHTRACE_APP_NAME", "env")

        settings = get_settings()
        assert settings.app_name == "env"

    def test_nested_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Nested values can be overridden with double underscore."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("[registry]\nadmin_identity = '0xfile'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")
        monkeypatch.setenv("BATCHTRACE_REGISTRY__ADMIN_IDENTITY", "0xenv")

        settings = get_settings()
        assert settings.registry.admin_identity == "0xenv"

    def test_deeply_nested_override(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Deeply nested values can be overridden."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        default_toml = config_dir / "default.toml"
        default_toml.write_text("[observability.metrics]\nenabled = true")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")
        monkeypatch.setenv("BATCHTRACE_OBSERVABILITY__METRICS__ENABLED", "false")

        settings = get_settings()
        assert settings.observability.metrics.enabled is False

    def test_blank_admin_from_env_rejected(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A blank admin identity override fails validation."""
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "default.toml").write_text("app_name = 'batchtrace'")

        monkeypatch.setenv("BATCHTRACE_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("BATCHTRACE_ENV", "nonexistent")
        monkeypatch.setenv("BATCHTRACE_REGISTRY__ADMIN_IDENTITY", "  ")

        with pytest.raises(ValidationError):
            get_settings()


class TestBuildSettings:
    """Tests for building settings from an already-merged mapping."""

    def test_uses_given_mapping(self) -> None:
        """Values come from the mapping rather than the filesystem."""
        settings = build_settings(
            {"app_name": "built", "registry": {"admin_identity": "0xad"}}
        )
        assert settings.app_name == "built"
        assert settings.registry.admin_identity == "0xad"

    def test_unknown_keys_ignored(self) -> None:
        """Keys outside the settings model are dropped."""
        settings = build_settings({"app_name": "built", "legacy": {"x": 1}})
        assert settings.app_name == "built"
        assert not hasattr(settings, "legacy")

    def test_blank_admin_rejected(self) -> None:
        """A blank admin identity in the file fails validation."""
        with pytest.raises(ValidationError, match="admin_identity"):
            build_settings({"registry": {"admin_identity": ""}})
