"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from expense_tracker.config import (
    AppSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Run each test without the developer's env vars, .env or cached settings."""
    for name in (
        "EXPENSES_STORAGE_BACKEND",
        "EXPENSES_STORAGE_DATA_DIR",
        "EXPENSES_STORAGE_KEY",
        "EXPENSES_STORAGE_FSYNC",
        "EXPENSES_APP_ENVIRONMENT",
        "EXPENSES_DEBUG_MODE",
        "EXPENSES_LOG_LEVEL",
        "EXPENSES_AUDIT_HISTORY_SIZE",
        "EXPENSES_CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStorageSettings:
    """Tests for StorageSettings."""

    def test_defaults(self):
        """Test default storage configuration."""
        settings = StorageSettings()
        assert settings.backend == "file"
        assert settings.data_dir == Path(".expenses")
        assert settings.key == "expenses"
        assert settings.fsync is True

    def test_env_overrides(self, monkeypatch, tmp_path):
        """Test EXPENSES_STORAGE_* variables."""
        monkeypatch.setenv("EXPENSES_STORAGE_BACKEND", "memory")
        monkeypatch.setenv("EXPENSES_STORAGE_DATA_DIR", str(tmp_path / "x"))
        monkeypatch.setenv("EXPENSES_STORAGE_KEY", "household")
        monkeypatch.setenv("EXPENSES_STORAGE_FSYNC", "false")

        settings = StorageSettings()

        assert settings.backend == "memory"
        assert settings.data_dir == tmp_path / "x"
        assert settings.key == "household"
        assert settings.fsync is False

    def test_home_is_expanded(self, monkeypatch, tmp_path):
        """Test that ~ in data_dir points at the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("EXPENSES_STORAGE_DATA_DIR", "~/expenses")
        assert StorageSettings().data_dir == tmp_path / "expenses"

    def test_unknown_backend_rejected(self, monkeypatch):
        """Test backend pattern."""
        monkeypatch.setenv("EXPENSES_STORAGE_BACKEND", "sqlite")
        with pytest.raises(ValidationError):
            StorageSettings()

    def test_dotenv_file(self, tmp_path):
        """Test that a .env file in the working directory is read."""
        (tmp_path / ".env").write_text("EXPENSES_STORAGE_KEY=from_dotenv\n", encoding="utf-8")
        assert StorageSettings().key == "from_dotenv"


class TestAppSettings:
    """Tests for AppSettings."""

    def test_defaults(self):
        """Test default app configuration."""
        settings = AppSettings()
        assert settings.app_environment == "development"
        assert settings.debug_mode is False
        assert settings.log_level == "INFO"
        assert settings.currency_symbol == "$"
        assert settings.audit_history_size == 200

    def test_log_level_is_normalized(self, monkeypatch):
        """Test case-insensitive log levels."""
        monkeypatch.setenv("EXPENSES_LOG_LEVEL", "debug")
        assert AppSettings().log_level == "DEBUG"

    def test_unknown_log_level_rejected(self, monkeypatch):
        """Test log level validation."""
        monkeypatch.setenv("EXPENSES_LOG_LEVEL", "chatty")
        with pytest.raises(ValidationError):
            AppSettings()

    def test_history_size_bounds(self, monkeypatch):
        """Test that negative history sizes are rejected."""
        monkeypatch.setenv("EXPENSES_AUDIT_HISTORY_SIZE", "-1")
        with pytest.raises(ValidationError):
            AppSettings()


class TestRootSettings:
    """Tests for Settings and helpers."""

    def test_sections(self):
        """Test lazy sub-settings."""
        settings = Settings()
        assert isinstance(settings.storage, StorageSettings)
        assert isinstance(settings.app, AppSettings)

    def test_get_settings_is_cached(self):
        """Test lru_cache behaviour."""
        assert get_settings() is get_settings()

    def test_validate_all_settings_ok(self):
        """Test startup check with defaults."""
        assert validate_all_settings() == {"storage": True, "app": True}

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        """Test that a broken section is reported instead of raised."""
        monkeypatch.setenv("EXPENSES_LOG_LEVEL", "chatty")
        results = validate_all_settings()
        assert results["storage"] is True
        assert results["app"] is False
        assert "app_error" in results


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
