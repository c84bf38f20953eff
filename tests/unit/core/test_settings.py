"""Unit tests for environment-driven settings."""

import pytest

from pharma_reports.core.config import Settings, get_settings


class TestSettings:
    """Tests for Settings loading."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test defaults when no environment overrides are present."""
        for name in ("APP_ENV", "LOG_LEVEL", "LOG_FORMAT", "CORS_ORIGINS"):
            monkeypatch.delenv(f"PHARMA_REPORTS_{name}", raising=False)

        settings = Settings(_env_file=None)
        assert settings.app_env == "development"
        assert settings.log_level == "INFO"
        assert settings.log_format == "text"
        assert settings.app_config_path.endswith("app.yaml")
        assert settings.is_production is False

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test settings read PHARMA_REPORTS_* variables."""
        monkeypatch.setenv("PHARMA_REPORTS_APP_ENV", "production")
        monkeypatch.setenv("PHARMA_REPORTS_LOG_FORMAT", "json")

        settings = Settings(_env_file=None)
        assert settings.is_production is True
        assert settings.log_format == "json"

    def test_log_level_is_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test lower-case level names are accepted."""
        monkeypatch.setenv("PHARMA_REPORTS_LOG_LEVEL", "debug")
        assert Settings(_env_file=None).log_level == "DEBUG"

    def test_invalid_log_level_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test unknown log levels fail validation."""
        monkeypatch.setenv("PHARMA_REPORTS_LOG_LEVEL", "verbose")
        with pytest.raises(ValueError):
            Settings(_env_file=None)

    def test_cors_origins_list(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test comma-separated origins are split and trimmed."""
        monkeypatch.setenv(
            "PHARMA_REPORTS_CORS_ORIGINS", "http://localhost:3000, https://dashboard.example ,"
        )
        settings = Settings(_env_file=None)
        assert settings.cors_origins_list == ["http://localhost:3000", "https://dashboard.example"]

    def test_get_settings_is_cached(self) -> None:
        """Test the accessor returns a single instance."""
        assert get_settings() is get_settings()
