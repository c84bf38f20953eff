"""Unit tests for YAML configuration loader."""

from pathlib import Path

import pytest

from pharma_reports.core.yaml_loader import interpolate_env_vars, load_yaml_config


class TestInterpolateEnvVars:
    """Tests for environment variable interpolation."""

    def test_no_interpolation_needed(self) -> None:
        """Test values without env vars are unchanged."""
        assert interpolate_env_vars("plain string") == "plain string"
        assert interpolate_env_vars(42) == 42
        assert interpolate_env_vars(False) is False
        assert interpolate_env_vars(None) is None

    def test_required_env_var_set(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test required env var interpolation when set."""
        monkeypatch.setenv("REPORT_TITLE", "Safety")
        assert interpolate_env_vars("${REPORT_TITLE} Profile") == "Safety Profile"

    def test_required_env_var_unset_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test required env var raises when not set."""
        monkeypatch.delenv("UNSET_REPORT_VAR", raising=False)
        with pytest.raises(ValueError, match="Environment variable 'UNSET_REPORT_VAR' is not set"):
            interpolate_env_vars("${UNSET_REPORT_VAR}")

    def test_optional_env_var_with_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test optional env var falls back to its default."""
        monkeypatch.delenv("DEFAULT_TITLE_VAR", raising=False)
        assert interpolate_env_vars("${DEFAULT_TITLE_VAR:-Analysis Results}") == "Analysis Results"

    def test_optional_env_var_set_overrides_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test optional env var uses set value over default."""
        monkeypatch.setenv("DEFAULT_TITLE_VAR", "Findings")
        assert interpolate_env_vars("${DEFAULT_TITLE_VAR:-Analysis Results}") == "Findings"

    def test_nested_structure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test interpolation reaches dict values and list items."""
        monkeypatch.setenv("RESTRICTED_DOMAIN", "paywalled.example")
        result = interpolate_env_vars(
            {"sources": {"restricted_domains": ["${RESTRICTED_DOMAIN}", "ema.europa.eu"]}}
        )
        assert result == {"sources": {"restricted_domains": ["paywalled.example", "ema.europa.eu"]}}


class TestLoadYamlConfig:
    """Tests for YAML config loading."""

    def test_load_config_with_env_vars(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test loading config with environment variable interpolation."""
        monkeypatch.setenv("LOOKBACK", "7")
        path = tmp_path / "app.yaml"
        path.write_text("extraction:\n  title_lookback: ${LOOKBACK}\n  default_title: ${MISSING:-Results}\n")

        config = load_yaml_config(path)
        assert config == {"extraction": {"title_lookback": "7", "default_title": "Results"}}

    def test_empty_file_returns_empty_dict(self, tmp_path: Path) -> None:
        """Test empty YAML file returns empty dict."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_yaml_config(path) == {}

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        """Test a top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="Expected mapping"):
            load_yaml_config(path)

    def test_file_not_found_raises(self) -> None:
        """Test missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_yaml_config(Path("/nonexistent/path/app.yaml"))

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Test invalid YAML raises error."""
        import yaml

        path = tmp_path / "broken.yaml"
        path.write_text("key: [unclosed bracket\n")
        with pytest.raises(yaml.YAMLError):
            load_yaml_config(path)
