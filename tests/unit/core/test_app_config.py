"""Unit tests for central application configuration."""

from pathlib import Path
from unittest.mock import patch

import pytest

from pharma_reports.core.app_config import (
    AppConfig,
    ExtractionConfig,
    SiteSearchConfig,
    SourceCatalogConfig,
    clear_config_cache,
    get_app_config,
    get_app_config_or_default,
    get_default_config,
    load_app_config,
)


class TestExtractionConfig:
    """Tests for ExtractionConfig model."""

    def test_defaults(self) -> None:
        """Test default extraction settings."""
        config = ExtractionConfig()
        assert config.title_lookback == 10
        assert config.title_lookahead == 5
        assert config.blank_lines_to_close == 2
        assert config.summary_keywords == ["Table Summary", "This table"]
        assert config.default_title == "Analysis Results"
        assert config.raw_content_title == "Raw Analysis Content"
        assert config.keep_links is False

    def test_is_frozen(self) -> None:
        """Test extraction settings cannot be mutated."""
        config = ExtractionConfig()
        with pytest.raises(ValueError):
            config.title_lookback = 3

    def test_rejects_zero_blank_lines_to_close(self) -> None:
        """Test a table must be closable by blank lines."""
        with pytest.raises(ValueError):
            ExtractionConfig(blank_lines_to_close=0)


class TestSourceCatalogConfig:
    """Tests for SourceCatalogConfig model."""

    def test_default_catalog(self) -> None:
        """Test the built-in catalog holds the regulatory domains."""
        catalog = SourceCatalogConfig()
        assert catalog.authoritative_domains["fda.gov"] == "FDA"
        assert catalog.authoritative_domains["pubmed.ncbi.nlm.nih.gov"] == "PubMed"
        assert "researchandmarkets.com" in catalog.restricted_domains
        assert [s.domain for s in catalog.site_searches] == [
            "fda.gov",
            "clinicaltrials.gov",
            "pubmed.ncbi.nlm.nih.gov",
        ]

    def test_domains_are_lowercased(self) -> None:
        """Test domains are normalized for hostname matching."""
        catalog = SourceCatalogConfig(
            authoritative_domains={" EMA.Europa.EU ": "EMA"},
            accessible_domains=["WHO.int", ""],
        )
        assert catalog.authoritative_domains == {"ema.europa.eu": "EMA"}
        assert catalog.accessible_domains == ["who.int"]

    def test_site_search_requires_placeholder(self) -> None:
        """Test site search templates must accept a query."""
        with pytest.raises(ValueError, match="query"):
            SiteSearchConfig(domain="fda.gov", description="x", url_template="https://fda.gov/search")

    def test_web_search_requires_placeholder(self) -> None:
        """Test the generic web search must accept a query."""
        with pytest.raises(ValueError, match="web_search_url"):
            SourceCatalogConfig(web_search_url="https://search.example/")


class TestGetDefaultConfig:
    """Tests for get_default_config function."""

    def test_returns_valid_config(self) -> None:
        """Test default config is valid."""
        config = get_default_config()
        assert isinstance(config, AppConfig)
        assert config.extraction == ExtractionConfig()
        assert config.sources == SourceCatalogConfig()


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_uses_default_when_file_missing(self) -> None:
        """Test falls back to default config when file missing."""
        with patch("pharma_reports.core.app_config.DEFAULT_CONFIG_PATH", Path("/nonexistent/app.yaml")):
            clear_config_cache()
            config = load_app_config()
        assert config == get_default_config()

    def test_loads_from_yaml_file(self, tmp_path: Path) -> None:
        """Test YAML values override the defaults they name, and only those."""
        path = tmp_path / "app.yaml"
        path.write_text(
            """
extraction:
  title_lookback: 4
  summary_keywords: ["Key Findings"]
sources:
  authoritative_domains:
    who.int: "WHO"
  site_searches:
    - domain: who.int
      description: "Search WHO"
      url_template: "https://www.who.int/search?q={query}"
"""
        )

        config = load_app_config(path)
        assert config.extraction.title_lookback == 4
        assert config.extraction.summary_keywords == ["Key Findings"]
        assert config.extraction.title_lookahead == 5
        assert config.sources.authoritative_domains == {"who.int": "WHO"}
        assert config.sources.site_searches[0].url_template == "https://www.who.int/search?q={query}"
        assert "researchandmarkets.com" in config.sources.restricted_domains

    def test_invalid_yaml_values_raise(self, tmp_path: Path) -> None:
        """Test validation errors surface instead of silently using defaults."""
        path = tmp_path / "app.yaml"
        path.write_text("extraction:\n  title_lookback: -1\n")
        with pytest.raises(ValueError):
            load_app_config(path)

    def test_repository_config_loads(self) -> None:
        """Test the shipped config/app.yaml is valid."""
        config = load_app_config()
        assert config.extraction.default_title == "Analysis Results"
        assert config.sources.authoritative_domains["fda.gov"] == "FDA"


class TestGetAppConfig:
    """Tests for the settings-driven config accessor."""

    def test_reads_path_from_settings(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the config file location comes from the environment."""
        path = tmp_path / "custom.yaml"
        path.write_text("extraction:\n  default_title: Findings\n")
        monkeypatch.setenv("PHARMA_REPORTS_APP_CONFIG_PATH", str(path))

        assert get_app_config().extraction.default_title == "Findings"

    def test_caches_result(self) -> None:
        """Test config is cached."""
        assert get_app_config() is get_app_config()

    def test_cache_can_be_cleared(self) -> None:
        """Test cache clear allows reload."""
        config1 = get_app_config()
        clear_config_cache()
        config2 = get_app_config()
        assert config1 is not config2
        assert config1 == config2


class TestGetAppConfigOrDefault:
    """Tests for the accessor used by the parsing core."""

    def test_returns_loaded_config(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test a valid file is used as-is."""
        path = tmp_path / "custom.yaml"
        path.write_text("extraction:\n  default_title: Findings\n")
        monkeypatch.setenv("PHARMA_REPORTS_APP_CONFIG_PATH", str(path))

        assert get_app_config_or_default().extraction.default_title == "Findings"

    def test_invalid_file_falls_back_to_defaults(self, invalid_config_file: Path) -> None:
        """Test an invalid file yields the built-in defaults instead of raising."""
        with pytest.raises(ValueError):
            get_app_config()

        assert get_app_config_or_default() == get_default_config()

    def test_cleared_with_config_cache(self, invalid_config_file: Path) -> None:
        """Test clearing the cache lets a fixed file take effect."""
        assert get_app_config_or_default() == get_default_config()

        invalid_config_file.write_text("extraction:\n  title_lookback: 3\n")
        clear_config_cache()

        assert get_app_config_or_default().extraction.title_lookback == 3
