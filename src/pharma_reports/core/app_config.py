"""Central application configuration loaded from YAML.

Two sections drive the core:

- ``extraction``: tuning knobs of the table extraction engine (title
  search windows, table termination, summary keywords, fallback titles).
- ``sources``: the static domain catalog used by the citation resolver
  (authoritative domains with display names, accessibility lists,
  highlighting support and site-search templates).

The configuration is immutable once loaded, so every parse call sees the
same tables for the lifetime of the process.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator

from pharma_reports.core.config import get_settings
from pharma_reports.core.yaml_loader import load_yaml_config

logger = logging.getLogger(__name__)

# Default config path: <project root>/config/app.yaml
_this_file = Path(__file__).resolve()
_project_root = _this_file.parent.parent.parent.parent
DEFAULT_CONFIG_PATH = _project_root / "config" / "app.yaml"


DEFAULT_AUTHORITATIVE_DOMAINS: dict[str, str] = {
    "fda.gov": "FDA",
    "ema.europa.eu": "EMA",
    "clinicaltrials.gov": "ClinicalTrials.gov",
    "pubmed.ncbi.nlm.nih.gov": "PubMed",
    "ncbi.nlm.nih.gov": "NCBI",
    "researchandmarkets.com": "Research and Markets",
    "patents.google.com": "Google Patents",
    "uspto.gov": "USPTO",
    "epo.org": "EPO",
    "wipo.int": "WIPO",
    "dailymed.nlm.nih.gov": "DailyMed",
    "rxlist.com": "RxList",
    "drugs.com": "Drugs.com",
    "medicines.org.uk": "Medicines.org.uk",
    "pfizer.com": "Pfizer",
    "gsk.com": "GSK",
    "novartis.com": "Novartis",
    "johnsonandjohnson.com": "Johnson & Johnson",
    "merck.com": "Merck",
    "roche.com": "Roche",
    "sanofi.com": "Sanofi",
    "astrazeneca.com": "AstraZeneca",
    "bms.com": "Bristol-Myers Squibb",
    "amgen.com": "Amgen",
    "biogen.com": "Biogen",
    "regeneron.com": "Regeneron",
    "gilead.com": "Gilead",
}

DEFAULT_ACCESSIBLE_DOMAINS: list[str] = [
    "fda.gov",
    "clinicaltrials.gov",
    "pubmed.ncbi.nlm.nih.gov",
    "ncbi.nlm.nih.gov",
    "patents.google.com",
    "uspto.gov",
    "epo.org",
    "wipo.int",
    "dailymed.nlm.nih.gov",
    "rxlist.com",
    "drugs.com",
    "medicines.org.uk",
]

DEFAULT_RESTRICTED_DOMAINS: list[str] = [
    "researchandmarkets.com",
    "ema.europa.eu",
]

DEFAULT_REDIRECT_DOMAINS: list[str] = [
    "company.com",
    "pharma.com",
    "biotech.com",
]

DEFAULT_HIGHLIGHTING_DOMAINS: list[str] = [
    "fda.gov",
    "clinicaltrials.gov",
    "pubmed.ncbi.nlm.nih.gov",
    "ncbi.nlm.nih.gov",
    "ema.europa.eu",
    "researchandmarkets.com",
    "patents.google.com",
    "uspto.gov",
    "epo.org",
    "wipo.int",
    "dailymed.nlm.nih.gov",
    "rxlist.com",
    "drugs.com",
    "medicines.org.uk",
]

# Domains whose pages are known to honour the #section + highlight marker
DEFAULT_AUTO_HIGHLIGHT_DOMAINS: list[str] = [
    "fda.gov",
    "clinicaltrials.gov",
    "pubmed.ncbi.nlm.nih.gov",
    "patents.google.com",
]


class SiteSearchConfig(BaseModel):
    """Same-site search used as an alternative when a deep link fails."""

    domain: str
    description: str
    url_template: str = Field(description="Search URL with a '{query}' placeholder")

    model_config = {"frozen": True}

    @field_validator("url_template")
    @classmethod
    def require_query_placeholder(cls, v: str) -> str:
        """Templates must contain the query placeholder."""
        if "{query}" not in v:
            raise ValueError("url_template must contain '{query}'")
        return v


DEFAULT_SITE_SEARCHES: list[SiteSearchConfig] = [
    SiteSearchConfig(
        domain="fda.gov",
        description="Search FDA.gov for the specific information",
        url_template="https://www.fda.gov/search?s={query}",
    ),
    SiteSearchConfig(
        domain="clinicaltrials.gov",
        description="Search ClinicalTrials.gov for the trial",
        url_template="https://clinicaltrials.gov/ct2/results?term={query}",
    ),
    SiteSearchConfig(
        domain="pubmed.ncbi.nlm.nih.gov",
        description="Search PubMed for the article",
        url_template="https://pubmed.ncbi.nlm.nih.gov/?term={query}",
    ),
]


class ExtractionConfig(BaseModel):
    """Configuration for the table extraction engine."""

    title_lookback: int = Field(default=10, ge=0, le=100)
    title_lookahead: int = Field(default=5, ge=0, le=100)
    blank_lines_to_close: int = Field(default=2, ge=1, le=10)
    min_header_cells: int = Field(default=2, ge=1, le=10)
    summary_keywords: list[str] = Field(
        default_factory=lambda: ["Table Summary", "This table"]
    )
    default_title: str = "Analysis Results"
    raw_content_title: str = "Raw Analysis Content"
    # Keep inline links in cells so citations can be resolved per cell
    keep_links: bool = False

    model_config = {"frozen": True}


class SourceCatalogConfig(BaseModel):
    """Static domain tables used by the citation resolver."""

    authoritative_domains: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_AUTHORITATIVE_DOMAINS)
    )
    accessible_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ACCESSIBLE_DOMAINS)
    )
    restricted_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_RESTRICTED_DOMAINS)
    )
    redirect_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_REDIRECT_DOMAINS)
    )
    highlighting_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_HIGHLIGHTING_DOMAINS)
    )
    auto_highlight_domains: list[str] = Field(
        default_factory=lambda: list(DEFAULT_AUTO_HIGHLIGHT_DOMAINS)
    )
    site_searches: list[SiteSearchConfig] = Field(
        default_factory=lambda: list(DEFAULT_SITE_SEARCHES)
    )
    web_search_url: str = "https://www.google.com/search?q={query}"
    web_search_description: str = "Search Google for the information"
    highlight_param: str = "highlight"
    cache_bust_param: str = "_t"

    model_config = {"frozen": True}

    @field_validator(
        "accessible_domains",
        "restricted_domains",
        "redirect_domains",
        "highlighting_domains",
        "auto_highlight_domains",
    )
    @classmethod
    def lowercase_domains(cls, v: list[str]) -> list[str]:
        """Domains are matched case-insensitively against hostnames."""
        return [d.strip().lower() for d in v if d and d.strip()]

    @field_validator("authoritative_domains")
    @classmethod
    def lowercase_authoritative(cls, v: dict[str, str]) -> dict[str, str]:
        """Lower-case authoritative domain keys."""
        return {k.strip().lower(): name for k, name in v.items() if k and k.strip()}

    @model_validator(mode="after")
    def validate_web_search(self) -> "SourceCatalogConfig":
        """The generic web search must accept a query."""
        if "{query}" not in self.web_search_url:
            raise ValueError("web_search_url must contain '{query}'")
        return self


class AppConfig(BaseModel):
    """Central application configuration loaded from YAML."""

    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    sources: SourceCatalogConfig = Field(default_factory=SourceCatalogConfig)

    model_config = {"frozen": True}


def get_default_config() -> AppConfig:
    """Create AppConfig with built-in defaults (no YAML file needed)."""
    return AppConfig()


@lru_cache(maxsize=1)
def load_app_config(config_path: Path | None = None) -> AppConfig:
    """Load application configuration from YAML file.

    Args:
        config_path: Path to YAML config file. If None, uses DEFAULT_CONFIG_PATH.

    Returns:
        Validated AppConfig instance

    Note:
        Falls back to the built-in defaults if no config file is found.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.info("Config file not found at %s, using default configuration", config_path)
        return get_default_config()

    try:
        raw_config = load_yaml_config(config_path)
        config = AppConfig.model_validate(raw_config)
    except Exception as e:
        logger.error("Failed to load configuration from %s: %s", config_path, e)
        raise

    logger.info(
        "Loaded configuration from %s: %d authoritative domains, %d site searches",
        config_path,
        len(config.sources.authoritative_domains),
        len(config.sources.site_searches),
    )
    return config


def get_app_config() -> AppConfig:
    """Get the cached application configuration.

    This is the primary entry point for accessing configuration. The file
    location comes from the PHARMA_REPORTS_APP_CONFIG_PATH setting.
    """
    return load_app_config(Path(get_settings().app_config_path))


@lru_cache(maxsize=1)
def get_app_config_or_default() -> AppConfig:
    """Get the application configuration, or built-in defaults if it is invalid.

    Used by the parsing core, which must not raise: a broken config file is
    logged once and the defaults apply until the cache is cleared.
    """
    try:
        return get_app_config()
    except Exception as e:
        logger.error("Invalid application configuration, using built-in defaults: %s", e)
        return get_default_config()


def clear_config_cache() -> None:
    """Clear the configuration cache (useful for testing and hot reload)."""
    load_app_config.cache_clear()
    get_app_config_or_default.cache_clear()
