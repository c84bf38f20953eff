"""Unit test fixtures: report texts and configuration objects.

The reports mirror the shapes the upstream model actually produces:
clean separator-anchored tables, tables missing their separator, and
short tables floating in prose.
"""

from pathlib import Path

import pytest

from pharma_reports.core.app_config import ExtractionConfig, SourceCatalogConfig

# ---------------------------------------------------------------------------
# Report Texts
# ---------------------------------------------------------------------------


@pytest.fixture
def standard_report() -> str:
    """One separator-anchored table under a bold numbered title."""
    return "\n".join(
        [
            "**1. Overview**",
            "",
            "| Name | Status |",
            "|------|--------|",
            "| Aspirin | Approved |",
            "| Ibuprofen | Pending |",
        ]
    )


@pytest.fixture
def two_table_report() -> str:
    """Two separator-anchored tables divided by two blank lines."""
    return "\n".join(
        [
            "**First**",
            "| A | B |",
            "|---|---|",
            "| 1 | 2 |",
            "",
            "",
            "**Second**",
            "| C | D |",
            "|---|---|",
            "| 3 | 4 |",
        ]
    )


@pytest.fixture
def separatorless_report() -> str:
    """A table with no separator line under a plain prose title."""
    return "\n".join(
        [
            "Drug Comparison",
            "| Drug | Phase | Sponsor |",
            "| A | II | X |",
            "| B | III | Y |",
        ]
    )


@pytest.fixture
def cited_report() -> str:
    """A table whose cells carry inline citations."""
    return "\n".join(
        [
            "**Regulatory Status**",
            "| Drug | Source |",
            "|---|---|",
            "| Aspirin | [FDA label](https://www.fda.gov/drugs#approval-history) |",
            "| Ibuprofen | [Study](https://pubmed.ncbi.nlm.nih.gov/12345678/#abstract) |",
        ]
    )


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def extraction_config() -> ExtractionConfig:
    """Built-in extraction settings, independent of config/app.yaml."""
    return ExtractionConfig()


@pytest.fixture
def source_catalog() -> SourceCatalogConfig:
    """Built-in domain catalog, independent of config/app.yaml."""
    return SourceCatalogConfig()


@pytest.fixture
def invalid_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the application at a config file that fails validation."""
    path = tmp_path / "app.yaml"
    path.write_text("extraction:\n  title_lookback: -5\n")
    monkeypatch.setenv("PHARMA_REPORTS_APP_CONFIG_PATH", str(path))
    return path
