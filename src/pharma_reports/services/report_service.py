"""Report structuring service.

Backend responses arrive in several shapes depending on the report type
(drug, company, warehouse). ``extract_report_content`` normalizes them into
a single text blob; ``structure_report`` turns that blob into tables, with
a single raw-content table when nothing tabular is recovered so the reader
always has something to look at.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pharma_reports.core.app_config import ExtractionConfig, get_app_config_or_default
from pharma_reports.core.exceptions import ReportContentError
from pharma_reports.parsing.markdown import MarkdownLink, extract_markdown_links
from pharma_reports.parsing.tables import Table, TableStrategy, extract_tables_with_strategy

logger = logging.getLogger(__name__)

# Top-level fields checked for report text, in priority order
CONTENT_FIELDS = (
    "product_information",
    "report_content",
    "company_information",
    "content",
    "analysis_content",
    "result",
    "response",
    "data",
)

# Known nested locations, checked after the top-level fields
NESTED_CONTENT_PATHS = (
    ("report", "report_content"),
    ("search_data", "search_data", "product_information"),
)


@dataclass(frozen=True)
class StructuredReport:
    """Tables recovered from a report together with the source text."""

    tables: list[Table]
    report: str
    strategy: TableStrategy = TableStrategy.NONE
    used_fallback: bool = False

    @property
    def has_tables(self) -> bool:
        return bool(self.tables)

    @property
    def table_count(self) -> int:
        return len(self.tables)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "report": self.report,
            "has_tables": self.has_tables,
            "table_count": self.table_count,
            "strategy": self.strategy.value,
            "used_fallback": self.used_fallback,
        }


@dataclass(frozen=True)
class ContentAnalysis:
    """Clickable elements and tables found in report text."""

    has_content: bool
    links: list[MarkdownLink] = field(default_factory=list)
    tables: list[Table] = field(default_factory=list)

    @property
    def has_links(self) -> bool:
        return bool(self.links)

    @property
    def link_count(self) -> int:
        return len(self.links)

    @property
    def table_count(self) -> int:
        return len(self.tables)


def _non_blank_string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _get_path(data: Mapping[str, Any], path: tuple[str, ...]) -> Any:
    current: Any = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def extract_report_content(response: Any, *, strict: bool = False) -> str:
    """Find the report text inside a backend response payload.

    Lookup order:
    1. A non-blank string in one of ``CONTENT_FIELDS``.
    2. ``report.report_content`` or ``search_data.search_data.product_information``.
    3. A non-blank string one level down, under any ``CONTENT_FIELDS`` object.

    A bare string response is returned as-is.

    Args:
        response: Decoded JSON payload.
        strict: Raise instead of returning ``""`` when nothing is found.

    Raises:
        ReportContentError: If ``strict`` and no report text was found.

    Example:
        {"data": {"report_content": "| A | B |"}} → "| A | B |"
    """
    if isinstance(response, str):
        content = _non_blank_string(response)
        if content is not None:
            return content
    elif isinstance(response, Mapping):
        for name in CONTENT_FIELDS:
            content = _non_blank_string(response.get(name))
            if content is not None:
                logger.debug("Report content found in field %s", name)
                return content

        for path in NESTED_CONTENT_PATHS:
            content = _non_blank_string(_get_path(response, path))
            if content is not None:
                logger.debug("Report content found at %s", ".".join(path))
                return content

        for name in CONTENT_FIELDS:
            nested = response.get(name)
            if not isinstance(nested, Mapping):
                continue
            for nested_name in CONTENT_FIELDS:
                content = _non_blank_string(nested.get(nested_name))
                if content is not None:
                    logger.debug("Report content found in field %s.%s", name, nested_name)
                    return content

    logger.warning("No report content found in response of type %s", type(response).__name__)
    if strict:
        raise ReportContentError()
    return ""


def structure_report(content: Any, config: ExtractionConfig | None = None) -> StructuredReport:
    """Extract tables from report text, falling back to a raw-content table.

    Blank content yields an empty report without a fallback table.
    """
    cfg = config or get_app_config_or_default().extraction
    text = content if isinstance(content, str) else ""

    result = extract_tables_with_strategy(text, cfg)
    if result.has_tables or not text.strip():
        return StructuredReport(tables=result.tables, report=text, strategy=result.strategy)

    logger.info("No tables parsed, using raw content table (%d chars)", len(text))
    fallback = Table(title=cfg.raw_content_title, headers=["Content"], rows=[[text]])
    return StructuredReport(
        tables=[fallback],
        report=text,
        strategy=TableStrategy.NONE,
        used_fallback=True,
    )


def analyze_content(content: Any, config: ExtractionConfig | None = None) -> ContentAnalysis:
    """Summarize the links and tables present in report text."""
    if not isinstance(content, str) or not content:
        return ContentAnalysis(has_content=False)

    tables = extract_tables_with_strategy(content, config).tables
    return ContentAnalysis(
        has_content=True,
        links=extract_markdown_links(content),
        tables=tables,
    )
