"""Table-level source collection for the per-table source summary."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from pharma_reports.core.app_config import SourceCatalogConfig, get_app_config_or_default
from pharma_reports.sources.cells import parse_cell
from pharma_reports.sources.domains import classify_domain, get_hostname

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TableSource:
    """A distinct (URL, section) pair cited somewhere in a table."""

    url: str
    domain: str
    section_id: str | None
    display_name: str
    is_authoritative: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "domain": self.domain,
            "section_id": self.section_id,
            "display_name": self.display_name,
            "is_authoritative": self.is_authoritative,
        }


@dataclass(frozen=True)
class SourceSummary:
    """Sources of a table split into authoritative and other sources."""

    sources: list[TableSource] = field(default_factory=list)

    @property
    def authoritative(self) -> list[TableSource]:
        return [s for s in self.sources if s.is_authoritative]

    @property
    def other(self) -> list[TableSource]:
        return [s for s in self.sources if not s.is_authoritative]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": len(self.sources),
            "authoritative": [s.to_dict() for s in self.authoritative],
            "other": [s.to_dict() for s in self.other],
        }


def extract_sources_from_table(
    rows: Iterable[Sequence[Any]],
    catalog: SourceCatalogConfig | None = None,
) -> list[TableSource]:
    """Collect the distinct sources cited in a table's cells, in encounter order.

    Links whose URL does not parse are skipped.
    """
    cfg = catalog or get_app_config_or_default().sources
    seen: set[tuple[str, str | None]] = set()
    sources: list[TableSource] = []

    for row in rows:
        for cell in row:
            for citation in parse_cell(cell, cfg).citations:
                key = (citation.source_url, citation.section_id)
                if key in seen:
                    continue
                hostname = get_hostname(citation.source_url)
                if hostname is None:
                    logger.warning("Invalid URL in cell: %s", citation.source_url)
                    continue
                seen.add(key)
                classification = classify_domain(citation.source_url, cfg)
                sources.append(
                    TableSource(
                        url=citation.source_url,
                        domain=hostname,
                        section_id=citation.section_id,
                        display_name=classification.display_name,
                        is_authoritative=classification.is_authoritative,
                    )
                )

    return sources


def summarize_sources(
    rows: Iterable[Sequence[Any]],
    catalog: SourceCatalogConfig | None = None,
) -> SourceSummary:
    """Build the authoritative/other source summary for a table."""
    return SourceSummary(sources=extract_sources_from_table(rows, catalog))
