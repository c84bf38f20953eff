"""Citation extraction from individual table cells.

A cell may carry zero, one or several inline links, for example
``[Label](https://www.fda.gov/drugs#approval-history)`` or
``[A](https://x.com/1#s1) + [B](https://y.com/2#s2)``. Each link becomes a
Citation; the first one is primary.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pharma_reports.core.app_config import SourceCatalogConfig
from pharma_reports.parsing.markdown import clean_markdown, extract_markdown_links, split_url_fragment
from pharma_reports.sources.domains import classify_domain

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Citation:
    """One source reference recovered from a cell."""

    display_text: str
    source_url: str
    section_id: str | None
    full_url: str
    is_authoritative: bool
    is_primary: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "display_text": self.display_text,
            "source_url": self.source_url,
            "section_id": self.section_id,
            "full_url": self.full_url,
            "is_authoritative": self.is_authoritative,
            "is_primary": self.is_primary,
        }


@dataclass(frozen=True)
class ParsedCell:
    """Raw cell text, its display text and the citations it carries.

    Frozen like the other core records; not hashable because ``citations``
    is a list.
    """

    text: str
    display_text: str
    citations: list[Citation] = field(default_factory=list)

    @property
    def has_source(self) -> bool:
        return bool(self.citations)

    @property
    def primary(self) -> Citation | None:
        return self.citations[0] if self.citations else None

    @property
    def is_clickable(self) -> bool:
        return self.primary is not None and bool(self.primary.source_url)

    @property
    def source_url(self) -> str | None:
        return self.primary.source_url if self.primary else None

    @property
    def section_id(self) -> str | None:
        return self.primary.section_id if self.primary else None

    @property
    def multiple_sources(self) -> list[Citation]:
        """All citations when the cell has more than one, else empty."""
        return list(self.citations) if len(self.citations) > 1 else []

    def to_dict(self) -> dict[str, Any]:
        return {
            "text": self.text,
            "display_text": self.display_text,
            "has_source": self.has_source,
            "is_clickable": self.is_clickable,
            "source_url": self.source_url,
            "section_id": self.section_id,
            "citations": [c.to_dict() for c in self.citations],
        }


def parse_cell(cell: Any, catalog: SourceCatalogConfig | None = None) -> ParsedCell:
    """Parse a cell's inline links into citations.

    - No links: display text is the cell unchanged, no citations.
    - One link: display text is the link label.
    - Several links: display text is the first label plus a count,
      e.g. "A (2 sources)"; all links are kept in encounter order.

    Examples:
        "[Aspirin](https://www.fda.gov/drugs#approval-history)"
        → display "Aspirin", source "https://www.fda.gov/drugs",
          section "approval-history", authoritative
    """
    text = cell if isinstance(cell, str) else ("" if cell is None else str(cell))

    links = extract_markdown_links(text)
    if not links:
        return ParsedCell(text=text, display_text=text)

    citations: list[Citation] = []
    for position, link in enumerate(links):
        base_url, section_id = split_url_fragment(link.url)
        label = clean_markdown(link.text) or link.text
        citations.append(
            Citation(
                display_text=label,
                source_url=base_url,
                section_id=section_id,
                full_url=link.url,
                is_authoritative=classify_domain(base_url, catalog).is_authoritative,
                is_primary=position == 0,
            )
        )

    display_text = citations[0].display_text
    if len(citations) > 1:
        display_text = f"{display_text} ({len(citations)} sources)"
        logger.debug("Cell carries %d citations", len(citations))

    return ParsedCell(text=text, display_text=display_text, citations=citations)
