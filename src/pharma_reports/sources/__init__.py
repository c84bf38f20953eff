"""
Sources Module
==============

Citation and source resolution for report table cells.

- ``cells``: inline link parsing into citations
- ``domains``: authoritative-domain classification and accessibility
- ``links``: deep links with section highlighting, alternative searches
- ``summary``: distinct sources cited across a table
"""

from pharma_reports.sources.cells import Citation, ParsedCell, parse_cell
from pharma_reports.sources.domains import (
    Accessibility,
    DomainClassification,
    check_accessibility,
    classify_domain,
    get_source_display_name,
    highlighting_instructions,
    is_authoritative_source,
    is_highlighting_supported,
)
from pharma_reports.sources.links import AlternativeStrategy, build_deep_link, suggest_alternatives
from pharma_reports.sources.summary import (
    SourceSummary,
    TableSource,
    extract_sources_from_table,
    summarize_sources,
)

__all__ = [
    # Cells
    "Citation",
    "ParsedCell",
    "parse_cell",
    # Domains
    "Accessibility",
    "DomainClassification",
    "check_accessibility",
    "classify_domain",
    "get_source_display_name",
    "highlighting_instructions",
    "is_authoritative_source",
    "is_highlighting_supported",
    # Links
    "AlternativeStrategy",
    "build_deep_link",
    "suggest_alternatives",
    # Summary
    "SourceSummary",
    "TableSource",
    "extract_sources_from_table",
    "summarize_sources",
]
