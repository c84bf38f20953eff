"""
Parsing Module
==============

Recovers structure from AI-generated report text.

- ``tables``: multi-strategy markdown table extraction
- ``titles``: table title inference from surrounding lines
- ``markdown``: shared text-cleaning helpers
- ``diagnostics``: line-level inspection for reports that fail to parse

Example usage:
    from pharma_reports.parsing import extract_tables

    for table in extract_tables(report_text):
        print(table.title, table.headers, len(table.rows))
"""

from pharma_reports.parsing.diagnostics import LineDiagnostics, inspect_table_lines
from pharma_reports.parsing.markdown import (
    MarkdownLink,
    clean_markdown,
    extract_markdown_links,
    has_markdown_links,
)
from pharma_reports.parsing.tables import (
    ExtractionResult,
    Table,
    TableStrategy,
    extract_tables,
    extract_tables_with_strategy,
)

__all__ = [
    # Tables
    "ExtractionResult",
    "Table",
    "TableStrategy",
    "extract_tables",
    "extract_tables_with_strategy",
    # Markdown helpers
    "MarkdownLink",
    "clean_markdown",
    "extract_markdown_links",
    "has_markdown_links",
    # Diagnostics
    "LineDiagnostics",
    "inspect_table_lines",
]
