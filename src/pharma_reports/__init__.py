"""
Pharma Reports - structure AI-generated pharmaceutical reports.

Recovers tables from free-form report text and resolves the inline
citations in their cells.

Quick Start
-----------
Extract tables:

    from pharma_reports import extract_tables

    for table in extract_tables(report_text):
        print(table.title, table.headers, len(table.rows))

Resolve a cell's citations:

    from pharma_reports import parse_cell, build_deep_link

    cell = parse_cell("[Label](https://www.fda.gov/drugs#approval-history)")
    url = build_deep_link(cell.source_url, cell.section_id)

Public API Exports
------------------

Parsing:
    extract_tables: Tables recovered from report text
    extract_tables_with_strategy: Tables plus the strategy that found them
    Table: Extracted table record

Sources:
    parse_cell: Citations carried by a table cell
    classify_domain: Authoritative/general classification of a URL
    build_deep_link: Highlighted deep link into a source section

Services:
    structure_report: Tables with the raw-content fallback applied
    extract_report_content: Report text inside a backend response
"""

__version__ = "0.1.0"


def __getattr__(name: str):
    """Lazy loading of exports to keep ``import pharma_reports`` light."""
    # Parsing
    if name == "extract_tables":
        from pharma_reports.parsing.tables import extract_tables

        return extract_tables
    if name == "extract_tables_with_strategy":
        from pharma_reports.parsing.tables import extract_tables_with_strategy

        return extract_tables_with_strategy
    if name == "Table":
        from pharma_reports.parsing.tables import Table

        return Table

    # Sources
    if name == "parse_cell":
        from pharma_reports.sources.cells import parse_cell

        return parse_cell
    if name == "classify_domain":
        from pharma_reports.sources.domains import classify_domain

        return classify_domain
    if name == "build_deep_link":
        from pharma_reports.sources.links import build_deep_link

        return build_deep_link

    # Services
    if name == "structure_report":
        from pharma_reports.services.report_service import structure_report

        return structure_report
    if name == "extract_report_content":
        from pharma_reports.services.report_service import extract_report_content

        return extract_report_content

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


# Public API
__all__ = [
    "__version__",
    # Parsing
    "extract_tables",
    "extract_tables_with_strategy",
    "Table",
    # Sources
    "parse_cell",
    "classify_domain",
    "build_deep_link",
    # Services
    "structure_report",
    "extract_report_content",
]
