"""Services package."""

from pharma_reports.services.export_service import render_tables_html, render_tables_markdown
from pharma_reports.services.report_service import (
    ContentAnalysis,
    StructuredReport,
    analyze_content,
    extract_report_content,
    structure_report,
)

__all__ = [
    "ContentAnalysis",
    "StructuredReport",
    "analyze_content",
    "extract_report_content",
    "render_tables_html",
    "render_tables_markdown",
    "structure_report",
]
