"""Report structuring endpoints.

- POST /reports/tables - Extract tables from report text
- POST /reports/structure - Locate report text in a backend response and structure it
- POST /reports/analyze - Count links and tables in report text
- POST /reports/inspect - Line-level diagnostics for reports that fail to parse
- POST /reports/export/html - Render extracted tables as a printable HTML document
- POST /reports/export/markdown - Re-emit extracted tables as clean markdown
"""

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse, PlainTextResponse

from pharma_reports.core.app_config import ExtractionConfig, get_app_config
from pharma_reports.parsing.diagnostics import inspect_table_lines
from pharma_reports.parsing.tables import extract_tables_with_strategy
from pharma_reports.schemas.report import (
    AnalysisResponse,
    ContentRequest,
    ExportHtmlRequest,
    LineDiagnosticsResponse,
    StructuredReportResponse,
    StructureRequest,
    TableResponse,
    TablesResponse,
)
from pharma_reports.services.export_service import render_tables_html, render_tables_markdown
from pharma_reports.services.report_service import (
    analyze_content,
    extract_report_content,
    structure_report,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _extraction_config(keep_links: bool) -> ExtractionConfig:
    config = get_app_config().extraction
    if keep_links and not config.keep_links:
        return config.model_copy(update={"keep_links": True})
    return config


@router.post("/tables", response_model=TablesResponse)
async def extract_report_tables(request: ContentRequest) -> TablesResponse:
    """Extract tables from report text and report which strategy found them."""
    result = extract_tables_with_strategy(request.content, _extraction_config(request.keep_links))
    return TablesResponse(
        tables=[TableResponse.model_validate(t) for t in result.tables],
        strategy=result.strategy,
        table_count=len(result.tables),
    )


@router.post("/structure", response_model=StructuredReportResponse)
async def structure_backend_report(request: StructureRequest) -> StructuredReportResponse:
    """Structure the report text found in a raw backend response.

    Responds 422 when the payload carries no report text.
    """
    content = extract_report_content(request.response, strict=True)
    report = structure_report(content, _extraction_config(request.keep_links))
    logger.info(
        "Structured report: %d table(s), strategy=%s, fallback=%s",
        report.table_count,
        report.strategy.value,
        report.used_fallback,
    )
    return StructuredReportResponse.model_validate(report)


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze_report(request: ContentRequest) -> AnalysisResponse:
    """Summarize the links and tables present in report text."""
    analysis = analyze_content(request.content, _extraction_config(request.keep_links))
    return AnalysisResponse.model_validate(analysis)


@router.post("/inspect", response_model=LineDiagnosticsResponse)
async def inspect_report(request: ContentRequest) -> LineDiagnosticsResponse:
    """Line-level table diagnostics."""
    return LineDiagnosticsResponse.model_validate(inspect_table_lines(request.content))


@router.post("/export/html", response_class=HTMLResponse)
async def export_report_html(request: ExportHtmlRequest) -> HTMLResponse:
    """Render the report's tables as a standalone HTML document."""
    config = _extraction_config(request.keep_links)
    result = extract_tables_with_strategy(request.content, config)
    document = render_tables_html(
        result.tables,
        title=request.title,
        subtitle=request.subtitle,
        raw_content=request.content,
    )
    return HTMLResponse(content=document)


@router.post("/export/markdown", response_class=PlainTextResponse)
async def export_report_markdown(request: ContentRequest) -> PlainTextResponse:
    """Re-emit the report's tables as titled, separator-anchored markdown."""
    result = extract_tables_with_strategy(request.content, _extraction_config(request.keep_links))
    return PlainTextResponse(
        content=render_tables_markdown(result.tables),
        media_type="text/markdown",
    )
