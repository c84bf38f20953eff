"""Pydantic schemas package."""

from pharma_reports.schemas.common import ErrorResponse, HealthResponse
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
from pharma_reports.schemas.source import (
    CellRequest,
    DeepLinkResponse,
    ParsedCellResponse,
    SourceClassificationResponse,
    SourceSummaryResponse,
    TableRowsRequest,
)

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Reports
    "AnalysisResponse",
    "ContentRequest",
    "ExportHtmlRequest",
    "LineDiagnosticsResponse",
    "StructureRequest",
    "StructuredReportResponse",
    "TableResponse",
    "TablesResponse",
    # Sources
    "CellRequest",
    "DeepLinkResponse",
    "ParsedCellResponse",
    "SourceClassificationResponse",
    "SourceSummaryResponse",
    "TableRowsRequest",
]
