"""Report structuring schemas."""

from typing import Any

from pydantic import Field

from pharma_reports.parsing.tables import TableStrategy
from pharma_reports.schemas.common import BaseSchema


class ContentRequest(BaseSchema):
    """Report text to process."""

    content: str = Field(..., max_length=2_000_000)
    keep_links: bool = Field(
        default=False,
        description="Keep inline links in cells instead of collapsing them to labels",
    )


class StructureRequest(BaseSchema):
    """Raw backend response whose report text should be structured."""

    response: dict[str, Any] | str
    keep_links: bool = False


class ExportHtmlRequest(ContentRequest):
    """Report text to render as a printable HTML document."""

    title: str = Field(default="Analysis Report", max_length=200)
    subtitle: str | None = Field(default=None, max_length=200)


class TableResponse(BaseSchema):
    """One extracted table."""

    title: str
    headers: list[str]
    rows: list[list[str]]


class TablesResponse(BaseSchema):
    """Tables extracted from report text."""

    tables: list[TableResponse]
    strategy: TableStrategy
    table_count: int


class StructuredReportResponse(BaseSchema):
    """Structured report with the raw-content fallback applied."""

    tables: list[TableResponse]
    report: str
    has_tables: bool
    table_count: int
    strategy: TableStrategy
    used_fallback: bool


class LinkResponse(BaseSchema):
    """Inline markdown link."""

    text: str
    url: str


class AnalysisResponse(BaseSchema):
    """Clickable elements and tables found in report text."""

    has_content: bool
    has_links: bool
    link_count: int
    links: list[LinkResponse]
    table_count: int
    tables: list[TableResponse]


class LineNoteResponse(BaseSchema):
    """One noteworthy report line."""

    line: int
    content: str
    pipe_count: int = 0


class LineDiagnosticsResponse(BaseSchema):
    """Line-level diagnostics for table extraction."""

    total_lines: int
    content_length: int
    lines_with_pipes: list[LineNoteResponse]
    section_headers: list[LineNoteResponse]
    table_separators: list[LineNoteResponse]
    potential_table_rows: list[LineNoteResponse]
