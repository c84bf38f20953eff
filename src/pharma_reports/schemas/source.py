"""Citation and source resolution schemas."""

from typing import Any

from pydantic import Field

from pharma_reports.schemas.common import BaseSchema


class CellRequest(BaseSchema):
    """A single table cell."""

    cell: str = Field(..., max_length=100_000)


class TableRowsRequest(BaseSchema):
    """Rows of a table whose cited sources should be collected."""

    rows: list[list[Any]]


class CitationResponse(BaseSchema):
    """One citation recovered from a cell."""

    display_text: str
    source_url: str
    section_id: str | None = None
    full_url: str
    is_authoritative: bool
    is_primary: bool


class ParsedCellResponse(BaseSchema):
    """Cell display text and its citations."""

    text: str
    display_text: str
    has_source: bool
    is_clickable: bool
    source_url: str | None = None
    section_id: str | None = None
    citations: list[CitationResponse]


class TableSourceResponse(BaseSchema):
    """A distinct source cited in a table."""

    url: str
    domain: str
    section_id: str | None = None
    display_name: str
    is_authoritative: bool


class SourceSummaryResponse(BaseSchema):
    """Sources of a table split by authority."""

    total: int
    authoritative: list[TableSourceResponse]
    other: list[TableSourceResponse]


class AccessibilityResponse(BaseSchema):
    """Static accessibility guess for a URL."""

    accessible: bool
    type: str
    reason: str


class SourceClassificationResponse(BaseSchema):
    """Everything known about a source URL without fetching it."""

    url: str
    is_authoritative: bool
    display_name: str
    accessibility: AccessibilityResponse
    highlighting_supported: bool
    instructions: str


class AlternativeStrategyResponse(BaseSchema):
    """Another way to reach a cited section."""

    type: str
    description: str
    url: str


class DeepLinkResponse(BaseSchema):
    """Deep link into a source section with fallbacks."""

    url: str
    section: str | None = None
    deep_link: str
    alternatives: list[AlternativeStrategyResponse]
