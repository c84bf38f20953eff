"""Citation and source resolution endpoints.

- POST /sources/cell - Parse a table cell into citations
- POST /sources/table - Collect the distinct sources cited in a table
- GET /sources/classify - Classify a source URL
- GET /sources/deep-link - Build a highlighted deep link with alternatives
"""

import logging

from fastapi import APIRouter, Query

from pharma_reports.core.exceptions import ValidationError
from pharma_reports.schemas.source import (
    AccessibilityResponse,
    AlternativeStrategyResponse,
    CellRequest,
    DeepLinkResponse,
    ParsedCellResponse,
    SourceClassificationResponse,
    SourceSummaryResponse,
    TableRowsRequest,
    TableSourceResponse,
)
from pharma_reports.sources.cells import parse_cell
from pharma_reports.sources.domains import (
    check_accessibility,
    classify_domain,
    highlighting_instructions,
    is_highlighting_supported,
)
from pharma_reports.sources.links import build_deep_link, suggest_alternatives
from pharma_reports.sources.summary import summarize_sources

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/cell", response_model=ParsedCellResponse)
async def parse_table_cell(request: CellRequest) -> ParsedCellResponse:
    """Parse a cell's inline links into citations."""
    return ParsedCellResponse.model_validate(parse_cell(request.cell))


@router.post("/table", response_model=SourceSummaryResponse)
async def summarize_table_sources(request: TableRowsRequest) -> SourceSummaryResponse:
    """Collect a table's cited sources split into authoritative and other."""
    summary = summarize_sources(request.rows)
    return SourceSummaryResponse(
        total=len(summary.sources),
        authoritative=[TableSourceResponse.model_validate(s) for s in summary.authoritative],
        other=[TableSourceResponse.model_validate(s) for s in summary.other],
    )


@router.get("/classify", response_model=SourceClassificationResponse)
async def classify_source(
    url: str = Query(..., max_length=4096, description="Source URL"),
) -> SourceClassificationResponse:
    """Classify a source URL without fetching it."""
    classification = classify_domain(url)
    return SourceClassificationResponse(
        url=url,
        is_authoritative=classification.is_authoritative,
        display_name=classification.display_name,
        accessibility=AccessibilityResponse.model_validate(check_accessibility(url)),
        highlighting_supported=is_highlighting_supported(url),
        instructions=highlighting_instructions(url),
    )


@router.get("/deep-link", response_model=DeepLinkResponse)
async def source_deep_link(
    url: str = Query(..., max_length=4096, description="Source URL"),
    section: str | None = Query(None, max_length=512, description="Section identifier"),
) -> DeepLinkResponse:
    """Build a deep link to a source section plus alternative ways to reach it."""
    if not url.strip():
        raise ValidationError("URL must not be blank", field="url")

    deep_link = build_deep_link(url, section)
    logger.debug("Deep link for %s#%s: %s", url, section, deep_link)
    return DeepLinkResponse(
        url=url,
        section=section,
        deep_link=deep_link,
        alternatives=[
            AlternativeStrategyResponse.model_validate(a) for a in suggest_alternatives(url, section)
        ],
    )
