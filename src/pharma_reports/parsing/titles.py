"""Table title inference from the text surrounding a table.

Canonical rule, applied by every extraction strategy:

1. Look backward (``title_lookback`` lines) from the table's first line and
   take the nearest bold line or markdown heading.
2. Failing that, the nearest numbered section line (``2. Safety Profile``).
3. Failing that, the nearest non-blank line that is not part of a table.
4. Failing that, look forward (``title_lookahead`` lines) for a bold line.
5. Otherwise use the configured default title.

Lines starting with a summary keyword ("Table Summary", "This table") are
never used as titles.
"""

import logging
from collections.abc import Sequence

from pharma_reports.core.app_config import ExtractionConfig
from pharma_reports.parsing.markdown import (
    clean_title,
    has_pipe,
    is_bold_line,
    is_heading_line,
    is_numbered_section,
    is_separator_line,
)

logger = logging.getLogger(__name__)


def is_summary_line(line: str, keywords: Sequence[str]) -> bool:
    """Check if a line is a table summary label rather than a title."""
    cleaned = clean_title(line).lower()
    return any(cleaned.startswith(keyword.lower()) for keyword in keywords)


def _is_table_line(line: str) -> bool:
    return has_pipe(line) or is_separator_line(line) or line.startswith("---")


def infer_table_title(
    lines: Sequence[str],
    start_index: int,
    config: ExtractionConfig,
) -> str:
    """Infer the title of the table whose first line is ``lines[start_index]``.

    Args:
        lines: All lines of the report.
        start_index: Index of the table's header line.
        config: Extraction settings (search windows, keywords, default title).

    Returns:
        Cleaned title, never empty.
    """
    keywords = config.summary_keywords
    window_start = max(0, start_index - config.title_lookback)

    bold: str | None = None
    numbered: str | None = None
    prose: str | None = None

    for i in range(start_index - 1, window_start - 1, -1):
        line = lines[i].strip()
        if not line or _is_table_line(line) or is_summary_line(line, keywords):
            continue
        if is_bold_line(line) or is_heading_line(line):
            bold = line
            break
        if numbered is None and is_numbered_section(line):
            numbered = line
        elif prose is None:
            prose = line

    candidate = bold or numbered or prose
    if candidate is not None:
        title = clean_title(candidate)
        if title:
            return title

    window_end = min(len(lines), start_index + config.title_lookahead + 1)
    for i in range(start_index + 1, window_end):
        line = lines[i].strip()
        if is_bold_line(line) and not is_summary_line(line, keywords):
            title = clean_title(line)
            if title:
                logger.debug("Title for table at line %d found ahead at line %d", start_index, i)
                return title

    return config.default_title
