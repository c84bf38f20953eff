"""Table extraction engine for AI-generated report text.

The upstream model does not follow a strict table format: separators go
missing, column counts drift between rows and titles appear above, below or
not at all. Extraction therefore runs independent strategies in priority
order and keeps the first that recovers at least one table:

1. ``STANDARD``: separator-anchored markdown tables (header, ``|---|``, rows).
2. ``ALTERNATIVE``: header guessing without separators; the first pipe line
   with enough cells is the header.
3. ``AGGRESSIVE``: header guessing that tolerates prose and blank lines
   between a header and its rows, catching short tables embedded in text.

Every returned table satisfies ``len(row) == len(headers)`` for all rows.
Extraction never raises: unparsable input yields an empty list and callers
fall back to showing the raw text.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pharma_reports.core.app_config import ExtractionConfig, get_app_config_or_default
from pharma_reports.parsing.lines import ClassifiedLine, LineKind, classify_lines
from pharma_reports.parsing.markdown import is_full_separator_line
from pharma_reports.parsing.titles import infer_table_title

logger = logging.getLogger(__name__)


def normalize_row(cells: Sequence[str], width: int) -> list[str]:
    """Pad a row with empty strings or truncate it to exactly ``width`` cells."""
    row = list(cells[:width])
    if len(row) < width:
        row.extend([""] * (width - len(row)))
    return row


@dataclass(frozen=True)
class Table:
    """One extracted table.

    Rows are normalized to the header width on construction: short rows are
    padded with empty strings, long rows truncated. Fields cannot be
    reassigned, but tables are not hashable since headers and rows are lists.
    """

    title: str
    headers: list[str]
    rows: list[list[str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        headers = [str(h) for h in self.headers]
        width = len(headers)
        object.__setattr__(self, "headers", headers)
        object.__setattr__(
            self, "rows", [normalize_row([str(c) for c in row], width) for row in self.rows]
        )

    @property
    def column_count(self) -> int:
        return len(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        return {
            "title": self.title,
            "headers": list(self.headers),
            "rows": [list(row) for row in self.rows],
        }


class TableStrategy(str, Enum):
    """Table detection strategies in priority order."""

    STANDARD = "standard"
    ALTERNATIVE = "alternative"
    AGGRESSIVE = "aggressive"
    NONE = "none"


@dataclass(frozen=True)
class ExtractionResult:
    """Tables recovered from a text blob plus the strategy that found them."""

    tables: list[Table]
    strategy: TableStrategy

    @property
    def has_tables(self) -> bool:
        return bool(self.tables)


class _TableBuilder:
    """Accumulates one table while a strategy scans lines."""

    def __init__(self, title: str, headers: list[str], header_index: int) -> None:
        self.title = title
        self.headers = headers
        self.header_index = header_index
        self.rows: list[list[str]] = []

    def add_row(self, cells: list[str]) -> None:
        if len(cells) != len(self.headers):
            logger.debug(
                "Repairing row at table '%s': %d cells vs %d headers",
                self.title,
                len(cells),
                len(self.headers),
            )
        self.rows.append(normalize_row(cells, len(self.headers)))

    def build(self) -> Table:
        return Table(title=self.title, headers=self.headers, rows=self.rows)


class _Collector:
    """Collects finished tables, dropping those without data rows."""

    def __init__(self, strategy: TableStrategy) -> None:
        self.strategy = strategy
        self.tables: list[Table] = []

    def close(self, builder: "_TableBuilder | None") -> None:
        if builder is None:
            return
        if not builder.rows:
            logger.debug(
                "%s: discarding header-only table at line %d",
                self.strategy.value,
                builder.header_index,
            )
            return
        table = builder.build()
        logger.debug(
            "%s: completed table '%s' with %d columns, %d rows",
            self.strategy.value,
            table.title,
            table.column_count,
            table.row_count,
        )
        self.tables.append(table)


# ---------------------------------------------------------------------------
# Strategy A: separator-anchored
# ---------------------------------------------------------------------------


class _StandardState(str, Enum):
    SEEKING = "seeking"
    IN_HEADER = "in_header"
    IN_ROWS = "in_rows"


def parse_standard_tables(
    lines: Sequence[str],
    classified: Sequence[ClassifiedLine],
    config: ExtractionConfig,
) -> list[Table]:
    """Strategy A: markdown tables anchored on a ``|---|`` separator line.

    States:
        SEEKING   - no table; a pipe line becomes the candidate header.
        IN_HEADER - candidate header held; a separator opens the table.
        IN_ROWS   - collecting rows until blank lines, prose or end of input.

    Mismatched rows are always repaired (padded or truncated), never used
    to close the table. A full separator (every cell ``---`` or longer) met
    directly under a row means that row was the next table's header; it
    only splits a table that keeps at least one row. Other separator-shaped
    lines inside a table, such as ``| - | - |``, are data rows.
    """
    collector = _Collector(TableStrategy.STANDARD)
    state = _StandardState.SEEKING
    candidate: ClassifiedLine | None = None
    builder: _TableBuilder | None = None
    blank_run = 0

    def open_table(header: ClassifiedLine) -> _TableBuilder | None:
        if header.non_empty_cells == 0:
            return None
        title = infer_table_title(lines, header.index, config)
        logger.debug("standard: table '%s' opened at line %d", title, header.index)
        return _TableBuilder(title, list(header.cells), header.index)

    for line in classified:
        if state is _StandardState.SEEKING:
            if line.kind is LineKind.TABLE_ROW:
                candidate = line
                state = _StandardState.IN_HEADER

        elif state is _StandardState.IN_HEADER:
            if line.kind is LineKind.SEPARATOR and candidate is not None:
                builder = open_table(candidate)
                candidate = None
                blank_run = 0
                state = _StandardState.IN_ROWS if builder else _StandardState.SEEKING
            elif line.kind is LineKind.TABLE_ROW:
                candidate = line
            else:
                candidate = None
                state = _StandardState.SEEKING

        elif builder is not None:  # IN_ROWS
            if line.kind is LineKind.TABLE_ROW:
                blank_run = 0
                if line.non_empty_cells == 0:
                    continue
                builder.add_row(list(line.cells))
            elif line.kind is LineKind.BLANK:
                blank_run += 1
                if blank_run >= config.blank_lines_to_close:
                    collector.close(builder)
                    builder = None
                    state = _StandardState.SEEKING
            elif line.kind is LineKind.SEPARATOR:
                if not is_full_separator_line(line.text):
                    # "| - | - |" is a row of placeholders
                    blank_run = 0
                    builder.add_row(list(line.cells))
                    continue
                header_line = classified[line.index - 1]
                if (
                    blank_run
                    or len(builder.rows) < 2
                    or header_line.kind is not LineKind.TABLE_ROW
                    or header_line.non_empty_cells == 0
                ):
                    continue
                builder.rows.pop()
                collector.close(builder)
                builder = open_table(header_line)
                blank_run = 0
                state = _StandardState.IN_ROWS if builder else _StandardState.SEEKING
            else:  # PROSE
                collector.close(builder)
                builder = None
                state = _StandardState.SEEKING

    collector.close(builder)
    return collector.tables


# ---------------------------------------------------------------------------
# Strategies B and C: header guessing
# ---------------------------------------------------------------------------


def parse_alternative_tables(
    lines: Sequence[str],
    classified: Sequence[ClassifiedLine],
    config: ExtractionConfig,
) -> list[Table]:
    """Strategy B: no separator required.

    The first pipe line with at least ``min_header_cells`` non-empty cells is
    the header. Lines with the same cell count are rows; a line with a
    different count closes the table and becomes the next header. Any
    non-pipe line, blank or prose, closes the table.
    """
    collector = _Collector(TableStrategy.ALTERNATIVE)
    builder: _TableBuilder | None = None

    for line in classified:
        if line.kind is LineKind.SEPARATOR:
            _add_placeholder_row(builder, line)
            continue

        if line.kind is LineKind.TABLE_ROW:
            if line.non_empty_cells == 0:
                continue
            can_head = line.non_empty_cells >= config.min_header_cells
            if builder is None:
                if can_head:
                    builder = _new_guessed_table(lines, line, config, TableStrategy.ALTERNATIVE)
            elif line.cell_count == len(builder.headers):
                builder.add_row(list(line.cells))
            elif can_head:
                collector.close(builder)
                builder = _new_guessed_table(lines, line, config, TableStrategy.ALTERNATIVE)

        elif builder is not None:  # blank or prose
            collector.close(builder)
            builder = None

    collector.close(builder)
    return collector.tables


def parse_aggressive_tables(
    lines: Sequence[str],
    classified: Sequence[ClassifiedLine],
    config: ExtractionConfig,
) -> list[Table]:
    """Strategy C: header guessing that keeps a header alive across text.

    Like strategy B, but any non-table line (blank or prose) closes a table
    only once it has rows. A lone header line therefore survives the
    surrounding prose and picks up the one or two rows that follow it.
    """
    collector = _Collector(TableStrategy.AGGRESSIVE)
    builder: _TableBuilder | None = None
    table_like_run = 0

    for line in classified:
        if line.kind is LineKind.SEPARATOR:
            if _add_placeholder_row(builder, line):
                table_like_run += 1
            continue

        if line.kind is LineKind.TABLE_ROW:
            if line.cell_count < config.min_header_cells or line.non_empty_cells == 0:
                continue
            table_like_run += 1
            if builder is None:
                builder = _new_guessed_table(lines, line, config, TableStrategy.AGGRESSIVE)
            elif line.cell_count == len(builder.headers):
                builder.add_row(list(line.cells))
            else:
                collector.close(builder)
                builder = _new_guessed_table(lines, line, config, TableStrategy.AGGRESSIVE)
            continue

        # Blank or prose
        if table_like_run and builder is not None and builder.rows:
            logger.debug(
                "aggressive: run of %d table-like lines ended at line %d",
                table_like_run,
                line.index,
            )
            collector.close(builder)
            builder = None
        table_like_run = 0

    collector.close(builder)
    return collector.tables


def _add_placeholder_row(builder: _TableBuilder | None, line: ClassifiedLine) -> bool:
    """Add a separator-shaped row such as ``| - | - |`` to an open table."""
    if (
        builder is None
        or not builder.rows
        or is_full_separator_line(line.text)
        or line.cell_count != len(builder.headers)
    ):
        return False
    builder.add_row(list(line.cells))
    return True


def _new_guessed_table(
    lines: Sequence[str],
    header: ClassifiedLine,
    config: ExtractionConfig,
    strategy: TableStrategy,
) -> _TableBuilder:
    title = infer_table_title(lines, header.index, config)
    logger.debug("%s: header guessed at line %d for '%s'", strategy.value, header.index, title)
    return _TableBuilder(title, list(header.cells), header.index)


_StrategyFn = Callable[
    [Sequence[str], Sequence[ClassifiedLine], ExtractionConfig], list[Table]
]

STRATEGIES: list[tuple[TableStrategy, _StrategyFn]] = [
    (TableStrategy.STANDARD, parse_standard_tables),
    (TableStrategy.ALTERNATIVE, parse_alternative_tables),
    (TableStrategy.AGGRESSIVE, parse_aggressive_tables),
]


# ---------------------------------------------------------------------------
# Public entry points
# ---------------------------------------------------------------------------


def extract_tables_with_strategy(
    text: Any,
    config: ExtractionConfig | None = None,
) -> ExtractionResult:
    """Extract tables and report which strategy produced them.

    Args:
        text: Report text. Anything other than a non-empty string yields
            no tables.
        config: Extraction settings; defaults to the application config.

    Returns:
        ExtractionResult with the first non-empty strategy result, or an
        empty result with strategy NONE.
    """
    if not isinstance(text, str) or not text.strip():
        return ExtractionResult(tables=[], strategy=TableStrategy.NONE)

    cfg = config or get_app_config_or_default().extraction

    try:
        lines = text.splitlines()
        classified = classify_lines(text, keep_links=cfg.keep_links)
        for strategy, parse in STRATEGIES:
            tables = parse(lines, classified, cfg)
            if tables:
                logger.info(
                    "Extracted %d table(s) with %s strategy from %d lines",
                    len(tables),
                    strategy.value,
                    len(lines),
                )
                return ExtractionResult(tables=tables, strategy=strategy)
            logger.debug("%s strategy found no tables", strategy.value)
    except Exception:
        logger.exception("Table extraction failed; returning no tables")
        return ExtractionResult(tables=[], strategy=TableStrategy.NONE)

    logger.info("No tables found with any strategy (%d lines)", len(lines))
    return ExtractionResult(tables=[], strategy=TableStrategy.NONE)


def extract_tables(text: Any, config: ExtractionConfig | None = None) -> list[Table]:
    """Extract tables from report text; never raises, may return ``[]``."""
    return extract_tables_with_strategy(text, config).tables
