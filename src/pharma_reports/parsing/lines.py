"""Line classification feeding the table extraction state machines."""

from dataclasses import dataclass, field
from enum import Enum

from pharma_reports.parsing.markdown import has_pipe, is_separator_line, split_cells


class LineKind(str, Enum):
    """Shape of a single report line."""

    BLANK = "blank"
    SEPARATOR = "separator"
    TABLE_ROW = "table_row"
    PROSE = "prose"


@dataclass(frozen=True)
class ClassifiedLine:
    """A report line with its kind and, for pipe lines, its cleaned cells.

    Instances are frozen but not hashable, since ``cells`` is a list.
    """

    index: int
    text: str
    kind: LineKind
    cells: list[str] = field(default_factory=list)

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def non_empty_cells(self) -> int:
        return sum(1 for cell in self.cells if cell)


def classify_line(index: int, line: str, keep_links: bool = False) -> ClassifiedLine:
    """Classify one line as blank, separator, table row or prose."""
    stripped = line.strip()
    if not stripped:
        return ClassifiedLine(index=index, text=stripped, kind=LineKind.BLANK)
    if is_separator_line(stripped):
        return ClassifiedLine(
            index=index,
            text=stripped,
            kind=LineKind.SEPARATOR,
            cells=split_cells(stripped, keep_links),
        )
    if has_pipe(stripped):
        return ClassifiedLine(
            index=index,
            text=stripped,
            kind=LineKind.TABLE_ROW,
            cells=split_cells(stripped, keep_links),
        )
    return ClassifiedLine(index=index, text=stripped, kind=LineKind.PROSE)


def classify_lines(text: str, keep_links: bool = False) -> list[ClassifiedLine]:
    """Classify every line of a text blob (``\\r\\n`` and ``\\n`` both split)."""
    return [classify_line(i, line, keep_links) for i, line in enumerate(text.splitlines())]
