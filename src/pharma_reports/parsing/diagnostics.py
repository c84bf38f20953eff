"""Line-level diagnostics for reports whose tables fail to parse."""

from dataclasses import asdict, dataclass, field
from typing import Any

from pharma_reports.parsing.markdown import (
    CELL_SPLIT,
    is_bold_line,
    is_heading_line,
    is_separator_line,
)


@dataclass(frozen=True)
class LineNote:
    """A 1-based line number with the stripped line text."""

    line: int
    content: str
    pipe_count: int = 0


@dataclass(frozen=True)
class LineDiagnostics:
    """What the extraction strategies would see in a report, line by line."""

    total_lines: int
    content_length: int
    lines_with_pipes: list[LineNote] = field(default_factory=list)
    section_headers: list[LineNote] = field(default_factory=list)
    table_separators: list[LineNote] = field(default_factory=list)
    potential_table_rows: list[LineNote] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def inspect_table_lines(text: Any) -> LineDiagnostics:
    """Collect per-line table signals from report text.

    Rows with at least two pipes are potential table rows; whole-line bold
    text and markdown headings are section headers.
    """
    if not isinstance(text, str):
        return LineDiagnostics(total_lines=0, content_length=0)

    lines = text.splitlines()
    diagnostics = LineDiagnostics(total_lines=len(lines), content_length=len(text))

    for number, raw in enumerate(lines, start=1):
        line = raw.strip()
        pipe_count = len(CELL_SPLIT.findall(line))

        if pipe_count:
            diagnostics.lines_with_pipes.append(LineNote(number, line, pipe_count))
        if is_bold_line(line) or is_heading_line(line):
            diagnostics.section_headers.append(LineNote(number, line))
        if is_separator_line(line):
            diagnostics.table_separators.append(LineNote(number, line, pipe_count))
        elif pipe_count >= 2:
            diagnostics.potential_table_rows.append(LineNote(number, line, pipe_count))

    return diagnostics
