"""Markdown text-cleaning helpers shared by the table engine and the resolver.

AI-generated report text mixes markdown emphasis, inline links and pipe
tables freely. These helpers strip presentation markup from a cell, split a
pipe row into cells, and recognise the line shapes the extraction
strategies care about.
"""

import re
from dataclasses import dataclass
from typing import Any

# [label](url) - label may not contain ']', url may not contain ')'
LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
IMAGE_PATTERN = re.compile(r"!\[([^\]]*)\]\([^)]+\)")

BOLD_PATTERN = re.compile(r"\*\*(.*?)\*\*")
ITALIC_PATTERN = re.compile(r"\*(.*?)\*")
CODE_PATTERN = re.compile(r"`(.*?)`")
STRIKE_PATTERN = re.compile(r"~~(.*?)~~")
WS_PATTERN = re.compile(r"\s+")

HEADING_PREFIX = re.compile(r"^#{1,6}\s+")
NUMBERED_PREFIX = re.compile(r"^\d+[.)]\s+")
NUMBERED_SECTION = re.compile(r"^\d+[.)]\s*\S")
BOLD_LINE = re.compile(r"^\*\*(.+?)\*\*:?$")

# Pipes preceded by a backslash are literal cell content
CELL_SPLIT = re.compile(r"(?<!\\)\|")
SEPARATOR_CHARS = frozenset("|-: \t")
# A full separator cell: at least three dashes, optional alignment colons
SEPARATOR_CELL = re.compile(r"^:?-{3,}:?$")
# Dash-only cells ("-" for N/A) and their backslash-escaped export form
DASH_CELL = re.compile(r"^[-:]*-[-:]*$")
ESCAPED_DASH_CELL = re.compile(r"^\\([-:]*-[-:]*)$")


@dataclass(frozen=True)
class MarkdownLink:
    """One inline ``[text](url)`` occurrence."""

    text: str
    url: str
    full_match: str


def clean_markdown(text: Any, *, keep_links: bool = False) -> str:
    """Strip emphasis, code, strikethrough and link markup from text.

    Links and images collapse to their label unless ``keep_links`` is set,
    in which case inline links are left intact. Runs of whitespace collapse
    to a single space. Non-string input yields an empty string.

    Examples:
        "**Aspirin**" → "Aspirin"
        "[FDA label](https://fda.gov/x#s1)" → "FDA label"
        "`NDA` ~~pending~~" → "NDA pending"
    """
    if not isinstance(text, str) or not text:
        return ""

    cleaned = BOLD_PATTERN.sub(r"\1", text)
    cleaned = ITALIC_PATTERN.sub(r"\1", cleaned)
    cleaned = CODE_PATTERN.sub(r"\1", cleaned)
    cleaned = STRIKE_PATTERN.sub(r"\1", cleaned)
    # Images before links so "![alt](x)" does not leave a stray "!"
    cleaned = IMAGE_PATTERN.sub(r"\1", cleaned)
    if not keep_links:
        cleaned = LINK_PATTERN.sub(r"\1", cleaned)
    return WS_PATTERN.sub(" ", cleaned).strip()


def clean_title(text: Any) -> str:
    """Clean a title line: drop heading hashes, emphasis and a trailing colon."""
    if not isinstance(text, str):
        return ""
    title = HEADING_PREFIX.sub("", text.strip())
    title = clean_markdown(title)
    return title.rstrip(":").strip()


def split_row(line: str) -> list[str]:
    """Split a pipe row into raw (uncleaned) cell strings.

    One leading and one trailing border pipe are dropped so explicit empty
    cells inside the row keep their column position.

    Examples:
        "| a | b |" → ["a", "b"]
        "a | | c" → ["a", "", "c"]
        "| x \\| y | z |" → ["x | y", "z"]
        "| \\- | 10 |" → ["-", "10"]
    """
    stripped = line.strip()
    if stripped.startswith("|"):
        stripped = stripped[1:]
    if stripped.endswith("|") and not stripped.endswith("\\|"):
        stripped = stripped[:-1]
    cells = [cell.strip().replace("\\|", "|") for cell in CELL_SPLIT.split(stripped)]
    return [ESCAPED_DASH_CELL.sub(r"\1", cell) for cell in cells]


def split_cells(line: str, keep_links: bool = False) -> list[str]:
    """Split a pipe row into cleaned cells."""
    return [clean_markdown(cell, keep_links=keep_links) for cell in split_row(line)]


def count_non_empty(cells: list[str]) -> int:
    """Count cells holding any text."""
    return sum(1 for cell in cells if cell)


def has_pipe(line: str) -> bool:
    """Check if a line contains an unescaped pipe."""
    return bool(CELL_SPLIT.search(line))


def is_separator_line(line: str) -> bool:
    """Check for a header separator such as ``|---|:---:|``."""
    stripped = line.strip()
    if "|" not in stripped or "-" not in stripped:
        return False
    return set(stripped) <= SEPARATOR_CHARS


def is_full_separator_line(line: str) -> bool:
    """Check for a separator whose every cell is a run of three or more dashes.

    ``| - | - |`` passes :func:`is_separator_line` but is usually a data row
    of "not applicable" placeholders; only full separators may start a new
    table in the middle of another one.
    """
    if not is_separator_line(line):
        return False
    cells = [cell for cell in split_row(line) if cell]
    return bool(cells) and all(SEPARATOR_CELL.match(cell) for cell in cells)


def is_bold_line(line: str) -> bool:
    """Check for a whole-line bold title such as ``**1. Overview**``."""
    return bool(BOLD_LINE.match(line.strip()))


def is_heading_line(line: str) -> bool:
    """Check for an ATX markdown heading."""
    return bool(HEADING_PREFIX.match(line.strip()))


def is_numbered_section(line: str) -> bool:
    """Check for a numbered section line such as ``2. Clinical Trials``."""
    return bool(NUMBERED_SECTION.match(line.strip()))


def extract_markdown_links(text: Any) -> list[MarkdownLink]:
    """Extract every inline link from text, in encounter order."""
    if not isinstance(text, str) or not text:
        return []
    return [
        MarkdownLink(text=match.group(1), url=match.group(2).strip(), full_match=match.group(0))
        for match in LINK_PATTERN.finditer(text)
    ]


def has_markdown_links(text: Any) -> bool:
    """Check if text contains at least one inline link."""
    if not isinstance(text, str) or not text:
        return False
    return LINK_PATTERN.search(text) is not None


def split_url_fragment(url: str) -> tuple[str, str | None]:
    """Split a URL on its first ``#`` into (base URL, fragment or None)."""
    base, sep, fragment = url.partition("#")
    if not sep or not fragment:
        return base, None
    return base, fragment
