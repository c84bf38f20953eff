"""Export service for serializing extracted tables.

HTML output is a self-contained print-ready document (the input the
dashboard hands to its PDF renderer). Markdown output re-emits clean
separator-anchored tables that the extraction engine parses back.
"""

import html
import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from pharma_reports.core.app_config import SourceCatalogConfig
from pharma_reports.parsing.markdown import DASH_CELL
from pharma_reports.parsing.tables import Table
from pharma_reports.sources.cells import parse_cell

logger = logging.getLogger(__name__)

# Tables following one with more rows than this start on a new page
PAGE_BREAK_ROW_THRESHOLD = 10

HTML_STYLE = """
body { font-family: Arial, sans-serif; margin: 20px; color: #333; }
.header { text-align: center; margin-bottom: 30px; border-bottom: 2px solid #2563eb; padding-bottom: 20px; }
.header h1 { color: #2563eb; margin: 0; font-size: 24px; }
.header h2 { color: #666; margin: 10px 0 0 0; font-size: 16px; font-weight: normal; }
.table-section { margin-bottom: 40px; page-break-inside: avoid; }
.table-title { color: #2563eb; font-size: 18px; margin-bottom: 15px; font-weight: bold; }
.raw-content { background: #f8fafc; padding: 20px; white-space: pre-wrap; font-family: monospace; font-size: 11px; }
table { width: 100%; border-collapse: collapse; margin-bottom: 20px; font-size: 11px; }
th { background: #2563eb; color: white; padding: 8px; text-align: left; }
td { padding: 6px 8px; border-bottom: 1px solid #ddd; }
tr:nth-child(even) { background: #f9f9f9; }
.page-break { page-break-before: always; }
""".strip()


def _render_cell(cell: str, catalog: SourceCatalogConfig | None) -> str:
    parsed = parse_cell(cell, catalog)
    text = html.escape(parsed.display_text)
    if parsed.primary is None:
        return text
    href = html.escape(parsed.primary.full_url, quote=True)
    return f'<a href="{href}">{text}</a>'


def render_tables_html(
    tables: Sequence[Table],
    title: str = "Analysis Report",
    *,
    subtitle: str | None = None,
    raw_content: str | None = None,
    generated_at: datetime | None = None,
    catalog: SourceCatalogConfig | None = None,
) -> str:
    """Render tables as a standalone HTML document.

    All text is HTML-escaped. Cells carrying a citation become links to the
    cited URL. When there are no tables, ``raw_content`` is shown verbatim
    in a preformatted block instead.

    Args:
        tables: Tables to render, in order.
        title: Document heading.
        subtitle: Optional secondary heading.
        raw_content: Text shown when ``tables`` is empty.
        generated_at: Timestamp printed in the header; defaults to now (UTC).
        catalog: Domain catalog used to classify cited sources.

    Returns:
        HTML document as a string.
    """
    stamp = (generated_at or datetime.now(UTC)).strftime("%Y-%m-%d %H:%M:%S %Z").strip()

    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{html.escape(title)}</title>",
        f"<style>\n{HTML_STYLE}\n</style>",
        "</head>",
        "<body>",
        '<div class="header">',
        f"<h1>{html.escape(title)}</h1>",
    ]
    if subtitle:
        lines.append(f"<h2>{html.escape(subtitle)}</h2>")
    lines.append(f"<p>Generated on {stamp}</p>")
    lines.append("</div>")

    for index, table in enumerate(tables):
        page_break = index > 0 and tables[index - 1].row_count > PAGE_BREAK_ROW_THRESHOLD
        css = "table-section page-break" if page_break else "table-section"
        lines.append(f'<div class="{css}">')
        lines.append(f'<h2 class="table-title">{html.escape(table.title)}</h2>')
        lines.append("<table>")
        lines.append("<thead>")
        lines.append("<tr>" + "".join(f"<th>{html.escape(h)}</th>" for h in table.headers) + "</tr>")
        lines.append("</thead>")
        lines.append("<tbody>")
        for row in table.rows:
            lines.append("<tr>" + "".join(f"<td>{_render_cell(c, catalog)}</td>" for c in row) + "</tr>")
        lines.append("</tbody>")
        lines.append("</table>")
        lines.append("</div>")

    if not tables and raw_content:
        lines.append('<div class="table-section">')
        lines.append('<h2 class="table-title">Analysis Content</h2>')
        lines.append(f'<div class="raw-content">{html.escape(raw_content)}</div>')
        lines.append("</div>")

    lines.append("</body>")
    lines.append("</html>")

    logger.debug("Rendered %d table(s) to HTML", len(tables))
    return "\n".join(lines)


def _markdown_cell(value: str) -> str:
    cell = value.replace("|", "\\|").replace("\n", " ").strip()
    # "-" placeholders would otherwise read back as a separator line
    if DASH_CELL.match(cell):
        return "\\" + cell
    return cell


def render_tables_markdown(tables: Sequence[Table]) -> str:
    """Render tables as markdown with a bold title line above each table.

    Pipes and dash-only cells are escaped so the output parses back to the
    same tables.
    """
    blocks: list[str] = []
    for table in tables:
        lines = [f"**{table.title}**", ""]
        lines.append("| " + " | ".join(_markdown_cell(h) for h in table.headers) + " |")
        lines.append("|" + "|".join("---" for _ in table.headers) + "|")
        for row in table.rows:
            lines.append("| " + " | ".join(_markdown_cell(c) for c in row) + " |")
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + ("\n" if blocks else "")
