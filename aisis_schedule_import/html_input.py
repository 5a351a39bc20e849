"""
Read a saved AISIS "My Class Schedule" page (browser "Save As → Web page").

The schedule grid is turned back into the text a browser copy of the table
produces: one line per <tr>, cells separated by tabs, and each <br> inside a
cell becoming a line break. That text then goes through the normal parser,
so saved pages and pasted text behave identically.
"""
from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag  # type: ignore[import]

from .errors import NoScheduleTableError
from .grammar import is_header_line
from .logging import get_logger
from .parser import parse_aisis_schedule

log = get_logger(__name__)

_WS_RE = re.compile(r"\s+")


def _row_cells(tr: Tag) -> List[Tag]:
    return tr.find_all(["th", "td"], recursive=False)


def _cell_text(cell: Tag) -> str:
    # Only <br> breaks a line; inline markup (<b>, <span>) and source
    # whitespace collapse the way a browser renders them.
    parts: List[str] = []
    for node in cell.descendants:
        if isinstance(node, Tag):
            if node.name == "br":
                parts.append("\n")
        elif type(node) is NavigableString:
            parts.append(_WS_RE.sub(" ", str(node)))
    lines = (line.strip() for line in "".join(parts).split("\n"))
    return "\n".join(line for line in lines if line)


def _find_schedule_table(soup: BeautifulSoup) -> Optional[Tag]:
    """
    Pick the innermost table with a 'Time | Mon | ...' header row.

    AISIS nests layout tables, so an outer table can also contain the
    header text; the innermost match is the grid itself.
    """
    found: Optional[Tag] = None
    for table in soup.find_all("table"):
        for tr in table.find_all("tr"):
            cells = _row_cells(tr)
            if not cells:
                continue
            texts = [_cell_text(c) for c in cells]
            if is_header_line("\t".join(texts)) and any(t.lower() == "mon" for t in texts):
                found = table
                break
    return found


def html_to_schedule_text(html_content: str) -> str:
    """Render the schedule grid of an AISIS page as paste-equivalent text."""
    soup = BeautifulSoup(html_content, "html.parser")
    table = _find_schedule_table(soup)
    if table is None:
        raise NoScheduleTableError()

    lines: List[str] = []
    for tr in table.find_all("tr"):
        # Skip rows of nested tables; they are rendered through their cell.
        if tr.find_parent("table") is not table:
            continue
        cells = _row_cells(tr)
        if not cells:
            continue
        lines.append("\t".join(_cell_text(c) for c in cells))

    log.debug("html_table_rendered", rows=len(lines))
    return "\n".join(lines)


def parse_schedule_html(
    html_path: str | Path | None = None,
    html_content: str | None = None,
    with_debug: bool = False,
):
    """
    Parse a saved AISIS schedule page.

    :param html_path: Path to the saved HTML file.
    :param html_content: Raw HTML string (alternative to html_path).
    :param with_debug: Same as for parse_aisis_schedule().
    """
    if html_content is not None:
        html = html_content
    elif html_path is not None:
        html = Path(html_path).read_text(encoding="utf-8", errors="ignore")
    else:
        raise ValueError("Provide either html_path or html_content.")

    return parse_aisis_schedule(html_to_schedule_text(html), with_debug=with_debug)
