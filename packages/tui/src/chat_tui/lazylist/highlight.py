"""
Highlight renderer.

Paints a text range of rendered content with a highlighter. The range runs
from (start_line, start_col) inclusive to (end_line, end_col) exclusive; on
each row the painted span stops at the last visible character, so trailing
padding is never highlighted.
"""
from __future__ import annotations

import sys
from typing import Callable

from rich.style import Style

from ..utils import visible_width
from .cellbuf import CellBuffer, Rect

Highlighter = Callable[[Style], Style]

# Column sentinel meaning "through the end of the row"
END_OF_LINE = sys.maxsize

_REVERSE = Style(reverse=True)


def default_highlighter(style: Style) -> Style:
    return style + _REVERSE


DEFAULT_HIGHLIGHTER: Highlighter = default_highlighter


def style_highlighter(highlight: Style) -> Highlighter:
    """Highlighter that layers highlight on top of each cell's style."""

    def apply(style: Style) -> Style:
        return style + highlight

    return apply


def _is_inert(start_line: int, start_col: int, end_line: int, end_col: int) -> bool:
    if start_line < 0 or start_col < 0:
        return True
    return (start_line, start_col) >= (end_line, end_col)


def _content_size(content: str) -> tuple[int, int]:
    lines = content.split("\n")
    return max((visible_width(line) for line in lines), default=0), len(lines)


def _row_span(
    buf: CellBuffer,
    y: int,
    start_line: int,
    start_col: int,
    end_line: int,
    end_col: int,
) -> tuple[int, int]:
    """Painted [start, end) columns of row y, shrunk to its last visible cell."""
    col_start = start_col if y == start_line else 0
    col_end = end_col if y == end_line else END_OF_LINE
    col_end = min(col_end, buf.width)
    if col_start >= col_end:
        return col_start, col_start
    line = buf.line(y)
    last = -1
    for x in range(col_end - 1, col_start - 1, -1):
        if not line[x].blank:
            last = x
            break
    if last < 0:
        return col_start, col_start
    # A wide glyph that starts inside the span is painted whole
    end = last + 1
    while end < buf.width and line[end].width == 0:
        end += 1
    return col_start, end


def _buffer_for(content: str, area: Rect | None) -> tuple[CellBuffer, Rect]:
    width, height = _content_size(content)
    if area is None:
        area = Rect(0, 0, width, height)
    buf = CellBuffer(max(width, area.right), max(height, area.bottom))
    buf.draw(content)
    return buf, area


def highlight(
    content: str,
    area: Rect | None,
    start_line: int,
    start_col: int,
    end_line: int,
    end_col: int,
    highlighter: Highlighter | None = None,
) -> str:
    """
    Apply highlighter to the cells of content between two positions.

    area limits which cells may be painted; None means the whole content.
    A range with a negative start, or an empty range, returns content
    unchanged.
    """
    if not content or _is_inert(start_line, start_col, end_line, end_col):
        return content
    highlighter = highlighter or DEFAULT_HIGHLIGHTER
    buf, area = _buffer_for(content, area)
    for y in range(start_line, min(end_line, buf.height - 1) + 1):
        x0, x1 = _row_span(buf, y, start_line, start_col, end_line, end_col)
        for x in range(x0, x1):
            if area.contains(x, y):
                cell = buf.line(y)[x]
                cell.style = highlighter(cell.style)
    return buf.render()


def extract_text(
    content: str,
    start_line: int,
    start_col: int,
    end_line: int,
    end_col: int,
) -> str:
    """Plain text covered by the same range highlight() would paint."""
    if not content or _is_inert(start_line, start_col, end_line, end_col):
        return ""
    buf, _ = _buffer_for(content, None)
    rows: list[str] = []
    for y in range(start_line, min(end_line, buf.height - 1) + 1):
        x0, x1 = _row_span(buf, y, start_line, start_col, end_line, end_col)
        rows.append("".join(c.content for c in buf.map_cells(y, x0, x1)))
    return "\n".join(rows)
