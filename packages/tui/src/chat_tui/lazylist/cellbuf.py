"""
Cell buffer: a width x height grid of styled terminal cells.

Content is drawn into the grid from ANSI text, cells can be restyled in
place, and the grid is rendered back to ANSI text. Wide characters occupy
their leading cell; the trailing cells hold empty content.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple

from rich.style import Style

from ..utils import decode_lines, grapheme_width, render_styled, styled_graphemes


class Rect(NamedTuple):
    """Half-open rectangle: columns [x, x+width), rows [y, y+height)."""
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


@dataclass
class Cell:
    content: str = " "
    style: Style = field(default_factory=Style.null)
    width: int = 1

    @property
    def blank(self) -> bool:
        return self.content in ("", " ")


class CellBuffer:
    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._lines: list[list[Cell]] = [self._blank_line() for _ in range(self.height)]

    def _blank_line(self) -> list[Cell]:
        return [Cell() for _ in range(self.width)]

    @property
    def bounds(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def line(self, y: int) -> list[Cell]:
        return self._lines[y]

    def cell(self, x: int, y: int) -> Cell | None:
        if 0 <= y < self.height and 0 <= x < self.width:
            return self._lines[y][x]
        return None

    def set_cell(self, x: int, y: int, content: str, style: Style | None = None) -> None:
        if not self.bounds.contains(x, y):
            return
        w = max(1, grapheme_width(content)) if content else 1
        style = style or Style.null()
        self._lines[y][x] = Cell(content, style, w)
        for i in range(1, w):
            if x + i < self.width:
                self._lines[y][x + i] = Cell("", style, 0)

    def fill(self, area: Rect, style: Style, content: str = " ") -> None:
        for y in range(max(area.y, 0), min(area.bottom, self.height)):
            for x in range(max(area.x, 0), min(area.right, self.width)):
                self._lines[y][x] = Cell(content, style, 1)

    def draw(self, content: str, area: Rect | None = None, base_style: Style | None = None) -> None:
        """
        Draw ANSI content into area, one content line per row.

        Characters that do not fit the area are clipped. base_style sits
        underneath each character's own style.
        """
        area = area if area is not None else self.bounds
        if area.empty or not content:
            return
        right = min(area.right, self.width)
        for row, text in enumerate(decode_lines(content)):
            y = area.y + row
            if y >= min(area.bottom, self.height):
                break
            if y < 0:
                continue
            x = area.x
            for cluster, style in styled_graphemes(text):
                w = grapheme_width(cluster)
                if w == 0:
                    continue
                if x + w > right:
                    break
                if x >= 0:
                    self.set_cell(x, y, cluster, base_style + style if base_style else style)
                x += w

    def map_cells(self, y: int, start: int, end: int) -> Iterator[Cell]:
        line = self._lines[y]
        for x in range(max(start, 0), min(end, len(line))):
            yield line[x]

    def render_line(self, y: int) -> str:
        line = self._lines[y]
        end = len(line)
        # Unstyled trailing blanks carry nothing visible
        while end > 0 and line[end - 1].content == " " and not line[end - 1].style:
            end -= 1
        return render_styled((c.content, c.style) for c in line[:end] if c.width > 0)

    def render(self) -> str:
        return "\n".join(self.render_line(y) for y in range(self.height))
