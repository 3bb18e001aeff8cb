"""
Frame styles: margin, border and padding drawn around an item's content.

A FrameStyle is what focus/blur styling resolves to. The list renders the
raw item at (width - horizontal_size) columns and then wraps it in the frame.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple

from rich.style import Style

from .cellbuf import CellBuffer, Rect

__all__ = [
    "Rect",
    "Spacing",
    "Border",
    "NORMAL_BORDER",
    "ROUNDED_BORDER",
    "THICK_BORDER",
    "FrameStyle",
    "NO_FRAME",
    "adjust_area",
]


class Spacing(NamedTuple):
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0

    @classmethod
    def of(cls, *values: int) -> "Spacing":
        """CSS-like shorthand: (all), (vertical, horizontal), (t, r, b, l)."""
        if not values:
            return cls()
        if len(values) == 1:
            v = values[0]
            return cls(v, v, v, v)
        if len(values) == 2:
            v, h = values
            return cls(v, h, v, h)
        if len(values) == 4:
            return cls(*values)
        raise ValueError(f"Spacing takes 1, 2 or 4 values, got {len(values)}")

    @property
    def horizontal(self) -> int:
        return self.left + self.right

    @property
    def vertical(self) -> int:
        return self.top + self.bottom


class Border(NamedTuple):
    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


NORMAL_BORDER = Border("─", "─", "│", "│", "┌", "┐", "└", "┘")
ROUNDED_BORDER = Border("─", "─", "│", "│", "╭", "╮", "╰", "╯")
THICK_BORDER = Border("━", "━", "┃", "┃", "┏", "┓", "┗", "┛")


@dataclass(frozen=True)
class FrameStyle:
    margin: Spacing = field(default_factory=Spacing)
    padding: Spacing = field(default_factory=Spacing)
    border: Border | None = None
    border_style: Style = field(default_factory=Style.null)
    style: Style = field(default_factory=Style.null)

    @property
    def _border_size(self) -> int:
        return 1 if self.border is not None else 0

    @property
    def horizontal_size(self) -> int:
        return self.margin.horizontal + self.padding.horizontal + 2 * self._border_size

    @property
    def vertical_size(self) -> int:
        return self.margin.vertical + self.padding.vertical + 2 * self._border_size

    @property
    def insets(self) -> tuple[int, int]:
        """(top, left) offset of the content inside the framed block."""
        b = self._border_size
        return (
            self.margin.top + b + self.padding.top,
            self.margin.left + b + self.padding.left,
        )

    @property
    def is_empty(self) -> bool:
        return self.horizontal_size == 0 and self.vertical_size == 0 and not self.style

    def outer_height(self, content_height: int) -> int:
        """Line count of the framed block for content of content_height lines."""
        if self.vertical_size == 0:
            return content_height
        return max(content_height, 1) + self.vertical_size

    def render(self, content: str, width: int) -> str:
        """Wrap content (already laid out for the inner width) in the frame."""
        if self.is_empty:
            return content
        content_height = 0 if content == "" else content.count("\n") + 1
        height = self.outer_height(content_height)
        if height == 0:
            return content
        buf = CellBuffer(width, height)
        m = self.margin
        box = Rect(m.left, m.top, width - m.horizontal, height - m.vertical)
        if box.empty:
            return buf.render()
        if self.style:
            buf.fill(box, self.style)
        if self.border is not None:
            self._draw_border(buf, box, self.border)
        buf.draw(content, adjust_area(Rect(0, 0, width, height), self), self.style or None)
        return buf.render()

    def _draw_border(self, buf: CellBuffer, box: Rect, b: Border) -> None:
        st = self.style + self.border_style
        last_x, last_y = box.right - 1, box.bottom - 1
        for x in range(box.x + 1, last_x):
            buf.set_cell(x, box.y, b.top, st)
            buf.set_cell(x, last_y, b.bottom, st)
        for y in range(box.y + 1, last_y):
            buf.set_cell(box.x, y, b.left, st)
            buf.set_cell(last_x, y, b.right, st)
        buf.set_cell(box.x, box.y, b.top_left, st)
        buf.set_cell(last_x, box.y, b.top_right, st)
        buf.set_cell(box.x, last_y, b.bottom_left, st)
        buf.set_cell(last_x, last_y, b.bottom_right, st)


NO_FRAME = FrameStyle()


def adjust_area(area: Rect, frame: FrameStyle) -> Rect:
    """Shrink area by the frame's margin, border and padding."""
    top, left = frame.insets
    return Rect(
        area.x + left,
        area.y + top,
        max(0, area.width - frame.horizontal_size),
        max(0, area.height - frame.vertical_size),
    )
