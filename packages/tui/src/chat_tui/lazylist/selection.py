"""
Mouse selection state.

Anchor and drag points are recorded as (item, row, col) where row is the
line within the item's framed block. The normalized HighlightRange is always
derived from them, never stored.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .highlight import END_OF_LINE


class Span(NamedTuple):
    """Highlighted region within one item, end column exclusive."""
    start_row: int
    start_col: int
    end_row: int
    end_col: int

    @property
    def empty(self) -> bool:
        return (self.start_row, self.start_col) >= (self.end_row, self.end_col)


class HighlightRange(NamedTuple):
    start_item: int
    start_row: int
    start_col: int
    end_item: int
    end_row: int
    end_col: int

    @property
    def empty(self) -> bool:
        return (self.start_item, self.start_row, self.start_col) == (
            self.end_item,
            self.end_row,
            self.end_col,
        )

    def contains_item(self, idx: int) -> bool:
        return self.start_item <= idx <= self.end_item

    def span_for(self, idx: int, height: int) -> Span | None:
        """Span of this range inside item idx, whose block is height lines tall."""
        if self.empty or not self.contains_item(idx):
            return None
        last_row = max(height - 1, 0)
        if self.start_item == self.end_item:
            return Span(self.start_row, self.start_col, self.end_row, self.end_col)
        if idx == self.start_item:
            return Span(self.start_row, self.start_col, last_row, END_OF_LINE)
        if idx == self.end_item:
            return Span(0, 0, self.end_row, self.end_col)
        return Span(0, 0, last_row, END_OF_LINE)


def normalize(anchor: tuple[int, int, int], drag: tuple[int, int, int]) -> HighlightRange:
    """Order two (item, row, col) points into a document-order range."""
    a_item, a_row, a_col = anchor
    d_item, d_row, d_col = drag
    dragging_down = (
        d_item > a_item
        or (d_item == a_item and d_row > a_row)
        or (d_item == a_item and d_row == a_row and d_col >= a_col)
    )
    if dragging_down:
        return HighlightRange(a_item, a_row, a_col, d_item, d_row, d_col)
    return HighlightRange(d_item, d_row, d_col, a_item, a_row, a_col)


def to_content_span(span: Span, insets: tuple[int, int], content_height: int) -> Span | None:
    """
    Translate a span over a framed block into raw content coordinates.

    Parts of the span that cover only frame rows are dropped; a span that
    starts in the top frame starts at the first content cell, and one that
    ends below the content runs to the end of the last content line.
    """
    top, left = insets
    if top == 0 and left == 0:
        return span
    if content_height <= 0:
        return None
    start_row, start_col = span.start_row - top, span.start_col - left
    end_row = span.end_row - top
    end_col = span.end_col if span.end_col == END_OF_LINE else span.end_col - left
    if end_row < 0 or start_row >= content_height:
        return None
    if start_row < 0:
        start_row, start_col = 0, 0
    if end_row >= content_height:
        end_row, end_col = content_height - 1, END_OF_LINE
    result = Span(start_row, max(start_col, 0), end_row, max(end_col, 0))
    return None if result.empty else result


@dataclass
class MouseSelection:
    down: bool = False
    anchor_item: int = -1
    anchor_row: int = -1
    anchor_col: int = -1
    drag_item: int = -1
    drag_row: int = -1
    drag_col: int = -1

    @property
    def active(self) -> bool:
        return self.anchor_item >= 0 and self.drag_item >= 0

    def press(self, idx: int, row: int, col: int) -> None:
        self.down = True
        self.anchor_item, self.anchor_row, self.anchor_col = idx, row, col
        self.drag_item, self.drag_row, self.drag_col = idx, row, col

    def drag_to(self, idx: int, row: int, col: int) -> None:
        self.drag_item, self.drag_row, self.drag_col = idx, row, col

    def release(self) -> None:
        self.down = False

    def reset(self) -> None:
        self.down = False
        self.anchor_item = self.anchor_row = self.anchor_col = -1
        self.drag_item = self.drag_row = self.drag_col = -1

    def shift(self, k: int) -> None:
        if self.anchor_item >= 0:
            self.anchor_item += k
        if self.drag_item >= 0:
            self.drag_item += k

    def remove(self, idx: int) -> None:
        """Adjust for removal of item idx; a selection touching it is dropped."""
        if idx in (self.anchor_item, self.drag_item):
            self.reset()
            return
        if self.anchor_item > idx:
            self.anchor_item -= 1
        if self.drag_item > idx:
            self.drag_item -= 1

    def range(self) -> HighlightRange | None:
        if not self.active:
            return None
        return normalize(
            (self.anchor_item, self.anchor_row, self.anchor_col),
            (self.drag_item, self.drag_row, self.drag_col),
        )
