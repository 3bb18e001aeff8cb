"""
LazyList: a virtualized list of variable-height items.

Only the items that intersect the viewport are rendered. Each item is
measured on first use and cached per index; scroll math walks forward or
backward from the current offset accumulating item heights plus the gap.

Scroll position is (offset_idx, offset_line): the first visible line is line
offset_line of the framed block of item offset_idx.

Mouse selection is tracked in framed-block coordinates and painted onto the
raw item content before the focus/blur frame is applied.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from .cache import RenderCache, RenderedEntry
from .cellbuf import Rect
from .frame import NO_FRAME, FrameStyle
from .highlight import extract_text, highlight
from .item import Item, focus_stylable, highlight_stylable
from .selection import HighlightRange, MouseSelection, Span, to_content_span

logger = logging.getLogger(__name__)


class LazyList:
    def __init__(
        self,
        items: Iterable[Item] | None = None,
        width: int = 0,
        height: int = 0,
        gap: int = 0,
    ) -> None:
        self._items: list[Item] = list(items or [])
        self._width = max(0, width)
        self._height = max(0, height)
        self._gap = max(0, gap)
        self._cache = RenderCache()
        self._offset_idx = 0
        self._offset_line = 0
        self._selected = -1
        self._focused = False
        self._mouse = MouseSelection()
        self._spans: dict[int, Span] = {}

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> Sequence[Item]:
        return tuple(self._items)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def gap(self) -> int:
        return self._gap

    @property
    def offset(self) -> tuple[int, int]:
        return self._offset_idx, self._offset_line

    @property
    def selected_index(self) -> int:
        return self._selected

    @property
    def focused(self) -> bool:
        return self._focused

    def selected_item(self) -> Item | None:
        if 0 <= self._selected < len(self._items):
            return self._items[self._selected]
        return None

    # ------------------------------------------------------------------
    # Viewport
    # ------------------------------------------------------------------

    def set_size(self, width: int, height: int) -> None:
        width, height = max(0, width), max(0, height)
        if width == self._width and height == self._height:
            return
        if width != self._width:
            logger.debug("Width %d -> %d, dropping %d cached items", self._width, width, len(self._cache))
            self._cache.clear()
        self._width = width
        self._height = height
        self._clamp_offset()
        if self._items:
            bottom = self._bottom_position()
            if self.offset > bottom:
                self._offset_idx, self._offset_line = bottom

    def set_gap(self, gap: int) -> None:
        self._gap = max(0, gap)

    def focus(self) -> None:
        self._focused = True
        self._cache.invalidate_styling(self._selected)
        self._clamp_offset()

    def blur(self) -> None:
        self._focused = False
        self._cache.invalidate_styling(self._selected)
        self._clamp_offset()

    def invalidate(self) -> None:
        """Drop every cached rendering (e.g. after a theme change)."""
        self._cache.clear()
        self._clamp_offset()

    def invalidate_item(self, idx: int) -> None:
        self._cache.invalidate(idx)
        if idx == self._offset_idx:
            self._clamp_offset()

    def _clamp_offset(self) -> None:
        """Keep offset_line inside the (possibly re-measured) item at the offset."""
        if not self._items:
            self._offset_idx = self._offset_line = 0
            return
        self._offset_idx = min(self._offset_idx, len(self._items) - 1)
        self._offset_line = min(self._offset_line, self._item_height(self._offset_idx))

    # ------------------------------------------------------------------
    # Measurement
    # ------------------------------------------------------------------

    def _frame_for(self, idx: int) -> FrameStyle:
        styled = focus_stylable(self._items[idx])
        if styled is None:
            return NO_FRAME
        if self._focused and idx == self._selected:
            return styled.focus_style()
        return styled.blur_style()

    def _measure(self, idx: int) -> tuple[RenderedEntry, FrameStyle]:
        frame = self._frame_for(idx)
        raw_width = max(0, self._width - frame.horizontal_size)
        entry = self._cache.get(idx)
        if entry is None or entry.width != raw_width:
            entry = RenderedEntry.of(self._items[idx].render(raw_width), raw_width)
            self._cache.put(idx, entry)
        return entry, frame

    def get_item(self, idx: int) -> RenderedEntry:
        """Cached raw rendering of item idx at the current width."""
        return self._measure(idx)[0]

    def _item_height(self, idx: int) -> int:
        entry, frame = self._measure(idx)
        return frame.outer_height(entry.height)

    def _styled(self, idx: int) -> tuple[str, int]:
        entry, frame = self._measure(idx)
        if entry.styled is None:
            content = entry.content
            span = self._spans.get(idx)
            hs = highlight_stylable(self._items[idx])
            if span is not None and hs is not None:
                content_span = to_content_span(span, frame.insets, entry.height)
                if content_span is not None:
                    content = highlight(
                        content,
                        Rect(0, 0, entry.width, entry.height),
                        *content_span,
                        highlighter=hs.highlight_style(),
                    )
            entry.styled = frame.render(content, self._width)
            entry.styled_height = frame.outer_height(entry.height)
        return entry.styled, entry.styled_height

    # ------------------------------------------------------------------
    # Scrolling
    # ------------------------------------------------------------------

    def _bottom_position(self, last: int | None = None) -> tuple[int, int]:
        """Offset that puts the end of item `last` on the viewport's last line."""
        if last is None:
            last = len(self._items) - 1
        total = 0
        for j in range(last, -1, -1):
            h = self._item_height(j)
            total += h if j == last else h + self._gap
            if total >= self._height:
                line = total - self._height
                if line > h:
                    # Landed inside the gap after item j
                    return j + 1, 0
                return j, line
        return 0, 0

    def scroll_to_index(self, idx: int) -> None:
        if not self._items:
            return
        self._offset_idx = min(max(idx, 0), len(self._items) - 1)
        self._offset_line = 0

    def scroll_to_top(self) -> None:
        self._offset_idx = 0
        self._offset_line = 0

    def scroll_to_bottom(self) -> None:
        if not self._items:
            return
        self._offset_idx, self._offset_line = self._bottom_position()

    def at_top(self) -> bool:
        return self.offset == (0, 0)

    def at_bottom(self) -> bool:
        if not self._items:
            return True
        return self.offset >= self._bottom_position()

    def _first_reachable(self, need: int) -> int:
        """First index a scroll of `need` lines up can reach."""
        avail = self._offset_line
        idx = self._offset_idx
        while idx > 0 and avail < need:
            idx -= 1
            avail += self._item_height(idx) + self._gap
        return idx

    def scroll_by(self, delta: int) -> None:
        """Scroll by delta lines; positive moves toward the end of the list."""
        if delta == 0 or not self._items:
            return
        if delta > 0:
            self._scroll_down(delta)
        else:
            self._scroll_up(-delta)

    def _scroll_down(self, lines: int) -> None:
        bottom = self._bottom_position()
        if self.offset >= bottom:
            return
        bottom_idx = bottom[0]
        self._offset_line += lines
        while self._offset_idx < bottom_idx:
            stride = self._item_height(self._offset_idx) + self._gap
            if self._offset_line < stride:
                break
            self._offset_line -= stride
            self._offset_idx += 1
        h = self._item_height(self._offset_idx)
        if self._offset_line > h:
            # Inside the gap below the item
            if self._offset_idx < len(self._items) - 1:
                self._offset_idx += 1
                self._offset_line = 0
            else:
                self._offset_line = h
        if self.offset > bottom:
            self._offset_idx, self._offset_line = bottom

    def _scroll_up(self, lines: int) -> None:
        first_idx = self._first_reachable(lines)
        self._offset_line -= lines
        while self._offset_idx > first_idx and self._offset_line < 0:
            self._offset_idx -= 1
            self._offset_line += self._item_height(self._offset_idx) + self._gap
        self._offset_line = min(max(self._offset_line, 0), self._item_height(self._offset_idx))

    def find_visible_items(self) -> tuple[int, int]:
        """Inclusive (start, end) index range intersecting the viewport; (-1, -1) when empty."""
        if not self._items:
            return -1, -1
        total = -self._offset_line
        for idx in range(self._offset_idx, len(self._items)):
            total += self._item_height(idx) + self._gap
            if total >= self._height:
                return self._offset_idx, idx
        return self._offset_idx, len(self._items) - 1

    def selected_item_in_view(self) -> bool:
        if self._selected < 0:
            return False
        start, end = self.find_visible_items()
        return start <= self._selected <= end

    def scroll_to_selected(self) -> None:
        if not 0 <= self._selected < len(self._items):
            return
        start, end = self.find_visible_items()
        if self._selected < start:
            self.scroll_to_index(self._selected)
        elif self._selected > end:
            self._offset_idx, self._offset_line = self._bottom_position(self._selected)

    # ------------------------------------------------------------------
    # Keyboard selection
    # ------------------------------------------------------------------

    def set_selected(self, idx: int) -> None:
        new = idx if 0 <= idx < len(self._items) else -1
        if new == self._selected:
            return
        self._cache.invalidate_styling(self._selected)
        self._cache.invalidate_styling(new)
        self._selected = new
        self._clamp_offset()

    def select_prev(self) -> None:
        if self._selected > 0:
            self.set_selected(self._selected - 1)

    def select_next(self) -> None:
        if self._selected < len(self._items) - 1:
            self.set_selected(self._selected + 1)

    def select_prev_wrap(self) -> None:
        if not self._items:
            return
        self.set_selected(self._selected - 1 if self._selected > 0 else len(self._items) - 1)

    def select_next_wrap(self) -> None:
        if not self._items:
            return
        self.set_selected((self._selected + 1) % len(self._items))

    def select_first(self) -> None:
        if self._items:
            self.set_selected(0)

    def select_last(self) -> None:
        if self._items:
            self.set_selected(len(self._items) - 1)

    def select_first_in_view(self) -> None:
        self.set_selected(self.find_visible_items()[0])

    def select_last_in_view(self) -> None:
        self.set_selected(self.find_visible_items()[1])

    # ------------------------------------------------------------------
    # Mouse
    # ------------------------------------------------------------------

    def find_item_at_y(self, x: int, y: int) -> tuple[int, int]:
        """(item, row within its block) under viewport row y, or (-1, -1)."""
        if not self._items or y < 0 or y >= self._height:
            return -1, -1
        cursor = -self._offset_line
        for idx in range(self._offset_idx, len(self._items)):
            h = self._item_height(idx)
            if cursor <= y < cursor + h:
                return idx, y - cursor
            cursor += h + self._gap
            if cursor > y:
                break
        return -1, -1

    def handle_mouse_down(self, x: int, y: int) -> bool:
        idx, row = self.find_item_at_y(x, y)
        if idx < 0:
            return False
        self._mouse.press(idx, row, x)
        self.set_selected(idx)
        self._update_spans()
        return True

    def handle_mouse_drag(self, x: int, y: int) -> bool:
        if not self._mouse.down or not self._items:
            return False
        idx, row = self.find_item_at_y(x, y)
        if idx < 0:
            return False
        self._mouse.drag_to(idx, row, x)
        self._update_spans()
        return True

    def handle_mouse_up(self, x: int, y: int) -> bool:
        if not self._mouse.down:
            return False
        self._mouse.release()
        return True

    def clear_highlight(self) -> None:
        for idx in self._spans:
            self._cache.invalidate_styling(idx)
        self._spans = {}
        self._mouse.reset()

    def highlight_range(self) -> HighlightRange | None:
        return self._mouse.range()

    def has_highlight(self) -> bool:
        return bool(self._spans)

    def highlighted_text(self) -> str:
        """Plain text under the current highlight, one line per row."""
        parts: list[str] = []
        for idx in sorted(self._spans):
            entry, frame = self._measure(idx)
            span = to_content_span(self._spans[idx], frame.insets, entry.height)
            if span is not None:
                parts.append(extract_text(entry.content, *span))
        return "\n".join(parts)

    def _update_spans(self) -> None:
        rng = self._mouse.range()
        spans: dict[int, Span] = {}
        if rng is not None and not rng.empty:
            for idx in range(rng.start_item, rng.end_item + 1):
                span = rng.span_for(idx, self._item_height(idx))
                if span is not None:
                    spans[idx] = span
        for idx in set(self._spans) | set(spans):
            if self._spans.get(idx) != spans.get(idx):
                self._cache.invalidate_styling(idx)
        self._spans = spans
        if rng is not None:
            logger.debug("Highlight %s over %d items", tuple(rng), len(spans))

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    def set_items(self, items: Iterable[Item]) -> None:
        """Replace all items and reset scroll, selection and highlight."""
        self._items = list(items)
        self._cache.clear()
        self._offset_idx = 0
        self._offset_line = 0
        self._selected = -1
        self._spans = {}
        self._mouse.reset()

    def clear(self) -> None:
        self.set_items([])

    def append_items(self, *items: Item) -> None:
        self._items.extend(items)

    def prepend_items(self, *items: Item) -> None:
        k = len(items)
        if k == 0:
            return
        was_empty = not self._items
        self._items[:0] = items
        self._cache.shift(k)
        if not was_empty:
            self._offset_idx += k
        if self._selected >= 0:
            self._selected += k
        self._mouse.shift(k)
        self._spans = {idx + k: span for idx, span in self._spans.items()}

    def update_item(self, idx: int, item: Item) -> None:
        if not 0 <= idx < len(self._items):
            raise IndexError(f"item index {idx} out of range")
        self._items[idx] = item
        self._cache.invalidate(idx)
        if idx == self._offset_idx:
            self._offset_line = min(self._offset_line, self._item_height(idx))
        if idx in self._spans:
            self._update_spans()

    def remove_item(self, idx: int) -> None:
        if not 0 <= idx < len(self._items):
            raise IndexError(f"item index {idx} out of range")
        for span_idx in self._spans:
            self._cache.invalidate_styling(span_idx)
        del self._items[idx]
        self._cache.remove(idx)
        self._mouse.remove(idx)
        self._spans = {}
        self._update_spans()

        n = len(self._items)
        if self._selected > idx:
            self._selected -= 1
        elif self._selected == idx:
            self._selected = min(idx, n - 1)
            self._cache.invalidate_styling(self._selected)

        if n == 0:
            self._offset_idx, self._offset_line = 0, 0
            return
        if self._offset_idx > idx:
            self._offset_idx -= 1
        elif self._offset_idx == idx:
            self._offset_line = 0
        if self._offset_idx >= n:
            self._offset_idx = n - 1
            self._offset_line = 0

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self) -> str:
        """Visible lines, at most `height` of them, joined with newlines."""
        if not self._items:
            return ""
        lines: list[str] = []
        skip = self._offset_line
        idx = self._offset_idx
        while len(lines) < self._height and idx < len(self._items):
            styled, h = self._styled(idx)
            if skip < h:
                lines.extend(styled.split("\n")[skip:])
                lines.extend([""] * self._gap)
            else:
                lines.extend([""] * max(0, self._gap - (skip - h)))
            idx += 1
            skip = 0
        return "\n".join(lines[: self._height])

    # ------------------------------------------------------------------
    # Invariants
    # ------------------------------------------------------------------

    def check_invariants(self) -> None:
        """Raise AssertionError if scroll or selection state is inconsistent."""
        n = len(self._items)
        if n == 0:
            if self.offset != (0, 0):
                raise AssertionError(f"empty list with offset {self.offset}")
        else:
            if not 0 <= self._offset_idx < n:
                raise AssertionError(f"offset_idx {self._offset_idx} outside [0, {n})")
            h = self._item_height(self._offset_idx)
            if not 0 <= self._offset_line <= h:
                raise AssertionError(f"offset_line {self._offset_line} outside [0, {h}] for item {self._offset_idx}")
        if not -1 <= self._selected < n:
            raise AssertionError(f"selected index {self._selected} outside [-1, {n})")
