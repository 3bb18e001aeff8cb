"""Virtualized, mouse-selectable list of variable-height items."""
from .cache import RenderCache, RenderedEntry, count_lines
from .cellbuf import Cell, CellBuffer, Rect
from .frame import (
    NO_FRAME,
    NORMAL_BORDER,
    ROUNDED_BORDER,
    THICK_BORDER,
    Border,
    FrameStyle,
    Spacing,
    adjust_area,
)
from .highlight import (
    DEFAULT_HIGHLIGHTER,
    END_OF_LINE,
    Highlighter,
    default_highlighter,
    extract_text,
    highlight,
    style_highlighter,
)
from .item import FocusStylable, HighlightStylable, Item, focus_stylable, highlight_stylable
from .items import MessageItem, SpacerItem, StringItem
from .list import LazyList
from .selection import HighlightRange, MouseSelection, Span, normalize, to_content_span

__all__ = [
    "RenderCache",
    "RenderedEntry",
    "count_lines",
    "Cell",
    "CellBuffer",
    "Rect",
    "NO_FRAME",
    "NORMAL_BORDER",
    "ROUNDED_BORDER",
    "THICK_BORDER",
    "Border",
    "FrameStyle",
    "Spacing",
    "adjust_area",
    "DEFAULT_HIGHLIGHTER",
    "END_OF_LINE",
    "Highlighter",
    "default_highlighter",
    "extract_text",
    "highlight",
    "style_highlighter",
    "FocusStylable",
    "HighlightStylable",
    "Item",
    "focus_stylable",
    "highlight_stylable",
    "MessageItem",
    "SpacerItem",
    "StringItem",
    "LazyList",
    "HighlightRange",
    "MouseSelection",
    "Span",
    "normalize",
    "to_content_span",
]
