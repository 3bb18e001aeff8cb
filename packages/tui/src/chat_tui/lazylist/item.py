"""
Item capabilities.

Every item renders itself at a given width. Items may additionally provide
focus/blur frame styles and a highlight style; the list discovers these at
runtime.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .frame import FrameStyle
    from .highlight import Highlighter


@runtime_checkable
class Item(Protocol):
    """Anything that can render itself as ANSI text lines joined by newlines."""

    def render(self, width: int) -> str:
        ...


@runtime_checkable
class FocusStylable(Protocol):
    def focus_style(self) -> FrameStyle:
        ...

    def blur_style(self) -> FrameStyle:
        ...


@runtime_checkable
class HighlightStylable(Protocol):
    def highlight_style(self) -> Highlighter:
        ...


def focus_stylable(item: object) -> FocusStylable | None:
    return item if isinstance(item, FocusStylable) else None


def highlight_stylable(item: object) -> HighlightStylable | None:
    return item if isinstance(item, HighlightStylable) else None
