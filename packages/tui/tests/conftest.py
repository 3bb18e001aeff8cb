"""Shared list fixtures for the lazylist tests."""
from __future__ import annotations

import pytest

from chat_tui.lazylist import DEFAULT_HIGHLIGHTER, LazyList


class LinesItem:
    """Item rendering a fixed number of short labelled lines; counts renders."""

    def __init__(self, height: int, label: str = "item") -> None:
        self.height = height
        self.label = label
        self.renders = 0

    def render(self, width: int) -> str:
        self.renders += 1
        return "\n".join(f"{self.label}:{j}" for j in range(self.height))

    def __repr__(self) -> str:
        return f"LinesItem({self.height}, {self.label!r})"


class HighlightLinesItem(LinesItem):
    """LinesItem that can be painted by a mouse drag."""

    def highlight_style(self):
        return DEFAULT_HIGHLIGHTER


@pytest.fixture
def lines_item() -> type[LinesItem]:
    return LinesItem


@pytest.fixture
def make_list():
    def _make(
        heights: list[int],
        height: int = 5,
        gap: int = 0,
        width: int = 20,
        highlightable: bool = False,
    ) -> LazyList:
        item_cls = HighlightLinesItem if highlightable else LinesItem
        items = [item_cls(h, f"i{k}") for k, h in enumerate(heights)]
        return LazyList(items, width=width, height=height, gap=gap)

    return _make


def lines_of(rendered: str) -> list[str]:
    return rendered.split("\n") if rendered else []


@pytest.fixture
def render_lines():
    return lambda lst: lines_of(lst.render())
