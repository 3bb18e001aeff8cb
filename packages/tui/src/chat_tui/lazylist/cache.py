"""
Render cache keyed by item index.

An entry holds the raw rendering of one item at one width plus an optional
styled layer (highlight and frame applied). The styled layer can be dropped
on its own when only selection or highlight changed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


def count_lines(content: str) -> int:
    """Number of lines in content; the empty string has none."""
    if content == "":
        return 0
    return content.count("\n") + 1


@dataclass
class RenderedEntry:
    content: str
    height: int
    width: int
    styled: str | None = None
    styled_height: int = 0

    @classmethod
    def of(cls, content: str, width: int) -> "RenderedEntry":
        return cls(content=content, height=count_lines(content), width=width)


class RenderCache:
    def __init__(self) -> None:
        self._entries: dict[int, RenderedEntry] = {}

    def get(self, idx: int) -> RenderedEntry | None:
        return self._entries.get(idx)

    def put(self, idx: int, entry: RenderedEntry) -> None:
        self._entries[idx] = entry

    def invalidate(self, idx: int) -> None:
        self._entries.pop(idx, None)

    def invalidate_styling(self, idx: int) -> None:
        entry = self._entries.get(idx)
        if entry is not None:
            entry.styled = None
            entry.styled_height = 0

    def clear(self) -> None:
        self._entries.clear()

    def shift(self, k: int) -> None:
        """Move every key up by k (items were prepended)."""
        if k == 0:
            return
        self._entries = {idx + k: entry for idx, entry in self._entries.items()}

    def remove(self, idx: int) -> None:
        """Drop idx; keys above it move down by one."""
        self._entries = {
            (i - 1 if i > idx else i): entry
            for i, entry in self._entries.items()
            if i != idx
        }

    def items(self) -> Iterator[tuple[int, RenderedEntry]]:
        return iter(sorted(self._entries.items()))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, idx: object) -> bool:
        return idx in self._entries
