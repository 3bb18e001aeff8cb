"""Ready-made list items."""
from __future__ import annotations

from rich.style import Style

from ..utils import wrap_text_with_ansi
from .frame import ROUNDED_BORDER, FrameStyle, Spacing
from .highlight import DEFAULT_HIGHLIGHTER, Highlighter, style_highlighter


class StringItem:
    """
    Word-wrapped ANSI text.

    Renders to an empty string (zero lines) when the text is empty. The
    wrapped result is cached per width.
    """

    def __init__(self, text: str = "", padding_x: int = 0) -> None:
        self._text = text
        self._padding_x = padding_x
        self._cache_width: int | None = None
        self._cache_text: str | None = None

    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        self._text = text
        self._cache_text = None

    def invalidate(self) -> None:
        self._cache_width = None
        self._cache_text = None

    def render(self, width: int) -> str:
        if self._cache_text is not None and self._cache_width == width:
            return self._cache_text

        if not self._text:
            result = ""
        else:
            normalized = self._text.replace("\t", "   ")
            content_width = max(1, width - self._padding_x * 2)
            margin = " " * self._padding_x
            result = "\n".join(margin + ln for ln in wrap_text_with_ansi(normalized, content_width))

        self._cache_width = width
        self._cache_text = result
        return result

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._text!r})"


class MessageItem(StringItem):
    """A StringItem drawn in a box whose border reflects focus."""

    def __init__(
        self,
        text: str = "",
        padding_x: int = 0,
        focus_frame: FrameStyle | None = None,
        blur_frame: FrameStyle | None = None,
        highlight: Style | None = None,
    ) -> None:
        super().__init__(text, padding_x)
        self._focus_frame = focus_frame or FrameStyle(
            border=ROUNDED_BORDER,
            border_style=Style(color="cyan", bold=True),
            padding=Spacing.of(0, 1),
        )
        self._blur_frame = blur_frame or FrameStyle(
            border=ROUNDED_BORDER,
            border_style=Style(dim=True),
            padding=Spacing.of(0, 1),
        )
        self._highlighter = style_highlighter(highlight) if highlight is not None else DEFAULT_HIGHLIGHTER

    def focus_style(self) -> FrameStyle:
        return self._focus_frame

    def blur_style(self) -> FrameStyle:
        return self._blur_frame

    def highlight_style(self) -> Highlighter:
        return self._highlighter


class SpacerItem:
    """Blank block of a fixed number of lines."""

    def __init__(self, lines: int = 1) -> None:
        self._lines = max(0, lines)

    def render(self, width: int) -> str:
        # A lone "" would measure as zero lines
        return "\n".join([" "] * self._lines)
