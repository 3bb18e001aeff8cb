"""
Terminal text utilities.

Provides:
- visible_width(): terminal column width of a string (ANSI-aware)
- grapheme_width() / segment_graphemes(): per-cluster measurement
- strip_ansi(): drop escape sequences
- styled_graphemes() / render_styled(): rich Text <-> styled cell runs
- wrap_text_with_ansi(): word-wrap preserving SGR styling across breaks
- pad_to_width(): right-pad a line with spaces
"""
from __future__ import annotations

import re
import unicodedata
from typing import Iterable, Iterator

from rich.ansi import AnsiDecoder
from rich.color import ColorSystem
from rich.style import Style
from rich.text import Text
from wcwidth import wcwidth

# ─────────────────────────────────────────────────────────────────────────────
# Width measurement
# ─────────────────────────────────────────────────────────────────────────────

_WIDTH_CACHE_SIZE = 512
_width_cache: dict[str, int] = {}

_ANSI_RE = re.compile(
    r"\x1b\[[0-9;:?<=>]*[A-Za-z~]"          # CSI
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"   # OSC
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"    # APC
)

_ZERO_WIDTH_CATEGORIES = ("Mn", "Me", "Cf", "Cc", "Cs")
_JOINERS = (0x200D, 0xFE0F, 0x20E3)


def strip_ansi(s: str) -> str:
    """Remove CSI, OSC and APC escape sequences."""
    if "\x1b" not in s:
        return s
    return _ANSI_RE.sub("", s)


def grapheme_width(segment: str) -> int:
    """Terminal width of a single grapheme cluster."""
    if not segment:
        return 0
    if all(unicodedata.category(c) in _ZERO_WIDTH_CATEGORIES for c in segment):
        return 0
    cp = ord(segment[0])
    # ZWJ sequences, flags and keycaps render as one wide glyph
    if len(segment) > 1 and (0x1F000 <= cp <= 0x1FBFF or "\u200d" in segment or "\ufe0f" in segment):
        return 2
    w = wcwidth(segment[0])
    return w if w > 0 else 0


def segment_graphemes(text: str) -> list[str]:
    """Group combining marks and joiners with their base character."""
    clusters: list[str] = []
    for ch in text:
        if clusters and (
            unicodedata.category(ch) in ("Mn", "Me", "Cf")
            or ord(ch) in _JOINERS
            or (clusters[-1].endswith("\u200d"))
        ):
            clusters[-1] += ch
        else:
            clusters.append(ch)
    return clusters


def visible_width(s: str) -> int:
    """Column width of a string. Tabs count as 3 columns, escapes as 0."""
    if not s:
        return 0
    if s.isascii() and s.isprintable():
        return len(s)

    cached = _width_cache.get(s)
    if cached is not None:
        return cached

    clean = strip_ansi(s.replace("\t", "   "))
    width = sum(grapheme_width(g) for g in segment_graphemes(clean))

    if len(_width_cache) >= _WIDTH_CACHE_SIZE:
        _width_cache.pop(next(iter(_width_cache)))
    _width_cache[s] = width
    return width


def pad_to_width(line: str, width: int) -> str:
    """Right-pad line with spaces up to width columns."""
    return line + " " * max(0, width - visible_width(line))


# ─────────────────────────────────────────────────────────────────────────────
# rich Text <-> styled cell runs
# ─────────────────────────────────────────────────────────────────────────────

def _as_style(style: str | Style) -> Style:
    if isinstance(style, Style):
        return style
    return Style.parse(style) if style else Style.null()


def styled_graphemes(text: Text) -> Iterator[tuple[str, Style]]:
    """Yield (grapheme, style) pairs for a rich Text, spans resolved."""
    plain = text.plain
    if not plain:
        return
    base = _as_style(text.style)
    styles = [base] * len(plain)
    for span in text.spans:
        span_style = _as_style(span.style)
        for i in range(span.start, min(span.end, len(plain))):
            styles[i] = styles[i] + span_style
    offset = 0
    for cluster in segment_graphemes(plain):
        yield cluster, styles[offset]
        offset += len(cluster)


def render_styled(cells: Iterable[tuple[str, Style]]) -> str:
    """Encode (text, style) runs as ANSI, merging adjacent equal styles."""
    out: list[str] = []
    run: list[str] = []
    run_style: Style | None = None
    for chunk, style in cells:
        if run and style != run_style:
            out.append(run_style.render("".join(run), color_system=ColorSystem.TRUECOLOR))  # type: ignore[union-attr]
            run = []
        run_style = style
        run.append(chunk)
    if run:
        out.append(run_style.render("".join(run), color_system=ColorSystem.TRUECOLOR))  # type: ignore[union-attr]
    return "".join(out)


def decode_lines(content: str) -> list[Text]:
    """Parse ANSI content into one rich Text per line, carrying SGR state across lines."""
    decoder = AnsiDecoder()
    return [decoder.decode_line(line) for line in content.split("\n")]


# ─────────────────────────────────────────────────────────────────────────────
# Word wrapping
# ─────────────────────────────────────────────────────────────────────────────

_TOKEN_RE = re.compile(r"\S+|\s+")


def _break_offsets(plain: str, width: int) -> list[int]:
    """Greedy word-wrap break offsets for a plain line."""
    offsets: list[int] = []
    col = 0
    for m in _TOKEN_RE.finditer(plain):
        token = m.group()
        token_w = visible_width(token)
        if token.isspace():
            if col + token_w > width and col > 0:
                # Whitespace at the wrap point is swallowed
                offsets.append(m.end())
                col = 0
            else:
                col += token_w
            continue
        if col + token_w <= width:
            col += token_w
            continue
        if col > 0:
            offsets.append(m.start())
            col = 0
        if token_w <= width:
            col = token_w
            continue
        # Word wider than the line: hard-break by graphemes
        pos = m.start()
        for cluster in segment_graphemes(token):
            gw = grapheme_width(cluster)
            if col + gw > width and col > 0:
                offsets.append(pos)
                col = 0
            col += gw
            pos += len(cluster)
    return [o for o in offsets if 0 < o < len(plain)]


def wrap_text_with_ansi(text: str, width: int) -> list[str]:
    """
    Wrap text to width columns.

    Styling active at a break is re-emitted at the start of the next line,
    and every output line is self-contained (ends with a reset when styled).
    """
    if not text:
        return [""]
    width = max(1, width)
    result: list[str] = []
    for line in decode_lines(text):
        if line.cell_len <= width:
            result.append(render_styled(styled_graphemes(line)))
            continue
        for piece in line.divide(_break_offsets(line.plain, width)):
            piece.rstrip()
            result.append(render_styled(styled_graphemes(piece)))
    return result or [""]
