"""Tests for chat_tui.lazylist.highlight"""
from rich.style import Style

from chat_tui.lazylist.cellbuf import Rect
from chat_tui.lazylist.highlight import (
    DEFAULT_HIGHLIGHTER,
    END_OF_LINE,
    extract_text,
    highlight,
    style_highlighter,
)
from chat_tui.utils import strip_ansi

REV = "\x1b[7m"
RESET = "\x1b[0m"


class TestHighlighters:
    def test_default_adds_reverse(self):
        assert DEFAULT_HIGHLIGHTER(Style.null()) == Style(reverse=True)

    def test_style_highlighter_layers(self):
        hl = style_highlighter(Style(bgcolor="red"))
        result = hl(Style(bold=True))
        assert result.bold
        assert result.bgcolor is not None


class TestHighlight:
    def test_trailing_padding_not_highlighted(self):
        content = "0123456789" + " " * 30
        out = highlight(content, None, 0, 0, 0, END_OF_LINE)
        assert out == f"{REV}0123456789{RESET}"

    def test_partial_row(self):
        assert highlight("hello world", None, 0, 0, 0, 5) == f"{REV}hello{RESET} world"

    def test_end_column_exclusive(self):
        assert highlight("abcdef", None, 0, 2, 0, 4) == f"ab{REV}cd{RESET}ef"

    def test_multi_row(self):
        out = highlight("abc\ndef", None, 0, 1, 1, 2)
        assert out.split("\n") == [f"a{REV}bc{RESET}", f"{REV}de{RESET}f"]

    def test_middle_rows_fully_highlighted(self):
        out = highlight("ab\ncd\nef", None, 0, 1, 2, 1)
        assert out.split("\n") == [f"a{REV}b{RESET}", f"{REV}cd{RESET}", f"{REV}e{RESET}f"]

    def test_blank_row_gets_nothing(self):
        out = highlight("ab\n   \ncd", None, 0, 0, 2, END_OF_LINE)
        assert out.split("\n") == [f"{REV}ab{RESET}", "", f"{REV}cd{RESET}"]

    def test_span_shrinks_to_last_visible_cell(self):
        # Selection ends in the gap between words
        assert highlight("ab   cd", None, 0, 0, 0, 4) == f"{REV}ab{RESET}   cd"

    def test_degenerate_range_is_inert(self):
        assert highlight("hello", None, 0, 2, 0, 2) == "hello"

    def test_negative_start_unchanged(self):
        assert highlight("hello", None, -1, 0, 0, 3) == "hello"
        assert highlight("hello", None, 0, -1, 0, 3) == "hello"

    def test_reversed_range_unchanged(self):
        assert highlight("hello", None, 0, 4, 0, 1) == "hello"

    def test_empty_content(self):
        assert highlight("", None, 0, 0, 0, END_OF_LINE) == ""

    def test_custom_highlighter(self):
        out = highlight("hello", None, 0, 0, 0, END_OF_LINE, highlighter=style_highlighter(Style(bgcolor="red")))
        assert "\x1b[41m" in out
        assert strip_ansi(out) == "hello"

    def test_existing_style_preserved(self):
        out = highlight("\x1b[31mhi\x1b[0m", None, 0, 0, 0, END_OF_LINE)
        assert "\x1b[7;31m" in out

    def test_wide_glyph_painted_whole(self):
        out = highlight("中文ab", None, 0, 0, 0, 2)
        assert out == f"{REV}中{RESET}文ab"

    def test_area_limits_painted_cells(self):
        out = highlight("abcdef", Rect(2, 0, 2, 1), 0, 0, 0, END_OF_LINE)
        assert out == f"ab{REV}cd{RESET}ef"

    def test_rows_past_content_ignored(self):
        out = highlight("ab", None, 0, 0, 5, END_OF_LINE)
        assert out == f"{REV}ab{RESET}"


class TestExtractText:
    def test_single_row(self):
        assert extract_text("hello world", 0, 6, 0, END_OF_LINE) == "world"

    def test_multi_row(self):
        assert extract_text("hello world\nfoo", 0, 6, 1, END_OF_LINE) == "world\nfoo"

    def test_trailing_blanks_trimmed(self):
        assert extract_text("ab    \ncd", 0, 0, 1, 1) == "ab\nc"

    def test_wide_chars(self):
        assert extract_text("中文ab", 0, 0, 0, END_OF_LINE) == "中文ab"

    def test_inert_range(self):
        assert extract_text("abc", 0, 1, 0, 1) == ""
