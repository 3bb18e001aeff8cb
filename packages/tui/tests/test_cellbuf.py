"""Tests for chat_tui.lazylist.cellbuf and frame"""
import pytest
from rich.style import Style

from chat_tui.lazylist.cellbuf import CellBuffer, Rect
from chat_tui.lazylist.frame import (
    NO_FRAME,
    NORMAL_BORDER,
    ROUNDED_BORDER,
    FrameStyle,
    Spacing,
    adjust_area,
)
from chat_tui.utils import strip_ansi


class TestRect:
    def test_edges(self):
        r = Rect(1, 2, 3, 4)
        assert r.right == 4
        assert r.bottom == 6

    def test_contains_half_open(self):
        r = Rect(0, 0, 2, 2)
        assert r.contains(1, 1)
        assert not r.contains(2, 0)
        assert not r.contains(0, 2)

    def test_empty(self):
        assert Rect(0, 0, 0, 3).empty
        assert not Rect(0, 0, 1, 1).empty


class TestCellBuffer:
    def test_blank_buffer_renders_empty_lines(self):
        assert CellBuffer(4, 2).render() == "\n"

    def test_draw_plain(self):
        buf = CellBuffer(5, 1)
        buf.draw("ab")
        assert buf.render() == "ab"

    def test_draw_clips_to_width(self):
        buf = CellBuffer(3, 1)
        buf.draw("abcdef")
        assert buf.render() == "abc"

    def test_draw_clips_to_height(self):
        buf = CellBuffer(3, 1)
        buf.draw("a\nb")
        assert buf.render() == "a"

    def test_draw_into_area(self):
        buf = CellBuffer(5, 2)
        buf.draw("x", Rect(2, 1, 3, 1))
        assert buf.render() == "\n  x"

    def test_wide_char_uses_two_cells(self):
        buf = CellBuffer(4, 1)
        buf.draw("中x")
        assert buf.cell(0, 0).content == "中"
        assert buf.cell(0, 0).width == 2
        assert buf.cell(1, 0).content == ""
        assert buf.cell(2, 0).content == "x"
        assert buf.render() == "中x"

    def test_wide_char_not_split_at_edge(self):
        buf = CellBuffer(3, 1)
        buf.draw("a中文")
        assert buf.render() == "a中"

    def test_styles_round_trip(self):
        buf = CellBuffer(5, 1)
        buf.draw("\x1b[1mab\x1b[0mc")
        assert buf.cell(0, 0).style.bold
        assert not buf.cell(2, 0).style.bold
        assert buf.render() == "\x1b[1mab\x1b[0mc"

    def test_base_style_under_content(self):
        buf = CellBuffer(2, 1)
        buf.draw("a", base_style=Style(italic=True))
        assert buf.cell(0, 0).style.italic

    def test_fill_keeps_styled_trailing_cells(self):
        buf = CellBuffer(3, 1)
        buf.fill(Rect(0, 0, 3, 1), Style(reverse=True))
        assert buf.render() == "\x1b[7m   \x1b[0m"

    def test_cell_out_of_bounds(self):
        assert CellBuffer(1, 1).cell(5, 5) is None


class TestSpacing:
    def test_shorthand_all(self):
        assert Spacing.of(1) == Spacing(1, 1, 1, 1)

    def test_shorthand_pair(self):
        assert Spacing.of(0, 2) == Spacing(0, 2, 0, 2)

    def test_shorthand_four(self):
        assert Spacing.of(1, 2, 3, 4) == Spacing(1, 2, 3, 4)

    def test_bad_arity(self):
        with pytest.raises(ValueError):
            Spacing.of(1, 2, 3)

    def test_sizes(self):
        s = Spacing(1, 2, 3, 4)
        assert s.horizontal == 6
        assert s.vertical == 4


class TestFrameStyle:
    def test_no_frame_is_identity(self):
        assert NO_FRAME.is_empty
        assert NO_FRAME.render("abc\ndef", 10) == "abc\ndef"
        assert NO_FRAME.outer_height(3) == 3
        assert NO_FRAME.outer_height(0) == 0

    def test_border_sizes(self):
        f = FrameStyle(border=NORMAL_BORDER)
        assert f.horizontal_size == 2
        assert f.vertical_size == 2
        assert f.insets == (1, 1)

    def test_combined_sizes(self):
        f = FrameStyle(margin=Spacing(1, 0, 0, 2), padding=Spacing.of(0, 1), border=ROUNDED_BORDER)
        assert f.horizontal_size == 2 + 2 + 2
        assert f.vertical_size == 1 + 2
        assert f.insets == (2, 4)

    def test_outer_height_reserves_a_content_row(self):
        f = FrameStyle(border=NORMAL_BORDER)
        assert f.outer_height(0) == 3
        assert f.outer_height(2) == 4

    def test_horizontal_only_frame_keeps_height(self):
        f = FrameStyle(padding=Spacing.of(0, 1))
        assert f.outer_height(0) == 0
        assert f.outer_height(2) == 2

    def test_render_border(self):
        f = FrameStyle(border=NORMAL_BORDER)
        assert f.render("ab", 4) == "┌──┐\n│ab│\n└──┘"

    def test_render_padding(self):
        f = FrameStyle(padding=Spacing.of(0, 1))
        assert f.render("ab\ncd", 4) == " ab\n cd"

    def test_render_border_style(self):
        f = FrameStyle(border=NORMAL_BORDER, border_style=Style(bold=True))
        out = f.render("ab", 4)
        assert "\x1b[1m" in out
        assert [strip_ansi(ln) for ln in out.split("\n")] == ["┌──┐", "│ab│", "└──┘"]

    def test_render_empty_content_in_border(self):
        f = FrameStyle(border=NORMAL_BORDER)
        assert f.render("", 3).split("\n") == ["┌─┐", "│ │", "└─┘"]

    def test_border_drawn_inside_margin(self):
        f = FrameStyle(margin=Spacing(0, 0, 0, 1), border=ROUNDED_BORDER)
        assert f.render("a", 4).split("\n") == [" ╭─╮", " │a│", " ╰─╯"]


class TestAdjustArea:
    def test_shrinks_by_frame(self):
        f = FrameStyle(margin=Spacing.of(1), border=NORMAL_BORDER, padding=Spacing.of(0, 1))
        assert adjust_area(Rect(0, 0, 20, 10), f) == Rect(3, 2, 14, 6)

    def test_never_negative(self):
        f = FrameStyle(border=NORMAL_BORDER)
        assert adjust_area(Rect(0, 0, 1, 1), f) == Rect(1, 1, 0, 0)
