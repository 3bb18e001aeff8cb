"""Randomized checks of LazyList scroll and render invariants"""
import pytest

from chat_tui.lazylist import NO_FRAME, NORMAL_BORDER, FrameStyle, LazyList, MessageItem, StringItem, normalize


def remaining_lines(lst: LazyList) -> int:
    idx, line = lst.offset
    return sum(lst._item_height(i) + lst.gap for i in range(idx, len(lst))) - line


def content_lines(lst: LazyList) -> int:
    n = len(lst)
    return sum(lst._item_height(i) for i in range(n)) + lst.gap * max(0, n - 1)


def check_render(lst: LazyList) -> None:
    lst.check_invariants()
    out = lst.render()
    expected = min(lst.height, remaining_lines(lst)) if len(lst) else 0
    if expected == 0:
        assert out == ""
    else:
        assert out.count("\n") == expected - 1


def random_list(rng, lines_item) -> LazyList:
    items = [lines_item(rng.randint(0, 6), f"i{k}") for k in range(rng.randint(0, 12))]
    return LazyList(items, width=20, height=rng.randint(1, 8), gap=rng.randint(0, 2))


def random_item(rng, lines_item, label: str):
    """An item whose height is fixed, width-dependent, or also focus-dependent."""
    kind = rng.randrange(3)
    if kind == 0:
        return lines_item(rng.randint(0, 6), label)
    text = " ".join(f"{label}{k}" for k in range(rng.randint(0, 12)))
    if kind == 1:
        return StringItem(text)
    return MessageItem(text, focus_frame=FrameStyle(border=NORMAL_BORDER), blur_frame=NO_FRAME)


def run_random_ops(rng, lines_item, steps: int) -> None:
    lst = random_list(rng, lines_item)
    for _ in range(steps):
        op = rng.randrange(11)
        if op == 0:
            lst.scroll_by(rng.randint(-10, 10))
        elif op == 1:
            lst.scroll_to_bottom()
            assert lst.at_bottom()
        elif op == 2:
            lst.scroll_to_top()
            assert lst.at_top()
        elif op == 3:
            lst.append_items(random_item(rng, lines_item, "a"))
        elif op == 4:
            lst.prepend_items(random_item(rng, lines_item, "p"))
        elif op == 5 and len(lst):
            lst.remove_item(rng.randrange(len(lst)))
        elif op == 6 and len(lst):
            lst.update_item(rng.randrange(len(lst)), random_item(rng, lines_item, "u"))
        elif op == 7:
            lst.set_selected(rng.randint(-1, len(lst)))
            lst.scroll_to_selected()
        elif op == 8:
            lst.set_size(rng.randint(1, 30), rng.randint(1, 8))
        elif op == 9:
            lst.focus()
        elif op == 10:
            lst.blur()
        check_render(lst)


class TestScrollProperties:
    def test_render_line_count_matches_offset(self, rng, lines_item):
        for _ in range(200):
            lst = random_list(rng, lines_item)
            for _ in range(10):
                lst.scroll_by(rng.randint(-15, 15))
                check_render(lst)

    def test_large_scrolls_reach_the_ends(self, rng, lines_item):
        for _ in range(200):
            lst = random_list(rng, lines_item)
            lst.scroll_by(10_000)
            assert lst.at_bottom()
            lst.scroll_by(-10_000)
            assert lst.at_top()

    def test_bottom_fills_viewport(self, rng, lines_item):
        for _ in range(200):
            lst = random_list(rng, lines_item)
            lst.scroll_to_bottom()
            if content_lines(lst) >= lst.height:
                assert remaining_lines(lst) >= lst.height
            else:
                assert lst.offset == (0, 0)

    def test_visible_range_starts_at_offset(self, rng, lines_item):
        for _ in range(100):
            lst = random_list(rng, lines_item)
            if not len(lst):
                continue
            lst.scroll_by(rng.randint(0, 20))
            start, end = lst.find_visible_items()
            assert start == lst.offset[0]
            assert start <= end < len(lst)

    def test_scroll_to_selected_makes_it_visible(self, rng, lines_item):
        for _ in range(100):
            # Zero-height items occupy no row, so only visible heights here
            items = [lines_item(rng.randint(1, 6), f"i{k}") for k in range(rng.randint(1, 12))]
            lst = LazyList(items, width=20, height=rng.randint(1, 8), gap=rng.randint(0, 2))
            lst.set_selected(rng.randrange(len(lst)))
            lst.scroll_to_selected()
            assert lst.selected_item_in_view()


class TestMutationProperties:
    def test_random_operations_keep_invariants(self, rng, lines_item):
        for _ in range(50):
            run_random_ops(rng, lines_item, 40)

    @pytest.mark.stress
    def test_random_operations_stress(self, rng, lines_item):
        for _ in range(2000):
            run_random_ops(rng, lines_item, 200)


class TestNormalizeProperties:
    def test_order_independent(self, rng):
        for _ in range(500):
            a = (rng.randint(0, 3), rng.randint(0, 3), rng.randint(0, 5))
            b = (rng.randint(0, 3), rng.randint(0, 3), rng.randint(0, 5))
            rng_ab = normalize(a, b)
            assert rng_ab == normalize(b, a)
            assert tuple(rng_ab[:3]) <= tuple(rng_ab[3:])
