"""
ChatView: host component around a LazyList.

Sizes the list from the render width and a fixed viewport height, routes
keys through the list keybindings and SGR mouse reports through the list's
mouse controller, keeps following new output while the view is at the
bottom, and copies highlighted text to the clipboard.
"""
from __future__ import annotations

import logging
from typing import Callable

from .clipboard import copy_to_clipboard
from .config import ListSettings
from .keybindings import ListKeybindingsManager, get_list_keybindings
from .lazylist import Item, LazyList
from .mouse import MouseEvent, is_mouse_event, parse_mouse_event

logger = logging.getLogger(__name__)


class ChatView:
    """Scrollable, selectable transcript of chat items."""

    def __init__(
        self,
        height: int,
        settings: ListSettings | None = None,
        keybindings: ListKeybindingsManager | None = None,
        copy: Callable[[str], None] | None = None,
    ) -> None:
        self._settings = settings or ListSettings()
        self._height = max(0, height)
        self._list = LazyList(height=self._height, gap=self._settings.gap)
        self._keybindings = keybindings
        if keybindings is None and self._settings.keybindings:
            self._keybindings = ListKeybindingsManager(self._settings.keybindings)
        self._copy = copy or copy_to_clipboard
        self._origin_x = 0
        self._origin_y = 0
        self._focused = False
        self._following = self._settings.follow_output

        self.on_copy: Callable[[str], None] | None = None
        self.on_selection_change: Callable[[int], None] | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def list(self) -> LazyList:
        return self._list

    @property
    def focused(self) -> bool:
        return self._focused

    @focused.setter
    def focused(self, value: bool) -> None:
        self._focused = value
        if value:
            self._list.focus()
        else:
            self._list.blur()

    def set_height(self, height: int) -> None:
        self._height = max(0, height)
        self._list.set_size(self._list.width, self._height)

    def set_origin(self, x: int, y: int) -> None:
        """Screen cell of the viewport's top-left corner, for mouse reports."""
        self._origin_x = x
        self._origin_y = y

    # ------------------------------------------------------------------
    # Content
    # ------------------------------------------------------------------

    @property
    def following(self) -> bool:
        """True while new output keeps the view pinned to the bottom."""
        return self._following

    def _sync_follow(self) -> None:
        self._following = self._settings.follow_output and self._list.at_bottom()

    def append(self, *items: Item) -> None:
        self._list.append_items(*items)
        if self._following:
            self._list.scroll_to_bottom()

    def prepend(self, *items: Item) -> None:
        self._list.prepend_items(*items)

    def clear(self) -> None:
        self._list.clear()
        self._following = self._settings.follow_output

    def copy_selection(self) -> str:
        """Copy the highlighted text; returns what was copied ("" if nothing)."""
        text = self._list.highlighted_text()
        if not text:
            return ""
        self._copy(text)
        if self.on_copy:
            self.on_copy(text)
        return text

    # ------------------------------------------------------------------
    # Component
    # ------------------------------------------------------------------

    def invalidate(self) -> None:
        self._list.invalidate()

    def render(self, width: int) -> list[str]:
        self._list.set_size(width, self._height)
        if self._following:
            self._list.scroll_to_bottom()
        out = self._list.render()
        lines = out.split("\n") if out else []
        lines.extend([""] * (self._height - len(lines)))
        return lines

    def handle_input(self, data: str) -> None:
        if is_mouse_event(data):
            event = parse_mouse_event(data)
            if event is not None and self._settings.mouse_enabled:
                self.handle_mouse(event)
            return

        kb = self._keybindings or get_list_keybindings()
        action = kb.action_for(data)
        if action is None:
            return
        handler = self._actions().get(action)
        if handler is not None:
            handler()
            self._sync_follow()

    def _actions(self) -> dict[str, Callable[[], None]]:
        lst = self._list
        page = max(1, self._height - self._settings.page_overlap)
        half = max(1, self._height // 2)
        return {
            "selectPrev": lambda: self._move_selection(lst.select_prev, lst.select_last_in_view),
            "selectNext": lambda: self._move_selection(lst.select_next, lst.select_first_in_view),
            "selectFirst": lambda: self._move_selection(lst.select_first, lst.select_first),
            "selectLast": lambda: self._move_selection(lst.select_last, lst.select_last),
            "scrollUp": lambda: lst.scroll_by(-1),
            "scrollDown": lambda: lst.scroll_by(1),
            "pageUp": lambda: lst.scroll_by(-page),
            "pageDown": lambda: lst.scroll_by(page),
            "halfPageUp": lambda: lst.scroll_by(-half),
            "halfPageDown": lambda: lst.scroll_by(half),
            "scrollTop": lst.scroll_to_top,
            "scrollBottom": lst.scroll_to_bottom,
            "copy": self.copy_selection,
            "clearSelection": lst.clear_highlight,
        }

    def _move_selection(self, step: Callable[[], None], initial: Callable[[], None]) -> None:
        before = self._list.selected_index
        if before < 0:
            initial()
        else:
            step()
        self._list.scroll_to_selected()
        after = self._list.selected_index
        if after != before and self.on_selection_change:
            self.on_selection_change(after)

    def handle_mouse(self, event: MouseEvent) -> bool:
        """Route a decoded mouse event to the list; True if it was consumed."""
        x = event.x - self._origin_x
        y = event.y - self._origin_y
        lst = self._list

        if event.kind == "wheel_up":
            lst.scroll_by(-self._settings.wheel_lines)
            self._sync_follow()
            return True
        if event.kind == "wheel_down":
            lst.scroll_by(self._settings.wheel_lines)
            self._sync_follow()
            return True
        if event.button != 0:
            return False

        if event.kind == "press":
            before = lst.selected_index
            lst.clear_highlight()
            handled = lst.handle_mouse_down(x, y)
            if handled and lst.selected_index != before and self.on_selection_change:
                self.on_selection_change(lst.selected_index)
            return handled
        if event.kind == "drag":
            # Dragging past an edge scrolls the transcript
            if y < 0:
                lst.scroll_by(-1)
                y = 0
            elif y >= self._height:
                lst.scroll_by(1)
                y = self._height - 1
            handled = lst.handle_mouse_drag(x, y)
            self._sync_follow()
            return handled
        if event.kind == "release":
            handled = lst.handle_mouse_up(x, y)
            if handled and self._settings.copy_on_select and lst.has_highlight():
                copied = self.copy_selection()
                logger.debug("Copied %d characters on mouse release", len(copied))
            return handled
        return False
