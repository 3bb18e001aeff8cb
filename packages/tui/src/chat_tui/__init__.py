"""
chat_tui: virtualized, mouse-selectable transcript list for terminal chat clients.
"""
from .chat_view import ChatView
from .clipboard import copy_to_clipboard, osc52_sequence
from .config import ListSettings, SettingsLoader, get_config_dir, get_settings_path, load_settings
from .keybindings import (
    DEFAULT_LIST_KEYBINDINGS,
    LIST_ACTIONS,
    ListAction,
    ListKeybindingsManager,
    get_list_keybindings,
    set_list_keybindings,
)
from .keys import matches_key, parse_key
from .lazylist import (
    DEFAULT_HIGHLIGHTER,
    END_OF_LINE,
    NO_FRAME,
    NORMAL_BORDER,
    ROUNDED_BORDER,
    THICK_BORDER,
    Border,
    Cell,
    CellBuffer,
    FocusStylable,
    FrameStyle,
    HighlightRange,
    HighlightStylable,
    Highlighter,
    Item,
    LazyList,
    MessageItem,
    Rect,
    RenderCache,
    RenderedEntry,
    Spacing,
    SpacerItem,
    StringItem,
    adjust_area,
    extract_text,
    highlight,
    style_highlighter,
)
from .mouse import MOUSE_TRACKING_OFF, MOUSE_TRACKING_ON, MouseEvent, is_mouse_event, parse_mouse_event
from .utils import strip_ansi, visible_width, wrap_text_with_ansi

__all__ = [
    "ChatView",
    "copy_to_clipboard",
    "osc52_sequence",
    "ListSettings",
    "SettingsLoader",
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "DEFAULT_LIST_KEYBINDINGS",
    "LIST_ACTIONS",
    "ListAction",
    "ListKeybindingsManager",
    "get_list_keybindings",
    "set_list_keybindings",
    "matches_key",
    "parse_key",
    "DEFAULT_HIGHLIGHTER",
    "END_OF_LINE",
    "NO_FRAME",
    "NORMAL_BORDER",
    "ROUNDED_BORDER",
    "THICK_BORDER",
    "Border",
    "Cell",
    "CellBuffer",
    "FocusStylable",
    "FrameStyle",
    "HighlightRange",
    "HighlightStylable",
    "Highlighter",
    "Item",
    "LazyList",
    "MessageItem",
    "Rect",
    "RenderCache",
    "RenderedEntry",
    "Spacing",
    "SpacerItem",
    "StringItem",
    "adjust_area",
    "extract_text",
    "highlight",
    "style_highlighter",
    "MOUSE_TRACKING_OFF",
    "MOUSE_TRACKING_ON",
    "MouseEvent",
    "is_mouse_event",
    "parse_mouse_event",
    "strip_ansi",
    "visible_width",
    "wrap_text_with_ansi",
]
