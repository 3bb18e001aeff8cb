"""
Transcript list keybindings.

Provides the ListAction type, DEFAULT_LIST_KEYBINDINGS and the
ListKeybindingsManager class.
"""
from __future__ import annotations

from typing import Literal, get_args

from .keys import KeyId, matches_key

# ─────────────────────────────────────────────────────────────────────────────
# ListAction type
# ─────────────────────────────────────────────────────────────────────────────

ListAction = Literal[
    # Selection
    "selectPrev",
    "selectNext",
    "selectFirst",
    "selectLast",
    # Scrolling
    "scrollUp",
    "scrollDown",
    "pageUp",
    "pageDown",
    "halfPageUp",
    "halfPageDown",
    "scrollTop",
    "scrollBottom",
    # Clipboard / highlight
    "copy",
    "clearSelection",
]

LIST_ACTIONS: tuple[str, ...] = get_args(ListAction)

ListKeybindingsConfig = dict[str, "KeyId | list[KeyId]"]

DEFAULT_LIST_KEYBINDINGS: dict[str, list[KeyId]] = {
    "selectPrev":     ["up", "k"],
    "selectNext":     ["down", "j"],
    "selectFirst":    ["home", "g"],
    "selectLast":     ["end", "shift+g"],
    "scrollUp":       ["shift+up", "ctrl+y"],
    "scrollDown":     ["shift+down", "ctrl+e"],
    "pageUp":         ["pageUp", "ctrl+b"],
    "pageDown":       ["pageDown", "ctrl+f"],
    "halfPageUp":     ["ctrl+u"],
    "halfPageDown":   ["ctrl+d"],
    "scrollTop":      ["ctrl+home"],
    "scrollBottom":   ["ctrl+end"],
    "copy":           ["ctrl+c", "y"],
    "clearSelection": ["escape"],
}


class ListKeybindingsManager:
    """Maps raw input to list actions; user config overrides defaults per action."""

    def __init__(self, config: ListKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[str, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: ListKeybindingsConfig) -> None:
        self._action_to_keys.clear()
        for action, keys in DEFAULT_LIST_KEYBINDINGS.items():
            self._action_to_keys[action] = list(keys)
        for action, keys in config.items():
            if keys is None:
                continue
            self._action_to_keys[action] = keys if isinstance(keys, list) else [keys]

    def matches(self, data: str, action: str) -> bool:
        """Check if input data matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, k) for k in keys)

    def action_for(self, data: str) -> str | None:
        """First action whose keys match data."""
        for action in self._action_to_keys:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: str) -> list[KeyId]:
        return self._action_to_keys.get(action, [])

    def set_config(self, config: ListKeybindingsConfig) -> None:
        self._build_maps(config)


# ─────────────────────────────────────────────────────────────────────────────
# Global instance
# ─────────────────────────────────────────────────────────────────────────────

_global_list_keybindings: ListKeybindingsManager | None = None


def get_list_keybindings() -> ListKeybindingsManager:
    global _global_list_keybindings
    if _global_list_keybindings is None:
        _global_list_keybindings = ListKeybindingsManager()
    return _global_list_keybindings


def set_list_keybindings(manager: ListKeybindingsManager) -> None:
    global _global_list_keybindings
    _global_list_keybindings = manager
