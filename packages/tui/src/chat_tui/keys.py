"""
Navigation key matching for the transcript view.

Recognizes legacy xterm/VT sequences and the Kitty keyboard protocol
(CSI u and modified CSI forms) for the keys a list view needs.
See: https://sw.kovidgoyal.net/kitty/keyboard-protocol/

API:
- matches_key(data, key_id): check if raw input matches a key identifier
- parse_key(data): key identifier for raw input, or None
"""
from __future__ import annotations

import re

KeyId = str

_MOD_SHIFT = 1
_MOD_ALT = 2
_MOD_CTRL = 4
_LOCK_MASK = 64 + 128

_CP_ESCAPE = 27
_CP_TAB = 9
_CP_ENTER = 13
_CP_SPACE = 32
_CP_KP_ENTER = 57414

# Negative codepoints stand for functional keys without a Unicode value
_CP_UP = -1
_CP_DOWN = -2
_CP_RIGHT = -3
_CP_LEFT = -4
_CP_PAGE_UP = -12
_CP_PAGE_DOWN = -13
_CP_HOME = -14
_CP_END = -15

_NAV_KEYS: dict[str, int] = {
    "up": _CP_UP,
    "down": _CP_DOWN,
    "right": _CP_RIGHT,
    "left": _CP_LEFT,
    "pageup": _CP_PAGE_UP,
    "pagedown": _CP_PAGE_DOWN,
    "home": _CP_HOME,
    "end": _CP_END,
}

_LEGACY_KEY_SEQS: dict[str, list[str]] = {
    "up":       ["\x1b[A", "\x1bOA"],
    "down":     ["\x1b[B", "\x1bOB"],
    "right":    ["\x1b[C", "\x1bOC"],
    "left":     ["\x1b[D", "\x1bOD"],
    "home":     ["\x1b[H", "\x1bOH", "\x1b[1~", "\x1b[7~"],
    "end":      ["\x1b[F", "\x1bOF", "\x1b[4~", "\x1b[8~"],
    "pageup":   ["\x1b[5~", "\x1b[[5~"],
    "pagedown": ["\x1b[6~", "\x1b[[6~"],
}

# rxvt-style modified sequences
_LEGACY_SHIFT_SEQS: dict[str, list[str]] = {
    "up":       ["\x1b[a"],
    "down":     ["\x1b[b"],
    "right":    ["\x1b[c"],
    "left":     ["\x1b[d"],
    "pageup":   ["\x1b[5$"],
    "pagedown": ["\x1b[6$"],
    "home":     ["\x1b[7$"],
    "end":      ["\x1b[8$"],
}

_LEGACY_CTRL_SEQS: dict[str, list[str]] = {
    "up":       ["\x1bOa"],
    "down":     ["\x1bOb"],
    "right":    ["\x1bOc"],
    "left":     ["\x1bOd"],
    "pageup":   ["\x1b[5^"],
    "pagedown": ["\x1b[6^"],
    "home":     ["\x1b[7^"],
    "end":      ["\x1b[8^"],
}

_CANONICAL_NAMES = {"pageup": "pageUp", "pagedown": "pageDown"}

# ─────────────────────────────────────────────────────────────────────────────
# Kitty / modified CSI parsing
# ─────────────────────────────────────────────────────────────────────────────

_CSI_U_RE = re.compile(r"^\x1b\[(\d+)(?::(\d*))?(?::(\d+))?(?:;(\d+))?(?::(\d+))?u$")
_ARROW_MOD_RE = re.compile(r"^\x1b\[1;(\d+)(?::(\d+))?([ABCDHF])$")
_FUNC_MOD_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?(?::(\d+))?~$")

_FINAL_CODEPOINTS: dict[str, int] = {
    "A": _CP_UP, "B": _CP_DOWN, "C": _CP_RIGHT, "D": _CP_LEFT,
    "H": _CP_HOME, "F": _CP_END,
}
_FUNC_CODEPOINTS: dict[int, int] = {
    1: _CP_HOME, 7: _CP_HOME, 4: _CP_END, 8: _CP_END,
    5: _CP_PAGE_UP, 6: _CP_PAGE_DOWN,
}


def _parse_kitty(data: str) -> tuple[int, int, bool] | None:
    """Return (codepoint, modifier, is_release) or None."""
    m = _CSI_U_RE.match(data)
    if m:
        mod_val = int(m.group(4)) if m.group(4) else 1
        return int(m.group(1)), mod_val - 1, m.group(5) == "3"

    m = _ARROW_MOD_RE.match(data)
    if m:
        return _FINAL_CODEPOINTS[m.group(3)], int(m.group(1)) - 1, m.group(2) == "3"

    m = _FUNC_MOD_RE.match(data)
    if m:
        cp = _FUNC_CODEPOINTS.get(int(m.group(1)))
        if cp is not None:
            mod_val = int(m.group(2)) if m.group(2) else 1
            return cp, mod_val - 1, m.group(3) == "3"

    return None


def _matches_kitty(data: str, expected_cp: int, expected_mod: int) -> bool:
    parsed = _parse_kitty(data)
    if not parsed:
        return False
    cp, mod, release = parsed
    if release:
        return False
    return cp == expected_cp and (mod & ~_LOCK_MASK) == (expected_mod & ~_LOCK_MASK)


def _parse_key_id(key_id: str) -> tuple[str, int] | None:
    """Return (key, modifier mask) or None."""
    parts = key_id.lower().split("+")
    key = parts[-1] if parts else ""
    if not key:
        return None
    modifier = 0
    if "shift" in parts[:-1]:
        modifier |= _MOD_SHIFT
    if "alt" in parts[:-1]:
        modifier |= _MOD_ALT
    if "ctrl" in parts[:-1]:
        modifier |= _MOD_CTRL
    return key, modifier


def _matches_legacy_modifier(data: str, key_name: str, modifier: int) -> bool:
    if modifier == _MOD_SHIFT:
        return data in _LEGACY_SHIFT_SEQS.get(key_name, [])
    if modifier == _MOD_CTRL:
        return data in _LEGACY_CTRL_SEQS.get(key_name, [])
    return False


# ─────────────────────────────────────────────────────────────────────────────
# matches_key
# ─────────────────────────────────────────────────────────────────────────────

def matches_key(data: str, key_id: KeyId) -> bool:
    """Check if *data* (raw terminal input) matches the given key identifier."""
    parsed = _parse_key_id(key_id)
    if not parsed:
        return False
    key, modifier = parsed

    if key in ("escape", "esc"):
        if modifier != 0:
            return False
        return data == "\x1b" or _matches_kitty(data, _CP_ESCAPE, 0)

    if key in ("enter", "return"):
        if modifier == 0:
            return data in ("\r", "\n", "\x1bOM") or _matches_kitty(data, _CP_ENTER, 0) or _matches_kitty(data, _CP_KP_ENTER, 0)
        return _matches_kitty(data, _CP_ENTER, modifier)

    if key == "tab":
        if modifier == _MOD_SHIFT:
            return data == "\x1b[Z" or _matches_kitty(data, _CP_TAB, _MOD_SHIFT)
        if modifier == 0:
            return data == "\t" or _matches_kitty(data, _CP_TAB, 0)
        return _matches_kitty(data, _CP_TAB, modifier)

    if key == "space":
        if modifier == 0:
            return data == " " or _matches_kitty(data, _CP_SPACE, 0)
        return _matches_kitty(data, _CP_SPACE, modifier)

    if key in _NAV_KEYS:
        cp = _NAV_KEYS[key]
        if modifier == 0:
            return data in _LEGACY_KEY_SEQS[key] or _matches_kitty(data, cp, 0)
        if _matches_legacy_modifier(data, key, modifier):
            return True
        return _matches_kitty(data, cp, modifier)

    if len(key) == 1 and "a" <= key <= "z":
        codepoint = ord(key)
        if modifier == _MOD_CTRL:
            return data == chr(codepoint & 0x1F) or _matches_kitty(data, codepoint, _MOD_CTRL)
        if modifier == _MOD_SHIFT:
            return data == key.upper() or _matches_kitty(data, codepoint, _MOD_SHIFT)
        if modifier == _MOD_ALT and data == f"\x1b{key}":
            return True
        if modifier != 0:
            return _matches_kitty(data, codepoint, modifier)
        return data == key or _matches_kitty(data, codepoint, 0)

    if len(key) == 1 and modifier == 0:
        return data == key or _matches_kitty(data, ord(key), 0)

    return False


# ─────────────────────────────────────────────────────────────────────────────
# parse_key
# ─────────────────────────────────────────────────────────────────────────────

_CP_NAMES: dict[int, str] = {
    _CP_ESCAPE: "escape",
    _CP_TAB: "tab",
    _CP_ENTER: "enter",
    _CP_KP_ENTER: "enter",
    _CP_SPACE: "space",
    **{cp: _CANONICAL_NAMES.get(name, name) for name, cp in _NAV_KEYS.items()},
}


def parse_key(data: str) -> str | None:
    """Parse raw terminal input into a key identifier string, or None."""
    kitty = _parse_kitty(data)
    if kitty:
        cp, mod, _release = kitty
        mod &= ~_LOCK_MASK
        mods = [name for bit, name in ((_MOD_SHIFT, "shift"), (_MOD_CTRL, "ctrl"), (_MOD_ALT, "alt")) if mod & bit]
        name = _CP_NAMES.get(cp)
        if name is None and 32 < cp < 127:
            name = chr(cp)
        if name:
            return "+".join(mods + [name])

    for key, seqs in _LEGACY_KEY_SEQS.items():
        if data in seqs:
            return _CANONICAL_NAMES.get(key, key)
    for prefix, table in (("shift", _LEGACY_SHIFT_SEQS), ("ctrl", _LEGACY_CTRL_SEQS)):
        for key, seqs in table.items():
            if data in seqs:
                return f"{prefix}+{_CANONICAL_NAMES.get(key, key)}"

    if data == "\x1b":
        return "escape"
    if data in ("\r", "\n", "\x1bOM"):
        return "enter"
    if data == "\t":
        return "tab"
    if data == "\x1b[Z":
        return "shift+tab"
    if data == " ":
        return "space"
    if len(data) == 2 and data[0] == "\x1b" and "a" <= data[1] <= "z":
        return f"alt+{data[1]}"
    if len(data) == 1:
        code = ord(data)
        if 1 <= code <= 26:
            return f"ctrl+{chr(code + 96)}"
        if "A" <= data <= "Z":
            return f"shift+{data.lower()}"
        if 32 < code < 127:
            return data
    return None
