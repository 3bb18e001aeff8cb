"""
SGR (mode 1006) mouse report decoding.

Reports look like ESC [ < btn ; col ; row (M|m). M is a press (or motion),
m a release. Columns and rows are 1-based on the wire and 0-based here.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

# Button events, drag motion, SGR encoding
MOUSE_TRACKING_ON = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
MOUSE_TRACKING_OFF = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"

MouseKind = Literal["press", "release", "drag", "move", "wheel_up", "wheel_down", "wheel_left", "wheel_right"]

_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

_SHIFT_BIT = 0b0000_0100
_ALT_BIT = 0b0000_1000
_CTRL_BIT = 0b0001_0000
_MOTION_BIT = 0b0010_0000
_WHEEL_BIT = 0b0100_0000

_WHEEL_KINDS: tuple[MouseKind, ...] = ("wheel_up", "wheel_down", "wheel_left", "wheel_right")


@dataclass(frozen=True)
class MouseEvent:
    kind: MouseKind
    x: int
    y: int
    button: int = 0
    shift: bool = False
    alt: bool = False
    ctrl: bool = False

    @property
    def is_wheel(self) -> bool:
        return self.kind.startswith("wheel")


def is_mouse_event(data: str) -> bool:
    return data.startswith("\x1b[<")


def parse_mouse_event(data: str) -> MouseEvent | None:
    """Decode one SGR mouse report; None if data is not one."""
    m = _SGR_MOUSE_RE.match(data)
    if not m:
        return None
    btn = int(m.group(1))
    x = max(0, int(m.group(2)) - 1)
    y = max(0, int(m.group(3)) - 1)
    pressed = m.group(4) == "M"

    button = btn & 0b11
    mods = {
        "shift": bool(btn & _SHIFT_BIT),
        "alt": bool(btn & _ALT_BIT),
        "ctrl": bool(btn & _CTRL_BIT),
    }

    kind: MouseKind
    if btn & _WHEEL_BIT:
        kind = _WHEEL_KINDS[button]
    elif btn & _MOTION_BIT:
        # Button code 3 during motion means no button is held
        kind = "move" if button == 3 else "drag"
    elif pressed:
        kind = "press"
    else:
        kind = "release"
    return MouseEvent(kind, x, y, button, **mods)
