"""
Copy highlighted transcript text to the clipboard.

OSC 52 is always emitted (works over SSH/mosh); native clipboard tools are
tried afterwards as a best effort for local sessions.
"""
from __future__ import annotations

import base64
import logging
import os
import shutil
import subprocess
import sys
from typing import Callable

logger = logging.getLogger(__name__)

_NATIVE_TIMEOUT = 5


def osc52_sequence(text: str) -> str:
    """OSC 52 'set clipboard' sequence carrying text."""
    encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
    return f"\x1b]52;c;{encoded}\x07"


def _native_commands() -> list[list[str]]:
    if sys.platform == "darwin":
        return [["pbcopy"]]
    if sys.platform == "win32":
        return [["clip"]]
    cmds: list[list[str]] = []
    if os.environ.get("TERMUX_VERSION"):
        cmds.append(["termux-clipboard-set"])
    if os.environ.get("WAYLAND_DISPLAY"):
        cmds.append(["wl-copy"])
    cmds.append(["xclip", "-selection", "clipboard"])
    cmds.append(["xsel", "--clipboard", "--input"])
    return cmds


def _try_native_clipboard(text: str) -> bool:
    input_bytes = text.encode("utf-8")
    for cmd in _native_commands():
        if shutil.which(cmd[0]) is None:
            continue
        try:
            if cmd[0] == "wl-copy":
                # wl-copy stays alive serving the selection; don't wait on it
                proc = subprocess.Popen(
                    cmd,
                    stdin=subprocess.PIPE,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                if proc.stdin:
                    proc.stdin.write(input_bytes)
                    proc.stdin.close()
            else:
                subprocess.run(cmd, input=input_bytes, timeout=_NATIVE_TIMEOUT, check=True, capture_output=True)
            return True
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Clipboard tool %s failed: %s", cmd[0], e)
    return False


def copy_to_clipboard(
    text: str,
    write: Callable[[str], object] | None = None,
    native: bool = True,
) -> None:
    """
    Copy text to the clipboard.

    write receives the OSC 52 sequence (defaults to stdout). Native tools are
    skipped when native is False.
    """
    if not text:
        return
    seq = osc52_sequence(text)
    if write is None:
        sys.stdout.write(seq)
        sys.stdout.flush()
    else:
        write(seq)
    if native and not _try_native_clipboard(text):
        logger.debug("No native clipboard tool succeeded; relying on OSC 52")
