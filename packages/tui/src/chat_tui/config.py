"""
Settings for the transcript view.

Settings come from the "transcript" section of ~/.chat-tui/settings.json
(directory overridable with CHAT_TUI_CONFIG_DIR), then environment overrides.
Unreadable files and bad values are recorded and defaults are used.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

APP_NAME: str = "chat-tui"
CONFIG_DIR_NAME: str = ".chat-tui"
SETTINGS_SECTION: str = "transcript"

ENV_CONFIG_DIR: str = "CHAT_TUI_CONFIG_DIR"
ENV_GAP: str = "CHAT_TUI_GAP"
ENV_WHEEL_LINES: str = "CHAT_TUI_WHEEL_LINES"
ENV_FOLLOW: str = "CHAT_TUI_FOLLOW"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def get_config_dir() -> str:
    """Get the config directory (e.g., ~/.chat-tui/)."""
    env_dir = os.environ.get(ENV_CONFIG_DIR)
    if env_dir:
        return os.path.expanduser(env_dir)
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME)


def get_settings_path() -> str:
    return os.path.join(get_config_dir(), "settings.json")


@dataclass
class ListSettings:
    gap: int = 1
    wheel_lines: int = 3
    page_overlap: int = 1
    follow_output: bool = True
    copy_on_select: bool = True
    mouse_enabled: bool = True
    keybindings: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ListSettings":
        known = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in data.items() if k in known}
        return cls(**filtered)


# camelCase JSON keys -> ListSettings fields
_JSON_KEYS: dict[str, str] = {
    "gap": "gap",
    "wheelLines": "wheel_lines",
    "pageOverlap": "page_overlap",
    "followOutput": "follow_output",
    "copyOnSelect": "copy_on_select",
    "mouseEnabled": "mouse_enabled",
    "keybindings": "keybindings",
}

_FIELD_TYPES: dict[str, type] = {
    "gap": int,
    "wheel_lines": int,
    "page_overlap": int,
    "follow_output": bool,
    "copy_on_select": bool,
    "mouse_enabled": bool,
    "keybindings": dict,
}


class SettingsLoader:
    """
    Loads ListSettings from a JSON file and the environment.

    Errors never raise; they are collected and returned by drain_errors().
    """

    def __init__(
        self,
        settings_file: str | None = None,
        environ: dict[str, str] | None = None,
    ) -> None:
        self._settings_file = settings_file or get_settings_path()
        self._environ = environ if environ is not None else os.environ
        self._errors: list[dict[str, Any]] = []

    @property
    def settings_file(self) -> str:
        return self._settings_file

    @classmethod
    def in_memory(cls, settings: dict[str, Any] | None = None) -> ListSettings:
        """Build settings from a raw "transcript" dict, without file or env I/O."""
        loader = cls(settings_file=os.devnull, environ={})
        return ListSettings.from_dict(loader._map_raw(settings or {}))

    def load(self) -> ListSettings:
        raw = self._load_file(self._settings_file)
        values = self._map_raw(raw)
        values.update(self._env_overrides())
        return ListSettings.from_dict(values)

    def _load_file(self, path: str) -> dict[str, Any]:
        if not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._record("file", f"{path}: {e}")
            return {}
        if not isinstance(raw, dict):
            self._record("file", f"{path}: top level is not an object")
            return {}
        section = raw.get(SETTINGS_SECTION, {})
        if not isinstance(section, dict):
            self._record("file", f"{path}: '{SETTINGS_SECTION}' is not an object")
            return {}
        return section

    def _map_raw(self, raw: dict[str, Any]) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = _JSON_KEYS.get(key)
            if name is None:
                continue
            expected = _FIELD_TYPES[name]
            # bool is an int subclass; reject it for numeric fields
            if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
                self._record("file", f"{key}: expected integer, got {value!r}")
                continue
            if not isinstance(value, expected):
                self._record("file", f"{key}: expected {expected.__name__}, got {value!r}")
                continue
            if expected is int and value < 0:
                self._record("file", f"{key}: must not be negative")
                continue
            values[name] = value
        return values

    def _env_overrides(self) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for env, name in ((ENV_GAP, "gap"), (ENV_WHEEL_LINES, "wheel_lines")):
            raw = self._environ.get(env)
            if raw is None or raw == "":
                continue
            try:
                n = int(raw)
            except ValueError:
                self._record("env", f"{env}: not an integer: {raw!r}")
                continue
            if n < 0:
                self._record("env", f"{env}: must not be negative")
                continue
            values[name] = n
        follow = self._environ.get(ENV_FOLLOW)
        if follow:
            if follow.lower() in _TRUE_VALUES:
                values["follow_output"] = True
            elif follow.lower() in _FALSE_VALUES:
                values["follow_output"] = False
            else:
                self._record("env", f"{ENV_FOLLOW}: not a boolean: {follow!r}")
        return values

    def _record(self, scope: str, error: str) -> None:
        logger.debug("Settings error (%s): %s", scope, error)
        self._errors.append({"scope": scope, "error": error})

    def drain_errors(self) -> list[dict[str, Any]]:
        """Drain and return all accumulated settings errors."""
        drained = list(self._errors)
        self._errors = []
        return drained


def load_settings(settings_file: str | None = None) -> ListSettings:
    loader = SettingsLoader(settings_file)
    settings = loader.load()
    for err in loader.drain_errors():
        logger.warning("Ignoring invalid setting (%s): %s", err["scope"], err["error"])
    return settings
