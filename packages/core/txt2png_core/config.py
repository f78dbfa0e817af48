"""Layout config parsing, validation and load/save helpers."""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import asdict, replace
from pathlib import Path
from typing import Any, Mapping

from txt2png_renderer.models import Color, LayoutConfig, Margins

_log = logging.getLogger("txt2png.config")

U32_MAX = 2**32 - 1

# Lower bounds below which the pipeline cannot produce an image.
_MINIMUMS: dict[str, int] = {
    "column_count": 1,
    "column_width": 2,
    "char_spacing": 0,
    "line_spacing": 0,
    "column_spacing": 0,
    "scaling": 1,
}
_MARGIN_KEYS = ("top", "right", "bottom", "left")
_COLOR_KEYS = ("fg_color", "bg_color")

CONFIG_KEYS = tuple(_MINIMUMS) + ("margins",) + _COLOR_KEYS

DEFAULT_CONFIG = LayoutConfig()


class ConfigError(ValueError):
    """Raised when a config update is malformed or names an invalid key."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def config_path() -> Path:
    system = platform.system()
    if system == "Windows":
        base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        return base / "Txt2Png" / "config.json"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support" / "Txt2Png" / "config.json"
    return Path.home() / ".config" / "txt2png" / "config.json"


def _u32(key: str, value: Any, minimum: int = 0) -> int:
    # bool is an int subclass but never a valid count.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"Invalid config: {key} must be an integer", key)
    if value < minimum or value > U32_MAX:
        raise ConfigError(f"Invalid config: {key} must be between {minimum} and {U32_MAX}, got {value}", key)
    return value


def _color(key: str, value: Any) -> Color:
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        raise ConfigError(f"Invalid config: {key} must be a list of 4 integers", key)
    channels = []
    for v in value:
        if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= 255:
            raise ConfigError(f"Invalid config: {key} channels must be integers 0-255", key)
        channels.append(v)
    return (channels[0], channels[1], channels[2], channels[3])


def _margins(current: Margins, value: Any) -> Margins:
    if not isinstance(value, Mapping):
        raise ConfigError("Invalid config: margins must be an object", "margins")
    changes: dict[str, int] = {}
    for side, v in value.items():
        if side not in _MARGIN_KEYS:
            raise ConfigError(f"Invalid config: margins.{side}", "margins")
        changes[side] = _u32(f"margins.{side}", v)
    return replace(current, **changes)


def coerce_update(raw: str | bytes | Mapping[str, Any]) -> Mapping[str, Any]:
    """Decode a JSON update to a mapping; mappings pass through unchanged."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            # JSONDecodeError, or UnicodeDecodeError for undecodable bytes.
            raise ConfigError(f"Failed to parse config: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Config must be a JSON object")
    return raw


def parse_config_update(base: LayoutConfig, raw: str | bytes | Mapping[str, Any]) -> LayoutConfig:
    """Return ``base`` with the keys of ``raw`` applied.

    The update is all-or-nothing: any unknown key or badly typed value raises
    ``ConfigError`` and nothing is applied.
    """
    data = coerce_update(raw)
    changes: dict[str, Any] = {}
    for key, value in data.items():
        if key in _MINIMUMS:
            changes[key] = _u32(key, value, _MINIMUMS[key])
        elif key == "margins":
            changes[key] = _margins(base.margins, value)
        elif key in _COLOR_KEYS:
            changes[key] = _color(key, value)
        else:
            raise ConfigError(f"Invalid config: {key}", key)
    return replace(base, **changes)


def config_to_dict(cfg: LayoutConfig) -> dict[str, Any]:
    data = asdict(cfg)
    data["fg_color"] = list(cfg.fg_color)
    data["bg_color"] = list(cfg.bg_color)
    return data


def load_config(path: Path | None = None) -> LayoutConfig:
    path = path or config_path()
    if not path.exists():
        return LayoutConfig()

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        _log.warning("unreadable config file %s, using defaults", path, extra={"event": "config_unreadable"})
        return LayoutConfig()

    try:
        return parse_config_update(DEFAULT_CONFIG, raw)
    except ConfigError as exc:
        _log.warning("invalid config file %s (%s), using defaults", path, exc, extra={"event": "config_invalid"})
        return LayoutConfig()


def save_config(cfg: LayoutConfig, path: Path | None = None) -> Path:
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config_to_dict(cfg), indent=2, sort_keys=True), encoding="utf-8")
    return path
