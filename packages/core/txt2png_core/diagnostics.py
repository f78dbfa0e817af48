"""Doctor payload for local troubleshooting."""

from __future__ import annotations

import platform
from datetime import datetime, timezone
from importlib import metadata
from typing import Any

from txt2png_renderer import LayoutConfig, supported_characters

from .config import config_path, config_to_dict


def _dist_version(name: str) -> str | None:
    try:
        return metadata.version(name)
    except metadata.PackageNotFoundError:
        return None


def build_doctor_payload(cfg: LayoutConfig) -> dict[str, Any]:
    return {
        "ts_utc": datetime.now(timezone.utc).isoformat(),
        "platform": platform.platform(),
        "python": platform.python_version(),
        "libraries": {
            "pillow": _dist_version("Pillow"),
            "numpy": _dist_version("numpy"),
        },
        "config_path": str(config_path()),
        "config": config_to_dict(cfg),
        "glyphs": supported_characters(),
    }
