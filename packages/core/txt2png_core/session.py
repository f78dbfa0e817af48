"""Render entry points holding the live layout config."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from txt2png_renderer import LayoutConfig, RenderResult
from txt2png_renderer import render as _render_pipeline

from .config import ConfigError, coerce_update, parse_config_update

_log = logging.getLogger("txt2png.session")


class RenderSession:
    """Owns one ``LayoutConfig`` and renders text against snapshots of it.

    Each render reads the config exactly once, so all three pipeline stages see
    the same value even if ``set_config`` is called between renders.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self._config = config or LayoutConfig()

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def set_config(self, raw: str | bytes | Mapping[str, Any]) -> LayoutConfig:
        try:
            data = coerce_update(raw)
            updated = parse_config_update(self._config, data)
        except ConfigError as exc:
            _log.warning("config update rejected: %s", exc, extra={"event": "config_rejected"})
            raise
        self._config = updated
        keys = sorted(data)
        _log.info("config updated: %s", ", ".join(keys), extra={"event": "config_updated", "keys": keys})
        return updated

    def reset_config(self) -> LayoutConfig:
        self._config = LayoutConfig()
        return self._config

    def render(self, text: bytes | str) -> RenderResult:
        snapshot = self._config
        result = _render_pipeline(text, snapshot)
        _log.debug(
            "rendered %dx%d image, %d bytes",
            result.width,
            result.height,
            len(result.png),
            extra={"event": "image_rendered", "width": result.width, "height": result.height, "bytes": len(result.png)},
        )
        return result

    def create_image(self, text: bytes | str) -> bytes:
        return self.render(text).png


def render(text: bytes | str, config: LayoutConfig | None = None) -> RenderResult:
    return _render_pipeline(text, config or LayoutConfig())


def create_image(text: bytes | str, config: LayoutConfig | None = None) -> bytes:
    return render(text, config).png
