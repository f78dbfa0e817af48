"""Format, lay out and encode in one pass against a single config value."""

from __future__ import annotations

from .encoder import encode_png
from .formatter import format_text
from .layout import render_pixels
from .models import LayoutConfig, RenderResult


def render(text: bytes | str, cfg: LayoutConfig) -> RenderResult:
    if isinstance(text, str):
        text = text.encode("utf-8")
    formatted = format_text(text, cfg.column_width)
    canvas = render_pixels(formatted, cfg)
    height, width = canvas.shape
    return RenderResult(width=width * cfg.scaling, height=height * cfg.scaling, png=encode_png(canvas, cfg))
