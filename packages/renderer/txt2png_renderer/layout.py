"""Multi-column line placement and glyph blitting onto a boolean canvas."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from .font import CHAR_HEIGHT, CHAR_WIDTH, glyph_mask
from .models import FormattedText, LayoutConfig

_log = logging.getLogger("txt2png.layout")

_SPACE = 0x20

# Upper bound on pixels for both the logical canvas and the scaled image.
MAX_CANVAS_PIXELS = 1 << 26


@dataclass(frozen=True)
class CanvasGeometry:
    width: int
    height: int
    lines_per_column: int
    column_pitch: int
    line_pitch: int
    char_pitch: int

    def line_origin(self, line_index: int, cfg: LayoutConfig) -> tuple[int, int]:
        """Top-left pixel of a line; lines fill a column's rows before the next column."""
        column, row = divmod(line_index, self.lines_per_column)
        x = cfg.margins.left + column * self.column_pitch
        y = cfg.margins.top + row * self.line_pitch
        return x, y


def compute_geometry(line_count: int, text: bytes, cfg: LayoutConfig) -> CanvasGeometry:
    if cfg.column_count < 1:
        raise ValueError(f"column_count must be at least 1, got {cfg.column_count}")
    if line_count < 1:
        raise ValueError(f"line_count must be at least 1, got {line_count}")

    char_pitch = CHAR_WIDTH + cfg.char_spacing
    line_pitch = CHAR_HEIGHT + cfg.line_spacing
    column_body = cfg.column_width * char_pitch - cfg.char_spacing
    column_pitch = column_body + cfg.column_spacing
    lines_per_column = -(-line_count // cfg.column_count)

    if line_count == 1:
        width = len(text) * char_pitch - cfg.char_spacing
    else:
        width = cfg.column_count * column_pitch - cfg.column_spacing
    width += cfg.margins.left + cfg.margins.right
    height = lines_per_column * line_pitch - cfg.line_spacing + cfg.margins.top + cfg.margins.bottom
    if width * height > MAX_CANVAS_PIXELS:
        raise ValueError(f"canvas of {width}x{height} pixels exceeds the {MAX_CANVAS_PIXELS} pixel limit")

    return CanvasGeometry(
        width=width,
        height=height,
        lines_per_column=lines_per_column,
        column_pitch=column_pitch,
        line_pitch=line_pitch,
        char_pitch=char_pitch,
    )


def render_pixels(formatted: FormattedText, cfg: LayoutConfig) -> np.ndarray:
    """Paint formatted text onto a fresh ``(height, width)`` bool canvas.

    Empty text yields a 1x1 blank canvas.
    """
    if not formatted.text:
        _log.debug("empty text, returning 1x1 blank canvas")
        return np.zeros((1, 1), dtype=bool)

    geo = compute_geometry(formatted.line_count, formatted.text, cfg)
    canvas = np.zeros((geo.height, geo.width), dtype=bool)

    for line_index, line in enumerate(formatted.lines):
        x_start, y_start = geo.line_origin(line_index, cfg)
        x = x_start
        for code in line:
            if code != _SPACE:
                canvas[y_start : y_start + CHAR_HEIGHT, x : x + CHAR_WIDTH] |= glyph_mask(code)
            x += geo.char_pitch

    _log.debug(
        "rendered %d lines onto %dx%d canvas",
        formatted.line_count,
        geo.width,
        geo.height,
        extra={"event": "canvas_rendered", "line_count": formatted.line_count, "width": geo.width, "height": geo.height},
    )
    return canvas
