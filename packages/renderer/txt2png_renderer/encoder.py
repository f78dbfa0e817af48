"""Two-colour palette PNG encoding of a boolean canvas."""

from __future__ import annotations

from io import BytesIO

import numpy as np
from PIL import Image

from .layout import MAX_CANVAS_PIXELS
from .models import LayoutConfig

BG_INDEX = 0
FG_INDEX = 1


def upscale(canvas: np.ndarray, scaling: int) -> np.ndarray:
    """Nearest-neighbour upscale: each pixel becomes a ``scaling x scaling`` block."""
    if scaling < 1:
        raise ValueError(f"scaling must be at least 1, got {scaling}")
    if canvas.size * scaling * scaling > MAX_CANVAS_PIXELS:
        height, width = canvas.shape
        raise ValueError(
            f"{width}x{height} canvas at scaling {scaling} exceeds the {MAX_CANVAS_PIXELS} pixel limit"
        )
    if scaling == 1:
        return canvas
    return np.repeat(np.repeat(canvas, scaling, axis=0), scaling, axis=1)


def canvas_to_image(canvas: np.ndarray, cfg: LayoutConfig) -> Image.Image:
    indices = upscale(canvas, cfg.scaling).astype(np.uint8)
    height, width = indices.shape
    image = Image.frombytes("P", (width, height), indices.tobytes())
    image.putpalette(list(cfg.bg_color[:3]) + list(cfg.fg_color[:3]))
    image.info["transparency"] = bytes([cfg.bg_color[3], cfg.fg_color[3]])
    return image


def encode_png(canvas: np.ndarray, cfg: LayoutConfig) -> bytes:
    """Palette-indexed PNG: index 0 is the background, index 1 the foreground.

    Alpha for both entries is written as a tRNS table alongside the RGB palette.
    """
    image = canvas_to_image(canvas, cfg)
    buf = BytesIO()
    image.save(buf, format="PNG", transparency=image.info["transparency"])
    return buf.getvalue()
