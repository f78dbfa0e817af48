"""Renderer package: 5x5 font, word wrap, column layout and PNG encoding."""

from .encoder import encode_png, upscale
from .font import CHAR_HEIGHT, CHAR_WIDTH, get_char_bitmap, get_pixel, glyph_mask, supported_characters
from .formatter import format_text
from .layout import MAX_CANVAS_PIXELS, CanvasGeometry, compute_geometry, render_pixels
from .models import FormattedText, LayoutConfig, Margins, RenderResult
from .pipeline import render

__all__ = [
    "CHAR_HEIGHT",
    "CHAR_WIDTH",
    "MAX_CANVAS_PIXELS",
    "CanvasGeometry",
    "FormattedText",
    "LayoutConfig",
    "Margins",
    "RenderResult",
    "compute_geometry",
    "encode_png",
    "format_text",
    "get_char_bitmap",
    "get_pixel",
    "glyph_mask",
    "render",
    "render_pixels",
    "supported_characters",
    "upscale",
]
