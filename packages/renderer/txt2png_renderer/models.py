"""Typed renderer models."""

from __future__ import annotations

from dataclasses import dataclass, field

Color = tuple[int, int, int, int]


@dataclass(frozen=True)
class Margins:
    top: int = 0
    right: int = 0
    bottom: int = 0
    left: int = 0


@dataclass(frozen=True)
class LayoutConfig:
    column_count: int = 1
    column_width: int = 80
    char_spacing: int = 1
    line_spacing: int = 1
    column_spacing: int = 4
    scaling: int = 1
    margins: Margins = field(default_factory=Margins)
    fg_color: Color = (0, 0, 0, 255)
    bg_color: Color = (255, 255, 255, 0)


@dataclass(frozen=True)
class FormattedText:
    line_count: int
    text: bytes

    @property
    def lines(self) -> list[bytes]:
        return self.text.split(b"\n")


@dataclass(frozen=True)
class RenderResult:
    width: int
    height: int
    png: bytes
