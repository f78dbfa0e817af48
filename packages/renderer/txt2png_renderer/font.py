"""Fixed 5x5 bitmap font.

Each glyph is packed into 25 bits, row-major, with the least-significant bit
holding the bottom-right pixel.
"""

from __future__ import annotations

from functools import lru_cache

import numpy as np

CHAR_WIDTH = 5
CHAR_HEIGHT = 5

FONT_DATA: dict[int, int] = {
    ord("A"): 0x00E8FE31,
    ord("B"): 0x01E8FA3E,
    ord("C"): 0x00F8420F,
    ord("D"): 0x01E8C63E,
    ord("E"): 0x01F8721F,
    ord("F"): 0x01F87210,
    ord("G"): 0x00F85E2F,
    ord("H"): 0x0118FE31,
    ord("I"): 0x01F2109F,
    ord("J"): 0x01F0862E,
    ord("K"): 0x01197251,
    ord("L"): 0x0108421F,
    ord("M"): 0x011DD631,
    ord("N"): 0x011CD671,
    ord("O"): 0x00E8C62E,
    ord("P"): 0x01E8FA10,
    ord("Q"): 0x00E8D66F,
    ord("R"): 0x01E8FA51,
    ord("S"): 0x00F8383E,
    ord("T"): 0x01F21084,
    ord("U"): 0x0118C62E,
    ord("V"): 0x0118C544,
    ord("W"): 0x0118D771,
    ord("X"): 0x01151151,
    ord("Y"): 0x01151084,
    ord("Z"): 0x01F1111F,
    ord(" "): 0x00000000,
    ord("!"): 0x00421004,
    ord("?"): 0x00E88884,
    ord("."): 0x00000004,
    ord(","): 0x00000088,
    ord(":"): 0x00020080,
    ord(";"): 0x00020088,
    ord("'"): 0x00420000,
    ord('"'): 0x00A50000,
    ord("-"): 0x00007C00,
    ord("0"): 0x00E9D72E,
    ord("1"): 0x0046109F,
    ord("2"): 0x00E8889F,
    ord("3"): 0x00E89A2E,
    ord("4"): 0x00232BE2,
    ord("5"): 0x01F8783E,
    ord("6"): 0x00E87A2E,
    ord("7"): 0x01F08888,
    ord("8"): 0x00E8BA2E,
    ord("9"): 0x00E8BC2E,
    ord("("): 0x00222082,
    ord(")"): 0x00820888,
}


def get_char_bitmap(code: int) -> int:
    """Packed bitmap for a byte value; unknown codes are blank."""
    return FONT_DATA.get(code, 0)


def get_pixel(bitmap: int, x: int, y: int) -> bool:
    if not (0 <= x < CHAR_WIDTH and 0 <= y < CHAR_HEIGHT):
        raise ValueError(f"Glyph coordinate out of range: ({x}, {y})")
    bit_index = (CHAR_HEIGHT - 1 - y) * CHAR_WIDTH + (CHAR_WIDTH - 1 - x)
    return bool(bitmap & (1 << bit_index))


@lru_cache(maxsize=None)
def glyph_mask(code: int) -> np.ndarray:
    """Unpacked glyph as a read-only (CHAR_HEIGHT, CHAR_WIDTH) bool array."""
    bitmap = get_char_bitmap(code)
    mask = np.zeros((CHAR_HEIGHT, CHAR_WIDTH), dtype=bool)
    for y in range(CHAR_HEIGHT):
        for x in range(CHAR_WIDTH):
            mask[y, x] = get_pixel(bitmap, x, y)
    mask.setflags(write=False)
    return mask


def supported_characters() -> str:
    return "".join(chr(c) for c in sorted(FONT_DATA))
