"""Greedy word wrap with forced mid-word splitting."""

from __future__ import annotations

import logging

from .models import FormattedText

_log = logging.getLogger("txt2png.formatter")

_NEWLINE = 0x0A
_SPACE = 0x20
_WORD_BREAKS = (_NEWLINE, _SPACE)
# Trailing bytes trimmed from the output: tab, newline, form feed, CR and space.
_TRAILING_WHITESPACE = b"\t\n\x0c\r "


def format_text(text: bytes, column_width: int) -> FormattedText:
    """Wrap ``text`` so no line exceeds ``column_width`` characters.

    Spaces that would overflow a line are dropped rather than wrapped. Words
    longer than the remaining room are split with a forced newline, leaving one
    slot of the line unused; a split that would only place a single character
    wraps the whole line instead. The result is uppercased and has trailing
    ASCII whitespace trimmed; only trimmed newlines reduce the line count.
    """
    if column_width < 2:
        raise ValueError(f"column_width must be at least 2, got {column_width}")

    out = bytearray()
    pos = 0
    line_count = 0
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        if c == _NEWLINE:
            out.append(_NEWLINE)
            pos = 0
            line_count += 1
            i += 1
            continue
        if c == _SPACE:
            if pos < column_width:
                out.append(_SPACE)
                pos += 1
            i += 1
            continue

        end = i
        while end < n and text[end] not in _WORD_BREAKS:
            end += 1
        wlen = end - i

        if pos + wlen <= column_width:
            out += text[i:end].upper()
            pos += wlen
            i = end
            continue

        remaining = wlen
        while remaining > 0:
            rem_space = column_width - pos
            if rem_space <= 0:
                out.append(_NEWLINE)
                pos = 0
                line_count += 1
                rem_space = column_width

            if remaining <= rem_space:
                out += text[i : i + remaining].upper()
                pos += remaining
                i += remaining
                remaining = 0
            elif rem_space == 1:
                out.append(_NEWLINE)
                pos = 0
                line_count += 1
            else:
                take = rem_space - 1
                out += text[i : i + take].upper()
                out.append(_NEWLINE)
                line_count += 1
                pos = 0
                i += take
                remaining -= take

    while out and out[-1] in _TRAILING_WHITESPACE:
        if out.pop() == _NEWLINE:
            line_count = max(line_count - 1, 0)

    result = FormattedText(line_count=line_count + 1, text=bytes(out))
    _log.debug("formatted %d bytes into %d lines", n, result.line_count)
    return result
