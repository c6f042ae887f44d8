"""Terminal text utilities: ANSI stripping and display-width measurement.

Cell contents are measured in bytes by the grid itself; these helpers are
for text that is laid out by terminal columns, such as the welcome banner.
"""

from __future__ import annotations

import re

import wcwidth as _wcwidth

# CSI sequences: ESC[ <params> <final byte>
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def strip_ansi(text: str) -> str:
    """Remove CSI escape sequences from *text*."""
    return _ANSI_RE.sub("", text)


def _char_width(ch: str) -> int:
    # wcwidth reports -1 for control characters; they take no column.
    return max(0, _wcwidth.wcwidth(ch))


def visible_width(text: str) -> int:
    """Return the number of terminal columns *text* occupies.

    * Strips ANSI escape sequences.
    * Uses a fast ASCII path when possible.
    """
    if not text:
        return 0

    stripped = strip_ansi(text)

    if stripped.isascii() and stripped.isprintable():
        return len(stripped)

    return sum(_char_width(ch) for ch in stripped)


def clip_to_width(text: str, max_width: int) -> str:
    """Return the longest prefix of *text* that fits in *max_width* columns."""
    if max_width <= 0:
        return ""

    result: list[str] = []
    cols = 0
    for ch in text:
        w = _char_width(ch)
        if cols + w > max_width:
            break
        result.append(ch)
        cols += w
    return "".join(result)
