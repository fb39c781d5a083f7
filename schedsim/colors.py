from __future__ import annotations

import re

from .config import PALETTE, RICH_PALETTE

_DIGITS = re.compile(r"\D")


def _palette_index(pid: str) -> int:
    digits = _DIGITS.sub("", pid)
    if digits:
        return int(digits) % len(PALETTE)
    # No digits to go by: fall back to something stable across runs.
    return sum(ord(ch) for ch in pid) % len(PALETTE)


def process_color(pid: str) -> str:
    """
    Hex display color for a process; the same pid always maps to the same color.
    """
    return PALETTE[_palette_index(pid)]


def rich_color(pid: str) -> str:
    return RICH_PALETTE[_palette_index(pid)]
