"""Text measurement helpers: grapheme segmentation and cell widths.

Cells are measured per grapheme cluster so that combining marks, emoji
sequences and East Asian wide characters land in the right number of
terminal columns.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI / OSC escape sequences never occupy a cell
_STRIP_RE = re.compile(
    r"\x1b\[[0-9;]*[A-Za-z]"       # CSI
    r"|\x1b\][^\x07]*\x07"          # OSC
)

# ---------------------------------------------------------------------------
# Width cache (capped at 512 entries)
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


# ---------------------------------------------------------------------------
# Grapheme width
# ---------------------------------------------------------------------------


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster.

    Control characters and lone combining marks are zero-width, emoji
    sequences are two columns wide, everything else defers to ``wcwidth``.
    """
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first = g[0]
    if ord(first) >= 0x1F000:
        return 2

    cat = unicodedata.category(first)
    if cat.startswith("M") or cat == "Cf":
        return 0

    return max(_wcwidth.wcwidth(first), 0)


def graphemes(text: str) -> list[tuple[str, int]]:
    """Split *text* into ``(grapheme, width)`` pairs, skipping escapes."""
    stripped = _STRIP_RE.sub("", text)
    return [(g, grapheme_width(g)) for g in grapheme.graphemes(stripped)]


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


def visible_width(text: str) -> int:
    """Calculate how many terminal columns *text* occupies."""
    if not text:
        return 0

    stripped = _STRIP_RE.sub("", text)
    if not stripped:
        return 0

    if all(0x20 <= ord(ch) <= 0x7E for ch in stripped):
        return len(stripped)

    cached = _width_cache.get(stripped)
    if cached is not None:
        return cached

    total = sum(grapheme_width(g) for g in grapheme.graphemes(stripped))
    return _cache_width(stripped, total)

