"""Paragraph widget - mixed-style text with optional word wrapping.

Text that does not fit vertically is clipped; lines that do not fit
horizontally are either wrapped at word boundaries or truncated.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.style import Style
from pi.dash.text import Spans, Text
from pi.dash.utils import graphemes
from pi.dash.widgets.block import Block

# (grapheme, width, style)
StyledGrapheme = tuple[str, int, Style]


class Alignment(enum.Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Wrap:
    """Word-wrap settings; *trim* drops whitespace at wrapped line starts."""

    trim: bool = True


def _styled_graphemes(line: Spans) -> list[StyledGrapheme]:
    return [
        (g, w, span.style)
        for span in line.spans
        for g, w in graphemes(span.content)
        if w > 0
    ]


def _tokens(symbols: list[StyledGrapheme]) -> list[list[StyledGrapheme]]:
    """Group graphemes into alternating runs of whitespace and non-whitespace."""
    tokens: list[list[StyledGrapheme]] = []
    for sym in symbols:
        is_ws = sym[0].isspace()
        if tokens and tokens[-1][0][0].isspace() == is_ws:
            tokens[-1].append(sym)
        else:
            tokens.append([sym])
    return tokens


def _rstrip(symbols: list[StyledGrapheme]) -> list[StyledGrapheme]:
    end = len(symbols)
    while end and symbols[end - 1][0].isspace():
        end -= 1
    return symbols[:end]


def wrap_line(
    symbols: list[StyledGrapheme], width: int, trim: bool = True
) -> list[list[StyledGrapheme]]:
    """Break one logical line into rows of at most *width* columns.

    Words move whole to the next row when they do not fit; a word wider
    than the row is split at grapheme boundaries.
    """
    if width <= 0:
        return []

    rows: list[list[StyledGrapheme]] = []
    current: list[StyledGrapheme] = []
    current_w = 0

    for token in _tokens(symbols):
        if token[0][0].isspace():
            if trim and not current and rows:
                continue
            for sym in token:
                if current_w + sym[1] > width:
                    rows.append(current)
                    current, current_w = [], 0
                    if trim:
                        break
                current.append(sym)
                current_w += sym[1]
            continue

        token_w = sum(w for _, w, _ in token)
        if current and current_w + token_w > width:
            rows.append(_rstrip(current))
            current, current_w = [], 0
        for sym in token:
            if sym[1] > width:
                continue
            if current_w + sym[1] > width:
                rows.append(current)
                current, current_w = [], 0
            current.append(sym)
            current_w += sym[1]

    rows.append(current)
    return rows


@dataclass
class Paragraph:
    text: Text
    block: Block | None = None
    style: Style = Style()
    wrap: Wrap | None = None
    alignment: Alignment = Alignment.LEFT
    scroll: int = 0

    def __post_init__(self) -> None:
        self.text = Text.of(self.text)

    def _rows(self, width: int) -> list[list[StyledGrapheme]]:
        rows: list[list[StyledGrapheme]] = []
        for line in self.text.lines:
            symbols = _styled_graphemes(line)
            if self.wrap is not None:
                rows.extend(wrap_line(symbols, width, self.wrap.trim))
            else:
                rows.append(symbols)
        return rows

    def render(self, area: Rect, buf: Buffer) -> None:
        buf.set_style(area, self.style)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty():
            return

        rows = self._rows(area.width)
        visible = rows[self.scroll : self.scroll + area.height]
        for offset, symbols in enumerate(visible):
            y = area.top + offset
            line_w = min(sum(w for _, w, _ in symbols), area.width)
            if self.alignment is Alignment.CENTER:
                x = area.left + (area.width - line_w) // 2
            elif self.alignment is Alignment.RIGHT:
                x = area.right - line_w
            else:
                x = area.left
            for g, w, style in symbols:
                if x + w > area.right:
                    break
                buf.set_stringn(x, y, g, w, style)
                x += w
