"""Cell frame buffer and the per-frame drawing handle.

Widgets never talk to the terminal: they write styled cells into a
``Buffer`` covering the whole screen.  The frame driver then turns the
buffer into SGR-coded lines and emits only what changed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pi.dash.layout import Rect
from pi.dash.style import Color, Modifier, Style, sgr
from pi.dash.text import Span, Spans
from pi.dash.utils import graphemes

_RESET = "\x1b[0m"


@dataclass
class Cell:
    symbol: str = " "
    fg: Color = Color.RESET
    bg: Color = Color.RESET
    modifier: Modifier = Modifier.NONE

    def set_style(self, style: Style) -> None:
        if style.fg is not None:
            self.fg = style.fg
        if style.bg is not None:
            self.bg = style.bg
        self.modifier = Modifier(
            (self.modifier | style.add_modifier) & ~style.sub_modifier
        )

    @property
    def style(self) -> Style:
        return Style(fg=self.fg, bg=self.bg, add_modifier=self.modifier)

    def reset(self) -> None:
        self.symbol = " "
        self.fg = Color.RESET
        self.bg = Color.RESET
        self.modifier = Modifier.NONE


class Buffer:
    """A rectangle of cells addressed in absolute screen coordinates."""

    def __init__(self, area: Rect) -> None:
        self.area = area
        self.content: list[Cell] = [Cell() for _ in range(area.area)]

    # -- addressing ---------------------------------------------------------

    def _index(self, x: int, y: int) -> int | None:
        if not self.area.contains(x, y):
            return None
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def get(self, x: int, y: int) -> Cell:
        """Return the cell at ``(x, y)``; raises ``IndexError`` outside."""
        idx = self._index(x, y)
        if idx is None:
            raise IndexError(f"({x}, {y}) is outside {self.area}")
        return self.content[idx]

    # -- writing ------------------------------------------------------------

    def set_stringn(
        self,
        x: int,
        y: int,
        string: str,
        max_width: int,
        style: Style = Style(),
    ) -> int:
        """Write *string* starting at ``(x, y)`` using at most *max_width*
        columns.  Returns the column after the last written cell.

        Writes past the buffer edge are dropped.
        """
        if y < self.area.top or y >= self.area.bottom:
            return x
        limit = min(x + max(0, max_width), self.area.right)
        for g, w in graphemes(string):
            if w == 0:
                continue
            if x + w > limit:
                break
            for col in range(x, x + w):
                if self.area.contains(col, y):
                    self._release(col, y)
            idx = self._index(x, y)
            if idx is not None:
                cell = self.content[idx]
                cell.symbol = g
                cell.set_style(style)
                # Wide glyphs leave an empty continuation cell behind them
                for extra in range(1, w):
                    cont = self._index(x + extra, y)
                    if cont is not None:
                        self.content[cont].symbol = ""
                        self.content[cont].set_style(style)
            x += w
        return x

    def _release(self, x: int, y: int) -> None:
        """Blank every cell of the wide glyph covering ``(x, y)``, if any."""
        start = x
        while start > self.area.left and self.get(start, y).symbol == "":
            start -= 1
        end = x + 1
        while end < self.area.right and self.get(end, y).symbol == "":
            end += 1
        if end - start > 1:
            for col in range(start, end):
                self.get(col, y).symbol = " "

    def set_string(self, x: int, y: int, string: str, style: Style = Style()) -> int:
        return self.set_stringn(x, y, string, self.area.right - x, style)

    def set_span(self, x: int, y: int, span: Span, max_width: int) -> int:
        return self.set_stringn(x, y, span.content, max_width, span.style)

    def set_spans(self, x: int, y: int, spans: Spans, max_width: int) -> int:
        remaining = max_width
        for span in spans.spans:
            if remaining <= 0:
                break
            end = self.set_span(x, y, span, remaining)
            remaining -= end - x
            x = end
        return x

    def set_style(self, area: Rect, style: Style) -> None:
        """Patch *style* onto every cell of *area* (clipped to the buffer)."""
        area = area.intersection(self.area)
        for row in range(area.top, area.bottom):
            for col in range(area.left, area.right):
                self.get(col, row).set_style(style)

    def reset(self) -> None:
        for cell in self.content:
            cell.reset()

    # -- output -------------------------------------------------------------

    def plain_lines(self) -> list[str]:
        """Rows as bare symbols, without any styling."""
        w = self.area.width
        return [
            "".join(c.symbol for c in self.content[row * w : (row + 1) * w])
            for row in range(self.area.height)
        ]

    def to_lines(self) -> list[str]:
        """Rows as terminal strings; an SGR is emitted only on style change."""
        lines: list[str] = []
        w = self.area.width
        for row in range(self.area.height):
            parts: list[str] = []
            current: tuple[Color, Color, Modifier] | None = None
            for cell in self.content[row * w : (row + 1) * w]:
                if not cell.symbol:
                    continue
                key = (cell.fg, cell.bg, cell.modifier)
                if key != current:
                    parts.append(sgr(*key))
                    current = key
                parts.append(cell.symbol)
            parts.append(_RESET)
            lines.append("".join(parts))
        return lines


class Frame:
    """Handle passed to render functions for one frame."""

    def __init__(self, buffer: Buffer) -> None:
        self.buffer = buffer

    def size(self) -> Rect:
        return self.buffer.area

    def render_widget(self, widget: Any, area: Rect) -> None:
        widget.render(area, self.buffer)

    def render_stateful_widget(self, widget: Any, area: Rect, state: Any) -> None:
        widget.render(area, self.buffer, state)
