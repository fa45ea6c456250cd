"""Block widget - an optional bordered, titled frame around other widgets."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.style import Style
from pi.dash.text import Spans, SpansLike

_HORIZONTAL = "─"
_VERTICAL = "│"
_TOP_LEFT = "┌"
_TOP_RIGHT = "┐"
_BOTTOM_LEFT = "└"
_BOTTOM_RIGHT = "┘"


class Borders(enum.IntFlag):
    NONE = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8
    ALL = TOP | RIGHT | BOTTOM | LEFT


@dataclass
class Block:
    title: SpansLike | None = None
    borders: Borders = Borders.NONE
    style: Style = Style()
    border_style: Style = Style()

    def inner(self, area: Rect) -> Rect:
        """The area left for content once borders (and title row) are drawn."""
        x, y, width, height = area.x, area.y, area.width, area.height
        if self.borders & Borders.LEFT:
            x = min(x + 1, area.right)
            width = max(0, width - 1)
        if self.borders & Borders.TOP or self.title is not None:
            y = min(y + 1, area.bottom)
            height = max(0, height - 1)
        if self.borders & Borders.RIGHT:
            width = max(0, width - 1)
        if self.borders & Borders.BOTTOM:
            height = max(0, height - 1)
        return Rect(x, y, width, height)

    def render(self, area: Rect, buf: Buffer) -> None:
        area = area.intersection(buf.area)
        if area.is_empty():
            return
        buf.set_style(area, self.style)
        style = self.style.patch(self.border_style)

        b = self.borders
        right, bottom = area.right - 1, area.bottom - 1
        if b & Borders.LEFT:
            for row in range(area.top, area.bottom):
                buf.set_string(area.left, row, _VERTICAL, style)
        if b & Borders.RIGHT:
            for row in range(area.top, area.bottom):
                buf.set_string(right, row, _VERTICAL, style)
        if b & Borders.TOP:
            buf.set_stringn(area.left, area.top, _HORIZONTAL * area.width, area.width, style)
        if b & Borders.BOTTOM:
            buf.set_stringn(area.left, bottom, _HORIZONTAL * area.width, area.width, style)

        # Corners
        if b & Borders.TOP and b & Borders.LEFT:
            buf.set_string(area.left, area.top, _TOP_LEFT, style)
        if b & Borders.TOP and b & Borders.RIGHT:
            buf.set_string(right, area.top, _TOP_RIGHT, style)
        if b & Borders.BOTTOM and b & Borders.LEFT:
            buf.set_string(area.left, bottom, _BOTTOM_LEFT, style)
        if b & Borders.BOTTOM and b & Borders.RIGHT:
            buf.set_string(right, bottom, _BOTTOM_RIGHT, style)

        if self.title is not None:
            left_pad = 1 if b & Borders.LEFT else 0
            right_pad = 1 if b & Borders.RIGHT else 0
            width = area.width - left_pad - right_pad
            if width > 0:
                buf.set_spans(area.left + left_pad, area.top, Spans.of(self.title), width)
