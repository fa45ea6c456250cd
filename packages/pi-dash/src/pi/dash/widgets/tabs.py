"""Tabs widget - a single row of titles with the active one highlighted."""

from __future__ import annotations

from dataclasses import dataclass, field

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.style import Style
from pi.dash.text import Spans, SpansLike
from pi.dash.widgets.block import Block

DEFAULT_DIVIDER = "│"


@dataclass
class Tabs:
    titles: list[SpansLike] = field(default_factory=list)
    selected: int = 0
    block: Block | None = None
    style: Style = Style()
    highlight_style: Style = Style()
    divider: str = DEFAULT_DIVIDER

    def render(self, area: Rect, buf: Buffer) -> None:
        buf.set_style(area, self.style)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty():
            return

        x = area.left
        right = area.right
        y = area.top
        last = len(self.titles) - 1
        for i, title in enumerate(self.titles):
            # One cell of padding on each side of every title
            x += 1
            remaining = right - x
            if remaining <= 0:
                break
            spans = Spans.of(title)
            start = x
            x = buf.set_spans(x, y, spans, remaining)
            if i == self.selected:
                buf.set_style(Rect(start, y, x - start, 1), self.highlight_style)
            x += 1
            remaining = right - x
            if remaining <= 0 or i == last:
                break
            x = buf.set_stringn(x, y, self.divider, remaining, self.style)
