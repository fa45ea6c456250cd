"""Gauge widget - a proportional fill with a centred label."""

from __future__ import annotations

import math
from dataclasses import dataclass

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.style import Color, Style
from pi.dash.text import Span, Spans, SpansLike
from pi.dash.widgets.block import Block


def clamp_ratio(ratio: float) -> float:
    """Clamp *ratio* into ``[0.0, 1.0]``; NaN becomes 0."""
    if math.isnan(ratio):
        return 0.0
    return max(0.0, min(1.0, ratio))


def filled_width(width: int, ratio: float) -> int:
    """Cells filled for *ratio* of *width*; halves round up."""
    return min(width, math.floor(width * clamp_ratio(ratio) + 0.5))


@dataclass
class Gauge:
    ratio: float = 0.0
    label: SpansLike | None = None
    block: Block | None = None
    style: Style = Style()
    gauge_style: Style = Style()

    def render(self, area: Rect, buf: Buffer) -> None:
        buf.set_style(area, self.style)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        area = area.intersection(buf.area)
        if area.is_empty():
            return

        ratio = clamp_ratio(self.ratio)
        buf.set_style(area, self.gauge_style)

        end = area.left + filled_width(area.width, ratio)
        # Filled cells swap the gauge colours
        filled = Style(
            fg=self.gauge_style.bg or Color.RESET,
            bg=self.gauge_style.fg or Color.RESET,
        )
        for row in range(area.top, area.bottom):
            for col in range(area.left, end):
                cell = buf.get(col, row)
                cell.symbol = " "
                cell.set_style(filled)

        label = Spans.of(
            self.label if self.label is not None else Span(f"{round(ratio * 100)}%")
        )
        width = min(label.width, area.width)
        x = area.left + (area.width - width) // 2
        label_end = x + width
        y = area.top + (area.height - 1) // 2
        # Label glyphs take on whatever colours their cell already has
        for span in label.spans:
            text_only = Span(span.content, Style(add_modifier=span.style.add_modifier))
            x = buf.set_span(x, y, text_only, label_end - x)
