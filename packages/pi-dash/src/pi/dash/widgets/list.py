"""List widget - rows top to bottom with an optional highlighted selection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.selection import ListState
from pi.dash.style import Style
from pi.dash.text import Text
from pi.dash.utils import visible_width
from pi.dash.widgets.block import Block


@dataclass
class ListItem:
    content: Text
    style: Style = Style()

    def __post_init__(self) -> None:
        self.content = Text.of(self.content)

    @property
    def height(self) -> int:
        return max(1, self.content.height)


class _HasHeight(Protocol):
    @property
    def height(self) -> int: ...


def visible_bounds(
    items: Sequence[_HasHeight],
    selected: int | None,
    offset: int,
    max_height: int,
) -> tuple[int, int]:
    """Return the ``[start, end)`` item window that keeps *selected* in view."""
    offset = min(offset, len(items) - 1)
    start = end = offset
    height = 0
    for item in items[offset:]:
        if height + item.height > max_height:
            break
        height += item.height
        end += 1

    target = min(selected if selected is not None else offset, len(items) - 1)
    while target >= end:
        height += items[end].height
        end += 1
        while height > max_height and start < end - 1:
            height -= items[start].height
            start += 1
    while target < start:
        start -= 1
        height += items[start].height
        while height > max_height and end > start + 1:
            end -= 1
            height -= items[end].height

    # A single item taller than the area is still drawn, clipped
    if end == start:
        end = start + 1
    return start, end


@dataclass
class List:
    items: list[ListItem] = field(default_factory=list)
    block: Block | None = None
    style: Style = Style()
    highlight_style: Style = Style()
    highlight_symbol: str | None = None

    def render(self, area: Rect, buf: Buffer, state: ListState | None = None) -> None:
        if state is None:
            state = ListState()
        buf.set_style(area, self.style)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty() or not self.items:
            return

        start, end = visible_bounds(self.items, state.selected, state.offset, area.height)
        state.offset = start

        symbol = self.highlight_symbol or ""
        blank = " " * visible_width(symbol)
        has_selection = state.selected is not None

        y = area.top
        for i in range(start, end):
            if y >= area.bottom:
                break
            item = self.items[i]
            item_area = Rect(area.left, y, area.width, item.height).intersection(area)
            buf.set_style(item_area, item.style)
            is_selected = state.selected == i

            for j, line in enumerate(item.content.lines):
                row = y + j
                if row >= area.bottom:
                    break
                x = area.left
                if has_selection:
                    prefix = symbol if is_selected and j == 0 else blank
                    x = buf.set_stringn(x, row, prefix, area.width, item.style)
                buf.set_spans(x, row, line, area.right - x)

            if is_selected:
                buf.set_style(item_area, self.highlight_style)
            y += item.height
