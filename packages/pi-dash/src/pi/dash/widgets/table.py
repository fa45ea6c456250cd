"""Table widget - a header row plus data rows laid out in fixed columns."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from pi.dash.buffer import Buffer
from pi.dash.layout import Constraint, Direction, Length, Min, Rect, split
from pi.dash.selection import TableState
from pi.dash.style import Style
from pi.dash.text import SpansLike, Text
from pi.dash.utils import visible_width
from pi.dash.widgets.block import Block
from pi.dash.widgets.list import visible_bounds


@dataclass
class Row:
    cells: list[Text] = field(default_factory=list)
    style: Style = Style()
    height: int = 1
    bottom_margin: int = 0

    def __post_init__(self) -> None:
        self.cells = [Text.of(c) for c in self.cells]

    @classmethod
    def of(cls, cells: Sequence[SpansLike], style: Style = Style()) -> Row:
        return cls([Text.of(c) for c in cells], style)


@dataclass
class Table:
    rows: list[Row] = field(default_factory=list)
    header: Row | None = None
    widths: list[Constraint] = field(default_factory=list)
    block: Block | None = None
    style: Style = Style()
    highlight_style: Style = Style()
    highlight_symbol: str | None = None
    column_spacing: int = 1

    def column_bounds(self, max_width: int) -> list[tuple[int, int]]:
        """``(x_offset, width)`` per column within *max_width* cells."""
        if not self.widths:
            return []
        constraints: list[Constraint] = []
        for i, c in enumerate(self.widths):
            if i:
                constraints.append(Length(self.column_spacing))
            constraints.append(c)
        # Trailing filler soaks up the slack so columns keep their widths
        constraints.append(Min(0))
        rects = split(Rect(0, 0, max_width, 1), Direction.HORIZONTAL, 0, constraints)
        return [(r.x, r.width) for r in rects[:-1:2]]

    def _render_cells(
        self, buf: Buffer, row: Row, x: int, y: int, bottom: int, columns: list[tuple[int, int]]
    ) -> None:
        for (offset, width), cell in zip(columns, row.cells):
            for j, line in enumerate(cell.lines[: row.height]):
                if y + j >= bottom:
                    break
                buf.set_spans(x + offset, y + j, line, width)

    def render(self, area: Rect, buf: Buffer, state: TableState | None = None) -> None:
        if state is None:
            state = TableState()
        buf.set_style(area, self.style)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty():
            return

        has_selection = state.selected is not None
        symbol = self.highlight_symbol or ""
        symbol_width = visible_width(symbol) if has_selection else 0
        columns = self.column_bounds(max(0, area.width - symbol_width))
        x = area.left + symbol_width

        y = area.top
        if self.header is not None:
            header_area = Rect(area.left, y, area.width, self.header.height).intersection(area)
            buf.set_style(header_area, self.header.style)
            self._render_cells(buf, self.header, x, y, area.bottom, columns)
            y += self.header.height + self.header.bottom_margin

        rows_height = area.bottom - y
        if rows_height <= 0 or not self.rows:
            return

        start, end = visible_bounds(self.rows, state.selected, state.offset, rows_height)
        state.offset = start
        for i in range(start, end):
            if y >= area.bottom:
                break
            row = self.rows[i]
            row_area = Rect(area.left, y, area.width, row.height).intersection(area)
            buf.set_style(row_area, row.style)
            is_selected = state.selected == i
            if is_selected and symbol:
                buf.set_stringn(area.left, y, symbol, area.width, row.style)
            self._render_cells(buf, row, x, y, area.bottom, columns)
            if is_selected:
                buf.set_style(row_area, self.highlight_style)
            y += row.height + row.bottom_margin
