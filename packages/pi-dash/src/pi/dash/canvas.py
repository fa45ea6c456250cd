"""Projection canvas - plot logical ``(x, y)`` coordinates onto terminal cells.

Drawing is a list of commands (points, lines, the world map, labels and
layer breaks) executed in order against a ``Context``.  Shapes are
rasterised into a grid whose resolution depends on the marker: braille
packs 2x4 dots into each cell, the dot and block markers use one per cell.

Coordinates are projected with::

    col = floor((x - x_min) * (res_w - 1) / (x_max - x_min))
    row = floor((y_max - y) * (res_h - 1) / (y_max - y_min))

so ``(x_min, y_min)`` lands on the bottom-left sub-cell and anything
outside the bounds is dropped.
"""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Protocol, Union

from pi.dash.buffer import Buffer
from pi.dash.layout import Rect
from pi.dash.style import Color, Style
from pi.dash.text import Spans, SpansLike
from pi.dash.widgets.block import Block
from pi.dash.world import WORLD_OUTLINES

logger = logging.getLogger(__name__)

BRAILLE_OFFSET = 0x2800

# Dot bit for sub-position [row][col] within a braille cell
BRAILLE_DOTS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)

DOT = "•"
BLOCK = "█"


class Marker(enum.Enum):
    BRAILLE = "braille"
    DOT = "dot"
    BLOCK = "block"


class MapResolution(enum.Enum):
    LOW = "low"
    HIGH = "high"


# One entry per cell; None is transparent
LayerCells = list[Union[tuple[str, Color], None]]


# ---------------------------------------------------------------------------
# Projection
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Domain:
    x_bounds: tuple[float, float] = (0.0, 1.0)
    y_bounds: tuple[float, float] = (0.0, 1.0)

    @property
    def width(self) -> float:
        return self.x_bounds[1] - self.x_bounds[0]

    @property
    def height(self) -> float:
        return self.y_bounds[1] - self.y_bounds[0]

    def is_valid(self) -> bool:
        return self.width > 0 and self.height > 0

    def contains(self, x: float, y: float) -> bool:
        # Written this way so NaN is never contained
        return (
            self.x_bounds[0] <= x <= self.x_bounds[1]
            and self.y_bounds[0] <= y <= self.y_bounds[1]
        )


def project(
    domain: Domain, resolution: tuple[int, int]
) -> Callable[[float, float], tuple[int, int] | None]:
    """Build a mapping from logical coordinates to grid positions."""
    res_w, res_h = resolution
    left, top = domain.x_bounds[0], domain.y_bounds[1]
    usable = domain.is_valid() and res_w > 0 and res_h > 0

    def to_grid(x: float, y: float) -> tuple[int, int] | None:
        if not usable or not domain.contains(x, y):
            return None
        col = math.floor((x - left) * (res_w - 1) / domain.width)
        row = math.floor((top - y) * (res_h - 1) / domain.height)
        return col, row

    return to_grid


def clip_line(
    x1: float, y1: float, x2: float, y2: float, domain: Domain
) -> tuple[float, float, float, float] | None:
    """Clip a segment to *domain* (Liang-Barsky); ``None`` if fully outside."""
    (left, right), (bottom, top) = domain.x_bounds, domain.y_bounds
    dx, dy = x2 - x1, y2 - y1
    t0, t1 = 0.0, 1.0
    for p, q in ((-dx, x1 - left), (dx, right - x1), (-dy, y1 - bottom), (dy, top - y1)):
        if p == 0:
            if q < 0:
                return None
            continue
        t = q / p
        if p < 0:
            if t > t1:
                return None
            t0 = max(t0, t)
        else:
            if t < t0:
                return None
            t1 = min(t1, t)

    def clamp(v: float, lo: float, hi: float) -> float:
        return min(max(v, lo), hi)

    # Rounding can leave a clipped endpoint a hair outside the bounds
    return (
        clamp(x1 + t0 * dx, left, right),
        clamp(y1 + t0 * dy, bottom, top),
        clamp(x1 + t1 * dx, left, right),
        clamp(y1 + t1 * dy, bottom, top),
    )


def bresenham(x1: int, y1: int, x2: int, y2: int) -> Iterator[tuple[int, int]]:
    """Yield every grid point on the segment, endpoints included."""
    dx = abs(x2 - x1)
    dy = -abs(y2 - y1)
    sx = 1 if x1 < x2 else -1
    sy = 1 if y1 < y2 else -1
    err = dx + dy
    while True:
        yield x1, y1
        if x1 == x2 and y1 == y2:
            return
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x1 += sx
        if e2 <= dx:
            err += dx
            y1 += sy


# ---------------------------------------------------------------------------
# Grids
# ---------------------------------------------------------------------------


class Grid(Protocol):
    width: int
    height: int

    def resolution(self) -> tuple[int, int]: ...

    def paint(self, x: int, y: int, color: Color) -> None: ...

    def save(self) -> LayerCells: ...

    def reset(self) -> None: ...


class BrailleGrid:
    """Grid with 2x4 dots per cell, combined into one braille glyph."""

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.cells = [0] * (width * height)
        self.colors = [Color.RESET] * (width * height)

    def resolution(self) -> tuple[int, int]:
        return self.width * 2, self.height * 4

    def paint(self, x: int, y: int, color: Color) -> None:
        col, row = x // 2, y // 4
        if not (0 <= col < self.width and 0 <= row < self.height):
            return
        idx = row * self.width + col
        self.cells[idx] |= BRAILLE_DOTS[y % 4][x % 2]
        self.colors[idx] = color

    def save(self) -> LayerCells:
        return [
            (chr(BRAILLE_OFFSET + bits), color) if bits else None
            for bits, color in zip(self.cells, self.colors)
        ]

    def reset(self) -> None:
        self.cells = [0] * (self.width * self.height)
        self.colors = [Color.RESET] * (self.width * self.height)


class CharGrid:
    """Grid with one position per cell, drawn with a fixed symbol."""

    def __init__(self, width: int, height: int, symbol: str) -> None:
        self.width = width
        self.height = height
        self.symbol = symbol
        self.cells: list[Color | None] = [None] * (width * height)

    def resolution(self) -> tuple[int, int]:
        return self.width, self.height

    def paint(self, x: int, y: int, color: Color) -> None:
        if 0 <= x < self.width and 0 <= y < self.height:
            self.cells[y * self.width + x] = color

    def save(self) -> LayerCells:
        return [None if color is None else (self.symbol, color) for color in self.cells]

    def reset(self) -> None:
        self.cells = [None] * (self.width * self.height)


def make_grid(marker: Marker, width: int, height: int) -> Grid:
    if marker is Marker.BRAILLE:
        return BrailleGrid(width, height)
    if marker is Marker.DOT:
        return CharGrid(width, height, DOT)
    return CharGrid(width, height, BLOCK)


# ---------------------------------------------------------------------------
# Draw commands
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Points:
    coords: tuple[tuple[float, float], ...] = ()
    color: Color = Color.RESET

    def __post_init__(self) -> None:
        if not isinstance(self.coords, tuple):
            object.__setattr__(self, "coords", tuple(self.coords))


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color = Color.RESET


@dataclass(frozen=True)
class Rectangle:
    x: float
    y: float
    width: float
    height: float
    color: Color = Color.RESET


@dataclass(frozen=True)
class Map:
    color: Color = Color.RESET
    resolution: MapResolution = MapResolution.LOW


@dataclass(frozen=True)
class Layer:
    """Freeze everything drawn so far; later shapes land on top."""


@dataclass(frozen=True)
class Label:
    x: float
    y: float
    spans: SpansLike


Shape = Union[Points, Line, Rectangle, Map]
Command = Union[Points, Line, Rectangle, Map, Layer, Label]


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------


class Context:
    """Executes draw commands into a grid and collects the finished layers."""

    def __init__(self, width: int, height: int, domain: Domain, marker: Marker) -> None:
        self.domain = domain
        self.marker = marker
        self.grid = make_grid(marker, width, height)
        self.to_grid = project(domain, self.grid.resolution())
        self.layers: list[LayerCells] = []
        self.labels: list[Label] = []
        self._dirty = False

    def plot(self, x: float, y: float, color: Color) -> bool:
        point = self.to_grid(x, y)
        if point is None:
            return False
        self.grid.paint(point[0], point[1], color)
        self._dirty = True
        return True

    def draw_line(self, x1: float, y1: float, x2: float, y2: float, color: Color) -> None:
        clipped = clip_line(x1, y1, x2, y2, self.domain)
        if clipped is None:
            return
        start = self.to_grid(clipped[0], clipped[1])
        end = self.to_grid(clipped[2], clipped[3])
        if start is None or end is None:
            return
        for col, row in bresenham(start[0], start[1], end[0], end[1]):
            self.grid.paint(col, row, color)
        self._dirty = True

    def draw(self, shape: Shape) -> None:
        if isinstance(shape, Points):
            for x, y in shape.coords:
                self.plot(x, y, shape.color)
        elif isinstance(shape, Line):
            self.draw_line(shape.x1, shape.y1, shape.x2, shape.y2, shape.color)
        elif isinstance(shape, Rectangle):
            left, bottom = shape.x, shape.y
            right, top = shape.x + shape.width, shape.y + shape.height
            self.draw_line(left, bottom, right, bottom, shape.color)
            self.draw_line(right, bottom, right, top, shape.color)
            self.draw_line(right, top, left, top, shape.color)
            self.draw_line(left, top, left, bottom, shape.color)
        elif isinstance(shape, Map):
            self._draw_map(shape)
        else:
            raise TypeError(f"not a canvas shape: {shape!r}")

    def _draw_map(self, shape: Map) -> None:
        for outline in WORLD_OUTLINES:
            if shape.resolution is MapResolution.LOW:
                for lon, lat in outline:
                    self.plot(lon, lat, shape.color)
                continue
            for (lon1, lat1), (lon2, lat2) in zip(outline, outline[1:]):
                self.draw_line(lon1, lat1, lon2, lat2, shape.color)

    def layer(self) -> None:
        self.layers.append(self.grid.save())
        self.grid.reset()
        self._dirty = False

    def print(self, label: Label) -> None:
        self.labels.append(label)

    def execute(self, commands: Sequence[Command]) -> None:
        for command in commands:
            if isinstance(command, Layer):
                self.layer()
            elif isinstance(command, Label):
                self.print(command)
            else:
                self.draw(command)

    def finish(self) -> None:
        if self._dirty:
            self.layer()


# ---------------------------------------------------------------------------
# Widget
# ---------------------------------------------------------------------------


@dataclass
class Canvas:
    x_bounds: tuple[float, float] = (0.0, 1.0)
    y_bounds: tuple[float, float] = (0.0, 1.0)
    marker: Marker = Marker.BRAILLE
    block: Block | None = None
    background_color: Color = Color.RESET
    commands: list[Command] = field(default_factory=list)

    def paint(self, *commands: Command) -> Canvas:
        """Append draw commands; returns ``self`` so calls can be chained."""
        self.commands.extend(commands)
        return self

    def render(self, area: Rect, buf: Buffer) -> None:
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        area = area.intersection(buf.area)
        if area.is_empty():
            return
        buf.set_style(area, Style(bg=self.background_color))

        domain = Domain(self.x_bounds, self.y_bounds)
        if not domain.is_valid():
            logger.debug("Canvas bounds %s x %s are empty; nothing drawn", self.x_bounds, self.y_bounds)
            return

        ctx = Context(area.width, area.height, domain, self.marker)
        ctx.execute(self.commands)
        ctx.finish()

        for cells in ctx.layers:
            for i, entry in enumerate(cells):
                if entry is None:
                    continue
                symbol, color = entry
                cell = buf.get(area.left + i % area.width, area.top + i // area.width)
                cell.symbol = symbol
                cell.set_style(Style(fg=color))

        # Labels snap to the cell grid, independent of the marker
        to_cell = project(domain, (area.width, area.height))
        for label in ctx.labels:
            pos = to_cell(label.x, label.y)
            if pos is None:
                continue
            x = area.left + pos[0]
            buf.set_spans(x, area.top + pos[1], Spans.of(label.spans), area.right - x)
