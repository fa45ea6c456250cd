"""Rectangle geometry and constraint-based space partitioning.

A ``Rect`` is split along one axis into an ordered list of sub-rectangles,
one per ``Constraint``.  The result always covers the (margin-shrunk)
input exactly: no gaps, no overlaps, constraint order preserved.  Splits
compose, so a region returned by one ``split`` can be fed to the next to
build a tree of panels from a single terminal size.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from pi.dash.errors import InvalidConstraintConfiguration

logger = logging.getLogger(__name__)

__all__ = [
    "Constraint",
    "Direction",
    "Layout",
    "Length",
    "Min",
    "Percentage",
    "Ratio",
    "Rect",
    "split",
]


# ---------------------------------------------------------------------------
# Rect
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rect:
    """Axis-aligned region measured in terminal cells."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        # Negative extents are clamped rather than rejected
        if self.width < 0:
            object.__setattr__(self, "width", 0)
        if self.height < 0:
            object.__setattr__(self, "height", 0)

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def inner(self, margin: int) -> Rect:
        """Shrink by *margin* cells on every side, clamping at zero."""
        margin = max(0, margin)
        return Rect(
            x=self.x + min(margin, self.width),
            y=self.y + min(margin, self.height),
            width=max(0, self.width - 2 * margin),
            height=max(0, self.height - 2 * margin),
        )

    def intersection(self, other: Rect) -> Rect:
        """Return the overlapping region (zero-sized when disjoint)."""
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))

    def contains(self, x: int, y: int) -> bool:
        return self.left <= x < self.right and self.top <= y < self.bottom


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class Direction(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


@dataclass(frozen=True)
class Length:
    """A fixed number of cells."""

    length: int

    def __post_init__(self) -> None:
        if self.length < 0:
            raise InvalidConstraintConfiguration(
                f"Length must be >= 0, got {self.length}"
            )


@dataclass(frozen=True)
class Min:
    """At least *min* cells; grows to absorb leftover space."""

    min: int

    def __post_init__(self) -> None:
        if self.min < 0:
            raise InvalidConstraintConfiguration(
                f"Min must be >= 0, got {self.min}"
            )


@dataclass(frozen=True)
class Percentage:
    """A percentage (0-100) of the available length."""

    percent: int

    def __post_init__(self) -> None:
        if not 0 <= self.percent <= 100:
            raise InvalidConstraintConfiguration(
                f"Percentage must be within 0..100, got {self.percent}"
            )


@dataclass(frozen=True)
class Ratio:
    """A ``numerator / denominator`` share of the available length."""

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise InvalidConstraintConfiguration(
                f"Ratio denominator must be > 0, got {self.denominator}"
            )
        if self.numerator < 0:
            raise InvalidConstraintConfiguration(
                f"Ratio numerator must be >= 0, got {self.numerator}"
            )


Constraint = Union[Length, Min, Percentage, Ratio]


# ---------------------------------------------------------------------------
# Solver
# ---------------------------------------------------------------------------


def _solve(constraints: Sequence[Constraint], total: int) -> list[int]:
    """Resolve *constraints* into sizes that sum to exactly *total*.

    Fixed and minimum sizes are claimed first, in order.  Percentages and
    ratios are then measured against *total* and clamped to what is left.
    Any remainder goes to the last flexible constraint (the last one
    overall when every constraint is a ``Length``).
    """
    sizes = [0] * len(constraints)
    remaining = total

    requested = 0
    for i, c in enumerate(constraints):
        if isinstance(c, Length):
            want = c.length
        elif isinstance(c, Min):
            want = c.min
        else:
            continue
        requested += want
        size = min(want, remaining)
        sizes[i] = size
        remaining -= size

    if requested > total:
        logger.debug(
            "constraints request %d cells but only %d are available",
            requested,
            total,
        )

    for i, c in enumerate(constraints):
        if isinstance(c, Percentage):
            target = total * c.percent // 100
        elif isinstance(c, Ratio):
            target = total * c.numerator // c.denominator
        else:
            continue
        size = min(target, remaining)
        sizes[i] = size
        remaining -= size

    if remaining > 0:
        flexible = [i for i, c in enumerate(constraints) if not isinstance(c, Length)]
        last = flexible[-1] if flexible else len(constraints) - 1
        sizes[last] += remaining

    return sizes


# ---------------------------------------------------------------------------
# Split cache (capped, cleared when full)
# ---------------------------------------------------------------------------

_split_cache: dict[tuple, list[Rect]] = {}
_SPLIT_CACHE_MAX = 256


def split(
    area: Rect,
    direction: Direction,
    margin: int,
    constraints: Sequence[Constraint],
) -> list[Rect]:
    """Partition *area* into one ``Rect`` per constraint.

    The area is first shrunk by *margin* on all sides.  With no
    constraints the shrunk area is returned as the only element.
    """
    key = (area, direction, margin, tuple(constraints))
    cached = _split_cache.get(key)
    if cached is not None:
        return list(cached)

    inner = area.inner(margin)
    if not constraints:
        return [inner]

    horizontal = direction is Direction.HORIZONTAL
    total = inner.width if horizontal else inner.height
    sizes = _solve(constraints, total)

    rects: list[Rect] = []
    offset = inner.x if horizontal else inner.y
    for size in sizes:
        if horizontal:
            rects.append(Rect(offset, inner.y, size, inner.height))
        else:
            rects.append(Rect(inner.x, offset, inner.width, size))
        offset += size

    if len(_split_cache) >= _SPLIT_CACHE_MAX:
        _split_cache.clear()
    _split_cache[key] = rects
    return list(rects)


@dataclass(frozen=True)
class Layout:
    """Reusable split recipe: direction, margin and constraints."""

    direction: Direction = Direction.VERTICAL
    margin: int = 0
    constraints: tuple[Constraint, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.constraints, tuple):
            object.__setattr__(self, "constraints", tuple(self.constraints))

    def split(self, area: Rect) -> list[Rect]:
        return split(area, self.direction, self.margin, self.constraints)
