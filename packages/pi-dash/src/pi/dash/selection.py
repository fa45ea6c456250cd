"""Selection model for list-like widgets.

``ListState`` is what the List and Table widgets read while rendering;
``StatefulList`` pairs it with the items and owns the wrap-around
navigation.  Both ``next`` and ``previous`` are O(1) and never leave the
selection outside ``[0, len(items))``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class ListState:
    """Selected index plus the first visible row (kept in view on render)."""

    selected: int | None = None
    offset: int = 0

    def select(self, index: int | None) -> None:
        self.selected = index
        if index is None:
            self.offset = 0


# Tables track selection the same way lists do
TableState = ListState


class StatefulList(Generic[T]):
    """Items plus a ``ListState`` with wrap-around navigation."""

    def __init__(self, items: Sequence[T], state: ListState | None = None) -> None:
        self.items: list[T] = list(items)
        self.state = state if state is not None else ListState()

    @classmethod
    def with_items(cls, items: Sequence[T]) -> StatefulList[T]:
        """Start with *items* and no selection."""
        return cls(items)

    @property
    def selected(self) -> int | None:
        return self.state.selected

    def next(self) -> None:
        if not self.items:
            self.state.select(None)
            return
        i = self.state.selected
        self.state.select(0 if i is None else (i + 1) % len(self.items))

    def previous(self) -> None:
        if not self.items:
            self.state.select(None)
            return
        i = self.state.selected
        if i is None:
            self.state.select(0)
        elif i == 0:
            self.state.select(len(self.items) - 1)
        else:
            self.state.select(i - 1)

    def select(self, index: int | None) -> None:
        """Select *index*, clamped into range (``None`` clears)."""
        if index is None or not self.items:
            self.state.select(None)
            return
        self.state.select(max(0, min(index, len(self.items) - 1)))

    def unselect(self) -> None:
        self.state.select(None)

    def set_items(self, items: Sequence[T]) -> None:
        """Replace the items, re-clamping any existing selection."""
        self.items = list(items)
        self.select(self.state.selected)

    def selected_item(self) -> T | None:
        i = self.state.selected
        if i is None or i >= len(self.items):
            return None
        return self.items[i]

    def __len__(self) -> int:
        return len(self.items)
