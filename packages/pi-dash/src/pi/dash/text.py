"""Styled text model: ``Span`` (styled string), ``Spans`` (one line),
``Text`` (many lines)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from pi.dash.style import Style
from pi.dash.utils import visible_width


@dataclass(frozen=True)
class Span:
    content: str
    style: Style = Style()

    @property
    def width(self) -> int:
        return visible_width(self.content)


SpansLike = Union[str, Span, "Spans", Sequence[Span]]


@dataclass(frozen=True)
class Spans:
    """A single line made of differently styled spans."""

    spans: tuple[Span, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.spans, tuple):
            object.__setattr__(self, "spans", tuple(self.spans))

    @classmethod
    def of(cls, value: SpansLike) -> Spans:
        if isinstance(value, Spans):
            return value
        if isinstance(value, str):
            return cls((Span(value),))
        if isinstance(value, Span):
            return cls((value,))
        return cls(tuple(value))

    @property
    def width(self) -> int:
        return sum(s.width for s in self.spans)

    @property
    def plain(self) -> str:
        return "".join(s.content for s in self.spans)


@dataclass
class Text:
    """Multi-line styled text."""

    lines: list[Spans] = field(default_factory=list)

    @classmethod
    def raw(cls, content: str) -> Text:
        return cls([Spans.of(line) for line in content.split("\n")])

    @classmethod
    def of(cls, value: str | Text | SpansLike | Sequence[SpansLike]) -> Text:
        if isinstance(value, Text):
            return value
        if isinstance(value, str):
            return cls.raw(value)
        if isinstance(value, (Span, Spans)):
            return cls([Spans.of(value)])
        items = list(value)
        if items and all(isinstance(item, Span) for item in items):
            return cls([Spans.of(items)])
        return cls([Spans.of(item) for item in items])

    @property
    def height(self) -> int:
        return len(self.lines)

    @property
    def width(self) -> int:
        return max((line.width for line in self.lines), default=0)
