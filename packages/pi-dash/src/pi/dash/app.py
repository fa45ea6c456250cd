"""Dashboard state, key handling and the view composition.

The app has one view per tab.  ``render`` always draws the tab bar, then
composes the view of the active tab into the remaining area.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pi.dash.buffer import Frame
from pi.dash.canvas import Canvas, Label, Layer, Line, Map, MapResolution, Marker
from pi.dash.data import DataProvider, LogEntry, StaticDataProvider, Task
from pi.dash.keys import Key, KeyId
from pi.dash.layout import Direction, Layout, Length, Min, Percentage, Rect
from pi.dash.selection import StatefulList
from pi.dash.style import Color, Modifier, Style
from pi.dash.text import Span, Spans, Text
from pi.dash.widgets import (
    Block,
    Borders,
    Gauge,
    List,
    ListItem,
    Paragraph,
    Row,
    Table,
    Tabs,
    Wrap,
)

logger = logging.getLogger(__name__)

TAB_TITLES = ("Task", "Server")

QUIT_KEYS = frozenset({"q", Key.ctrl("c")})

LOG_LEVEL_STYLES: dict[str, Style] = {
    "ERROR": Style(fg=Color.MAGENTA),
    "CRITICAL": Style(fg=Color.RED),
    "WARNING": Style(fg=Color.YELLOW),
}
_DEFAULT_LOG_STYLE = Style(fg=Color.BLUE)


class TabsState:
    """Titles plus the active index, cycling in both directions."""

    def __init__(self, titles: Sequence[str]) -> None:
        if not titles:
            raise ValueError("TabsState needs at least one title")
        self.titles = list(titles)
        self.index = 0

    def next(self) -> None:
        self.index = (self.index + 1) % len(self.titles)

    def previous(self) -> None:
        if self.index > 0:
            self.index -= 1
        else:
            self.index = len(self.titles) - 1

    @property
    def current(self) -> str:
        return self.titles[self.index]


class App:
    def __init__(
        self,
        provider: DataProvider | None = None,
        *,
        title: str = "tuidemo",
        margin: int = 5,
        marker: Marker = Marker.BRAILLE,
        map_resolution: MapResolution = MapResolution.HIGH,
    ) -> None:
        self.provider = provider if provider is not None else StaticDataProvider()
        self.title = title
        self.margin = margin
        self.marker = marker
        self.map_resolution = map_resolution
        self.progress = 0.5

        self.tabs = TabsState(TAB_TITLES)
        self.tasks: StatefulList[Task] = StatefulList.with_items(self.provider.tasks())
        self.logs: StatefulList[LogEntry] = StatefulList.with_items(self.provider.logs())

    # -- input --------------------------------------------------------------

    def handle_key(self, key: KeyId | None) -> bool:
        """Apply one key; returns ``False`` when the app should quit."""
        if key in QUIT_KEYS:
            logger.info("Quit requested (%s)", key)
            return False
        if key == Key.left:
            self.tabs.previous()
        elif key == Key.right:
            self.tabs.next()
        elif key == Key.down:
            self.tasks.next()
        elif key == Key.up:
            self.tasks.previous()
        else:
            return True
        logger.debug("Key %s: tab=%s task=%s", key, self.tabs.current, self.tasks.selected)
        return True

    # -- views --------------------------------------------------------------

    def render(self, f: Frame) -> None:
        size = f.size()
        chunks = Layout(Direction.VERTICAL, self.margin, (Length(3), Min(0))).split(size)

        f.render_widget(Block(style=Style(bg=Color.BLACK, fg=Color.WHITE)), size)

        titles = [Spans.of(Span(t, Style(fg=Color.GREEN))) for t in self.tabs.titles]
        tabs = Tabs(
            titles,
            selected=self.tabs.index,
            block=Block(title=self.title, borders=Borders.ALL),
            highlight_style=Style(bg=Color.BLACK, add_modifier=Modifier.BOLD),
        )
        f.render_widget(tabs, chunks[0])

        if self.tabs.index == 0:
            self.draw_task(f, chunks[1])
        else:
            self.draw_server(f, chunks[1])

    def draw_task(self, f: Frame, area: Rect) -> None:
        chunks = Layout(Direction.VERTICAL, 0, (Length(4), Length(30), Length(30))).split(area)
        self.draw_gauge(f, chunks[0])
        self.draw_lists(f, chunks[1])
        self.draw_text(f, chunks[2])

    def draw_gauge(self, f: Frame, area: Rect) -> None:
        f.render_widget(Block(title="Progress", borders=Borders.ALL), area)

        chunks = Layout(Direction.VERTICAL, 1, (Length(2), Length(1))).split(area)
        gauge = Gauge(
            ratio=self.progress,
            label=f"{self.progress * 100:.2f}%",
            block=Block(title="Progress:"),
            gauge_style=Style(
                fg=Color.MAGENTA,
                bg=Color.BLACK,
                add_modifier=Modifier.ITALIC | Modifier.BOLD,
            ),
        )
        f.render_widget(gauge, chunks[0])

    def draw_lists(self, f: Frame, area: Rect) -> None:
        chunks = Layout(Direction.HORIZONTAL, 0, (Percentage(50), Percentage(50))).split(area)

        tasks = List(
            [ListItem(Text.raw(task.name)) for task in self.tasks.items],
            block=Block(title="Task", borders=Borders.ALL),
            highlight_style=Style(add_modifier=Modifier.BOLD),
            highlight_symbol="> ",
        )
        f.render_stateful_widget(tasks, chunks[0], self.tasks.state)

        items = []
        for entry in self.logs.items:
            style = LOG_LEVEL_STYLES.get(entry.level, _DEFAULT_LOG_STYLE)
            items.append(ListItem(Text([Spans.of([Span(f"{entry.level:<9}", style), Span(entry.event)])])))
        logs = List(items, block=Block(title="Log", borders=Borders.ALL))
        f.render_stateful_widget(logs, chunks[1], self.logs.state)

    def draw_text(self, f: Frame, area: Rect) -> None:
        text = Text(
            [
                Spans.of(
                    "This is a paragraph with several lines. "
                    "You can change style your text the way you want"
                ),
                Spans.of(""),
                Spans.of(
                    [
                        Span("For example: "),
                        Span("under", Style(fg=Color.RED)),
                        Span(" "),
                        Span("the", Style(fg=Color.GREEN)),
                        Span(" "),
                        Span("rainbow", Style(fg=Color.BLUE)),
                        Span("."),
                    ]
                ),
                Spans.of(
                    [
                        Span("Oh and if you didn't "),
                        Span("notice", Style(add_modifier=Modifier.ITALIC)),
                        Span(" you can "),
                        Span("automatically", Style(add_modifier=Modifier.BOLD)),
                        Span(" "),
                        Span("wrap", Style(add_modifier=Modifier.REVERSED)),
                        Span(" your "),
                        Span("text", Style(add_modifier=Modifier.UNDERLINED)),
                        Span("."),
                    ]
                ),
                Spans.of("One more thing is that it should display unicode characters: 10€"),
            ]
        )
        paragraph = Paragraph(
            text,
            block=Block(title="Details", borders=Borders.ALL),
            wrap=Wrap(trim=True),
        )
        f.render_widget(paragraph, area)

    def draw_server(self, f: Frame, area: Rect) -> None:
        chunks = Layout(Direction.HORIZONTAL, 0, (Percentage(30), Percentage(70))).split(area)
        servers = self.provider.servers()

        up_style = Style(fg=Color.GREEN)
        fail_style = Style(fg=Color.RED, add_modifier=Modifier.RAPID_BLINK | Modifier.CROSSED_OUT)
        rows = [
            Row.of([s.host, s.location, s.status], up_style if s.is_up else fail_style)
            for s in servers
        ]
        table = Table(
            rows,
            header=Row(["Server", "Location", "Status"], Style(fg=Color.YELLOW), bottom_margin=1),
            widths=[Length(15), Length(15), Length(10)],
            block=Block(title="Server", borders=Borders.ALL),
        )
        f.render_widget(table, chunks[0])

        canvas = Canvas(
            x_bounds=(-180.0, 180.0),
            y_bounds=(-90.0, 90.0),
            marker=self.marker,
            block=Block(title="Location", borders=Borders.ALL),
        )
        canvas.paint(Map(Color.WHITE, self.map_resolution), Layer())
        for i, s1 in enumerate(servers):
            for s2 in servers[i + 1 :]:
                # x is longitude, y latitude
                canvas.paint(Line(s1.coords[1], s1.coords[0], s2.coords[1], s2.coords[0], Color.YELLOW))
        for server in servers:
            color = Color.GREEN if server.is_up else Color.RED
            canvas.paint(Label(server.coords[1], server.coords[0], Span("X", Style(fg=color))))
        f.render_widget(canvas, chunks[1])
