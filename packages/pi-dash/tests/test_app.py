"""Tests for pi.dash.app -- tab navigation, key handling and the views."""

from __future__ import annotations

import pytest

from pi.dash.app import App, TabsState
from pi.dash.canvas import Marker
from pi.dash.data import LogEntry, StaticDataProvider, Task
from pi.dash.driver import render_buffer
from pi.dash.style import Color, Modifier


def _text(app: App, width: int = 120, height: int = 80) -> str:
    return "\n".join(render_buffer(app, width, height).plain_lines())


class TestTabsState:
    def test_starts_at_first(self) -> None:
        tabs = TabsState(["Task", "Server"])
        assert tabs.index == 0
        assert tabs.current == "Task"

    def test_next_wraps(self) -> None:
        tabs = TabsState(["Task", "Server"])
        tabs.next()
        assert tabs.index == 1
        tabs.next()
        assert tabs.index == 0

    def test_previous_wraps(self) -> None:
        tabs = TabsState(["Task", "Server"])
        tabs.previous()
        assert tabs.index == 1
        tabs.previous()
        assert tabs.index == 0

    def test_index_stays_in_bounds(self) -> None:
        tabs = TabsState(["a", "b", "c"])
        for _ in range(7):
            tabs.next()
            assert 0 <= tabs.index < 3
        for _ in range(7):
            tabs.previous()
            assert 0 <= tabs.index < 3

    def test_requires_titles(self) -> None:
        with pytest.raises(ValueError):
            TabsState([])


class TestHandleKey:
    @pytest.mark.parametrize("key", ["q", "ctrl+c"])
    def test_quit_keys(self, key: str) -> None:
        assert App().handle_key(key) is False

    def test_right_and_left_switch_tabs(self) -> None:
        app = App()
        assert app.handle_key("right") is True
        assert app.tabs.index == 1
        assert app.handle_key("left") is True
        assert app.tabs.index == 0

    def test_left_from_first_wraps(self) -> None:
        app = App()
        app.handle_key("left")
        assert app.tabs.index == 1

    def test_down_and_up_move_task_selection(self) -> None:
        app = App()
        app.handle_key("down")
        assert app.tasks.selected == 0
        app.handle_key("down")
        assert app.tasks.selected == 1
        app.handle_key("up")
        app.handle_key("up")
        assert app.tasks.selected == 2

    @pytest.mark.parametrize("key", ["x", "enter", "Q", None])
    def test_other_keys_ignored(self, key: str | None) -> None:
        app = App()
        assert app.handle_key(key) is True
        assert app.tabs.index == 0
        assert app.tasks.selected is None


class TestTaskView:
    def test_tab_bar(self) -> None:
        text = _text(App())
        assert "tuidemo" in text
        assert "Task │ Server" in text

    def test_custom_title(self) -> None:
        assert "ops-board" in _text(App(title="ops-board"))

    def test_gauge(self) -> None:
        text = _text(App())
        assert "Progress:" in text
        assert "50.00%" in text

    def test_task_list_without_selection(self) -> None:
        text = _text(App())
        assert "│Task1" in text
        assert "> " not in text

    def test_task_list_with_selection(self) -> None:
        app = App()
        app.handle_key("down")
        assert "│> Task1" in _text(app)

    def test_selection_is_bold(self) -> None:
        app = App()
        app.handle_key("down")
        buf = render_buffer(app, 120, 80)
        row = next(i for i, line in enumerate(buf.plain_lines()) if "> Task1" in line)
        col = buf.plain_lines()[row].index("> Task1")
        assert buf.get(col + 2, row).modifier & Modifier.BOLD

    def test_log_levels_padded_and_coloured(self) -> None:
        buf = render_buffer(App(), 120, 80)
        lines = buf.plain_lines()
        assert any("INFO     Event1" in line for line in lines)
        assert any("WARN     Event2" in line for line in lines)
        row = next(i for i, line in enumerate(lines) if "ERROR    Event3" in line)
        col = lines[row].index("ERROR")
        assert buf.get(col, row).fg is Color.MAGENTA
        warn_row = next(i for i, line in enumerate(lines) if "WARN" in line)
        # Only WARNING is yellow; WARN falls back to the info colour
        assert buf.get(lines[warn_row].index("WARN"), warn_row).fg is Color.BLUE

    def test_details_paragraph(self) -> None:
        text = _text(App())
        assert "Details" in text
        assert "10€" in text
        assert "For example: under the rainbow." in text

    def test_root_fill(self) -> None:
        buf = render_buffer(App(), 60, 30)
        corner = buf.get(0, 0)
        assert corner.bg is Color.BLACK
        assert corner.fg is Color.WHITE

    def test_small_terminal_does_not_raise(self) -> None:
        for width, height in [(1, 1), (5, 5), (11, 12), (20, 8)]:
            render_buffer(App(), width, height)


class TestServerView:
    def setup_method(self) -> None:
        self.app = App()
        self.app.handle_key("right")

    def test_table(self) -> None:
        text = _text(self.app)
        assert "Server" in text
        assert "Location" in text
        assert "10.0.0.1" in text
        assert "Shanghai" in text

    def test_row_styles(self) -> None:
        buf = render_buffer(self.app, 120, 80)
        lines = buf.plain_lines()
        up = next(i for i, line in enumerate(lines) if "10.0.0.1" in line)
        fail = next(i for i, line in enumerate(lines) if "10.0.0.2" in line)
        up_cell = buf.get(lines[up].index("10.0.0.1"), up)
        fail_cell = buf.get(lines[fail].index("10.0.0.2"), fail)
        assert up_cell.fg is Color.GREEN
        assert fail_cell.fg is Color.RED
        assert fail_cell.modifier & Modifier.CROSSED_OUT
        assert fail_cell.modifier & Modifier.RAPID_BLINK

    def test_header_yellow(self) -> None:
        # Narrower tables clip the status column
        buf = render_buffer(self.app, 160, 60)
        lines = buf.plain_lines()
        row = next(i for i, line in enumerate(lines) if "Location" in line and "Status" in line)
        assert buf.get(lines[row].index("Status"), row).fg is Color.YELLOW

    def test_location_canvas(self) -> None:
        assert "Location" in _text(self.app)

    def test_dot_marker_setting(self) -> None:
        app = App(marker=Marker.DOT)
        app.handle_key("right")
        assert "•" in _text(app)


class TestProvider:
    def test_custom_records(self) -> None:
        provider = StaticDataProvider(
            tasks=[Task("Deploy")],
            logs=[LogEntry("Disk full", "CRITICAL")],
            servers=[],
        )
        app = App(provider)
        buf = render_buffer(app, 120, 80)
        lines = buf.plain_lines()
        assert any("Deploy" in line for line in lines)
        row = next(i for i, line in enumerate(lines) if "CRITICAL Disk full" in line)
        assert buf.get(lines[row].index("CRITICAL"), row).fg is Color.RED

    def test_no_servers(self) -> None:
        app = App(StaticDataProvider(servers=[]))
        app.handle_key("right")
        render_buffer(app, 120, 40)
