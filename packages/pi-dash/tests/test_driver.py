"""Tests for pi.dash.driver -- frame diffing and the run loop, on a VirtualTerminal."""

from __future__ import annotations

import pytest

from pi.dash.app import App
from pi.dash.driver import Dashboard, render_buffer
from pi.dash.errors import TerminalIOError
from pi.dash.keys import KeyId

from .virtual_terminal import VirtualTerminal


def _dashboard(rows: int = 24, columns: int = 80, keys: list[str | None] | None = None):
    term = VirtualTerminal(rows=rows, columns=columns, keys=keys or [])
    return term, Dashboard(term, App())


# ---------------------------------------------------------------------------
# render_buffer
# ---------------------------------------------------------------------------


class TestRenderBuffer:
    def test_buffer_matches_size(self) -> None:
        buf = render_buffer(App(), 80, 24)
        assert buf.area.width == 80
        assert buf.area.height == 24
        assert len(buf.plain_lines()) == 24

    def test_rendering_is_deterministic(self) -> None:
        app = App()
        assert render_buffer(app, 100, 40).to_lines() == render_buffer(app, 100, 40).to_lines()


# ---------------------------------------------------------------------------
# draw
# ---------------------------------------------------------------------------


class TestDraw:
    def test_first_frame_is_full_redraw(self) -> None:
        term, dash = _dashboard()
        dash.draw()
        assert dash.full_redraws == 1
        assert term.output.startswith("\x1b[2J\x1b[H")
        assert term.output.count(";1H") == 24
        assert term.write_count == 1

    def test_unchanged_frame_writes_nothing(self) -> None:
        term, dash = _dashboard()
        dash.draw()
        term.clear_buffer()
        dash.draw()
        assert term.write_count == 0
        assert dash.full_redraws == 1

    def test_only_changed_rows_are_written(self) -> None:
        term, dash = _dashboard()
        dash.draw()
        term.clear_buffer()
        dash.app.handle_key("down")
        dash.draw()
        # The three task rows gain a prefix column
        assert term.output.count(";1H") == 3
        assert "\x1b[2J" not in term.output
        assert "> " in term.output

    def test_tab_switch_rewrites_changed_rows(self) -> None:
        term, dash = _dashboard()
        dash.draw()
        term.clear_buffer()
        dash.app.handle_key("right")
        dash.draw()
        assert term.write_count == 1
        assert "\x1b[2J" not in term.output
        assert dash.full_redraws == 1

    def test_resize_forces_full_redraw(self) -> None:
        term, dash = _dashboard()
        dash.draw()
        term.simulate_resize(rows=30, columns=100)
        term.clear_buffer()
        dash.draw()
        assert dash.full_redraws == 2
        assert "\x1b[2J" in term.output
        assert term.output.count(";1H") == 30

    def test_zero_size_writes_nothing(self) -> None:
        term, dash = _dashboard(rows=0, columns=0)
        dash.draw()
        assert term.write_count == 0
        assert dash.full_redraws == 0


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------


class TestRun:
    def test_quits_on_q(self) -> None:
        term, dash = _dashboard(keys=["q"])
        dash.run()
        assert term.start_count == 1
        assert term.stop_count == 1
        assert not term.started

    def test_keys_are_applied_until_quit(self) -> None:
        term, dash = _dashboard(keys=["right", "down", "ctrl+c", "left"])
        dash.run()
        assert dash.app.tabs.index == 1
        assert dash.app.tasks.selected == 0
        assert term.stop_count == 1

    def test_none_keys_redraw_without_effect(self) -> None:
        term, dash = _dashboard(keys=[None, None, "q"])
        dash.run()
        assert dash.full_redraws == 1
        assert dash.app.tabs.index == 0

    def test_write_failure_still_stops(self) -> None:
        term, dash = _dashboard(keys=["q"])
        term.fail_writes_with = TerminalIOError("boom")
        with pytest.raises(TerminalIOError):
            dash.run()
        assert term.stop_count == 1

    def test_os_error_becomes_terminal_error(self) -> None:
        term, dash = _dashboard(keys=["q"])
        term.fail_writes_with = OSError(5, "Input/output error")
        with pytest.raises(TerminalIOError) as exc_info:
            dash.run()
        assert isinstance(exc_info.value.__cause__, OSError)
        assert term.stop_count == 1

    def test_failed_start_still_stops(self) -> None:
        class FailingStart(VirtualTerminal):
            def start(self) -> None:
                super().start()
                raise TerminalIOError("cannot enter alternate screen")

        term = FailingStart(keys=["q"])
        with pytest.raises(TerminalIOError):
            Dashboard(term, App()).run()
        assert term.stop_count == 1
        assert term.write_count == 0

    def test_keyboard_interrupt_restores_terminal(self) -> None:
        class InterruptingTerminal(VirtualTerminal):
            def read_key(self) -> KeyId | None:
                raise KeyboardInterrupt

        term = InterruptingTerminal()
        with pytest.raises(KeyboardInterrupt):
            Dashboard(term, App()).run()
        assert term.stop_count == 1
