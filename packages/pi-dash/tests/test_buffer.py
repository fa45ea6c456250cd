"""Tests for pi.dash.buffer -- cell writes, clipping and line output."""

from __future__ import annotations

import pytest

from pi.dash.buffer import Buffer, Frame
from pi.dash.layout import Rect
from pi.dash.style import Color, Modifier, Style
from pi.dash.text import Span, Spans
from pi.dash.utils import visible_width


class TestSetString:
    def test_writes_and_returns_next_column(self) -> None:
        buf = Buffer(Rect(0, 0, 10, 1))
        assert buf.set_string(2, 0, "abc") == 5
        assert buf.plain_lines() == ["  abc     "]

    def test_clipped_at_max_width(self) -> None:
        buf = Buffer(Rect(0, 0, 10, 1))
        buf.set_stringn(0, 0, "abcdef", 3)
        assert buf.plain_lines() == ["abc       "]

    def test_clipped_at_buffer_edge(self) -> None:
        buf = Buffer(Rect(0, 0, 4, 1))
        buf.set_string(2, 0, "abcdef")
        assert buf.plain_lines() == ["  ab"]

    def test_row_outside_is_ignored(self) -> None:
        buf = Buffer(Rect(0, 0, 4, 1))
        assert buf.set_string(0, 3, "ab") == 0
        assert buf.plain_lines() == ["    "]

    def test_wide_glyph_leaves_continuation(self) -> None:
        buf = Buffer(Rect(0, 0, 4, 1))
        assert buf.set_string(0, 0, "世a") == 3
        assert buf.get(0, 0).symbol == "世"
        assert buf.get(1, 0).symbol == ""
        assert buf.plain_lines() == ["世a "]

    def test_wide_glyph_not_split(self) -> None:
        buf = Buffer(Rect(0, 0, 3, 1))
        buf.set_string(2, 0, "世")
        assert buf.plain_lines() == ["   "]

    def test_overwriting_wide_lead_clears_continuation(self) -> None:
        buf = Buffer(Rect(0, 0, 6, 1))
        buf.set_string(0, 0, "中")
        buf.set_string(0, 0, "a")
        assert buf.plain_lines() == ["a     "]
        assert visible_width(buf.plain_lines()[0]) == 6

    def test_overwriting_continuation_clears_lead(self) -> None:
        buf = Buffer(Rect(0, 0, 6, 1))
        buf.set_string(0, 0, "中")
        buf.set_string(1, 0, "b")
        assert buf.plain_lines() == [" b    "]

    def test_wide_over_wide_offset_by_one(self) -> None:
        buf = Buffer(Rect(0, 0, 6, 1))
        buf.set_string(0, 0, "中")
        buf.set_string(1, 0, "国")
        line = buf.plain_lines()[0]
        assert line == " 国   "
        assert visible_width(line) == 6
        assert visible_width(buf.to_lines()[0]) == 6

    def test_wide_glyph_kept_when_neighbour_written(self) -> None:
        buf = Buffer(Rect(0, 0, 6, 1))
        buf.set_string(0, 0, "中")
        buf.set_string(2, 0, "c")
        assert buf.plain_lines() == ["中c   "]

    def test_style_applied(self) -> None:
        buf = Buffer(Rect(0, 0, 4, 1))
        buf.set_string(0, 0, "a", Style(fg=Color.RED, add_modifier=Modifier.BOLD))
        cell = buf.get(0, 0)
        assert cell.fg is Color.RED
        assert cell.modifier & Modifier.BOLD

    def test_spans(self) -> None:
        buf = Buffer(Rect(0, 0, 10, 1))
        end = buf.set_spans(0, 0, Spans.of([Span("ab"), Span("cd", Style(fg=Color.BLUE))]), 3)
        assert end == 3
        assert buf.plain_lines() == ["abc       "]
        assert buf.get(2, 0).fg is Color.BLUE


class TestStyle:
    def test_set_style_clips_to_buffer(self) -> None:
        buf = Buffer(Rect(0, 0, 2, 2))
        buf.set_style(Rect(1, 1, 10, 10), Style(bg=Color.GREEN))
        assert buf.get(1, 1).bg is Color.GREEN
        assert buf.get(0, 0).bg is Color.RESET

    def test_sub_modifier(self) -> None:
        buf = Buffer(Rect(0, 0, 1, 1))
        buf.set_style(buf.area, Style(add_modifier=Modifier.BOLD | Modifier.ITALIC))
        buf.set_style(buf.area, Style(sub_modifier=Modifier.BOLD))
        assert buf.get(0, 0).modifier == Modifier.ITALIC

    def test_patch_layers_styles(self) -> None:
        base = Style(fg=Color.RED, bg=Color.BLACK, add_modifier=Modifier.BOLD)
        top = Style(fg=Color.BLUE, sub_modifier=Modifier.BOLD, add_modifier=Modifier.ITALIC)
        patched = base.patch(top)
        assert patched.fg is Color.BLUE
        assert patched.bg is Color.BLACK
        assert patched.add_modifier == Modifier.ITALIC
        assert patched.sub_modifier == Modifier.BOLD

    def test_get_outside_raises(self) -> None:
        with pytest.raises(IndexError):
            Buffer(Rect(0, 0, 2, 2)).get(2, 0)


class TestOutput:
    def test_to_lines_emits_sgr_on_change(self) -> None:
        buf = Buffer(Rect(0, 0, 3, 1))
        buf.set_string(0, 0, "ab", Style(fg=Color.RED))
        line = buf.to_lines()[0]
        assert line.count("\x1b[") == 3
        assert line.endswith("\x1b[0m")
        assert "ab" in line

    def test_reset(self) -> None:
        buf = Buffer(Rect(0, 0, 2, 1))
        buf.set_string(0, 0, "ab", Style(fg=Color.RED))
        buf.reset()
        assert buf.plain_lines() == ["  "]
        assert buf.get(0, 0).fg is Color.RESET

    def test_frame_renders_widgets(self) -> None:
        class Dot:
            def render(self, area: Rect, buf: Buffer) -> None:
                buf.set_string(area.x, area.y, "•")

        buf = Buffer(Rect(0, 0, 3, 3))
        frame = Frame(buf)
        frame.render_widget(Dot(), Rect(1, 1, 1, 1))
        assert frame.size() == Rect(0, 0, 3, 3)
        assert buf.plain_lines()[1] == " • "
