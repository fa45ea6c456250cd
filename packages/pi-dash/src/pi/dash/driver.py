"""Frame driver: renders the app into a buffer and pushes the changes.

Each frame is rendered in full into a fresh ``Buffer``; only the rows that
differ from the previous frame are written to the terminal.  A change of
terminal size (and the first frame) clears the screen and repaints
everything.
"""

from __future__ import annotations

import logging
import termios

from pi.dash.app import App
from pi.dash.buffer import Buffer, Frame
from pi.dash.errors import TerminalIOError
from pi.dash.layout import Rect
from pi.dash.terminal import Terminal

logger = logging.getLogger(__name__)

_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};1H"


def render_buffer(app: App, width: int, height: int) -> Buffer:
    """Render one frame of *app* into a new buffer of the given size."""
    buf = Buffer(Rect(0, 0, width, height))
    app.render(Frame(buf))
    return buf


class Dashboard:
    """Runs *app* on *terminal* until the app asks to quit."""

    def __init__(self, terminal: Terminal, app: App) -> None:
        self.terminal = terminal
        self.app = app
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] | None = None
        self._full_redraw_count = 0

    @property
    def full_redraws(self) -> int:
        """Number of frames that repainted the whole screen."""
        return self._full_redraw_count

    def draw(self) -> None:
        """Render a frame and write the rows that changed."""
        width, height = self.terminal.columns, self.terminal.rows
        if width <= 0 or height <= 0:
            return

        lines = render_buffer(self.app, width, height).to_lines()

        out: list[str] = []
        if (width, height) != self._previous_size:
            self._full_redraw_count += 1
            logger.debug("Full redraw at %dx%d", width, height)
            out.append(_CLEAR_SCREEN)
            for row, line in enumerate(lines):
                out.append(_MOVE_TO_FMT.format(row + 1))
                out.append(line)
        else:
            for row, line in enumerate(lines):
                if line != self._previous_lines[row]:
                    out.append(_MOVE_TO_FMT.format(row + 1))
                    out.append(line)

        self._previous_lines = lines
        self._previous_size = (width, height)
        if out:
            self.terminal.write("".join(out))

    def run(self) -> None:
        """Draw, wait for a key, apply it; repeat until quit.

        The terminal is restored on every exit path, including a failed
        ``start`` and ``KeyboardInterrupt``.
        """
        try:
            self.terminal.start()
            while True:
                self.draw()
                key = self.terminal.read_key()
                if not self.app.handle_key(key):
                    break
        except (OSError, termios.error) as e:
            raise TerminalIOError(f"Terminal I/O failed: {e}") from e
        finally:
            self.terminal.stop()
        logger.info("Dashboard exited after %d full redraws", self._full_redraw_count)
