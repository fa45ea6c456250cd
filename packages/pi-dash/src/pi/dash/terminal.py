"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, mouse capture
and cursor visibility via ANSI escape sequences.  Input is read blocking,
one key at a time.
"""

from __future__ import annotations

import codecs
import logging
import os
import sys
import termios
import tty
from collections import deque
from typing import Protocol

from pi.dash.errors import TerminalIOError
from pi.dash.keys import KeyId, parse_key, split_sequences

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"

# Button events, drag events, SGR encoding
_MOUSE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1006h"
_MOUSE_DISABLE = "\x1b[?1006l\x1b[?1002l\x1b[?1000l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_key(self) -> KeyId | None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal implementation backed by ``sys.stdin``/``sys.stdout``.

    Raw mode goes through :mod:`tty` and :mod:`termios`.  Every failure to
    talk to the terminal surfaces as :class:`TerminalIOError`.
    """

    def __init__(self) -> None:
        self._original_termios: list | None = None
        self._started = False
        self._pending: deque[str] = deque()
        self._partial = ""
        # Multi-byte characters may arrive split across reads
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._write_log_path: str = os.environ.get("PI_DASH_WRITE_LOG", "")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enter raw mode and the alternate screen, capture the mouse."""
        try:
            fd = sys.stdin.fileno()
            # Save previous terminal state
            self._original_termios = termios.tcgetattr(fd)
            tty.setraw(fd)
        except (termios.error, OSError, ValueError) as e:
            raise TerminalIOError(f"Cannot enter raw mode: {e}") from e
        self._started = True
        logger.debug("Terminal started (%dx%d)", self.columns, self.rows)

        self.write(_ALT_SCREEN_ENABLE + _MOUSE_ENABLE + _HIDE_CURSOR + _CLEAR_SCREEN)

    def stop(self) -> None:
        """Undo everything ``start`` did.  Safe to call more than once."""
        if not self._started:
            return
        self._started = False
        try:
            self.write(_SHOW_CURSOR + _MOUSE_DISABLE + _ALT_SCREEN_DISABLE)
        finally:
            # Restore terminal attributes even if the screen could not be reset
            if self._original_termios is not None:
                try:
                    termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios)
                except (termios.error, OSError) as e:
                    raise TerminalIOError(f"Cannot restore terminal mode: {e}") from e
                finally:
                    self._original_termios = None
        logger.debug("Terminal stopped")

    # -- input --------------------------------------------------------------

    def read_key(self) -> KeyId | None:
        """Block until input arrives and return the next key.

        Returns ``None`` for input that is not a key (mouse reports, unknown
        sequences).
        """
        if not self._pending:
            self._fill()
        return parse_key(self._pending.popleft())

    def _fill(self) -> None:
        while not self._pending:
            try:
                raw = os.read(sys.stdin.fileno(), 4096)
            except OSError as e:
                raise TerminalIOError(f"Cannot read from terminal: {e}") from e
            if not raw:
                raise TerminalIOError("Terminal input closed")

            sequences, self._partial = split_sequences(
                self._partial + self._decoder.decode(raw)
            )
            # Nothing else is coming with this read; a lone ESC is the key
            if self._partial == "\x1b":
                sequences.append(self._partial)
                self._partial = ""
            self._pending.extend(sequences)

    # -- write --------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        try:
            sys.stdout.write(data)
            sys.stdout.flush()
        except OSError as e:
            raise TerminalIOError(f"Cannot write to terminal: {e}") from e

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a") as f:
                    f.write(data)
            except OSError:
                logger.warning("Cannot append to write log %s", self._write_log_path)
