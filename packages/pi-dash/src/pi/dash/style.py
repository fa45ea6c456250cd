"""Colors, text modifiers and composable cell styles.

A ``Style`` only records what it changes: ``None`` colors and empty
modifier sets leave the underlying cell untouched when patched on top.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Colors
# ---------------------------------------------------------------------------


class Color(enum.Enum):
    """Basic named terminal colors."""

    RESET = "reset"
    BLACK = "black"
    RED = "red"
    GREEN = "green"
    YELLOW = "yellow"
    BLUE = "blue"
    MAGENTA = "magenta"
    CYAN = "cyan"
    WHITE = "white"
    GRAY = "gray"


# SGR foreground codes; background is +10 except for the reset code
_FG_CODES: dict[Color, int] = {
    Color.RESET: 39,
    Color.BLACK: 30,
    Color.RED: 31,
    Color.GREEN: 32,
    Color.YELLOW: 33,
    Color.BLUE: 34,
    Color.MAGENTA: 35,
    Color.CYAN: 36,
    Color.WHITE: 37,
    Color.GRAY: 90,
}


def fg_code(color: Color) -> int:
    return _FG_CODES[color]


def bg_code(color: Color) -> int:
    if color is Color.RESET:
        return 49
    return _FG_CODES[color] + 10


# ---------------------------------------------------------------------------
# Modifiers
# ---------------------------------------------------------------------------


class Modifier(enum.IntFlag):
    NONE = 0
    BOLD = 1
    DIM = 2
    ITALIC = 4
    UNDERLINED = 8
    SLOW_BLINK = 16
    RAPID_BLINK = 32
    REVERSED = 64
    HIDDEN = 128
    CROSSED_OUT = 256


_MODIFIER_CODES: list[tuple[Modifier, int]] = [
    (Modifier.BOLD, 1),
    (Modifier.DIM, 2),
    (Modifier.ITALIC, 3),
    (Modifier.UNDERLINED, 4),
    (Modifier.SLOW_BLINK, 5),
    (Modifier.RAPID_BLINK, 6),
    (Modifier.REVERSED, 7),
    (Modifier.HIDDEN, 8),
    (Modifier.CROSSED_OUT, 9),
]


# ---------------------------------------------------------------------------
# Style
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Style:
    fg: Color | None = None
    bg: Color | None = None
    add_modifier: Modifier = Modifier.NONE
    sub_modifier: Modifier = Modifier.NONE

    def patch(self, other: Style) -> Style:
        """Layer *other* on top of this style."""
        add = (self.add_modifier & ~other.sub_modifier) | other.add_modifier
        sub = (self.sub_modifier & ~other.add_modifier) | other.sub_modifier
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            add_modifier=Modifier(add),
            sub_modifier=Modifier(sub),
        )


def sgr(fg: Color, bg: Color, modifier: Modifier) -> str:
    """Return a full SGR sequence (starting from a reset) for a cell."""
    params = ["0"]
    for flag, code in _MODIFIER_CODES:
        if modifier & flag:
            params.append(str(code))
    if fg is not Color.RESET:
        params.append(str(fg_code(fg)))
    if bg is not Color.RESET:
        params.append(str(bg_code(bg)))
    return "\x1b[" + ";".join(params) + "m"
