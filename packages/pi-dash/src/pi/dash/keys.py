"""Keyboard input parsing for the dashboard.

Raw terminal input is first split into complete sequences (a chunk read
from stdin can hold several keypresses, or a keypress followed by a mouse
report), then each sequence is mapped to a key identifier such as ``"q"``,
``"left"`` or ``"ctrl+c"``.  Mouse reports map to ``None``.
"""

from __future__ import annotations

import re

# ---------------------------------------------------------------------------
# Type alias
# ---------------------------------------------------------------------------

KeyId = str

ESC = "\x1b"


class Key:
    """Named key identifiers used by the dashboard."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"


# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

# Legacy escape sequences -> key names
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[2~": "insert",
    "\x1b[3~": "delete",
    "\x1b[4~": "end",
    "\x1b[5~": "pageUp",
    "\x1b[6~": "pageDown",
    "\x1b[Z": "shift+tab",
}

# xterm modifier parameter (CSI 1;<m> X) -> prefix
_MODIFIER_PREFIXES: dict[int, str] = {
    2: "shift+",
    3: "alt+",
    4: "shift+alt+",
    5: "ctrl+",
    6: "ctrl+shift+",
    7: "ctrl+alt+",
    8: "ctrl+shift+alt+",
}

_ARROW_FINALS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_MODIFIED_ARROW_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")

# SGR (1006) and X10 mouse reports
_SGR_MOUSE_RE = re.compile(r"^\x1b\[<\d+;\d+;\d+[Mm]$")


def is_mouse_sequence(data: str) -> bool:
    return bool(_SGR_MOUSE_RE.match(data)) or (data.startswith("\x1b[M") and len(data) == 6)


# ---------------------------------------------------------------------------
# Sequence splitting
# ---------------------------------------------------------------------------


def _sequence_status(data: str) -> str:
    """Classify *data* as ``"complete"``, ``"incomplete"`` or ``"not-escape"``."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    after_esc = data[1:]
    if after_esc.startswith("["):
        if after_esc.startswith("[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        if len(data) < 3:
            return "incomplete"
        final = ord(data[-1])
        if 0x40 <= final <= 0x7E:
            # SGR mouse reports end in M/m only after three numeric fields
            if after_esc.startswith("[<") and not _SGR_MOUSE_RE.match(data):
                return "incomplete"
            return "complete"
        return "incomplete"

    # SS3 sequences: ESC O <final>
    if after_esc.startswith("O"):
        return "complete" if len(after_esc) >= 2 else "incomplete"

    # Meta key: ESC followed by a single character
    return "complete"


def split_sequences(buffer: str) -> tuple[list[str], str]:
    """Split raw input into complete key sequences.

    Returns ``(sequences, remainder)`` where *remainder* is an escape
    sequence still waiting for more bytes.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        remaining = buffer[pos:]
        if not remaining.startswith(ESC):
            sequences.append(remaining[0])
            pos += 1
            continue

        seq_end = 1
        while seq_end <= len(remaining):
            candidate = remaining[:seq_end]
            status = _sequence_status(candidate)
            if status == "incomplete":
                seq_end += 1
                continue
            sequences.append(candidate)
            pos += seq_end
            break
        else:
            return sequences, remaining

    return sequences, ""


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_key(data: str) -> KeyId | None:
    """Parse one input sequence and return the key identifier, or ``None``.

    The returned string looks like ``"a"``, ``"ctrl+c"``, ``"shift+up"``.
    """
    if not data:
        return None

    if is_mouse_sequence(data):
        return None

    if data in LEGACY_KEY_SEQUENCES:
        return LEGACY_KEY_SEQUENCES[data]

    match = _MODIFIED_ARROW_RE.match(data)
    if match:
        prefix = _MODIFIER_PREFIXES.get(int(match.group(1)), "")
        return prefix + _ARROW_FINALS[match.group(2)]

    # --- Simple single-byte keys ---
    if data == ESC:
        return "escape"
    if data == "\r" or data == "\n":
        return "enter"
    if data == "\t":
        return "tab"
    if data == " ":
        return "space"
    if data == "\x7f" or data == "\x08":
        return "backspace"

    # --- Ctrl + letter (0x01 - 0x1a) ---
    if len(data) == 1 and 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == ESC:
        ch = data[1]
        if ch.isupper():
            return "shift+alt+" + ch.lower()
        if ch.isprintable():
            return "alt+" + ch

    # --- Plain printable character ---
    if len(data) == 1 and data.isprintable():
        return data

    return None


def parse_keys(data: str) -> list[KeyId]:
    """Parse every sequence in *data*, dropping unknowns.

    A trailing partial sequence is parsed as-is, so a lone ESC at the end of
    a read is the escape key.
    """
    sequences, remainder = split_sequences(data)
    if remainder:
        sequences.append(remainder)
    keys = []
    for seq in sequences:
        key = parse_key(seq)
        if key is not None:
            keys.append(key)
    return keys
