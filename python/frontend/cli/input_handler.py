"""Single-keypress input for the anvil terminal frontends.

Keys are read without waiting for Enter and turned into the action names
understood by ``frontend.cli.controls``.  Raw mode comes from tty/termios on
macOS / Linux and from msvcrt on Windows.
"""

from __future__ import annotations

import os
import sys

if os.name == "nt":
    import msvcrt  # type: ignore[import-not-found]
else:
    import termios
    import tty


def _read_char() -> str:
    if os.name == "nt":
        return msvcrt.getwch()

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        return sys.stdin.read(1)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


# Sliders on arrows / WASD, rule slots on e r t (Shift cycles the position).
_ACTIONS: dict[str, str] = {
    "w": "up",
    "s": "down",
    "a": "left",
    "d": "right",
    "e": "rule-move-0",
    "r": "rule-move-1",
    "t": "rule-move-2",
    "E": "rule-pos-0",
    "R": "rule-pos-1",
    "T": "rule-pos-2",
    "x": "clear-rules",
    "c": "clear-history",
    "p": "save",
    "l": "load",
    "q": "quit",
    "\x03": "quit",  # Ctrl-C
}

# Final byte of ESC [ <x> sequences.
_ARROWS: dict[str, str] = {"A": "up", "B": "down", "C": "right", "D": "left"}


def _action_for(ch: str) -> str:
    if ch in _ACTIONS:
        return _ACTIONS[ch]
    # Shift only matters for the rule-position keys above.
    lowered = ch.lower()
    if lowered in _ACTIONS:
        return _ACTIONS[lowered]
    return ch if ch.isprintable() else ""


def get_key() -> str:
    """Block for one keypress and return its action name.

    Besides the actions in ``_ACTIONS`` and the arrow keys, the digits
    "1".."8" come back unchanged (they select palette moves), as does any
    other printable character.  Unknown control keys give ``""``; a bare
    Escape quits.
    """
    ch = _read_char()
    if ch != "\x1b":
        return _action_for(ch)
    if _read_char() != "[":
        return "quit"
    return _ARROWS.get(_read_char(), "")
