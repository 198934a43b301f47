"""Classification of raw key codes read from the terminal.

WHY: curses hands back plain integers for everything: letters, arrow keys,
resize notifications, and three different encodings of backspace
depending on the terminal. The session only cares which of three kinds a
code belongs to.

RULES:
- 32..126 → PRINTABLE
- 8 (^H), 127 (DEL) and curses.KEY_BACKSPACE → BACKSPACE
- everything else (arrows, Enter, Tab, KEY_RESIZE, -1) → OTHER
"""

from __future__ import annotations

import curses
import enum

from typc.core.text import FIRST_PRINTABLE, LAST_PRINTABLE

CTRL_H = 8
DEL = 127

BACKSPACE_CODES = frozenset({CTRL_H, DEL, curses.KEY_BACKSPACE})


class KeyKind(str, enum.Enum):
    PRINTABLE = "printable"
    BACKSPACE = "backspace"
    OTHER = "other"


def classify_key(code: int) -> KeyKind:
    if FIRST_PRINTABLE <= code <= LAST_PRINTABLE:
        return KeyKind.PRINTABLE
    if code in BACKSPACE_CODES:
        return KeyKind.BACKSPACE
    return KeyKind.OTHER
