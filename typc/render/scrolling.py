"""Single-row renderer that pans horizontally to follow the cursor.

WHY: Long samples do not fit on one line. Rather than wrapping, the
default view keeps a single row and slides the text left once the cursor
gets within ``look_ahead`` columns of the right edge, so the user always
sees what is coming next.

HOW: scroll_offset() computes the index of the first visible character.
Text before the offset is scrolled off; [offset, cursor) is drawn with
correct/error styling and the rest of the row is filled with pending
reference characters up to the screen width.

RULES:
- Raw offset: 0 if cursor + look_ahead < width,
  else cursor - width + look_ahead + 1
- The raw offset is clamped to [0, min(cursor, max(0, N - width))]:
  a text that fits never scrolls, the cursor column is never negative,
  and the end of the text stays pinned to the right edge
- Everything is drawn on row 0
"""

from __future__ import annotations

from typing import List

from typc.core.session import SessionState
from typc.core.text import ReferenceText
from typc.render.base import BaseRenderer, Cell, Frame, style_at

DEFAULT_LOOK_AHEAD = 20


def scroll_offset(cursor: int, length: int, width: int, look_ahead: int) -> int:
    """Index of the first visible character for the scrolling view."""
    if cursor + look_ahead < width:
        raw = 0
    else:
        raw = cursor - width + look_ahead + 1
    upper = min(cursor, max(0, length - width))
    return max(0, min(raw, upper))


class ScrollingRenderer(BaseRenderer):
    """Renderer for the default single-row scrolling view."""

    def __init__(self, look_ahead: int = DEFAULT_LOOK_AHEAD) -> None:
        self.look_ahead = look_ahead

    @property
    def name(self) -> str:
        return "Scrolling"

    def render(
        self,
        text: ReferenceText,
        session: SessionState,
        width: int,
        height: int,
    ) -> Frame:
        if width <= 0 or height <= 0:
            return Frame(width=width, height=height)

        offset = scroll_offset(session.cursor, len(text), width, self.look_ahead)
        end = min(len(text), offset + width)

        cells: List[Cell] = []
        for i in range(offset, end):
            cells.append(Cell(0, i - offset, text[i], style_at(text, session, i)))
        return Frame(width=width, height=height, cells=tuple(cells))
