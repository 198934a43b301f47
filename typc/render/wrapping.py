"""Multi-row renderer that wraps the whole text at the terminal width.

WHY: Some users prefer to see the full paragraph at once, the way it
would look in a book, instead of a single sliding line.

HOW: Character i goes to row i // width, column i % width. The whole
text is laid out every tick; rows that do not fit in the terminal height
are clipped.

RULES:
- No panning: row/column depend only on the index and the width
- Rows >= height are not drawn (resize the terminal to see them)
- Styling follows the shared rule in base.style_at
"""

from __future__ import annotations

from typc.core.session import SessionState
from typc.core.text import ReferenceText
from typc.render.base import BaseRenderer, Cell, Frame, style_at


class WrappingRenderer(BaseRenderer):
    """Renderer for the --wrap view."""

    @property
    def name(self) -> str:
        return "Wrapping"

    def render(
        self,
        text: ReferenceText,
        session: SessionState,
        width: int,
        height: int,
    ) -> Frame:
        if width <= 0 or height <= 0:
            return Frame(width=width, height=height)

        visible = min(len(text), width * height)
        cells = tuple(
            Cell(i // width, i % width, text[i], style_at(text, session, i))
            for i in range(visible)
        )
        return Frame(width=width, height=height, cells=cells)
