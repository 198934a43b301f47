"""Frame model and the abstract base renderer.

WHY: The display mode (horizontal scrolling or line wrapping) is chosen
once at startup, but the input loop should not care which one is active.
Both modes produce the same kind of output, a grid of styled cells, so a
common base class lets the loop and the curses display work with either.

HOW: Style names the three ways a character can look. Cell is one
(row, col, char, style) entry; Frame bundles the cells with the terminal
size they were computed for. BaseRenderer is an ABC with a ``name`` and a
pure ``render()`` method.

RULES:
- render() is a pure function of (text, session state, width, height)
- Frames are frozen; two renders with the same inputs compare equal
- Typed positions show the REFERENCE character: CORRECT when the entry
  matched, ERROR when it did not. The mistyped character is never drawn
- Untyped positions show the reference character as PENDING
- A non-positive width or height yields an empty frame
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Tuple

from typc.core.session import SessionState
from typc.core.text import ReferenceText


class Style(str, enum.Enum):
    CORRECT = "correct"
    ERROR = "error"
    PENDING = "pending"


@dataclass(frozen=True)
class Cell:
    row: int
    col: int
    char: str
    style: Style


@dataclass(frozen=True)
class Frame:
    """One full screen's worth of cells, redrawn from scratch each tick.

    Attributes:
        width: Terminal columns the frame was laid out for.
        height: Terminal rows the frame was laid out for.
        cells: Every cell to draw; positions not listed stay blank.
    """

    width: int
    height: int
    cells: Tuple[Cell, ...] = ()

    def row_text(self, row: int) -> str:
        """Characters on *row* left to right, gaps as spaces (test helper)."""
        on_row = sorted((c for c in self.cells if c.row == row), key=lambda c: c.col)
        if not on_row:
            return ""
        line = [" "] * (on_row[-1].col + 1)
        for cell in on_row:
            line[cell.col] = cell.char
        return "".join(line)


def style_at(text: ReferenceText, session: SessionState, index: int) -> Style:
    if index >= session.cursor:
        return Style.PENDING
    return Style.CORRECT if session.is_correct_at(index) else Style.ERROR


class BaseRenderer(ABC):
    """Abstract base for viewport renderers.

    To add a display mode:
    1. Create a module in render/
    2. Subclass BaseRenderer, implement ``name`` and ``render()``
    3. Register it in RENDERERS in render/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable mode name, e.g. 'Scrolling'."""

    @abstractmethod
    def render(
        self,
        text: ReferenceText,
        session: SessionState,
        width: int,
        height: int,
    ) -> Frame:
        """Project the session onto a width x height grid."""
