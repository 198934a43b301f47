"""curses-backed display and scoped terminal acquisition.

WHY: The terminal is a single, exclusively owned resource for the length
of a session. It has to be switched into cbreak/noecho mode with keypad
decoding and a hidden cursor before the first frame, and switched back
on EVERY exit path (normal finish, exception, Ctrl-C), otherwise the
user's shell is left unusable.

HOW: open_terminal() is a context manager that performs the setup once,
yields a CursesDisplay, and restores cooked mode in ``finally``.
CursesDisplay implements BaseDisplay: it paints a Frame by erasing the
screen and writing every cell with the attribute for its style.

RULES:
- CORRECT cells: default colours; ERROR cells: red + bold; PENDING: dim
- Colour pairs are only initialised when the terminal has colours
- Writing the bottom-right cell raises curses.error after the cursor
  wraps; that error is expected and ignored
- Cursor visibility changes are best effort (not every terminal allows it)
"""

from __future__ import annotations

import curses
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Dict, Iterator, Sequence, Tuple

from typc.render.base import Frame, Style

logger = logging.getLogger(__name__)

CURSOR_HIDDEN = 0
CURSOR_VISIBLE = 1
CORRECT_PAIR_ID = 1
ERROR_PAIR_ID = 2


class BaseDisplay(ABC):
    """What the input loop needs from a terminal."""

    @abstractmethod
    def size(self) -> Tuple[int, int]:
        """Current (height, width) in character cells."""

    @abstractmethod
    def draw(self, frame: Frame) -> None:
        """Erase the screen and paint *frame*."""

    @abstractmethod
    def show_lines(self, lines: Sequence[str]) -> None:
        """Erase the screen and print plain lines from the top left."""

    @abstractmethod
    def read_key(self) -> int:
        """Block until one key event arrives and return its code."""

    @abstractmethod
    def beep(self) -> None:
        """Audible (or visual) bell."""


def _init_styles() -> Dict[Style, int]:
    styles = {
        Style.CORRECT: curses.A_NORMAL,
        Style.ERROR: curses.A_BOLD | curses.A_UNDERLINE,
        Style.PENDING: curses.A_DIM,
    }
    if curses.has_colors():
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(CORRECT_PAIR_ID, curses.COLOR_WHITE, -1)
        curses.init_pair(ERROR_PAIR_ID, curses.COLOR_RED, -1)
        styles[Style.CORRECT] = curses.color_pair(CORRECT_PAIR_ID)
        styles[Style.ERROR] = curses.color_pair(ERROR_PAIR_ID) | curses.A_BOLD
    return styles


def _set_cursor(visibility: int) -> None:
    try:
        curses.curs_set(visibility)
    except curses.error:
        logger.debug("Terminal does not support cursor visibility %d", visibility)


class CursesDisplay(BaseDisplay):
    """BaseDisplay over a curses window obtained from open_terminal()."""

    def __init__(self, screen, styles: Dict[Style, int]) -> None:
        self.screen = screen
        self.styles = styles

    def size(self) -> Tuple[int, int]:
        return self.screen.getmaxyx()

    def _put(self, row: int, col: int, text: str, attr: int = curses.A_NORMAL) -> None:
        try:
            self.screen.addstr(row, col, text, attr)
        except curses.error:
            # Bottom-right cell or a frame laid out for a larger terminal.
            pass

    def draw(self, frame: Frame) -> None:
        self.screen.erase()
        for cell in frame.cells:
            self._put(cell.row, cell.col, cell.char, self.styles[cell.style])
        self.screen.refresh()

    def show_lines(self, lines: Sequence[str]) -> None:
        height, width = self.size()
        self.screen.erase()
        for row, line in enumerate(lines[:height]):
            self._put(row, 0, line[: max(0, width - 1)])
        self.screen.refresh()

    def read_key(self) -> int:
        return self.screen.getch()

    def beep(self) -> None:
        curses.beep()


@contextmanager
def open_terminal() -> Iterator[CursesDisplay]:
    """Acquire the terminal for one session and always give it back.

    Usage::

        with open_terminal() as display:
            InputLoop(display, ...).run()

    RULES:
    - Setup happens once: initscr, noecho, cbreak, keypad, hidden cursor,
      colour pairs
    - Teardown runs in ``finally`` so exceptions and KeyboardInterrupt
      still restore cooked mode before propagating
    """
    screen = curses.initscr()
    logger.debug("Terminal acquired")
    try:
        curses.noecho()
        curses.cbreak()
        screen.keypad(True)
        _set_cursor(CURSOR_HIDDEN)
        yield CursesDisplay(screen, _init_styles())
    finally:
        screen.keypad(False)
        curses.nocbreak()
        curses.echo()
        _set_cursor(CURSOR_VISIBLE)
        curses.endwin()
        logger.debug("Terminal released")
