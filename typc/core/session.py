"""Mutable keystroke model for one typing session.

WHY: Every keystroke has to update three things consistently: which
character sits at which position, where the cursor is, and the running
keystroke/error counters used for consistency. Centralising that in one
small class keeps the input loop and renderer free of bookkeeping.

HOW: SessionState owns a fixed-capacity list of N slots allocated once.
advance() writes the entered character at the cursor and moves right;
retreat() moves left without erasing the slot. The clock is injected so
tests control timestamps.

RULES:
- 0 <= cursor <= N at all times
- slots[i] is defined for every i < cursor
- total_keystrokes counts printable entries only (never backspace)
- error_count is counted at entry time and never decremented, so a
  corrected mistake still lowers consistency
- start_time is set by the first advance or effective retreat; keys that
  change nothing (arrows, resize, backspace at 0) never start the clock
- end_time is set when the cursor reaches N
"""

from __future__ import annotations

import logging
import time
from typing import Callable, List, Optional

from typc.core.keys import KeyKind, classify_key
from typc.core.text import ReferenceText

logger = logging.getLogger(__name__)


class SessionError(RuntimeError):
    """Raised when advance/retreat is called outside its precondition.

    WHY: The input loop is expected to check is_complete() and the cursor
    before calling; violating that is a programming error, not user input.
    """


class SessionState:
    """The live typed-text model for a single reference text."""

    def __init__(
        self,
        text: ReferenceText,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.text = text
        self._clock = clock
        self._slots: List[Optional[str]] = [None] * len(text)
        self.cursor = 0
        self.total_keystrokes = 0
        self.error_count = 0
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def started(self) -> bool:
        return self.start_time is not None

    def typed_at(self, index: int) -> Optional[str]:
        """Character entered at *index*, or None if never typed."""
        return self._slots[index]

    @property
    def typed_text(self) -> str:
        """The typed prefix, i.e. slots [0, cursor)."""
        return "".join(self._slots[: self.cursor])  # type: ignore[arg-type]

    def is_correct_at(self, index: int) -> bool:
        return self._slots[index] == self.text[index]

    def is_complete(self) -> bool:
        return self.cursor == len(self._slots)

    def _mark_started(self) -> None:
        if self.start_time is None:
            self.start_time = self._clock()
            logger.debug("Session clock started at %.3f", self.start_time)

    def advance(self, entered: str) -> None:
        """Record *entered* at the cursor and move the cursor right.

        RULES:
        - Requires cursor < N (SessionError otherwise)
        - A mismatch increments error_count immediately
        - Reaching N stamps end_time
        """
        if self.is_complete():
            raise SessionError("advance() called on a completed session")
        self._mark_started()
        self._slots[self.cursor] = entered
        self.total_keystrokes += 1
        if entered != self.text[self.cursor]:
            self.error_count += 1
        self.cursor += 1
        if self.is_complete():
            self.end_time = self._clock()
            logger.debug("Session complete at %.3f", self.end_time)

    def retreat(self) -> None:
        """Move the cursor one position left, keeping the old slot content.

        The slot is overwritten by the next advance at that position;
        neither counter changes.
        """
        if self.cursor == 0:
            raise SessionError("retreat() called at position 0")
        self._mark_started()
        self.cursor -= 1

    def apply_key(self, code: int) -> KeyKind:
        """Apply one raw key code and report how it was classified.

        Printable keys advance (ignored once complete), backspace retreats
        when there is something to retreat over, everything else is a no-op.
        """
        kind = classify_key(code)
        if kind is KeyKind.PRINTABLE and not self.is_complete():
            self.advance(chr(code))
        elif kind is KeyKind.BACKSPACE and self.cursor > 0:
            self.retreat()
        return kind

    def elapsed_seconds(self) -> float:
        """Seconds between first accepted key and completion, floored at 1.

        An unfinished session measures up to now; a session that never
        started reports the floor.
        """
        if self.start_time is None:
            return 1.0
        end = self.end_time if self.end_time is not None else self._clock()
        return max(1.0, end - self.start_time)
