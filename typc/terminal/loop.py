"""The blocking read-key / update-state / redraw loop.

WHY: The whole interactive session is a tiny state machine: wait for the
first key, accept keys until the text is fully typed, stop. Modelling the
states explicitly makes the timer-start and completion rules easy to see
and to test with a scripted display.

HOW: InputLoop.run() repeats: render the current frame from the session
and the terminal size, block for one key, let SessionState.apply_key()
classify and apply it, then re-check completion. show_results() paints
the final scores and waits for one key before the caller releases the
terminal.

RULES:
- AWAITING_FIRST_KEY → TYPING on the first key the session accepts
  (printable, or backspace with something to delete)
- TYPING → FINISHED when the session completes after an advance
- An empty reference text is FINISHED before any key is read
- One key in, one state update, one redraw; no input buffering, no timers
- Keys of kind OTHER (arrows, resize) still trigger a redraw, which picks
  up a new terminal size
- With beep_on_error, a mismatched printable entry rings the bell
"""

from __future__ import annotations

import enum
import logging

from typc.config import TrainerConfig
from typc.core.keys import KeyKind
from typc.core.metrics import SessionMetrics, format_summary
from typc.core.session import SessionState
from typc.core.text import ReferenceText
from typc.render.base import BaseRenderer
from typc.terminal.display import BaseDisplay

logger = logging.getLogger(__name__)

EXIT_PROMPT = "Press any key to exit..."


class LoopState(str, enum.Enum):
    AWAITING_FIRST_KEY = "awaiting_first_key"
    TYPING = "typing"
    FINISHED = "finished"


class InputLoop:
    """Drives one session from the first frame to completion."""

    def __init__(
        self,
        display: BaseDisplay,
        text: ReferenceText,
        session: SessionState,
        renderer: BaseRenderer,
        config: TrainerConfig,
    ) -> None:
        self.display = display
        self.text = text
        self.session = session
        self.renderer = renderer
        self.config = config
        self.state = LoopState.FINISHED if session.is_complete() else LoopState.AWAITING_FIRST_KEY

    def render(self) -> None:
        height, width = self.display.size()
        self.display.draw(self.renderer.render(self.text, self.session, width, height))

    def step(self) -> KeyKind:
        """Run one iteration: draw, read one key, apply it, update state."""
        self.render()
        code = self.display.read_key()
        position = self.session.cursor
        kind = self.session.apply_key(code)
        logger.debug("key=%d kind=%s cursor=%d", code, kind.value, self.session.cursor)

        if (
            self.config.beep_on_error
            and kind is KeyKind.PRINTABLE
            and self.session.cursor > position
            and not self.session.is_correct_at(position)
        ):
            self.display.beep()

        if self.state is LoopState.AWAITING_FIRST_KEY and self.session.started:
            self.state = LoopState.TYPING
        if self.session.is_complete():
            self.state = LoopState.FINISHED
        return kind

    def run(self) -> SessionState:
        """Loop until the session is complete and return it."""
        logger.debug(
            "Starting %s session on %r (%d chars)",
            self.renderer.name, self.text.identifier, len(self.text),
        )
        while self.state is not LoopState.FINISHED:
            self.step()
        return self.session


def show_results(display: BaseDisplay, metrics: SessionMetrics) -> None:
    """Paint the final scores and block for one key press."""
    display.show_lines([format_summary(metrics), "", EXIT_PROMPT])
    display.read_key()
