"""Post-session scoring: WPM, CPM, accuracy, consistency.

WHY: Scores must be a pure function of the finished session so the same
keystroke history always produces the same numbers, and so they can be
tested without a clock or a terminal.

HOW: compute_metrics() reads the ReferenceText counts and the session's
slots/counters and returns a SessionMetrics. ScoreRecord is the flat
record handed to the score store; to_line() is its on-disk form.

RULES:
- elapsed = max(1, end - start) seconds
- CPM = non-whitespace characters / elapsed * 60
- WPM = CPM / average word length (5.0 when the text has no words)
- accuracy = final positions matching the reference / N * 100
  (100 for an empty text; positions never typed count as mismatches)
- consistency = (keystrokes - errors) / keystrokes * 100 (100 with no
  keystrokes); corrected mistakes still count as errors
- Record line: "wpm,cpm,accuracy,consistency,source\\n", numbers to 2 dp,
  source written raw
"""

from __future__ import annotations

from dataclasses import dataclass

from typc.core.session import SessionState
from typc.core.text import ReferenceText

FALLBACK_WORD_LENGTH = 5.0
SECONDS_PER_MINUTE = 60.0


@dataclass(frozen=True)
class ScoreRecord:
    """One completed session as stored in the append-only score log."""

    wpm: float
    cpm: float
    accuracy: float
    consistency: float
    source: str

    def to_line(self) -> str:
        return "{:.2f},{:.2f},{:.2f},{:.2f},{}\n".format(
            self.wpm, self.cpm, self.accuracy, self.consistency, self.source
        )

    @classmethod
    def from_line(cls, line: str) -> ScoreRecord:
        """Parse a stored line. The source is everything after the 4th comma."""
        wpm, cpm, accuracy, consistency, source = line.rstrip("\n").split(",", 4)
        return cls(
            wpm=float(wpm),
            cpm=float(cpm),
            accuracy=float(accuracy),
            consistency=float(consistency),
            source=source,
        )


@dataclass(frozen=True)
class SessionMetrics:
    wpm: float
    cpm: float
    accuracy: float
    consistency: float
    elapsed_s: float

    def to_record(self, source: str) -> ScoreRecord:
        return ScoreRecord(
            wpm=self.wpm,
            cpm=self.cpm,
            accuracy=self.accuracy,
            consistency=self.consistency,
            source=source,
        )


def correct_count(text: ReferenceText, session: SessionState) -> int:
    return sum(1 for i in range(len(text)) if session.is_correct_at(i))


def compute_metrics(text: ReferenceText, session: SessionState) -> SessionMetrics:
    """Score a finished (or abandoned) session.

    Args:
        text: The reference the session was typed against.
        session: The session after the input loop returned.

    Returns:
        SessionMetrics with all four scores and the floored elapsed time.
    """
    elapsed = session.elapsed_seconds()

    cpm = text.non_whitespace_count / elapsed * SECONDS_PER_MINUTE
    word_length = text.average_word_length or FALLBACK_WORD_LENGTH
    wpm = cpm / word_length

    if len(text) == 0:
        accuracy = 100.0
    else:
        accuracy = correct_count(text, session) / len(text) * 100.0

    if session.total_keystrokes == 0:
        consistency = 100.0
    else:
        consistency = (
            (session.total_keystrokes - session.error_count)
            / session.total_keystrokes
            * 100.0
        )

    return SessionMetrics(
        wpm=wpm,
        cpm=cpm,
        accuracy=accuracy,
        consistency=consistency,
        elapsed_s=elapsed,
    )


def format_summary(metrics: SessionMetrics) -> str:
    """Single-line, human-readable result shown on screen and stdout."""
    return "Finished! WPM: {:.2f}  CPM: {:.2f}  Accuracy: {:.2f}%  Consistency: {:.2f}%".format(
        metrics.wpm, metrics.cpm, metrics.accuracy, metrics.consistency
    )
