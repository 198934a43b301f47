"""Append-only score log.

WHY: Users want to see progress over time. Every completed session adds
one line to a flat CSV-like file under the user's state directory; the
file is never rewritten, so a crash can at worst lose the last line.

HOW: default_scores_path() follows the XDG base-directory convention.
append_score() creates missing parent directories, then opens the file in
append mode and writes ScoreRecord.to_line(). read_scores() parses the
file back.

RULES:
- Location: $XDG_STATE_HOME/typc/scores.csv, else ~/.local/state/typc/scores.csv
- Line format: wpm,cpm,accuracy,consistency,source (2 dp, source raw)
- Any OSError while creating directories or writing → PersistenceError
- No retries; the CLI reports the failure after showing the results
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List

from typc.core.metrics import ScoreRecord

logger = logging.getLogger(__name__)

APP_DIR_NAME = "typc"
SCORES_FILE_NAME = "scores.csv"


class PersistenceError(Exception):
    """Raised when the score log cannot be created or appended to."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__("Could not save score to {}: {}".format(path, reason))


def default_scores_path() -> Path:
    state_home = os.getenv("XDG_STATE_HOME", "").strip()
    base = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base / APP_DIR_NAME / SCORES_FILE_NAME


def append_score(record: ScoreRecord, path: str | Path) -> Path:
    """Append one record to the score log, creating directories as needed.

    Returns:
        The path written to.

    Raises:
        PersistenceError: on any file-system failure.
    """
    target = Path(path)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a", encoding="utf-8") as f:
            f.write(record.to_line())
    except OSError as exc:
        raise PersistenceError(target, exc.strerror or str(exc)) from exc
    logger.debug("Appended score to %s", target)
    return target


def read_scores(path: str | Path) -> List[ScoreRecord]:
    """All records in the log, oldest first. A missing file is empty."""
    target = Path(path)
    if not target.is_file():
        return []
    with open(target, encoding="utf-8") as f:
        return [ScoreRecord.from_line(line) for line in f if line.strip()]
