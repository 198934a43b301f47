"""Random sample selection from a directory of text files.

WHY: Each session types a different text. Samples are plain files in a
directory (./texts by default) so users can drop in their own.

HOW: list_samples() collects regular files, pick_sample() chooses one
uniformly at random, load_sample() reads it and returns
``(identifier, contents)`` where the identifier is the file name.

RULES:
- Only regular files count; subdirectories and other entries are skipped
- Listing is sorted so a seeded RNG picks reproducibly
- Missing, empty or unreadable directory/file → ResourceUnavailableError
- Undecodable bytes are replaced, never fatal
"""

from __future__ import annotations

import logging
import random
from pathlib import Path
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)


class ResourceUnavailableError(Exception):
    """Raised when no sample can be selected or read.

    WHY: The CLI must refuse to start a session (and never touch the
    terminal) when there is nothing to type.

    RULES:
    - path: the directory or file that failed
    - reason: short human-readable cause
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__("{}: {}".format(path, reason))


def list_samples(directory: str | Path) -> List[Path]:
    """Regular files in *directory*, sorted by name.

    Raises:
        ResourceUnavailableError: if the directory is missing or unreadable.
    """
    root = Path(directory)
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except FileNotFoundError:
        raise ResourceUnavailableError(root, "sample directory does not exist") from None
    except NotADirectoryError:
        raise ResourceUnavailableError(root, "not a directory") from None
    except OSError as exc:
        raise ResourceUnavailableError(root, exc.strerror or str(exc)) from exc
    return [p for p in entries if p.is_file()]


def pick_sample(directory: str | Path, rng: Optional[random.Random] = None) -> Path:
    samples = list_samples(directory)
    if not samples:
        raise ResourceUnavailableError(Path(directory), "no sample files found")
    chosen = (rng or random).choice(samples)
    logger.debug("Picked %s out of %d samples", chosen, len(samples))
    return chosen


def load_sample(
    directory: str | Path,
    rng: Optional[random.Random] = None,
) -> Tuple[str, str]:
    """Pick a random sample and read it.

    Args:
        directory: Directory holding one sample per regular file.
        rng: Optional seeded Random for reproducible picks.

    Returns:
        Tuple of (file name, full file contents).

    Raises:
        ResourceUnavailableError: if nothing can be picked or read.
    """
    path = pick_sample(directory, rng)
    logger.debug("Reading %s", path)
    try:
        contents = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        raise ResourceUnavailableError(path, exc.strerror or str(exc)) from exc
    return path.name, contents
