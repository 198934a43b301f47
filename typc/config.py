"""Configuration constants, .env loading, and the per-run TrainerConfig.

WHY: The trainer has a handful of knobs (where samples live, where scores
go, how far ahead the scrolling view looks, whether to beep on mistakes).
Keeping them in one module makes them easy to find and override, and
building a single immutable TrainerConfig per run means no part of the
program reads or mutates process-wide flags.

HOW: python-dotenv loads a .env file on import. Defaults are module-level
constants, each overridable by a ``TYPC_*`` environment variable.
TrainerConfig.from_args() combines the parsed CLI flags with those
defaults exactly once; the result is passed explicitly to the renderer
and the input loop.

RULES:
- TYPC_TEXTS_DIR defaults to ./texts (one sample per regular file)
- TYPC_SCORES_FILE defaults to $XDG_STATE_HOME/typc/scores.csv
- TYPC_LOOK_AHEAD must be a non-negative integer (default 20)
- TYPC_BEEP_ON_ERROR is "true"/"false" (default false)
- With --debug, diagnostics go to debug.log beside the score log
- TrainerConfig is frozen; nothing mutates it after construction
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from typc.render.scrolling import DEFAULT_LOOK_AHEAD
from typc.store.scores import default_scores_path

# Load .env from the directory the trainer is run from
load_dotenv()

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_TEXTS_DIR = "./texts"
DEFAULT_RENDER_MODE = "scroll"
WRAP_RENDER_MODE = "wrap"
DEBUG_LOG_NAME = "debug.log"


def _env_look_ahead() -> int:
    """Read TYPC_LOOK_AHEAD, falling back to DEFAULT_LOOK_AHEAD.

    RULES:
    - Blank or unset → default
    - Non-integer or negative → ValueError naming the variable
    """
    raw = os.getenv("TYPC_LOOK_AHEAD", "").strip()
    if not raw:
        return DEFAULT_LOOK_AHEAD
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(
            "TYPC_LOOK_AHEAD must be an integer, got {!r}".format(raw)
        ) from None
    if value < 0:
        raise ValueError("TYPC_LOOK_AHEAD must not be negative, got {}".format(value))
    return value


def _env_flag(name: str, default: bool = False) -> bool:
    return os.getenv(name, str(default)).strip().lower() == "true"


@dataclass(frozen=True)
class TrainerConfig:
    """Everything a single typing session needs to know, fixed at startup.

    WHY: The wrap/debug switches and the look-ahead margin used to be
    process-wide variables. An explicit frozen value makes every consumer's
    inputs visible and keeps the renderer a pure function.

    RULES:
    - render_mode: "scroll" (default) or "wrap"
    - look_ahead: columns kept free to the right of the cursor when scrolling
    - texts_dir / scores_path: resolved from the environment at build time
    - debug: log DEBUG records to debug_log_path (never to the terminal)
    """

    render_mode: str = DEFAULT_RENDER_MODE
    debug: bool = False
    look_ahead: int = DEFAULT_LOOK_AHEAD
    beep_on_error: bool = False
    texts_dir: Path = Path(DEFAULT_TEXTS_DIR)
    scores_path: Path = Path("scores.csv")

    @property
    def debug_log_path(self) -> Path:
        """Debug log file, kept next to the score log."""
        return self.scores_path.parent / DEBUG_LOG_NAME

    @classmethod
    def from_args(cls, args) -> TrainerConfig:
        """Build the config from parsed CLI arguments plus the environment.

        Args:
            args: argparse Namespace with ``wrap`` and ``debug`` booleans.

        Returns:
            A frozen TrainerConfig.

        Raises:
            ValueError: if an environment override is malformed.
        """
        scores_env = os.getenv("TYPC_SCORES_FILE", "").strip()
        return cls(
            render_mode=WRAP_RENDER_MODE if args.wrap else DEFAULT_RENDER_MODE,
            debug=bool(args.debug),
            look_ahead=_env_look_ahead(),
            beep_on_error=_env_flag("TYPC_BEEP_ON_ERROR"),
            texts_dir=Path(os.getenv("TYPC_TEXTS_DIR", DEFAULT_TEXTS_DIR)).expanduser(),
            scores_path=Path(scores_env).expanduser() if scores_env else default_scores_path(),
        )
