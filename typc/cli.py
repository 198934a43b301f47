"""Command-line interface for the typc typing trainer.

WHY: The trainer is a one-shot interactive tool: start it, type one
sample, see the score. The CLI wires together sample selection, the
session model, the chosen renderer, the terminal loop, scoring and the
score log behind a single command.

HOW: argparse accepts ``--wrap`` and ``--debug``. main() configures
logging, builds a TrainerConfig once, and runs run_trainer(). Each typed
failure is reported on stderr with a specific exit status. Results are
shown on the terminal, then printed to stdout after the terminal is
released, and only then appended to the score log, so a persistence
failure never hides the result.

RULES:
- No flags → scrolling view, warnings-only logging to stderr
- --debug → DEBUG records go to a log file, never to the terminal
  that curses is drawing on
- Unknown flags or extra arguments → usage on stderr, exit 2
- No sample available → exit 1 before the terminal is touched
- Score log failure → results already shown, error on stderr, exit 1
- Ctrl-C → terminal restored, no score written, exit 130
- Python 3.9 compatible: no match/case, no X | Y unions at runtime
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Callable, ContextManager, List, Optional

from typc.config import TrainerConfig
from typc.core.metrics import SessionMetrics, compute_metrics, format_summary
from typc.core.session import SessionState
from typc.core.text import ReferenceText
from typc.render import create_renderer
from typc.store.samples import ResourceUnavailableError, load_sample
from typc.store.scores import PersistenceError, append_score, read_scores
from typc.terminal.display import BaseDisplay, open_terminal
from typc.terminal.loop import InputLoop, show_results

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

EXIT_FAILURE = 1
EXIT_CANCELLED = 130


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: stdout carries the final result line so it can be captured;
    everything else goes to stderr.
    """
    print(msg, file=sys.stderr, flush=True)


def _configure_logging(config: TrainerConfig) -> None:
    """Route log records for this run.

    WHY: While the session runs, curses owns the terminal. Bytes written
    to stderr behind its back are not erased by the next redraw and pile
    up over the typing line, so per-key debug records must go elsewhere.

    RULES:
    - debug off: WARNING and above to stderr (nothing is logged at that
      level while the terminal is owned)
    - debug on: DEBUG to config.debug_log_path, parent directories created
    - A debug log that cannot be opened → PersistenceError
    """
    if not config.debug:
        logging.basicConfig(
            level=logging.WARNING, format=LOG_FORMAT, stream=sys.stderr, force=True
        )
        return

    log_path = config.debug_log_path
    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(log_path, exc.strerror or str(exc)) from exc
    logging.basicConfig(
        level=logging.DEBUG, format=LOG_FORMAT, handlers=[handler], force=True
    )
    _status("Debug log: {}".format(log_path))


def _load_reference(config: TrainerConfig) -> ReferenceText:
    """Pick a sample from the texts directory and normalize it.

    RULES:
    - A sample that normalizes to an empty string is unavailable too:
      there would be nothing to type
    """
    identifier, contents = load_sample(config.texts_dir)
    text = ReferenceText.from_sample(identifier, contents)
    if len(text) == 0:
        raise ResourceUnavailableError(
            config.texts_dir / identifier, "sample has no typeable characters"
        )
    logger.debug(
        "Loaded %s: %d chars, %d words", identifier, len(text), text.word_count
    )
    return text


def run_trainer(
    config: TrainerConfig,
    terminal: Callable[[], ContextManager[BaseDisplay]] = open_terminal,
    clock: Callable[[], float] = time.monotonic,
) -> SessionMetrics:
    """Run one complete session: select, type, score, persist.

    WHY: Separated from main() so tests can drive a whole session with a
    scripted display and a fake clock.

    HOW: Loads the reference text before acquiring the terminal, runs the
    input loop and the results screen inside the terminal scope, prints
    the summary once the terminal is back in cooked mode, then appends
    the score.

    Args:
        config: The frozen per-run configuration.
        terminal: Context-manager factory yielding a display.
        clock: Time source for the session timestamps.

    Returns:
        The computed SessionMetrics.

    Raises:
        ResourceUnavailableError: no sample could be loaded.
        PersistenceError: the score could not be appended.
    """
    text = _load_reference(config)
    session = SessionState(text, clock=clock)
    renderer = create_renderer(config)
    logger.debug("Render mode: %s", renderer.name)

    with terminal() as display:
        InputLoop(display, text, session, renderer, config).run()
        metrics = compute_metrics(text, session)
        show_results(display, metrics)

    print(format_summary(metrics), flush=True)
    logger.debug(
        "keystrokes=%d errors=%d elapsed=%.2fs",
        session.total_keystrokes, session.error_count, metrics.elapsed_s,
    )
    append_score(metrics.to_record(text.identifier), config.scores_path)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "%d sessions logged in %s",
            len(read_scores(config.scores_path)), config.scores_path,
        )
    return metrics


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    RULES:
    - No positional arguments; anything extra is a usage error
    - --wrap selects the wrapping view, --debug enables debug logging
    """
    parser = argparse.ArgumentParser(
        prog="typc",
        description="Type a random text sample in the terminal and get "
                    "WPM, CPM, accuracy and consistency scores.",
    )
    parser.add_argument(
        "--wrap",
        action="store_true",
        help="Wrap the whole text across rows instead of scrolling one line.",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Print diagnostic output to stderr.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``typc`` console script and ``python -m typc``.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        config = TrainerConfig.from_args(args)
    except ValueError as e:
        # Malformed TYPC_* environment overrides
        _status("Error: {}".format(e))
        sys.exit(EXIT_FAILURE)

    try:
        _configure_logging(config)
        logger.debug("Config: %s", config)
        run_trainer(config)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(EXIT_CANCELLED)
    except ResourceUnavailableError as e:
        _status("Error: no text sample available ({})".format(e))
        sys.exit(EXIT_FAILURE)
    except PersistenceError as e:
        _status("Error: {}".format(e))
        sys.exit(EXIT_FAILURE)
    except MemoryError:
        _status("Error: out of memory")
        sys.exit(EXIT_FAILURE)


if __name__ == "__main__":
    main()
