"""Tests for the command-line interface and the full session pipeline.

WHY: The CLI decides exit statuses and the order of side effects: no
terminal without a sample, results visible before the score is saved,
and no score at all when the user cancels.

HOW: Argument errors go through main(). Whole sessions run through
run_trainer() with the fake_terminal fixture and a FakeClock; main() is
exercised with run_trainer monkeypatched to raise each failure type.

RULES:
- Samples and score files live under tmp_path
- TYPC_* variables are cleared for every test
"""

import logging
import sys

import pytest

from conftest import BACKSPACE, FakeClock
from typc import cli
from typc.config import TrainerConfig
from typc.store.samples import ResourceUnavailableError
from typc.store.scores import PersistenceError, read_scores


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TYPC_TEXTS_DIR", "TYPC_SCORES_FILE", "TYPC_LOOK_AHEAD", "TYPC_BEEP_ON_ERROR"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers main() and _configure_logging() install on the root logger."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def texts_dir(tmp_path):
    d = tmp_path / "texts"
    d.mkdir()
    return d


def _config(texts_dir, tmp_path, **kwargs):
    return TrainerConfig(texts_dir=texts_dir, scores_path=tmp_path / "state" / "scores.csv", **kwargs)


class TestArguments:
    def test_unknown_flag(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--fast"])
        assert exc_info.value.code == 2
        assert "usage: typc" in capsys.readouterr().err

    def test_extra_positional(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.main(["--wrap", "extra"])
        assert exc_info.value.code == 2
        assert "usage" in capsys.readouterr().err

    def test_parser_defaults(self):
        args = cli.build_parser().parse_args([])
        assert args.wrap is False
        assert args.debug is False

    def test_parser_flags(self):
        args = cli.build_parser().parse_args(["--wrap", "--debug"])
        assert args.wrap is True
        assert args.debug is True


class TestRunTrainer:
    def test_full_session(self, texts_dir, tmp_path, fake_terminal, capsys):
        (texts_dir / "ab.txt").write_text("a\nb\n", encoding="utf-8")
        # Normalized text is "a b"
        terminal, display = fake_terminal(["a", " ", "b", "q"])
        config = _config(texts_dir, tmp_path)

        metrics = cli.run_trainer(config, terminal=terminal, clock=FakeClock())

        assert metrics.accuracy == 100.0
        assert metrics.consistency == 100.0
        assert display.keys == []
        assert display.screens[-1][0].startswith("Finished!")
        assert "Finished! WPM:" in capsys.readouterr().out
        records = read_scores(config.scores_path)
        assert len(records) == 1
        assert records[0].source == "ab.txt"

    def test_corrected_mistake_session(self, texts_dir, tmp_path, fake_terminal):
        (texts_dir / "ab.txt").write_text("ab", encoding="utf-8")
        terminal, _ = fake_terminal(["x", BACKSPACE, "a", "b", "q"])
        config = _config(texts_dir, tmp_path)

        cli.run_trainer(config, terminal=terminal, clock=FakeClock())

        line = config.scores_path.read_text(encoding="utf-8")
        assert line.endswith(",100.00,66.67,ab.txt\n")

    def test_wrap_mode(self, texts_dir, tmp_path, fake_terminal):
        (texts_dir / "long.txt").write_text("abcdefgh", encoding="utf-8")
        terminal, display = fake_terminal(list("abcdefgh") + ["q"], width=3)
        cli.run_trainer(_config(texts_dir, tmp_path, render_mode="wrap"), terminal=terminal, clock=FakeClock())
        assert max(c.row for c in display.frames[0].cells) == 2

    def test_empty_directory_never_opens_terminal(self, texts_dir, tmp_path, fake_terminal):
        terminal, display = fake_terminal([])
        with pytest.raises(ResourceUnavailableError):
            cli.run_trainer(_config(texts_dir, tmp_path), terminal=terminal)
        assert terminal.opened == []
        assert display.frames == []

    def test_untypeable_sample_is_unavailable(self, texts_dir, tmp_path, fake_terminal):
        (texts_dir / "blank.txt").write_text("\n\t \n", encoding="utf-8")
        terminal, _ = fake_terminal([])
        with pytest.raises(ResourceUnavailableError, match="no typeable characters"):
            cli.run_trainer(_config(texts_dir, tmp_path), terminal=terminal)
        assert terminal.opened == []

    def test_results_printed_before_persistence_failure(self, texts_dir, tmp_path, fake_terminal, capsys):
        (texts_dir / "ab.txt").write_text("ab", encoding="utf-8")
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not dir", encoding="utf-8")
        terminal, display = fake_terminal(["a", "b", "q"])
        config = TrainerConfig(texts_dir=texts_dir, scores_path=blocker / "scores.csv")

        with pytest.raises(PersistenceError):
            cli.run_trainer(config, terminal=terminal, clock=FakeClock())

        assert display.screens[-1][0].startswith("Finished!")
        assert "Finished! WPM:" in capsys.readouterr().out

    def test_cancel_writes_no_score(self, texts_dir, tmp_path, fake_terminal):
        (texts_dir / "ab.txt").write_text("abc", encoding="utf-8")
        terminal, display = fake_terminal(["a"])

        def interrupt():
            raise KeyboardInterrupt

        display.read_key = interrupt
        config = _config(texts_dir, tmp_path)
        with pytest.raises(KeyboardInterrupt):
            cli.run_trainer(config, terminal=terminal, clock=FakeClock())
        assert not config.scores_path.exists()


class TestMainErrors:
    def _fail_with(self, monkeypatch, exc):
        def _raise(config):
            raise exc

        monkeypatch.setattr(cli, "run_trainer", _raise)

    def test_resource_unavailable(self, monkeypatch, tmp_path, capsys):
        self._fail_with(monkeypatch, ResourceUnavailableError(tmp_path, "no sample files found"))
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "no sample files found" in capsys.readouterr().err

    def test_persistence_failure(self, monkeypatch, tmp_path, capsys):
        self._fail_with(monkeypatch, PersistenceError(tmp_path / "scores.csv", "Permission denied"))
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "Could not save score" in capsys.readouterr().err

    def test_keyboard_interrupt(self, monkeypatch, capsys):
        self._fail_with(monkeypatch, KeyboardInterrupt())
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 130
        assert "Cancelled by user." in capsys.readouterr().err

    def test_out_of_memory(self, monkeypatch, capsys):
        self._fail_with(monkeypatch, MemoryError())
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "out of memory" in capsys.readouterr().err

    def test_bad_environment(self, monkeypatch, capsys):
        monkeypatch.setenv("TYPC_LOOK_AHEAD", "lots")
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "TYPC_LOOK_AHEAD" in capsys.readouterr().err

    def test_empty_sample_directory(self, monkeypatch, texts_dir, capsys):
        monkeypatch.setenv("TYPC_TEXTS_DIR", str(texts_dir))
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 1
        assert "no sample files found" in capsys.readouterr().err

    def test_wrap_flag_reaches_config(self, monkeypatch):
        seen = []
        monkeypatch.setattr(cli, "run_trainer", seen.append)
        cli.main(["--wrap"])
        assert seen[0].render_mode == "wrap"

    def test_session_value_error_not_reported_as_config_error(self, monkeypatch, capsys):
        self._fail_with(monkeypatch, ValueError("bad frame arithmetic"))
        with pytest.raises(ValueError, match="bad frame arithmetic"):
            cli.main([])
        assert "Error:" not in capsys.readouterr().err

    def test_debug_flag_comes_from_config(self, monkeypatch, tmp_path):
        monkeypatch.setenv("TYPC_SCORES_FILE", str(tmp_path / "state" / "scores.csv"))
        seen = []
        monkeypatch.setattr(cli, "run_trainer", seen.append)
        cli.main(["--debug"])
        assert seen[0].debug is True
        assert logging.getLogger().level == logging.DEBUG
        assert (tmp_path / "state" / "debug.log").is_file()


def _terminal_handlers():
    return [
        h for h in logging.getLogger().handlers
        if getattr(h, "stream", None) in (sys.stderr, sys.stdout, sys.__stderr__, sys.__stdout__)
    ]


class TestDebugLogging:
    def test_debug_records_go_to_file_not_terminal(self, texts_dir, tmp_path, fake_terminal, capsys):
        (texts_dir / "ab.txt").write_text("ab", encoding="utf-8")
        config = _config(texts_dir, tmp_path, debug=True)
        cli._configure_logging(config)
        assert _terminal_handlers() == []

        terminal, _ = fake_terminal(["a", "b", "q"])
        cli.run_trainer(config, terminal=terminal, clock=FakeClock())
        for handler in logging.getLogger().handlers:
            handler.flush()

        log = config.debug_log_path.read_text(encoding="utf-8")
        assert "key=97 kind=printable cursor=1" in log
        assert "key=98 kind=printable cursor=2" in log
        assert "key=" not in capsys.readouterr().err

    def test_debug_log_beside_score_log(self, tmp_path):
        config = TrainerConfig(scores_path=tmp_path / "typc" / "scores.csv", debug=True)
        assert config.debug_log_path == tmp_path / "typc" / "debug.log"

    def test_no_debug_file_without_flag(self, texts_dir, tmp_path):
        config = _config(texts_dir, tmp_path)
        cli._configure_logging(config)
        assert not config.debug_log_path.exists()
        assert logging.getLogger().level == logging.WARNING

    def test_unopenable_debug_log(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file, not dir", encoding="utf-8")
        config = TrainerConfig(scores_path=blocker / "scores.csv", debug=True)
        with pytest.raises(PersistenceError):
            cli._configure_logging(config)

    def test_session_count_logged_after_append(self, texts_dir, tmp_path, fake_terminal, caplog):
        (texts_dir / "ab.txt").write_text("ab", encoding="utf-8")
        config = _config(texts_dir, tmp_path)
        config.scores_path.parent.mkdir(parents=True)
        config.scores_path.write_text("1.00,2.00,3.00,4.00,old.txt\n", encoding="utf-8")
        terminal, _ = fake_terminal(["a", "b", "q"])

        with caplog.at_level(logging.DEBUG, logger="typc.cli"):
            cli.run_trainer(config, terminal=terminal, clock=FakeClock())

        assert "2 sessions logged" in caplog.text
