"""Shared test fixtures for the typc test suite.

WHY: Session, loop and CLI tests all need the same three doubles: a clock
whose time the test controls, a display that replays scripted key codes
instead of reading a terminal, and a quick way to build reference texts.

HOW: FakeClock is a callable with a settable ``now``. FakeDisplay is a
BaseDisplay that records every frame and line screen it is asked to
paint. ``fake_terminal`` returns a context-manager factory with the same
shape as open_terminal().

RULES:
- FakeDisplay raises AssertionError when it runs out of keys, so a loop
  that never terminates fails fast instead of hanging
- Key scripts may mix str (converted with ord) and raw int codes
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import List, Sequence, Tuple, Union

import pytest

from typc.core.session import SessionState
from typc.core.text import ReferenceText
from typc.render.base import Frame
from typc.terminal.display import BaseDisplay

BACKSPACE = 127
KEY_LEFT = 260  # curses.KEY_LEFT

Key = Union[str, int]


class FakeClock:
    """Deterministic time source: returns ``now`` until told otherwise."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeDisplay(BaseDisplay):
    """Scripted BaseDisplay for driving the input loop in tests."""

    def __init__(self, keys: Sequence[Key] = (), height: int = 24, width: int = 80) -> None:
        self.keys: List[int] = [ord(k) if isinstance(k, str) else k for k in keys]
        self.height = height
        self.width = width
        self.frames: List[Frame] = []
        self.screens: List[List[str]] = []
        self.beeps = 0

    def size(self) -> Tuple[int, int]:
        return self.height, self.width

    def draw(self, frame: Frame) -> None:
        self.frames.append(frame)

    def show_lines(self, lines: Sequence[str]) -> None:
        self.screens.append(list(lines))

    def read_key(self) -> int:
        if not self.keys:
            raise AssertionError("FakeDisplay ran out of scripted keys")
        return self.keys.pop(0)

    def beep(self) -> None:
        self.beeps += 1


def make_session(chars: str, clock: FakeClock = None) -> Tuple[ReferenceText, SessionState]:
    text = ReferenceText(identifier="sample.txt", chars=chars)
    return text, SessionState(text, clock=clock or FakeClock())


def type_keys(session: SessionState, keys: Sequence[Key]) -> None:
    for key in keys:
        session.apply_key(ord(key) if isinstance(key, str) else key)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_terminal():
    """Factory: fake_terminal(keys, ...) → (factory, display).

    The factory can be passed as ``terminal=`` to run_trainer().
    """

    def _build(keys: Sequence[Key], **kwargs):
        display = FakeDisplay(keys, **kwargs)
        opened = []

        @contextmanager
        def _terminal():
            opened.append(True)
            yield display

        _terminal.opened = opened
        return _terminal, display

    return _build
