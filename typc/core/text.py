"""Reference text model and sample normalization.

WHY: Samples come from arbitrary text files, often with curly quotes,
em dashes, hard line breaks and indentation. The trainer only accepts
printable ASCII keystrokes, so every reference character must be
something the user can actually type, and the speed metric needs a
deterministic character count that ignores whitespace.

HOW: normalize_sample() maps typographic punctuation to ASCII, collapses
whitespace runs (newlines and tabs included) to single spaces, strips the
ends and drops anything else outside the printable range. ReferenceText
wraps the result with the derived counts used by the metrics.

RULES:
- Reference characters are always in ASCII 32..126
- A word is a maximal run of non-space characters
- average_word_length is None when there are no words
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

FIRST_PRINTABLE = 32
LAST_PRINTABLE = 126

# Typographic characters with an obvious ASCII equivalent. Zero-width
# characters map to "" and disappear.
_ASCII_TRANSLATION = {
    ord("‘"): "'", ord("’"): "'", ord("‚"): "'", ord("‛"): "'",
    ord("“"): '"', ord("”"): '"', ord("„"): '"', ord("″"): '"',
    ord("–"): "-", ord("—"): "-", ord("−"): "-",
    ord("…"): "...",
    0x00A0: " ", 0x2007: " ", 0x202F: " ", 0x2009: " ",
    0x200B: "", 0x200C: "", 0x200D: "", 0x2060: "", 0xFEFF: "",
}

_WHITESPACE_RUN = re.compile(r"\s+")


def is_printable(ch: str) -> bool:
    return len(ch) == 1 and FIRST_PRINTABLE <= ord(ch) <= LAST_PRINTABLE


def normalize_sample(raw: str) -> str:
    """Turn raw file contents into a typeable single-line reference.

    Example: ``"It’s\\n  fine\\t— ok\\n"`` → ``"It's fine - ok"``.
    """
    text = raw.translate(_ASCII_TRANSLATION)
    text = _WHITESPACE_RUN.sub(" ", text).strip()
    return "".join(ch for ch in text if is_printable(ch))


@dataclass(frozen=True)
class ReferenceText:
    """The immutable sample the user has to type.

    WHY: Both the renderer and the metrics need the same view of the
    text; freezing it guarantees the reference cannot drift mid-session.

    RULES:
    - identifier: where the sample came from (file name), stored with scores
    - chars: the normalized text; len(ReferenceText) is N
    - non_whitespace_count / word_count are computed once at construction
    """

    identifier: str
    chars: str
    non_whitespace_count: int = field(init=False)
    word_count: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "non_whitespace_count", sum(1 for ch in self.chars if not ch.isspace())
        )
        object.__setattr__(self, "word_count", len(self.chars.split()))

    @classmethod
    def from_sample(cls, identifier: str, raw: str) -> ReferenceText:
        return cls(identifier=identifier, chars=normalize_sample(raw))

    def __len__(self) -> int:
        return len(self.chars)

    def __getitem__(self, index: int) -> str:
        return self.chars[index]

    @property
    def average_word_length(self) -> float | None:
        if self.word_count == 0:
            return None
        return self.non_whitespace_count / self.word_count
