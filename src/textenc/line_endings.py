"""Line ending kinds, detection and substitution."""

from __future__ import annotations

import enum
import re


class LineEnding(enum.Enum):
    """A line ending sequence."""

    LF = "\n"
    CR = "\r"
    CRLF = "\r\n"
    NEL = "\x85"
    LINE_SEPARATOR = "\u2028"
    PARAGRAPH_SEPARATOR = "\u2029"

    @property
    def short_name(self) -> str:
        """Short label such as ``"LF"`` or ``"PS"``."""
        return _SHORT_NAMES[self]

    @classmethod
    def from_name(cls, name: str) -> LineEnding:
        """Look up a line ending by member name or short label, case-insensitively."""
        key = name.strip().upper().replace("-", "_")
        for member in cls:
            if key in (member.name, member.short_name):
                return member
        msg = f"unknown line ending: {name!r}"
        raise ValueError(msg)


_SHORT_NAMES: dict[LineEnding, str] = {
    LineEnding.LF: "LF",
    LineEnding.CR: "CR",
    LineEnding.CRLF: "CRLF",
    LineEnding.NEL: "NEL",
    LineEnding.LINE_SEPARATOR: "LS",
    LineEnding.PARAGRAPH_SEPARATOR: "PS",
}

# CRLF must come first so it is not split into CR + LF.
_LINE_ENDING_RE = re.compile("\r\n|[\n\r\x85\u2028\u2029]")

_LINE_ENDING_VALUES: frozenset[str] = frozenset(e.value for e in LineEnding)


def is_line_ending(text: str) -> bool:
    """Return True if *text* is exactly one line ending sequence."""
    return text in _LINE_ENDING_VALUES


def detect_line_ending(text: str) -> LineEnding | None:
    """Return the first line ending in *text*, or ``None`` if there is none."""
    match = _LINE_ENDING_RE.search(text)
    if match is None:
        return None
    return LineEnding(match.group())


def replace_line_endings(text: str, line_ending: LineEnding) -> str:
    """Replace every line ending in *text* with *line_ending*."""
    return _LINE_ENDING_RE.sub(line_ending.value, text)


def line_start(text: str, location: int) -> int:
    """Return the offset where the line containing *location* starts.

    Every kind of line ending breaks a line, and CRLF counts once.
    """
    start = 0
    for match in _LINE_ENDING_RE.finditer(text, 0, location):
        start = match.end()
    return start
