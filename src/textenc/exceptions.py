"""Exceptions raised by textenc."""

from __future__ import annotations

from collections.abc import Sequence


class TextEncodingError(ValueError):
    """Base class for textenc errors."""


class UnknownEncodingError(TextEncodingError):
    """No candidate encoding could decode the buffer."""

    def __init__(self, msg: str, candidates: Sequence[str] = ()) -> None:
        super().__init__(msg)
        self.candidates = tuple(candidates)


class InvalidBOMPayloadError(UnknownEncodingError):
    """A byte order mark was found but the payload does not decode with it."""


class UnresolvableCharsetNameError(TextEncodingError, LookupError):
    """A charset name has no known encoding."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown charset name: {name!r}")
        self.name = name
