"""Round-trip compatibility of text with a target encoding.

A character is incompatible with an encoding when encoding it and decoding
the result does not give the character back: either the encoder rejects it
outright or, as with the Yen sign in Shift_JIS, it silently maps it to a
different character.  Text is examined by extended grapheme cluster, the
unit a user perceives as one character.
"""

from __future__ import annotations

import dataclasses

import regex

from textenc.charset_names import get_encoding
from textenc.line_endings import LineEnding, is_line_ending, replace_line_endings
from textenc.registry import EncodingInfo

_GRAPHEME_RE = regex.compile(r"\X")

_YEN_SIGN = "¥"
_BACKSLASH = "\\"


@dataclasses.dataclass(frozen=True, slots=True)
class IncompatibleCharacter:
    """One grapheme cluster that would not survive saving.

    ``character`` is the cluster as it would be written (a line ending in its
    substituted form), ``converted`` is what a lossy conversion writes
    instead, ``location`` and ``length`` are code-point offsets into the
    scanned text and ``line_number`` is 1-based.
    """

    character: str
    converted: str
    location: int
    length: int
    line_number: int

    def to_dict(self) -> dict[str, str | int]:
        return dataclasses.asdict(self)


def convert_yen_sign(text: str, encoding: EncodingInfo | str) -> str:
    """Replace Yen signs with backslashes if *encoding* cannot hold them.

    Legacy Japanese encodings map the backslash and the Yen sign to the same
    byte, so writing a backslash is what the user expects to see.
    """
    if not text:
        return text
    if get_encoding(encoding).can_represent_yen:
        return text
    return text.replace(_YEN_SIGN, _BACKSLASH)


def is_compatible(text: str, encoding: EncodingInfo) -> bool:
    """Return True if *text* survives an encode/decode round trip."""
    try:
        return text.encode(encoding.python_codec).decode(encoding.python_codec) == text
    except UnicodeError:
        return False


def _lossy_conversion(text: str, encoding: EncodingInfo) -> str:
    codec = encoding.python_codec
    return text.encode(codec, errors="replace").decode(codec, errors="replace")


def scan_incompatible_characters(
    text: str,
    encoding: EncodingInfo | str,
    line_ending: LineEnding | None = None,
) -> list[IncompatibleCharacter]:
    """Find every grapheme cluster of *text* that *encoding* cannot hold.

    :param text: The text to check.
    :param encoding: The encoding the text will be written with.
    :param line_ending: Line ending substituted at save time, if any.  Line
        endings are checked in this form.
    :returns: The incompatible clusters, ordered by location.
    """
    encoding = get_encoding(encoding)
    text = convert_yen_sign(text, encoding)

    whole = text if line_ending is None else replace_line_endings(text, line_ending)
    if is_compatible(whole, encoding):
        return []

    incompatibles: list[IncompatibleCharacter] = []
    line_number = 1
    for match in _GRAPHEME_RE.finditer(text):
        cluster = match.group()
        breaks_line = is_line_ending(cluster)
        if breaks_line and line_ending is not None:
            cluster = line_ending.value

        if not is_compatible(cluster, encoding):
            incompatibles.append(
                IncompatibleCharacter(
                    character=cluster,
                    converted=_lossy_conversion(cluster, encoding),
                    location=match.start(),
                    length=match.end() - match.start(),
                    line_number=line_number,
                )
            )
        if breaks_line:
            line_number += 1
    return incompatibles
