"""Stage 3: encoding declaration scanning over decoded text.

Recognizes the declarations found in HTML/XML (``charset=``, ``encoding=``),
CSS (``@charset``) and source files (``coding:``, ``encoding:``).  The scan
runs on text that has already been decoded once, since the declaration is
written in the repertoire of the encoding it names.
"""

from __future__ import annotations

import dataclasses
import logging
import re
from collections.abc import Iterable

from textenc._utils import DEFAULT_DECLARATION_SCAN_LENGTH, _validate_positive_int
from textenc.charset_names import get_encoding, lookup_iana_name
from textenc.exceptions import UnresolvableCharsetNameError
from textenc.registry import SHIFT_JIS_VARIANTS, EncodingInfo

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(
    r"""(?:\b(?:charset=|encoding=|encoding:|coding:)|@charset)"""
    r"""["' ]*([-_a-zA-Z0-9]+)["' </>;\n\r]""",
    re.IGNORECASE,
)


@dataclasses.dataclass(frozen=True, slots=True)
class DeclarationMatch:
    """The charset token of a declaration and its offset in the text."""

    name: str
    offset: int


def find_encoding_declaration(
    text: str, max_length: int = DEFAULT_DECLARATION_SCAN_LENGTH
) -> DeclarationMatch | None:
    """Return the first declaration within the first *max_length* characters."""
    _validate_positive_int(max_length, "max_length")
    if not text:
        return None
    match = _DECLARATION_RE.search(text, 0, max_length)
    if match is None:
        return None
    return DeclarationMatch(name=match.group(1), offset=match.start(1))


def _preferred_shift_jis(
    candidates: Iterable[EncodingInfo | str],
) -> EncodingInfo | None:
    for candidate in candidates:
        try:
            encoding = get_encoding(candidate)
        except UnresolvableCharsetNameError:
            continue
        if encoding.name in SHIFT_JIS_VARIANTS:
            return encoding
    return None


def scan_encoding_declaration(
    text: str,
    max_length: int = DEFAULT_DECLARATION_SCAN_LENGTH,
    candidates: Iterable[EncodingInfo | str] = (),
) -> EncodingInfo | None:
    """Resolve the encoding declared in *text*, if any.

    ``Shift_JIS`` is ambiguous: both Shift JIS variants share that IANA name
    case-insensitively.  For it, the variant listed first in *candidates*
    wins; without one, the name resolves as usual.

    :param text: Decoded text to scan.
    :param max_length: Number of leading characters to scan.
    :param candidates: The caller's encoding priority order.
    :returns: The declared encoding, or ``None`` if there is no declaration
        or it names an unknown encoding.
    """
    declaration = find_encoding_declaration(text, max_length)
    if declaration is None:
        return None

    if declaration.name.upper() == "SHIFT_JIS":
        preferred = _preferred_shift_jis(candidates)
        if preferred is not None:
            return preferred

    try:
        return lookup_iana_name(declaration.name)
    except UnresolvableCharsetNameError as e:
        logger.debug("ignoring encoding declaration at %d: %s", declaration.offset, e)
        return None
