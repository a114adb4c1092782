"""Early detection of ISO-2022-JP from escape sequences.

ISO-2022-JP switches character sets with ESC (0x1B) sequences and otherwise
uses only 7-bit bytes, so it cannot be told apart from ASCII by decoding
alone.  Only a bounded leading window is examined so that opening a huge
file stays cheap.
"""

from __future__ import annotations

from textenc._utils import DEFAULT_ESCAPE_WINDOW, _validate_positive_int
from textenc.enums import DetectionMethod
from textenc.pipeline import SignatureMatch
from textenc.registry import get_by_name

_ESC = 0x1B

# Designation sequences for the ISO-2022-JP character sets.
ISO_2022_JP_ESCAPE_SEQUENCES: tuple[bytes, ...] = (
    b"\x1b(B",  # ASCII
    b"\x1b(I",  # JIS X 0201 katakana
    b"\x1b$@",  # JIS C 6226-1978
    b"\x1b$B",  # JIS X 0208-1983
    b"\x1b$(D",  # JIS X 0212-1990
)


def detect_escape_encoding(data: bytes, window: int = DEFAULT_ESCAPE_WINDOW) -> bool:
    """Return True if the leading *window* bytes hold ISO-2022-JP escapes.

    :param data: The raw byte data to examine.
    :param window: Number of leading bytes to inspect.
    """
    _validate_positive_int(window, "window")
    head = data[:window]
    if _ESC not in head:
        return False
    return any(seq in head for seq in ISO_2022_JP_ESCAPE_SEQUENCES)


def detect_escape_signature(
    data: bytes, window: int = DEFAULT_ESCAPE_WINDOW
) -> SignatureMatch | None:
    """Report ISO-2022-JP (nothing to strip) when escape evidence is present."""
    if not detect_escape_encoding(data, window):
        return None
    encoding = get_by_name("iso-2022-jp")
    if encoding is None:  # pragma: no cover - always registered
        msg = "iso-2022-jp is not registered"
        raise LookupError(msg)
    return SignatureMatch(
        encoding=encoding, prefix_length=0, method=DetectionMethod.ESCAPE
    )
