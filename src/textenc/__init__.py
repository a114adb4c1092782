"""Text encoding negotiation and round-trip compatibility scanning."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from textenc._utils import (
    DEFAULT_DECLARATION_SCAN_LENGTH,
    DEFAULT_ESCAPE_WINDOW,
    _validate_positive_int,
)
from textenc.charset_names import (
    decode_attribute,
    encode_attribute,
    from_iana_name,
    get_encoding,
    to_iana_name,
)
from textenc.compatibility import (
    IncompatibleCharacter,
    convert_yen_sign,
    scan_incompatible_characters,
)
from textenc.enums import ByteOrderMark, ByteWidth, DetectionMethod
from textenc.exceptions import (
    InvalidBOMPayloadError,
    TextEncodingError,
    UnknownEncodingError,
    UnresolvableCharsetNameError,
)
from textenc.file_attribute import read_encoding_attribute, write_encoding_attribute
from textenc.line_endings import LineEnding
from textenc.pipeline import DecodedText
from textenc.pipeline.declaration import scan_encoding_declaration
from textenc.pipeline.orchestrator import run_pipeline
from textenc.pipeline.validity import try_decode
from textenc.registry import DEFAULT_CANDIDATES, REGISTRY, EncodingInfo
from textenc.scanner import IncompatibleCharacterScanner, ScanTarget

__version__ = "1.0.0"
__all__ = [
    "DEFAULT_CANDIDATES",
    "REGISTRY",
    "ByteOrderMark",
    "ByteWidth",
    "DecodedText",
    "DetectionMethod",
    "EncodingInfo",
    "IncompatibleCharacter",
    "IncompatibleCharacterScanner",
    "InvalidBOMPayloadError",
    "LineEnding",
    "ScanTarget",
    "TextEncodingError",
    "UnknownEncodingError",
    "UnresolvableCharsetNameError",
    "convert_yen_sign",
    "decode",
    "decode_attribute",
    "decode_file",
    "encode_attribute",
    "from_iana_name",
    "get_encoding",
    "read_encoding_attribute",
    "scan_incompatible_characters",
    "to_iana_name",
    "write_encoding_attribute",
]

logger = logging.getLogger(__name__)

# Declarations of these widths are ignored: a file that really is UTF-16 or
# UTF-32 starts with a BOM, and one that decoded in an ASCII-compatible
# candidate cannot be.
_IGNORED_DECLARED_WIDTHS = frozenset({ByteWidth.UTF16, ByteWidth.UTF32})


def _decode_stored(data: bytes, encoding: EncodingInfo) -> DecodedText | None:
    bom = ByteOrderMark.UTF8.sequence
    with_bom = encoding.width is ByteWidth.UTF8 and data.startswith(bom)
    text = try_decode(data[len(bom) :] if with_bom else data, encoding)
    if text is None:
        logger.debug("stored encoding %s does not decode the data", encoding.name)
        return None
    return DecodedText(
        text=text, encoding=encoding, method=DetectionMethod.STORED, with_bom=with_bom
    )


def _refine_by_declaration(
    data: bytes,
    result: DecodedText,
    candidates: tuple[EncodingInfo | str, ...],
    scan_length: int,
) -> DecodedText:
    declared = scan_encoding_declaration(result.text, scan_length, candidates)
    if declared is None or declared == result.encoding:
        return result
    if declared.width in _IGNORED_DECLARED_WIDTHS:
        logger.debug("ignoring %s declaration in decoded text", declared.name)
        return result
    text = try_decode(data, declared)
    if text is None:
        logger.debug("declared encoding %s does not decode the data", declared.name)
        return result
    logger.debug("declaration overrides %s with %s", result.encoding.name, declared.name)
    return DecodedText(text=text, encoding=declared, method=DetectionMethod.DECLARATION)


def decode(
    data: bytes | bytearray,
    candidates: Iterable[EncodingInfo | str] = DEFAULT_CANDIDATES,
    *,
    stored_encoding: EncodingInfo | str | None = None,
    scan_declaration: bool = True,
    declaration_scan_length: int = DEFAULT_DECLARATION_SCAN_LENGTH,
    escape_window: int = DEFAULT_ESCAPE_WINDOW,
) -> DecodedText:
    """Decode a byte buffer of unknown encoding.

    The order of precedence is: *stored_encoding* (when it decodes the
    data), a byte order mark, ISO-2022-JP escape sequences, then the first
    of *candidates* that decodes the data.  A candidate result is refined by
    an encoding declaration in the decoded text, such as
    ``<meta charset="...">`` or ``-*- coding: ... -*-``, when the declared
    encoding also decodes the data.

    :param data: The raw bytes.
    :param candidates: Encodings to try, in order of preference.
    :param stored_encoding: Encoding remembered from a previous save.
    :param scan_declaration: Whether to honor an encoding declaration.
    :param declaration_scan_length: Number of leading characters to scan
        for a declaration.
    :param escape_window: Number of leading bytes inspected for
        ISO-2022-JP escape sequences.
    :returns: The decoded text, the encoding used and how it was chosen.
    :raises InvalidBOMPayloadError: If a BOM is present but its payload does
        not decode.
    :raises UnknownEncodingError: If nothing decodes the data.
    """
    _validate_positive_int(declaration_scan_length, "declaration_scan_length")
    _validate_positive_int(escape_window, "escape_window")
    data = data if isinstance(data, bytes) else bytes(data)
    candidates = tuple(candidates)

    if stored_encoding is not None:
        try:
            stored = get_encoding(stored_encoding)
        except UnresolvableCharsetNameError as e:
            logger.debug("ignoring stored encoding: %s", e)
        else:
            result = _decode_stored(data, stored)
            if result is not None:
                return result

    result = run_pipeline(data, candidates, escape_window=escape_window)
    if scan_declaration and result.method is DetectionMethod.CANDIDATE:
        result = _refine_by_declaration(
            data, result, candidates, declaration_scan_length
        )
    return result


def decode_file(
    path: str | os.PathLike[str],
    candidates: Iterable[EncodingInfo | str] = DEFAULT_CANDIDATES,
    *,
    use_attribute: bool = True,
    scan_declaration: bool = True,
    declaration_scan_length: int = DEFAULT_DECLARATION_SCAN_LENGTH,
    escape_window: int = DEFAULT_ESCAPE_WINDOW,
) -> DecodedText:
    """Read and decode the file at *path*.

    When *use_attribute* is true, an encoding stored in the file's extended
    attribute is tried first.  See :func:`decode` for the remaining
    parameters.

    :raises OSError: If the file cannot be read.
    """
    data = Path(path).read_bytes()
    stored = read_encoding_attribute(path) if use_attribute else None
    return decode(
        data,
        candidates,
        stored_encoding=stored,
        scan_declaration=scan_declaration,
        declaration_scan_length=declaration_scan_length,
        escape_window=escape_window,
    )
