"""Pipeline orchestrator: runs the detection stages in priority order.

1. Byte order mark.  Authoritative: if the payload does not decode in the
   encoding the BOM implies, detection fails rather than falling through.
2. ISO-2022-JP escape sequences.  A failed decode means the escape bytes
   were a false positive and detection continues.
3. The caller's candidate list, in order; the first encoding that decodes
   the whole buffer wins.

Declaration scanning is not a stage here: :func:`textenc.decode` applies it
to a candidate-chain result.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from textenc._utils import DEFAULT_ESCAPE_WINDOW
from textenc.charset_names import get_encoding
from textenc.enums import DetectionMethod
from textenc.exceptions import (
    InvalidBOMPayloadError,
    UnknownEncodingError,
    UnresolvableCharsetNameError,
)
from textenc.pipeline import DecodedText, SignatureMatch
from textenc.pipeline.bom import detect_bom_signature
from textenc.pipeline.escape import detect_escape_signature
from textenc.pipeline.validity import try_decode
from textenc.registry import EncodingInfo

logger = logging.getLogger(__name__)


def detect_signature(
    data: bytes, escape_window: int = DEFAULT_ESCAPE_WINDOW
) -> SignatureMatch | None:
    """Return the byte signature of *data*: a BOM first, then ISO-2022-JP escapes."""
    return detect_bom_signature(data) or detect_escape_signature(data, escape_window)


def resolve_candidates(
    candidates: Iterable[EncodingInfo | str],
) -> tuple[EncodingInfo, ...]:
    """Resolve candidate names to encodings, dropping unknown names.

    Order is preserved and duplicates keep their first position.
    """
    resolved: list[EncodingInfo] = []
    for candidate in candidates:
        try:
            encoding = get_encoding(candidate)
        except UnresolvableCharsetNameError as e:
            logger.debug("skipping candidate: %s", e)
            continue
        if encoding not in resolved:
            resolved.append(encoding)
    return tuple(resolved)


def run_pipeline(
    data: bytes,
    candidates: Iterable[EncodingInfo | str],
    escape_window: int = DEFAULT_ESCAPE_WINDOW,
) -> DecodedText:
    """Run the detection pipeline on *data*.

    :param data: The raw bytes to decode.
    :param candidates: Encodings to try, in order of preference.
    :param escape_window: Leading bytes inspected for ISO-2022-JP escapes.
    :returns: The decoded text and the encoding used.
    :raises InvalidBOMPayloadError: If a BOM is present but its payload does
        not decode.
    :raises UnknownEncodingError: If no candidate decodes *data*.
    """
    resolved = resolve_candidates(candidates)

    signature = detect_signature(data, escape_window)

    # Stage 1: BOM
    if signature is not None and signature.method is DetectionMethod.BOM:
        encoding = signature.encoding
        text = try_decode(data[signature.prefix_length :], encoding)
        if text is None:
            msg = f"byte order mark indicates {encoding.name} but the data does not decode"
            raise InvalidBOMPayloadError(msg, [encoding.name])
        logger.debug("byte order mark: %s", encoding.name)
        return DecodedText(
            text=text, encoding=encoding, method=signature.method, with_bom=True
        )

    # Stage 2: ISO-2022-JP escape sequences
    if signature is not None:
        text = try_decode(data, signature.encoding)
        if text is not None:
            logger.debug("escape sequences: %s", signature.encoding.name)
            return DecodedText(
                text=text, encoding=signature.encoding, method=signature.method
            )
        logger.debug(
            "escape sequences found but %s decode failed", signature.encoding.name
        )

    # Stage 3: candidate chain
    for encoding in resolved:
        text = try_decode(data, encoding)
        if text is not None:
            logger.debug("candidate: %s", encoding.name)
            return DecodedText(
                text=text, encoding=encoding, method=DetectionMethod.CANDIDATE
            )
        logger.debug("candidate rejected: %s", encoding.name)

    names = [e.name for e in resolved]
    msg = f"data could not be decoded with any of: {', '.join(names) or '(no candidates)'}"
    raise UnknownEncodingError(msg, names)
