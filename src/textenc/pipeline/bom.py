"""Stage 1: BOM (Byte Order Mark) detection."""

from __future__ import annotations

from textenc.enums import ByteOrderMark, DetectionMethod
from textenc.pipeline import SignatureMatch
from textenc.registry import get_by_name


def detect_bom(data: bytes) -> ByteOrderMark | None:
    """Return the byte order mark at the start of *data*, if any.

    Marks are tested in :class:`ByteOrderMark` order, so UTF-32 is checked
    before UTF-16.
    """
    for bom in ByteOrderMark:
        if data.startswith(bom.sequence):
            # UTF-32 BOMs overlap with UTF-16 BOMs (FF FE 00 00 starts with
            # the UTF-16-LE BOM FF FE).  The payload after a UTF-32 BOM must
            # be a whole number of 4-byte code units, otherwise let the
            # shorter UTF-16 BOM match.
            if bom.is_utf32 and (len(data) - len(bom.sequence)) % 4 != 0:
                continue
            return bom
    return None


def detect_bom_signature(data: bytes) -> SignatureMatch | None:
    """Map a detected BOM to the encoding it implies."""
    bom = detect_bom(data)
    if bom is None:
        return None
    encoding = get_by_name(bom.encoding_name)
    if encoding is None:  # pragma: no cover - registry always has UTF forms
        msg = f"no registered encoding for {bom.name}"
        raise LookupError(msg)
    return SignatureMatch(
        encoding=encoding,
        prefix_length=len(bom.sequence),
        method=DetectionMethod.BOM,
    )
