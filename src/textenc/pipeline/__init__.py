"""Detection pipeline stages and shared types."""

from __future__ import annotations

import dataclasses

from textenc.enums import DetectionMethod
from textenc.registry import EncodingInfo


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedText:
    """A fully decoded buffer and how its encoding was chosen.

    ``with_bom`` is ``True`` when a byte order mark was stripped from the
    buffer before decoding, so a caller can write it back on save.
    """

    text: str
    encoding: EncodingInfo
    method: DetectionMethod
    with_bom: bool = False

    def to_dict(self) -> dict[str, str | bool]:
        """Convert this result to a plain dict.

        :returns: A dict with ``'encoding'``, ``'method'`` and ``'with_bom'`` keys.
        """
        return {
            "encoding": self.encoding.name,
            "method": self.method.value,
            "with_bom": self.with_bom,
        }


@dataclasses.dataclass(frozen=True, slots=True)
class SignatureMatch:
    """Binary evidence found at the start of a buffer.

    ``prefix_length`` is the number of leading bytes (the BOM) to strip
    before decoding.
    """

    encoding: EncodingInfo
    prefix_length: int
    method: DetectionMethod
