"""Stage 2: strict whole-buffer decoding."""

from __future__ import annotations

from collections.abc import Iterable

from textenc.registry import EncodingInfo


def try_decode(data: bytes, encoding: EncodingInfo) -> str | None:
    """Decode all of *data* with *encoding*, or return ``None`` on any error.

    A decode never succeeds partially: one undecodable byte rejects the
    whole buffer.
    """
    try:
        return data.decode(encoding.python_codec, errors="strict")
    except (UnicodeDecodeError, LookupError):
        return None


def filter_by_validity(
    data: bytes, candidates: Iterable[EncodingInfo]
) -> tuple[EncodingInfo, ...]:
    """Filter candidates to only those where *data* decodes without errors.

    :param data: The raw byte data to test.
    :param candidates: Encoding candidates to validate.
    :returns: The subset of *candidates* that can decode *data*, in order.
    """
    return tuple(enc for enc in candidates if try_decode(data, enc) is not None)
