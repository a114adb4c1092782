"""Charset name mapping and extended-attribute value encoding.

This module defines:

1. **IANA name mapping** in both directions.  Matching of names is
   case-insensitive per IANA convention; spellings that are not registered
   names (``utf8``, ``latin1``, ``sjis``) are normalized through
   :func:`codecs.lookup` as a fallback.

2. **Attribute values** of the form ``"<iana name>;<numeric id>"`` as stored
   in the ``com.apple.TextEncoding`` extended file attribute.  The numeric id
   disambiguates encodings that share an IANA name (``shift_jis`` and
   ``Shift_JIS``), so it is preferred when reading.
"""

from __future__ import annotations

import codecs
import logging

from textenc.exceptions import UnresolvableCharsetNameError
from textenc.registry import (
    EncodingInfo,
    get_by_codec,
    get_by_iana_name,
    get_by_id,
    get_by_name,
)

logger = logging.getLogger(__name__)


def normalize_encoding_name(name: str) -> str:
    """Normalize encoding name for comparison."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        return name.lower().replace("-", "").replace("_", "")


def lookup_iana_name(name: str) -> EncodingInfo:
    """Resolve a charset name to an encoding.

    :raises UnresolvableCharsetNameError: If no known encoding matches.
    """
    stripped = name.strip()
    if stripped:
        info = get_by_iana_name(stripped) or get_by_name(stripped)
        if info is not None:
            return info
        try:
            codec_name = codecs.lookup(stripped).name
        except (LookupError, ValueError):
            pass
        else:
            info = get_by_codec(codec_name)
            if info is not None:
                return info
    raise UnresolvableCharsetNameError(name)


def to_iana_name(encoding: EncodingInfo) -> str | None:
    """Return the IANA charset name of *encoding*, if it has one."""
    return encoding.iana_name


def from_iana_name(name: str) -> EncodingInfo | None:
    """Resolve an IANA charset name, returning ``None`` when it is unknown."""
    try:
        return lookup_iana_name(name)
    except UnresolvableCharsetNameError:
        return None


def get_encoding(encoding: EncodingInfo | str) -> EncodingInfo:
    """Accept an :class:`EncodingInfo` or any resolvable name.

    :raises UnresolvableCharsetNameError: If a name cannot be resolved.
    """
    if isinstance(encoding, EncodingInfo):
        return encoding
    return lookup_iana_name(encoding)


def encode_attribute(encoding: EncodingInfo) -> str | None:
    """Return the ``"<iana name>;<id>"`` attribute value for *encoding*.

    :returns: ``None`` if the encoding has no IANA name.
    """
    if encoding.iana_name is None:
        return None
    return f"{encoding.iana_name};{encoding.encoding_id}"


def decode_attribute(value: str | bytes) -> EncodingInfo | None:
    """Parse an attribute value written by :func:`encode_attribute`.

    Either component may be empty.  The numeric id wins when it is present
    and known; otherwise the name component is resolved on its own.
    """
    if isinstance(value, bytes):
        try:
            value = value.decode("ascii")
        except UnicodeDecodeError:
            logger.debug("ignoring non-ASCII encoding attribute %r", value)
            return None

    name, _, id_part = value.strip().partition(";")

    if id_part:
        try:
            encoding_id = int(id_part)
        except ValueError:
            logger.debug("ignoring unparseable encoding id %r", id_part)
        else:
            info = get_by_id(encoding_id)
            if info is not None:
                return info
            logger.debug("unknown encoding id %d", encoding_id)

    if not name:
        return None
    try:
        return lookup_iana_name(name)
    except UnresolvableCharsetNameError as e:
        logger.debug("ignoring attribute: %s", e)
        return None
