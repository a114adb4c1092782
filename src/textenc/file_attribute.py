"""Reading and writing the encoding stored in an extended file attribute.

The value is the ASCII string ``"<iana name>;<numeric id>"`` used by the
``com.apple.TextEncoding`` attribute.  Linux only allows user-defined
attributes in the ``user.`` namespace, so the name is prefixed there.
"""

from __future__ import annotations

import errno
import logging
import os
import sys

from textenc.charset_names import decode_attribute, encode_attribute
from textenc.registry import EncodingInfo

logger = logging.getLogger(__name__)

ATTRIBUTE_NAME = "com.apple.TextEncoding"

# errno values meaning "no such attribute" or "attributes unsupported here".
_ABSENT_ERRNOS: frozenset[int] = frozenset(
    code
    for code in (
        getattr(errno, "ENODATA", None),
        getattr(errno, "ENOATTR", None),
        errno.ENOTSUP,
        errno.EOPNOTSUPP,
    )
    if code is not None
)


def attribute_name() -> str:
    """Return the platform-specific attribute name."""
    if sys.platform.startswith("linux"):
        return "user." + ATTRIBUTE_NAME
    return ATTRIBUTE_NAME


def xattr_supported() -> bool:
    """Whether this Python exposes extended attribute calls."""
    return hasattr(os, "getxattr") and hasattr(os, "setxattr")


def read_encoding_attribute(path: str | os.PathLike[str]) -> EncodingInfo | None:
    """Return the encoding stored on *path*, or ``None`` if there is none.

    :raises OSError: For errors other than a missing or unsupported attribute.
    """
    if not xattr_supported():
        return None
    try:
        value = os.getxattr(path, attribute_name())
    except OSError as e:
        if e.errno in _ABSENT_ERRNOS:
            return None
        raise
    encoding = decode_attribute(value)
    if encoding is None:
        logger.debug("%s: unusable encoding attribute %r", path, value)
    return encoding


def write_encoding_attribute(
    path: str | os.PathLike[str], encoding: EncodingInfo
) -> bool:
    """Store *encoding* on *path*.

    :returns: False if the encoding has no IANA name or the file system does
        not support extended attributes.
    :raises OSError: For any other failure.
    """
    value = encode_attribute(encoding)
    if value is None or not xattr_supported():
        return False
    try:
        os.setxattr(path, attribute_name(), value.encode("ascii"))
    except OSError as e:
        if e.errno in _ABSENT_ERRNOS:
            logger.debug("%s: extended attributes not supported", path)
            return False
        raise
    return True
