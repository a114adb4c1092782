"""Registry of known text encodings.

Every encoding textenc can detect or scan for is described by one immutable
:class:`EncodingInfo`.  Numeric ids are the Core Foundation
``CFStringEncoding`` constants, so attribute values written by textenc can be
read by macOS applications that use the ``com.apple.TextEncoding``
extended attribute, and vice versa.
"""

from __future__ import annotations

import codecs
import dataclasses
import threading

from textenc.enums import ByteWidth

_YEN_SIGN = "¥"


@dataclasses.dataclass(frozen=True, slots=True)
class EncodingInfo:
    """Immutable description of a single encoding.

    ``can_represent_yen`` is derived from the codec when the registry is
    built: it is ``True`` only if U+00A5 survives an encode/decode round
    trip.  Shift_JIS, for example, encodes the Yen sign to 0x5C but decodes
    0x5C back to a backslash, so it reports ``False``.
    """

    name: str
    encoding_id: int
    iana_name: str | None
    python_codec: str
    width: ByteWidth
    localized_name: str
    can_represent_yen: bool = False

    def __str__(self) -> str:
        return self.name


def _round_trips(text: str, codec: str) -> bool:
    try:
        return text.encode(codec).decode(codec) == text
    except (UnicodeError, LookupError):
        return False


def _info(
    name: str,
    encoding_id: int,
    iana_name: str | None,
    python_codec: str,
    width: ByteWidth,
    localized_name: str,
) -> EncodingInfo:
    return EncodingInfo(
        name=name,
        encoding_id=encoding_id,
        iana_name=iana_name,
        python_codec=python_codec,
        width=width,
        localized_name=localized_name,
        can_represent_yen=_round_trips(_YEN_SIGN, python_codec),
    )


_S = ByteWidth.SINGLE_BYTE
_M = ByteWidth.MULTI_BYTE

# Ordered so that when two encodings share an IANA name (case-insensitively)
# the first one listed is what the name resolves to.
REGISTRY: tuple[EncodingInfo, ...] = (
    # Unicode
    _info("utf-8", 0x08000100, "UTF-8", "utf-8", ByteWidth.UTF8, "Unicode (UTF-8)"),
    _info("utf-16", 0x00000100, "UTF-16", "utf-16", ByteWidth.UTF16, "Unicode (UTF-16)"),
    _info("utf-16be", 0x10000100, "UTF-16BE", "utf-16-be", ByteWidth.UTF16, "Unicode (UTF-16BE)"),
    _info("utf-16le", 0x14000100, "UTF-16LE", "utf-16-le", ByteWidth.UTF16, "Unicode (UTF-16LE)"),
    _info("utf-32", 0x0C000100, "UTF-32", "utf-32", ByteWidth.UTF32, "Unicode (UTF-32)"),
    _info("utf-32be", 0x18000100, "UTF-32BE", "utf-32-be", ByteWidth.UTF32, "Unicode (UTF-32BE)"),
    _info("utf-32le", 0x1C000100, "UTF-32LE", "utf-32-le", ByteWidth.UTF32, "Unicode (UTF-32LE)"),
    # Japanese
    _info("shift_jis", 0x0A01, "shift_jis", "shift_jis", _M, "Japanese (Shift JIS)"),
    _info("shift_jisx0213", 0x0628, "Shift_JIS", "shift_jisx0213", _M, "Japanese (Shift JIS X0213)"),
    _info("cp932", 0x0420, "cp932", "cp932", _M, "Japanese (Windows, DOS)"),
    _info("euc-jp", 0x0920, "EUC-JP", "euc_jp", _M, "Japanese (EUC)"),
    _info("iso-2022-jp", 0x0820, "ISO-2022-JP", "iso2022_jp", ByteWidth.ISO2022, "Japanese (ISO 2022-JP)"),
    _info("iso-2022-jp-2", 0x0821, "ISO-2022-JP-2", "iso2022_jp_2", ByteWidth.ISO2022, "Japanese (ISO 2022-JP-2)"),
    _info("iso-2022-jp-3", 0x0823, None, "iso2022_jp_3", ByteWidth.ISO2022, "Japanese (ISO 2022-JP-3)"),
    # Chinese
    _info("gb18030", 0x0632, "GB18030", "gb18030", _M, "Chinese (GB 18030)"),
    _info("gbk", 0x0631, "GBK", "gbk", _M, "Chinese (GBK)"),
    _info("gb2312", 0x0930, "GB2312", "gb2312", _M, "Chinese (EUC-CN)"),
    _info("hz-gb-2312", 0x0A05, "HZ-GB-2312", "hz", ByteWidth.ISO2022, "Chinese (HZ GB 2312)"),
    _info("big5", 0x0A03, "Big5", "big5", _M, "Traditional Chinese (Big 5)"),
    _info("big5-hkscs", 0x0A06, "Big5-HKSCS", "big5hkscs", _M, "Traditional Chinese (Big 5 HKSCS)"),
    _info("cp950", 0x0423, "cp950", "cp950", _M, "Traditional Chinese (Windows, DOS)"),
    # Korean
    _info("euc-kr", 0x0940, "EUC-KR", "euc_kr", _M, "Korean (EUC)"),
    _info("cp949", 0x0422, "cp949", "cp949", _M, "Korean (Windows, DOS)"),
    _info("iso-2022-kr", 0x0840, "ISO-2022-KR", "iso2022_kr", ByteWidth.ISO2022, "Korean (ISO 2022-KR)"),
    _info("johab", 0x0510, None, "johab", _M, "Korean (Windows Johab)"),
    # Western and other single-byte
    _info("us-ascii", 0x0600, "US-ASCII", "ascii", _S, "Western (ASCII)"),
    _info("macintosh", 0x0000, "macintosh", "mac_roman", _S, "Western (Mac OS Roman)"),
    _info("windows-1252", 0x0500, "windows-1252", "cp1252", _S, "Western (Windows Latin 1)"),
    _info("iso-8859-1", 0x0201, "ISO-8859-1", "latin_1", _S, "Western (ISO Latin 1)"),
    _info("iso-8859-15", 0x020F, "ISO-8859-15", "iso8859_15", _S, "Western (ISO Latin 9)"),
    _info("cp437", 0x0400, "IBM437", "cp437", _S, "Latin-US (DOS)"),
    _info("cp850", 0x0410, "IBM850", "cp850", _S, "Western (DOS Latin 1)"),
    _info("x-mac-centraleurroman", 0x001D, "x-mac-centraleurroman", "mac_latin2", _S, "Central European (Mac OS)"),
    _info("windows-1250", 0x0501, "windows-1250", "cp1250", _S, "Central European (Windows Latin 2)"),
    _info("iso-8859-2", 0x0202, "ISO-8859-2", "iso8859_2", _S, "Central European (ISO Latin 2)"),
    _info("iso-8859-3", 0x0203, "ISO-8859-3", "iso8859_3", _S, "Western (ISO Latin 3)"),
    _info("iso-8859-4", 0x0204, "ISO-8859-4", "iso8859_4", _S, "Central European (ISO Latin 4)"),
    _info("x-mac-cyrillic", 0x0007, "x-mac-cyrillic", "mac_cyrillic", _S, "Cyrillic (Mac OS)"),
    _info("windows-1251", 0x0502, "windows-1251", "cp1251", _S, "Cyrillic (Windows)"),
    _info("iso-8859-5", 0x0205, "ISO-8859-5", "iso8859_5", _S, "Cyrillic (ISO 8859-5)"),
    _info("koi8-r", 0x0A02, "KOI8-R", "koi8_r", _S, "Cyrillic (KOI8-R)"),
    _info("koi8-u", 0x0A08, "KOI8-U", "koi8_u", _S, "Ukrainian (KOI8-U)"),
    _info("cp866", 0x041B, "IBM866", "cp866", _S, "Cyrillic (DOS)"),
    _info("x-mac-greek", 0x0006, "x-mac-greek", "mac_greek", _S, "Greek (Mac OS)"),
    _info("windows-1253", 0x0503, "windows-1253", "cp1253", _S, "Greek (Windows)"),
    _info("iso-8859-7", 0x0207, "ISO-8859-7", "iso8859_7", _S, "Greek (ISO 8859-7)"),
    _info("x-mac-turkish", 0x0023, "x-mac-turkish", "mac_turkish", _S, "Turkish (Mac OS)"),
    _info("windows-1254", 0x0504, "windows-1254", "cp1254", _S, "Turkish (Windows Latin 5)"),
    _info("iso-8859-9", 0x0209, "ISO-8859-9", "iso8859_9", _S, "Turkish (ISO Latin 5)"),
    _info("x-mac-icelandic", 0x0025, "x-mac-icelandic", "mac_iceland", _S, "Icelandic (Mac OS)"),
    _info("x-mac-croatian", 0x0024, "x-mac-croatian", "mac_croatian", _S, "Croatian (Mac OS)"),
    _info("x-mac-romanian", 0x0026, "x-mac-romanian", "mac_romanian", _S, "Romanian (Mac OS)"),
    _info("windows-1255", 0x0505, "windows-1255", "cp1255", _S, "Hebrew (Windows)"),
    _info("iso-8859-8", 0x0208, "ISO-8859-8", "iso8859_8", _S, "Hebrew (ISO 8859-8)"),
    _info("windows-1256", 0x0506, "windows-1256", "cp1256", _S, "Arabic (Windows)"),
    _info("iso-8859-6", 0x0206, "ISO-8859-6", "iso8859_6", _S, "Arabic (ISO 8859-6)"),
    _info("windows-1257", 0x0507, "windows-1257", "cp1257", _S, "Baltic (Windows)"),
    _info("iso-8859-13", 0x020D, "ISO-8859-13", "iso8859_13", _S, "Baltic (ISO Latin 7)"),
    _info("windows-1258", 0x0508, "windows-1258", "cp1258", _S, "Vietnamese (Windows)"),
    _info("iso-8859-11", 0x020B, "TIS-620", "iso8859_11", _S, "Thai (ISO 8859-11)"),
    _info("cp874", 0x041D, "windows-874", "cp874", _S, "Thai (Windows, DOS)"),
)

#: Default candidate order used when the caller supplies none.
DEFAULT_CANDIDATES: tuple[str, ...] = (
    "utf-8",
    "shift_jis",
    "euc-jp",
    "iso-2022-jp",
    "gb18030",
    "big5",
    "euc-kr",
    "windows-1252",
    "iso-8859-1",
    "macintosh",
)

#: The two Shift_JIS variants that share the IANA name ``Shift_JIS``.
SHIFT_JIS_VARIANTS: frozenset[str] = frozenset({"shift_jis", "shift_jisx0213"})


@dataclasses.dataclass(frozen=True, slots=True)
class _Index:
    by_name: dict[str, EncodingInfo]
    by_id: dict[int, EncodingInfo]
    by_iana: dict[str, EncodingInfo]
    by_codec: dict[str, EncodingInfo]


_INDEX: _Index | None = None
_INDEX_LOCK = threading.Lock()


def _build_index() -> _Index:
    by_name: dict[str, EncodingInfo] = {}
    by_id: dict[int, EncodingInfo] = {}
    by_iana: dict[str, EncodingInfo] = {}
    by_codec: dict[str, EncodingInfo] = {}
    for info in REGISTRY:
        by_name[info.name] = info
        by_id[info.encoding_id] = info
        if info.iana_name is not None:
            by_iana.setdefault(info.iana_name.lower(), info)
        by_codec.setdefault(codecs.lookup(info.python_codec).name, info)
    return _Index(by_name=by_name, by_id=by_id, by_iana=by_iana, by_codec=by_codec)


def _index() -> _Index:
    """Return the lookup tables, building them on first use."""
    global _INDEX  # noqa: PLW0603
    if _INDEX is not None:
        return _INDEX
    with _INDEX_LOCK:
        if _INDEX is None:
            _INDEX = _build_index()
        return _INDEX


def get_by_name(name: str) -> EncodingInfo | None:
    """Look up an encoding by its canonical textenc name."""
    return _index().by_name.get(name.lower())


def get_by_id(encoding_id: int) -> EncodingInfo | None:
    """Look up an encoding by its numeric id."""
    return _index().by_id.get(encoding_id)


def get_by_iana_name(iana_name: str) -> EncodingInfo | None:
    """Look up an encoding by IANA charset name, case-insensitively."""
    return _index().by_iana.get(iana_name.lower())


def get_by_codec(codec_name: str) -> EncodingInfo | None:
    """Look up an encoding by the canonical name of its Python codec."""
    return _index().by_codec.get(codec_name)
