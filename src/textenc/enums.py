"""Enumerations for textenc."""

import enum


class ByteWidth(enum.Enum):
    """Byte-width class of an encoding."""

    SINGLE_BYTE = "single-byte"
    MULTI_BYTE = "multi-byte"
    UTF8 = "utf-8"
    UTF16 = "utf-16"
    UTF32 = "utf-32"
    ISO2022 = "iso-2022"


class DetectionMethod(enum.Enum):
    """How the encoding of a decoded buffer was determined."""

    STORED = "stored"
    BOM = "bom"
    ESCAPE = "escape"
    DECLARATION = "declaration"
    CANDIDATE = "candidate"


class ByteOrderMark(enum.Enum):
    """Unicode byte order marks, in detection priority order.

    Each member's value is ``(sequence, encoding name)``.  UTF-32 variants
    come before UTF-16 because the UTF-32-LE mark starts with the UTF-16-LE
    one.
    """

    UTF8 = (b"\xef\xbb\xbf", "utf-8")
    UTF32_BE = (b"\x00\x00\xfe\xff", "utf-32be")
    UTF32_LE = (b"\xff\xfe\x00\x00", "utf-32le")
    UTF16_BE = (b"\xfe\xff", "utf-16be")
    UTF16_LE = (b"\xff\xfe", "utf-16le")

    @property
    def sequence(self) -> bytes:
        return self.value[0]

    @property
    def encoding_name(self) -> str:
        return self.value[1]

    @property
    def is_utf32(self) -> bool:
        return len(self.value[0]) == 4
