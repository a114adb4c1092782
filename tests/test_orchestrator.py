from __future__ import annotations

import pytest

from textenc.enums import ByteOrderMark, DetectionMethod
from textenc.exceptions import InvalidBOMPayloadError, UnknownEncodingError
from textenc.pipeline.orchestrator import (
    detect_signature,
    resolve_candidates,
    run_pipeline,
)

_BOM_CODECS = [
    (ByteOrderMark.UTF8, "utf-8"),
    (ByteOrderMark.UTF32_BE, "utf-32-be"),
    (ByteOrderMark.UTF32_LE, "utf-32-le"),
    (ByteOrderMark.UTF16_BE, "utf-16-be"),
    (ByteOrderMark.UTF16_LE, "utf-16-le"),
]


@pytest.mark.parametrize(("bom", "codec"), _BOM_CODECS, ids=lambda v: str(v))
def test_bom_resolves_and_is_stripped(bom: ByteOrderMark, codec: str):
    data = bom.sequence + "Hello wörld".encode(codec)
    result = run_pipeline(data, ["iso-8859-1"])
    assert result.encoding.name == bom.encoding_name
    assert result.text == "Hello wörld"
    assert result.method is DetectionMethod.BOM
    assert result.with_bom is True


def test_utf32_le_never_read_as_utf16_le():
    data = b"\xff\xfe\x00\x00" + "abc".encode("utf-32-le")
    result = run_pipeline(data, ["utf-16le"])
    assert result.encoding.name == "utf-32le"
    assert result.text == "abc"


def test_misaligned_utf32_payload_is_utf16_le():
    result = run_pipeline(b"\xff\xfe\x00\x000\x00", [])
    assert result.encoding.name == "utf-16le"
    assert result.text == "\x000"


def test_bom_with_undecodable_payload_is_fatal():
    with pytest.raises(InvalidBOMPayloadError):
        run_pipeline(b"\xef\xbb\xbf\xff\xfe", ["iso-8859-1"])


def test_invalid_bom_payload_is_unknown_encoding():
    assert issubclass(InvalidBOMPayloadError, UnknownEncodingError)


def test_escape_sequences_select_iso_2022_jp():
    data = "こんにちは".encode("iso2022_jp")
    result = run_pipeline(data, ["utf-8"])
    assert result.encoding.name == "iso-2022-jp"
    assert result.text == "こんにちは"
    assert result.method is DetectionMethod.ESCAPE
    assert result.with_bom is False


def test_escape_false_positive_falls_through():
    data = b"\x1b$B\xff"
    result = run_pipeline(data, ["utf-8", "iso-8859-1"])
    assert result.encoding.name == "iso-8859-1"
    assert result.method is DetectionMethod.CANDIDATE


def test_first_decodable_candidate_wins():
    data = "café".encode("latin-1")
    result = run_pipeline(data, ["utf-8", "windows-1252", "iso-8859-1"])
    assert result.encoding.name == "windows-1252"
    assert result.text == "café"


def test_candidate_that_cannot_decode_every_byte_is_rejected():
    # 0x81 is undefined in windows-1252
    result = run_pipeline(b"a\x81b", ["windows-1252", "iso-8859-1"])
    assert result.encoding.name == "iso-8859-1"


def test_no_candidate_decodes():
    with pytest.raises(UnknownEncodingError) as excinfo:
        run_pipeline(b"\x80abc", ["utf-8", "us-ascii"])
    assert excinfo.value.candidates == ("utf-8", "us-ascii")


def test_no_candidates_at_all():
    with pytest.raises(UnknownEncodingError):
        run_pipeline(b"abc", [])


def test_empty_input_uses_first_candidate():
    result = run_pipeline(b"", ["utf-8"])
    assert result.text == ""
    assert result.encoding.name == "utf-8"


def test_unknown_candidate_names_are_skipped():
    result = run_pipeline(b"abc", ["no-such-encoding", "utf-8"])
    assert result.encoding.name == "utf-8"


def test_declarations_are_not_consulted():
    result = run_pipeline(b'<meta charset="iso-8859-1">', ["utf-8"])
    assert result.encoding.name == "utf-8"
    assert result.method is DetectionMethod.CANDIDATE


def test_resolve_candidates_deduplicates_in_order():
    resolved = resolve_candidates(["UTF-8", "shift_jis", "utf8", "utf-8"])
    assert [e.name for e in resolved] == ["utf-8", "shift_jis"]


def test_detect_signature_prefers_bom():
    sig = detect_signature(b"\xef\xbb\xbf" + "こんにちは".encode("iso2022_jp"))
    assert sig.method is DetectionMethod.BOM
    assert sig.prefix_length == 3


def test_detect_signature_escape():
    sig = detect_signature("こんにちは".encode("iso2022_jp"))
    assert sig.encoding.name == "iso-2022-jp"
    assert sig.prefix_length == 0


def test_detect_signature_none():
    assert detect_signature(b"plain text") is None


def test_escape_window_is_honored():
    data = b"x" * 64 + "日本".encode("iso2022_jp")
    result = run_pipeline(data, ["iso-8859-1"], escape_window=16)
    assert result.encoding.name == "iso-8859-1"
