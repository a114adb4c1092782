# tests/test_api.py
from __future__ import annotations

from pathlib import Path

import pytest

import textenc
from textenc.enums import DetectionMethod
from textenc.exceptions import UnknownEncodingError


def test_decode_returns_decoded_text():
    result = textenc.decode(b"Hello world")
    assert isinstance(result, textenc.DecodedText)
    assert result.text == "Hello world"
    assert result.encoding.name == "utf-8"
    assert result.method is DetectionMethod.CANDIDATE


def test_declaration_selects_shift_jis_variant_from_candidates():
    data = b'<meta charset="shift_jis">hello'
    result = textenc.decode(data, ["utf-8", "shift_jisx0213", "shift_jis"])
    assert result.encoding.name == "shift_jisx0213"
    assert result.method is DetectionMethod.DECLARATION


def test_declaration_corrects_tentative_decode():
    data = '<meta charset="euc-jp"><p>日本語</p>'.encode("euc-jp")
    result = textenc.decode(data, ["utf-8", "iso-8859-1"])
    assert result.encoding.name == "euc-jp"
    assert "日本語" in result.text
    assert result.method is DetectionMethod.DECLARATION


def test_declaration_matching_candidate_keeps_candidate_method():
    result = textenc.decode(b"# -*- coding: utf-8 -*-\nx = 1\n", ["utf-8"])
    assert result.encoding.name == "utf-8"
    assert result.method is DetectionMethod.CANDIDATE


def test_declaration_that_does_not_decode_is_ignored():
    data = b'<meta charset="us-ascii">caf\xe9'
    result = textenc.decode(data, ["iso-8859-1"])
    assert result.encoding.name == "iso-8859-1"
    assert result.method is DetectionMethod.CANDIDATE


def test_utf16_declaration_is_ignored():
    data = b'<?xml version="1.0" encoding="UTF-16"?><root/>'
    result = textenc.decode(data, ["utf-8"])
    assert result.encoding.name == "utf-8"


def test_declaration_scanning_can_be_disabled():
    data = '<meta charset="euc-jp">日本語'.encode("euc-jp")
    result = textenc.decode(data, ["iso-8859-1"], scan_declaration=False)
    assert result.encoding.name == "iso-8859-1"


def test_declaration_beyond_scan_length_is_ignored():
    data = b"x" * 100 + b'<meta charset="windows-1252">'
    result = textenc.decode(data, ["iso-8859-1"], declaration_scan_length=50)
    assert result.encoding.name == "iso-8859-1"


def test_bom_wins_over_declaration():
    data = b"\xef\xbb\xbf" + b'<meta charset="iso-8859-1">'
    result = textenc.decode(data, ["iso-8859-1"])
    assert result.encoding.name == "utf-8"
    assert result.method is DetectionMethod.BOM
    assert result.with_bom


def test_escape_result_is_not_refined():
    data = '<meta charset="euc-jp">こんにちは'.encode("iso2022_jp")
    result = textenc.decode(data, ["utf-8"])
    assert result.encoding.name == "iso-2022-jp"
    assert result.method is DetectionMethod.ESCAPE


def test_stored_encoding_wins():
    result = textenc.decode(b"Hello", ["utf-8"], stored_encoding="iso-8859-1")
    assert result.encoding.name == "iso-8859-1"
    assert result.method is DetectionMethod.STORED


def test_stored_utf8_strips_bom():
    result = textenc.decode(b"\xef\xbb\xbfHi", stored_encoding="utf-8")
    assert result.text == "Hi"
    assert result.with_bom
    assert result.method is DetectionMethod.STORED


def test_stored_encoding_that_does_not_decode_falls_through():
    result = textenc.decode(b"caf\xe9", ["iso-8859-1"], stored_encoding="utf-8")
    assert result.encoding.name == "iso-8859-1"
    assert result.method is DetectionMethod.CANDIDATE


def test_unresolvable_stored_encoding_is_ignored():
    result = textenc.decode(b"Hello", ["utf-8"], stored_encoding="x-bogus")
    assert result.method is DetectionMethod.CANDIDATE


def test_bytearray_input():
    result = textenc.decode(bytearray(b"Hello"), ["utf-8"])
    assert result.text == "Hello"


def test_nothing_decodes():
    with pytest.raises(UnknownEncodingError):
        textenc.decode(b"\xff\xff", ["utf-8", "us-ascii"])


@pytest.mark.parametrize(
    "kwargs",
    [
        {"declaration_scan_length": 0},
        {"declaration_scan_length": -5},
        {"escape_window": 0},
        {"escape_window": True},
    ],
)
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError, match="positive integer"):
        textenc.decode(b"abc", **kwargs)


def test_decode_file(tmp_path: Path):
    f = tmp_path / "sample.txt"
    f.write_bytes("naïve".encode("windows-1252"))
    result = textenc.decode_file(f, ["utf-8", "windows-1252"], use_attribute=False)
    assert result.text == "naïve"
    assert result.encoding.name == "windows-1252"


def test_decode_file_missing(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        textenc.decode_file(tmp_path / "missing.txt")


def test_decode_file_uses_stored_attribute(xattr_file: Path):
    textenc.write_encoding_attribute(xattr_file, textenc.get_encoding("iso-8859-1"))
    result = textenc.decode_file(xattr_file, ["utf-8"])
    assert result.encoding.name == "iso-8859-1"
    assert result.method is DetectionMethod.STORED

    result = textenc.decode_file(xattr_file, ["utf-8"], use_attribute=False)
    assert result.encoding.name == "utf-8"


def test_convert_yen_sign_exported():
    assert textenc.convert_yen_sign("cost: ¥100", "us-ascii") == "cost: \\100"


def test_version():
    assert textenc.__version__ == "1.0.0"
