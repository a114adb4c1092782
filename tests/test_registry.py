# tests/test_registry.py
from __future__ import annotations

import codecs

import pytest

from textenc.enums import ByteWidth
from textenc.registry import (
    DEFAULT_CANDIDATES,
    REGISTRY,
    SHIFT_JIS_VARIANTS,
    EncodingInfo,
    get_by_codec,
    get_by_iana_name,
    get_by_id,
    get_by_name,
)


def test_encoding_info_is_frozen():
    info = REGISTRY[0]
    assert isinstance(info, EncodingInfo)
    with pytest.raises(AttributeError):
        info.name = "something"  # type: ignore[misc]


def test_registry_is_tuple():
    assert isinstance(REGISTRY, tuple)


def test_names_are_unique():
    names = [e.name for e in REGISTRY]
    assert len(names) == len(set(names))


def test_ids_are_unique():
    ids = [e.encoding_id for e in REGISTRY]
    assert len(ids) == len(set(ids))


@pytest.mark.parametrize("info", REGISTRY, ids=lambda e: e.name)
def test_every_codec_exists(info: EncodingInfo):
    codecs.lookup(info.python_codec)


def test_default_candidates_are_registered():
    for name in DEFAULT_CANDIDATES:
        assert get_by_name(name) is not None, name


def test_shift_jis_variants_are_registered():
    for name in SHIFT_JIS_VARIANTS:
        assert get_by_name(name) is not None


def test_some_encodings_have_no_iana_name():
    assert get_by_name("johab").iana_name is None
    assert get_by_name("iso-2022-jp-3").iana_name is None


def test_get_by_id():
    assert get_by_id(0x08000100).name == "utf-8"
    assert get_by_id(0x0A01).name == "shift_jis"
    assert get_by_id(0x0628).name == "shift_jisx0213"
    assert get_by_id(123456789) is None


def test_get_by_iana_name_is_case_insensitive():
    assert get_by_iana_name("utf-8") is get_by_iana_name("UTF-8")


def test_shared_iana_name_resolves_to_first_registered():
    assert get_by_iana_name("Shift_JIS").name == "shift_jis"


def test_get_by_codec():
    assert get_by_codec(codecs.lookup("latin_1").name).name == "iso-8859-1"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("utf-8", True),
        ("iso-8859-1", True),
        ("macintosh", True),
        ("us-ascii", False),
        ("shift_jis", False),
        ("cp932", False),
    ],
)
def test_can_represent_yen(name: str, expected: bool):
    assert get_by_name(name).can_represent_yen is expected


def test_width_flags():
    assert get_by_name("utf-8").width is ByteWidth.UTF8
    assert get_by_name("iso-2022-jp").width is ByteWidth.ISO2022
    assert get_by_name("shift_jis").width is ByteWidth.MULTI_BYTE
    assert get_by_name("iso-8859-1").width is ByteWidth.SINGLE_BYTE
    assert get_by_name("utf-16le").width is ByteWidth.UTF16


def test_localized_names_are_set():
    assert get_by_name("shift_jis").localized_name == "Japanese (Shift JIS)"
    assert all(e.localized_name for e in REGISTRY)


def test_str_is_name():
    assert str(get_by_name("koi8-r")) == "koi8-r"
