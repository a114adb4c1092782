# tests/conftest.py
"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from textenc.file_attribute import write_encoding_attribute
from textenc.registry import get_by_name


@pytest.fixture
def xattr_file(tmp_path: Path) -> Path:
    """A file on a file system that accepts the encoding attribute.

    Skips the test where extended attributes are unavailable (macOS Python,
    tmpfs on older kernels, some container overlays).
    """
    path = tmp_path / "attributed.txt"
    path.write_bytes(b"Hello")
    utf8 = get_by_name("utf-8")
    assert utf8 is not None
    try:
        written = write_encoding_attribute(path, utf8)
    except OSError as e:
        pytest.skip(f"extended attributes are not writable here: {e}")
    if not written:
        pytest.skip("extended attributes are not supported here")
    return path
