from __future__ import annotations

import hashlib

import pytest

import linecacher.utils as utils


def test_split_lines_drops_one_terminator_per_line():
    assert utils.split_lines("") == []
    assert utils.split_lines("a") == ["a"]
    assert utils.split_lines("a\nb\n") == ["a", "b"]
    assert utils.split_lines("a\nb") == ["a", "b"]
    assert utils.split_lines("a\n\n") == ["a", ""]
    assert utils.split_lines("\n") == [""]


def test_split_lines_handles_mixed_terminators():
    assert utils.split_lines("a\r\nb\rc\n") == ["a", "b", "c"]


def test_decode_source_prefers_utf8_and_strips_bom():
    assert utils.decode_source("é = 1\n".encode("utf-8")) == "é = 1\n"
    assert utils.decode_source(b"\xef\xbb\xbfx = 1\n") == "x = 1\n"


def test_decode_source_falls_back_for_legacy_encodings():
    raw = "# café au lait, déjà vu\nname = 'crème brûlée'\n".encode("latin-1")
    text = utils.decode_source(raw)
    assert isinstance(text, str)
    assert text.startswith("# caf")
    assert "name = " in text


def test_read_source_lines(tmp_path):
    path = tmp_path / "mod.py"
    path.write_bytes(b"one\r\ntwo\r\n")
    assert utils.read_source_lines(path) == ["one", "two"]

    with pytest.raises(OSError):
        utils.read_source_lines(tmp_path / "missing.py")


def test_lines_digest_terminates_each_line():
    expected = hashlib.sha1(b"a\nb\n").hexdigest()
    assert utils.lines_digest(["a", "b"]) == expected
    assert utils.lines_digest([]) == hashlib.sha1(b"").hexdigest()
    assert utils.lines_digest(["a", "b"]) != utils.lines_digest(["ab"])


def test_text_digest():
    assert utils.text_digest("x = 1\n") == hashlib.sha1(b"x = 1\n").hexdigest()


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("a\n", "a"),
        ("a\r\n", "a"),
        ("a\r", "a"),
        ("a", "a"),
        ("a\n\n", "a\n"),
        ("", ""),
    ],
)
def test_strip_terminator(line, expected):
    assert utils.strip_terminator(line) == expected
