from __future__ import annotations

from pathlib import Path

from linecacher.ephemeral import DynamicSource
from linecacher.keys import DynamicHandle, NamedFile, source_key


def test_source_key_classifies_names():
    assert source_key("mod.py") == NamedFile("mod.py")
    assert source_key(Path("pkg") / "mod.py") == NamedFile(str(Path("pkg") / "mod.py"))


def test_source_key_classifies_handles():
    handle = DynamicSource("x = 1\n")
    key = source_key(handle)

    assert isinstance(key, DynamicHandle)
    assert key.handle is handle
    assert isinstance(source_key(42), DynamicHandle)


def test_source_key_passes_keys_through():
    key = NamedFile("a.py")
    assert source_key(key) is key
