from __future__ import annotations

from pathlib import Path

from linecacher.ephemeral import DynamicSource, EphemeralSourceCache, handle_source
from linecacher.utils import text_digest


def test_dynamic_source_identity_semantics():
    first = DynamicSource("x = 1\n")
    second = DynamicSource("x = 1\n")

    assert first != second
    assert first == first
    assert len({first, second}) == 2


def test_dynamic_source_compiles():
    handle = DynamicSource("value = 40 + 2\n", name="<calc>")
    namespace: dict[str, object] = {}
    exec(handle.compile(), namespace)
    assert namespace["value"] == 42
    assert handle.compile().co_filename == "<calc>"


def test_handle_source_requires_text():
    class Holder:
        source = "a = 1"

    class Broken:
        source = 42

    assert handle_source(Holder()) == "a = 1"
    assert handle_source(Broken()) is None
    assert handle_source(object()) is None
    assert handle_source("plain string") is None


def test_ensure_cached_splits_lines_once():
    cache = EphemeralSourceCache()
    handle = DynamicSource("a = 1\nb = 2\n")

    assert cache.ensure_cached(handle)
    entry = cache.get(handle)
    assert cache.ensure_cached(handle, text="ignored")

    assert cache.get(handle) is entry
    assert cache.get_lines(handle) == ["a = 1", "b = 2"]
    assert len(cache) == 1


def test_ensure_cached_with_explicit_text_and_digest():
    cache = EphemeralSourceCache()
    handle = DynamicSource("original")

    assert cache.ensure_cached(handle, text="one\ntwo", digest="abc")

    assert cache.get_lines(handle) == ["one", "two"]
    assert cache.get(handle).sha1() == "abc"


def test_ensure_cached_rejects_non_dynamic_handles():
    cache = EphemeralSourceCache()
    assert not cache.ensure_cached(object())
    assert not cache.is_cached(object())
    assert cache.get_lines(object()) is None


def test_equal_text_handles_are_distinct_entries():
    cache = EphemeralSourceCache()
    first = DynamicSource("same\n")
    second = DynamicSource("same\n")
    cache.ensure_cached(first)

    assert cache.is_cached(first)
    assert not cache.is_cached(second)

    cache.clear()
    assert not cache.is_cached(first)


def test_materialize_writes_temp_file_once(tmp_path):
    cache = EphemeralSourceCache(temp_dir=tmp_path)
    handle = DynamicSource("print('hi')")

    path = cache.materialize(handle)

    assert path is not None
    assert path.parent == tmp_path
    assert path.name.startswith(f"eval-{text_digest(handle.source)[:7]}-")
    assert path.suffix == ".py"
    assert path.read_text(encoding="utf-8") == "print('hi')\n"
    assert cache.materialize(handle) == path
    assert cache.temp_files() == [path]


def test_materialize_uses_prefix_and_skips_non_dynamic(tmp_path):
    cache = EphemeralSourceCache(temp_prefix="snippet-", temp_dir=tmp_path)
    path = cache.materialize(DynamicSource("x = 1\n"))

    assert path.name.startswith("snippet-")
    assert cache.materialize(object()) is None


def test_cleanup_removes_files_and_tolerates_missing(tmp_path):
    cache = EphemeralSourceCache(temp_dir=tmp_path)
    kept = cache.materialize(DynamicSource("a = 1\n"))
    gone = cache.materialize(DynamicSource("b = 2\n"))
    Path(gone).unlink()

    cache.cleanup()

    assert not kept.exists()
    assert cache.temp_files() == []
    cache.cleanup()
