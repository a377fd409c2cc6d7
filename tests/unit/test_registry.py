from __future__ import annotations

import linecache

from linecacher.services.registry_service import LinecacheRegistry, MappingRegistry


def test_linecache_registry_reads_full_entries(monkeypatch):
    monkeypatch.setitem(
        linecache.cache,
        "<linecacher-test>",
        (12, None, ["a = 1\n", "b = 2\n"], "<linecacher-test>"),
    )
    registry = LinecacheRegistry()

    assert "<linecacher-test>" in registry
    assert registry.lookup("<linecacher-test>") == ["a = 1", "b = 2"]


def test_linecache_registry_reads_lazy_entries(monkeypatch):
    monkeypatch.setitem(linecache.cache, "<lazy>", (lambda: "x = 1\ny = 2",))
    registry = LinecacheRegistry()

    assert registry.lookup("<lazy>") == ["x = 1", "y = 2"]


def test_linecache_registry_lazy_loader_failures(monkeypatch):
    def _broken():
        raise ImportError("gone")

    def _undecodable():
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")

    def _bad_cookie():
        raise SyntaxError("unknown encoding: nope")

    monkeypatch.setitem(linecache.cache, "<broken>", (_broken,))
    monkeypatch.setitem(linecache.cache, "<none>", (lambda: None,))
    monkeypatch.setitem(linecache.cache, "<undecodable>", (_undecodable,))
    monkeypatch.setitem(linecache.cache, "<bad-cookie>", (_bad_cookie,))
    registry = LinecacheRegistry()

    assert registry.lookup("<broken>") is None
    assert registry.lookup("<none>") is None
    assert registry.lookup("<undecodable>") is None
    assert registry.lookup("<bad-cookie>") is None


def test_linecache_registry_unknown_names():
    registry = LinecacheRegistry()
    assert registry.lookup("<never-registered>") is None
    assert "<never-registered>" not in registry
    assert 42 not in registry


def test_mapping_registry_accepts_text_and_line_lists():
    registry = MappingRegistry({"<text>": "a\nb\n"})
    registry.register("<lines>", ["one\n", "two\r\n", "three"])

    assert "<text>" in registry
    assert registry.lookup("<text>") == ["a", "b"]
    assert registry.lookup("<lines>") == ["one", "two", "three"]
    assert registry.lookup("<missing>") is None
