"""Module-level API backed by a lazily created process-wide LineCache."""

from __future__ import annotations

import os
from threading import Lock

from .aliases import RangeAlias
from .cache import LineCache
from .config import apply_environment, load_config
from .probe import FileStat
from .services.highlight_service import FORMAT_PLAIN
from .store import TraceLineNumbers

_DEFAULT_CACHE: LineCache | None = None
_DEFAULT_LOCK = Lock()


def get_cache() -> LineCache:
    """Return the shared cache, creating it from the saved config on first use."""

    global _DEFAULT_CACHE
    with _DEFAULT_LOCK:
        if _DEFAULT_CACHE is None:
            _DEFAULT_CACHE = LineCache(apply_environment(load_config()))
        return _DEFAULT_CACHE


def reset_cache(cache: LineCache | None = None) -> None:
    """Close the shared cache and replace it (or recreate it lazily)."""

    global _DEFAULT_CACHE
    with _DEFAULT_LOCK:
        previous = _DEFAULT_CACHE
        _DEFAULT_CACHE = cache
    if previous is not None and previous is not cache:
        previous.close()


def getline(
    source: object,
    line_number: int,
    reload_on_change: bool | None = None,
    fmt: str = FORMAT_PLAIN,
) -> str | None:
    return get_cache().getline(source, line_number, reload_on_change, fmt)


def getlines(
    source: object,
    reload_on_change: bool = False,
    fmt: str = FORMAT_PLAIN,
) -> list[str] | None:
    return get_cache().getlines(source, reload_on_change, fmt)


def checkcache(
    name: str | os.PathLike[str] | None = None,
    use_script_lines: bool = False,
) -> list[str] | None:
    return get_cache().checkcache(name, use_script_lines)


def update_cache(name: str | os.PathLike[str], use_script_lines: bool = False) -> bool:
    return get_cache().update_cache(name, use_script_lines)


def cache(source: object, reload_on_change: bool = False) -> object | None:
    return get_cache().cache(source, reload_on_change)


def cache_file(name: str | os.PathLike[str], reload_on_change: bool = False) -> str | None:
    return get_cache().cache_file(name, reload_on_change)


def cache_dynamic(
    handle: object,
    text: str | None = None,
    digest: str | None = None,
) -> object | None:
    return get_cache().cache_dynamic(handle, text, digest)


def is_cached(source: object) -> bool:
    return get_cache().is_cached(source)


def is_cached_script(name: str | os.PathLike[str]) -> bool:
    return get_cache().is_cached_script(name)


def is_empty(name: str | os.PathLike[str]) -> bool | None:
    return get_cache().is_empty(name)


def cached_files() -> list[str]:
    return get_cache().cached_files()


def sha1(source: object) -> str | None:
    return get_cache().sha1(source)


def size(source: object) -> int | None:
    return get_cache().size(source)


def path(name: object) -> str | None:
    return get_cache().path(name)


def stat(name: str | os.PathLike[str]) -> FileStat | None:
    return get_cache().stat(name)


def trace_line_numbers(
    name: str | os.PathLike[str],
    reload_on_change: bool = False,
) -> TraceLineNumbers | None:
    return get_cache().trace_line_numbers(name, reload_on_change)


def remap_file(alias: str, target: str) -> None:
    get_cache().remap_file(alias, target)


def remap_file_lines(
    from_file: str,
    to_file: str | None,
    line_range: int | range | tuple[int, int],
    start: int,
) -> RangeAlias:
    return get_cache().remap_file_lines(from_file, to_file, line_range, start)


def map_file(name: str) -> str:
    return get_cache().map_file(name)


def map_file_line(name: str, line_number: int) -> tuple[str, int]:
    return get_cache().map_file_line(name, line_number)


def map_handle(handle: object) -> str | None:
    return get_cache().map_handle(handle)


def clear_file_cache(name: str | os.PathLike[str] | None = None) -> None:
    get_cache().clear_file_cache(name)


def clear_dynamic_cache() -> None:
    get_cache().clear_dynamic_cache()
