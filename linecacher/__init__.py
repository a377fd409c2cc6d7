"""linecacher package initialization."""

from __future__ import annotations

from .aliases import LineCacheError, RangeAlias
from .api import (
    cache_dynamic,
    cache_file,
    cached_files,
    checkcache,
    clear_dynamic_cache,
    clear_file_cache,
    get_cache,
    getline,
    getlines,
    is_cached,
    is_cached_script,
    is_empty,
    map_file,
    map_file_line,
    map_handle,
    path,
    remap_file,
    remap_file_lines,
    reset_cache,
    sha1,
    size,
    stat,
    trace_line_numbers,
    update_cache,
)
from .cache import LineCache
from .ephemeral import DynamicSource
from .probe import FileStat
from .store import LineNumbersStatus, TraceLineNumbers

__all__ = [
    "__version__",
    "DynamicSource",
    "FileStat",
    "LineCache",
    "LineCacheError",
    "LineNumbersStatus",
    "RangeAlias",
    "TraceLineNumbers",
    "cache_dynamic",
    "cache_file",
    "cached_files",
    "checkcache",
    "clear_dynamic_cache",
    "clear_file_cache",
    "get_cache",
    "get_version",
    "getline",
    "getlines",
    "is_cached",
    "is_cached_script",
    "is_empty",
    "map_file",
    "map_file_line",
    "map_handle",
    "path",
    "remap_file",
    "remap_file_lines",
    "reset_cache",
    "sha1",
    "size",
    "stat",
    "trace_line_numbers",
    "update_cache",
]

__version__ = "0.1.0"


def get_version() -> str:
    """Return the current package version."""
    return __version__
