"""Line cache facade: fetch source lines by file name or dynamic source handle.

A :class:`LineCache` owns every table (file entries, aliases, dynamic
sources). Lookups go through the alias table first, then the file store,
which reads and stats the file on a miss. Freshness is only checked when a
caller asks for it, through :meth:`LineCache.checkcache` or a
``reload_on_change`` flag. Failures are reported as ``None``/``False``
return values rather than exceptions.
"""

from __future__ import annotations

import atexit
import logging
import os
import threading
from typing import Callable, Sequence

from .aliases import AliasTable, RangeAlias
from .config import Config
from .ephemeral import EphemeralSourceCache
from .keys import DynamicHandle, NamedFile, source_key
from .probe import FileStat, MetadataProbe
from .resolver import SearchPathResolver
from .services.highlight_service import FORMAT_PLAIN, HighlightService
from .services.registry_service import LinecacheRegistry, ScriptRegistry
from .services.tracelines_service import lnums_for_str_array
from .store import (
    UNAVAILABLE_LINE_NUMBERS,
    CacheEntry,
    FileCacheStore,
    LineNumbersStatus,
    TraceLineNumbers,
)

logger = logging.getLogger(__name__)

BoundaryLines = Callable[[Sequence[str]], Sequence[int] | None]


def _file_name(value: object) -> str | None:
    """Return the file name carried by *value*, or None for dynamic handles."""

    key = source_key(value)
    return key.name if isinstance(key, NamedFile) else None


class LineCache:
    """Process-wide cache of source lines with explicit staleness checks."""

    def __init__(
        self,
        config: Config | None = None,
        *,
        probe: MetadataProbe | None = None,
        resolver: SearchPathResolver | None = None,
        registry: ScriptRegistry | None = None,
        highlighter: HighlightService | None = None,
        boundary: BoundaryLines | None = None,
        register_cleanup: bool = True,
    ) -> None:
        self.config = config or Config()
        self.probe = probe or MetadataProbe()
        self.resolver = resolver or SearchPathResolver(
            self.config.search_path,
            include_sys_path=self.config.use_sys_path,
            probe=self.probe,
        )
        self.registry = registry if registry is not None else LinecacheRegistry()
        self.aliases = AliasTable()
        self.files = FileCacheStore(
            self.resolver,
            self.aliases,
            probe=self.probe,
            registry=self.registry,
        )
        self.dynamic = EphemeralSourceCache(temp_prefix=self.config.temp_prefix)
        self.highlighter = highlighter or HighlightService(self.config.theme)
        self.boundary: BoundaryLines = boundary or lnums_for_str_array
        self._lock = threading.RLock()
        self._cleanup_registered = register_cleanup
        if register_cleanup:
            atexit.register(self.close)

    def __enter__(self) -> "LineCache":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Remove temporary files created for dynamic sources."""

        with self._lock:
            self.dynamic.cleanup()
            if self._cleanup_registered:
                atexit.unregister(self.close)
                self._cleanup_registered = False

    # Lookups

    def getlines(
        self,
        source: object,
        reload_on_change: bool = False,
        fmt: str = FORMAT_PLAIN,
    ) -> list[str] | None:
        """Return all lines of *source*, reading and caching them on a miss.

        *fmt* selects an output format; anything but ``"plain"`` is rendered
        from the plain lines once and memoized on the entry.
        """

        key = source_key(source)
        with self._lock:
            if isinstance(key, DynamicHandle):
                return self._dynamic_lines(key.handle, fmt)
            name = self.aliases.resolve_file(key.name)
            return self._file_lines(name, reload_on_change, fmt)

    def getline(
        self,
        source: object,
        line_number: int,
        reload_on_change: bool | None = None,
        fmt: str = FORMAT_PLAIN,
    ) -> str | None:
        """Return line *line_number* (1-based) of *source*, or None.

        Range aliases registered for a file name are applied before the
        lookup. Out of range line numbers give None.
        """

        if reload_on_change is None:
            reload_on_change = self.config.reload_on_change
        key = source_key(source)
        with self._lock:
            if isinstance(key, DynamicHandle):
                lines = self._dynamic_lines(key.handle, fmt)
            else:
                name, line_number = self.aliases.resolve_line(key.name, line_number)
                lines = self.getlines(name, reload_on_change, fmt)
        if lines is not None and 1 <= line_number <= len(lines):
            return lines[line_number - 1]
        return None

    def _file_lines(self, name: str, reload_on_change: bool, fmt: str) -> list[str] | None:
        if reload_on_change:
            self.checkcache(name)
        entry = self._ensure_file(name)
        if entry is None:
            return None
        return self._lines_in_format(entry, fmt, entry.path)

    def _dynamic_lines(self, handle: object, fmt: str) -> list[str] | None:
        if not self.dynamic.ensure_cached(handle):
            return None
        entry = self.dynamic.get(handle)
        return self._lines_in_format(entry, fmt, None)

    def _lines_in_format(
        self,
        entry: CacheEntry,
        fmt: str,
        filename: str | None,
    ) -> list[str]:
        lines = entry.lines.get(fmt)
        if lines is None:
            plain = entry.plain
            rendered = self.highlighter.render("\n".join(plain), fmt, filename=filename)
            lines = rendered.split("\n") if plain else []
            entry.lines[fmt] = lines
        return lines

    def _ensure_file(self, name: str) -> CacheEntry | None:
        entry = self.files.get(name)
        if entry is None and self.files.populate(
            name, use_script_lines=self.config.use_script_lines
        ):
            entry = self.files.get(name)
        return entry

    # Population and freshness

    def checkcache(
        self,
        name: str | os.PathLike[str] | None = None,
        use_script_lines: bool = False,
    ) -> list[str] | None:
        """Refresh cached files whose size or mtime changed.

        Returns the refreshed names, or None when *name* is given but not
        cached. Entries whose file disappeared are kept as they are.
        """

        with self._lock:
            if name is None:
                names = self.files.names()
            else:
                name = _file_name(name)
                if name is None or not self.files.is_cached(name):
                    return None
                names = [name]
            return [
                cached
                for cached in names
                if self.files.invalidate_if_stale(cached, use_script_lines=use_script_lines)
            ]

    def update_cache(self, name: str | os.PathLike[str], use_script_lines: bool = False) -> bool:
        name = _file_name(name)
        if name is None:
            return False
        with self._lock:
            return self.files.populate(name, use_script_lines=use_script_lines)

    def cache(self, source: object, reload_on_change: bool = False) -> object | None:
        """Cache a file name or dynamic handle.

        Returns the physical path for names and the handle itself for
        dynamic sources, or None when nothing could be cached.
        """

        key = source_key(source)
        if isinstance(key, DynamicHandle):
            return self.cache_dynamic(key.handle)
        return self.cache_file(key.name, reload_on_change)

    def cache_file(
        self,
        name: str | os.PathLike[str],
        reload_on_change: bool = False,
    ) -> str | None:
        name = _file_name(name)
        if name is None:
            return None
        with self._lock:
            entry = self._cache_name(self.aliases.resolve_file(name), reload_on_change)
            return entry.path if entry is not None else None

    def _cache_name(self, name: str, reload_on_change: bool) -> CacheEntry | None:
        if self.files.is_cached(name):
            if reload_on_change:
                self.checkcache(name)
            return self.files.get(name)
        return self._ensure_file(name)

    def cache_dynamic(
        self,
        handle: object,
        text: str | None = None,
        digest: str | None = None,
    ) -> object | None:
        with self._lock:
            if self.dynamic.ensure_cached(handle, text=text, digest=digest):
                return handle
            return None

    # Projections

    def is_cached(self, source: object) -> bool:
        key = source_key(source)
        with self._lock:
            if isinstance(key, DynamicHandle):
                return self.dynamic.is_cached(key.handle)
            return self.files.is_cached(self.aliases.resolve_file(key.name))

    def is_cached_script(self, name: str | os.PathLike[str]) -> bool:
        name = _file_name(name)
        if self.registry is None or name is None:
            return False
        with self._lock:
            return self.aliases.resolve_file(name) in self.registry

    def is_empty(self, name: str | os.PathLike[str]) -> bool | None:
        entry = self._entry_for(name)
        return None if entry is None else not entry.plain

    def cached_files(self) -> list[str]:
        with self._lock:
            return self.files.names()

    def sha1(self, source: object) -> str | None:
        """Return the SHA1 of the cached plain lines, computed once per entry."""

        key = source_key(source)
        with self._lock:
            if isinstance(key, DynamicHandle):
                if not self.dynamic.ensure_cached(key.handle):
                    return None
                entry = self.dynamic.get(key.handle)
            else:
                entry = self.files.get(self.aliases.resolve_file(key.name))
            return entry.sha1() if entry is not None else None

    def size(self, source: object) -> int | None:
        key = source_key(source)
        with self._lock:
            if isinstance(key, DynamicHandle):
                if not self.dynamic.ensure_cached(key.handle):
                    return None
                return len(self.dynamic.get_lines(key.handle))
            entry = self._cache_name(self.aliases.resolve_file(key.name), False)
            return None if entry is None else len(entry.plain)

    def path(self, name: object) -> str | None:
        entry = self._entry_for(name)
        return None if entry is None else entry.path

    def stat(self, name: str | os.PathLike[str]) -> FileStat | None:
        entry = self._entry_for(name)
        return None if entry is None else entry.stat

    def _entry_for(self, name: object) -> CacheEntry | None:
        name = _file_name(name)
        if name is None:
            return None
        with self._lock:
            return self.files.get(self.aliases.resolve_file(name))

    def trace_line_numbers(
        self,
        name: str | os.PathLike[str],
        reload_on_change: bool = False,
    ) -> TraceLineNumbers | None:
        """Return the lines a tracer can stop at in *name*.

        None means the file could not be cached. The boundary collaborator is
        asked at most once per cached content; an unavailable answer is
        remembered too.
        """

        name = _file_name(name)
        if name is None:
            return None
        with self._lock:
            entry = self._cache_name(self.aliases.resolve_file(name), reload_on_change)
            if entry is None:
                return None
            if entry.line_numbers.status is LineNumbersStatus.PENDING:
                numbers = self.boundary(entry.plain)
                if numbers is None:
                    entry.line_numbers = UNAVAILABLE_LINE_NUMBERS
                else:
                    entry.line_numbers = TraceLineNumbers(
                        status=LineNumbersStatus.READY,
                        numbers=tuple(numbers),
                    )
            return entry.line_numbers

    # Aliases

    def remap_file(self, alias: str, target: str) -> None:
        with self._lock:
            self.aliases.set_file_alias(alias, target)

    def remap_file_lines(
        self,
        from_file: str,
        to_file: str | None,
        line_range: int | range | tuple[int, int],
        start: int,
    ) -> RangeAlias:
        """Show lines of *from_file* starting at *start* as *line_range* of *to_file*."""

        with self._lock:
            return self.aliases.set_range_alias(
                to_file or from_file, from_file, line_range, start
            )

    def map_file(self, name: str) -> str:
        with self._lock:
            return self.aliases.resolve_file(name)

    def map_file_line(self, name: str, line_number: int) -> tuple[str, int]:
        with self._lock:
            return self.aliases.resolve_line(name, line_number)

    def map_handle(self, handle: object) -> str | None:
        with self._lock:
            path = self.dynamic.materialize(handle)
            return None if path is None else str(path)

    # Clearing

    def clear_file_cache(self, name: str | os.PathLike[str] | None = None) -> None:
        """Drop one entry, or every entry together with all aliases."""

        with self._lock:
            if name is None:
                self.files.clear_all()
                self.aliases.clear()
                return
            name = _file_name(name)
            if name is not None:
                self.files.clear_one(self.aliases.resolve_file(name))

    def clear_dynamic_cache(self) -> None:
        with self._lock:
            self.dynamic.clear()
