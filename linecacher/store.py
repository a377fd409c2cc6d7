"""In-process cache of file lines keyed by logical file name."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from .aliases import AliasTable
from .probe import FileStat, MetadataProbe
from .resolver import SearchPathResolver
from .services.highlight_service import FORMAT_PLAIN
from .services.registry_service import ScriptRegistry
from .utils import lines_digest, read_source_lines

logger = logging.getLogger(__name__)


class LineNumbersStatus(str, Enum):
    PENDING = "pending"
    UNAVAILABLE = "unavailable"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class TraceLineNumbers:
    status: LineNumbersStatus = LineNumbersStatus.PENDING
    numbers: tuple[int, ...] = ()

    @property
    def available(self) -> bool:
        return self.status is LineNumbersStatus.READY


PENDING_LINE_NUMBERS = TraceLineNumbers()
UNAVAILABLE_LINE_NUMBERS = TraceLineNumbers(status=LineNumbersStatus.UNAVAILABLE)


@dataclass(slots=True)
class CacheEntry:
    lines: dict[str, list[str]]
    stat: FileStat | None = None
    path: str | None = None
    digest: str | None = None
    line_numbers: TraceLineNumbers = PENDING_LINE_NUMBERS

    @property
    def plain(self) -> list[str]:
        return self.lines[FORMAT_PLAIN]

    def sha1(self) -> str:
        if self.digest is None:
            self.digest = lines_digest(self.plain)
        return self.digest


class FileCacheStore:
    """Map logical names to cached lines and a metadata snapshot.

    Entries are replaced wholesale on refresh. A populate always drops the
    previous entry first, so a failed refresh leaves the name uncached rather
    than stale.
    """

    def __init__(
        self,
        resolver: SearchPathResolver,
        aliases: AliasTable,
        *,
        probe: MetadataProbe | None = None,
        registry: ScriptRegistry | None = None,
    ) -> None:
        self.resolver = resolver
        self.aliases = aliases
        self.probe = probe or resolver.probe
        self.registry = registry
        self._entries: dict[str, CacheEntry] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def names(self) -> list[str]:
        return list(self._entries)

    def get(self, name: str) -> CacheEntry | None:
        return self._entries.get(name)

    def is_cached(self, name: str) -> bool:
        return name in self._entries

    def populate(self, name: str, *, use_script_lines: bool = False) -> bool:
        """(Re)read *name* into the cache, returning whether it is now cached."""

        if not name:
            return False
        self._entries.pop(name, None)
        path = self.resolver.resolve(name)
        if path is None:
            return self._populate_from_registry(name) if use_script_lines else False
        try:
            lines = read_source_lines(path)
        except OSError as exc:
            logger.warning("Cannot read %s (%s): %s", name, path, exc)
            return False
        stat = self.probe.stat(path)
        if stat is None:
            logger.warning("File %s vanished while being cached", path)
            return False
        self._entries[name] = CacheEntry(
            lines={FORMAT_PLAIN: lines},
            stat=stat,
            path=path,
        )
        self.aliases.set_file_alias(path, name)
        logger.debug("Cached %s from %s (%d lines)", name, path, len(lines))
        return True

    def _populate_from_registry(self, name: str) -> bool:
        if self.registry is None:
            return False
        lines = self.registry.lookup(name)
        if lines is None:
            return False
        self._entries[name] = CacheEntry(lines={FORMAT_PLAIN: lines}, path=name)
        logger.debug("Cached %s from the script registry (%d lines)", name, len(lines))
        return True

    def invalidate_if_stale(self, name: str, *, use_script_lines: bool = False) -> bool:
        """Refresh *name* when its file changed; return whether it was refreshed.

        A file that disappeared keeps its stale entry.
        """

        entry = self._entries.get(name)
        if entry is None or entry.path is None:
            return False
        live = self.probe.stat(entry.path)
        if live is None:
            return False
        if entry.stat is not None and entry.stat.matches(live):
            return False
        logger.debug("Refreshing stale entry %s", name)
        self.populate(name, use_script_lines=use_script_lines)
        return True

    def clear_one(self, name: str) -> bool:
        return self._entries.pop(name, None) is not None

    def clear_all(self) -> None:
        self._entries.clear()
