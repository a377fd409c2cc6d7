"""Name remapping for whole files and for line ranges inside files."""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


class LineCacheError(ValueError):
    """Raised when a line cache API call receives malformed input."""


@dataclass(frozen=True, slots=True)
class RangeAlias:
    source: str | None
    first: int
    last: int
    start: int

    def contains(self, line_number: int) -> bool:
        return self.first <= line_number <= self.last

    def translate(self, line_number: int) -> int:
        return self.start + line_number - self.first


def normalize_range(line_range: int | range | tuple[int, int]) -> tuple[int, int]:
    """Return an inclusive ``(first, last)`` pair.

    An ``int`` is a single line, a pair is inclusive on both ends and a
    ``range`` keeps Python's exclusive stop.
    """

    if isinstance(line_range, bool):
        raise LineCacheError(f"Invalid line range: {line_range!r}")
    if isinstance(line_range, int):
        return line_range, line_range
    if isinstance(line_range, range):
        return line_range.start, line_range.stop - 1
    if isinstance(line_range, (tuple, list)) and len(line_range) == 2:
        first, last = line_range
        if isinstance(first, int) and isinstance(last, int):
            return first, last
    raise LineCacheError(f"Invalid line range: {line_range!r}")


class AliasTable:
    """Whole-file aliases plus per-target lists of range aliases.

    File aliases are one level deep: resolving never follows a chain. Range
    aliases are kept in insertion order without overlap checks, so the first
    registered range containing a line wins.
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self._ranges: dict[str, list[RangeAlias]] = {}

    def set_file_alias(self, alias: str, target: str) -> None:
        self._files[alias] = target
        logger.debug("Aliased %s -> %s", alias, target)

    def set_range_alias(
        self,
        target: str,
        source: str | None,
        line_range: int | range | tuple[int, int],
        start: int,
    ) -> RangeAlias:
        first, last = normalize_range(line_range)
        entry = RangeAlias(source=source, first=first, last=last, start=start)
        self._ranges.setdefault(target, []).append(entry)
        logger.debug("Aliased %s:%d-%d -> %s:%d", target, first, last, source or target, start)
        return entry

    def resolve_file(self, name: str) -> str:
        return self._files.get(name, name)

    def resolve_line(self, name: str, line_number: int) -> tuple[str, int]:
        for entry in self._ranges.get(name, ()):
            if entry.contains(line_number):
                return entry.source or name, entry.translate(line_number)
        return self.resolve_file(name), line_number

    def file_aliases(self) -> dict[str, str]:
        return dict(self._files)

    def range_aliases(self, name: str) -> list[RangeAlias]:
        return list(self._ranges.get(name, ()))

    def clear(self) -> None:
        self._files.clear()
        self._ranges.clear()
