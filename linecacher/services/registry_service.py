"""Read-only access to source lines registered by the host interpreter."""

from __future__ import annotations

import linecache
import logging
from collections.abc import Mapping
from typing import Protocol, Sequence

from ..utils import split_lines, strip_terminator

logger = logging.getLogger(__name__)


class ScriptRegistry(Protocol):
    """Protocol describing a host-maintained mapping of names to source lines."""

    def lookup(self, name: str) -> list[str] | None:
        ...

    def __contains__(self, name: object) -> bool:
        ...


class LinecacheRegistry:
    """Adapter over the interpreter's ``linecache.cache``.

    The interpreter, IPython and doctest register sources there, either as
    ``(size, mtime, lines, fullname)`` tuples or as lazy ``(loader,)``
    tuples. Nothing is ever written back.
    """

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in linecache.cache

    def lookup(self, name: str) -> list[str] | None:
        entry = linecache.cache.get(name)
        if not entry:
            return None
        if len(entry) == 1:
            return self._lookup_lazy(name, entry[0])
        lines = entry[2]
        if not isinstance(lines, list):
            return None
        return split_lines("".join(lines))

    @staticmethod
    def _lookup_lazy(name: str, loader) -> list[str] | None:
        try:
            source = loader()
        except (ImportError, OSError, SyntaxError, ValueError) as exc:
            logger.debug("Lazy source loader for %s failed: %s", name, exc)
            return None
        if not isinstance(source, str):
            return None
        return split_lines(source)


class MappingRegistry:
    """Registry backed by a plain mapping, for embedders and tests."""

    def __init__(self, sources: Mapping[str, str | Sequence[str]] | None = None) -> None:
        self._sources: dict[str, str | Sequence[str]] = dict(sources or {})

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def register(self, name: str, source: str | Sequence[str]) -> None:
        self._sources[name] = source

    def lookup(self, name: str) -> list[str] | None:
        source = self._sources.get(name)
        if source is None:
            return None
        if isinstance(source, str):
            return split_lines(source)
        return [strip_terminator(line) for line in source]
