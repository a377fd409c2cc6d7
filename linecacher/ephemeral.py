"""Cache for dynamically evaluated source that has no backing file."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import CodeType

from .services.highlight_service import FORMAT_PLAIN
from .store import CacheEntry
from .utils import split_lines, text_digest

logger = logging.getLogger(__name__)

DEFAULT_TEMP_PREFIX = "eval-"


@dataclass(eq=False, slots=True)
class DynamicSource:
    """Source text produced at run time, e.g. a string handed to ``exec``.

    Instances compare and hash by identity: two handles with the same text
    are distinct cache keys.
    """

    source: str
    name: str = "<string>"

    def compile(self, mode: str = "exec") -> CodeType:
        return compile(self.source, self.name, mode, dont_inherit=True)


def handle_source(handle: object) -> str | None:
    """Return the captured text of *handle*, or None if it is not dynamic."""

    source = getattr(handle, "source", None)
    return source if isinstance(source, str) else None


class EphemeralSourceCache:
    """Lines of dynamic sources keyed by handle identity.

    Captured source never changes, so entries are never refreshed. Handles
    can also be written out as temporary ``.py`` files for tools that need a
    path; :meth:`cleanup` removes them.
    """

    def __init__(
        self,
        *,
        temp_prefix: str = DEFAULT_TEMP_PREFIX,
        temp_dir: str | os.PathLike[str] | None = None,
    ) -> None:
        self.temp_prefix = temp_prefix
        self.temp_dir = temp_dir
        # id(handle) -> (handle, value); holding the handle keeps its id unique
        self._entries: dict[int, tuple[object, CacheEntry]] = {}
        self._temp_files: dict[int, tuple[object, Path]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def is_cached(self, handle: object) -> bool:
        return id(handle) in self._entries

    def get(self, handle: object) -> CacheEntry | None:
        item = self._entries.get(id(handle))
        return item[1] if item is not None else None

    def get_lines(self, handle: object) -> list[str] | None:
        entry = self.get(handle)
        return entry.plain if entry is not None else None

    def ensure_cached(
        self,
        handle: object,
        text: str | None = None,
        digest: str | None = None,
    ) -> bool:
        if self.is_cached(handle):
            return True
        captured = handle_source(handle)
        if captured is None:
            logger.debug("%r does not carry dynamic source", handle)
            return False
        source = captured if text is None else text
        entry = CacheEntry(lines={FORMAT_PLAIN: split_lines(source)}, digest=digest)
        self._entries[id(handle)] = (handle, entry)
        return True

    def clear(self) -> None:
        self._entries.clear()

    def materialize(self, handle: object) -> Path | None:
        """Return a temporary file holding the source of *handle*."""

        known = self._temp_files.get(id(handle))
        if known is not None:
            return known[1]
        source = handle_source(handle)
        if source is None:
            return None
        prefix = f"{self.temp_prefix}{text_digest(source)[:7]}-"
        with tempfile.NamedTemporaryFile(
            "w",
            prefix=prefix,
            suffix=".py",
            dir=self.temp_dir,
            delete=False,
            encoding="utf-8",
        ) as stream:
            stream.write(source)
            if source and not source.endswith("\n"):
                stream.write("\n")
        path = Path(stream.name)
        self._temp_files[id(handle)] = (handle, path)
        logger.debug("Materialized dynamic source as %s", path)
        return path

    def temp_files(self) -> list[Path]:
        return [path for _, path in self._temp_files.values()]

    def cleanup(self) -> None:
        """Remove every temporary file created by :meth:`materialize`."""

        for _, path in self._temp_files.values():
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Cannot remove temporary source %s: %s", path, exc)
        self._temp_files.clear()
