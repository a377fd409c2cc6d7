"""File metadata probing used to decide whether a cached file went stale."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FileStat:
    size: int
    mtime: float

    @classmethod
    def from_stat_result(cls, result: os.stat_result) -> "FileStat":
        return cls(size=result.st_size, mtime=result.st_mtime)

    def matches(self, other: "FileStat") -> bool:
        return self.size == other.size and self.mtime == other.mtime


class MetadataProbe:
    """Return size and modification time for physical paths."""

    def stat(self, path: str | os.PathLike[str]) -> FileStat | None:
        try:
            result = os.stat(path)
        except (OSError, ValueError):
            return None
        return FileStat.from_stat_result(result)

    def exists(self, path: str | os.PathLike[str]) -> bool:
        return self.stat(path) is not None
