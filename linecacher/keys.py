"""Lookup keys: a logical file name or a dynamic source handle."""

from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NamedFile:
    name: str


@dataclass(frozen=True, slots=True)
class DynamicHandle:
    handle: object


SourceKey = NamedFile | DynamicHandle


def source_key(value: object) -> SourceKey:
    """Classify a caller supplied value exactly once."""

    if isinstance(value, (NamedFile, DynamicHandle)):
        return value
    if isinstance(value, (str, os.PathLike)):
        return NamedFile(os.fspath(value))
    return DynamicHandle(value)
