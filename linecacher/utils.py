"""Utility helpers for decoding source files and splitting them into lines."""

from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Iterable

from charset_normalizer import from_bytes


def split_lines(text: str) -> list[str]:
    """Split *text* like ``readlines()`` does, dropping one terminator per line."""

    if not text:
        return []
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = normalized.split("\n")
    if normalized.endswith("\n"):
        lines.pop()
    return lines


def decode_source(raw: bytes) -> str:
    """Decode file bytes, preferring UTF-8 and falling back to detection."""

    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    best = from_bytes(raw).best()
    if best is not None:
        return str(best)
    return raw.decode("utf-8", errors="replace")


def read_source_lines(path: Path | str) -> list[str]:
    """Read a whole file and return its lines without terminators.

    Raises ``OSError`` when the file cannot be opened or read.
    """

    raw = Path(path).read_bytes()
    return split_lines(decode_source(raw))


def lines_digest(lines: Iterable[str]) -> str:
    """Return the SHA1 hex digest of *lines*, each terminated by ``\\n``."""

    digest = hashlib.sha1()
    for line in lines:
        digest.update(f"{line}\n".encode("utf-8"))
    return digest.hexdigest()


def text_digest(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


def strip_terminator(line: str) -> str:
    """Remove a single trailing line terminator from *line*."""

    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line
