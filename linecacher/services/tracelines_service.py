"""Compute the line numbers a tracer can stop at for a piece of Python source."""

from __future__ import annotations

import dis
import logging
from pathlib import Path
from types import CodeType
from typing import Iterator, Sequence

from ..utils import read_source_lines, split_lines

logger = logging.getLogger(__name__)


def lnums_for_str(source: str, filename: str = "<string>") -> tuple[int, ...] | None:
    """Return the sorted line numbers that start a statement in *source*.

    Returns None when the source does not compile; callers treat that as
    "line information unavailable". Line numbers past the end of the text
    are dropped.
    """

    try:
        code = compile(source, filename, "exec", dont_inherit=True)
    except (SyntaxError, ValueError) as exc:
        logger.debug("Cannot compile %s for line numbers: %s", filename, exc)
        return None
    limit = len(split_lines(source))
    numbers: set[int] = set()
    for obj in _walk_code(code):
        for _, lineno in dis.findlinestarts(obj):
            if lineno is not None and 0 < lineno <= limit:
                numbers.add(lineno)
    return tuple(sorted(numbers))


def lnums_for_str_array(
    lines: Sequence[str],
    newline: str = "\n",
    filename: str = "<string>",
) -> tuple[int, ...] | None:
    """Same as :func:`lnums_for_str` for a sequence of lines.

    Lines are joined with *newline*; pass ``""`` when they still carry their
    terminators.
    """

    source = newline.join(lines)
    if newline and lines:
        source += newline
    return lnums_for_str(source, filename)


def lnums_for_file(path: Path | str) -> tuple[int, ...] | None:
    try:
        lines = read_source_lines(path)
    except OSError as exc:
        logger.warning("Cannot read %s for line numbers: %s", path, exc)
        return None
    return lnums_for_str_array(lines, filename=str(path))


def _walk_code(code: CodeType) -> Iterator[CodeType]:
    stack = [code]
    while stack:
        current = stack.pop()
        yield current
        for const in current.co_consts:
            if isinstance(const, CodeType):
                stack.append(const)
