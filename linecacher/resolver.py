"""Locate bare file names through the working directory and a search path."""

from __future__ import annotations

import logging
import os
import sys
from typing import Sequence

from .probe import MetadataProbe

logger = logging.getLogger(__name__)


class SearchPathResolver:
    """Resolve logical file names to physical paths.

    A name is first tried as given (with ``~`` expanded, relative to the
    working directory). Only names without a directory component fall back to
    the configured directories followed by ``sys.path``, first hit wins.
    ``sys.path`` is read at resolution time so that changes made by the host
    program are honoured.
    """

    def __init__(
        self,
        directories: Sequence[str] = (),
        *,
        include_sys_path: bool = True,
        probe: MetadataProbe | None = None,
    ) -> None:
        self._directories = [os.fspath(entry) for entry in directories]
        self.include_sys_path = include_sys_path
        self.probe = probe or MetadataProbe()

    def directories(self) -> list[str]:
        result = list(self._directories)
        if self.include_sys_path:
            result.extend(entry for entry in sys.path if isinstance(entry, str))
        return result

    def resolve(self, name: str) -> str | None:
        if not name:
            return None
        expanded = os.path.abspath(os.path.expanduser(name))
        if self.probe.exists(expanded):
            return expanded
        if os.path.basename(name) != name:
            return None
        for directory in self.directories():
            candidate = os.path.join(directory, name)
            if self.probe.exists(candidate):
                resolved = os.path.abspath(candidate)
                logger.debug("Resolved %s via search path to %s", name, resolved)
                return resolved
        return None
