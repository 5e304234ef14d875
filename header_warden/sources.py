# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Loading numbered source lines from disk.

The analysis core never opens files itself; it consumes the ``Line`` records
produced here. Any problem reading a file surfaces as ``SourceReadError`` so
callers can skip that one file and carry on with the rest.
"""
from __future__ import annotations

import logging
from pathlib import Path

from .analysis import Line, number_lines

logger = logging.getLogger(__name__)


class SourceReadError(OSError):
    """Raised when a source file cannot be read."""

    def __init__(self, path: Path | str, reason: str):
        super().__init__(f"Error loading file '{path}': {reason}")
        self.path = Path(path)
        self.reason = reason


def read_lines(path: Path | str) -> list[Line]:
    """Read a file into 1-based ``Line`` records.

    Undecodable bytes are replaced rather than rejected, so binary junk in a
    header never aborts the run.
    """
    path = Path(path)
    if not path.exists():
        raise SourceReadError(path, "file does not exist")
    if path.is_dir():
        raise SourceReadError(path, "path is a directory, not a file")
    if not path.is_file():
        raise SourceReadError(path, "path is not a regular file")

    logger.debug("Loading file from disk: %s", path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        raise SourceReadError(path, exc.strerror or str(exc)) from exc

    lines = number_lines(content.decode("utf-8", errors="replace"))
    logger.debug("Loaded %s lines from %s", len(lines), path)
    return lines
