# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Expanding CLI path arguments into the list of C++ files to analyze."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Sequence

logger = logging.getLogger(__name__)


def has_source_extension(path: Path, extensions: Sequence[str]) -> bool:
    """Check a file suffix against the configured extensions (case-insensitive)."""
    suffix = path.suffix.lower()
    return any(suffix == ext.lower() for ext in extensions)


def walk_directory(
    root: Path,
    extensions: Sequence[str],
    ignore_dirs: Iterable[str] = (),
) -> list[Path]:
    """Recursively collect source files below ``root``, pruning ignored directories."""
    ignored = set(ignore_dirs)
    found: list[Path] = []
    skipped_dirs = 0
    for dirpath, dirnames, filenames in os.walk(root):
        kept = [d for d in dirnames if d not in ignored]
        skipped_dirs += len(dirnames) - len(kept)
        # Prune in place so os.walk never descends into ignored directories
        dirnames[:] = kept
        for name in filenames:
            candidate = Path(dirpath) / name
            if has_source_extension(candidate, extensions):
                found.append(candidate)

    logger.debug(
        "Directory scan of %s: included=%s skipped_dirs=%s",
        root,
        len(found),
        skipped_dirs,
    )
    return found


def collect_source_files(
    paths: Iterable[Path | str],
    *,
    extensions: Sequence[str],
    ignore_dirs: Iterable[str] = (),
) -> list[Path]:
    """Expand path arguments into a de-duplicated, sorted list of files.

    - Directories are walked recursively and filtered by extension.
    - Files given explicitly are kept regardless of their extension.
    - Paths that do not exist are kept so the line source reports them.
    """
    ignore_dirs = list(ignore_dirs)
    out: set[Path] = set()
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            out.update(walk_directory(p, extensions, ignore_dirs))
        else:
            out.add(p)
    return sorted(out, key=lambda p: (str(p.parent).lower(), p.name.lower(), str(p)))
