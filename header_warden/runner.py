# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""
Running the analysis over many files.

Small batches are processed sequentially; larger ones fan out over a thread
pool. Workers return complete ``FileReport`` values and never write output
themselves, so the caller can print them in input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from time import perf_counter
from typing import Sequence

from .analysis import DEFAULT_NAMESPACE, analyze_lines
from .report import FileReport
from .sources import SourceReadError, read_lines

logger = logging.getLogger(__name__)


def analyze_file(path: Path, namespace: str = DEFAULT_NAMESPACE) -> FileReport:
    """Analyze one file, turning read failures into a failed report."""
    try:
        lines = read_lines(path)
    except SourceReadError as exc:
        logger.warning("Skipping %s: %s", exc.path, exc.reason)
        return FileReport(path=path, error=exc.reason)

    analysis = analyze_lines(lines, namespace=namespace)
    logger.debug("Analyzed %s: %s issue(s)", path, analysis.issue_count)
    return FileReport(path=path, analysis=analysis)


def run_files(
    paths: Sequence[Path],
    *,
    workers: int = 1,
    parallel_threshold: int = 4,
    namespace: str = DEFAULT_NAMESPACE,
) -> list[FileReport]:
    """Analyze ``paths`` and return one report per path, in input order."""
    start = perf_counter()
    workers = max(1, workers)

    if workers == 1 or len(paths) < parallel_threshold:
        logger.debug("Analyzing %s file(s) sequentially", len(paths))
        reports = [analyze_file(path, namespace) for path in paths]
    else:
        pool_size = min(workers, len(paths))
        logger.debug("Analyzing %s file(s) with %s workers", len(paths), pool_size)
        reports = []
        with ThreadPoolExecutor(max_workers=pool_size) as executor:
            futures = [executor.submit(analyze_file, path, namespace) for path in paths]
            # Collect in submission order, not completion order
            for path, fut in zip(paths, futures):
                try:
                    reports.append(fut.result())
                except Exception as exc:
                    logger.exception("Failed analyzing %s in parallel executor", path)
                    reports.append(FileReport(path=path, error=str(exc)))

    elapsed = perf_counter() - start
    logger.info(
        "Analyzed %s file(s): %s failed in %.2fs",
        len(reports),
        sum(1 for r in reports if r.failed),
        elapsed,
    )
    return reports
