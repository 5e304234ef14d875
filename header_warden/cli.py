# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Command-line entry point: find undocumented standard library includes in C++ files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from . import __version__
from .config import Config, load_config
from .discovery import collect_source_files
from .report import (ReportOptions, file_report_to_dict, format_file_report,
                     summarize)
from .runner import run_files

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="header-warden",
        description="Find missing standard library headers in C++ files.",
        epilog=(
            "examples:\n"
            "  header-warden src/\n"
            "  header-warden main.cpp\n"
            "  header-warden --disable-bare --disable-unused args.hpp src/\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "paths",
        nargs="*",
        type=Path,
        help="C++ files or directories to analyze (directories are searched recursively)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="display detailed output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", type=Path, help="path to a JSON config file")
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="output format (default: text)",
    )
    parser.add_argument("--disable-bare", action="store_true", help="suppress messages about bare includes")
    parser.add_argument("--disable-unused", action="store_true", help="suppress messages about unused functions")
    parser.add_argument(
        "--disable-unlisted", action="store_true", help="suppress messages about unlisted functions"
    )
    parser.add_argument("--workers", type=int, help="number of worker threads (default: from config)")
    parser.add_argument(
        "--extensions",
        help="comma-separated file extensions searched in directories (e.g. .cpp,.hpp)",
    )
    return parser


def setup_logging(level: str, log_file: Optional[str] = None) -> None:
    """Configure root logging once for the command-line run."""
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def resolve_options(args: argparse.Namespace, config: Config) -> ReportOptions:
    """Config toggles first, then any --disable-* flags on top."""
    options = ReportOptions.from_config(config)
    disabled = [
        name
        for name, flag in (
            ("bare", args.disable_bare),
            ("unused", args.disable_unused),
            ("unlisted", args.disable_unlisted),
        )
        if flag
    ]
    return options.without(*disabled)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.paths:
        parser.print_help()
        return EXIT_OK

    config = load_config(args.config)
    setup_logging("DEBUG" if args.verbose else config.log_level, config.log_file)

    if args.workers is not None and args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        options = resolve_options(args, config)
        if args.extensions:
            raw = [e.strip() for e in args.extensions.split(",") if e.strip()]
            extensions = [e if e.startswith(".") else f".{e}" for e in raw]
        else:
            extensions = config.extensions
        files = collect_source_files(args.paths, extensions=extensions, ignore_dirs=config.ignore_dirs)
        if not files:
            logger.error("No C++ source files found in: %s", ", ".join(str(p) for p in args.paths))
            return EXIT_ERROR

        reports = run_files(
            files,
            workers=args.workers or config.workers,
            parallel_threshold=config.parallel_threshold,
            namespace=config.namespace,
        )
    except Exception:
        logger.exception("Unexpected error while analyzing files")
        return EXIT_ERROR

    if args.format == "json":
        payload = [file_report_to_dict(r, options) for r in reports]
        print(json.dumps(payload, indent=2))
    else:
        for report in reports:
            print(format_file_report(report, options))

    summary = summarize(reports, options)
    logger.info(
        "Summary: %s file(s), %s clean, %s with issues (%s issue(s)), %s failed",
        summary["files"],
        summary["clean"],
        summary["with_issues"],
        summary["issues"],
        summary["failed"],
    )

    if summary["failed"] == summary["files"]:
        return EXIT_ERROR
    if summary["with_issues"]:
        return EXIT_ISSUES
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
