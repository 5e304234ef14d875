# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""
Turning analysis results into human-readable text or JSON-ready dicts.

Which categories are reported is decided here through ``ReportOptions``;
the analysis itself always computes all three.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Iterable

from .analysis import FileAnalysis

LINE_SEPARATOR = "-" * 80


@dataclass(frozen=True, slots=True)
class ReportOptions:
    """Which result categories are emitted."""

    bare: bool = True
    unused: bool = True
    unlisted: bool = True

    @classmethod
    def from_config(cls, config) -> "ReportOptions":
        return cls(
            bare=config.report_bare,
            unused=config.report_unused,
            unlisted=config.report_unlisted,
        )

    def without(self, *categories: str) -> "ReportOptions":
        """Return a copy with the named categories disabled."""
        unknown = set(categories) - {"bare", "unused", "unlisted"}
        if unknown:
            raise ValueError(f"Unknown report categories: {sorted(unknown)}")
        return replace(self, **{name: False for name in categories})


@dataclass(frozen=True, slots=True)
class FileReport:
    """Outcome for one file: either an analysis or the reason it failed."""

    path: Path
    analysis: FileAnalysis | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def filter_analysis(analysis: FileAnalysis, options: ReportOptions) -> FileAnalysis:
    """Empty out the categories that are disabled in ``options``."""
    return FileAnalysis(
        bare_includes=analysis.bare_includes if options.bare else (),
        unused_functions=analysis.unused_functions if options.unused else (),
        unlisted_functions=analysis.unlisted_functions if options.unlisted else (),
    )


def _format_bare_section(analysis: FileAnalysis) -> list[str]:
    out = ["-- 1) BARE INCLUDES --", ""]
    if not analysis.bare_includes:
        return out + ["-> No bare includes found.", ""]
    for entry in analysis.bare_includes:
        out += [
            f"{entry.line.number}| {entry.line.text}",
            "-> Bare include directive.",
            f"-> Add a comment to '{entry.header}' that lists which functions depend on it, "
            f"e.g., '{entry.header}  // for std::foo, std::bar'.",
            "",
        ]
    return out


def _format_unused_section(analysis: FileAnalysis) -> list[str]:
    out = ["-- 2) UNUSED FUNCTIONS --", ""]
    if not analysis.unused_functions:
        return out + ["-> No unused functions found.", ""]
    for entry in analysis.unused_functions:
        out += [
            f"{entry.line.number}| {entry.line.text}",
            "-> Unused functions listed as comments.",
            f"-> Remove the following functions from comments of the '{entry.header}' "
            f"include directive: {', '.join(entry.unused_identifiers)}",
            "",
        ]
    return out


def _format_unlisted_section(analysis: FileAnalysis) -> list[str]:
    out = ["-- 3) UNLISTED FUNCTIONS --", ""]
    if not analysis.unlisted_functions:
        return out + ["-> No unlisted functions found.", ""]
    for entry in analysis.unlisted_functions:
        out += [
            f"{entry.line.number}| {entry.line.text}",
            "-> Unlisted function.",
            f"-> Add '{entry.identifier}' as a comment to the include directives, "
            f"e.g., '#include <foo>  // for {entry.identifier}'.",
            f"-> Reference: {entry.reference_link}",
            "",
        ]
    return out


def format_text_report(path: Path | str, analysis: FileAnalysis, options: ReportOptions) -> str:
    """Render one file's results; a file with nothing to report renders as OK."""
    shown = filter_analysis(analysis, options)
    lines = [f"##- {path} -##", ""]
    if shown.is_clean:
        lines += ["-> OK", ""]
    else:
        if options.bare:
            lines += _format_bare_section(shown)
        if options.unused:
            lines += _format_unused_section(shown)
        if options.unlisted:
            lines += _format_unlisted_section(shown)
    lines.append(LINE_SEPARATOR)
    return "\n".join(lines)


def format_error_report(path: Path | str, error: str) -> str:
    return "\n".join([f"##- {path} -##", "", f"-> SKIPPED: {error}", "", LINE_SEPARATOR])


def format_file_report(report: FileReport, options: ReportOptions) -> str:
    if report.failed or report.analysis is None:
        return format_error_report(report.path, report.error or "unknown error")
    return format_text_report(report.path, report.analysis, options)


def analysis_to_dict(analysis: FileAnalysis, options: ReportOptions | None = None) -> dict[str, Any]:
    """JSON-serializable view of an analysis (disabled categories are empty)."""
    if options is not None:
        analysis = filter_analysis(analysis, options)
    return {
        "ok": analysis.is_clean,
        "bare_includes": [
            {"line": e.line.number, "text": e.line.text, "header": e.header}
            for e in analysis.bare_includes
        ],
        "unused_functions": [
            {
                "line": e.line.number,
                "text": e.line.text,
                "header": e.header,
                "unused": list(e.unused_identifiers),
            }
            for e in analysis.unused_functions
        ],
        "unlisted_functions": [
            {
                "line": e.line.number,
                "text": e.line.text,
                "function": e.identifier,
                "link": e.reference_link,
            }
            for e in analysis.unlisted_functions
        ],
    }


def file_report_to_dict(report: FileReport, options: ReportOptions | None = None) -> dict[str, Any]:
    if report.failed or report.analysis is None:
        return {"path": str(report.path), "ok": False, "error": report.error}
    payload: dict[str, Any] = {"path": str(report.path)}
    payload.update(analysis_to_dict(report.analysis, options))
    return payload


def summarize(reports: Iterable[FileReport], options: ReportOptions) -> dict[str, int]:
    """Counts used for the closing summary line and the exit code."""
    summary = {"files": 0, "clean": 0, "with_issues": 0, "failed": 0, "issues": 0}
    for report in reports:
        summary["files"] += 1
        if report.failed or report.analysis is None:
            summary["failed"] += 1
            continue
        shown = filter_analysis(report.analysis, options)
        if shown.is_clean:
            summary["clean"] += 1
        else:
            summary["with_issues"] += 1
            summary["issues"] += shown.issue_count
    return summary
