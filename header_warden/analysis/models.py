# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Immutable records produced while analyzing one source file."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Line:
    """A single source line with its 1-based number and original text."""

    number: int
    text: str


@dataclass(frozen=True, slots=True)
class IncludeDirective:
    """An angle-bracket include directive found on a line.

    ``header`` is the normalized directive (e.g. ``#include <iostream>``);
    ``line.text`` keeps the original, unmodified text for reporting.
    """

    line: Line
    header: str


@dataclass(frozen=True, slots=True)
class AnnotatedInclude(IncludeDirective):
    """An include directive whose trailing comment lists qualified identifiers."""

    identifiers: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class BareInclude(IncludeDirective):
    """An include directive without any documented identifiers."""


@dataclass(frozen=True, slots=True)
class IdentifierUsage:
    """One qualified identifier occurrence on a non-include line."""

    line: Line
    identifier: str


@dataclass(frozen=True, slots=True)
class UnusedFunctionsEntry:
    """Identifiers listed after an include but never used in the file."""

    line: Line
    header: str
    unused_identifiers: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class UnlistedFunction:
    """An identifier used in the file but not documented by any include."""

    line: Line
    identifier: str
    reference_link: str


@dataclass(frozen=True, slots=True)
class FileAnalysis:
    """The three result lists for one file."""

    bare_includes: tuple[BareInclude, ...] = ()
    unused_functions: tuple[UnusedFunctionsEntry, ...] = ()
    unlisted_functions: tuple[UnlistedFunction, ...] = ()

    @property
    def is_clean(self) -> bool:
        return not (self.bare_includes or self.unused_functions or self.unlisted_functions)

    @property
    def issue_count(self) -> int:
        return (
            len(self.bare_includes)
            + len(self.unused_functions)
            + len(self.unlisted_functions)
        )
