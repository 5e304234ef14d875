# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""
Line-oriented classification of C++ source.

Each line is put into exactly one category using two regular expressions (an
include-directive pattern and a qualified-identifier pattern). This is a
lexical heuristic, not a parser: block comments are only recognized by their
leading ``/*`` or ``*``, and string literals containing ``//`` are not
special-cased.
"""

from __future__ import annotations

import enum
import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable

from .models import AnnotatedInclude, BareInclude, IdentifierUsage, Line

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = "std"

# Angle-bracket include, e.g. "#include <iostream>" or "#include<fmt/core.h>"
INCLUDE_DIRECTIVE_RE = re.compile(r"^\s*#include\s*<(\S+)>", re.ASCII)

COMMENT_PREFIXES = ("//", "/*", "*")


class LineKind(enum.Enum):
    BLANK = "blank"
    COMMENT = "comment"
    BARE_INCLUDE = "bare_include"
    ANNOTATED_INCLUDE = "annotated_include"
    USAGE = "usage"
    OTHER = "other"


@dataclass(frozen=True, slots=True)
class LineClassification:
    """Category of a line plus whatever was extracted from it."""

    line: Line
    kind: LineKind
    header: str | None = None
    identifiers: tuple[str, ...] = ()


@lru_cache(maxsize=None)
def identifier_pattern(namespace: str = DEFAULT_NAMESPACE) -> re.Pattern[str]:
    """Return the compiled ``<namespace>::<word>`` pattern (lowercase namespace)."""
    return re.compile(rf"{re.escape(namespace.lower())}::\w+", re.ASCII)


def begins_with_comment(stripped: str) -> bool:
    """Return True if an already stripped line starts a comment.

    A leading ``*`` is taken as the body of a block comment, which also
    catches code starting with a dereference or multiplication.
    """
    return stripped.startswith(COMMENT_PREFIXES)


def remove_comment(text: str) -> str:
    """Drop everything from the first ``//`` to the end of the line."""
    index = text.find("//")
    if index == -1:
        return text
    return text[:index]


def normalize_header(path: str) -> str:
    return f"#include <{path}>"


def classify_line(line: Line, namespace: str = DEFAULT_NAMESPACE) -> LineClassification:
    """Classify one line; the first matching rule wins."""
    processed = line.text.strip()
    if not processed:
        return LineClassification(line, LineKind.BLANK)

    processed = processed.lower()
    if begins_with_comment(processed):
        return LineClassification(line, LineKind.COMMENT)

    header = None
    match = INCLUDE_DIRECTIVE_RE.search(processed)
    if match:
        header = normalize_header(match.group(1))
    else:
        # "int x = 5; // Use std::cout" must not count as a usage of std::cout
        processed = remove_comment(processed)

    identifiers = tuple(identifier_pattern(namespace).findall(processed))

    if header is not None and identifiers:
        return LineClassification(line, LineKind.ANNOTATED_INCLUDE, header, identifiers)
    if header is not None:
        return LineClassification(line, LineKind.BARE_INCLUDE, header)
    if identifiers:
        return LineClassification(line, LineKind.USAGE, identifiers=identifiers)
    # e.g. '#include "local.hpp"' or code without qualified names
    return LineClassification(line, LineKind.OTHER)


@dataclass
class LineClassifier:
    """Accumulates the per-file working sets over one pass of lines."""

    namespace: str = DEFAULT_NAMESPACE
    bare_includes: list[BareInclude] = field(default_factory=list)
    annotated_includes: list[AnnotatedInclude] = field(default_factory=list)
    usages: list[IdentifierUsage] = field(default_factory=list)

    def feed(self, line: Line) -> LineClassification:
        result = classify_line(line, self.namespace)
        logger.debug("Line %s classified as %s", line.number, result.kind.value)

        if result.kind is LineKind.ANNOTATED_INCLUDE:
            self.annotated_includes.append(
                AnnotatedInclude(line=line, header=result.header, identifiers=result.identifiers)
            )
        elif result.kind is LineKind.BARE_INCLUDE:
            self.bare_includes.append(BareInclude(line=line, header=result.header))
        elif result.kind is LineKind.USAGE:
            self.usages.extend(IdentifierUsage(line=line, identifier=name) for name in result.identifiers)
        return result

    def feed_all(self, lines: Iterable[Line]) -> None:
        for line in lines:
            self.feed(line)
