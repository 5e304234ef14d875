"""Pure analysis helpers: line classification, cross-referencing and reference links."""

from __future__ import annotations

from typing import Iterable, List, Tuple, Union

from .classifier import (DEFAULT_NAMESPACE, LineClassification, LineClassifier, LineKind,
                         classify_line)
from .links import create_reference_link, encode_query
from .models import (AnnotatedInclude, BareInclude, FileAnalysis, IdentifierUsage,
                     IncludeDirective, Line, UnlistedFunction, UnusedFunctionsEntry)
from .resolver import (documented_identifiers, find_unlisted_functions,
                       find_unused_functions, resolve)

LineLike = Union[Line, Tuple[int, str]]


def analyze_lines(lines: Iterable[LineLike], namespace: str = DEFAULT_NAMESPACE) -> FileAnalysis:
    """Classify every line, then cross-reference the whole file.

    Accepts ``Line`` objects or ``(number, text)`` pairs; the sequence is
    consumed once.
    """
    classifier = LineClassifier(namespace=namespace)
    for item in lines:
        classifier.feed(item if isinstance(item, Line) else Line(*item))
    return resolve(classifier.bare_includes, classifier.annotated_includes, classifier.usages)


def number_lines(text: str) -> List[Line]:
    """Split source text into numbered lines.

    Only "\\n" separates lines (a trailing "\\r" is dropped), and a final newline
    does not start an extra empty line.
    """
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [Line(number, part.rstrip("\r")) for number, part in enumerate(parts, start=1)]


def analyze_text(text: str, namespace: str = DEFAULT_NAMESPACE) -> FileAnalysis:
    """Analyze a whole source string (lines numbered from 1)."""
    return analyze_lines(number_lines(text), namespace=namespace)


__all__ = [
    "AnnotatedInclude",
    "BareInclude",
    "DEFAULT_NAMESPACE",
    "FileAnalysis",
    "IdentifierUsage",
    "IncludeDirective",
    "Line",
    "LineClassification",
    "LineClassifier",
    "LineKind",
    "UnlistedFunction",
    "UnusedFunctionsEntry",
    "analyze_lines",
    "analyze_text",
    "classify_line",
    "create_reference_link",
    "documented_identifiers",
    "encode_query",
    "find_unlisted_functions",
    "find_unused_functions",
    "number_lines",
    "resolve",
]
