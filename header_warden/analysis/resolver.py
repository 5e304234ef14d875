# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Cross-referencing of documented and used identifiers for one file."""

from __future__ import annotations

import logging
from typing import Sequence

from .links import create_reference_link
from .models import (AnnotatedInclude, BareInclude, FileAnalysis, IdentifierUsage,
                     UnlistedFunction, UnusedFunctionsEntry)

logger = logging.getLogger(__name__)


def documented_identifiers(annotated_includes: Sequence[AnnotatedInclude]) -> set[str]:
    """Union of the identifiers listed by every annotated include."""
    documented: set[str] = set()
    for include in annotated_includes:
        documented.update(include.identifiers)
    return documented


def find_unused_functions(
    annotated_includes: Sequence[AnnotatedInclude],
    usages: Sequence[IdentifierUsage],
) -> list[UnusedFunctionsEntry]:
    """Listed identifiers that are not used anywhere in the file.

    A usage anywhere in the file satisfies every include that lists it; which
    header actually declares the identifier is not checked.
    """
    used = {usage.identifier for usage in usages}
    entries: list[UnusedFunctionsEntry] = []
    for include in annotated_includes:
        unused = tuple(name for name in include.identifiers if name not in used)
        if unused:
            entries.append(
                UnusedFunctionsEntry(line=include.line, header=include.header, unused_identifiers=unused)
            )
    return entries


def find_unlisted_functions(
    annotated_includes: Sequence[AnnotatedInclude],
    usages: Sequence[IdentifierUsage],
) -> list[UnlistedFunction]:
    """Used identifiers missing from the documented set, in scan order."""
    documented = documented_identifiers(annotated_includes)
    return [
        UnlistedFunction(
            line=usage.line,
            identifier=usage.identifier,
            reference_link=create_reference_link(usage.identifier),
        )
        for usage in usages
        if usage.identifier not in documented
    ]


def resolve(
    bare_includes: Sequence[BareInclude],
    annotated_includes: Sequence[AnnotatedInclude],
    usages: Sequence[IdentifierUsage],
) -> FileAnalysis:
    """Build the result triple from the working sets of a complete pass."""
    unused = find_unused_functions(annotated_includes, usages)
    unlisted = find_unlisted_functions(annotated_includes, usages)
    logger.debug(
        "Resolved %s bare, %s unused, %s unlisted",
        len(bare_includes),
        len(unused),
        len(unlisted),
    )
    return FileAnalysis(
        bare_includes=tuple(bare_includes),
        unused_functions=tuple(unused),
        unlisted_functions=tuple(unlisted),
    )
