# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

"""Reference links that help locate the header declaring an identifier."""

from __future__ import annotations

REFERENCE_SEARCH_URL = "https://duckduckgo.com/?sites=cppreference.com&q="
REFERENCE_SEARCH_SUFFIX = "&ia=web"

# Only these characters are encoded; everything else is passed through as is.
URL_ENCODING = {
    " ": "%20",
    "!": "%21",
    "#": "%23",
    "$": "%24",
    "&": "%26",
    "'": "%27",
    "(": "%28",
    ")": "%29",
    "*": "%2A",
    "+": "%2B",
    ",": "%2C",
    "/": "%2F",
    ":": "%3A",
    ";": "%3B",
    "=": "%3D",
    "?": "%3F",
    "@": "%40",
    "[": "%5B",
    "]": "%5D",
}


def encode_query(text: str) -> str:
    """Percent-encode the fixed punctuation set in ``text``."""
    return "".join(URL_ENCODING.get(ch, ch) for ch in text)


def create_reference_link(identifier: str) -> str:
    """Build a cppreference.com search link for an identifier.

    >>> create_reference_link("std::sort")
    'https://duckduckgo.com/?sites=cppreference.com&q=std%3A%3Asort&ia=web'
    """
    return f"{REFERENCE_SEARCH_URL}{encode_query(identifier)}{REFERENCE_SEARCH_SUFFIX}"
