"""Tagged pattern tables for physical-location strings.

Each donor collection writes shelving information its own way, so every field
owns an ordered table of independent patterns.  The first pattern that matches
wins; when none matches the field is absent.  Patterns capture the raw text in
a ``value`` group so suffixed labels such as ``42A`` are kept verbatim.

Dialects seen in the wild:

``call_number``
    ``Call Number: SC0340, Accession: 1986-052, Box: 42A, Folder: 59``
``bare_accession``
    ``SC0340, Accession 2005-101, Box 18``
``pipe``
    ``Series General Photographs | Box 42 | Folder Administration building``
``mss``
    ``MSS Photo 451, Series 1, Box 32, Folder 11, Sleeve 32-11-2``
``collection``
    ``Collection: M1090 , Series: 4 , Box: 5 , Folder: 10``
``box_label``
    ``42A`` on its own, as returned by the box extractor
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence, Tuple


@dataclass(frozen=True)
class LocationPattern:
    """A named regular expression with a ``value`` capture group."""

    name: str
    dialects: Tuple[str, ...]
    regex: re.Pattern[str]

    def search(self, text: str) -> str | None:
        match = self.regex.search(text)
        if match is None:
            return None
        value = match.group("value").strip()
        return value or None


def _pattern(name: str, dialects: Sequence[str], expression: str, flags: int = 0) -> LocationPattern:
    return LocationPattern(name=name, dialects=tuple(dialects), regex=re.compile(expression, flags))


# Accession numbers are year-dash-number identifiers, e.g. 2005-101.
SERIES_PATTERNS: Tuple[LocationPattern, ...] = (
    _pattern(
        "accession",
        ("call_number", "bare_accession"),
        r"\bAccession:?\s+(?P<value>\d{4}-\d+[A-Z]?)\b",
    ),
    _pattern(
        "pipe_series",
        ("pipe",),
        r"^Series\s+(?P<value>[^|,]+?)\s*\|",
    ),
    _pattern(
        "labelled_series",
        ("mss", "collection"),
        r"\bSeries:?\s+(?P<value>[^,|]+?)\s*(?:[,|]|$)",
    ),
)

# ``Flat-box 228`` is a box too, hence the lower-case alternative.
# A string that is nothing but a box label (``42A``) is read as itself.
BOX_PATTERNS: Tuple[LocationPattern, ...] = (
    _pattern(
        "labelled_box",
        ("call_number", "bare_accession", "pipe", "mss", "collection"),
        r"\b[Bb]ox\s*:?\s*(?P<value>\d+[A-Z]?)\b",
    ),
    _pattern(
        "bare_box_label",
        ("box_label",),
        r"^(?P<value>\d+[A-Z]?)$",
    ),
)

# Pipe-delimited folders are free text running to the end of the string.
FOLDER_PATTERNS: Tuple[LocationPattern, ...] = (
    _pattern(
        "pipe_folder",
        ("pipe",),
        r"\|\s*Folder\s+(?P<value>[^|]+?)\s*$",
    ),
    _pattern(
        "labelled_folder",
        ("call_number", "mss", "collection"),
        r"\bFolder\s*:?\s*(?P<value>\d+[A-Z]?)\b",
    ),
)

# Only the preferred citation note carries a folder title.
FOLDER_NAME_PATTERNS: Tuple[LocationPattern, ...] = (
    _pattern(
        "citation_title",
        ("call_number",),
        r",\s*Title:\s*(?P<value>.+)$",
        re.DOTALL,
    ),
)

# A location string is worth indexing only when it names some shelving unit.
SHELVING_TOKEN_PATTERN = re.compile(r"\b(?:Series|Accession|Box|Folder)\b", re.IGNORECASE)


def first_match(patterns: Sequence[LocationPattern], text: str) -> Tuple[LocationPattern, str] | None:
    """Return the first pattern in *patterns* matching *text* with its value."""

    for pattern in patterns:
        value = pattern.search(text)
        if value is not None:
            return pattern, value
    return None


def has_shelving_token(text: str) -> bool:
    return SHELVING_TOKEN_PATTERN.search(text) is not None


__all__ = [
    "LocationPattern",
    "SERIES_PATTERNS",
    "BOX_PATTERNS",
    "FOLDER_PATTERNS",
    "FOLDER_NAME_PATTERNS",
    "SHELVING_TOKEN_PATTERN",
    "first_match",
    "has_shelving_token",
]
