"""Field extractors for physical-location strings.

Every extractor is a pure ``str -> str | None`` function.  They never raise:
empty, garbled, or unrecognised input yields ``None`` so that one odd record
cannot abort a batch.  Missing a box that is there is preferred over inventing
one that is not.
"""

from __future__ import annotations

from typing import Sequence

from exhibit_indexer.entities.core import ExtractedFields
from exhibit_indexer.utils.helpers import normalize_whitespace
from exhibit_indexer.utils.logging import get_logger

from .patterns import (
    BOX_PATTERNS,
    FOLDER_NAME_PATTERNS,
    FOLDER_PATTERNS,
    SERIES_PATTERNS,
    LocationPattern,
    first_match,
    has_shelving_token,
)

_LOGGER = get_logger(module=__name__)


def _prepare(text: str | None, *, collapse: bool = True) -> str | None:
    if not isinstance(text, str):
        return None
    cleaned = normalize_whitespace(text) if collapse else text.strip()
    return cleaned or None


def _extract(
    field: str,
    patterns: Sequence[LocationPattern],
    text: str | None,
    *,
    collapse: bool = True,
) -> str | None:
    prepared = _prepare(text, collapse=collapse)
    if prepared is None:
        return None
    hit = first_match(patterns, prepared)
    if hit is None:
        _LOGGER.debug("No pattern matched", field=field, length=len(prepared))
        return None
    pattern, value = hit
    _LOGGER.debug("Pattern matched", field=field, pattern=pattern.name, value=value)
    return value


def series(text: str | None) -> str | None:
    """Return the series or accession identifier named in *text*."""

    return _extract("series", SERIES_PATTERNS, text)


def box(text: str | None) -> str | None:
    """Return the box label in *text*, letter suffix included (``42A``)."""

    return _extract("box", BOX_PATTERNS, text)


def folder(text: str | None) -> str | None:
    """Return the folder label, or the free-text folder of pipe-delimited strings."""

    return _extract("folder", FOLDER_PATTERNS, text)


def folder_name(citation: str | None) -> str | None:
    """Return the folder title from a preferred-citation note.

    Only the text after ``, Title:`` is returned with its ends trimmed; quotes,
    punctuation and inner spacing are kept as catalogued.
    Callers are responsible for passing preferred-citation notes only.
    """

    return _extract("folder_name", FOLDER_NAME_PATTERNS, citation, collapse=False)


def location(text: str | None) -> str | None:
    """Return the whole location string when it names a shelving unit.

    Bare call numbers (``SC0340``) and institutional sentences carry no
    Series/Accession/Box/Folder token and are dropped.
    """

    prepared = _prepare(text)
    if prepared is None or not has_shelving_token(prepared):
        return None
    return prepared


def extract_fields(text: str | None, *, citation: str | None = None) -> ExtractedFields:
    """Run every extractor over one location string and optional citation note."""

    return ExtractedFields(
        series=series(text),
        box=box(text),
        folder=folder(text),
        folder_name=folder_name(citation),
        location=location(text),
    )


__all__ = ["series", "box", "folder", "folder_name", "location", "extract_fields"]
