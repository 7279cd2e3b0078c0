"""ElementTree helpers for MODS and public XML documents.

MODS documents are usually namespaced (``http://www.loc.gov/mods/v3``) while the
public object wrapper is not, so lookups use the ``{*}`` wildcard to accept
either form.
"""

from __future__ import annotations

from typing import Iterable, List
from xml.etree import ElementTree as ET

from .helpers import normalize_whitespace

MODS_NS = "http://www.loc.gov/mods/v3"


def local_name(element: ET.Element) -> str:
    """Return the tag of *element* without its namespace."""

    tag = element.tag
    if isinstance(tag, str) and tag.startswith("{"):
        return tag.split("}", 1)[1]
    return str(tag)


def wildcard_path(*segments: str) -> str:
    """Build a namespace-agnostic ElementTree path from plain tag names.

    >>> wildcard_path("relatedItem", "location", "physicalLocation")
    '{*}relatedItem/{*}location/{*}physicalLocation'
    """

    return "/".join(f"{{*}}{segment}" for segment in segments)


def element_text(element: ET.Element | None, *, collapse: bool = True) -> str | None:
    """Return the text of *element*, or None when empty.

    Inner whitespace runs are collapsed unless *collapse* is False, in which
    case only the ends are trimmed.
    """

    if element is None:
        return None
    raw = "".join(element.itertext())
    text = normalize_whitespace(raw) if collapse else raw.strip()
    return text or None


def texts(elements: Iterable[ET.Element], *, collapse: bool = True) -> List[str]:
    """Collect non-empty texts from *elements*, preserving document order."""

    collected: List[str] = []
    for element in elements:
        text = element_text(element, collapse=collapse)
        if text is not None:
            collected.append(text)
    return collected


def parse_int(value: str | None) -> int | None:
    """Parse an integer attribute, returning None when absent or malformed.

    >>> parse_int("12967")
    12967
    >>> parse_int("n/a") is None
    True
    """

    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_xml(payload: str | bytes) -> ET.Element:
    """Parse an XML document and return its root element.

    Raises :class:`xml.etree.ElementTree.ParseError` for malformed input.
    """

    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return ET.fromstring(payload.strip())


__all__ = [
    "MODS_NS",
    "local_name",
    "wildcard_path",
    "element_text",
    "texts",
    "parse_int",
    "parse_xml",
]
