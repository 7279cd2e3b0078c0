"""Simple multi-valued fields read straight from MODS elements."""

from __future__ import annotations

from typing import Iterator, List
from xml.etree import ElementTree as ET

from exhibit_indexer.utils.xml import element_text, texts, wildcard_path

# MARC relator code for "collector".
_COLLECTOR_CODE = "col"


def donor_tags(mods: ET.Element | None, label: str = "Donor tags") -> List[str]:
    """Return notes whose ``displayLabel`` equals *label*, duplicates kept."""

    if mods is None:
        return []
    return texts(
        note for note in mods.findall(wildcard_path("note")) if note.get("displayLabel") == label
    )


def genres(mods: ET.Element | None) -> List[str]:
    if mods is None:
        return []
    return texts(mods.findall(wildcard_path("genre")))


def shelf_locators(mods: ET.Element | None) -> List[str]:
    """Return ``location/shelfLocator`` texts (manuscript numbers)."""

    if mods is None:
        return []
    return texts(mods.findall(wildcard_path("location", "shelfLocator")))


def _personal_names(mods: ET.Element) -> Iterator[ET.Element]:
    for name in mods.findall(wildcard_path("name")):
        if name.get("type") == "personal":
            yield name


def _display_name(name: ET.Element) -> str | None:
    parts = texts(name.findall(wildcard_path("namePart")))
    if not parts:
        return None
    return ", ".join(parts)


def _has_role(name: ET.Element, role: str) -> bool:
    wanted = role.strip().lower()
    for term in name.findall(wildcard_path("role", "roleTerm")):
        value = (element_text(term) or "").lower()
        if term.get("type") == "code":
            if value == _COLLECTOR_CODE and wanted == "collector":
                return True
            continue
        if value == wanted:
            return True
    return False


def collectors(mods: ET.Element | None, role: str = "Collector") -> List[str]:
    """Return display names of personal names carrying the collector role."""

    if mods is None:
        return []
    names = (
        _display_name(name) for name in _personal_names(mods) if _has_role(name, role)
    )
    return [name for name in names if name]


def non_collector_authors(mods: ET.Element | None, role: str = "Collector") -> List[str]:
    """Return display names of personal names without the collector role."""

    if mods is None:
        return []
    names = (
        _display_name(name) for name in _personal_names(mods) if not _has_role(name, role)
    )
    return [name for name in names if name]


__all__ = [
    "donor_tags",
    "genres",
    "shelf_locators",
    "collectors",
    "non_collector_authors",
]
