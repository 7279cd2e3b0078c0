"""Pick the one physical-location string worth parsing from a MODS record."""

from __future__ import annotations

from typing import List, Sequence
from xml.etree import ElementTree as ET

from exhibit_indexer.config.policies import LocationSelection
from exhibit_indexer.utils.logging import get_logger
from exhibit_indexer.utils.xml import texts, wildcard_path

from .patterns import has_shelving_token

_LOGGER = get_logger(module=__name__)

# Containers in preference order.
LOCATION_CONTAINERS: tuple[tuple[str, ...], ...] = (
    ("relatedItem", "location", "physicalLocation"),
    ("location", "physicalLocation"),
)


def physical_locations(mods: ET.Element | None) -> List[List[str]]:
    """Return non-empty physicalLocation texts grouped by container.

    Groups follow :data:`LOCATION_CONTAINERS` order and keep document order
    inside each group.  Containers without text are omitted.
    """

    if mods is None:
        return []
    groups: List[List[str]] = []
    for segments in LOCATION_CONTAINERS:
        values = texts(mods.findall(wildcard_path(*segments)))
        if values:
            groups.append(values)
    return groups


def _select_last(groups: Sequence[Sequence[str]]) -> str | None:
    for group in groups:
        if group:
            return group[-1]
    return None


def _select_first_informative(groups: Sequence[Sequence[str]]) -> str | None:
    for group in groups:
        for candidate in group:
            if has_shelving_token(candidate):
                return candidate
    return _select_last(groups)


_STRATEGIES = {
    "last": _select_last,
    "first_informative": _select_first_informative,
}


def select_location(
    groups: Sequence[Sequence[str]],
    policy: LocationSelection = "first_informative",
) -> str | None:
    """Deterministically choose one location string from *groups*.

    ``first_informative`` takes the first candidate naming a shelving unit and
    falls back to ``last``; ``last`` takes the final node of the preferred
    container.
    """

    try:
        strategy = _STRATEGIES[policy]
    except KeyError as exc:
        raise ValueError(f"Unknown location selection policy: {policy!r}") from exc
    selected = strategy(groups)
    candidates = sum(len(group) for group in groups)
    if candidates > 1:
        _LOGGER.debug(
            "Resolved multiple physical locations",
            policy=policy,
            candidates=candidates,
            selected=selected,
        )
    return selected


def location_string(mods: ET.Element | None, policy: LocationSelection = "first_informative") -> str | None:
    """Convenience wrapper combining :func:`physical_locations` and :func:`select_location`."""

    return select_location(physical_locations(mods), policy)


def typed_notes(mods: ET.Element | None, note_type: str, *, collapse: bool = True) -> List[str]:
    """Return texts of top-level ``note`` elements whose ``type`` equals *note_type*."""

    if mods is None:
        return []
    return texts(
        (note for note in mods.findall(wildcard_path("note")) if note.get("type") == note_type),
        collapse=collapse,
    )


__all__ = [
    "LOCATION_CONTAINERS",
    "physical_locations",
    "select_location",
    "location_string",
    "typed_notes",
]
