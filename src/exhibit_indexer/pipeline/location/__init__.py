"""Physical-location parsing: candidate selection and field extraction."""

from __future__ import annotations

from .extractors import box, extract_fields, folder, folder_name, location, series
from .patterns import LocationPattern, first_match, has_shelving_token
from .selector import location_string, physical_locations, select_location, typed_notes

__all__ = [
    "series",
    "box",
    "folder",
    "folder_name",
    "location",
    "extract_fields",
    "LocationPattern",
    "first_match",
    "has_shelving_token",
    "physical_locations",
    "select_location",
    "location_string",
    "typed_notes",
]
