"""Tests for shelving-field extraction from physical-location strings."""

from __future__ import annotations

from typing import Callable, Dict
from xml.sax.saxutils import escape

import pytest

from exhibit_indexer.config.policies import IndexingPolicy
from exhibit_indexer.entities.core import IndexDocument, SourceRecord
from exhibit_indexer.pipeline.assembler import DocumentAssembler
from exhibit_indexer.pipeline.location import box, extract_fields, folder, location, series
from exhibit_indexer.utils.xml import MODS_NS

DRUID = "oo000oo0000"
STANFORD_ARCHIVES = (
    "Stanford University. Libraries. Department of Special Collections and University Archives"
)


def _location_only(example: str) -> str:
    return (
        f'<mods xmlns="{MODS_NS}"><location>'
        f"<physicalLocation>{escape(example)}</physicalLocation>"
        "</location></mods>"
    )


def _related_item(example: str) -> str:
    return (
        f'<mods xmlns="{MODS_NS}"><relatedItem><location>'
        f"<physicalLocation>{escape(example)}</physicalLocation>"
        "</location></relatedItem></mods>"
    )


def _multiple(example: str) -> str:
    return (
        f'<mods xmlns="{MODS_NS}"><location>'
        "<physicalLocation>Irrelevant Data</physicalLocation>"
        f"<physicalLocation>{escape(example)}</physicalLocation>"
        "</location></mods>"
    )


MODS_CONTEXTS: Dict[str, Callable[[str], str]] = {
    "location": _location_only,
    "related_item": _related_item,
    "multiple": _multiple,
}


@pytest.fixture(params=sorted(MODS_CONTEXTS))
def mods_context(request: pytest.FixtureRequest) -> Callable[[str], str]:
    return MODS_CONTEXTS[request.param]


@pytest.fixture(params=["first_informative", "last"])
def assembler(request: pytest.FixtureRequest) -> DocumentAssembler:
    return DocumentAssembler(
        policy=IndexingPolicy(location_selection=request.param, full_text_enabled=False)
    )


def _run_step(assembler: DocumentAssembler, step: str, mods_xml: str) -> IndexDocument:
    record = SourceRecord.from_strings(DRUID, mods_xml=mods_xml)
    document = IndexDocument(id=record.druid)
    getattr(assembler, step)(record, document)
    return document


SERIES_EXAMPLES = {
    "Call Number: SC0340, Accession 2005-101": "2005-101",
    "Call Number: SC0340, Accession 2005-101, Box : 39, Folder: 9": "2005-101",
    "Call Number: SC0340, Accession 2005-101, Box: 2, Folder: 3": "2005-101",
    "Call Number: SC0340, Accession: 1986-052": "1986-052",
    "Call Number: SC0340, Accession: 1986-052, Box 3 Folder 38": "1986-052",
    "Call Number: SC0340, Accession: 2005-101, Box : 50, Folder: 31": "2005-101",
    "Call Number: SC0340, Accession: 1986-052, Box: 5, Folder: 1": "1986-052",
    "SC0340, Accession 1986-052": "1986-052",
    "SC0340, Accession 2005-101, Box 18": "2005-101",
    "Call Number: SC0340, Accession 2005-101, Box: 42A, Folder: 24": "2005-101",
    "Call Number: SC0340, Accession: 1986-052, Box: 42A, Folder: 59": "1986-052",
    "SC0340": None,
    "SC0340, 1986-052, Box 18": None,
    STANFORD_ARCHIVES: None,
    "Series Biographical Photographs | Box 42 | Folder Abbot, Nathan": "Biographical Photographs",
    "Series General Photographs | Box 42 | Folder Administration building--Outer Quad": "General Photographs",
    "MSS Photo 451, Series 1, Box 32, Folder 11, Sleeve 32-11-2, Frame B32-F11-S2-6": "1",
    "Series 1, Box 10, Folder 8": "1",
    "Series 1, Box 10 | Folder 8": "1",
    "Collection: M1090 , Series: 4 , Box: 5 , Folder: 10": "4",
    "Box 42 | Folder 3": None,
    "Flat-box 228 | Volume 1": None,
}

BOX_EXAMPLES = {
    "Call Number: SC0340, Accession 2005-101, Box : 1, Folder: 1": "1",
    "Call Number: SC0340, Accession 2005-101, Box: 39, Folder: 9": "39",
    "Call Number: SC0340, Accession: 1986-052, Box 3 Folder 38": "3",
    "Call Number: SC0340, Accession: 2005-101, Box : 50, Folder: 31": "50",
    "Call Number: SC0340, Accession: 1986-052, Box: 5, Folder: 1": "5",
    "SC0340, 1986-052, Box 18": "18",
    "SC0340, Accession 2005-101, Box 18": "18",
    "Call Number: SC0340, Accession 2005-101, Box: 42A, Folder: 24": "42A",
    "Call Number: SC0340, Accession: 1986-052, Box: 42A, Folder: 59": "42A",
    "Call Number: SC0340, Accession 2005-101": None,
    "Call Number: SC0340, Accession: 1986-052": None,
    "SC0340": None,
    "SC0340, Accession 1986-052": None,
    STANFORD_ARCHIVES: None,
    "Series Biographical Photographs | Box 42 | Folder Abbot, Nathan": "42",
    "Series General Photographs | Box 42 | Folder Administration building--Outer Quad": "42",
    "MSS Photo 451, Series 1, Box 32, Folder 11, Sleeve 32-11-2, Frame B32-F11-S2-6": "32",
    "Series 1, Box 10, Folder 8": "10",
    "Collection: M1090 , Series: 1 , Box: 5 , Folder: 42": "5",
    "Box 42 | Folder 3": "42",
    "Flat-box 228 | Volume 1": "228",
}

FOLDER_EXAMPLES = {
    "Call Number: SC0340, Accession 2005-101, Box : 1, Folder: 42": "42",
    "Call Number: SC0340, Accession 2005-101, Box: 2, Folder: 42": "42",
    "Call Number: SC0340, Accession: 1986-052, Box 3 Folder 42": "42",
    "Call Number: SC0340, Accession: 2005-101, Box : 4, Folder: 42": "42",
    "Call Number: SC0340, Accession: 1986-052, Box: 5, Folder: 42": "42",
    "Call Number: SC0340, Accession 2005-101, Box: 4A, Folder: 42": "42",
    "Call Number: SC0340, Accession: 1986-052, Box: 5A, Folder: 42": "42",
    "Call Number: SC0340, Accession 2005-101": None,
    "Call Number: SC0340, Accession: 1986-052": None,
    "SC0340": None,
    "SC0340, 1986-052, Box 18": None,
    "SC0340, Accession 2005-101": None,
    "SC0340, Accession 2005-101, Box 18": None,
    STANFORD_ARCHIVES: None,
    "MSS Photo 451, Series 1, Box 32, Folder 42, Sleeve 32-11-2, Frame B32-F11-S2-6": "42",
    "Series 1, Box 10, Folder 42": "42",
    "Collection: M1090 , Series: 4 , Box: 5 , Folder: 42": "42",
    "Box 1 | Folder 42": "42",
    "Flat-box 228 | Volume 1": None,
    "Series Biographical Photographs | Box 1 | Folder Abbot, Nathan": "Abbot, Nathan",
    "Series General Photographs | Box 1 | Folder Administration building--Outer Quad": "Administration building--Outer Quad",
    "Folder: 42, Sheet: 15": "42",
}

LOCATION_EXAMPLES = {
    "Call Number: SC0340, Accession 2005-101, Box : 1, Folder: 1": "Call Number: SC0340, Accession 2005-101, Box : 1, Folder: 1",
    "Call Number: SC0340, Accession 2005-101": "Call Number: SC0340, Accession 2005-101",
    "SC0340, 1986-052, Box 18": "SC0340, 1986-052, Box 18",
    "SC0340, Accession 2005-101, Box 18": "SC0340, Accession 2005-101, Box 18",
    "SC0340": None,
    "SC0340, Accession 1986-052": "SC0340, Accession 1986-052",
    STANFORD_ARCHIVES: None,
    "Series Biographical Photographs | Box 42 | Folder Abbot, Nathan": "Series Biographical Photographs | Box 42 | Folder Abbot, Nathan",
    "Series General Photographs | Box 42 | Folder Administration building--Outer Quad": "Series General Photographs | Box 42 | Folder Administration building--Outer Quad",
    "MSS Photo 451, Series 1, Box 32, Folder 11, Sleeve 32-11-2, Frame B32-F11-S2-6": "MSS Photo 451, Series 1, Box 32, Folder 11, Sleeve 32-11-2, Frame B32-F11-S2-6",
    "Series 1, Box 10, Folder 8": "Series 1, Box 10, Folder 8",
    "Collection: M1090 , Series: 1 , Box: 5 , Folder: 42": "Collection: M1090 , Series: 1 , Box: 5 , Folder: 42",
    "Box 42 | Folder 3": "Box 42 | Folder 3",
    "Flat-box 228 | Volume 1": "Flat-box 228 | Volume 1",
}


@pytest.mark.parametrize("example,expected", list(SERIES_EXAMPLES.items()))
def test_add_series(assembler, mods_context, example, expected) -> None:
    document = _run_step(assembler, "add_series", mods_context(example))
    assert document.get("series_ssi") == expected


@pytest.mark.parametrize("example,expected", list(BOX_EXAMPLES.items()))
def test_add_box(assembler, mods_context, example, expected) -> None:
    document = _run_step(assembler, "add_box", mods_context(example))
    assert document.get("box_ssi") == expected


@pytest.mark.parametrize("example,expected", list(FOLDER_EXAMPLES.items()))
def test_add_folder(assembler, mods_context, example, expected) -> None:
    document = _run_step(assembler, "add_folder", mods_context(example))
    assert document.get("folder_ssi") == expected


@pytest.mark.parametrize("example,expected", list(LOCATION_EXAMPLES.items()))
def test_add_location(assembler, mods_context, example, expected) -> None:
    document = _run_step(assembler, "add_location", mods_context(example))
    assert document.get("location_ssi") == expected


def test_absent_fields_write_no_key() -> None:
    assembler = DocumentAssembler(policy=IndexingPolicy(full_text_enabled=False))
    document = _run_step(assembler, "add_box", _location_only("SC0340"))
    assert "box_ssi" not in document
    assert dict(document) == {"id": DRUID}


@pytest.mark.parametrize("text", [None, "", "   ", 42, "|||", ", Title:", "Box", "Folder |"])
def test_extractors_never_raise(text) -> None:
    for extractor in (series, box, folder, location):
        extractor(text)
    fields = extract_fields(text, citation=text)
    assert fields.box is None or isinstance(fields.box, str)


def test_extractors_collapse_whitespace() -> None:
    text = "Call Number: SC0340,\n   Accession 2005-101,  Box: 42A,\tFolder: 24"
    assert series(text) == "2005-101"
    assert box(text) == "42A"
    assert folder(text) == "24"
    assert location(text) == "Call Number: SC0340, Accession 2005-101, Box: 42A, Folder: 24"


@pytest.mark.parametrize("example", list(BOX_EXAMPLES))
def test_box_is_idempotent(example) -> None:
    first = box(example)
    assert box(example) == first
    if first is not None:
        assert box(first) == first


def test_bare_box_label_needs_the_whole_string() -> None:
    assert box("42A") == "42A"
    assert box(" 18 ") == "18"
    assert box("2005-101") is None
    assert box("SC0340") is None


def test_extract_fields_fails_independently() -> None:
    fields = extract_fields("SC0340, 1986-052, Box 18")
    assert fields.series is None
    assert fields.box == "18"
    assert fields.folder is None
    assert fields.location == "SC0340, 1986-052, Box 18"
    assert fields.folder_name is None
