"""Core domain entities used throughout the indexing pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List
from xml.etree import ElementTree as ET

from pydantic import BaseModel, ConfigDict, Field, field_validator

from exhibit_indexer.utils.xml import parse_xml

_DRUID_PREFIX = "druid:"


class RecordLoadError(ValueError):
    """Raised when a source record's XML cannot be parsed."""

    def __init__(self, druid: str, document: str, reason: str) -> None:
        super().__init__(f"Unable to load {document} for {druid}: {reason}")
        self.druid = druid
        self.document = document
        self.reason = reason


def strip_druid_prefix(value: str) -> str:
    cleaned = value.strip()
    if cleaned.startswith(_DRUID_PREFIX):
        cleaned = cleaned[len(_DRUID_PREFIX) :]
    return cleaned


class SourceRecord(BaseModel):
    """One archival object: its MODS description and public content manifest.

    Either document may be missing; the indexing steps treat a missing document
    the same as a document without the relevant elements.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    druid: str = Field(..., min_length=1, description="Stable object identifier without prefix")
    mods: ET.Element | None = Field(default=None)
    public_xml: ET.Element | None = Field(default=None)

    @field_validator("druid")
    @classmethod
    def _normalize_druid(cls, value: str) -> str:
        cleaned = strip_druid_prefix(value)
        if not cleaned:
            raise ValueError("druid must contain non-whitespace characters")
        return cleaned

    @classmethod
    def from_strings(
        cls,
        druid: str,
        *,
        mods_xml: str | bytes | None = None,
        public_xml: str | bytes | None = None,
    ) -> "SourceRecord":
        """Parse raw XML payloads into a record."""

        return cls(
            druid=druid,
            mods=_parse_document(druid, "mods", mods_xml),
            public_xml=_parse_document(druid, "public_xml", public_xml),
        )

    @classmethod
    def from_directory(cls, path: Path | str) -> "SourceRecord":
        """Load ``mods.xml`` and ``public.xml`` from a per-record directory.

        The directory name is the druid.
        """

        directory = Path(path)
        mods_path = directory / "mods.xml"
        public_path = directory / "public.xml"
        return cls.from_strings(
            directory.name,
            mods_xml=mods_path.read_bytes() if mods_path.exists() else None,
            public_xml=public_path.read_bytes() if public_path.exists() else None,
        )


def _parse_document(druid: str, document: str, payload: str | bytes | None) -> ET.Element | None:
    if payload is None:
        return None
    try:
        return parse_xml(payload)
    except ET.ParseError as exc:
        raise RecordLoadError(strip_druid_prefix(druid), document, str(exc)) from exc


class ImageData(BaseModel):
    """Pixel dimensions declared for an image file."""

    width: int | None = Field(default=None, ge=0)
    height: int | None = Field(default=None, ge=0)


class ManifestFile(BaseModel):
    """A single file entry inside a content-manifest resource."""

    id: str = Field(..., min_length=1)
    mimetype: str | None = None
    size: int | None = Field(default=None, ge=0)
    image_data: ImageData | None = None

    @property
    def stem(self) -> str:
        """File id with its extension removed."""

        stem, dot, _extension = self.id.rpartition(".")
        return stem if dot and stem else self.id

    @property
    def is_image(self) -> bool:
        return bool(self.mimetype) and self.mimetype.startswith("image/")


class ManifestResource(BaseModel):
    """A resource (image, page, object, file) listed in the content manifest."""

    id: str | None = None
    sequence: int | None = None
    type: str | None = None
    label: str | None = None
    files: List[ManifestFile] = Field(default_factory=list)

    @property
    def is_image(self) -> bool:
        if self.type == "image":
            return True
        return bool(self.files) and self.files[0].is_image


class ExtractedFields(BaseModel):
    """Shelving fields parsed from a physical-location string.

    Every field fails independently; ``None`` means the field is absent.
    """

    series: str | None = None
    box: str | None = None
    folder: str | None = None
    folder_name: str | None = None
    location: str | None = None


class IndexDocument(dict):
    """Flat field-name to value(s) mapping handed to the search index.

    Absent values are never written, so a missing key always means "no value".
    """

    def set_value(self, field: str, value: str | None) -> None:
        if value is None or value == "":
            return
        self[field] = value

    def add_values(self, field: str, values: Iterable[str | None]) -> None:
        cleaned = [value for value in values if value]
        if not cleaned:
            return
        existing = self.get(field)
        if isinstance(existing, list):
            existing.extend(cleaned)
        else:
            self[field] = cleaned


__all__ = [
    "RecordLoadError",
    "SourceRecord",
    "ImageData",
    "ManifestFile",
    "ManifestResource",
    "ExtractedFields",
    "IndexDocument",
    "strip_druid_prefix",
]
