"""Domain entities for the exhibit indexer."""

from .core import (
    ExtractedFields,
    ImageData,
    IndexDocument,
    ManifestFile,
    ManifestResource,
    RecordLoadError,
    SourceRecord,
)

__all__ = [
    "SourceRecord",
    "RecordLoadError",
    "ImageData",
    "ManifestFile",
    "ManifestResource",
    "ExtractedFields",
    "IndexDocument",
]
