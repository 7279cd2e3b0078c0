"""Indexing and derivative URL policy models."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

LocationSelection = Literal["first_informative", "last"]


def _strip_trailing_slash(value: str) -> str:
    cleaned = value.strip()
    if not cleaned:
        raise ValueError("URL roots must not be empty")
    return cleaned.rstrip("/")


class DerivativeSizes(BaseModel):
    """Fixed size and crop parameters for image derivative URLs."""

    square_pixels: int = Field(default=100, ge=1)
    thumbnail_max_pixels: int = Field(default=400, ge=1)
    large_scale_percent: int = Field(default=25, ge=1, le=100)


class IndexingPolicy(BaseModel):
    """Controls how source records are mapped onto index documents."""

    stacks_file_root: str = Field(
        default="https://stacks.stanford.edu/file",
        description="Object storage root used to fetch full-text sibling files.",
    )
    stacks_iiif_root: str = Field(
        default="https://stacks.stanford.edu/image/iiif",
        description="Image server root used for derivative URLs.",
    )
    derivative_sizes: DerivativeSizes = Field(default_factory=DerivativeSizes)
    derivatives_for_all_images: bool = Field(
        default=False,
        description="Emit derivative URLs for every image resource instead of the first one only.",
    )
    donor_tags_label: str = Field(default="Donor tags", min_length=1)
    preferred_citation_type: str = Field(default="preferred citation", min_length=1)
    collector_role: str = Field(default="Collector", min_length=1)
    location_selection: LocationSelection = Field(
        default="first_informative",
        description="Rule used to pick one physicalLocation when several are present.",
    )
    full_text_enabled: bool = Field(default=True)

    @field_validator("stacks_file_root", "stacks_iiif_root", mode="before")
    @classmethod
    def _normalize_roots(cls, value: str) -> str:
        return _strip_trailing_slash(str(value))


__all__ = ["IndexingPolicy", "DerivativeSizes", "LocationSelection"]
