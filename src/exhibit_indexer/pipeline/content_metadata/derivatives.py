"""IIIF derivative URL templates.

All derivatives of an image are fixed string templates over one image-server
root and one base identifier; nothing is fetched or stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict
from urllib.parse import quote

from exhibit_indexer.config.policies import DerivativeSizes


def base_identifier(druid: str, file_stem: str) -> str:
    """Return the URL-escaped ``<druid>/<file stem>`` image identifier."""

    return quote(f"{druid}/{file_stem}", safe="")


@dataclass(frozen=True)
class DerivativeUrls:
    """The derivative URL set computed for one image."""

    iiif_info: str
    square_thumbnail: str
    thumbnail: str
    large_image: str
    full_image: str

    def as_fields(self) -> Dict[str, str]:
        """Map each URL onto its index field name."""

        return {
            "content_metadata_image_iiif_info_ssm": self.iiif_info,
            "thumbnail_square_url_ssm": self.square_thumbnail,
            "thumbnail_url_ssm": self.thumbnail,
            "large_image_url_ssm": self.large_image,
            "full_image_url_ssm": self.full_image,
        }


def derivative_urls(
    identifier: str,
    *,
    iiif_root: str,
    sizes: DerivativeSizes | None = None,
) -> DerivativeUrls:
    """Build the derivative URLs for an already escaped base *identifier*."""

    dims = sizes or DerivativeSizes()
    base_url = f"{iiif_root.rstrip('/')}/{identifier}"
    square = dims.square_pixels
    bounded = dims.thumbnail_max_pixels
    return DerivativeUrls(
        iiif_info=f"{base_url}/info.json",
        square_thumbnail=f"{base_url}/square/{square},{square}/0/default.jpg",
        thumbnail=f"{base_url}/full/!{bounded},{bounded}/0/default.jpg",
        large_image=f"{base_url}/full/pct:{dims.large_scale_percent}/0/default.jpg",
        full_image=f"{base_url}/full/full/0/default.jpg",
    )


__all__ = ["DerivativeUrls", "base_identifier", "derivative_urls"]
