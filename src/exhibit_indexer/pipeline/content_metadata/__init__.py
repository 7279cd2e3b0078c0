"""Content-manifest traversal and image derivative URLs."""

from __future__ import annotations

from .derivatives import DerivativeUrls, base_identifier, derivative_urls
from .walker import ContentMetadataWalker, ImageSummary

__all__ = [
    "ContentMetadataWalker",
    "ImageSummary",
    "DerivativeUrls",
    "base_identifier",
    "derivative_urls",
]
