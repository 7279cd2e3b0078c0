"""Traversal of the public content manifest (``contentMetadata``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List
from xml.etree import ElementTree as ET

from exhibit_indexer.config.policies import IndexingPolicy
from exhibit_indexer.entities.core import (
    ImageData,
    ManifestFile,
    ManifestResource,
    strip_druid_prefix,
)
from exhibit_indexer.utils.logging import get_logger
from exhibit_indexer.utils.xml import element_text, local_name, parse_int

from .derivatives import DerivativeUrls, base_identifier, derivative_urls


@dataclass(frozen=True)
class ImageSummary:
    """What the index needs to know about one image file."""

    resource: ManifestResource
    file: ManifestFile
    base_identifier: str

    @property
    def file_name(self) -> str:
        return self.file.stem

    @property
    def width(self) -> int | None:
        return self.file.image_data.width if self.file.image_data else None

    @property
    def height(self) -> int | None:
        return self.file.image_data.height if self.file.image_data else None


def _parse_file(element: ET.Element) -> ManifestFile | None:
    file_id = (element.get("id") or "").strip()
    if not file_id:
        return None
    image_data = None
    image_element = element.find("{*}imageData")
    if image_element is not None:
        image_data = ImageData(
            width=parse_int(image_element.get("width")),
            height=parse_int(image_element.get("height")),
        )
    return ManifestFile(
        id=file_id,
        mimetype=element.get("mimetype"),
        size=parse_int(element.get("size")),
        image_data=image_data,
    )


def _parse_resource(element: ET.Element) -> ManifestResource:
    files = [
        parsed
        for parsed in (_parse_file(child) for child in element.findall("{*}file"))
        if parsed is not None
    ]
    return ManifestResource(
        id=element.get("id"),
        sequence=parse_int(element.get("sequence")),
        type=element.get("type"),
        label=element_text(element.find("{*}label")),
        files=files,
    )


class ContentMetadataWalker:
    """Read-only view over one record's content manifest.

    *public_xml* may be the ``publicObject`` wrapper or the ``contentMetadata``
    element itself.  A record without a manifest behaves like an empty one.
    """

    def __init__(
        self,
        public_xml: ET.Element | None,
        druid: str,
        *,
        policy: IndexingPolicy | None = None,
    ) -> None:
        self.druid = druid
        self._policy = policy or IndexingPolicy()
        self._content_metadata = self._locate(public_xml)
        self._log = get_logger(module=__name__, druid=druid)
        self._resources: List[ManifestResource] | None = None

    @staticmethod
    def _locate(public_xml: ET.Element | None) -> ET.Element | None:
        if public_xml is None:
            return None
        if local_name(public_xml) == "contentMetadata":
            return public_xml
        return public_xml.find("{*}contentMetadata")

    @property
    def present(self) -> bool:
        return self._content_metadata is not None

    def declared_content_type(self) -> str | None:
        """Return the manifest's declared ``type`` attribute, if any."""

        if self._content_metadata is None:
            return None
        declared = (self._content_metadata.get("type") or "").strip()
        return declared or None

    def object_id(self) -> str:
        """Return the manifest ``objectId`` or, failing that, the record druid."""

        if self._content_metadata is not None:
            declared = (self._content_metadata.get("objectId") or "").strip()
            if declared:
                return strip_druid_prefix(declared)
        return self.druid

    def resources(self) -> List[ManifestResource]:
        """Return resources in document order."""

        if self._resources is None:
            if self._content_metadata is None:
                self._resources = []
            else:
                self._resources = [
                    _parse_resource(element)
                    for element in self._content_metadata.findall("{*}resource")
                ]
        return self._resources

    def files(self) -> Iterator[ManifestFile]:
        """Yield every file entry across every resource in document order."""

        for resource in self.resources():
            yield from resource.files

    def first_image_resource(self) -> ManifestResource | None:
        """Return the first resource identified as an image, or None."""

        for resource in self.resources():
            if resource.is_image and resource.files:
                return resource
        return None

    def image_summaries(self) -> List[ImageSummary]:
        """Summaries for every image resource, using each resource's first image file."""

        return [
            self._summarize(resource)
            for resource in self.resources()
            if resource.is_image and resource.files
        ]

    def first_image(self) -> ImageSummary | None:
        resource = self.first_image_resource()
        if resource is None:
            self._log.debug("No image resource in content metadata")
            return None
        return self._summarize(resource)

    def _summarize(self, resource: ManifestResource) -> ImageSummary:
        image_file = next((item for item in resource.files if item.is_image), resource.files[0])
        return ImageSummary(
            resource=resource,
            file=image_file,
            base_identifier=base_identifier(self.druid, image_file.stem),
        )

    def derivative_urls(self, image: ImageSummary) -> DerivativeUrls:
        return derivative_urls(
            image.base_identifier,
            iiif_root=self._policy.stacks_iiif_root,
            sizes=self._policy.derivative_sizes,
        )


__all__ = ["ContentMetadataWalker", "ImageSummary"]
