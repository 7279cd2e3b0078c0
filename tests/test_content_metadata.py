"""Tests for content-manifest traversal and image derivative URLs."""

from __future__ import annotations

import pytest

from exhibit_indexer.config.policies import DerivativeSizes, IndexingPolicy
from exhibit_indexer.entities.core import IndexDocument, SourceRecord
from exhibit_indexer.pipeline.assembler import DocumentAssembler
from exhibit_indexer.pipeline.content_metadata import (
    ContentMetadataWalker,
    base_identifier,
    derivative_urls,
)

DRUID = "oo000oo0000"
STACKS_BASE = "https://stacks.stanford.edu/image/iiif/oo000oo0000%2Fbj356mh7176_00_0001"

IMAGE_PUBLIC_XML = """
<publicObject>
  <contentMetadata type="image">
    <resource id="bj356mh7176_1" sequence="1" type="image">
      <label>Image 1</label>
      <file id="bj356mh7176_00_0001.jp2" mimetype="image/jp2" size="56108727">
        <imageData width="12967" height="22970"/>
      </file>
    </resource>
  </contentMetadata>
</publicObject>
"""

TWO_IMAGE_PUBLIC_XML = """
<publicObject>
  <contentMetadata type="image">
    <resource id="r1" sequence="1" type="object">
      <file id="readme.pdf" mimetype="application/pdf" size="10"/>
    </resource>
    <resource id="r2" sequence="2" type="image">
      <file id="first.jp2" mimetype="image/jp2"><imageData width="10" height="20"/></file>
    </resource>
    <resource id="r3" sequence="3" type="image">
      <file id="second.jp2" mimetype="image/jp2"/>
    </resource>
  </contentMetadata>
</publicObject>
"""


@pytest.fixture()
def assembler() -> DocumentAssembler:
    return DocumentAssembler(policy=IndexingPolicy(full_text_enabled=False))


def _build(assembler: DocumentAssembler, public_xml: str) -> IndexDocument:
    record = SourceRecord.from_strings(DRUID, public_xml=public_xml)
    document = IndexDocument(id=record.druid)
    assembler.add_content_metadata_fields(record, document)
    return document


def test_record_without_content_metadata_has_only_id(assembler) -> None:
    record = SourceRecord.from_strings(DRUID, public_xml="<publicObject></publicObject>")
    document = assembler.build(record)

    assert dict(document) == {"id": DRUID}


def test_declared_content_type_is_indexed(assembler) -> None:
    document = _build(assembler, IMAGE_PUBLIC_XML)

    assert document["content_metadata_type_ssim"] == ["image"]


def test_first_image_summary_fields(assembler) -> None:
    document = _build(assembler, IMAGE_PUBLIC_XML)

    assert document["content_metadata_first_image_file_name_ssm"] == ["bj356mh7176_00_0001"]
    assert document["content_metadata_first_image_width_ssm"] == ["12967"]
    assert document["content_metadata_first_image_height_ssm"] == ["22970"]


def test_image_derivative_urls(assembler) -> None:
    document = _build(assembler, IMAGE_PUBLIC_XML)

    assert f"{STACKS_BASE}/info.json" in document["content_metadata_image_iiif_info_ssm"]
    assert f"{STACKS_BASE}/square/100,100/0/default.jpg" in document["thumbnail_square_url_ssm"]
    assert f"{STACKS_BASE}/full/!400,400/0/default.jpg" in document["thumbnail_url_ssm"]
    assert f"{STACKS_BASE}/full/pct:25/0/default.jpg" in document["large_image_url_ssm"]
    assert f"{STACKS_BASE}/full/full/0/default.jpg" in document["full_image_url_ssm"]


def test_content_type_without_images(assembler) -> None:
    document = _build(
        assembler,
        '<publicObject><contentMetadata type="file">'
        '<resource type="file"><file id="data.csv" mimetype="text/csv"/></resource>'
        "</contentMetadata></publicObject>",
    )

    assert document["content_metadata_type_ssim"] == ["file"]
    assert "thumbnail_url_ssm" not in document
    assert "content_metadata_first_image_file_name_ssm" not in document


def test_first_image_skips_non_image_resources(assembler) -> None:
    document = _build(assembler, TWO_IMAGE_PUBLIC_XML)

    assert document["content_metadata_first_image_file_name_ssm"] == ["first"]
    assert len(document["thumbnail_url_ssm"]) == 1
    assert "oo000oo0000%2Ffirst" in document["thumbnail_url_ssm"][0]


def test_derivatives_for_all_images_policy() -> None:
    assembler = DocumentAssembler(
        policy=IndexingPolicy(derivatives_for_all_images=True, full_text_enabled=False)
    )
    document = _build(assembler, TWO_IMAGE_PUBLIC_XML)

    assert document["content_metadata_first_image_file_name_ssm"] == ["first"]
    assert [url.split("/")[5] for url in document["full_image_url_ssm"]] == [
        "oo000oo0000%2Ffirst",
        "oo000oo0000%2Fsecond",
    ]


def test_missing_dimensions_are_omitted(assembler) -> None:
    document = _build(
        assembler,
        '<publicObject><contentMetadata type="image"><resource type="image">'
        '<file id="x.jp2" mimetype="image/jp2"/></resource></contentMetadata></publicObject>',
    )

    assert document["content_metadata_first_image_file_name_ssm"] == ["x"]
    assert "content_metadata_first_image_width_ssm" not in document
    assert "content_metadata_first_image_height_ssm" not in document


def test_walker_accepts_bare_content_metadata() -> None:
    record = SourceRecord.from_strings(
        DRUID,
        public_xml='<contentMetadata objectId="druid:ab123cd4567" type="book"/>',
    )
    walker = ContentMetadataWalker(record.public_xml, record.druid)

    assert walker.present
    assert walker.declared_content_type() == "book"
    assert walker.object_id() == "ab123cd4567"
    assert walker.resources() == []


def test_walker_files_preserve_document_order() -> None:
    record = SourceRecord.from_strings(DRUID, public_xml=TWO_IMAGE_PUBLIC_XML)
    walker = ContentMetadataWalker(record.public_xml, record.druid)

    assert [item.id for item in walker.files()] == ["readme.pdf", "first.jp2", "second.jp2"]
    assert [resource.sequence for resource in walker.resources()] == [1, 2, 3]


def test_base_identifier_escapes_separator() -> None:
    assert base_identifier("oo000oo0000", "bj356mh7176_00_0001") == "oo000oo0000%2Fbj356mh7176_00_0001"
    assert base_identifier("oo000oo0000", "a b") == "oo000oo0000%2Fa%20b"


def test_derivative_sizes_are_configurable() -> None:
    urls = derivative_urls(
        "id",
        iiif_root="https://images.example.org/iiif/",
        sizes=DerivativeSizes(square_pixels=75, thumbnail_max_pixels=200, large_scale_percent=50),
    )

    assert urls.square_thumbnail == "https://images.example.org/iiif/id/square/75,75/0/default.jpg"
    assert urls.thumbnail == "https://images.example.org/iiif/id/full/!200,200/0/default.jpg"
    assert urls.large_image == "https://images.example.org/iiif/id/full/pct:50/0/default.jpg"


def test_image_resource_prefers_image_file(assembler) -> None:
    document = _build(
        assembler,
        '<publicObject><contentMetadata type="image"><resource type="image">'
        '<file id="notes.txt" mimetype="text/plain"/>'
        '<file id="scan.jp2" mimetype="image/jp2"/>'
        "</resource></contentMetadata></publicObject>",
    )

    assert document["content_metadata_first_image_file_name_ssm"] == ["scan"]
