"""Assemble flat index documents from source records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Tuple

from exhibit_indexer.config.policies import FetchPolicy, IndexingPolicy
from exhibit_indexer.entities.core import IndexDocument, SourceRecord
from exhibit_indexer.utils.logging import get_logger, record_context

from . import mods_fields
from .content_metadata import ContentMetadataWalker
from .full_text import FileFetcher, FullTextAggregator, RequestsFileFetcher
from .location import extractors
from .location.selector import location_string, typed_notes

Step = Callable[[SourceRecord, IndexDocument], None]


@dataclass
class AssemblerMetrics:
    """Counters tracked for observability and testing."""

    records_in: int = 0
    documents_out: int = 0
    fields_written: int = 0
    full_text_fetches: int = 0


class DocumentAssembler:
    """Run every field step over one record and return its index document.

    Records are processed independently: each call to :meth:`build` starts a
    fresh :class:`IndexDocument`, and absent values never produce a key.
    """

    def __init__(
        self,
        *,
        policy: IndexingPolicy | None = None,
        fetcher: FileFetcher | None = None,
        fetch_policy: FetchPolicy | None = None,
    ) -> None:
        self.policy = policy or IndexingPolicy()
        self._fetcher = fetcher
        self._fetch_policy = fetch_policy or FetchPolicy()
        self._aggregator: FullTextAggregator | None = None
        self.metrics = AssemblerMetrics()
        self._log = get_logger(module=__name__)

    @property
    def aggregator(self) -> FullTextAggregator:
        if self._aggregator is None:
            fetcher = self._fetcher or RequestsFileFetcher(policy=self._fetch_policy)
            self._aggregator = FullTextAggregator(fetcher, policy=self.policy)
        return self._aggregator

    def steps(self) -> List[Tuple[str, Step]]:
        """Ordered (name, step) pairs applied by :meth:`build`."""

        steps: List[Tuple[str, Step]] = [
            ("content_metadata", self.add_content_metadata_fields),
            ("donor_tags", self.add_donor_tags),
            ("genre", self.add_genre),
            ("series", self.add_series),
            ("box", self.add_box),
            ("folder", self.add_folder),
            ("location", self.add_location),
            ("folder_name", self.add_folder_name),
            ("collector", self.add_collector),
            ("author_no_collector", self.add_author_no_collector),
            ("manuscript_number", self.add_manuscript_number),
        ]
        if self.policy.full_text_enabled:
            steps.append(("full_text", self.add_object_full_text))
        return steps

    def build(self, record: SourceRecord) -> IndexDocument:
        """Return the index document for *record*."""

        self.metrics.records_in += 1
        document = IndexDocument(id=record.druid)
        for name, step in self.steps():
            with record_context(record.druid, name):
                step(record, document)
        self.metrics.documents_out += 1
        self.metrics.fields_written += len(document) - 1
        self._log.debug("Assembled document", druid=record.druid, fields=sorted(document))
        return document

    def build_all(self, records: Iterable[SourceRecord]) -> Iterator[IndexDocument]:
        for record in records:
            yield self.build(record)

    # -- content manifest -------------------------------------------------

    def _walker(self, record: SourceRecord) -> ContentMetadataWalker:
        return ContentMetadataWalker(record.public_xml, record.druid, policy=self.policy)

    def add_content_metadata_fields(self, record: SourceRecord, document: IndexDocument) -> None:
        walker = self._walker(record)
        if not walker.present:
            return
        document.add_values("content_metadata_type_ssim", [walker.declared_content_type()])

        first_image = walker.first_image()
        if first_image is None:
            return
        document.add_values("content_metadata_first_image_file_name_ssm", [first_image.file_name])
        if first_image.width is not None:
            document.add_values("content_metadata_first_image_width_ssm", [str(first_image.width)])
        if first_image.height is not None:
            document.add_values("content_metadata_first_image_height_ssm", [str(first_image.height)])

        images = walker.image_summaries() if self.policy.derivatives_for_all_images else [first_image]
        for image in images:
            for field, url in walker.derivative_urls(image).as_fields().items():
                document.add_values(field, [url])

    def add_object_full_text(self, record: SourceRecord, document: IndexDocument) -> None:
        walker = self._walker(record)
        if not walker.present:
            return
        urls = self.aggregator.full_text_urls(record, walker)
        if not urls:
            return
        document.set_value("full_text_tesim", self.aggregator.aggregate(record, walker))
        self.metrics.full_text_fetches += len(urls)

    def object_level_full_text_urls(self, record: SourceRecord) -> List[str]:
        return self.aggregator.full_text_urls(record)

    # -- MODS fields ------------------------------------------------------

    def add_donor_tags(self, record: SourceRecord, document: IndexDocument) -> None:
        document.add_values(
            "donor_tags_ssim", mods_fields.donor_tags(record.mods, self.policy.donor_tags_label)
        )

    def add_genre(self, record: SourceRecord, document: IndexDocument) -> None:
        document.add_values("genre_ssim", mods_fields.genres(record.mods))

    def add_collector(self, record: SourceRecord, document: IndexDocument) -> None:
        document.add_values(
            "collector_ssim", mods_fields.collectors(record.mods, self.policy.collector_role)
        )

    def add_author_no_collector(self, record: SourceRecord, document: IndexDocument) -> None:
        document.add_values(
            "author_no_collector_ssim",
            mods_fields.non_collector_authors(record.mods, self.policy.collector_role),
        )

    def add_manuscript_number(self, record: SourceRecord, document: IndexDocument) -> None:
        document.add_values("manuscript_number_tesim", mods_fields.shelf_locators(record.mods))

    # -- physical location ------------------------------------------------

    def _location_string(self, record: SourceRecord) -> str | None:
        return location_string(record.mods, self.policy.location_selection)

    def add_series(self, record: SourceRecord, document: IndexDocument) -> None:
        document.set_value("series_ssi", extractors.series(self._location_string(record)))

    def add_box(self, record: SourceRecord, document: IndexDocument) -> None:
        document.set_value("box_ssi", extractors.box(self._location_string(record)))

    def add_folder(self, record: SourceRecord, document: IndexDocument) -> None:
        document.set_value("folder_ssi", extractors.folder(self._location_string(record)))

    def add_location(self, record: SourceRecord, document: IndexDocument) -> None:
        document.set_value("location_ssi", extractors.location(self._location_string(record)))

    def add_folder_name(self, record: SourceRecord, document: IndexDocument) -> None:
        for citation in typed_notes(
            record.mods, self.policy.preferred_citation_type, collapse=False
        ):
            name = extractors.folder_name(citation)
            if name is not None:
                document.set_value("folder_name_ssi", name)
                return


__all__ = ["DocumentAssembler", "AssemblerMetrics"]
