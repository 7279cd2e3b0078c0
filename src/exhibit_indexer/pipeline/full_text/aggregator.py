"""Aggregation of object-level full text from ``<objectId>.txt`` sibling files."""

from __future__ import annotations

from typing import List

from exhibit_indexer.config.policies import IndexingPolicy
from exhibit_indexer.entities.core import SourceRecord
from exhibit_indexer.pipeline.content_metadata.walker import ContentMetadataWalker
from exhibit_indexer.utils.logging import get_logger

from .fetcher import FileFetcher, RequestsFileFetcher


class FullTextAggregator:
    """Collect and concatenate full text declared in a record's manifest.

    Every file whose id is ``<objectId>.txt`` is a full-text carrier, where the
    id is the manifest's ``objectId`` (the record druid when it declares none).
    Carriers are fetched from under the record druid.  Repeats are fetched and
    concatenated again rather than de-duplicated, mirroring the manifest.
    """

    def __init__(
        self,
        fetcher: FileFetcher | None = None,
        *,
        policy: IndexingPolicy | None = None,
    ) -> None:
        self._fetcher = fetcher or RequestsFileFetcher()
        self._policy = policy or IndexingPolicy()
        self._log = get_logger(module=__name__)

    def carrier_file_name(self, object_id: str) -> str:
        return f"{object_id}.txt"

    def file_url(self, druid: str, file_id: str) -> str:
        return f"{self._policy.stacks_file_root}/{druid}/{file_id}"

    def full_text_urls(self, record: SourceRecord, walker: ContentMetadataWalker | None = None) -> List[str]:
        """Return the ordered URLs that :meth:`aggregate` would fetch."""

        manifest = walker or ContentMetadataWalker(record.public_xml, record.druid, policy=self._policy)
        carrier = self.carrier_file_name(manifest.object_id())
        return [
            self.file_url(record.druid, manifest_file.id)
            for manifest_file in manifest.files()
            if manifest_file.id == carrier
        ]

    def aggregate(self, record: SourceRecord, walker: ContentMetadataWalker | None = None) -> str | None:
        """Fetch and join every carrier file; None when the record declares none.

        Fetch failures propagate to the caller.
        """

        urls = self.full_text_urls(record, walker)
        if not urls:
            return None
        chunks = [self._fetcher(url) for url in urls]
        self._log.debug("Aggregated full text", druid=record.druid, files=len(urls))
        return "".join(chunks)


__all__ = ["FullTextAggregator"]
