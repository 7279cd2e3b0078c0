"""Streaming I/O helpers for the indexing pipeline."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Iterator, Mapping

from exhibit_indexer.entities.core import RecordLoadError, SourceRecord
from exhibit_indexer.utils.helpers import ensure_directory
from exhibit_indexer.utils.logging import get_logger

_LOGGER = get_logger(module=__name__)


def load_source_records(records_dir: str | Path) -> Iterator[SourceRecord]:
    """Yield one :class:`SourceRecord` per sub-directory of *records_dir*.

    Sub-directories are visited in name order.  Records whose XML cannot be
    parsed are logged and skipped.
    """

    root = Path(records_dir)
    if not root.is_dir():
        raise FileNotFoundError(f"Records directory not found: {root}")

    for directory in sorted(path for path in root.iterdir() if path.is_dir()):
        try:
            yield SourceRecord.from_directory(directory)
        except RecordLoadError as exc:
            _LOGGER.warning(
                "Skipping unreadable record",
                druid=exc.druid,
                document=exc.document,
                reason=exc.reason,
            )


def write_documents(documents: Iterable[Mapping[str, object]], output_path: str | Path) -> Path:
    """Write index documents to *output_path* in JSONL format."""

    path = Path(output_path)
    ensure_directory(path.parent)
    with path.open("w", encoding="utf-8") as handle:
        for document in documents:
            handle.write(json.dumps(dict(document), sort_keys=True, ensure_ascii=False))
            handle.write("\n")
    return path.resolve()


def generate_metadata(processing_stats: Mapping[str, object], config_used: Mapping[str, object]) -> dict:
    """Return a metadata document describing the indexing run."""

    return {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "stats": dict(processing_stats),
        "config": dict(config_used),
    }


__all__ = ["load_source_records", "write_documents", "generate_metadata"]
