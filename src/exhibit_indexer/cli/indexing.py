"""Batch indexing command."""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.table import Table

from exhibit_indexer.entities.core import IndexDocument, SourceRecord
from exhibit_indexer.pipeline import (
    DocumentAssembler,
    generate_metadata,
    load_source_records,
    write_documents,
)
from exhibit_indexer.pipeline.full_text import FetchError
from exhibit_indexer.utils.helpers import serialize_json
from exhibit_indexer.utils.logging import configure_logging, get_logger, log_timing

from .common import CLIError, console, get_state, render_panel, resolve_path

_LOGGER = get_logger(module=__name__)

DEFAULT_OUTPUT_NAME = "documents.jsonl"


def _assemble(
    assembler: DocumentAssembler,
    records: Iterator[SourceRecord],
    failures: list[str],
) -> Iterator[IndexDocument]:
    for record in records:
        try:
            yield assembler.build(record)
        except FetchError as exc:
            _LOGGER.warning("Skipping record after fetch failure", druid=record.druid, url=exc.url)
            failures.append(record.druid)


def index_command(
    ctx: typer.Context,
    records_dir: Optional[Path] = typer.Argument(
        None,
        help="Directory with one sub-directory per record; defaults to paths.data_dir.",
        show_default=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-O",
        help="Destination JSONL file; defaults to documents.jsonl under paths.output_dir.",
        show_default=False,
    ),
    skip_full_text: bool = typer.Option(
        False,
        "--skip-full-text",
        help="Do not fetch object-level full text.",
    ),
    metadata: bool = typer.Option(
        True,
        "--metadata/--no-metadata",
        help="Write a run summary next to the output file.",
    ),
) -> None:
    """Build index documents for every record under RECORDS_DIR."""

    state = get_state(ctx)
    settings = state.settings
    configure_logging(settings, verbose=state.verbose)

    source = resolve_path(records_dir or settings.paths.data_dir)
    if not source.is_dir():
        raise CLIError(f"Not a directory: {source}")

    policy = settings.policies.indexing
    if skip_full_text:
        policy = policy.model_copy(update={"full_text_enabled": False})
    assembler = DocumentAssembler(policy=policy, fetch_policy=settings.policies.fetch)

    failures: list[str] = []
    with console.status(f"Indexing records from {source}..."), log_timing("index"):
        destination = write_documents(
            _assemble(assembler, load_source_records(source), failures),
            resolve_path(output or settings.paths.output_dir / DEFAULT_OUTPUT_NAME, must_exist=False),
        )

    stats = {
        "records": assembler.metrics.records_in,
        "documents": assembler.metrics.documents_out,
        "fields_written": assembler.metrics.fields_written,
        "full_text_fetches": assembler.metrics.full_text_fetches,
        "fetch_failures": len(failures),
    }
    run_metadata = generate_metadata(
        stats,
        {
            "policy_version": settings.policy_version,
            "indexing": policy.model_dump(mode="json"),
        },
    )
    if metadata:
        serialize_json(run_metadata, destination.with_suffix(".metadata.json"))
    if state.verbose:
        render_panel("Run Metadata", run_metadata)

    table = Table(title="Indexing Summary", box=None)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in stats.items():
        table.add_row(key.replace("_", " ").title(), str(value))
    table.add_row("Output", str(destination))
    console.print(table)
