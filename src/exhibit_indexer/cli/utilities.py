"""Inspection commands for single location strings and images."""

from __future__ import annotations

from typing import Optional

import typer
from rich.table import Table

from exhibit_indexer.entities.core import ManifestFile, strip_druid_prefix
from exhibit_indexer.pipeline.content_metadata import base_identifier, derivative_urls
from exhibit_indexer.pipeline.location import extract_fields

from .common import CLIError, console, get_state


def parse_location_command(
    text: str = typer.Argument(..., help="Physical-location string to parse."),
    citation: Optional[str] = typer.Option(
        None,
        "--citation",
        "-c",
        help="Preferred-citation note used for the folder name.",
    ),
) -> None:
    """Show the shelving fields extracted from TEXT."""

    fields = extract_fields(text, citation=citation)
    table = Table(title="Extracted Fields", box=None)
    table.add_column("Field")
    table.add_column("Value", justify="left")
    for name, value in fields.model_dump().items():
        table.add_row(name, value if value is not None else "-")
    console.print(table)


def derivatives_command(
    ctx: typer.Context,
    druid: str = typer.Argument(..., help="Object identifier."),
    file_id: str = typer.Argument(..., help="Image file id, e.g. image_001.jp2."),
) -> None:
    """Print the derivative URL set for one image file."""

    state = get_state(ctx)
    policy = state.settings.policies.indexing
    object_id = strip_druid_prefix(druid)
    if not object_id or not file_id.strip():
        raise CLIError("DRUID and FILE_ID must not be empty")
    image_file = ManifestFile(id=file_id.strip())
    urls = derivative_urls(
        base_identifier(object_id, image_file.stem),
        iiif_root=policy.stacks_iiif_root,
        sizes=policy.derivative_sizes,
    )
    console.print(f"[bold]Derivatives for {object_id}/{image_file.id}[/bold]")
    for field, url in urls.as_fields().items():
        console.print(field, url, soft_wrap=True, highlight=False, markup=False)
