"""Indexing pipeline: location parsing, manifest walking, and assembly."""

from __future__ import annotations

from .assembler import AssemblerMetrics, DocumentAssembler
from .io import generate_metadata, load_source_records, write_documents

__all__ = [
    "DocumentAssembler",
    "AssemblerMetrics",
    "load_source_records",
    "write_documents",
    "generate_metadata",
]
