"""Utility helpers for the exhibit indexer."""

from .helpers import ensure_directory, normalize_whitespace, serialize_json
from .logging import configure_logging, get_logger, log_timing, record_context

__all__ = [
    "configure_logging",
    "get_logger",
    "log_timing",
    "record_context",
    "normalize_whitespace",
    "ensure_directory",
    "serialize_json",
]
