"""Top-level package for the exhibit indexer."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from loguru import logger

try:
    __version__ = version("exhibit-indexer")
except PackageNotFoundError:  # pragma: no cover - running from a source checkout
    __version__ = "0.1.0"

# Silent as a library; configure_logging() turns these records back on.
logger.disable(__name__)

from .config.settings import Settings, get_settings
from .entities import IndexDocument, SourceRecord
from .pipeline import DocumentAssembler

__all__ = [
    "__version__",
    "Settings",
    "get_settings",
    "SourceRecord",
    "IndexDocument",
    "DocumentAssembler",
]
