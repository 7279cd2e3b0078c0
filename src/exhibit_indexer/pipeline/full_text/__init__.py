"""Full-text aggregation and the default file fetcher."""

from __future__ import annotations

from .aggregator import FullTextAggregator
from .fetcher import FetchError, FileFetcher, RequestsFileFetcher

__all__ = ["FullTextAggregator", "FetchError", "FileFetcher", "RequestsFileFetcher"]
