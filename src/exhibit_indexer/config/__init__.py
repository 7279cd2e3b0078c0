"""Configuration utilities for the exhibit indexer."""

from .policies import (
    DerivativeSizes,
    FetchPolicy,
    IndexingPolicy,
    Policies,
    load_policies,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "Policies",
    "load_policies",
    "IndexingPolicy",
    "DerivativeSizes",
    "FetchPolicy",
]
