"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import (
    ContractMetadataReader,
    ContractReadError,
    FetchError,
    SubgraphFetchError,
    TokenFetcher,
    TokenMetadataIdReader,
)
from .persistence import (
    MissingSnapshotError,
    Snapshot,
    SnapshotError,
    SnapshotFormatError,
    SnapshotRepository,
)

__all__ = [
    "ContractMetadataReader",
    "ContractReadError",
    "FetchError",
    "MissingSnapshotError",
    "Snapshot",
    "SnapshotError",
    "SnapshotFormatError",
    "SnapshotRepository",
    "SubgraphFetchError",
    "TokenFetcher",
    "TokenMetadataIdReader",
]
