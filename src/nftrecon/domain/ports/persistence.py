"""Ports for persisting run snapshots and reports."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from nftrecon.domain.model import (
        Collection,
        ContractMetadata,
        DifferenceReport,
        Token,
        TokenMetadataId,
    )


class Snapshot(StrEnum):
    """Named artifacts written by a reconciliation run."""

    SUBGRAPH1_TOKENS = "subgraph1_data"
    PROD_TOKENS = "prod_data"
    TOKEN_DIFFERENCES = "subgraph_differences"
    SUBGRAPH1_COLLECTIONS = "subgraph1_collections"
    PROD_COLLECTIONS = "prod_collections"
    COLLECTION_DIFFERENCES = "collection_differences"
    CONTRACT_METADATA = "contract_metadata"
    CONTRACT_COLLECTIONS = "contract_collections"
    CONTRACT_DIFFERENCES = "contract_collection_differences"
    CONTRACT_AGGREGATED_DIFFERENCES = "contract_collection_aggregated_differences"
    TOKEN_METADATA_IDS = "token_metadata_ids"


class SnapshotError(RuntimeError):
    """Base class for snapshot persistence failures."""


class MissingSnapshotError(SnapshotError):
    """Raised when a later stage needs a snapshot an earlier stage never wrote."""

    def __init__(self, snapshot: str, *, stage: str) -> None:
        self.snapshot = snapshot
        self.stage = stage
        super().__init__(f"Snapshot {snapshot!r} does not exist. Run the {stage!r} stage first.")


class SnapshotFormatError(SnapshotError):
    """Raised when a snapshot file exists but cannot be parsed."""


@runtime_checkable
class SnapshotRepository(Protocol):
    """Persistence contract for run snapshots.

    ``exists`` doubles as the resumability check: a token snapshot that exists
    replaces the fetch for that side.
    """

    def exists(self, snapshot: Snapshot) -> bool: ...

    def load_tokens(self, snapshot: Snapshot) -> list[Token]: ...

    def save_tokens(self, snapshot: Snapshot, tokens: Sequence[Token]) -> None: ...

    def load_collections(self, snapshot: Snapshot) -> list[Collection]: ...

    def save_collections(self, snapshot: Snapshot, collections: Sequence[Collection]) -> None: ...

    def save_report(self, snapshot: Snapshot, report: DifferenceReport) -> None: ...

    def save_contract_metadata(
        self, snapshot: Snapshot, metadata: Mapping[str, ContractMetadata]
    ) -> None: ...

    def save_contract_collections(
        self, snapshot: Snapshot, metadata: Sequence[ContractMetadata]
    ) -> None: ...

    def save_token_metadata_ids(
        self, snapshot: Snapshot, entries: Sequence[TokenMetadataId]
    ) -> None: ...


__all__ = [
    "MissingSnapshotError",
    "Snapshot",
    "SnapshotError",
    "SnapshotFormatError",
    "SnapshotRepository",
]
