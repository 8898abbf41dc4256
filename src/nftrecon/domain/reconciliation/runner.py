"""Reconciliation runs: fetch or load, group, diff, persist.

Each run reads and writes named snapshots through a ``SnapshotRepository``.
Token snapshots double as checkpoints: when one exists the matching fetch is
skipped, which makes a rerun after a failure resume instead of refetching.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from nftrecon.domain.model import SourceLabel
from nftrecon.domain.ports.persistence import MissingSnapshotError, Snapshot

from .collection_diff import diff_collections_by_key, diff_collections_by_position, index_by_id
from .contract import (
    DEFAULT_CONTRACT_BATCH_SIZE,
    DEFAULT_CONTRACT_DELAY_SECONDS,
    DEFAULT_METADATA_ID_BATCH_SIZE,
    collect_contract_metadata,
    collect_token_metadata_ids,
)
from .grouping import group_into_collections, sort_tokens_by_external_id
from .token_diff import diff_tokens

if TYPE_CHECKING:
    from collections.abc import Callable

    from nftrecon.domain.model import Token, TokenMetadataId
    from nftrecon.domain.ports.fetching import (
        ContractMetadataReader,
        TokenFetcher,
        TokenMetadataIdReader,
    )
    from nftrecon.domain.ports.persistence import SnapshotRepository

log = getLogger(__name__)


class Stage(StrEnum):
    """Runnable stages, in dependency order."""

    SUBGRAPHS = "subgraphs"
    CONTRACT = "contract"
    METADATA_IDS = "metadata-ids"


@dataclass(slots=True)
class SubgraphRunSummary:
    left_tokens: int
    right_tokens: int
    left_collections: int
    right_collections: int
    token_differences: int
    collection_differences: int


@dataclass(slots=True)
class ContractRunSummary:
    collections: int
    fetched: int
    differences: int
    aggregated_differences: int
    failed_ids: list[str] = field(default_factory=list[str])


def obtain_tokens(
    snapshot: Snapshot,
    *,
    fetcher: TokenFetcher,
    repository: SnapshotRepository,
    label: str,
) -> list[Token]:
    """Load ``snapshot`` if it exists, otherwise fetch and persist it.

    The snapshot is only written once the fetch has completed, so a failed
    fetch never leaves a partial checkpoint behind.
    """

    if repository.exists(snapshot):
        log.info("Loading %s tokens from snapshot %s", label, snapshot)
        return repository.load_tokens(snapshot)

    log.info("Fetching tokens from %s", label)
    tokens = list(fetcher())
    repository.save_tokens(snapshot, tokens)
    return tokens


def reconcile_subgraphs(
    *,
    left_fetcher: TokenFetcher,
    right_fetcher: TokenFetcher,
    repository: SnapshotRepository,
    presort: bool = False,
) -> SubgraphRunSummary:
    """Compare the primary subgraph (left) with the production subgraph (right)."""

    left_label = SourceLabel.SUBGRAPH1
    right_label = SourceLabel.PROD

    left_tokens = obtain_tokens(
        Snapshot.SUBGRAPH1_TOKENS, fetcher=left_fetcher, repository=repository, label=left_label
    )
    right_tokens = obtain_tokens(
        Snapshot.PROD_TOKENS, fetcher=right_fetcher, repository=repository, label=right_label
    )

    log.info("Comparing individual tokens")
    token_report = diff_tokens(
        left_tokens, right_tokens, left_label=left_label, right_label=right_label
    )
    repository.save_report(Snapshot.TOKEN_DIFFERENCES, token_report)

    if presort:
        left_tokens = sort_tokens_by_external_id(left_tokens)
        right_tokens = sort_tokens_by_external_id(right_tokens)

    log.info("Grouping tokens into collections for %s", left_label)
    left_collections = group_into_collections(left_tokens)
    repository.save_collections(Snapshot.SUBGRAPH1_COLLECTIONS, left_collections)

    log.info("Grouping tokens into collections for %s", right_label)
    right_collections = group_into_collections(right_tokens)
    repository.save_collections(Snapshot.PROD_COLLECTIONS, right_collections)

    log.info("Comparing collections")
    collection_report = diff_collections_by_position(
        left_collections, right_collections, left_label=left_label, right_label=right_label
    )
    repository.save_report(Snapshot.COLLECTION_DIFFERENCES, collection_report)

    summary = SubgraphRunSummary(
        left_tokens=len(left_tokens),
        right_tokens=len(right_tokens),
        left_collections=len(left_collections),
        right_collections=len(right_collections),
        token_differences=len(token_report),
        collection_differences=len(collection_report),
    )
    log.info(
        "Found %d token differences and %d collection differences",
        summary.token_differences,
        summary.collection_differences,
    )
    return summary


def _require_snapshot(repository: SnapshotRepository, snapshot: Snapshot, *, stage: Stage) -> None:
    if not repository.exists(snapshot):
        raise MissingSnapshotError(str(snapshot), stage=str(stage))


def reconcile_contract(
    *,
    reader: ContractMetadataReader,
    repository: SnapshotRepository,
    batch_size: int = DEFAULT_CONTRACT_BATCH_SIZE,
    delay_seconds: float = DEFAULT_CONTRACT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> ContractRunSummary:
    """Compare the primary subgraph's collections with the contract's metadata.

    Needs the token and collection snapshots written by the subgraphs stage.
    """

    _require_snapshot(repository, Snapshot.SUBGRAPH1_TOKENS, stage=Stage.SUBGRAPHS)
    _require_snapshot(repository, Snapshot.SUBGRAPH1_COLLECTIONS, stage=Stage.SUBGRAPHS)

    tokens = repository.load_tokens(Snapshot.SUBGRAPH1_TOKENS)
    collections = repository.load_collections(Snapshot.SUBGRAPH1_COLLECTIONS)
    log.info("Found %d collections and %d tokens in subgraph data", len(collections), len(tokens))

    result = collect_contract_metadata(
        [collection.collection_id for collection in collections],
        reader,
        batch_size=batch_size,
        delay_seconds=delay_seconds,
        sleep=sleep,
    )
    repository.save_contract_metadata(Snapshot.CONTRACT_METADATA, result.metadata)
    repository.save_contract_collections(
        Snapshot.CONTRACT_COLLECTIONS, list(result.metadata.values())
    )

    subgraph_by_id = index_by_id(collections)
    differences = diff_collections_by_key(
        subgraph_by_id,
        result.metadata,
        left_label=SourceLabel.SUBGRAPH,
        right_label=SourceLabel.CONTRACT,
        report_right_only=False,
    )
    repository.save_report(Snapshot.CONTRACT_DIFFERENCES, differences)

    aggregated = diff_collections_by_key(
        subgraph_by_id,
        result.metadata,
        left_label=SourceLabel.SUBGRAPH,
        right_label=SourceLabel.CONTRACT,
    )
    repository.save_report(Snapshot.CONTRACT_AGGREGATED_DIFFERENCES, aggregated)

    if result.failed_ids:
        log.warning("%d contract reads failed and were skipped", len(result.failed_ids))
    log.info("Comparison complete. Found %d collection differences.", len(differences))

    return ContractRunSummary(
        collections=len(collections),
        fetched=len(result.metadata),
        differences=len(differences),
        aggregated_differences=len(aggregated),
        failed_ids=list(result.failed_ids),
    )


def export_token_metadata_ids(
    *,
    reader: TokenMetadataIdReader,
    repository: SnapshotRepository,
    batch_size: int = DEFAULT_METADATA_ID_BATCH_SIZE,
) -> list[TokenMetadataId]:
    """Persist the token id to metadata id mapping read from the art contract."""

    entries = collect_token_metadata_ids(reader, batch_size=batch_size)
    repository.save_token_metadata_ids(Snapshot.TOKEN_METADATA_IDS, entries)
    log.info("Total tokens processed: %d", len(entries))
    return entries
