"""Application orchestration entry points."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING

from nftrecon.adapters.contract import ContractMetadataClient, TokenMetadataIdClient
from nftrecon.adapters.snapshots import JsonSnapshotRepository
from nftrecon.adapters.subgraph import SubgraphFetcher
from nftrecon.config import (
    ReconcileConfig,
    get_art_contract_config,
    get_contract_config,
    get_storage_config,
    get_subgraph_config,
)
from nftrecon.domain.reconciliation import (
    export_token_metadata_ids,
    reconcile_contract,
    reconcile_subgraphs,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from nftrecon.config import SubgraphEndpoint
    from nftrecon.domain.model import TokenMetadataId
    from nftrecon.domain.ports.fetching import (
        ContractMetadataReader,
        TokenFetcher,
        TokenMetadataIdReader,
    )
    from nftrecon.domain.ports.persistence import SnapshotRepository
    from nftrecon.domain.reconciliation import ContractRunSummary, SubgraphRunSummary


log = getLogger(__name__)


def _build_subgraph_fetcher(endpoint: SubgraphEndpoint, settings: ReconcileConfig) -> TokenFetcher:
    return SubgraphFetcher(
        endpoint=endpoint,
        page_size=settings.page_size,
        max_records=settings.max_records,
        order_by=settings.order_by,
        order_direction=settings.order_direction,
        delay_seconds=settings.page_delay_seconds,
    )


def _repository(results_dir: Path | None) -> SnapshotRepository:
    return JsonSnapshotRepository(get_storage_config(results_dir))


def run_subgraph_comparison(
    *,
    settings: ReconcileConfig | None = None,
    results_dir: Path | None = None,
    left_fetcher: TokenFetcher | None = None,
    right_fetcher: TokenFetcher | None = None,
    repository: SnapshotRepository | None = None,
) -> SubgraphRunSummary:
    """Reconcile the primary subgraph against production using the configured adapters.

    Subgraph URLs are required even when both token snapshots already exist,
    so a misconfigured environment fails before any work is done.
    """

    effective_settings = settings or ReconcileConfig()
    if left_fetcher is None or right_fetcher is None:
        subgraphs = get_subgraph_config()
        left_fetcher = left_fetcher or _build_subgraph_fetcher(
            subgraphs.primary, effective_settings
        )
        right_fetcher = right_fetcher or _build_subgraph_fetcher(
            subgraphs.production, effective_settings
        )

    log.info(
        "Starting subgraph comparison: page_size=%s, max_records=%s, presort=%s",
        effective_settings.page_size,
        effective_settings.max_records,
        effective_settings.presort,
    )
    return reconcile_subgraphs(
        left_fetcher=left_fetcher,
        right_fetcher=right_fetcher,
        repository=repository or _repository(results_dir),
        presort=effective_settings.presort,
    )


def run_contract_comparison(
    *,
    settings: ReconcileConfig | None = None,
    results_dir: Path | None = None,
    reader: ContractMetadataReader | None = None,
    repository: SnapshotRepository | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ContractRunSummary:
    """Reconcile the primary subgraph's collections against the metadata contract."""

    effective_settings = settings or ReconcileConfig()
    log.info("Starting contract data comparison using collection ids")
    summary = reconcile_contract(
        reader=reader or ContractMetadataClient(config=get_contract_config()),
        repository=repository or _repository(results_dir),
        batch_size=effective_settings.contract_batch_size,
        delay_seconds=effective_settings.contract_delay_seconds,
        sleep=sleep,
    )
    log.info(
        "Finished contract comparison: collections=%s, fetched=%s, failed=%s, "
        "differences=%s, aggregated=%s",
        summary.collections,
        summary.fetched,
        len(summary.failed_ids),
        summary.differences,
        summary.aggregated_differences,
    )
    return summary


def run_metadata_id_export(
    *,
    settings: ReconcileConfig | None = None,
    results_dir: Path | None = None,
    reader: TokenMetadataIdReader | None = None,
    repository: SnapshotRepository | None = None,
) -> list[TokenMetadataId]:
    """Export the art contract's token id to metadata id mapping."""

    effective_settings = settings or ReconcileConfig()
    return export_token_metadata_ids(
        reader=reader or TokenMetadataIdClient(config=get_art_contract_config()),
        repository=repository or _repository(results_dir),
        batch_size=effective_settings.metadata_id_batch_size,
    )
