"""Grouping and diffing core for NFT metadata reconciliation.

Flow of a run:
1) obtain token lists (snapshot or fetch)
2) diff tokens by external id
3) group each list into collections by ``(name, artist_name)``
4) diff collections by position (subgraph vs subgraph) or by id (vs contract)
5) persist every intermediate artifact
"""

from __future__ import annotations

from .collection_diff import diff_collections_by_key, diff_collections_by_position, index_by_id
from .compare import compare_fields
from .contract import (
    ContractCollectionResult,
    collect_contract_metadata,
    collect_token_metadata_ids,
)
from .grouping import group_into_collections, sort_tokens_by_external_id
from .runner import (
    ContractRunSummary,
    Stage,
    SubgraphRunSummary,
    export_token_metadata_ids,
    obtain_tokens,
    reconcile_contract,
    reconcile_subgraphs,
)
from .token_diff import diff_tokens

__all__ = [
    "ContractCollectionResult",
    "ContractRunSummary",
    "Stage",
    "SubgraphRunSummary",
    "collect_contract_metadata",
    "collect_token_metadata_ids",
    "compare_fields",
    "diff_collections_by_key",
    "diff_collections_by_position",
    "diff_tokens",
    "export_token_metadata_ids",
    "group_into_collections",
    "index_by_id",
    "obtain_tokens",
    "reconcile_contract",
    "reconcile_subgraphs",
    "sort_tokens_by_external_id",
]
