from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path  # noqa: TC003

import pytest

from nftrecon.adapters.snapshots import JsonSnapshotRepository  # noqa: TC001
from nftrecon.domain.model import ContractMetadata, Token
from nftrecon.domain.ports.fetching import ContractReadError, SubgraphFetchError
from nftrecon.domain.ports.persistence import MissingSnapshotError, Snapshot
from nftrecon.domain.reconciliation import (
    Stage,
    export_token_metadata_ids,
    reconcile_contract,
    reconcile_subgraphs,
)

TokenFactory = Callable[..., Token]


class StaticFetcher:
    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.calls = 0

    def __call__(self) -> list[Token]:
        self.calls += 1
        return list(self.tokens)


class FailingFetcher:
    def __call__(self) -> list[Token]:
        raise SubgraphFetchError("boom")


def _read(results_dir: Path, snapshot: Snapshot) -> object:
    return json.loads((results_dir / f"{snapshot}.json").read_text())


def test_end_to_end_token_only_in_right_is_missing_in_left(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
    results_dir: Path,
) -> None:
    left = StaticFetcher([make_token("1", "Cat", "Bob", 2)])
    right = StaticFetcher([make_token("1", "Cat", "Bob", 2), make_token("2", "Dog", "Ann", 1)])

    summary = reconcile_subgraphs(
        left_fetcher=left, right_fetcher=right, repository=snapshot_repository
    )

    assert summary.token_differences == 1
    token_differences = _read(results_dir, Snapshot.TOKEN_DIFFERENCES)
    assert token_differences == [
        {
            "id": "2",
            "differences": ["missing_in_subgraph1"],
            "subgraph1": None,
            "prod": {
                "id": "0x2",
                "identifier": "2",
                "name": "Dog",
                "artistName": "Ann",
                "editions": 1,
            },
        }
    ]


def test_subgraph_run_writes_every_artifact(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
    results_dir: Path,
) -> None:
    tokens = [make_token("1", "Cat", "Bob"), make_token("2", "Cat", "Bob")]

    summary = reconcile_subgraphs(
        left_fetcher=StaticFetcher(tokens),
        right_fetcher=StaticFetcher(tokens[:1]),
        repository=snapshot_repository,
    )

    for snapshot in (
        Snapshot.SUBGRAPH1_TOKENS,
        Snapshot.PROD_TOKENS,
        Snapshot.TOKEN_DIFFERENCES,
        Snapshot.SUBGRAPH1_COLLECTIONS,
        Snapshot.PROD_COLLECTIONS,
        Snapshot.COLLECTION_DIFFERENCES,
    ):
        assert (results_dir / f"{snapshot}.json").is_file()

    assert summary.left_collections == 1
    assert summary.right_collections == 1
    collection_differences = _read(results_dir, Snapshot.COLLECTION_DIFFERENCES)
    assert isinstance(collection_differences, list)
    assert collection_differences[0]["differences"] == ["editions"]
    assert _read(results_dir, Snapshot.SUBGRAPH1_COLLECTIONS) == [
        {"id": "1", "name": "Cat", "artistName": "Bob", "editions": 2, "tokenIds": ["1", "2"]}
    ]


def test_existing_token_snapshots_skip_fetching(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
) -> None:
    snapshot_repository.save_tokens(Snapshot.SUBGRAPH1_TOKENS, [make_token("1")])
    left = StaticFetcher([make_token("99")])
    right = StaticFetcher([make_token("1")])

    summary = reconcile_subgraphs(
        left_fetcher=left, right_fetcher=right, repository=snapshot_repository
    )

    assert left.calls == 0
    assert right.calls == 1
    assert summary.token_differences == 0


def test_fetch_failure_aborts_without_writing_a_snapshot(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
) -> None:
    with pytest.raises(SubgraphFetchError):
        reconcile_subgraphs(
            left_fetcher=StaticFetcher([make_token("1")]),
            right_fetcher=FailingFetcher(),
            repository=snapshot_repository,
        )

    assert snapshot_repository.exists(Snapshot.SUBGRAPH1_TOKENS)
    assert not snapshot_repository.exists(Snapshot.PROD_TOKENS)
    assert not snapshot_repository.exists(Snapshot.TOKEN_DIFFERENCES)


def test_presort_aligns_collection_ids_across_sources(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
) -> None:
    left = [make_token("1", "Cat", "Bob"), make_token("2", "Dog", "Ann")]
    right = list(reversed(left))

    unsorted = reconcile_subgraphs(
        left_fetcher=StaticFetcher(left),
        right_fetcher=StaticFetcher(right),
        repository=snapshot_repository,
    )
    assert unsorted.token_differences == 0
    assert unsorted.collection_differences == 2

    presorted = reconcile_subgraphs(
        left_fetcher=StaticFetcher(left),
        right_fetcher=StaticFetcher(right),
        repository=snapshot_repository,
        presort=True,
    )
    assert presorted.collection_differences == 0


class MappingReader:
    def __init__(self, entries: dict[str, tuple[str, str, int]]) -> None:
        self.entries = entries

    def __call__(self, collection_id: str) -> ContractMetadata:
        if collection_id not in self.entries:
            raise ContractReadError("execution reverted", item_id=collection_id)
        name, artist_name, editions = self.entries[collection_id]
        return ContractMetadata(
            collection_id=collection_id,
            name=name,
            artist_name=artist_name,
            editions=editions,
            identifier=int(collection_id),
        )


def _seed_subgraph_snapshots(
    repository: JsonSnapshotRepository, make_token: TokenFactory
) -> None:
    reconcile_subgraphs(
        left_fetcher=StaticFetcher(
            [
                make_token("1", "Cat", "Bob"),
                make_token("2", "Cat", "Bob"),
                make_token("3", "Dog", "Ann"),
                make_token("4", "Owl", "Eve"),
            ]
        ),
        right_fetcher=StaticFetcher([]),
        repository=repository,
    )


def test_contract_run_requires_subgraph_snapshots(
    snapshot_repository: JsonSnapshotRepository,
) -> None:
    with pytest.raises(MissingSnapshotError) as excinfo:
        reconcile_contract(reader=MappingReader({}), repository=snapshot_repository)

    assert excinfo.value.stage == Stage.SUBGRAPHS
    assert "subgraphs" in str(excinfo.value)


def test_contract_run_stores_successful_reads_and_reports_failures_as_missing(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
    results_dir: Path,
) -> None:
    _seed_subgraph_snapshots(snapshot_repository, make_token)
    reader = MappingReader({"1": ("Cat", "Bob", 2), "2": ("Dog", "Ann", 5)})
    sleeps: list[float] = []

    summary = reconcile_contract(
        reader=reader, repository=snapshot_repository, sleep=sleeps.append
    )

    assert summary.collections == 3
    assert summary.fetched == 2
    assert summary.failed_ids == ["3"]
    contract_metadata = _read(results_dir, Snapshot.CONTRACT_METADATA)
    assert isinstance(contract_metadata, dict)
    assert set(contract_metadata) == {"1", "2"}

    differences = _read(results_dir, Snapshot.CONTRACT_DIFFERENCES)
    assert isinstance(differences, list)
    assert [(d["id"], d["differences"]) for d in differences] == [
        ("2", ["editions"]),
        ("3", ["missing_in_contract"]),
    ]
    assert differences[1]["contract"] is None
    assert differences[0]["contract"]["identifier"] == "2"
    assert summary.aggregated_differences == 2
    assert sleeps == []


def test_contract_run_with_every_read_failing_reports_every_collection_missing(
    make_token: TokenFactory,
    snapshot_repository: JsonSnapshotRepository,
) -> None:
    _seed_subgraph_snapshots(snapshot_repository, make_token)

    summary = reconcile_contract(
        reader=MappingReader({}), repository=snapshot_repository, sleep=lambda _: None
    )

    assert summary.fetched == 0
    assert summary.differences == summary.collections == 3


def test_export_token_metadata_ids_persists_mapping(
    snapshot_repository: JsonSnapshotRepository,
    results_dir: Path,
) -> None:
    class Reader:
        def total_supply(self) -> int:
            return 3

        def batch_metadata_ids(self, token_ids: list[int]) -> list[int]:
            return [7 for _ in token_ids]

    entries = export_token_metadata_ids(
        reader=Reader(), repository=snapshot_repository, batch_size=2
    )

    assert len(entries) == 3
    assert _read(results_dir, Snapshot.TOKEN_METADATA_IDS) == [
        {"tokenId": 0, "metadataId": 7},
        {"tokenId": 1, "metadataId": 7},
        {"tokenId": 2, "metadataId": 7},
    ]
