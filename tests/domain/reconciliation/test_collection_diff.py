from __future__ import annotations

from nftrecon.domain.model import Collection, ContractMetadata
from nftrecon.domain.reconciliation import (
    diff_collections_by_key,
    diff_collections_by_position,
    index_by_id,
)


def _collection(collection_id: str, name: str, artist_name: str, editions: int) -> Collection:
    return Collection(
        collection_id=collection_id,
        name=name,
        artist_name=artist_name,
        token_ids=tuple(f"{collection_id}-{i}" for i in range(editions)),
    )


def test_positional_diff_reports_field_mismatches_per_slot() -> None:
    left = [_collection("1", "A", "X", 5), _collection("2", "B", "Y", 1)]
    right = [_collection("1", "A", "X", 5), _collection("2", "B", "Z", 2)]

    report = diff_collections_by_position(left, right)

    assert report.ids() == ["2"]
    assert report.records[0].kinds == ("artistName", "editions")
    assert report.records[0].left == left[1]
    assert report.records[0].right == right[1]


def test_positional_diff_reports_trailing_slots_as_missing() -> None:
    shared = _collection("1", "A", "X", 1)
    extra = _collection("2", "B", "Y", 1)

    longer_left = diff_collections_by_position([shared, extra], [shared])
    longer_right = diff_collections_by_position([shared], [shared, extra])

    assert [(r.id, r.kinds) for r in longer_left] == [("2", ("missing_in_right",))]
    assert longer_left.records[0].right is None
    assert [(r.id, r.kinds) for r in longer_right] == [("2", ("missing_in_left",))]
    assert longer_right.records[0].left is None
    assert longer_right.records[0].right == extra


def test_positional_diff_desyncs_after_an_inserted_collection() -> None:
    base = [
        _collection("1", "A", "X", 1),
        _collection("2", "B", "Y", 2),
        _collection("3", "C", "Z", 3),
    ]
    shifted = [_collection("1", "New", "W", 4), *base]

    report = diff_collections_by_position(base, shifted)

    # Every slot is now compared against its neighbour, plus one trailing extra.
    assert report.ids() == ["1", "2", "3", "4"]
    assert [record.kinds[0] for record in report.records[:3]] == ["name", "name", "name"]
    assert report.records[3].kinds == ("missing_in_left",)


def test_positional_diff_of_identical_lists_is_empty() -> None:
    collections = [_collection("1", "A", "X", 2)]

    assert len(diff_collections_by_position(collections, list(collections))) == 0


def test_keyed_diff_edition_mismatch() -> None:
    left = {"1": _collection("1", "A", "X", 5)}
    right = {"1": _collection("1", "A", "X", 6)}

    report = diff_collections_by_key(left, right)

    assert len(report) == 1
    assert report.records[0].id == "1"
    assert set(report.records[0].kinds) == {"editions"}


def test_keyed_diff_covers_the_union_of_ids() -> None:
    left = {"1": _collection("1", "A", "X", 1), "2": _collection("2", "B", "Y", 1)}
    right = {"2": _collection("2", "B", "Y", 1), "3": _collection("3", "C", "Z", 1)}

    report = diff_collections_by_key(left, right, left_label="subgraph", right_label="contract")

    assert [(r.id, r.kinds) for r in report] == [
        ("1", ("missing_in_contract",)),
        ("3", ("missing_in_subgraph",)),
    ]


def test_keyed_diff_is_unaffected_by_insertion_order() -> None:
    base = [_collection("1", "A", "X", 1), _collection("2", "B", "Y", 2)]

    report = diff_collections_by_key(index_by_id(base), index_by_id(list(reversed(base))))

    assert len(report) == 0


def test_keyed_diff_without_right_only_ignores_extra_right_ids() -> None:
    left = {"1": _collection("1", "A", "X", 1)}
    right = {"1": _collection("1", "A", "X", 1), "2": _collection("2", "B", "Y", 1)}

    report = diff_collections_by_key(left, right, report_right_only=False)

    assert len(report) == 0


def test_keyed_diff_compares_collections_with_contract_metadata() -> None:
    subgraph = {"1": _collection("1", "A", "X", 3)}
    contract = {
        "1": ContractMetadata(
            collection_id="1", name="A", artist_name="X", editions=4, identifier=1
        )
    }

    report = diff_collections_by_key(
        subgraph, contract, left_label="subgraph", right_label="contract"
    )

    assert report.records[0].kinds == ("editions",)
    assert report.records[0].right == contract["1"]
