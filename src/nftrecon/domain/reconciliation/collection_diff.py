"""Collection-level differences, by list position or by collection id."""

from __future__ import annotations

from typing import TYPE_CHECKING

from nftrecon.domain.model import DifferenceReport

from .compare import missing_record, paired_record

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from nftrecon.domain.model import Collection, Comparable


def diff_collections_by_position(
    left: Sequence[Collection],
    right: Sequence[Collection],
    *,
    left_label: str = "left",
    right_label: str = "right",
) -> DifferenceReport:
    """Compare two independently grouped collection lists slot by slot.

    Slot ``i`` is reported under id ``str(i + 1)``, the id the grouper gives
    the collection at that position.

    Known limitation: alignment is purely positional. One extra or reordered
    collection on either side shifts every later comparison, so this mode is
    only meaningful when both token lists were ordered identically before
    grouping. Prefer ``diff_collections_by_key`` whenever a stable id exists.
    """

    report = DifferenceReport(left_label=left_label, right_label=right_label)
    for index in range(max(len(left), len(right))):
        record_id = str(index + 1)
        left_collection = left[index] if index < len(left) else None
        right_collection = right[index] if index < len(right) else None

        if left_collection is None:
            report.add(missing_record(record_id, missing_label=left_label, right=right_collection))
            continue
        if right_collection is None:
            report.add(missing_record(record_id, missing_label=right_label, left=left_collection))
            continue

        record = paired_record(record_id, left_collection, right_collection)
        if record is not None:
            report.add(record)

    return report


def diff_collections_by_key(
    left: Mapping[str, Comparable],
    right: Mapping[str, Comparable],
    *,
    left_label: str = "left",
    right_label: str = "right",
    report_right_only: bool = True,
) -> DifferenceReport:
    """Compare two collection maps over the union of their ids.

    Ids are visited in left insertion order, then right-only ids. With
    ``report_right_only=False`` only left ids are examined, so nothing is
    ever tagged missing on the left.
    """

    report = DifferenceReport(left_label=left_label, right_label=right_label)
    keys = list(left)
    if report_right_only:
        keys.extend(key for key in right if key not in left)

    for key in keys:
        left_entry = left.get(key)
        right_entry = right.get(key)
        if left_entry is None:
            report.add(missing_record(key, missing_label=left_label, right=right_entry))
            continue
        if right_entry is None:
            report.add(missing_record(key, missing_label=right_label, left=left_entry))
            continue

        record = paired_record(key, left_entry, right_entry)
        if record is not None:
            report.add(record)

    return report


def index_by_id(collections: Sequence[Collection]) -> dict[str, Collection]:
    return {collection.collection_id: collection for collection in collections}
