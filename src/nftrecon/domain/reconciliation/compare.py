"""Field comparison shared by every differ."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from nftrecon.domain.model import DifferenceKind, DifferenceRecord, missing_in

if TYPE_CHECKING:
    from collections.abc import Callable

    from nftrecon.domain.model import Comparable

_COMPARED_FIELDS: Final[tuple[tuple[DifferenceKind, Callable[[Comparable], object]], ...]] = (
    (DifferenceKind.NAME, lambda entity: entity.name),
    (DifferenceKind.ARTIST_NAME, lambda entity: entity.artist_name),
    (DifferenceKind.EDITIONS, lambda entity: entity.editions),
)


def compare_fields(left: Comparable, right: Comparable) -> tuple[DifferenceKind, ...]:
    """Return the tags of every compared field that is not strictly equal.

    No trimming or case folding: ``"Cat"`` vs ``"cat "`` is a difference.
    """

    return tuple(
        kind for kind, getter in _COMPARED_FIELDS if getter(left) != getter(right)
    )


def paired_record(
    record_id: str, left: Comparable, right: Comparable
) -> DifferenceRecord | None:
    """Compare both sides and return a record only when something differs."""

    kinds = compare_fields(left, right)
    if not kinds:
        return None
    return DifferenceRecord(id=record_id, kinds=kinds, left=left, right=right)


def missing_record(
    record_id: str,
    *,
    missing_label: str,
    left: Comparable | None = None,
    right: Comparable | None = None,
) -> DifferenceRecord:
    return DifferenceRecord(
        id=record_id, kinds=(missing_in(missing_label),), left=left, right=right
    )
