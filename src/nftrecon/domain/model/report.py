"""Difference records produced by the reconciliation differs."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .nft import Comparable


@dataclass(frozen=True, slots=True)
class DifferenceRecord:
    """One mismatched or one-sided entity.

    ``kinds`` is never empty. ``left``/``right`` hold the entity as seen by
    each side, or ``None`` when the entity is missing there.
    """

    id: str
    kinds: tuple[str, ...]
    left: Comparable | None = None
    right: Comparable | None = None

    def __post_init__(self) -> None:
        if not self.kinds:
            raise ValueError(f"Difference record {self.id!r} has no difference kinds")

    def has(self, kind: str) -> bool:
        return kind in self.kinds


@dataclass(slots=True)
class DifferenceReport:
    """Ordered difference records for one ``left`` vs ``right`` comparison."""

    left_label: str
    right_label: str
    records: list[DifferenceRecord] = field(default_factory=list["DifferenceRecord"])

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DifferenceRecord]:
        return iter(self.records)

    def add(self, record: DifferenceRecord) -> None:
        self.records.append(record)

    def ids(self) -> list[str]:
        return [record.id for record in self.records]

    def by_id(self, record_id: str) -> DifferenceRecord | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def count_kind(self, kind: str) -> int:
        return sum(1 for record in self.records if record.has(kind))
