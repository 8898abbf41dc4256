"""Token and collection entities shared by every comparison mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable


@runtime_checkable
class Comparable(Protocol):
    """Anything carrying the three compared metadata fields."""

    @property
    def name(self) -> str: ...

    @property
    def artist_name(self) -> str: ...

    @property
    def editions(self) -> int: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class Token:
    """One NFT record as indexed by a subgraph.

    ``external_id`` is the cross-source identifier (the on-chain identifier),
    ``entity_id`` the subgraph's own entity id, kept only so snapshots
    round-trip.
    """

    external_id: str
    name: str
    artist_name: str
    editions: int
    entity_id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class Collection:
    """Tokens sharing an identical ``(name, artist_name)`` pair.

    ``collection_id`` is assigned from first-appearance order during grouping
    and is only comparable across sources whose inputs were ordered the same way.
    """

    collection_id: str
    name: str
    artist_name: str
    token_ids: tuple[str, ...] = field(default_factory=tuple)

    @property
    def editions(self) -> int:
        return len(self.token_ids)


@dataclass(frozen=True, slots=True, kw_only=True)
class ContractMetadata:
    """Result of the contract's ``getMetadata`` for one collection id."""

    collection_id: str
    name: str
    artist_name: str
    editions: int
    identifier: int


@dataclass(frozen=True, slots=True)
class TokenMetadataId:
    token_id: int
    metadata_id: int
