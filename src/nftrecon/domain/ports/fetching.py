"""Ports for fetching token and contract data from external sources."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from nftrecon.domain.model import ContractMetadata, Token


class FetchError(RuntimeError):
    """Base class for failures talking to an external data source."""


class SubgraphFetchError(FetchError):
    """Raised when a paginated subgraph query fails; aborts the run."""


class ContractReadError(FetchError):
    """Raised when a single contract read fails; callers may skip the item."""

    def __init__(self, message: str, *, item_id: str | None = None) -> None:
        super().__init__(message)
        self.item_id = item_id


@runtime_checkable
class TokenFetcher(Protocol):
    """Callable port returning every token of one subgraph, in query order."""

    def __call__(self) -> Sequence[Token]: ...


@runtime_checkable
class ContractMetadataReader(Protocol):
    """Callable port reading ``getMetadata`` for one collection id."""

    def __call__(self, collection_id: str) -> ContractMetadata: ...


@runtime_checkable
class TokenMetadataIdReader(Protocol):
    """Port for the token id to metadata id mapping exposed by the art contract."""

    def total_supply(self) -> int: ...

    def batch_metadata_ids(self, token_ids: Sequence[int]) -> Sequence[int]: ...


__all__ = [
    "ContractMetadataReader",
    "ContractReadError",
    "FetchError",
    "SubgraphFetchError",
    "TokenFetcher",
    "TokenMetadataIdReader",
]
