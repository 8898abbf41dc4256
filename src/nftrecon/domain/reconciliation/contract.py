"""Sequential reads against the on-chain contract.

Reads happen one id at a time. A failed read is logged and skipped, so the
returned metadata may be a strict subset of the requested ids; the keyed
differ then reports the gaps as missing on the contract side.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from nftrecon.domain.model import ContractMetadata, TokenMetadataId
from nftrecon.domain.ports.fetching import ContractReadError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from nftrecon.domain.ports.fetching import ContractMetadataReader, TokenMetadataIdReader

log = getLogger(__name__)

DEFAULT_CONTRACT_BATCH_SIZE = 10
DEFAULT_CONTRACT_DELAY_SECONDS = 2.0
DEFAULT_METADATA_ID_BATCH_SIZE = 1000


@dataclass(slots=True)
class ContractCollectionResult:
    """Metadata read from the contract, keyed by collection id."""

    metadata: dict[str, ContractMetadata] = field(default_factory=dict[str, ContractMetadata])
    failed_ids: list[str] = field(default_factory=list[str])

    @property
    def requested(self) -> int:
        return len(self.metadata) + len(self.failed_ids)


def _batch_count(total: int, size: int) -> int:
    if size <= 0:
        raise ValueError("Batch size must be positive")
    return -(-total // size)


def _batches[T](items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


def collect_contract_metadata(
    collection_ids: Sequence[str],
    reader: ContractMetadataReader,
    *,
    batch_size: int = DEFAULT_CONTRACT_BATCH_SIZE,
    delay_seconds: float = DEFAULT_CONTRACT_DELAY_SECONDS,
    sleep: Callable[[float], None] = time.sleep,
) -> ContractCollectionResult:
    """Read ``getMetadata`` for each id, pausing ``delay_seconds`` between batches."""

    result = ContractCollectionResult()
    total_batches = _batch_count(len(collection_ids), batch_size)

    for number, batch in enumerate(_batches(collection_ids, batch_size), start=1):
        log.info("Processing contract batch %s/%s", number, total_batches)
        for collection_id in batch:
            try:
                metadata = reader(collection_id)
            except ContractReadError as exc:
                log.warning("Contract read failed for collection %s: %s", collection_id, exc)
                result.failed_ids.append(collection_id)
                continue
            result.metadata[collection_id] = metadata
            log.debug("Fetched contract metadata for collection %s", collection_id)

        if number < total_batches and delay_seconds > 0:
            sleep(delay_seconds)

    return result


def collect_token_metadata_ids(
    reader: TokenMetadataIdReader,
    *,
    batch_size: int = DEFAULT_METADATA_ID_BATCH_SIZE,
) -> list[TokenMetadataId]:
    """Map every token id below ``totalSupply`` to its metadata id.

    Unlike ``collect_contract_metadata`` a failing batch is not skipped: a
    partial mapping would silently drop tokens.
    """

    total_supply = reader.total_supply()
    log.info("Total supply: %s", total_supply)
    token_ids = range(total_supply)
    total_batches = _batch_count(total_supply, batch_size)

    entries: list[TokenMetadataId] = []
    for number, batch in enumerate(_batches(token_ids, batch_size), start=1):
        log.info(
            "Processing batch %s/%s (ids %s to %s)", number, total_batches, batch[0], batch[-1]
        )
        metadata_ids = reader.batch_metadata_ids(list(batch))
        if len(metadata_ids) != len(batch):
            raise ContractReadError(
                f"batchGetMetadata returned {len(metadata_ids)} ids for {len(batch)} tokens"
            )
        entries.extend(
            TokenMetadataId(token_id=token_id, metadata_id=int(metadata_id))
            for token_id, metadata_id in zip(batch, metadata_ids, strict=True)
        )
    return entries
