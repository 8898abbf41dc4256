"""Translate raw contract call results into domain entities."""

from __future__ import annotations

from collections.abc import Sequence

from nftrecon.domain.model import ContractMetadata
from nftrecon.domain.ports.fetching import ContractReadError


def parse_contract_metadata(collection_id: str, raw: object) -> ContractMetadata:
    """Build metadata from the ``(name, artistName, editions, identifier)`` tuple."""

    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence) or len(raw) != 4:
        raise ContractReadError(
            f"Unexpected getMetadata result for collection {collection_id}: {raw!r}",
            item_id=collection_id,
        )
    name, artist_name, editions, identifier = raw
    try:
        return ContractMetadata(
            collection_id=collection_id,
            name=str(name),
            artist_name=str(artist_name),
            editions=int(editions),
            identifier=int(identifier),
        )
    except (TypeError, ValueError) as exc:
        raise ContractReadError(
            f"Invalid getMetadata values for collection {collection_id}: {exc}",
            item_id=collection_id,
        ) from exc


def contract_metadata_to_payload(metadata: ContractMetadata) -> dict[str, object]:
    return {
        "id": metadata.collection_id,
        "name": metadata.name,
        "artistName": metadata.artist_name,
        "editions": metadata.editions,
        "identifier": str(metadata.identifier),
    }
