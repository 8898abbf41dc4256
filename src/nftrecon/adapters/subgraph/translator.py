"""Translate subgraph token payloads to and from domain tokens."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

from nftrecon.domain.model import Token

from .schema import TokenPayload

if TYPE_CHECKING:
    from nftrecon.domain.model import Collection

type TokenPayloadInput = TokenPayload | Mapping[str, object]


def parse_token(payload: TokenPayloadInput) -> Token:
    model = (
        payload if isinstance(payload, TokenPayload) else TokenPayload.model_validate(dict(payload))
    )
    return Token(
        external_id=model.identifier,
        name=model.name,
        artist_name=model.artist_name,
        editions=model.editions,
        entity_id=model.id,
    )


def token_to_payload(token: Token) -> dict[str, object]:
    payload: dict[str, object] = {}
    if token.entity_id is not None:
        payload["id"] = token.entity_id
    payload.update(
        {
            "identifier": token.external_id,
            "name": token.name,
            "artistName": token.artist_name,
            "editions": token.editions,
        }
    )
    return payload


def collection_to_payload(collection: Collection) -> dict[str, object]:
    return {
        "id": collection.collection_id,
        "name": collection.name,
        "artistName": collection.artist_name,
        "editions": collection.editions,
        "tokenIds": list(collection.token_ids),
    }
