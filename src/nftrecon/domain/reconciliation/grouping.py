"""Group flat token lists into collections.

Two tokens share a collection iff their ``(name, artist_name)`` pair is
exactly equal. Collection ids are handed out in order of first appearance,
starting at ``"1"``; they say nothing about the collection itself and two
independently grouped lists only agree on ids when their inputs were ordered
the same way (see ``sort_tokens_by_external_id``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from nftrecon.domain.model import Collection

if TYPE_CHECKING:
    from collections.abc import Iterable

    from nftrecon.domain.model import Token

type CollectionKey = tuple[str, str]


@dataclass(slots=True)
class _PendingCollection:
    name: str
    artist_name: str
    token_ids: list[str] = field(default_factory=list[str])


def collection_key(token: Token) -> CollectionKey:
    return (token.name, token.artist_name)


def group_into_collections(tokens: Iterable[Token]) -> list[Collection]:
    """Return one collection per distinct ``(name, artist_name)``, in first-seen order."""

    pending: dict[CollectionKey, _PendingCollection] = {}
    for token in tokens:
        key = collection_key(token)
        entry = pending.get(key)
        if entry is None:
            entry = _PendingCollection(name=token.name, artist_name=token.artist_name)
            pending[key] = entry
        entry.token_ids.append(token.external_id)

    return [
        Collection(
            collection_id=str(position),
            name=entry.name,
            artist_name=entry.artist_name,
            token_ids=tuple(entry.token_ids),
        )
        for position, entry in enumerate(pending.values(), start=1)
    ]


def _external_id_sort_key(token: Token) -> tuple[int, int, str]:
    value = token.external_id.strip()
    if value.isascii() and value.isdigit():
        return (0, int(value), "")
    return (1, 0, token.external_id)


def sort_tokens_by_external_id(tokens: Iterable[Token]) -> list[Token]:
    """Order tokens numerically by external id; non-numeric ids sort last.

    Grouping two sources from identically sorted inputs is the only way their
    sequential collection ids line up.
    """

    return sorted(tokens, key=_external_id_sort_key)
