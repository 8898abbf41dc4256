"""Public interface for the subgraph adapter."""

from __future__ import annotations

from .client import SubgraphFetcher
from .schema import TOKENS_QUERY, TokenPayload, TokensResponse
from .translator import collection_to_payload, parse_token, token_to_payload

__all__ = [
    "TOKENS_QUERY",
    "SubgraphFetcher",
    "TokenPayload",
    "TokensResponse",
    "collection_to_payload",
    "parse_token",
    "token_to_payload",
]
