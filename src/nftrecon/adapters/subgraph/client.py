"""Paginated GraphQL client for token subgraphs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from nftrecon.adapters.http_resilience import ResilienceConfig, ResilientClient
from nftrecon.config.reconcile import (
    DEFAULT_MAX_RECORDS,
    DEFAULT_ORDER_BY,
    DEFAULT_PAGE_DELAY_SECONDS,
    DEFAULT_PAGE_SIZE,
    OrderDirection,
)
from nftrecon.domain.ports.fetching import SubgraphFetchError

from .schema import TOKENS_QUERY, TokenPayload, TokensResponse
from .translator import parse_token

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from nftrecon.config.subgraph import SubgraphEndpoint
    from nftrecon.domain.model import Token

log = getLogger(__name__)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


@dataclass(slots=True)
class SubgraphFetcher:
    """Fetch every token of one subgraph with ``first``/``skip`` pagination.

    Pages are requested one at a time. Paging stops on a page shorter than
    ``page_size`` or once ``max_records`` tokens were collected; the result
    is truncated to the cap.
    """

    endpoint: SubgraphEndpoint
    page_size: int = DEFAULT_PAGE_SIZE
    max_records: int = DEFAULT_MAX_RECORDS
    order_by: str = DEFAULT_ORDER_BY
    order_direction: OrderDirection = "asc"
    delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep)

    def __call__(self) -> list[Token]:
        return asyncio.run(self._fetch_tokens_async())

    async def _fetch_tokens_async(self) -> list[Token]:
        tokens: list[Token] = []
        skip = 0

        log.info("Starting data fetch from %s (%s)", self.endpoint.name, self.endpoint.url)
        async with self.client_factory(self.endpoint.resilience) as client:
            while len(tokens) < self.max_records:
                first = min(self.page_size, self.max_records - len(tokens))
                log.info("Fetching batch: skip=%s, first=%s", skip, first)
                batch = await self._request_page(client=client, first=first, skip=skip)
                tokens.extend(parse_token(payload) for payload in batch)
                skip += len(batch)
                log.info("Fetched %d tokens. Total: %d", len(batch), len(tokens))

                if len(batch) < first:
                    break
                if self.delay_seconds > 0 and len(tokens) < self.max_records:
                    await self.sleep(self.delay_seconds)

        return tokens[: self.max_records]

    async def _request_page(
        self,
        *,
        client: ResilientClient,
        first: int,
        skip: int,
    ) -> list[TokenPayload]:
        variables: dict[str, object] = {
            "first": first,
            "skip": skip,
            "orderBy": self.order_by,
            "orderDirection": self.order_direction,
        }
        try:
            response = await client.post(
                self.endpoint.url, json={"query": TOKENS_QUERY, "variables": variables}
            )
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            log.error("Subgraph %s request failed at skip=%s: %s", self.endpoint.name, skip, exc)
            raise SubgraphFetchError(
                f"Request to subgraph {self.endpoint.name} failed: {exc}"
            ) from exc

        try:
            parsed = TokensResponse.model_validate(payload)
        except ValidationError as exc:
            raise SubgraphFetchError(
                f"Unexpected payload from subgraph {self.endpoint.name}"
            ) from exc

        if parsed.errors:
            messages = "; ".join(error.message for error in parsed.errors)
            log.error("Subgraph %s returned errors: %s", self.endpoint.name, messages)
            raise SubgraphFetchError(f"Subgraph {self.endpoint.name} returned errors: {messages}")
        if parsed.data is None:
            raise SubgraphFetchError(f"Subgraph {self.endpoint.name} returned no data")
        return parsed.data.tokens

