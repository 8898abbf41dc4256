"""Subgraph endpoint configuration."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import RateLimit, ResilienceConfig

SUBGRAPH_TIMEOUT_SECONDS = 60.0


@dataclass(frozen=True, slots=True)
class SubgraphEndpoint:
    name: str
    url: str
    resilience: ResilienceConfig


@dataclass(frozen=True, slots=True)
class SubgraphConfig:
    """The two subgraphs being reconciled: the primary one and production."""

    primary: SubgraphEndpoint
    production: SubgraphEndpoint


def _endpoint(name: str, url: str) -> SubgraphEndpoint:
    return SubgraphEndpoint(
        name=name,
        url=url,
        resilience=ResilienceConfig(
            name=f"subgraph:{name}",
            timeout_seconds=SUBGRAPH_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=5, per_seconds=1.0),
            default_headers={"Content-Type": "application/json"},
        ),
    )


def get_subgraph_config() -> SubgraphConfig:
    values = require_env_vars(("SUBGRAPH_URL_1", "PROD_SUBGRAPH_URL"))
    return SubgraphConfig(
        primary=_endpoint("subgraph1", values["SUBGRAPH_URL_1"]),
        production=_endpoint("prod", values["PROD_SUBGRAPH_URL"]),
    )
