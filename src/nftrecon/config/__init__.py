"""Application configuration helpers."""

from __future__ import annotations

from .contract import ContractConfig, get_art_contract_config, get_contract_config
from .env import env_or_default, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .reconcile import ReconcileConfig
from .storage import StorageConfig, get_storage_config
from .subgraph import SubgraphConfig, SubgraphEndpoint, get_subgraph_config

__all__ = [
    "ConfigurationError",
    "ContractConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ReconcileConfig",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SubgraphConfig",
    "SubgraphEndpoint",
    "configure_logging",
    "env_or_default",
    "get_art_contract_config",
    "get_contract_config",
    "get_storage_config",
    "get_subgraph_config",
    "require_env_vars",
]
