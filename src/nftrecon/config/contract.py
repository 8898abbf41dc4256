"""On-chain contract configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_or_default

DEFAULT_RPC_PROVIDER_URL = "https://sepolia.base.org"
DEFAULT_CONTRACT_ADDRESS = "0xfE565a266760D5b23FE241D1eb6F52eeba8882E7"

DEFAULT_ART_RPC_URL = "https://polygon-rpc.com"
DEFAULT_ART_CONTRACT_ADDRESS = "0xA4E3513c98b30d4D7cc578d2C328Bd550725D1D0"

DEFAULT_RPC_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class ContractConfig:
    """RPC endpoint and address of a contract to read from."""

    rpc_url: str
    address: str
    timeout_seconds: float = DEFAULT_RPC_TIMEOUT_SECONDS


def get_contract_config() -> ContractConfig:
    """Metadata contract queried for per-collection ``getMetadata``."""

    return ContractConfig(
        rpc_url=env_or_default("RPC_PROVIDER_URL", DEFAULT_RPC_PROVIDER_URL),
        address=env_or_default("CONTRACT_ADDRESS", DEFAULT_CONTRACT_ADDRESS),
    )


def get_art_contract_config() -> ContractConfig:
    """Art NFT contract queried for the token id to metadata id mapping."""

    return ContractConfig(
        rpc_url=env_or_default("ART_RPC_URL", DEFAULT_ART_RPC_URL),
        address=env_or_default("ART_CONTRACT_ADDRESS", DEFAULT_ART_CONTRACT_ADDRESS),
    )
