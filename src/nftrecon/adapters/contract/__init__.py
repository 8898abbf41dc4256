"""Public interface for the on-chain contract adapter."""

from __future__ import annotations

from .client import ContractMetadataClient, TokenMetadataIdClient, build_contract
from .translator import contract_metadata_to_payload, parse_contract_metadata

__all__ = [
    "ContractMetadataClient",
    "TokenMetadataIdClient",
    "build_contract",
    "contract_metadata_to_payload",
    "parse_contract_metadata",
]
