"""Domain model for NFT metadata reconciliation."""

from __future__ import annotations

from .enums import MISSING_PREFIX, DifferenceKind, SourceLabel, missing_in
from .nft import Collection, Comparable, ContractMetadata, Token, TokenMetadataId
from .report import DifferenceRecord, DifferenceReport

__all__ = [
    "MISSING_PREFIX",
    "Collection",
    "Comparable",
    "ContractMetadata",
    "DifferenceKind",
    "DifferenceRecord",
    "DifferenceReport",
    "SourceLabel",
    "Token",
    "TokenMetadataId",
    "missing_in",
]
