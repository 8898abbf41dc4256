"""Contract ABIs for the functions the adapter calls."""

from __future__ import annotations

from typing import Any, Final

METADATA_ABI: Final[list[dict[str, Any]]] = [
    {
        "name": "getMetadata",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "_id", "type": "uint256"}],
        "outputs": [
            {
                "name": "",
                "type": "tuple",
                "components": [
                    {"name": "name", "type": "string"},
                    {"name": "artistName", "type": "string"},
                    {"name": "editions", "type": "uint256"},
                    {"name": "identifier", "type": "uint256"},
                ],
            }
        ],
    }
]

ART_NFT_ABI: Final[list[dict[str, Any]]] = [
    {
        "name": "totalSupply",
        "type": "function",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "name": "batchGetMetadata",
        "type": "function",
        "stateMutability": "view",
        "inputs": [{"name": "_tokenIds", "type": "uint256[]"}],
        "outputs": [{"name": "", "type": "uint256[]"}],
    },
]
