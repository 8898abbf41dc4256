"""web3 readers for the metadata and art NFT contracts."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Any

from requests import RequestException
from web3 import Web3
from web3.exceptions import Web3Exception

from nftrecon.config.contract import ContractConfig, get_art_contract_config, get_contract_config
from nftrecon.domain.ports.fetching import ContractReadError

from .abi import ART_NFT_ABI, METADATA_ABI
from .translator import parse_contract_metadata

if TYPE_CHECKING:
    from web3.contract import Contract

    from nftrecon.domain.model import ContractMetadata

log = getLogger(__name__)

type ContractFactory = Callable[[ContractConfig, list[dict[str, Any]]], Contract]

_CALL_ERRORS: tuple[type[Exception], ...] = (Web3Exception, RequestException, ValueError)


def build_contract(config: ContractConfig, abi: list[dict[str, Any]]) -> Contract:
    w3 = Web3(
        Web3.HTTPProvider(config.rpc_url, request_kwargs={"timeout": config.timeout_seconds})
    )
    return w3.eth.contract(address=Web3.to_checksum_address(config.address), abi=abi)


@dataclass(slots=True)
class ContractMetadataClient:
    """Reads ``getMetadata(id)`` one collection at a time.

    Any RPC, decoding or value failure surfaces as ``ContractReadError`` so
    callers can skip the item and keep going.
    """

    config: ContractConfig = field(default_factory=get_contract_config)
    contract_factory: ContractFactory = field(default=build_contract)
    _contract: Contract | None = field(default=None, init=False, repr=False)

    def __call__(self, collection_id: str) -> ContractMetadata:
        try:
            raw = self._get_contract().functions.getMetadata(int(collection_id)).call()
        except _CALL_ERRORS as exc:
            raise ContractReadError(
                f"getMetadata({collection_id}) failed: {exc}", item_id=collection_id
            ) from exc
        return parse_contract_metadata(collection_id, raw)

    def _get_contract(self) -> Contract:
        if self._contract is None:
            log.info("Connecting to contract %s via %s", self.config.address, self.config.rpc_url)
            self._contract = self.contract_factory(self.config, METADATA_ABI)
        return self._contract


@dataclass(slots=True)
class TokenMetadataIdClient:
    """Reads ``totalSupply`` and ``batchGetMetadata`` from the art NFT contract."""

    config: ContractConfig = field(default_factory=get_art_contract_config)
    contract_factory: ContractFactory = field(default=build_contract)
    _contract: Contract | None = field(default=None, init=False, repr=False)

    def total_supply(self) -> int:
        try:
            return int(self._get_contract().functions.totalSupply().call())
        except _CALL_ERRORS as exc:
            raise ContractReadError(f"totalSupply() failed: {exc}") from exc

    def batch_metadata_ids(self, token_ids: Sequence[int]) -> list[int]:
        try:
            raw = self._get_contract().functions.batchGetMetadata(list(token_ids)).call()
        except _CALL_ERRORS as exc:
            raise ContractReadError(
                f"batchGetMetadata for {len(token_ids)} tokens failed: {exc}"
            ) from exc
        return [int(value) for value in raw]

    def _get_contract(self) -> Contract:
        if self._contract is None:
            self._contract = self.contract_factory(self.config, ART_NFT_ABI)
        return self._contract
