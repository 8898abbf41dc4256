from __future__ import annotations

from typing import Any

import pytest
from web3.exceptions import ContractLogicError

from nftrecon.adapters.contract import (
    ContractMetadataClient,
    TokenMetadataIdClient,
    parse_contract_metadata,
)
from nftrecon.config.contract import (
    DEFAULT_CONTRACT_ADDRESS,
    ContractConfig,
    get_contract_config,
)
from nftrecon.domain.ports.fetching import ContractReadError


class _Call:
    def __init__(self, result: object) -> None:
        self._result = result

    def call(self) -> object:
        if isinstance(self._result, Exception):
            raise self._result
        return self._result


class _Functions:
    def __init__(self, results: dict[int, object]) -> None:
        self._results = results
        self.requested: list[int] = []

    def getMetadata(self, collection_id: int) -> _Call:  # noqa: N802
        self.requested.append(collection_id)
        return _Call(self._results[collection_id])

    def totalSupply(self) -> _Call:  # noqa: N802
        return _Call(3)

    def batchGetMetadata(self, token_ids: list[int]) -> _Call:  # noqa: N802
        return _Call([token_id + 100 for token_id in token_ids])


class _FakeContract:
    def __init__(self, results: dict[int, object] | None = None) -> None:
        self.functions = _Functions(results or {})


def _factory(contract: _FakeContract, built: list[list[dict[str, Any]]]) -> Any:
    def build(config: ContractConfig, abi: list[dict[str, Any]]) -> _FakeContract:
        built.append(abi)
        return contract

    return build


_CONFIG = ContractConfig(rpc_url="http://localhost:8545", address=DEFAULT_CONTRACT_ADDRESS)


def test_metadata_client_translates_the_metadata_tuple() -> None:
    contract = _FakeContract({7: ("Cat", "Bob", 4, 7)})
    built: list[list[dict[str, Any]]] = []
    client = ContractMetadataClient(config=_CONFIG, contract_factory=_factory(contract, built))

    metadata = client("7")
    client("7")

    assert metadata.collection_id == "7"
    assert metadata.name == "Cat"
    assert metadata.artist_name == "Bob"
    assert metadata.editions == 4
    assert metadata.identifier == 7
    assert contract.functions.requested == [7, 7]
    assert len(built) == 1
    assert built[0][0]["name"] == "getMetadata"


def test_metadata_client_wraps_contract_errors() -> None:
    contract = _FakeContract({1: ContractLogicError("execution reverted")})
    client = ContractMetadataClient(config=_CONFIG, contract_factory=_factory(contract, []))

    with pytest.raises(ContractReadError) as excinfo:
        client("1")

    assert excinfo.value.item_id == "1"


def test_metadata_client_rejects_non_numeric_ids() -> None:
    client = ContractMetadataClient(
        config=_CONFIG, contract_factory=_factory(_FakeContract(), [])
    )

    with pytest.raises(ContractReadError):
        client("abc")


def test_parse_contract_metadata_rejects_malformed_results() -> None:
    with pytest.raises(ContractReadError, match="Unexpected getMetadata result"):
        parse_contract_metadata("1", ("only", "three", 1))


def test_token_metadata_id_client_reads_supply_and_batches() -> None:
    client = TokenMetadataIdClient(
        config=_CONFIG, contract_factory=_factory(_FakeContract(), [])
    )

    assert client.total_supply() == 3
    assert client.batch_metadata_ids([0, 1]) == [100, 101]


def test_contract_config_falls_back_to_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RPC_PROVIDER_URL", "   ")

    config = get_contract_config()

    assert config.rpc_url == "https://sepolia.base.org"
    assert config.address == DEFAULT_CONTRACT_ADDRESS
