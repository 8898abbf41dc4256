"""JSON file snapshots of tokens, collections and difference reports."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING, Self

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator

from nftrecon.adapters.contract.translator import contract_metadata_to_payload
from nftrecon.adapters.subgraph.schema import TokenPayload
from nftrecon.adapters.subgraph.translator import (
    collection_to_payload,
    parse_token,
    token_to_payload,
)
from nftrecon.domain.model import Collection, ContractMetadata, Token
from nftrecon.domain.ports.persistence import SnapshotFormatError

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence
    from pathlib import Path

    from nftrecon.config.storage import StorageConfig
    from nftrecon.domain.model import (
        Comparable,
        DifferenceRecord,
        DifferenceReport,
        TokenMetadataId,
    )
    from nftrecon.domain.ports.persistence import Snapshot

log = getLogger(__name__)


class CollectionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    artist_name: str = Field(alias="artistName")
    editions: int
    token_ids: list[str] = Field(alias="tokenIds")

    @model_validator(mode="after")
    def _editions_match_members(self) -> Self:
        if self.editions != len(self.token_ids):
            raise ValueError(
                f"Collection {self.id} declares {self.editions} editions "
                f"but lists {len(self.token_ids)} tokens"
            )
        return self


_TOKENS_ADAPTER = TypeAdapter(list[TokenPayload])
_COLLECTIONS_ADAPTER = TypeAdapter(list[CollectionPayload])


def entity_to_payload(entity: Comparable) -> dict[str, object]:
    if isinstance(entity, Token):
        return token_to_payload(entity)
    if isinstance(entity, Collection):
        return collection_to_payload(entity)
    if isinstance(entity, ContractMetadata):
        return contract_metadata_to_payload(entity)
    return {
        "name": entity.name,
        "artistName": entity.artist_name,
        "editions": entity.editions,
    }


def record_to_payload(
    record: DifferenceRecord, *, left_label: str, right_label: str
) -> dict[str, object]:
    return {
        "id": record.id,
        "differences": [str(kind) for kind in record.kinds],
        left_label: entity_to_payload(record.left) if record.left is not None else None,
        right_label: entity_to_payload(record.right) if record.right is not None else None,
    }


def report_to_payload(report: DifferenceReport) -> list[dict[str, object]]:
    return [
        record_to_payload(record, left_label=report.left_label, right_label=report.right_label)
        for record in report
    ]


class JsonSnapshotRepository:
    """Stores each snapshot as a pretty-printed JSON file in the results directory."""

    def __init__(self, storage: StorageConfig) -> None:
        self._storage = storage

    def path_for(self, snapshot: Snapshot) -> Path:
        return self._storage.snapshot_path(str(snapshot), ensure=False)

    def exists(self, snapshot: Snapshot) -> bool:
        return self.path_for(snapshot).is_file()

    def load_tokens(self, snapshot: Snapshot) -> list[Token]:
        payloads = self._load(snapshot, _TOKENS_ADAPTER)
        return [parse_token(payload) for payload in payloads]

    def save_tokens(self, snapshot: Snapshot, tokens: Sequence[Token]) -> None:
        self._write(snapshot, [token_to_payload(token) for token in tokens])

    def load_collections(self, snapshot: Snapshot) -> list[Collection]:
        payloads = self._load(snapshot, _COLLECTIONS_ADAPTER)
        return [
            Collection(
                collection_id=payload.id,
                name=payload.name,
                artist_name=payload.artist_name,
                token_ids=tuple(payload.token_ids),
            )
            for payload in payloads
        ]

    def save_collections(self, snapshot: Snapshot, collections: Sequence[Collection]) -> None:
        self._write(snapshot, [collection_to_payload(collection) for collection in collections])

    def save_report(self, snapshot: Snapshot, report: DifferenceReport) -> None:
        self._write(snapshot, report_to_payload(report))

    def save_contract_metadata(
        self, snapshot: Snapshot, metadata: Mapping[str, ContractMetadata]
    ) -> None:
        self._write(
            snapshot,
            {key: contract_metadata_to_payload(entry) for key, entry in metadata.items()},
        )

    def save_contract_collections(
        self, snapshot: Snapshot, metadata: Sequence[ContractMetadata]
    ) -> None:
        self._write(snapshot, [contract_metadata_to_payload(entry) for entry in metadata])

    def save_token_metadata_ids(
        self, snapshot: Snapshot, entries: Sequence[TokenMetadataId]
    ) -> None:
        self._write(
            snapshot,
            [{"tokenId": entry.token_id, "metadataId": entry.metadata_id} for entry in entries],
        )

    def _load[T](self, snapshot: Snapshot, adapter: TypeAdapter[list[T]]) -> list[T]:
        path = self.path_for(snapshot)
        log.info("Loading data from %s", path)
        try:
            return adapter.validate_json(path.read_bytes())
        except ValidationError as exc:
            raise SnapshotFormatError(f"Snapshot {path} is malformed: {exc}") from exc

    def _write(self, snapshot: Snapshot, payload: object) -> None:
        path = self._storage.snapshot_path(str(snapshot))
        partial = path.with_name(f"{path.name}.partial")
        try:
            partial.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            partial.replace(path)
        finally:
            partial.unlink(missing_ok=True)
        log.info("Data saved to %s", path)

