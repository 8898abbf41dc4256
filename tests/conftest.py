from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from nftrecon.adapters.snapshots import JsonSnapshotRepository
from nftrecon.config.storage import StorageConfig
from nftrecon.domain.model import Token

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "SUBGRAPH_URL_1",
        "PROD_SUBGRAPH_URL",
        "RPC_PROVIDER_URL",
        "CONTRACT_ADDRESS",
        "ART_RPC_URL",
        "ART_CONTRACT_ADDRESS",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("NFTRECON_RESULTS_DIR", str(tmp_path / "results"))


@pytest.fixture
def make_token() -> Callable[..., Token]:
    def factory(
        external_id: str,
        name: str = "Cat",
        artist_name: str = "Bob",
        editions: int = 1,
    ) -> Token:
        numeric = external_id.isascii() and external_id.isdigit()
        return Token(
            external_id=external_id,
            name=name,
            artist_name=artist_name,
            editions=editions,
            entity_id=f"0x{int(external_id):x}" if numeric else None,
        )

    return factory


@pytest.fixture
def results_dir(tmp_path: Path) -> Path:
    return tmp_path / "results"


@pytest.fixture
def snapshot_repository(results_dir: Path) -> JsonSnapshotRepository:
    return JsonSnapshotRepository(StorageConfig(results_dir=results_dir))
