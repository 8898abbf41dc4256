"""Results directory configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

DEFAULT_RESULTS_DIRNAME: Final[str] = "results"
SNAPSHOT_SUFFIX: Final[str] = ".json"


@dataclass(frozen=True, slots=True)
class StorageConfig:
    results_dir: Path

    def resolve_results_dir(self) -> Path:
        return self.results_dir.expanduser().resolve()

    def ensure_results_dir(self) -> Path:
        results_dir = self.resolve_results_dir()
        results_dir.mkdir(parents=True, exist_ok=True)
        return results_dir

    def snapshot_path(self, name: str, *, ensure: bool = True) -> Path:
        base = self.ensure_results_dir() if ensure else self.resolve_results_dir()
        return base / f"{name}{SNAPSHOT_SUFFIX}"


def get_storage_config(results_dir: Path | None = None) -> StorageConfig:
    if results_dir is not None:
        return StorageConfig(results_dir=results_dir)
    env_dir = os.getenv("NFTRECON_RESULTS_DIR")
    data_dir = Path(env_dir) if env_dir else Path.cwd() / DEFAULT_RESULTS_DIRNAME
    return StorageConfig(results_dir=data_dir)
