"""Run defaults for reconciliation passes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

DEFAULT_PAGE_SIZE = 1000
DEFAULT_MAX_RECORDS = 50_000
DEFAULT_ORDER_BY = "identifier"
DEFAULT_PAGE_DELAY_SECONDS = 0.0
DEFAULT_CONTRACT_BATCH_SIZE = 10
DEFAULT_CONTRACT_DELAY_SECONDS = 2.0
DEFAULT_METADATA_ID_BATCH_SIZE = 1000

type OrderDirection = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class ReconcileConfig:
    page_size: int = DEFAULT_PAGE_SIZE
    max_records: int = DEFAULT_MAX_RECORDS
    order_by: str = DEFAULT_ORDER_BY
    order_direction: OrderDirection = "asc"
    page_delay_seconds: float = DEFAULT_PAGE_DELAY_SECONDS
    contract_batch_size: int = DEFAULT_CONTRACT_BATCH_SIZE
    contract_delay_seconds: float = DEFAULT_CONTRACT_DELAY_SECONDS
    metadata_id_batch_size: int = DEFAULT_METADATA_ID_BATCH_SIZE
    presort: bool = False

    def __post_init__(self) -> None:
        for name in ("page_size", "max_records", "contract_batch_size", "metadata_id_batch_size"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.page_delay_seconds < 0 or self.contract_delay_seconds < 0:
            raise ValueError("Delays must be non-negative")
