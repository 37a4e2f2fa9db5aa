from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from base_analyzer.models.classification import ClassificationResult
from base_analyzer.models.event import DecodedEvent
from base_analyzer.models.metrics import GasMetrics, OptimizationReport


class TransactionAnalysis(BaseModel):
    tx_hash: str
    status: str
    block_number: int | None = None
    block_time: datetime | None = None
    from_address: str
    to_address: str | None = None
    contract_address: str | None = None
    value: Decimal
    protocol: str | None = None
    classification: ClassificationResult
    events: list[DecodedEvent]
    gas: GasMetrics
    optimization: OptimizationReport
    estimated_bridge_minutes: int | None = None
    explorer_url: str | None = None


class BatchItem(BaseModel):
    tx_hash: str
    analysis: TransactionAnalysis | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.analysis is not None
