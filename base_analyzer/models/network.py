from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class BlockMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_number: int
    timestamp: datetime
    transaction_count: int
    unique_addresses: int
    gas_used: int
    gas_limit: int
    base_fee_per_gas: int
    average_gas_price: int
    total_value: Decimal  # ether


class NetworkStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    network: str
    expected_chain_id: int
    chain_id: int | None = None
    block_number: int | None = None
    gas_price_gwei: str | None = None
    is_healthy: bool
    error: str | None = None
