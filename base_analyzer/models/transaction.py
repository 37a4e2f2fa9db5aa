from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from base_analyzer.models.log import RawLog


class FetchedTransaction(BaseModel):
    model_config = ConfigDict(frozen=True)

    tx_hash: str
    from_address: str
    to_address: str | None = None
    value: int = 0
    gas_price: int = 0
    gas_limit: int | None = None
    input: str = "0x"
    block_number: int | None = None


class FetchedReceipt(BaseModel):
    model_config = ConfigDict(frozen=True)

    tx_hash: str
    status: Literal["confirmed", "failed"]
    gas_used: int
    effective_gas_price: int | None = None
    block_number: int | None = None
    contract_address: str | None = None
    logs: tuple[RawLog, ...] = ()


class FetchedBlock(BaseModel):
    model_config = ConfigDict(frozen=True)

    number: int
    timestamp: datetime
    gas_used: int = 0
    gas_limit: int = 0
    base_fee_per_gas: int | None = None
    transactions: tuple[FetchedTransaction, ...] = ()


class TransactionBundle(BaseModel):
    """Transaction, receipt and (when available) block time for one hash."""

    model_config = ConfigDict(frozen=True)

    transaction: FetchedTransaction
    receipt: FetchedReceipt
    block_time: datetime | None = None

    @property
    def tx_hash(self) -> str:
        return self.transaction.tx_hash

    @property
    def gas_price(self) -> int:
        if self.receipt.effective_gas_price is not None:
            return self.receipt.effective_gas_price
        return self.transaction.gas_price
