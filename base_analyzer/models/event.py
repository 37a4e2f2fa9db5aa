from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

TokenStandard = Literal["erc20", "erc721"]


class TokenTransfer(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["token_transfer"] = "token_transfer"
    token_address: str
    from_address: str
    to_address: str
    raw_amount: int
    decimals: int
    normalized_amount: Decimal
    standard: TokenStandard = "erc20"
    token_id: int | None = None
    symbol: str | None = None


class LiquidityEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["liquidity"] = "liquidity"
    pool_address: str
    action: Literal["add", "remove"]
    provider: str
    amount0: int
    amount1: int
    pool_version: Literal["v2", "v3"]


class YieldEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["yield"] = "yield"
    contract_address: str
    action: Literal["stake", "unstake", "claim"]
    account: str
    raw_amount: int


class Unrecognized(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["unrecognized"] = "unrecognized"
    log_address: str
    signature: str | None = None
    event_name: str | None = None
    reason: str


DecodedEvent = Annotated[
    Union[TokenTransfer, LiquidityEvent, YieldEvent, Unrecognized],
    Field(discriminator="kind"),
]
