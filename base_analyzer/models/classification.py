from __future__ import annotations

from typing import Literal, Sequence

from pydantic import BaseModel, ConfigDict

from base_analyzer.models.event import (
    DecodedEvent,
    LiquidityEvent,
    TokenTransfer,
    Unrecognized,
    YieldEvent,
)

Category = Literal[
    "transfer",
    "swap",
    "defi_swap",
    "liquidity_add",
    "liquidity_remove",
    "yield_action",
    "nft_trade",
    "bridge_deposit",
    "bridge_withdrawal",
    "bridge_prove",
    "bridge_finalize",
    "contract_deployment",
    "contract_interaction",
    "unknown",
]

BRIDGE_CATEGORIES: frozenset[str] = frozenset(
    {"bridge_deposit", "bridge_withdrawal", "bridge_prove", "bridge_finalize"}
)


class TransactionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    from_address: str = ""
    to_address: str | None = None
    value: int = 0
    events: tuple[DecodedEvent, ...] = ()
    log_count: int = 0
    log_markers: tuple[str, ...] = ()

    @classmethod
    def from_decoded(
        cls,
        from_address: str,
        to_address: str | None,
        value: int,
        decoded: Sequence[DecodedEvent],
    ) -> TransactionContext:
        """Build a context from the full decoder output (one entry per log).

        Unrecognized entries are kept out of ``events`` but still count
        towards ``log_count`` and contribute a marker.
        """
        markers = []
        for event in decoded:
            if isinstance(event, Unrecognized):
                marker = event.event_name or event.signature
                if marker:
                    markers.append(marker)
            else:
                markers.append(_EVENT_MARKERS[type(event)])
        return cls(
            from_address=(from_address or "").lower(),
            to_address=to_address.lower() if to_address else None,
            value=value,
            events=tuple(e for e in decoded if not isinstance(e, Unrecognized)),
            log_count=len(decoded),
            log_markers=tuple(markers),
        )

    @property
    def transfers(self) -> list[TokenTransfer]:
        return [e for e in self.events if isinstance(e, TokenTransfer)]

    @property
    def liquidity_events(self) -> list[LiquidityEvent]:
        return [e for e in self.events if isinstance(e, LiquidityEvent)]

    @property
    def yield_events(self) -> list[YieldEvent]:
        return [e for e in self.events if isinstance(e, YieldEvent)]


_EVENT_MARKERS = {
    TokenTransfer: "Transfer",
    LiquidityEvent: "Liquidity",
    YieldEvent: "Yield",
}


class ClassificationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    category: Category
    confidence_factors: tuple[str, ...] = ()
    protocol: str | None = None

    @property
    def is_bridge(self) -> bool:
        return self.category in BRIDGE_CATEGORIES
