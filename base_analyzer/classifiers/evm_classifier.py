"""
EVM transaction classifier.

Assigns exactly one category to a transaction from its destination address,
native value and decoded logs. Rules are evaluated in order and the first
match wins, so a contract creation is always a deployment and a call to a
known bridge is always a bridge action regardless of the events it emitted.
"""

from __future__ import annotations

import logging
from typing import Callable

from base_analyzer.decoding import signatures as sig
from base_analyzer.models.classification import ClassificationResult, TransactionContext
from base_analyzer.registry.address_registry import (
    DEX_CATEGORIES,
    AddressEntry,
    AddressRegistry,
    load_registry,
)

logger = logging.getLogger(__name__)

PROVEN_MARKER = "proven"

_BRIDGE_ROLE_CATEGORIES = {
    "deposit": "bridge_deposit",
    "withdrawal": "bridge_withdrawal",
}

Rule = Callable[[TransactionContext, AddressEntry | None], ClassificationResult | None]


def _result(category: str, *factors: str, entry: AddressEntry | None = None) -> ClassificationResult:
    return ClassificationResult(
        category=category,
        confidence_factors=factors,
        protocol=entry.label if entry else None,
    )


def _has_proven_marker(ctx: TransactionContext) -> bool:
    for marker in ctx.log_markers:
        lowered = marker.lower()
        if lowered == sig.WITHDRAWAL_PROVEN or PROVEN_MARKER in lowered:
            return True
    return False


# --- Rules, in evaluation order ---


def _contract_deployment(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if ctx.to_address is None:
        return _result("contract_deployment", "contract_creation")
    return None


def _bridge(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if entry is None or entry.category != "bridge":
        return None

    if entry.role == "portal":
        if _has_proven_marker(ctx):
            return _result("bridge_prove", "bridge_contract", "bridge_role:portal", "proven_marker", entry=entry)
        return _result("bridge_finalize", "bridge_contract", "bridge_role:portal", entry=entry)

    role = entry.role if entry.role in _BRIDGE_ROLE_CATEGORIES else "deposit"
    return _result(_BRIDGE_ROLE_CATEGORIES[role], "bridge_contract", f"bridge_role:{role}", entry=entry)


def _dex(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if entry is None or entry.category not in DEX_CATEGORIES:
        return None

    distinct_tokens = {t.token_address for t in ctx.transfers}
    if len(distinct_tokens) > 1:
        return _result("swap", "dex_contract", f"distinct_tokens:{len(distinct_tokens)}", entry=entry)

    liquidity = ctx.liquidity_events
    if liquidity:
        action = liquidity[0].action
        return _result(f"liquidity_{action}", "dex_contract", f"liquidity_event:{action}", entry=entry)

    return None


def _nft_trade(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if entry is None or entry.category != "marketplace":
        return None
    if any(t.standard == "erc721" for t in ctx.transfers):
        return _result("nft_trade", "marketplace_contract", "erc721_transfer", entry=entry)
    return None


def _yield_action(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if entry is not None and entry.category == "lending":
        return _result("yield_action", "lending_contract", entry=entry)
    events = ctx.yield_events
    if events:
        return _result("yield_action", f"yield_event:{events[0].action}", entry=entry)
    return None


def _native_transfer(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if ctx.value > 0 and not ctx.events:
        return _result("transfer", "native_value", "no_decoded_events", entry=entry)
    return None


def _token_transfer(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if len(ctx.transfers) != 1:
        return None
    # a single transfer through a known protocol contract is not a plain send
    if entry is not None and entry.category != "token":
        return None
    return _result("transfer", "single_token_transfer", entry=entry)


def _generic_swap(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    count = len(ctx.transfers)
    if count > 1:
        return _result("defi_swap", f"multiple_token_transfers:{count}", entry=entry)
    return None


def _contract_interaction(ctx: TransactionContext, entry: AddressEntry | None) -> ClassificationResult | None:
    if ctx.log_count > 0:
        return _result("contract_interaction", f"residual_logs:{ctx.log_count}", entry=entry)
    return None


RULES: tuple[Rule, ...] = (
    _contract_deployment,
    _bridge,
    _dex,
    _nft_trade,
    _yield_action,
    _native_transfer,
    _token_transfer,
    _generic_swap,
    _contract_interaction,
)


def classify(ctx: TransactionContext, registry: AddressRegistry | None = None) -> ClassificationResult:
    if registry is None:
        registry = load_registry()

    entry = registry.lookup(ctx.to_address)
    for rule in RULES:
        result = rule(ctx, entry)
        if result is not None:
            logger.debug("Classified %s -> %s via %s", ctx.to_address, result.category, rule.__name__)
            return result

    return _result("unknown", "no_rule_matched", entry=entry)
