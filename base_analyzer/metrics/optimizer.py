"""
Gas optimization suggestions for a single Base transaction.

Savings are estimates in ether against a 0.1 gwei reference price, which is
typical for Base L2 execution gas.
"""

from __future__ import annotations

from decimal import Decimal

from base_analyzer.metrics.gas import gas_cost
from base_analyzer.metrics.units import ETHER_DECIMALS, format_gwei, scale_amount
from base_analyzer.models.metrics import OptimizationReport, OptimizationSuggestion

REFERENCE_GAS_PRICE_WEI = 100_000_000  # 0.1 gwei
OPTIMAL_USAGE_THRESHOLD = 0.7
BATCHING_MIN_TRANSFERS = 4
BASE_TX_GAS = 21_000
MAX_SAVINGS_SHARE = Decimal("0.9")

BASE_NETWORK_RECOMMENDATIONS = (
    "Use gas price of 0.1-0.2 Gwei for Base network transactions",
    "Set gas limit with 10-15% buffer above estimated usage",
    "Batch multiple operations using multicall patterns",
    "Optimize contract storage layout to minimize SSTORE operations",
)


def _gas_price_suggestion(gas_used: int, gas_price: int) -> OptimizationSuggestion | None:
    if gas_price <= REFERENCE_GAS_PRICE_WEI * 2:
        return None
    savings = scale_amount((gas_price - REFERENCE_GAS_PRICE_WEI) * gas_used, ETHER_DECIMALS)
    return OptimizationSuggestion(
        type="gas_price",
        description=(
            f"Gas price of {format_gwei(gas_price)} Gwei is significantly higher "
            "than the Base network average"
        ),
        potential_savings=savings,
        confidence="high",
        implementation="Reduce gas price to 0.1-0.2 Gwei for Base network transactions",
    )


def _gas_limit_suggestion(gas_used: int, gas_price: int, gas_limit: int | None) -> OptimizationSuggestion | None:
    if not gas_limit or gas_used >= gas_limit * OPTIMAL_USAGE_THRESHOLD:
        return None
    # 5% of the fee, i.e. fee / 20
    savings = scale_amount(gas_used * gas_price * 5, ETHER_DECIMALS + 2)
    return OptimizationSuggestion(
        type="gas_limit",
        description="Gas limit is set too high, wasting potential gas fees",
        potential_savings=savings,
        confidence="medium",
        implementation="Set gas limit closer to estimated gas usage with 10-15% buffer",
    )


def _batching_suggestion(transfer_count: int) -> OptimizationSuggestion | None:
    if transfer_count < BATCHING_MIN_TRANSFERS:
        return None
    saved_gas = (transfer_count - 1) * BASE_TX_GAS
    return OptimizationSuggestion(
        type="batch_transactions",
        description="Multiple token transfers detected - consider batching operations",
        potential_savings=scale_amount(saved_gas * REFERENCE_GAS_PRICE_WEI, ETHER_DECIMALS),
        confidence="high",
        implementation="Use multicall or batch transfer functions to combine operations",
    )


def analyze_gas_usage(
    gas_used: int,
    gas_price: int,
    gas_limit: int | None = None,
    transfer_count: int = 0,
) -> OptimizationReport:
    current = gas_cost(gas_used, gas_price)

    candidates = (
        _gas_price_suggestion(gas_used, gas_price),
        _gas_limit_suggestion(gas_used, gas_price, gas_limit),
        _batching_suggestion(transfer_count),
    )
    suggestions = tuple(s for s in candidates if s is not None)

    total = sum((s.potential_savings for s in suggestions), Decimal(0))
    total = min(total, current * MAX_SAVINGS_SHARE)
    percentage = float(total / current * 100) if current else 0.0

    return OptimizationReport(
        current_cost=current,
        optimized_cost=current - total,
        total_savings=total,
        savings_percentage=percentage,
        suggestions=suggestions,
    )
