from __future__ import annotations

from decimal import Decimal

from base_analyzer.metrics.units import ETHER_DECIMALS, scale_amount
from base_analyzer.models.metrics import EfficiencyRating, GasMetrics

# (minimum usage percentage, rating), checked top down
RATING_THRESHOLDS: tuple[tuple[float, EfficiencyRating], ...] = (
    (90.0, "Excellent"),
    (70.0, "Good"),
    (40.0, "Average"),
)


def gas_cost(gas_used: int, gas_price: int) -> Decimal:
    """Fee in ether for ``gas_used`` at ``gas_price`` wei per gas."""
    return scale_amount(gas_used * gas_price, ETHER_DECIMALS)


def rate_usage(usage_percentage: float | None) -> EfficiencyRating:
    if usage_percentage is None:
        return "Average"
    for minimum, rating in RATING_THRESHOLDS:
        if usage_percentage >= minimum:
            return rating
    return "Poor"


def gas_efficiency(gas_used: int, gas_limit: int | None) -> tuple[float | None, EfficiencyRating]:
    if not gas_limit or gas_limit <= 0:
        return None, "Average"
    usage = gas_used * 100 / gas_limit
    return usage, rate_usage(usage)


def compute_gas_metrics(gas_used: int, gas_price: int, gas_limit: int | None = None) -> GasMetrics:
    usage, rating = gas_efficiency(gas_used, gas_limit)
    return GasMetrics(
        gas_used=gas_used,
        gas_price=gas_price,
        gas_limit=gas_limit,
        cost_in_native_unit=gas_cost(gas_used, gas_price),
        usage_percentage=usage,
        efficiency_rating=rating,
    )
