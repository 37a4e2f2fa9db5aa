from decimal import Decimal

import pytest

from base_analyzer.metrics.optimizer import (
    BASE_NETWORK_RECOMMENDATIONS,
    REFERENCE_GAS_PRICE_WEI,
    analyze_gas_usage,
)

GWEI = 10**9


def _types(report):
    return [s.type for s in report.suggestions]


def test_efficient_transaction_has_no_suggestions():
    report = analyze_gas_usage(21000, REFERENCE_GAS_PRICE_WEI, 21000)
    assert report.suggestions == ()
    assert report.total_savings == 0
    assert report.optimized_cost == report.current_cost
    assert report.savings_percentage == 0.0


def test_gas_price_at_twice_reference_is_fine():
    report = analyze_gas_usage(21000, REFERENCE_GAS_PRICE_WEI * 2)
    assert "gas_price" not in _types(report)


def test_high_gas_price():
    report = analyze_gas_usage(21000, GWEI)
    (suggestion,) = report.suggestions
    assert suggestion.type == "gas_price"
    assert suggestion.confidence == "high"
    # (1 gwei - 0.1 gwei) * 21000
    assert suggestion.potential_savings == Decimal("0.0000189")
    assert "1 Gwei" in suggestion.description


def test_oversized_gas_limit():
    report = analyze_gas_usage(21000, REFERENCE_GAS_PRICE_WEI, 100_000)
    (suggestion,) = report.suggestions
    assert suggestion.type == "gas_limit"
    assert suggestion.potential_savings == report.current_cost / 20


def test_gas_limit_at_threshold_is_fine():
    report = analyze_gas_usage(70_000, REFERENCE_GAS_PRICE_WEI, 100_000)
    assert report.suggestions == ()


def test_batching_needs_more_than_three_transfers():
    assert "batch_transactions" not in _types(analyze_gas_usage(200_000, REFERENCE_GAS_PRICE_WEI, transfer_count=3))

    report = analyze_gas_usage(200_000, REFERENCE_GAS_PRICE_WEI, transfer_count=4)
    assert _types(report) == ["batch_transactions"]
    # three saved base transactions at the reference price
    assert report.total_savings == Decimal("0.0000063")
    assert report.savings_percentage == pytest.approx(31.5)


def test_savings_capped_at_ninety_percent():
    report = analyze_gas_usage(21000, GWEI, 100_000)
    assert _types(report) == ["gas_price", "gas_limit"]
    assert report.total_savings == report.current_cost * Decimal("0.9")
    assert report.savings_percentage == pytest.approx(90.0)
    assert report.optimized_cost + report.total_savings == report.current_cost


def test_zero_cost():
    report = analyze_gas_usage(0, 0)
    assert report.current_cost == 0
    assert report.savings_percentage == 0.0


def test_static_recommendations():
    assert any("0.1-0.2 Gwei" in r for r in BASE_NETWORK_RECOMMENDATIONS)
