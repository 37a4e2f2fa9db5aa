from decimal import Decimal

import pytest

from base_analyzer.metrics import compute_gas_metrics, gas_cost, gas_efficiency
from base_analyzer.metrics.units import format_ether, format_gwei, format_units, scale_amount, to_base_units

GWEI = 10**9


class TestGasCost:
    def test_simple_transfer_cost(self):
        cost = gas_cost(21000, 20 * GWEI)
        assert cost == Decimal("0.00042")
        assert format_ether(21000 * 20 * GWEI) == "0.00042"

    def test_zero(self):
        assert gas_cost(0, 20 * GWEI) == 0
        assert gas_cost(21000, 0) == 0

    def test_exact_for_large_values(self):
        cost = gas_cost(30_000_000, 10**15)
        assert cost == Decimal(30_000_000 * 10**15) / Decimal(10**18)
        assert cost == Decimal(30_000_000_000)


class TestEfficiency:
    @pytest.mark.parametrize(
        "used,limit,rating",
        [
            (21000, 21000, "Excellent"),
            (90, 100, "Excellent"),
            (89, 100, "Good"),
            (70, 100, "Good"),
            (69, 100, "Average"),
            (40, 100, "Average"),
            (39, 100, "Poor"),
            (0, 100, "Poor"),
        ],
    )
    def test_rating_thresholds(self, used, limit, rating):
        usage, got = gas_efficiency(used, limit)
        assert usage == pytest.approx(used * 100 / limit)
        assert got == rating

    def test_unknown_limit(self):
        assert gas_efficiency(21000, None) == (None, "Average")

    def test_zero_limit(self):
        assert gas_efficiency(21000, 0) == (None, "Average")


class TestComputeGasMetrics:
    def test_full_metrics(self):
        metrics = compute_gas_metrics(21000, 20 * GWEI, 21000)
        assert metrics.cost_in_native_unit == Decimal("0.00042")
        assert metrics.usage_percentage == 100.0
        assert metrics.efficiency_rating == "Excellent"

    def test_without_limit(self):
        metrics = compute_gas_metrics(50_000, GWEI)
        assert metrics.gas_limit is None
        assert metrics.usage_percentage is None
        assert metrics.efficiency_rating == "Average"


class TestUnits:
    def test_scale_amount(self):
        assert scale_amount(1_500_000, 6) == Decimal("1.5")
        assert scale_amount(7, 0) == Decimal(7)

    def test_format_units_strips_zeros(self):
        assert format_units(10**18, 18) == "1"
        assert format_units(1_230_000, 6) == "1.23"
        assert format_units(0, 18) == "0"

    def test_format_gwei(self):
        assert format_gwei(100_000_000) == "0.1"

    def test_to_base_units(self):
        assert to_base_units("1.5", 6) == 1_500_000
        assert to_base_units(Decimal("0.00042"), 18) == 420_000_000_000_000

    def test_to_base_units_rejects_excess_precision(self):
        with pytest.raises(ValueError):
            to_base_units("0.0000001", 6)
