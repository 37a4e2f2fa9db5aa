from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict

EfficiencyRating = Literal["Excellent", "Good", "Average", "Poor"]
SuggestionType = Literal["gas_price", "gas_limit", "batch_transactions"]


class GasMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    gas_used: int
    gas_price: int
    gas_limit: int | None = None
    cost_in_native_unit: Decimal
    usage_percentage: float | None = None
    efficiency_rating: EfficiencyRating = "Average"


class OptimizationSuggestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: SuggestionType
    description: str
    potential_savings: Decimal
    confidence: Literal["high", "medium", "low"]
    implementation: str


class OptimizationReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_cost: Decimal
    optimized_cost: Decimal
    total_savings: Decimal
    savings_percentage: float
    suggestions: tuple[OptimizationSuggestion, ...] = ()
